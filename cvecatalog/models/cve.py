"""CveData model — one catalog entry as ingested from the NVD feed."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Float, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from cvecatalog.models.base import Base, TextArray


class CveData(Base):
    __tablename__ = "cve_data"

    # Official CVE identifier (e.g. "CVE-2024-12345")
    cve_id: Mapped[str] = mapped_column(String(32), primary_key=True)

    published_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    last_modified_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True
    )
    vulnerability_status: Mapped[str | None] = mapped_column(String(50), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    cvss_v3_vector: Mapped[str | None] = mapped_column(String(255), nullable=True)
    cvss_v3_base_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    # LOW / MEDIUM / HIGH / CRITICAL
    cvss_v3_base_severity: Mapped[str | None] = mapped_column(String(20), nullable=True)

    cvss_v4_vector: Mapped[str | None] = mapped_column(String(255), nullable=True)
    cvss_v4_base_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    cvss_v4_base_severity: Mapped[str | None] = mapped_column(String(20), nullable=True)

    # CPE match criteria
    affected_products: Mapped[list[str] | None] = mapped_column(TextArray, nullable=True)
    reference_links: Mapped[list[str] | None] = mapped_column(TextArray, nullable=True)
    cwe_ids: Mapped[list[str] | None] = mapped_column(TextArray, nullable=True)

    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=True
    )

    def __repr__(self) -> str:
        return f"<CveData {self.cve_id!r} status={self.vulnerability_status!r}>"
