"""AnalysisData model — the generated risk analysis for a single CVE."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from cvecatalog.models.base import Base, JsonDocument


class AnalysisData(Base):
    __tablename__ = "analysis_data"

    # Zero-or-one per CVE, so the foreign key doubles as the primary key
    cve_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("cve_data.cve_id", ondelete="CASCADE"),
        primary_key=True,
    )

    analysis_summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    recommendation: Mapped[str | None] = mapped_column(Text, nullable=True)
    risk_level: Mapped[int | None] = mapped_column(Integer, nullable=True)
    vulnerability_type: Mapped[str | None] = mapped_column(String(255), nullable=True)
    affected_systems: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Maintained by the analyzer; may disagree with CveData.affected_products
    affected_products: Mapped[list[str] | None] = mapped_column(JsonDocument, nullable=True)

    technical_details: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=True
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=True
    )

    def __repr__(self) -> str:
        return f"<AnalysisData {self.cve_id!r} risk_level={self.risk_level!r}>"
