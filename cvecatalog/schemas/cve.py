"""Response schemas for the CVE catalog endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class MergedView(BaseModel):
    """A catalog entry merged with its analysis; analysis fields are null when absent."""

    model_config = ConfigDict(from_attributes=True)

    cve_id: str

    # Catalog (NVD) side
    published_date: datetime | None = None
    last_modified_date: datetime | None = None
    vulnerability_status: str | None = None
    description: str | None = None
    cvss_v3_vector: str | None = None
    cvss_v3_base_score: float | None = None
    cvss_v3_base_severity: str | None = None
    cvss_v4_vector: str | None = None
    cvss_v4_base_score: float | None = None
    cvss_v4_base_severity: str | None = None
    cve_affected_products: list[str] | None = None
    reference_links: list[str] | None = None
    cwe_ids: list[str] | None = None
    cve_updated_at: datetime | None = None

    # Analysis side
    analysis_summary: str | None = None
    recommendation: str | None = None
    risk_level: int | None = None
    vulnerability_type: str | None = None
    affected_systems: str | None = None
    analysis_affected_products: Any = None
    technical_details: str | None = None
    analysis_created_at: datetime | None = None
    analysis_updated_at: datetime | None = None


class CveDetailOut(BaseModel):
    result: MergedView


class PaginationOut(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    current_page: int
    total_pages: int
    total_count: int
    has_next_page: bool
    has_prev_page: bool


class CveListOut(BaseModel):
    data: list[MergedView]
    pagination: PaginationOut


class ErrorOut(BaseModel):
    message: str
    error: str | None = None
