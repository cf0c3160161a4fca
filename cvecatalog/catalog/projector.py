"""Merged view of a catalog entry and its (optional) analysis.

Both tables define ``affected_products`` and ``updated_at``. Those columns are
emitted twice, tagged with the table they came from, so neither value ever
shadows the other.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import Row, outerjoin
from sqlalchemy.orm import InstrumentedAttribute
from sqlalchemy.sql.elements import Label
from sqlalchemy.sql.selectable import Join

from cvecatalog.core.errors import ProjectionInvariantViolation
from cvecatalog.models.analysis import AnalysisData
from cvecatalog.models.cve import CveData

CVE_FIELDS: tuple[tuple[str, InstrumentedAttribute[Any]], ...] = (
    ("cve_id", CveData.cve_id),
    ("published_date", CveData.published_date),
    ("last_modified_date", CveData.last_modified_date),
    ("vulnerability_status", CveData.vulnerability_status),
    ("description", CveData.description),
    ("cvss_v3_vector", CveData.cvss_v3_vector),
    ("cvss_v3_base_score", CveData.cvss_v3_base_score),
    ("cvss_v3_base_severity", CveData.cvss_v3_base_severity),
    ("cvss_v4_vector", CveData.cvss_v4_vector),
    ("cvss_v4_base_score", CveData.cvss_v4_base_score),
    ("cvss_v4_base_severity", CveData.cvss_v4_base_severity),
    ("cve_affected_products", CveData.affected_products),
    ("reference_links", CveData.reference_links),
    ("cwe_ids", CveData.cwe_ids),
    ("cve_updated_at", CveData.updated_at),
)

ANALYSIS_FIELDS: tuple[tuple[str, InstrumentedAttribute[Any]], ...] = (
    ("analysis_summary", AnalysisData.analysis_summary),
    ("recommendation", AnalysisData.recommendation),
    ("risk_level", AnalysisData.risk_level),
    ("vulnerability_type", AnalysisData.vulnerability_type),
    ("affected_systems", AnalysisData.affected_systems),
    ("analysis_affected_products", AnalysisData.affected_products),
    ("technical_details", AnalysisData.technical_details),
    ("analysis_created_at", AnalysisData.created_at),
    ("analysis_updated_at", AnalysisData.updated_at),
)

MERGED_FIELDS: tuple[str, ...] = tuple(name for name, _ in CVE_FIELDS + ANALYSIS_FIELDS)


def merged_columns() -> list[Label[Any]]:
    """SELECT list producing one labelled column per merged field."""
    return [column.label(name) for name, column in CVE_FIELDS + ANALYSIS_FIELDS]


def merged_source() -> Join:
    """Every catalog entry, with its analysis when one exists."""
    return outerjoin(CveData, AnalysisData, AnalysisData.cve_id == CveData.cve_id)


def project(row: Row[Any] | Mapping[str, Any]) -> dict[str, Any]:
    """Turn a joined row into the merged view dict."""
    mapping = row._mapping if isinstance(row, Row) else row
    missing = [name for name in MERGED_FIELDS if name not in mapping]
    if missing:
        raise ProjectionInvariantViolation(error=f"row is missing columns: {', '.join(missing)}")
    return {name: mapping[name] for name in MERGED_FIELDS}
