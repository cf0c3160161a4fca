"""Tests for the merged-view projection."""

import pytest

from cvecatalog.catalog.projector import ANALYSIS_FIELDS, CVE_FIELDS, MERGED_FIELDS, project
from cvecatalog.core.errors import ProjectionInvariantViolation
from cvecatalog.models import AnalysisData, CveData


def _columns(model) -> set[str]:
    return set(model.__table__.columns.keys())


def test_field_names_are_unique():
    assert len(MERGED_FIELDS) == len(set(MERGED_FIELDS))


def test_every_column_is_projected():
    assert {col.key for _, col in CVE_FIELDS} == _columns(CveData)
    assert {col.key for _, col in ANALYSIS_FIELDS} == _columns(AnalysisData) - {"cve_id"}


def test_shared_columns_keep_both_values():
    shared = (_columns(CveData) & _columns(AnalysisData)) - {"cve_id"}
    assert shared == {"affected_products", "updated_at"}
    names = dict(CVE_FIELDS + ANALYSIS_FIELDS)
    for column in shared:
        assert names[f"cve_{column}"].class_ is CveData
        assert names[f"analysis_{column}"].class_ is AnalysisData
        assert column not in names


def test_project_mapping():
    row = {name: None for name in MERGED_FIELDS}
    row.update(
        cve_id="CVE-2024-0001",
        cve_affected_products=["cpe:2.3:a:x:y:1:*:*:*:*:*:*:*"],
        analysis_affected_products=["y 1"],
    )
    merged = project(row)
    assert list(merged) == list(MERGED_FIELDS)
    assert merged["cve_affected_products"] == ["cpe:2.3:a:x:y:1:*:*:*:*:*:*:*"]
    assert merged["analysis_affected_products"] == ["y 1"]


def test_project_rejects_incomplete_row():
    with pytest.raises(ProjectionInvariantViolation) as exc_info:
        project({"cve_id": "CVE-2024-0001"})
    assert "analysis_summary" in exc_info.value.error
    assert exc_info.value.to_dict() == {"message": "Internal server error"}
