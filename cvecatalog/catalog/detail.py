"""Single-entry lookup of the merged catalog."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncConnection

from cvecatalog.catalog.projector import merged_columns, merged_source, project
from cvecatalog.core.errors import InvalidInput, NotFound
from cvecatalog.core.logging import get_logger
from cvecatalog.models.cve import CveData

logger = get_logger(__name__)


def validate_cve_id(raw: str | None) -> str:
    """Return the trimmed identifier, or raise ``InvalidInput`` when blank."""
    cve_id = raw.strip() if raw else ""
    if not cve_id:
        raise InvalidInput("cveId", "CVE ID is required")
    return cve_id


async def fetch_cve_detail(conn: AsyncConnection, cve_id: str) -> dict[str, Any]:
    """Merged view of *cve_id*; analysis fields are None when no analysis exists."""
    stmt = (
        select(*merged_columns())
        .select_from(merged_source())
        .where(CveData.cve_id == cve_id)
    )
    row = (await conn.execute(stmt)).first()
    if row is None:
        logger.info("CVE not found", cve_id=cve_id)
        raise NotFound(cve_id)
    return project(row)
