"""Paged, filtered and sorted listing of the merged catalog.

A request is first reduced to a ``CveListQuery``: a filter predicate, a sort
spec and page bounds. The data statement and the count statement are both
derived from that one object, so the total always describes the same
population the page was cut from.

User-supplied text only ever reaches the database as a bound parameter. Sort
keys are looked up in ``SORTABLE_COLUMNS``; anything else is ignored.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import Select, asc, func, select
from sqlalchemy.ext.asyncio import AsyncConnection
from sqlalchemy.orm import InstrumentedAttribute
from sqlalchemy.sql.elements import ColumnElement

from cvecatalog.catalog.pagination import PAGE_SIZE, PageInfo, normalize_page, page_offset
from cvecatalog.catalog.projector import merged_columns, merged_source, project
from cvecatalog.core.logging import get_logger
from cvecatalog.models.analysis import AnalysisData
from cvecatalog.models.cve import CveData

logger = get_logger(__name__)

_LIKE_ESCAPE = "\\"


class SortDirection(str, enum.Enum):
    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def parse(cls, raw: str | None) -> "SortDirection":
        """Case-insensitive; anything other than ASC means DESC."""
        if raw is not None and raw.strip().upper() == cls.ASC.value:
            return cls.ASC
        return cls.DESC


SORTABLE_COLUMNS: dict[str, InstrumentedAttribute[Any]] = {
    "published_date": CveData.published_date,
    "last_modified_date": CveData.last_modified_date,
    "analysis_updated_at": AnalysisData.updated_at,
}


def escape_like(text: str) -> str:
    """Make LIKE wildcards in *text* match literally."""
    return (
        text.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )


def _nulls_last(column: InstrumentedAttribute[Any], direction: SortDirection) -> list[ColumnElement[Any]]:
    # false sorts before true on both PostgreSQL and SQLite
    ordered = column.asc() if direction is SortDirection.ASC else column.desc()
    return [asc(column.is_(None)), ordered]


@dataclass(frozen=True)
class CveListQuery:
    page: int = 1
    cve_filter: str | None = None
    sort_by: str | None = None
    direction: SortDirection = SortDirection.DESC
    page_size: int = field(default=PAGE_SIZE, repr=False)

    @classmethod
    def build(
        cls,
        page: int | None = None,
        cve_filter: str | None = None,
        sort_by: str | None = None,
        sort_order: str | None = None,
    ) -> "CveListQuery":
        """Normalise raw request parameters."""
        needle = cve_filter.strip() if cve_filter else ""
        return cls(
            page=normalize_page(page),
            cve_filter=needle or None,
            sort_by=sort_by if sort_by in SORTABLE_COLUMNS else None,
            direction=SortDirection.parse(sort_order),
        )

    @property
    def offset(self) -> int:
        return page_offset(self.page, self.page_size)

    @property
    def limit(self) -> int:
        return self.page_size

    def predicates(self) -> list[ColumnElement[bool]]:
        if self.cve_filter is None:
            return []
        pattern = f"%{escape_like(self.cve_filter)}%"
        return [CveData.cve_id.ilike(pattern, escape=_LIKE_ESCAPE)]

    def order_by(self) -> list[ColumnElement[Any]]:
        clauses: list[ColumnElement[Any]] = []
        if self.sort_by is not None:
            clauses.extend(_nulls_last(SORTABLE_COLUMNS[self.sort_by], self.direction))
        # Tie-break: newest modification first, then the unique identifier
        clauses.extend(_nulls_last(CveData.last_modified_date, SortDirection.DESC))
        clauses.append(CveData.cve_id.asc())
        return clauses

    def _filtered(self, stmt: Select[Any]) -> Select[Any]:
        for predicate in self.predicates():
            stmt = stmt.where(predicate)
        return stmt

    def data_statement(self) -> Select[Any]:
        stmt = select(*merged_columns()).select_from(merged_source())
        return (
            self._filtered(stmt)
            .order_by(*self.order_by())
            .limit(self.limit)
            .offset(self.offset)
        )

    def count_statement(self) -> Select[Any]:
        stmt = select(func.count()).select_from(merged_source())
        return self._filtered(stmt)


@dataclass(frozen=True)
class CvePage:
    data: list[dict[str, Any]]
    pagination: PageInfo


async def fetch_cve_page(conn: AsyncConnection, query: CveListQuery) -> CvePage:
    """Run the count and page statements for *query* on *conn*.

    Pages past the end are answered from the count alone; their offset may not
    even fit the driver's integer type.
    """
    total = (await conn.execute(query.count_statement())).scalar_one()
    rows = []
    if query.offset < total:
        rows = (await conn.execute(query.data_statement())).all()

    pagination = PageInfo.compute(query.page, total, query.page_size)
    logger.info(
        "Listed CVEs",
        page=query.page,
        cve_filter=query.cve_filter,
        sort_by=query.sort_by,
        direction=query.direction.value,
        returned=len(rows),
        total=total,
    )
    return CvePage(data=[project(row) for row in rows], pagination=pagination)
