"""CVE catalog router — detail lookup and paged listing."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from cvecatalog.api.dependencies import allow_any_origin, get_connection_gateway
from cvecatalog.catalog.detail import fetch_cve_detail, validate_cve_id
from cvecatalog.catalog.listing import CveListQuery, fetch_cve_page
from cvecatalog.core.database import ConnectionGateway
from cvecatalog.schemas.cve import CveDetailOut, CveListOut, ErrorOut, MergedView, PaginationOut

router = APIRouter(prefix="/cves", tags=["cves"])

GatewayDep = Annotated[ConnectionGateway, Depends(get_connection_gateway)]


@router.get(
    "",
    response_model=CveListOut,
    dependencies=[Depends(allow_any_origin)],
    responses={400: {"model": ErrorOut}, 500: {"model": ErrorOut}},
)
async def list_cves(
    gateway: GatewayDep,
    page: int = Query(1, description="1-based page number; values below 1 mean 1"),
    cve_id: str | None = Query(None, alias="cveId", description="Case-insensitive substring of the CVE ID"),
    sort_by: str | None = Query(
        None,
        alias="sortBy",
        description="published_date, last_modified_date or analysis_updated_at",
    ),
    sort_order: str | None = Query(None, alias="sortOrder", description="ASC or DESC (default)"),
) -> CveListOut:
    query = CveListQuery.build(page=page, cve_filter=cve_id, sort_by=sort_by, sort_order=sort_order)
    async with gateway.connection() as conn:
        result = await fetch_cve_page(conn, query)
    return CveListOut(
        data=[MergedView.model_validate(item) for item in result.data],
        pagination=PaginationOut.model_validate(result.pagination),
    )


@router.get("/", include_in_schema=False)
async def get_cve_without_id() -> None:
    validate_cve_id(None)


@router.get(
    "/{cve_id}",
    response_model=CveDetailOut,
    responses={400: {"model": ErrorOut}, 404: {"model": ErrorOut}, 500: {"model": ErrorOut}},
)
async def get_cve(cve_id: str, gateway: GatewayDep) -> CveDetailOut:
    cve_id = validate_cve_id(cve_id)
    async with gateway.connection() as conn:
        merged = await fetch_cve_detail(conn, cve_id)
    return CveDetailOut(result=MergedView.model_validate(merged))
