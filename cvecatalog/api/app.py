"""FastAPI application factory with lifespan management."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cvecatalog.api.routers import cves
from cvecatalog.core.config import get_settings
from cvecatalog.core.database import close_gateway, get_gateway
from cvecatalog.core.errors import CatalogError
from cvecatalog.core.logging import configure_logging, get_logger

logger = get_logger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle."""
    settings = get_settings()
    configure_logging(settings)
    logger.info("Starting CVE catalog API", debug=settings.app_debug)

    get_gateway()

    yield

    await close_gateway()
    logger.info("CVE catalog API stopped")


def _extra_headers(request: Request) -> dict[str, str]:
    if getattr(request.state, "allow_any_origin", False):
        return {"Access-Control-Allow-Origin": "*"}
    return {}


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "Request failed",
            path=request.url.path,
            kind=type(exc).__name__,
            error=exc.error,
        )
    else:
        logger.info(
            "Request rejected",
            path=request.url.path,
            kind=type(exc).__name__,
            status=exc.status_code,
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=_extra_headers(request),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    )
    logger.info("Request rejected", path=request.url.path, kind="InvalidInput", error=problems)
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request parameters", "error": problems},
        headers=_extra_headers(request),
    )


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="CVE Catalog",
        description="Read-only CVE catalog merged with risk analysis",
        version=VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(cves.router, prefix="/api/v1")

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "ok", "version": VERSION}

    return app


app = create_app()
