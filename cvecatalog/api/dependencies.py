"""FastAPI dependency providers."""

from __future__ import annotations

from fastapi import Request, Response

from cvecatalog.core.database import ConnectionGateway, get_gateway


def get_connection_gateway() -> ConnectionGateway:
    """Return the process-wide connection gateway.

    Handlers acquire connections themselves, after validating their input,
    so a rejected request never touches the store.
    """
    return get_gateway()


def allow_any_origin(request: Request, response: Response) -> None:
    """Mark the response as readable from any origin.

    The flag on ``request.state`` lets the error handlers add the same header.
    """
    request.state.allow_any_origin = True
    response.headers["Access-Control-Allow-Origin"] = "*"
