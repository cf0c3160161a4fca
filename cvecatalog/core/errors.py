"""Error taxonomy for catalog lookups.

Every error carries the HTTP status it maps to and knows how to render its
own JSON body. Routers raise these; the handlers registered in
``cvecatalog.api.app`` turn them into responses.
"""

from __future__ import annotations

from typing import Any


class CatalogError(Exception):
    """Base class for all catalog errors."""

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: str | None = None, error: str | None = None) -> None:
        self.message = message or self.message
        self.error = error
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"message": self.message}
        if self.error:
            body["error"] = self.error
        return body


class InvalidInput(CatalogError):
    """A required parameter is missing or malformed (400)."""

    status_code = 400
    message = "Invalid input"

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        super().__init__(message=reason, error=f"invalid value for '{field}'")


class NotFound(CatalogError):
    """The identifier is valid but no CVE record carries it (404)."""

    status_code = 404
    message = "CVE not found"

    def __init__(self, cve_id: str) -> None:
        self.cve_id = cve_id
        super().__init__()


class StoreUnavailable(CatalogError):
    """The store could not be reached or a query against it failed (500).

    ``error`` holds the driver's message only; never the SQL text, the bound
    parameters or the connection URL.
    """

    status_code = 500
    message = "Error executing query"


class ProjectionInvariantViolation(CatalogError):
    """A joined row did not have the shape the projector expects.

    This is a defect rather than a caller-facing condition, so the rendered
    body stays generic.
    """

    status_code = 500
    message = "Internal server error"

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message}
