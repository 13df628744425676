"""Error taxonomy for catalog operations."""


class CatalogError(Exception):
    """Base class for errors raised by the ingredient catalog."""


class ValidationError(CatalogError):
    """Raised when input is malformed or missing required fields."""


class Unauthorized(CatalogError):
    """Raised when a request carries no valid user identity."""


class NotFound(CatalogError):
    """Raised when a referenced catalog entry or nutrition record is absent."""


class CatalogConflict(CatalogError):
    """Raised when the store rejects an insert on a uniqueness constraint."""


class ExternalServiceUnavailable(CatalogError):
    """Raised when an external collaborator fails or returns unusable data.

    Callers treat this as recoverable and degrade to partial results.
    """

    def __init__(self, service: str, detail: str) -> None:
        super().__init__(f"{service} unavailable: {detail}")
        self.service = service
        self.detail = detail


class SearchUnavailable(CatalogError):
    """Raised when every data source of a search failed."""
