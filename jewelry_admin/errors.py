# jewelry_admin/errors.py

"""Exception hierarchy for the catalog admin core.

- CatalogError (base)
  - ValidationError: a form field was rejected locally
  - ConfigurationError: the Cosmic bucket is not configured
  - RemoteError: a Cosmic API call failed
    - FetchError: list/get failed for a reason other than not-found
    - WriteError: insert/update/delete failed
"""

__all__ = [
    "CatalogError",
    "ValidationError",
    "ConfigurationError",
    "RemoteError",
    "FetchError",
    "WriteError",
]


class CatalogError(Exception):
    """Base class for every error the core surfaces to a view."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(CatalogError):
    """A form field failed validation before any write was attempted.

    Example:
        >>> try:
        ...     FormValidator.validate_product(form)
        ... except ValidationError as e:
        ...     print(f"{e.field}: {e.message}")
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class ConfigurationError(CatalogError):
    """Bucket slug or API keys are missing."""


class RemoteError(CatalogError):
    """A call to the Cosmic object API failed."""

    def __init__(
        self,
        operation: str,
        kind: str,
        message: str | None = None,
        *,
        status_code: int | None = None,
    ) -> None:
        """Initialize RemoteError.

        Args:
            operation: Client verb that failed (``list``, ``insert``, ...).
            kind: Object kind the call targeted.
            message: Optional custom error message.
            status_code: HTTP status when a response was received.
        """
        msg = message or f"Failed to {operation} {kind}"
        super().__init__(msg)
        self.operation = operation
        self.kind = kind
        self.status_code = status_code


class FetchError(RemoteError):
    """A list or get call failed."""


class WriteError(RemoteError):
    """An insert, update or delete call failed."""
