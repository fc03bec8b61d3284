"""Error types raised while resolving inventory targets."""

from __future__ import annotations

from typing import Any


class InventoryError(Exception):
    """Base exception for inventory resolution errors."""

    kind = "gcloud-inventory/error"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "msg": self.message, "details": dict(self.details)}


class ValidationError(InventoryError):
    """Raised when configuration, credentials or the target mapping are invalid."""

    kind = "gcloud-inventory/validation-error"


class FileError(InventoryError):
    """Raised when the credentials file cannot be read or parsed."""

    kind = "gcloud-inventory/file-error"


class TransportError(InventoryError):
    """Raised when an endpoint cannot be reached."""

    kind = "gcloud-inventory/transport-error"

    def __init__(self, message: str, uri: str, details: dict[str, Any] | None = None):
        super().__init__(message, {"uri": uri, **(details or {})})
        self.uri = uri


class ApiError(InventoryError):
    """Raised when a reachable endpoint returns a non-success response."""

    kind = "gcloud-inventory/api-error"

    def __init__(
        self,
        message: str,
        uri: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, {"uri": uri, "status_code": status_code, **(details or {})})
        self.uri = uri
        self.status_code = status_code
