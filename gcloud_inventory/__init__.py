"""Google Compute Engine inventory resolver.

Lists the instances of a project zone with a service account key and
projects each one into a caller-shaped target record.
"""

from .errors import ApiError, FileError, InventoryError, TransportError, ValidationError
from .mapping import TargetTemplate, lookup, project
from .models import AccessToken, Credentials, PageResponse, ResolveConfig
from .resolver import resolve_reference, task

__version__ = "0.1.0"
__all__ = [
    "AccessToken",
    "ApiError",
    "Credentials",
    "FileError",
    "InventoryError",
    "PageResponse",
    "ResolveConfig",
    "TargetTemplate",
    "TransportError",
    "ValidationError",
    "lookup",
    "project",
    "resolve_reference",
    "task",
]
