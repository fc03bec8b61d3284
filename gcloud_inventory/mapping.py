"""Projection of raw instances into target records."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .errors import ValidationError

_INDEX = re.compile(r"^[0-9]+$")


def lookup(value: Any, path: str) -> Any:
    """Walk a dotted path through nested JSON, returning None when it misses.

    Numeric segments index into lists, other segments look up mapping keys.
    """
    for segment in path.split("."):
        if _INDEX.match(segment):
            if not isinstance(value, (list, tuple)):
                return None
            index = int(segment)
            if index >= len(value):
                return None
            value = value[index]
        elif isinstance(value, Mapping) and segment in value:
            value = value[segment]
        else:
            return None
    return value


def _validate_fields(fields: Any, prefix: str = "") -> None:
    for key, value in fields.items():
        name = f"{prefix}{key}"
        if isinstance(value, Mapping):
            _validate_fields(value, f"{name}.")
        elif not isinstance(value, str) or not value:
            raise ValidationError(
                f"Invalid path for '{name}' in 'target_mapping': expected a dotted path string",
                {"field": name},
            )


@dataclass(frozen=True)
class TargetTemplate:
    """Validated target mapping: output field name -> dotted path or nested template."""

    fields: Mapping[str, Any]

    @classmethod
    def from_mapping(cls, raw: Any) -> TargetTemplate:
        if not isinstance(raw, Mapping):
            raise ValidationError(
                f"Expected 'target_mapping' to be a mapping, received {type(raw).__name__}"
            )
        if "name" not in raw and "uri" not in raw:
            raise ValidationError(
                "You must provide a 'name' or 'uri' in 'target_mapping' for the "
                "Google Cloud inventory plugin"
            )
        _validate_fields(raw)
        return cls(dict(raw))

    def project(self, record: Any) -> dict[str, Any]:
        return _apply(self.fields, record)


def _apply(fields: Mapping[str, Any], record: Any) -> dict[str, Any]:
    target: dict[str, Any] = {}
    for key, path in fields.items():
        if isinstance(path, Mapping):
            target[key] = _apply(path, record)
        else:
            target[key] = lookup(record, path)
    return target


def project(template: TargetTemplate, record: Any) -> dict[str, Any]:
    """Build one target record from a raw instance."""
    return template.project(record)
