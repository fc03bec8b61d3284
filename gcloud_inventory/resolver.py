"""Resolve Compute Engine instances into inventory targets.

Flow:
    config -> target mapping -> credentials -> signed assertion -> token
           -> paginated instance list -> target records
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from typing import Any
from urllib.parse import quote as _urlquote

from pydantic import ValidationError as PydanticValidationError

from .assertion import sign_assertion
from .credentials import load_credentials
from .errors import InventoryError, ValidationError
from .mapping import TargetTemplate
from .models import ResolveConfig
from .oauth import exchange_token
from .paginator import fetch_all
from .settings import InventorySettings, load_settings
from .transport import HttpTransport

logger = logging.getLogger(__name__)


def parse_config(params: Mapping[str, Any] | ResolveConfig) -> ResolveConfig:
    if isinstance(params, ResolveConfig):
        return params
    if not isinstance(params, Mapping):
        raise ValidationError(
            f"Expected parameters to be a mapping, received {type(params).__name__}"
        )
    try:
        return ResolveConfig.model_validate(dict(params))
    except PydanticValidationError as exc:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})
        raise ValidationError(
            f"Invalid inventory configuration: {', '.join(fields)}", {"fields": fields}
        ) from exc


def instances_url(settings: InventorySettings, project: str, zone: str) -> str:
    return (
        f"{settings.compute_url}/projects/{_urlquote(project, safe='')}"
        f"/zones/{_urlquote(zone, safe='')}/instances"
    )


def resolve_reference(
    params: Mapping[str, Any] | ResolveConfig,
    *,
    transport: HttpTransport | None = None,
    clock: Callable[[], float] = time.time,
    environ: Mapping[str, str] | None = None,
    settings: InventorySettings | None = None,
) -> list[dict[str, Any]]:
    """Return one target record per Compute Engine instance in the zone.

    Args:
        params: Resolution parameters (project, zone, credentials, target_mapping)
        transport: HTTP transport to use; a fresh one is created and closed otherwise
        clock: Source of the current time for the signed assertion
        environ: Environment used for the credentials fallback and settings
        settings: Explicit settings, skipping environment lookup

    Raises:
        InventoryError: Any validation, file, transport or API failure
    """
    config = parse_config(params)
    template = TargetTemplate.from_mapping(config.target_mapping)
    settings = settings or load_settings(environ)

    credentials = load_credentials(
        config.credentials,
        config.base_dir,
        environ=environ,
        project=config.project if config.verify_project else None,
    )
    assertion = sign_assertion(credentials, clock())
    url = instances_url(settings, config.project, config.zone)

    owned = transport is None
    transport = transport or HttpTransport(timeout=settings.http_timeout)
    try:
        token = exchange_token(transport, credentials.token_uri, assertion)
        instances = fetch_all(transport, url, token)
    finally:
        if owned:
            transport.close()

    logger.info(
        "Resolved %d instances in project %s zone %s", len(instances), config.project, config.zone
    )
    return [template.project(instance) for instance in instances]


def task(params: Mapping[str, Any], **kwargs: Any) -> dict[str, Any]:
    """Run a resolution and wrap the outcome for the calling host.

    Returns ``{"value": targets}`` on success or ``{"_error": {...}}`` when any
    step fails.
    """
    try:
        targets = resolve_reference(params, **kwargs)
    except InventoryError as exc:
        logger.debug("Inventory resolution failed: %s", exc.message)
        return {"_error": exc.to_dict()}
    return {"value": targets}
