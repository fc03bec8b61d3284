"""Environment-backed settings for the inventory resolver.

Resolution order: explicit environment mapping > os.environ > default.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

logger = logging.getLogger(__name__)

CREDENTIALS_ENV = "GOOGLE_APPLICATION_CREDENTIALS"
COMPUTE_URL_ENV = "GCLOUD_INVENTORY_COMPUTE_URL"
HTTP_TIMEOUT_ENV = "GCLOUD_INVENTORY_HTTP_TIMEOUT"
LOG_LEVEL_ENV = "GCLOUD_INVENTORY_LOG_LEVEL"

DEFAULT_COMPUTE_URL = "https://compute.googleapis.com/compute/v1"
DEFAULT_HTTP_TIMEOUT = 30.0
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class InventorySettings:
    """Settings shared by every step of a resolution."""

    compute_url: str = DEFAULT_COMPUTE_URL
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL


def _env_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = (environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default
    if value <= 0:
        logger.warning("Ignoring non-positive %s=%r, using %s", name, raw, default)
        return default
    return value


def load_settings(environ: Mapping[str, str] | None = None) -> InventorySettings:
    env = os.environ if environ is None else environ
    compute_url = (env.get(COMPUTE_URL_ENV) or DEFAULT_COMPUTE_URL).strip().rstrip("/")
    return InventorySettings(
        compute_url=compute_url,
        http_timeout=_env_float(env, HTTP_TIMEOUT_ENV, DEFAULT_HTTP_TIMEOUT),
        log_level=(env.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).strip().upper(),
    )
