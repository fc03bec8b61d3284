"""Service account credential loading.

The key file path comes from the ``credentials`` option or, failing that,
from ``GOOGLE_APPLICATION_CREDENTIALS``. Relative paths resolve against the
caller's base directory.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from .errors import FileError, ValidationError
from .models import Credentials
from .settings import CREDENTIALS_ENV

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ("client_email", "private_key", "token_uri")


def credentials_path(
    path: str | None,
    base_dir: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Return the absolute path of the credentials file to load."""
    env = os.environ if environ is None else environ
    source = path or env.get(CREDENTIALS_ENV)
    if not source:
        raise ValidationError(
            "Missing application credentials. Specify the path to the application "
            "credentials file under the 'credentials' configuration option or as the "
            f"'{CREDENTIALS_ENV}' environment variable."
        )
    expanded = os.path.expanduser(source)
    base = os.path.expanduser(base_dir or os.getcwd())
    return os.path.abspath(os.path.join(base, expanded))


def _read(path: str) -> Any:
    try:
        with open(path, "rb") as fh:
            raw = fh.read()
    except FileNotFoundError as exc:
        raise FileError(
            f"Unable to read credentials file {path}: {exc.strerror}", {"path": path}
        ) from exc
    except OSError as exc:
        raise FileError(
            f"Unable to access credentials file {path}: {exc.strerror or exc}", {"path": path}
        ) from exc

    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as exc:
        raise FileError(
            f"Unable to parse credentials file {path} as JSON: {exc}", {"path": path}
        ) from exc


def load_credentials(
    path: str | None,
    base_dir: str | None = None,
    environ: Mapping[str, str] | None = None,
    project: str | None = None,
) -> Credentials:
    """Load and validate a service account key file.

    Args:
        path: Explicitly configured path, takes precedence over the environment
        base_dir: Directory relative paths are resolved against
        environ: Environment mapping to read the fallback variable from
        project: When given, the key's project_id must match it

    Raises:
        ValidationError: No credentials source, wrong shape, or missing keys
        FileError: The file cannot be read or parsed
    """
    resolved = credentials_path(path, base_dir, environ)
    logger.debug("Loading credentials from %s", resolved)
    data = _read(resolved)

    if not isinstance(data, dict):
        raise ValidationError(
            f"Expected credentials to be a mapping, received {type(data).__name__}",
            {"path": resolved},
        )

    missing = [key for key in REQUIRED_KEYS if key not in data]
    if missing:
        raise ValidationError(
            f"Missing required keys in credentials file: {', '.join(missing)}",
            {"path": resolved, "missing": missing},
        )

    try:
        credentials = Credentials.model_validate(data)
    except PydanticValidationError as exc:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})
        raise ValidationError(
            f"Invalid values in credentials file {resolved}: {', '.join(fields)}",
            {"path": resolved, "fields": fields},
        ) from exc

    if project is not None:
        _check_project(credentials, project)
    return credentials


def _check_project(credentials: Credentials, project: str) -> None:
    if not credentials.project_id:
        logger.warning(
            "Credentials for %s carry no project_id; skipping project check",
            credentials.client_email,
        )
        return
    if credentials.project_id != project:
        raise ValidationError(
            f"Credentials project '{credentials.project_id}' does not match project '{project}'",
            {"project": project, "credentials_project": credentials.project_id},
        )
