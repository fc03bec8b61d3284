"""OAuth2 JWT-bearer token exchange."""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError

from .errors import ApiError
from .models import AccessToken
from .transport import HttpTransport

GRANT_TYPE = "urn:ietf:params:oauth:grant-type:jwt-bearer"


def exchange_token(transport: HttpTransport, token_uri: str, assertion: str) -> AccessToken:
    """Exchange a signed assertion for an access token."""
    data = {
        "grant_type": GRANT_TYPE,
        "assertion": assertion,
    }
    payload = transport.send("POST", token_uri, data=data)
    try:
        return AccessToken.model_validate(payload)
    except PydanticValidationError as exc:
        raise ApiError("OAuth token exchange returned no access_token", token_uri) from exc
