"""JWT-bearer assertion for the Google OAuth token endpoint."""

from __future__ import annotations

import jwt
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey
from cryptography.hazmat.primitives.serialization import load_pem_private_key

from .errors import ValidationError
from .models import Credentials

AUTH_SCOPE = "https://www.googleapis.com/auth/compute.readonly"
AUTH_SKEW = 60
SIGNING_ALGORITHM = "RS256"


def build_claims(credentials: Credentials, now: float) -> dict:
    issued = int(now)
    return {
        "iss": credentials.client_email,
        "scope": AUTH_SCOPE,
        "aud": credentials.token_uri,
        "exp": issued + AUTH_SKEW,
        "iat": issued - AUTH_SKEW,
    }


def _signing_key(credentials: Credentials) -> RSAPrivateKey:
    try:
        key = load_pem_private_key(credentials.private_key.encode("utf-8"), password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise ValidationError(
            f"Unable to sign assertion for {credentials.client_email}: invalid private_key ({exc})",
            {"client_email": credentials.client_email},
        ) from exc
    if not isinstance(key, RSAPrivateKey):
        raise ValidationError(
            f"Unable to sign assertion for {credentials.client_email}: "
            f"private_key is not an RSA private key",
            {"client_email": credentials.client_email},
        )
    return key


def sign_assertion(credentials: Credentials, now: float) -> str:
    """Sign the claim set with the service account's private key (RS256)."""
    claims = build_claims(credentials, now)
    key = _signing_key(credentials)
    try:
        return jwt.encode(claims, key, algorithm=SIGNING_ALGORITHM)
    except jwt.PyJWTError as exc:
        raise ValidationError(
            f"Unable to sign assertion for {credentials.client_email}: {exc}",
            {"client_email": credentials.client_email},
        ) from exc
