"""Bearer token verification (ES256 JWTs).

Tokens are issued by the account service; this service only verifies
them.  JWT_PUBLIC_KEY carries the issuer's public key in production.
Without it, dev/test generate an ephemeral key pair on import and
create_access_token() can mint tokens signed with it.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta

import jwt
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from wellness.core.config import SETTINGS

ALGORITHM = "ES256"
ISSUER = "wellness-accounts"
AUDIENCE = "wellness-api"
ACCESS_TOKEN_TTL_MIN = 60


class TokenSigningUnavailableError(RuntimeError):
    """Raised when minting is attempted with only a public key configured."""


if SETTINGS.jwt_public_key:
    _private_key: ec.EllipticCurvePrivateKey | None = None
    _public_key = serialization.load_pem_public_key(
        SETTINGS.jwt_public_key.encode()
    )
else:
    _private_key = ec.generate_private_key(ec.SECP256R1())
    _public_key = _private_key.public_key()


def create_access_token(
    *,
    sub: str,
    roles: list[str] | None = None,
    ttl: timedelta = timedelta(minutes=ACCESS_TOKEN_TTL_MIN),
) -> str:
    """Mint a token with the ephemeral key (dev/test only)."""
    if _private_key is None:
        raise TokenSigningUnavailableError(
            "JWT_PUBLIC_KEY is configured; tokens must come from the issuer"
        )
    now = datetime.now(UTC)
    payload = {
        "sub": sub,
        "iss": ISSUER,
        "aud": AUDIENCE,
        "exp": now + ttl,
        "iat": now,
        "jti": str(uuid.uuid4()),
        "roles": roles or ["user"],
    }
    return jwt.encode(payload, _private_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Verify signature and claims, return the payload.

    Algorithm is pinned to ES256.  exp, iss and aud are validated by PyJWT.

    Raises jwt.ExpiredSignatureError, jwt.InvalidTokenError on failure.
    """
    return jwt.decode(
        token,
        _public_key,
        algorithms=[ALGORITHM],
        issuer=ISSUER,
        audience=AUDIENCE,
        options={"require": ["sub", "exp", "iat"]},
    )
