"""Request-scoped identity.

Every endpoint that needs to know who is asking depends on
get_current_identity (guest allowed) or require_identity (401 for
guests).  The resolved Identity is then passed explicitly into the
projections; nothing below the API layer reads the Authorization header.
"""

from __future__ import annotations

import logging
from typing import Annotated

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from wellness.core.logging import user_id_var
from wellness.models.identity import Identity
from wellness.repos.bundle import RepoBundle, get_repos
from wellness.services import token_service

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def _roles_claim(raw: object) -> frozenset[str]:
    """Role names from the token; non-list claims and non-string entries are dropped."""
    if not isinstance(raw, (list, tuple)):
        if raw is not None:
            logger.warning("Ignoring malformed roles claim: %r", raw)
        return frozenset()
    return frozenset(r for r in raw if isinstance(r, str))


async def get_current_identity(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
) -> Identity | None:
    """Resolve the bearer token, or None for a guest.

    A missing, expired, malformed or unverifiable token is a guest, never
    an error: public read endpoints keep working with is_fav=false.
    """
    if credentials is None:
        return None

    try:
        claims = token_service.decode_access_token(credentials.credentials)
    except jwt.ExpiredSignatureError:
        logger.debug("Expired token, treating request as guest")
        return None
    except jwt.InvalidTokenError as e:
        logger.debug("Invalid token, treating request as guest: %s", e)
        return None

    try:
        user_id = int(claims["sub"])
    except (TypeError, ValueError):
        logger.warning("Token subject is not a user id: sub=%r", claims["sub"])
        return None

    identity = Identity(user_id=user_id, roles=_roles_claim(claims.get("roles")))
    user_id_var.set(str(identity.user_id))
    return identity



CurrentIdentity = Annotated[Identity | None, Depends(get_current_identity)]


async def require_identity(identity: CurrentIdentity) -> Identity:
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return identity


def require_role(role: str):
    """Dependency factory: demand a platform role.

    Usage: Depends(require_role("admin"))
    """

    def _guard(identity: Annotated[Identity, Depends(require_identity)]) -> Identity:
        if not identity.has_role(role):
            logger.warning(
                "Access denied: user=%s missing role=%s", identity.user_id, role
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return identity

    return _guard


Repos = Annotated[RepoBundle, Depends(get_repos)]
