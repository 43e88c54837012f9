"""
Quillnote Backend - Session Identity Resolution
=================================================

What:  FastAPI dependency that turns the request's bearer token into a
       CurrentUser, or fails with UnauthorizedError.
How:   The external identity provider (Supabase-style) issues HS256 JWTs.
       We verify signature, expiry, audience and issuer locally with the
       shared secret; no network call is made.
Who:   Every note and summarize route depends on get_current_user.
When:  Before any body-level business rule or database lookup.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from app.config import settings
from app.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

# auto_error=False: a missing header must surface as our 401 body,
# not FastAPI's default 403.
bearer = HTTPBearer(auto_error=False, scheme_name="bearerAuth")


@dataclass(frozen=True)
class CurrentUser:
    """Identity resolved from a verified session token."""

    id: str
    email: Optional[str] = None


def decode_session_token(token: str) -> Dict[str, Any]:
    """
    Verify a session token and return its claims.

    Raises:
        UnauthorizedError: no secret configured, or the token fails
            verification (signature, expiry, audience, issuer).
    """
    secret = settings.auth_jwt_secret
    if not secret:
        logger.error("AUTH_JWT_SECRET is not configured; rejecting session")
        raise UnauthorizedError(reason="verification secret not configured")

    audience = settings.auth_jwt_audience or None
    issuer = settings.auth_jwt_issuer or None
    try:
        return jwt.decode(
            token,
            secret,
            algorithms=[settings.auth_jwt_algorithm],
            audience=audience,
            issuer=issuer,
            options={
                "verify_aud": bool(audience),
                "verify_iss": bool(issuer),
            },
        )
    except JWTError as e:
        raise UnauthorizedError(reason=f"invalid token: {e}")


async def get_current_user(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
) -> CurrentUser:
    """
    Resolve the calling identity.

    Returns:
        CurrentUser built from the `sub` and `email` claims.

    Raises:
        UnauthorizedError: missing header, invalid token, or no `sub` claim.
    """
    if creds is None or not creds.credentials:
        raise UnauthorizedError(reason="missing bearer token")

    claims = decode_session_token(creds.credentials)

    subject = claims.get("sub")
    if not subject:
        raise UnauthorizedError(reason="token has no subject")

    return CurrentUser(id=str(subject), email=claims.get("email"))


async def resolve_request_user(request: Request) -> CurrentUser:
    """
    Session check for code that runs outside dependency injection.

    Exception handlers use it: FastAPI decodes the body before it resolves
    dependencies, so a malformed body can fail before get_current_user runs.
    """
    return await get_current_user(await bearer(request))
