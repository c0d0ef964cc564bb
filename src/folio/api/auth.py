"""Admin authentication: bearer session tokens and the single-admin predicate"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from folio.config import Settings
from folio.errors import UnauthorizedError


logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

bearer_scheme = HTTPBearer(auto_error=False)


def admin_predicate(admin_email: str) -> Callable[[Optional[str]], bool]:
    """Build is_authorized(identity) for one configured admin email."""
    allowed = admin_email.strip().lower()

    def is_authorized(identity: Optional[str]) -> bool:
        return bool(allowed) and identity is not None and identity.strip().lower() == allowed

    return is_authorized


def issue_token(email: str, settings: Settings) -> str:
    """Mint a signed session token carrying the email claim.

    Raises ValueError when no secret key is configured.
    """
    if not settings.secret_key:
        raise ValueError("No secret key configured; set FOLIO_SECRET_KEY")
    now = datetime.now(timezone.utc)
    claims = {
        "sub": email,
        "email": email,
        "iat": now,
        "exp": now + timedelta(minutes=settings.token_ttl_minutes),
    }
    return jwt.encode(claims, settings.secret_key, algorithm=ALGORITHM)


def decode_identity(token: str, secret_key: str) -> Optional[str]:
    """Return the email claim of a valid token, or None. An empty key accepts nothing."""
    if not secret_key:
        return None
    try:
        claims = jwt.decode(token, secret_key, algorithms=[ALGORITHM])
    except jwt.PyJWTError as e:
        logger.info("Rejected session token: %s", e)
        return None
    email = claims.get("email")
    return email if isinstance(email, str) and email else None


def current_admin_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    ) -> Optional[str]:
    """The caller's identity if it is the authorized admin, else None."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        return None
    identity = decode_identity(credentials.credentials, request.app.state.settings.secret_key)
    if identity is None or not request.app.state.is_authorized(identity):
        return None
    return identity


def require_admin(identity: Optional[str] = Depends(current_admin_identity)) -> str:
    """Gate for mutating routes; runs before any payload is touched."""
    if identity is None:
        raise UnauthorizedError("Unauthorized: Admin access required")
    return identity
