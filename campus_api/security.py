from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, Optional

from jose import JWTError, jwt

from campus_api.config import settings
from campus_api.errors import ForbiddenError


class Capability(str, enum.Enum):
    """What an operation demands of its caller."""

    NONE = "none"
    AUTHENTICATED = "authenticated"
    ELEVATED = "elevated"


@dataclass(frozen=True)
class Principal:
    """The caller as seen by the authorization gate."""

    subject: Optional[str] = None
    roles: frozenset[str] = field(default_factory=frozenset)

    @property
    def authenticated(self) -> bool:
        return self.subject is not None

    @property
    def elevated(self) -> bool:
        return self.authenticated and settings.ADMIN_ROLE in self.roles


ANONYMOUS = Principal()


# PUBLIC_INTERFACE
def authorize(principal: Principal, required: Capability) -> None:
    """
    Allow or deny *principal* for an operation requiring *required*.

    Raises:
        ForbiddenError: caller is anonymous and the operation needs a login,
            or caller lacks the admin role and the operation is elevated.
    """
    if required is Capability.NONE:
        return
    if not principal.authenticated:
        raise ForbiddenError()
    if required is Capability.ELEVATED and not principal.elevated:
        raise ForbiddenError()


# PUBLIC_INTERFACE
def create_access_token(
    subject: str,
    roles: Iterable[str] = (),
    expires_minutes: Optional[int] = None,
) -> str:
    """Create a signed access token carrying the subject and its role names."""
    now = datetime.now(tz=timezone.utc)
    expire = now + timedelta(minutes=expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload: Dict[str, Any] = {
        "sub": subject,
        "roles": list(roles),
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


# PUBLIC_INTERFACE
def decode_token(token: str) -> Dict[str, Any]:
    """Decode and validate a JWT; raises JWTError if invalid/expired."""
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])


# PUBLIC_INTERFACE
def principal_from_token(token: Optional[str]) -> Principal:
    """
    Resolve a bearer token to a Principal.

    A missing, malformed or expired token yields the anonymous principal;
    the gate then denies anything beyond ``Capability.NONE``.
    """
    if not token:
        return ANONYMOUS
    try:
        payload = decode_token(token)
    except JWTError:
        return ANONYMOUS
    subject = payload.get("sub")
    if not subject:
        return ANONYMOUS
    roles = payload.get("roles") or []
    if not isinstance(roles, list):
        return ANONYMOUS
    return Principal(subject=str(subject), roles=frozenset(str(r) for r in roles))
