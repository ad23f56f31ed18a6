import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from campus_api.errors import ForbiddenError
from campus_api.security import Capability, Principal, authorize, principal_from_token

logger = logging.getLogger(__name__)

# auto_error=False: a missing Authorization header must surface as 403 from
# the gate rather than HTTPBearer's own error.
bearer_scheme = HTTPBearer(auto_error=False)


# PUBLIC_INTERFACE
async def get_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Principal:
    """Resolve the caller from the Authorization bearer token (anonymous if absent)."""
    return principal_from_token(credentials.credentials if credentials else None)


# PUBLIC_INTERFACE
def require(capability: Capability):
    """
    Create a dependency that denies the request with 403 unless the caller
    satisfies *capability*.

    Usage in a router::

        @router.get("/all", dependencies=[Depends(require(Capability.AUTHENTICATED))])
    """

    async def _dep(principal: Principal = Depends(get_principal)) -> Principal:
        try:
            authorize(principal, capability)
        except ForbiddenError as exc:
            logger.warning(
                "Denied %s operation for subject=%s roles=%s",
                capability.value,
                principal.subject or "-",
                sorted(principal.roles),
            )
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=exc.message)
        return principal

    return _dep
