from fastapi import APIRouter, Depends

from campus_api.dependencies import get_principal
from campus_api.schemas import CurrentUserResponse
from campus_api.security import Principal

router = APIRouter(prefix="/api/currentUser", tags=["Current User"])


@router.get("", response_model=CurrentUserResponse)
async def current_user(principal: Principal = Depends(get_principal)):
    """Describe the caller as the authorization gate sees it; never denied."""
    return CurrentUserResponse(
        logged_in=principal.authenticated,
        subject=principal.subject,
        roles=sorted(principal.roles),
        admin=principal.elevated,
    )
