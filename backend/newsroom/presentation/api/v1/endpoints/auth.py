"""Back-office login, logout and current-user endpoints (session cookie)."""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from newsroom.application.schemas import AdminResponse, LoginRequest
from newsroom.application.services import AuthService
from newsroom.domain.entities import Admin
from newsroom.domain.exceptions import AuthenticationError, LoginLockedError
from newsroom.infrastructure.dependencies import (
    SESSION_ADMIN_KEY,
    get_auth_service,
    get_current_admin,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Auth"])


@router.post("/login", response_model=AdminResponse)
async def login(
    data: LoginRequest,
    request: Request,
    service: AuthService = Depends(get_auth_service),
):
    """Verify credentials and start a fresh admin session.

    Failures are returned rather than raised so the failed-attempt counter
    written during this request is committed.
    """
    try:
        admin = await service.login(data.email, data.password)
    except LoginLockedError as e:
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content={"detail": str(e), "retry_after": e.remaining_seconds},
            headers={"Retry-After": str(e.remaining_seconds)},
        )
    except AuthenticationError as e:
        return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content={"detail": str(e)})

    request.session.clear()
    request.session[SESSION_ADMIN_KEY] = admin.id
    request.session["admin_role"] = admin.role.value
    request.session["admin_name"] = admin.username
    return AdminResponse.model_validate(admin, from_attributes=True)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(request: Request) -> None:
    admin_id = request.session.get(SESSION_ADMIN_KEY)
    request.session.clear()
    if admin_id is not None:
        logger.info("Admin %s logged out", admin_id)


@router.get("/me", response_model=AdminResponse)
async def me(admin: Admin = Depends(get_current_admin)) -> AdminResponse:
    return AdminResponse.model_validate(admin, from_attributes=True)
