"""
Admin session endpoints.

``/admin/login`` exchanges the admin password for a session cookie,
``/admin/check-auth`` reports whether the caller is logged in.
``/admin/logout`` is reachable without an authenticated session, as
it always has been; it simply drops whatever session the caller has.
"""

from fastapi import APIRouter, Depends, Response

from services_catalog_api.app.core.security import clear_session_cookie, get_session, set_session_cookie
from services_catalog_api.app.core.sessions import SessionContext
from services_catalog_api.app.schemas.auth import AuthStatus, LoginRequest, SuccessResponse
from services_catalog_api.app.services.auth_service import AuthService

router = APIRouter()


@router.post("/login", response_model=SuccessResponse)
async def login(
    credentials: LoginRequest,
    response: Response,
    session: SessionContext = Depends(get_session),
) -> SuccessResponse:
    """Вход администратора по паролю."""
    new_session = await AuthService.login(credentials.password, session)
    set_session_cookie(response, new_session)
    return SuccessResponse()


@router.post("/logout", response_model=SuccessResponse)
async def logout(response: Response, session: SessionContext = Depends(get_session)) -> SuccessResponse:
    """Выход администратора."""
    await AuthService.logout(session)
    clear_session_cookie(response)
    return SuccessResponse()


@router.get("/check-auth", response_model=AuthStatus)
async def check_auth(session: SessionContext = Depends(get_session)) -> AuthStatus:
    """Проверить статус аутентификации."""
    return AuthStatus(isAuthenticated=AuthService.check_auth(session))
