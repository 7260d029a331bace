"""
Admin session helpers.
The backend issues the token on login; the gateway only stores it in an
httpOnly cookie, forwards it upstream and guards the /admin pages with it.
"""
from typing import Optional

from fastapi import HTTPException, Request, Response, status

from studio_gateway.config import settings

ADMIN_PREFIX = "/admin"
LOGIN_PATH = "/admin/login"
DASHBOARD_PATH = "/admin/dashboard"


def get_admin_token(request: Request) -> Optional[str]:
    """
    FastAPI dependency returning the admin token from the session cookie.

    Returns:
        The token, or None when the caller is not logged in
    """
    return request.cookies.get(settings.ADMIN_COOKIE_NAME) or None


def require_admin_token(request: Request) -> str:
    """
    FastAPI dependency for endpoints that need an admin session.

    Raises:
        HTTPException: 401 if the session cookie is missing
    """
    token = get_admin_token(request)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"message": "Unauthorized"},
        )
    return token


def set_admin_cookie(response: Response, token: str) -> None:
    """Store the backend token in an httpOnly cookie valid for one day."""
    response.set_cookie(
        key=settings.ADMIN_COOKIE_NAME,
        value=token,
        max_age=settings.ADMIN_COOKIE_MAX_AGE,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


def clear_admin_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.ADMIN_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


def admin_redirect_for(path: str, has_token: bool) -> Optional[str]:
    """
    Decide where an /admin page request must be sent.

    Args:
        path: Request path
        has_token: Whether the admin cookie is present

    Returns:
        Redirect target, or None when the request may proceed
    """
    if path != ADMIN_PREFIX and not path.startswith(ADMIN_PREFIX + "/"):
        return None

    if path == LOGIN_PATH:
        return DASHBOARD_PATH if has_token else None

    return None if has_token else LOGIN_PATH
