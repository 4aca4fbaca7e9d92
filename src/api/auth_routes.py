"""Login / status / logout endpoints for the dashboard gate.

# ─── ROUTE ARCHITECTURE ─────────────────────────────────────────────
#
#   POST   /api/auth   {token}  → validate, set session cookie
#   GET    /api/auth            → {isAuthenticated}
#   DELETE /api/auth            → clear session cookie
#
# All three are exempt from AuthMiddleware.
# ─────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from fastapi import APIRouter, Request
from starlette.responses import JSONResponse

from src.api.auth_utils import (
    COOKIE_NAME,
    create_session_cookie,
    tokens_match,
    validate_session_cookie,
)
from src.api.schemas import AuthRequest, AuthStatusResponse, MessageResponse
from src.utils.logging import get_logger

_logger = get_logger(__name__)

auth_router = APIRouter(prefix="/api")


@auth_router.post("/auth", response_model=MessageResponse)
async def login(body: AuthRequest, request: Request) -> JSONResponse:
    """Validate the shared token and set the session cookie."""
    settings = request.app.state.settings
    expected = settings.security_token

    if not tokens_match(body.token, expected):
        _logger.warning("auth_login_rejected")
        return JSONResponse(status_code=401, content={"error": "Invalid token"})

    response = JSONResponse(content={"message": "Logged in"})
    response.set_cookie(
        key=COOKIE_NAME,
        value=create_session_cookie(expected),
        httponly=True,
        samesite="strict",
        secure=settings.app_env == "production",
        max_age=settings.auth_cookie_max_age_seconds,
        path="/",
    )
    _logger.info("auth_login_accepted")
    return response


@auth_router.get("/auth", response_model=AuthStatusResponse)
async def auth_status(request: Request) -> AuthStatusResponse:
    settings = request.app.state.settings
    # No token configured: the gate is off, so everyone is "in".
    if not settings.security_token:
        return AuthStatusResponse(isAuthenticated=True)

    cookie = request.cookies.get(COOKIE_NAME)
    return AuthStatusResponse(
        isAuthenticated=validate_session_cookie(
            cookie, settings.security_token, settings.auth_cookie_max_age_seconds
        )
    )


@auth_router.delete("/auth", response_model=MessageResponse)
async def logout() -> JSONResponse:
    response = JSONResponse(content={"message": "Logged out"})
    response.delete_cookie(key=COOKIE_NAME, path="/")
    return response
