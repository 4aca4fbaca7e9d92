"""Session-cookie gate for the ``/api`` surface.

Every ``/api/*`` request must carry a valid session cookie, except the
login endpoint itself and the health check.  Anything else under
``/api`` without one gets a 401 JSON body.

Dev mode bypass: with SECURITY_TOKEN empty the gate is disabled, so
local development works without logging in.
"""

from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from src.api.auth_utils import COOKIE_NAME, validate_session_cookie

_PROTECTED_PREFIX = "/api"
_EXEMPT_PATHS = ("/api/auth", "/api/health")


class AuthMiddleware(BaseHTTPMiddleware):
    """Enforces the shared-secret session on API routes.

    The secret and max-age are passed in from main.py so the middleware
    doesn't read settings globals.
    """

    def __init__(self, app: object, secret: str, max_age_seconds: int) -> None:
        super().__init__(app)
        self._secret = secret
        self._max_age = max_age_seconds

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if not self._secret or not self._is_protected(request.url.path):
            return await call_next(request)

        # CORS preflight never carries cookies.
        if request.method == "OPTIONS":
            return await call_next(request)

        cookie = request.cookies.get(COOKIE_NAME)
        if validate_session_cookie(cookie, self._secret, self._max_age):
            return await call_next(request)

        return JSONResponse(status_code=401, content={"error": "Authentication required"})

    @staticmethod
    def _is_protected(path: str) -> bool:
        if path != _PROTECTED_PREFIX and not path.startswith(_PROTECTED_PREFIX + "/"):
            return False
        for exempt in _EXEMPT_PATHS:
            if path == exempt or path.startswith(exempt + "/"):
                return False
        return True
