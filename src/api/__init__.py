"""Knowledge-base console API layer: routes, auth gate, schemas, and middleware."""

from src.api.auth_middleware import AuthMiddleware
from src.api.auth_routes import auth_router
from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from src.api.routes import router
from src.api.schemas import (
    ErrorResponse,
    GoogleSearchResponse,
    HealthResponse,
    UnifiedSearchRequest,
    UnifiedSearchResponse,
)

__all__ = [
    "AuthMiddleware",
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "auth_router",
    "configure_cors",
    "router",
    "ErrorResponse",
    "GoogleSearchResponse",
    "HealthResponse",
    "UnifiedSearchRequest",
    "UnifiedSearchResponse",
]
