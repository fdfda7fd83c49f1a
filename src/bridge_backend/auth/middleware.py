"""
Module: middleware.py
Description: ASGI middleware enforcing the API key policy.

Runs the authorization decision once per inbound request. Allowed
requests are passed to the next handler; denied requests are
answered immediately with a 401 JSON error envelope.

Key Components:
- ApiKeyMiddleware: Starlette middleware with an injected AuthPolicy
- unauthorized_response(): The fixed 401 response
- DEFAULT_EXEMPT_PATHS: Paths served without authorization

Dependencies: starlette (via FastAPI), typing
Author: Bridge Backend Team
"""

from typing import Iterable, Optional

from fastapi import status as status_codes
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from bridge_backend.auth.api_key import AuthPolicy, is_request_authorized
from bridge_backend.models.response import ErrorResponse
from bridge_backend.utils.logger import get_logger

logger = get_logger(__name__)

UNAUTHORIZED_MESSAGE = "Invalid or missing API key"

DEFAULT_EXEMPT_PATHS = frozenset({"/health", "/docs", "/redoc", "/openapi.json"})


def unauthorized_response() -> JSONResponse:
    """
    Build the response returned for denied requests.

    Returns:
        JSONResponse with status 401 and body
        {"error": {"message": "Invalid or missing API key", "status": 401}}
    """
    body = ErrorResponse.build(
        message=UNAUTHORIZED_MESSAGE,
        status=status_codes.HTTP_401_UNAUTHORIZED
    )
    return JSONResponse(
        status_code=status_codes.HTTP_401_UNAUTHORIZED,
        content=body.model_dump()
    )


class ApiKeyMiddleware(BaseHTTPMiddleware):
    """
    Request authorizer middleware.

    The policy is fixed at construction time; the middleware holds no
    other state, so concurrent requests never interfere.

    Example:
        >>> app.add_middleware(
        ...     ApiKeyMiddleware,
        ...     policy=AuthPolicy(api_key="secret123", allowed_origins=["https://app.example.com"]),
        ... )
    """

    def __init__(
        self,
        app: ASGIApp,
        policy: AuthPolicy,
        exempt_paths: Optional[Iterable[str]] = None
    ):
        super().__init__(app)
        self.policy = policy
        self.exempt_paths = frozenset(
            DEFAULT_EXEMPT_PATHS if exempt_paths is None else exempt_paths
        )

        logger.info(
            "API key middleware initialized",
            enabled=policy.enabled,
            allowed_origins=len(policy.allowed_origins),
            exempt_paths=sorted(self.exempt_paths)
        )

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path in self.exempt_paths:
            return await call_next(request)

        if is_request_authorized(self.policy, request.headers):
            return await call_next(request)

        logger.warning(
            "Request rejected: invalid or missing API key",
            path=request.url.path,
            method=request.method,
            origin=request.headers.get("origin"),
            key_supplied="x-api-key" in request.headers
        )
        return unauthorized_response()
