"""CORS - origin allow-list enforcement plus Starlette's CORS headers.

Invariants:
    - Requests without an Origin header always proceed
    - Listed origins, "*" in the list, and same-origin requests proceed
    - Same-origin uses X-Forwarded-Proto for the scheme only when TRUST_PROXY is set
    - Every other origin gets 403 CORS_ORIGIN_REJECTED before routing
    - Allowed cross-origin responses carry headers from CORSMiddleware

Design Decisions:
    - The guard is added after CORSMiddleware so it wraps it (outermost runs first)
    - Trailing slashes are ignored when comparing origins
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.errors import ErrorContext, OriginNotAllowedError

logger = logging.getLogger(__name__)


def is_origin_allowed(
    origin: str | None, allowed_origins: list[str], own_origin: str | None = None,
) -> bool:
    """Decide whether a request's Origin may reach the app."""
    if origin is None:
        return True
    normalized = origin.rstrip("/")
    allowed = {o.rstrip("/") for o in allowed_origins}
    if "*" in allowed or normalized in allowed:
        return True
    return own_origin is not None and normalized == own_origin.rstrip("/")


class OriginGuardMiddleware(BaseHTTPMiddleware):
    """Reject requests from origins outside the allow-list."""

    def __init__(self, app, allowed_origins: list[str], trust_proxy: bool = False):
        super().__init__(app)
        self.allowed_origins = list(allowed_origins)
        self.trust_proxy = trust_proxy

    def own_origin(self, request: Request) -> str:
        """Public origin of this app, as the browser sees it."""
        scheme = request.url.scheme
        if self.trust_proxy:
            forwarded = request.headers.get("x-forwarded-proto", "")
            scheme = forwarded.split(",")[0].strip() or scheme
        return f"{scheme}://{request.url.netloc}"

    async def dispatch(self, request: Request, call_next):
        origin = request.headers.get("origin")
        if is_origin_allowed(origin, self.allowed_origins, self.own_origin(request)):
            return await call_next(request)
        exc = OriginNotAllowedError(
            origin, ErrorContext(path=request.url.path),
        )
        logger.warning(
            f"Rejected request from origin {origin}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def install_cors(
    app: FastAPI, allowed_origins: list[str], trust_proxy: bool = False,
) -> None:
    """Install CORS headers and the origin guard on the app."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        OriginGuardMiddleware,
        allowed_origins=allowed_origins, trust_proxy=trust_proxy,
    )
