"""보안 헤더 미들웨어.

Security headers middleware.
Adds defensive response headers to every response; HSTS only in production.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from app.config import settings


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """모든 응답에 보안 헤더를 추가하는 미들웨어.

    Middleware that adds security headers to all responses.
    """

    def __init__(self, app: ASGIApp) -> None:
        super().__init__(app)
        self._headers: dict[str, str] = {
            "X-Content-Type-Options": "nosniff",
            "X-Frame-Options": "DENY",
            "Referrer-Policy": "strict-origin-when-cross-origin",
            "Cross-Origin-Resource-Policy": "same-site",
        }
        if settings.ENVIRONMENT == "production":
            self._headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response: Response = await call_next(request)
        for header, value in self._headers.items():
            response.headers.setdefault(header, value)
        return response
