"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Ships one structured event per API request to Axiom: method, path, query,
request body, status code, duration and, for failures, the envelope
``message``. Contact details and credentials are masked before they leave
the process. Without an Axiom token the middleware is a passthrough.
"""

import json
import logging
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from app.config import settings

logger = logging.getLogger(__name__)

# 마스킹 대상 필드 패턴 — Credentials and contact details
_SENSITIVE_KEYS = re.compile(
    r"(password|secret|token|authorization|api_key|credential|email|phone)",
    re.IGNORECASE,
)

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS: frozenset[str] = frozenset({"/api/health", "/docs", "/redoc", "/openapi.json"})

_MAX_DEPTH: int = 5
_MAX_ITEMS: int = 20
_MAX_ERROR_LEN: int = 500


def _mask(data: Any, depth: int = 0) -> Any:
    """민감 필드 재귀 마스킹 — Recursively mask sensitive keys in dicts/lists."""
    if depth > _MAX_DEPTH:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(str(k)) else _mask(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [_mask(item, depth + 1) for item in data[:_MAX_ITEMS]]
    return data


def _error_message(body: bytes) -> str:
    """오류 응답 봉투에서 message를 추출합니다 (Pull ``message`` out of an error envelope)."""
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return body.decode("utf-8", errors="replace")[:_MAX_ERROR_LEN]
    if isinstance(payload, dict) and "message" in payload:
        return str(payload["message"])[:_MAX_ERROR_LEN]
    return str(payload)[:_MAX_ERROR_LEN]


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom에 로깅하는 미들웨어.

    Middleware that logs API requests and responses to Axiom.

    Args:
        app: 다음 ASGI 앱 (Wrapped ASGI app)
        token: Axiom API 토큰, 기본값은 설정 (Axiom token, defaults to settings)
        dataset: Axiom 데이터셋, 기본값은 설정 (Axiom dataset, defaults to settings)
    """

    def __init__(self, app: ASGIApp, token: str | None = None, dataset: str | None = None) -> None:
        super().__init__(app)
        token = settings.AXIOM_API_TOKEN if token is None else token
        self._dataset: str = settings.AXIOM_DATASET if dataset is None else dataset
        self._client: AxiomClient | None = AxiomClient(token=token) if token and self._dataset else None

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        # 미설정 또는 제외 경로는 패스스루 (Passthrough when unconfigured or skipped)
        if self._client is None or request.url.path in _SKIP_PATHS:
            return await call_next(request)

        start_time: float = time.monotonic()
        event: dict[str, Any] = {"method": request.method, "path": request.url.path, "status_code": 500}
        if request.query_params:
            event["query_params"] = _mask(dict(request.query_params))

        if request.method in ("POST", "PUT", "PATCH"):
            body_bytes: bytes = await request.body()
            if body_bytes:
                try:
                    event["request_body"] = _mask(json.loads(body_bytes))
                except (json.JSONDecodeError, UnicodeDecodeError):
                    event["request_body"] = "(non-json body)"

        try:
            response: Response = await call_next(request)
            event["status_code"] = response.status_code

            if response.status_code >= 400:
                # 스트리밍 body를 소비한 뒤 다시 감싸서 반환 (Consume then re-wrap the streamed body)
                resp_body = b""
                async for chunk in response.body_iterator:
                    resp_body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
                event["error"] = _error_message(resp_body)
                response = Response(
                    content=resp_body,
                    status_code=response.status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
            return response
        except Exception as exc:
            event["error"] = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            event["duration_ms"] = round((time.monotonic() - start_time) * 1000, 2)
            self._ingest(event)

    def _ingest(self, event: dict[str, Any]) -> None:
        # 로깅 실패가 요청 처리를 깨뜨리지 않도록 (a failed ingest never fails the request)
        try:
            self._client.ingest_events(self._dataset, [event])
        except Exception:
            logger.warning("Axiom ingest failed for %s %s", event["method"], event["path"], exc_info=True)
