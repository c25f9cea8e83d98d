"""
请求超时中间件 (Request Timeout Middleware)

为每个请求设置处理时限。超时后返回 503 transient_error，由调用方决定是否重试，服务端不做重试。

Puts a deadline on every request. On timeout it answers 503 transient_error; retrying is
left to the caller, the service never retries on its own.
"""
import asyncio
import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from cloudhost.core.exceptions import TransientError

logger = logging.getLogger(__name__)


class RequestTimeoutMiddleware(BaseHTTPMiddleware):
    """请求超时中间件 (Request timeout middleware)."""

    def __init__(self, app, timeout_seconds: float = 10.0):
        super().__init__(app)
        self.timeout_seconds = timeout_seconds

    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            return await asyncio.wait_for(call_next(request), timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning(
                "Request timed out after %.1fs: %s %s",
                self.timeout_seconds, request.method, request.url.path,
            )
            err = TransientError(
                "请求处理超时，请稍后重试 (Request timed out, please retry)",
                detail=f"timeout={self.timeout_seconds}s",
            )
            return JSONResponse(status_code=err.status_code, content=err.to_content())
