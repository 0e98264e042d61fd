# storefront/core/middleware.py
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from storefront.core.logging_core import BusinessLogger

logger = BusinessLogger("middleware")


def get_client_ip(request: Request) -> str:
    """获取客户端真实IP地址"""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


class LoggingMiddleware(BaseHTTPMiddleware):
    """请求日志中间件"""

    def __init__(self, app, skip_paths=None):
        super().__init__(app)
        self.skip_paths = set(skip_paths or ["/health", "/favicon.ico"])

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
        request.state.request_id = request_id
        start_time = time.time()

        response = await call_next(request)

        process_time = time.time() - start_time
        if request.url.path not in self.skip_paths:
            # 不记录请求体，避免手机号等个人信息进日志
            logger.log_performance(
                "REQUEST",
                process_time,
                method=request.method,
                path=request.url.path,
                status=response.status_code,
                request_id=request_id,
                client_ip=get_client_ip(request),
            )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        return response
