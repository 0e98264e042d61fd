import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.core.exceptions import StorefrontException
from storefront.core.logging_core import AuditLogger
from storefront.core.messages import user_message


def _error_body(error_code: str, detail, **extra) -> dict:
    body = {
        "success": False,
        "error": error_code,
        "detail": detail,
        "message": user_message(error_code),
    }
    body.update(extra)
    return body


def setup_exception_handlers(app: FastAPI):
    """设置异常处理器"""

    logger = logging.getLogger("error_handler")

    @app.exception_handler(StorefrontException)
    async def storefront_exception_handler(request: Request, exc: StorefrontException):
        """业务异常处理"""
        if exc.status_code >= 500:
            logger.error(f"{exc.error_code} for {request.method} {request.url.path}: {exc.detail}")
            if exc.error_code == "ORDER_NO_COLLISION":
                AuditLogger.log_order_number_exhausted(exc.data or {})
        else:
            logger.warning(f"{exc.error_code} for {request.method} {request.url.path}: {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.error_code, exc.detail),
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """请求体结构不合法统一返回 400"""
        logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=400,
            content=_error_body(
                "INVALID_REQUEST",
                "request body validation failed",
                errors=jsonable_encoder(exc.errors()),
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """HTTP异常处理"""
        logger.warning(f"HTTP error {exc.status_code} for {request.url.path}: {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body("HTTP_ERROR", exc.detail),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """通用异常处理"""
        logger.error(f"Unexpected error for {request.url.path}", exc_info=exc)
        return JSONResponse(
            status_code=500,
            content=_error_body("INTERNAL_SERVER_ERROR", "internal server error"),
        )
