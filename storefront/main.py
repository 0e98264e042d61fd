# storefront/main.py
import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.api.api import api_router
from storefront.core.config import Settings, get_settings
from storefront.core.error_handlers import setup_exception_handlers
from storefront.core.logging_core import setup_logging
from storefront.core.middleware import LoggingMiddleware

logger = logging.getLogger(__name__)


def create_app(config: Optional[Settings] = None) -> FastAPI:
    """创建 FastAPI 应用"""
    config = config or get_settings()
    setup_logging(config)

    app = FastAPI(
        title=config.APP_NAME,
        version=config.APP_VERSION,
        debug=config.DEBUG,
    )

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)
    app.include_router(api_router)

    logger.info(f"✅ {config.APP_NAME} v{config.APP_VERSION} ({config.ENVIRONMENT}) 初始化完成")
    return app


app = create_app()
