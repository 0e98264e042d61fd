#!/usr/bin/env python3
"""
订单服务启动脚本
"""

import logging

import uvicorn

from storefront.core.config import settings

logger = logging.getLogger("run")


def main():
    """主启动函数"""
    logger.info(f"📍 服务器地址: http://{settings.HOST}:{settings.PORT}")
    uvicorn.run(
        "storefront.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
