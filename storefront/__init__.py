"""Storefront 订单服务"""

__version__ = "1.0.0"
