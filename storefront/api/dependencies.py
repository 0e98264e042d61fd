"""
FastAPI 依赖项

Supabase 客户端、数据访问对象和服务都在这里组装后注入路由，
测试时通过 app.dependency_overrides 替换
"""

import hmac
import logging
from typing import Optional

from fastapi import Depends, Header, Request
from pydantic import BaseModel
from supabase import Client

from storefront.core.config import Settings, get_settings
from storefront.core.exceptions import LoginRequired, Unauthorized
from storefront.core.logging_core import AuditLogger
from storefront.core.middleware import get_client_ip
from storefront.crud.guest_order_crud import GuestOrderStore
from storefront.crud.order_crud import OrderStore
from storefront.database.supabase_client import get_supabase_admin_client
from storefront.services.admin_order_service import AdminOrderService
from storefront.services.checkout_service import CheckoutService
from storefront.services.lookup_service import OrderLookupService
from storefront.services.order_service import OrderService

logger = logging.getLogger(__name__)

ADMIN_PASSWORD_HEADER = "x-admin-password"


class Member(BaseModel):
    """Supabase Auth 验证过的会员身份"""

    id: str
    email: Optional[str] = None


def get_supabase_client() -> Client:
    return get_supabase_admin_client()


def get_order_store(db: Client = Depends(get_supabase_client)) -> OrderStore:
    return OrderStore(db)


def get_guest_order_store(db: Client = Depends(get_supabase_client)) -> GuestOrderStore:
    return GuestOrderStore(db)


def get_order_service(
    store: OrderStore = Depends(get_order_store),
    config: Settings = Depends(get_settings),
) -> OrderService:
    return OrderService(store, config)


def get_admin_order_service(
    store: OrderStore = Depends(get_order_store),
    config: Settings = Depends(get_settings),
) -> AdminOrderService:
    return AdminOrderService(store, config)


def get_lookup_service(store: OrderStore = Depends(get_order_store)) -> OrderLookupService:
    return OrderLookupService(store)


def get_checkout_service(
    store: GuestOrderStore = Depends(get_guest_order_store),
    config: Settings = Depends(get_settings),
) -> CheckoutService:
    return CheckoutService(store, config)


def verify_admin_password(supplied: Optional[str], secret: Optional[str]) -> bool:
    """逐字节比较共享密码；任一方为空都视为失败"""
    if not supplied or not secret:
        return False
    return hmac.compare_digest(supplied.encode("utf-8"), secret.encode("utf-8"))


def require_admin(
    request: Request,
    x_admin_password: Optional[str] = Header(None, alias=ADMIN_PASSWORD_HEADER),
    config: Settings = Depends(get_settings),
) -> None:
    """管理后台共享密码校验"""
    if not verify_admin_password(x_admin_password, config.ADMIN_PASSWORD):
        AuditLogger.log_admin_auth_failure(request.url.path, get_client_ip(request))
        raise Unauthorized()


def get_current_member(
    authorization: Optional[str] = Header(None),
    db: Client = Depends(get_supabase_client),
) -> Member:
    """从 Bearer token 解析当前会员"""
    token = ""
    if authorization and authorization.startswith("Bearer "):
        token = authorization[len("Bearer "):].strip()
    if not token:
        raise LoginRequired()

    try:
        response = db.auth.get_user(token)
    except Exception as e:
        logger.info(f"会员 token 校验失败: {e}")
        raise LoginRequired()

    user = getattr(response, "user", None)
    if user is None:
        raise LoginRequired()
    return Member(id=str(user.id), email=user.email)
