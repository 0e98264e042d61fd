# storefront/api/orders_api.py
import logging

from fastapi import APIRouter, Depends, status

from storefront.api.dependencies import (
    Member,
    get_current_member,
    get_lookup_service,
    get_order_service,
    get_order_store,
)
from storefront.core.exceptions import StorageFailure
from storefront.crud.order_crud import OrderStore
from storefront.schemas.order_schemas import (
    OrderCreate,
    OrderCreateResponse,
    OrderListResponse,
    OrderLookupRequest,
    OrderLookupResponse,
)
from storefront.services.lookup_service import OrderLookupService
from storefront.services.order_service import OrderService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.post("", response_model=OrderCreateResponse, status_code=status.HTTP_200_OK)
def create_order(
    order_data: OrderCreate,
    order_service: OrderService = Depends(get_order_service),
):
    """下单（不需要登录）"""
    return order_service.create_order(order_data)


@router.post("/lookup", response_model=OrderLookupResponse)
def lookup_order(
    request: OrderLookupRequest,
    lookup_service: OrderLookupService = Depends(get_lookup_service),
):
    """订单号 + 手机号后四位查询订单"""
    order = lookup_service.lookup(request)
    return OrderLookupResponse(order=order)


@router.get("/me", response_model=OrderListResponse)
def list_my_orders(
    member: Member = Depends(get_current_member),
    store: OrderStore = Depends(get_order_store),
):
    """我的订单（按验证过的邮箱筛选）"""
    if not member.email:
        return OrderListResponse(orders=[])
    try:
        orders = store.list_by_buyer_email(member.email)
    except StorageFailure as e:
        logger.error(f"获取会员订单失败 member={member.id}: {e.detail}")
        return OrderListResponse(orders=[])
    return OrderListResponse(orders=orders)
