# storefront/api/admin_api.py
from typing import Optional

from fastapi import APIRouter, Depends, Query

from storefront.api.dependencies import get_admin_order_service, require_admin
from storefront.models.order_models import Order
from storefront.schemas.order_schemas import OrderListResponse, OrderUpdate
from storefront.services.admin_order_service import AdminOrderService

router = APIRouter(
    prefix="/api/admin/orders",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=OrderListResponse)
def list_orders(
    q: Optional[str] = Query(None, description="ID / 订单号 / 姓名 / 手机号"),
    unshipped: bool = Query(False, description="隐藏已发货订单"),
    payment_status: Optional[str] = Query(None, alias="paymentStatus"),
    service: AdminOrderService = Depends(get_admin_order_service),
):
    """最近订单列表"""
    return OrderListResponse(
        orders=service.list_orders(keyword=q, unshipped_only=unshipped, payment_status=payment_status)
    )


@router.get("/{order_key}", response_model=Order)
def get_order(order_key: str, service: AdminOrderService = Depends(get_admin_order_service)):
    """按内部ID或订单号获取订单"""
    return service.get_order(order_key)


@router.patch("/{order_key}", response_model=Order)
def update_order(
    order_key: str,
    update: OrderUpdate,
    service: AdminOrderService = Depends(get_admin_order_service),
):
    """修改支付 / 发货状态和物流信息"""
    return service.update_order(order_key, update)
