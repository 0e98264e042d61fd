"""
发货状态机

所有修改订单状态 / 物流信息的路径都必须经过 plan_order_update，
它只做校验并返回要写入的字段，不访问数据库。校验失败时不会产生任何写入。

状态流转:
    NEW -> PACKING -> SHIPPED
    PACKING -> NEW, SHIPPED -> PACKING   （撤回 / 取消发货）
    任意非终态 -> REFUNDED               （终态）
"""

from typing import Any, Dict, FrozenSet, Mapping, Optional

from storefront.core.exceptions import (
    InvalidFulfillmentStatus,
    InvalidFulfillmentTransition,
    InvalidPaymentStatus,
    ShipmentRequiresPaidOrder,
    TrackingNumberRequired,
)
from storefront.models.order_models import FulfillmentStatus, Order, PaymentStatus
from storefront.schemas.order_schemas import OrderUpdate
from storefront.utils.validators_utils import blank_to_none

FULFILLMENT_TRANSITIONS: Mapping[FulfillmentStatus, FrozenSet[FulfillmentStatus]] = {
    FulfillmentStatus.NEW: frozenset({FulfillmentStatus.PACKING, FulfillmentStatus.REFUNDED}),
    FulfillmentStatus.PACKING: frozenset(
        {FulfillmentStatus.NEW, FulfillmentStatus.SHIPPED, FulfillmentStatus.REFUNDED}
    ),
    FulfillmentStatus.SHIPPED: frozenset({FulfillmentStatus.PACKING, FulfillmentStatus.REFUNDED}),
    FulfillmentStatus.REFUNDED: frozenset(),
}


def parse_payment_status(value: Any) -> PaymentStatus:
    try:
        return PaymentStatus(value)
    except (ValueError, TypeError):
        raise InvalidPaymentStatus(value)


def parse_fulfillment_status(value: Any) -> FulfillmentStatus:
    try:
        return FulfillmentStatus(value)
    except (ValueError, TypeError):
        raise InvalidFulfillmentStatus(value)


def can_transition(current: FulfillmentStatus, target: FulfillmentStatus) -> bool:
    """同状态写入视为无操作，总是允许"""
    return current == target or target in FULFILLMENT_TRANSITIONS[current]


def plan_order_update(order: Order, update: OrderUpdate) -> Dict[str, Any]:
    """
    校验管理员的修改请求，返回需要写入 orders 表的字段

    Args:
        order: 当前订单
        update: 请求体（只处理出现过的字段）

    Returns:
        Dict[str, Any]: 待写入字段（不含 updated_at）

    Raises:
        InvalidPaymentStatus / InvalidFulfillmentStatus: 枚举值不合法
        ShipmentRequiresPaidOrder: 发货时订单未支付
        TrackingNumberRequired: 发货时没有运单号
        InvalidFulfillmentTransition: 状态流转不允许
    """
    fields: Dict[str, Any] = {}

    payment_status: Optional[PaymentStatus] = None
    if update.provided("payment_status"):
        payment_status = parse_payment_status(update.payment_status)
        fields["payment_status"] = payment_status.value

    target: Optional[FulfillmentStatus] = None
    if update.provided("fulfillment_status"):
        target = parse_fulfillment_status(update.fulfillment_status)
        fields["fulfillment_status"] = target.value

    if update.provided("shipping_carrier"):
        fields["shipping_carrier"] = blank_to_none(update.shipping_carrier)
    if update.provided("tracking_number"):
        fields["tracking_number"] = blank_to_none(update.tracking_number)

    if target == FulfillmentStatus.SHIPPED:
        effective_payment = payment_status or order.payment_status
        if effective_payment != PaymentStatus.PAID:
            raise ShipmentRequiresPaidOrder(effective_payment.value)

    # 结果状态为 SHIPPED 时必须有运单号（包括对已发货订单清空运单号的情况）
    resulting = target or order.fulfillment_status
    if resulting == FulfillmentStatus.SHIPPED:
        tracking = fields["tracking_number"] if "tracking_number" in fields else order.tracking_number
        if not blank_to_none(tracking):
            raise TrackingNumberRequired()

    if target is not None and not can_transition(order.fulfillment_status, target):
        raise InvalidFulfillmentTransition(order.fulfillment_status.value, target.value)

    return fields
