# storefront/services/admin_order_service.py
from typing import List, Optional

from storefront.core.config import Settings, settings as default_settings
from storefront.core.exceptions import NotFound, StorefrontException
from storefront.core.logging_core import AuditLogger
from storefront.crud.order_crud import OrderStore
from storefront.models.order_models import FulfillmentStatus, Order
from storefront.schemas.order_schemas import OrderUpdate
from storefront.services.fulfillment_service import parse_payment_status, plan_order_update
from storefront.utils.id_generator import normalize_order_key
from storefront.utils.validators_utils import digits_only


def matches_keyword(order: Order, keyword: str) -> bool:
    """按 ID / 订单号 / 姓名 / 手机号（忽略连字符）模糊匹配"""
    keyword = keyword.strip().lower()
    if not keyword:
        return True
    phone_keyword = keyword.replace("-", "")
    return (
        keyword in order.id.lower()
        or keyword in order.order_no.lower()
        or keyword in order.buyer_name.lower()
        or (bool(phone_keyword) and phone_keyword in digits_only(order.buyer_phone))
    )


class AdminOrderService:
    """管理后台订单服务"""

    def __init__(self, store: OrderStore, config: Optional[Settings] = None):
        self.store = store
        self.config = config or default_settings

    def list_orders(
        self,
        keyword: Optional[str] = None,
        unshipped_only: bool = False,
        payment_status: Optional[str] = None,
    ) -> List[Order]:
        """最近订单列表，筛选在取回的最近 N 条上进行"""
        wanted_payment = parse_payment_status(payment_status) if payment_status else None
        orders = self.store.list_recent(self.config.ADMIN_LIST_LIMIT)

        result = []
        for order in orders:
            if unshipped_only and order.fulfillment_status == FulfillmentStatus.SHIPPED:
                continue
            if wanted_payment and order.payment_status != wanted_payment:
                continue
            if keyword and not matches_keyword(order, keyword):
                continue
            result.append(order)
        return result

    def get_order(self, raw_key: str) -> Order:
        order = self.store.find_by_identifier(normalize_order_key(raw_key))
        if order is None:
            raise NotFound()
        return order

    def update_order(self, raw_key: str, update: OrderUpdate) -> Order:
        """校验通过后一次性写入所有字段"""
        order = self.get_order(raw_key)

        try:
            fields = plan_order_update(order, update)
        except StorefrontException as e:
            AuditLogger.log_order_update_rejected(order.id, e.error_code, e.data)
            raise

        updated = self.store.update(order.id, fields)
        if updated is None:
            raise NotFound()

        AuditLogger.log_order_status_change(order.id, order.order_no, fields)
        return updated
