# storefront/services/order_service.py
import logging
import random
from datetime import date, datetime, timezone
from typing import List, Optional

from storefront.core.config import Settings, settings as default_settings
from storefront.core.exceptions import DuplicateOrderNumber, OrderNumberExhausted
from storefront.core.logging_core import BusinessLogger
from storefront.crud.order_crud import OrderStore
from storefront.models.order_models import FulfillmentStatus, Order, OrderItem, PaymentStatus
from storefront.schemas.order_schemas import OrderCreate, OrderCreateResponse
from storefront.utils.id_generator import IdGenerator

logger = logging.getLogger(__name__)
business_logger = BusinessLogger("orders")


def calc_amount(items: List[OrderItem]) -> int:
    """订单金额 = Σ 单价 × 数量"""
    return sum(item.line_total for item in items)


class OrderService:
    """订单服务"""

    def __init__(self, store: OrderStore, config: Optional[Settings] = None):
        self.store = store
        self.config = config or default_settings

    def build_order(self, order_data: OrderCreate, order_id: str, order_no: str) -> Order:
        """根据下单请求构建订单实体（商品快照 + 金额）"""
        items = [OrderItem.model_validate(item.model_dump()) for item in order_data.items]
        now = datetime.now(timezone.utc)
        return Order(
            id=order_id,
            order_no=order_no,
            buyer_name=order_data.buyer_name,
            buyer_phone=order_data.buyer_phone,
            buyer_email=order_data.buyer_email,
            shipping_zip=order_data.shipping_zip,
            shipping_addr1=order_data.shipping_addr1,
            shipping_addr2=order_data.shipping_addr2,
            shipping_memo=order_data.shipping_memo,
            items=items,
            amount=calc_amount(items),
            currency=self.config.ORDER_CURRENCY,
            payment_status=PaymentStatus.CREATED,
            fulfillment_status=FulfillmentStatus.NEW,
            created_at=now,
            updated_at=now,
        )

    def create_order(
        self,
        order_data: OrderCreate,
        today: Optional[date] = None,
        rng: Optional[random.Random] = None,
    ) -> OrderCreateResponse:
        """
        创建订单

        order_no 冲突时重新生成，最多 ORDER_NO_MAX_ATTEMPTS 次；
        其他数据库错误直接抛出 StorageFailure，不重试
        """
        order_id = IdGenerator.generate_order_id()
        attempts = self.config.ORDER_NO_MAX_ATTEMPTS

        for attempt in range(1, attempts + 1):
            order_no = IdGenerator.generate_order_number(
                today=today,
                rng=rng,
                prefix=self.config.ORDER_NO_PREFIX,
                tz_name=self.config.ORDER_NO_TIMEZONE,
            )
            order = self.build_order(order_data, order_id, order_no)
            try:
                created = self.store.create(order)
            except DuplicateOrderNumber:
                logger.warning(f"order_no 冲突，重试 {attempt}/{attempts}: {order_no}")
                continue

            business_logger.log_operation(
                "ORDER_CREATED",
                order_id=created.id,
                order_no=created.order_no,
                amount=created.amount,
                attempt=attempt,
            )
            return OrderCreateResponse(
                order_id=created.id,
                order_no=created.order_no,
                amount=created.amount,
            )

        raise OrderNumberExhausted(attempts)
