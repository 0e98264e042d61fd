# storefront/services/lookup_service.py
import hmac
import logging

from storefront.core.exceptions import InvalidRequest, NotFound, NotMatch
from storefront.crud.order_crud import OrderStore
from storefront.schemas.order_schemas import OrderLookupRequest, OrderPublicView
from storefront.utils.validators_utils import phone_last4

logger = logging.getLogger(__name__)


class OrderLookupService:
    """
    非会员订单查询

    凭订单号 + 下单手机号后四位查询，返回结果去掉 buyer_phone。
    这是低安全级别的便捷查询，只暴露配送 / 状态信息。
    """

    def __init__(self, store: OrderStore):
        self.store = store

    def lookup(self, request: OrderLookupRequest) -> OrderPublicView:
        order_no = (request.order_no or "").strip().upper()
        last4 = phone_last4(request.phone_last4)

        if not order_no or len(last4) != 4:
            raise InvalidRequest()

        order = self.store.get_by_order_no(order_no)
        if order is None:
            raise NotFound()

        if not hmac.compare_digest(phone_last4(order.buyer_phone).encode(), last4.encode()):
            logger.info(f"订单查询手机号不匹配: {order_no}")
            raise NotMatch()

        return OrderPublicView.from_order(order)
