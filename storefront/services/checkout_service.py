import math
from typing import Optional

from storefront.core.config import Settings, settings as default_settings
from storefront.core.logging_core import BusinessLogger
from storefront.crud.guest_order_crud import GuestOrderStore
from storefront.schemas.checkout_schemas import CheckoutRequest, CheckoutResponse
from storefront.utils.validators_utils import digits_only

business_logger = BusinessLogger("checkout")


class CheckoutService:
    """结账草稿；不经过发货状态机"""

    def __init__(self, store: GuestOrderStore, config: Optional[Settings] = None):
        self.store = store
        self.config = config or default_settings

    def save_draft(self, request: CheckoutRequest) -> CheckoutResponse:
        if not request.is_guest:
            # 会员订单走 /api/orders
            return CheckoutResponse(message="member checkout is handled by /api/orders")

        amount = request.amount if request.amount is not None and math.isfinite(request.amount) else 0
        row = {
            "email": request.buyer.email or None,
            "buyer_name": request.buyer.name,
            "buyer_phone": digits_only(request.buyer.phone),
            "recipient_name": request.shipping.recipient_name,
            "recipient_phone": digits_only(request.shipping.recipient_phone),
            "postcode": request.shipping.postcode,
            "address": request.shipping.address,
            "address2": request.shipping.address2 or None,
            "memo": request.memo or None,
            "items": [item.model_dump(mode="json", by_alias=True, exclude_none=True) for item in request.items],
            "amount": amount,
            "currency": request.currency or self.config.ORDER_CURRENCY,
            "status": "draft",
        }
        draft_id = self.store.create_draft(row)
        business_logger.log_operation("GUEST_DRAFT_CREATED", draft_id=draft_id)
        return CheckoutResponse(id=draft_id)
