from .checkout_schemas import CheckoutBuyer, CheckoutRequest, CheckoutResponse, CheckoutShipping
from .order_schemas import (
    OrderCreate,
    OrderCreateResponse,
    OrderItemCreate,
    OrderListResponse,
    OrderLookupRequest,
    OrderLookupResponse,
    OrderPublicView,
    OrderUpdate,
)

__all__ = [
    "CheckoutBuyer", "CheckoutRequest", "CheckoutResponse", "CheckoutShipping",
    "OrderCreate", "OrderCreateResponse", "OrderItemCreate", "OrderListResponse",
    "OrderLookupRequest", "OrderLookupResponse", "OrderPublicView", "OrderUpdate",
]
