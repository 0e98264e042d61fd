# storefront/schemas/order_schemas.py
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from storefront.models.order_models import FulfillmentStatus, Order, OrderItem, PaymentStatus
from storefront.utils.validators_utils import digits_only


class OrderItemCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(..., min_length=1, alias="productId", description="商品ID")
    name: str = Field(..., min_length=1, max_length=255, description="商品名称")
    price: int = Field(..., ge=0, description="单价")
    qty: int = Field(..., ge=1, description="数量")
    option: Optional[str] = Field(None, description="选项")
    image_url: Optional[str] = Field(None, alias="imageUrl", description="商品图片")


class OrderCreate(BaseModel):
    """下单请求"""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    buyer_name: str = Field(..., min_length=1, alias="buyerName")
    buyer_phone: str = Field(..., min_length=1, alias="buyerPhone")
    buyer_email: Optional[str] = Field(None, alias="buyerEmail")
    shipping_zip: str = Field(..., min_length=1, alias="shippingZip")
    shipping_addr1: str = Field(..., min_length=1, alias="shippingAddr1")
    shipping_addr2: Optional[str] = Field(None, alias="shippingAddr2")
    shipping_memo: Optional[str] = Field(None, alias="shippingMemo")
    items: List[OrderItemCreate] = Field(..., min_length=1)

    @field_validator("buyer_phone")
    @classmethod
    def normalize_phone(cls, v: str) -> str:
        phone = digits_only(v)
        if not phone:
            raise ValueError("buyerPhone must contain digits")
        return phone

    @field_validator("buyer_email", "shipping_addr2", "shipping_memo")
    @classmethod
    def empty_to_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class OrderCreateResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    order_id: str = Field(..., alias="orderId")
    order_no: str = Field(..., alias="orderNo")
    amount: int


class OrderLookupRequest(BaseModel):
    """非会员订单查询请求，字段校验在 service 层完成"""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    order_no: Optional[str] = Field(None, alias="orderNo")
    phone_last4: Optional[str] = Field(None, alias="phoneLast4")


class OrderPublicView(BaseModel):
    """公开查询返回的订单，不含 buyer_phone"""

    id: str
    order_no: str
    buyer_name: str
    buyer_email: Optional[str] = None
    shipping_zip: str
    shipping_addr1: str
    shipping_addr2: Optional[str] = None
    shipping_memo: Optional[str] = None
    items: List[OrderItem]
    amount: int
    currency: str
    payment_status: PaymentStatus
    fulfillment_status: FulfillmentStatus
    shipping_carrier: Optional[str] = None
    tracking_number: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_order(cls, order: Order) -> "OrderPublicView":
        return cls.model_validate(order.model_dump(exclude={"buyer_phone"}))


class OrderLookupResponse(BaseModel):
    ok: bool = True
    order: OrderPublicView


class OrderUpdate(BaseModel):
    """
    管理员修改订单请求

    状态字段不做类型转换，出现的值（包括 null 和非字符串）都交给状态机做枚举校验；
    是否"出现"通过 model_fields_set 判断（显式 null 用于清空物流信息）
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    payment_status: Optional[Any] = Field(None, alias="paymentStatus")
    fulfillment_status: Optional[Any] = Field(None, alias="fulfillmentStatus")
    shipping_carrier: Optional[str] = Field(None, alias="shippingCarrier")
    tracking_number: Optional[str] = Field(None, alias="trackingNumber")

    def provided(self, field_name: str) -> bool:
        return field_name in self.model_fields_set


class OrderListResponse(BaseModel):
    orders: List[Order]
