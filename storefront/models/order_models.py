# storefront/models/order_models.py
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PaymentStatus(str, Enum):
    """支付状态"""

    CREATED = "CREATED"
    PAID = "PAID"
    VIRTUAL_ACCOUNT_ISSUED = "VIRTUAL_ACCOUNT_ISSUED"
    CANCELLED = "CANCELLED"
    FAILED = "FAILED"


class FulfillmentStatus(str, Enum):
    """发货状态"""

    NEW = "NEW"
    PACKING = "PACKING"
    SHIPPED = "SHIPPED"
    REFUNDED = "REFUNDED"


class OrderItem(BaseModel):
    """下单时的商品快照"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    product_id: str = Field(..., alias="productId")
    name: str
    price: int
    qty: int
    option: Optional[str] = None
    image_url: Optional[str] = Field(None, alias="imageUrl")

    @property
    def line_total(self) -> int:
        return self.price * self.qty


class Order(BaseModel):
    """orders 表的一行"""

    model_config = ConfigDict(extra="ignore")

    id: str
    order_no: str
    buyer_name: str
    buyer_phone: str
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

    def to_row(self) -> dict:
        """转换成写入数据库的字典，items 保留 camelCase"""
        row = self.model_dump(mode="json", exclude={"items"})
        row["items"] = [item.model_dump(mode="json", by_alias=True, exclude_none=True) for item in self.items]
        return row
