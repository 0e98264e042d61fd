from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from storefront.schemas.order_schemas import OrderItemCreate


class CheckoutBuyer(BaseModel):
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    email: Optional[str] = None


class CheckoutShipping(BaseModel):
    recipient_name: str = Field(..., min_length=1)
    recipient_phone: str = Field(..., min_length=1)
    postcode: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    address2: Optional[str] = None


class CheckoutRequest(BaseModel):
    """结账草稿请求（非会员写入 guest_orders）"""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    buyer: CheckoutBuyer
    shipping: CheckoutShipping
    memo: Optional[str] = None
    items: List[OrderItemCreate] = Field(..., min_length=1)
    amount: Optional[float] = None
    currency: Optional[str] = None
    is_guest: bool = Field(False, alias="isGuest")


class CheckoutResponse(BaseModel):
    id: Optional[str] = None
    message: Optional[str] = None
