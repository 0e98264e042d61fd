from fastapi import APIRouter, Depends

from storefront.api.dependencies import get_checkout_service
from storefront.schemas.checkout_schemas import CheckoutRequest, CheckoutResponse
from storefront.services.checkout_service import CheckoutService

router = APIRouter(prefix="/api/checkout", tags=["checkout"])


@router.post("", response_model=CheckoutResponse, response_model_exclude_none=True)
def save_checkout_draft(
    request: CheckoutRequest,
    service: CheckoutService = Depends(get_checkout_service),
):
    """保存结账草稿"""
    return service.save_draft(request)
