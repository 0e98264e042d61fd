"""
面向顾客的错误提示文案
错误码 -> 韩文提示；未知错误码使用通用提示
"""
from typing import Optional

GENERIC_MESSAGE = "일시적인 오류가 발생했어요. 잠시 후 다시 시도해 주세요."

ERROR_MESSAGES = {
    "INVALID_REQUEST": "입력값을 다시 확인해 주세요.",
    "NOT_FOUND": "주문을 찾을 수 없어요. 주문번호를 확인해 주세요.",
    "NOT_MATCH": "주문 정보가 일치하지 않아요. 휴대폰 번호 뒤 4자리를 확인해 주세요.",
    "UNAUTHORIZED": "비밀번호가 다릅니다.",
    "LOGIN_REQUIRED": "로그인이 필요해요.",
    "INVALID_PAYMENT_STATUS": "결제 상태 값이 올바르지 않아요.",
    "INVALID_FULFILLMENT_STATUS": "배송 상태 값이 올바르지 않아요.",
    "INVALID_FULFILLMENT_TRANSITION": "현재 배송 상태에서는 변경할 수 없어요.",
    "SHIPMENT_REQUIRES_PAID_ORDER": "결제 완료된 주문만 배송 처리할 수 있어요.",
    "TRACKING_NUMBER_REQUIRED": "송장번호를 먼저 저장해 주세요.",
    "ORDER_NO_COLLISION": "주문번호 생성에 실패했어요. 잠시 후 다시 시도해 주세요.",
    "DB_ERROR": GENERIC_MESSAGE,
    "INTERNAL_SERVER_ERROR": GENERIC_MESSAGE,
}


def user_message(error_code: Optional[str]) -> str:
    """根据错误码返回用户可读提示"""
    if not error_code:
        return GENERIC_MESSAGE
    return ERROR_MESSAGES.get(error_code, GENERIC_MESSAGE)
