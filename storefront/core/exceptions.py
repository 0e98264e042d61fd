from typing import Any, Dict, Optional

from fastapi import HTTPException, status

from storefront.core.messages import user_message


class StorefrontException(HTTPException):
    """业务异常基类，携带机器可读的 error_code"""

    error_code = "INTERNAL_SERVER_ERROR"
    default_status = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        detail: Optional[str] = None,
        status_code: Optional[int] = None,
        headers: Optional[Dict[str, str]] = None,
        data: Any = None,
    ):
        super().__init__(
            status_code=status_code or self.default_status,
            detail=detail or user_message(self.error_code),
            headers=headers,
        )
        self.data = data


# ---- 400 ----

class InvalidRequest(StorefrontException):
    """请求参数验证失败"""

    error_code = "INVALID_REQUEST"
    default_status = status.HTTP_400_BAD_REQUEST


class InvalidPaymentStatus(StorefrontException):
    error_code = "INVALID_PAYMENT_STATUS"
    default_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, value: Any):
        super().__init__(detail=f"invalid paymentStatus: {value!r}", data={"value": value})


class InvalidFulfillmentStatus(StorefrontException):
    error_code = "INVALID_FULFILLMENT_STATUS"
    default_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, value: Any):
        super().__init__(detail=f"invalid fulfillmentStatus: {value!r}", data={"value": value})


class InvalidFulfillmentTransition(StorefrontException):
    error_code = "INVALID_FULFILLMENT_TRANSITION"
    default_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, current: str, target: str):
        super().__init__(
            detail=f"fulfillment transition {current} -> {target} is not allowed",
            data={"from": current, "to": target},
        )


class ShipmentRequiresPaidOrder(StorefrontException):
    """发货前订单必须已支付"""

    error_code = "SHIPMENT_REQUIRES_PAID_ORDER"
    default_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, payment_status: str):
        super().__init__(
            detail=f"order must be PAID before SHIPPED (payment_status={payment_status})",
            data={"paymentStatus": payment_status},
        )


class TrackingNumberRequired(StorefrontException):
    error_code = "TRACKING_NUMBER_REQUIRED"
    default_status = status.HTTP_400_BAD_REQUEST

    def __init__(self):
        super().__init__(detail="tracking number must be saved before SHIPPED")


# ---- 401 ----

class Unauthorized(StorefrontException):
    """管理员密码错误"""

    error_code = "UNAUTHORIZED"
    default_status = status.HTTP_401_UNAUTHORIZED


class LoginRequired(StorefrontException):
    error_code = "LOGIN_REQUIRED"
    default_status = status.HTTP_401_UNAUTHORIZED

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail=detail, headers={"WWW-Authenticate": "Bearer"})


class NotMatch(StorefrontException):
    """订单号存在但手机号后四位不匹配"""

    error_code = "NOT_MATCH"
    default_status = status.HTTP_401_UNAUTHORIZED


# ---- 404 ----

class NotFound(StorefrontException):
    error_code = "NOT_FOUND"
    default_status = status.HTTP_404_NOT_FOUND


# ---- 500 ----

class StorageFailure(StorefrontException):
    """数据库 / 网络异常"""

    error_code = "DB_ERROR"
    default_status = status.HTTP_500_INTERNAL_SERVER_ERROR


class DuplicateOrderNumber(StorageFailure):
    """order_no 唯一约束冲突，由创建订单的重试循环处理"""

    error_code = "DUPLICATE_KEY"

    def __init__(self, order_no: str):
        super().__init__(detail=f"duplicate order_no: {order_no}", data={"orderNo": order_no})
        self.order_no = order_no


class OrderNumberExhausted(StorefrontException):
    """订单号连续冲突，重试次数耗尽"""

    error_code = "ORDER_NO_COLLISION"
    default_status = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, attempts: int):
        super().__init__(
            detail=f"order_no generation collided {attempts} times",
            data={"attempts": attempts},
        )
        self.attempts = attempts
