"""
订单数据访问层

对 orders 表的增查改操作。所有后端 / 网络异常统一转换成 StorageFailure，
"没查到"返回 None，不抛异常，方便路由分别返回 500 / 404。
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from postgrest.exceptions import APIError
from supabase import Client

from storefront.core.exceptions import DuplicateOrderNumber, StorageFailure
from storefront.core.logging_core import BusinessLogger
from storefront.models.order_models import Order
from storefront.utils.id_generator import is_order_number_like

logger = logging.getLogger(__name__)
business_logger = BusinessLogger("order_store")

UNIQUE_VIOLATION = "23505"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def is_unique_violation(error: APIError) -> bool:
    """判断是否唯一约束冲突"""
    message = error.message or ""
    return error.code == UNIQUE_VIOLATION or "duplicate key" in message or UNIQUE_VIOLATION in message


class OrderStore:
    """
    订单数据访问类

    Supabase 客户端由外部创建后注入，本类不持有全局状态
    """

    table = "orders"

    def __init__(self, db: Client):
        """
        Args:
            db (Client): Supabase数据库客户端实例
        """
        self.db = db

    def _execute(self, query, operation: str) -> List[Dict[str, Any]]:
        try:
            response = query.execute()
        except APIError as e:
            business_logger.log_error(operation, e, code=e.code)
            raise StorageFailure(detail=e.message or f"{operation} failed")
        except Exception as e:
            business_logger.log_error(operation, e)
            raise StorageFailure(detail=str(e) or f"{operation} failed")
        return response.data or []

    def create(self, order: Order) -> Order:
        """插入订单；order_no 冲突抛 DuplicateOrderNumber"""
        row = order.to_row()
        try:
            response = self.db.table(self.table).insert(row).execute()
        except APIError as e:
            if is_unique_violation(e):
                logger.info(f"order_no 冲突: {order.order_no}")
                raise DuplicateOrderNumber(order.order_no)
            business_logger.log_error("ORDER_INSERT", e, code=e.code, order_no=order.order_no)
            raise StorageFailure(detail=e.message or "order insert failed")
        except Exception as e:
            business_logger.log_error("ORDER_INSERT", e, order_no=order.order_no)
            raise StorageFailure(detail=str(e) or "order insert failed")

        if response.data:
            return Order.model_validate(response.data[0])
        return order

    def get_by_id(self, order_id: str) -> Optional[Order]:
        """根据内部ID获取订单"""
        rows = self._execute(
            self.db.table(self.table).select("*").eq("id", order_id).limit(1),
            "获取订单",
        )
        return Order.model_validate(rows[0]) if rows else None

    def get_by_order_no(self, order_no: str) -> Optional[Order]:
        """根据订单号获取订单（精确匹配）"""
        rows = self._execute(
            self.db.table(self.table).select("*").eq("order_no", order_no).limit(1),
            "按订单号获取订单",
        )
        return Order.model_validate(rows[0]) if rows else None

    def find_by_identifier(self, key: str) -> Optional[Order]:
        """先按内部ID查，查不到且 key 像订单号时再按订单号查"""
        order = self.get_by_id(key)
        if order is None and is_order_number_like(key):
            order = self.get_by_order_no(key)
        return order

    def update(self, order_id: str, fields: Dict[str, Any]) -> Optional[Order]:
        """只更新传入的字段，同时刷新 updated_at"""
        data = dict(fields)
        data["updated_at"] = utc_now_iso()
        rows = self._execute(
            self.db.table(self.table).update(data).eq("id", order_id),
            "更新订单",
        )
        return Order.model_validate(rows[0]) if rows else None

    def list_recent(self, limit: int) -> List[Order]:
        """按创建时间倒序取最近订单"""
        rows = self._execute(
            self.db.table(self.table).select("*").order("created_at", desc=True).limit(limit),
            "获取最近订单",
        )
        return [Order.model_validate(row) for row in rows]

    def list_by_buyer_email(self, email: str) -> List[Order]:
        """会员"我的订单"，按创建时间倒序"""
        rows = self._execute(
            self.db.table(self.table)
            .select("*")
            .eq("buyer_email", email)
            .order("created_at", desc=True),
            "获取会员订单",
        )
        return [Order.model_validate(row) for row in rows]
