import logging
from typing import Any, Dict

from postgrest.exceptions import APIError
from supabase import Client

from storefront.core.exceptions import StorageFailure

logger = logging.getLogger(__name__)


class GuestOrderStore:
    """guest_orders 表（非会员结账草稿）"""

    table = "guest_orders"

    def __init__(self, db: Client):
        self.db = db

    def create_draft(self, row: Dict[str, Any]) -> str:
        """插入草稿并返回ID"""
        try:
            response = self.db.table(self.table).insert(row).execute()
        except APIError as e:
            logger.error(f"保存结账草稿失败: code={e.code} message={e.message}")
            raise StorageFailure(detail=e.message or "guest order insert failed")
        except Exception as e:
            logger.error(f"保存结账草稿失败: {e}")
            raise StorageFailure(detail=str(e) or "guest order insert failed")

        if not response.data:
            raise StorageFailure(detail="guest order insert returned no row")
        return str(response.data[0]["id"])
