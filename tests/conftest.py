"""
测试配置

用内存实现替换 Supabase 数据访问层，通过 app.dependency_overrides 注入
"""

import copy
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Generator, List, Optional
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from storefront.api.dependencies import (
    get_guest_order_store,
    get_order_store,
    get_supabase_client,
)
from storefront.core.config import Settings, get_settings
from storefront.core.exceptions import DuplicateOrderNumber, StorageFailure
from storefront.crud.order_crud import OrderStore
from storefront.main import app
from storefront.models.order_models import FulfillmentStatus, Order, OrderItem, PaymentStatus

ADMIN_PASSWORD = "hl-admin-test"


class InMemoryOrderStore(OrderStore):
    """
    orders 表的内存实现

    和真实表一样对 order_no 做唯一约束；
    collide_next / fail_next 用于模拟冲突和数据库故障
    """

    def __init__(self):
        super().__init__(db=None)
        self.rows: Dict[str, Dict[str, Any]] = {}
        self.insert_attempts: List[str] = []
        self.update_calls: List[Dict[str, Any]] = []
        self.collide_next = 0
        self.fail_next: Optional[str] = None

    def _maybe_fail(self):
        if self.fail_next:
            message, self.fail_next = self.fail_next, None
            raise StorageFailure(detail=message)

    def create(self, order: Order) -> Order:
        self.insert_attempts.append(order.order_no)
        self._maybe_fail()
        if self.collide_next > 0:
            self.collide_next -= 1
            raise DuplicateOrderNumber(order.order_no)
        if any(row["order_no"] == order.order_no for row in self.rows.values()):
            raise DuplicateOrderNumber(order.order_no)
        self.rows[order.id] = order.to_row()
        return Order.model_validate(copy.deepcopy(self.rows[order.id]))

    def get_by_id(self, order_id: str) -> Optional[Order]:
        self._maybe_fail()
        row = self.rows.get(order_id)
        return Order.model_validate(copy.deepcopy(row)) if row else None

    def get_by_order_no(self, order_no: str) -> Optional[Order]:
        self._maybe_fail()
        for row in self.rows.values():
            if row["order_no"] == order_no:
                return Order.model_validate(copy.deepcopy(row))
        return None

    def update(self, order_id: str, fields: Dict[str, Any]) -> Optional[Order]:
        self._maybe_fail()
        self.update_calls.append(dict(fields))
        row = self.rows.get(order_id)
        if row is None:
            return None
        row.update(fields)
        row["updated_at"] = datetime.now(timezone.utc).isoformat()
        return Order.model_validate(copy.deepcopy(row))

    def _sorted(self, rows) -> List[Order]:
        ordered = sorted(rows, key=lambda r: r["created_at"], reverse=True)
        return [Order.model_validate(copy.deepcopy(r)) for r in ordered]

    def list_recent(self, limit: int) -> List[Order]:
        self._maybe_fail()
        return self._sorted(self.rows.values())[:limit]

    def list_by_buyer_email(self, email: str) -> List[Order]:
        self._maybe_fail()
        return self._sorted(r for r in self.rows.values() if r.get("buyer_email") == email)


class InMemoryGuestOrderStore:
    def __init__(self):
        self.rows: List[Dict[str, Any]] = []

    def create_draft(self, row: Dict[str, Any]) -> str:
        draft_id = f"guest_{len(self.rows) + 1}"
        self.rows.append(dict(row, id=draft_id))
        return draft_id


_seq = 0


def make_order(**overrides) -> Order:
    """构造一个测试订单"""
    global _seq
    _seq += 1
    created = datetime(2026, 2, 19, 9, 0, tzinfo=timezone.utc) + timedelta(minutes=_seq)
    data = {
        "id": f"ord_test_{_seq}",
        "order_no": f"HL260219{1000 + _seq}",
        "buyer_name": "김하늘",
        "buyer_phone": "01012345678",
        "buyer_email": "sky@example.com",
        "shipping_zip": "06236",
        "shipping_addr1": "서울 강남구 테헤란로 123",
        "shipping_addr2": "4층",
        "shipping_memo": None,
        "items": [OrderItem(product_id="p1", name="Shirt", price=89000, qty=2)],
        "amount": 178000,
        "currency": "KRW",
        "payment_status": PaymentStatus.CREATED,
        "fulfillment_status": FulfillmentStatus.NEW,
        "shipping_carrier": None,
        "tracking_number": None,
        "created_at": created,
        "updated_at": created,
    }
    data.update(overrides)
    return Order(**data)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(ADMIN_PASSWORD=ADMIN_PASSWORD, ORDER_CURRENCY="KRW", ADMIN_LIST_LIMIT=200)


@pytest.fixture
def order_store() -> InMemoryOrderStore:
    return InMemoryOrderStore()


@pytest.fixture
def guest_store() -> InMemoryGuestOrderStore:
    return InMemoryGuestOrderStore()


@pytest.fixture
def supabase_mock() -> MagicMock:
    return MagicMock()


@pytest.fixture
def seed_order(order_store):
    """把订单直接写入内存表"""

    def _seed(**overrides) -> Order:
        order = make_order(**overrides)
        order_store.rows[order.id] = order.to_row()
        return order

    return _seed


@pytest.fixture
def client(test_settings, order_store, guest_store, supabase_mock) -> Generator[TestClient, None, None]:
    """测试客户端"""
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_order_store] = lambda: order_store
    app.dependency_overrides[get_guest_order_store] = lambda: guest_store
    app.dependency_overrides[get_supabase_client] = lambda: supabase_mock
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers() -> Dict[str, str]:
    return {"x-admin-password": ADMIN_PASSWORD}
