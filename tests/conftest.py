"""In-memory stand-ins for the repositories plus small builders shared by the tests."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Optional
from uuid import uuid4

import pytest

from sales_dashboard.models.activity_log import ActivityLog
from sales_dashboard.models.business_settings import BusinessSettings
from sales_dashboard.models.chat_message import ChatMessage
from sales_dashboard.models.product import Product
from sales_dashboard.models.sale import Sale

OWNER = "owner-1"
OTHER_OWNER = "owner-2"


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class SaleRow:
    date: date
    product_id: str
    product_name: str
    quantity: int
    total: float


@dataclass
class ProductRow:
    id: str
    name: str
    price: float = 10000
    cost_price: float = 6000
    stock: int = 100
    min_stock: int = 10
    unit: str = "pcs"


def sale_rows(start: date, totals, product_id="p1", product_name="Coffee", quantity=1):
    """One sale per day starting at `start` with the given totals."""
    return [
        SaleRow(start + timedelta(days=i), product_id, product_name, quantity, float(total))
        for i, total in enumerate(totals)
    ]


class FakeProductRepo:
    def __init__(self):
        self.rows: dict[str, Product] = {}

    async def create(self, **data) -> Product:
        product = Product(**data, created_at=_now(), updated_at=_now())
        self.rows[product.id] = product
        return product

    async def get(self, owner_id, id) -> Optional[Product]:
        p = self.rows.get(id)
        return p if p is not None and p.owner_id == owner_id else None

    async def get_by_name(self, owner_id, name) -> Optional[Product]:
        return next((p for p in self.rows.values() if p.owner_id == owner_id and p.name == name), None)

    async def get_all(self, owner_id, *, limit=None, offset=0, name_query=None, category=None):
        rows = [p for p in self.rows.values() if p.owner_id == owner_id]
        if name_query:
            rows = [p for p in rows if name_query.lower() in p.name.lower()]
        if category:
            rows = [p for p in rows if p.category == category]
        rows.sort(key=lambda p: p.name)
        rows = rows[offset:]
        return rows[:limit] if limit is not None else rows

    async def count(self, owner_id) -> int:
        return len([p for p in self.rows.values() if p.owner_id == owner_id])

    async def update_partial(self, owner_id, id, **fields) -> Product:
        product = await self.get(owner_id, id)
        if not product:
            raise ValueError(f"Product '{id}' not found")
        new_name = fields.get("name")
        if new_name is not None and new_name != product.name and await self.get_by_name(owner_id, new_name):
            raise ValueError(f"Product named '{new_name}' already exists")
        for key, value in fields.items():
            if value is not None:
                setattr(product, key, value)
        product.updated_at = _now()
        return product

    async def delete(self, owner_id, id) -> Product:
        product = await self.get(owner_id, id)
        if not product:
            raise ValueError(f"Product '{id}' not found")
        del self.rows[id]
        return product


class FakeSaleRepo:
    def __init__(self, products: Optional[FakeProductRepo] = None):
        self.rows: dict[str, Sale] = {}
        self.products = products or FakeProductRepo()

    async def create_many(self, sales, *, take_from_stock=False):
        created = [Sale(**data, created_at=_now()) for data in sales]
        stock_before = {pid: p.stock for pid, p in self.products.rows.items()}
        try:
            if take_from_stock:
                for sale in created:
                    await self._take_from_stock(sale.owner_id, sale.product_id, sale.quantity)
        except Exception:
            # rollback
            for pid, stock in stock_before.items():
                self.products.rows[pid].stock = stock
            raise
        for sale in created:
            self.rows[sale.id] = sale
        return created

    async def _take_from_stock(self, owner_id, product_id, quantity):
        product = await self.products.get(owner_id, product_id)
        if product:
            product.stock -= quantity

    async def create(self, **data):
        return (await self.create_many([data]))[0]

    async def get(self, owner_id, id):
        s = self.rows.get(id)
        return s if s is not None and s.owner_id == owner_id else None

    async def get_all(self, owner_id, *, start=None, end=None, product_id=None, newest_first=False):
        rows = [s for s in self.rows.values() if s.owner_id == owner_id]
        if start:
            rows = [s for s in rows if s.date >= start]
        if end:
            rows = [s for s in rows if s.date <= end]
        if product_id:
            rows = [s for s in rows if s.product_id == product_id]
        rows.sort(key=lambda s: (s.date, s.created_at), reverse=newest_first)
        return rows

    async def update(self, owner_id, id, **fields):
        sale = await self.get(owner_id, id)
        if not sale:
            raise ValueError(f"Sale '{id}' not found")
        for key, value in fields.items():
            if value is not None:
                setattr(sale, key, value)
        sale.total = sale.quantity * sale.unit_price
        return sale

    async def delete(self, owner_id, id):
        if not await self.get(owner_id, id):
            raise ValueError(f"Sale '{id}' not found")
        del self.rows[id]

    def add(self, owner_id, day, product, quantity, unit_price=None):
        """Seeds a sale directly, without touching stock."""
        price = product.price if unit_price is None else unit_price
        sale = Sale(
            id=str(uuid4()),
            owner_id=owner_id,
            date=day,
            product_id=product.id,
            product_name=product.name,
            quantity=quantity,
            unit_price=price,
            total=quantity * price,
            created_at=_now(),
        )
        self.rows[sale.id] = sale
        return sale


class FakeSettingsRepo:
    def __init__(self):
        self.rows: dict[str, BusinessSettings] = {}

    async def get(self, owner_id):
        return self.rows.get(owner_id)

    async def upsert(self, owner_id, values):
        row = self.rows.get(owner_id)
        if row is None:
            row = BusinessSettings(id=str(uuid4()), owner_id=owner_id, **values)
            self.rows[owner_id] = row
        else:
            for key, value in values.items():
                setattr(row, key, value)
        return row


class FakeActivityRepo:
    def __init__(self):
        self.rows: list[ActivityLog] = []

    async def add(self, owner_id, action, details):
        entry = ActivityLog(
            id=str(uuid4()), owner_id=owner_id, action=action, details=details, created_at=datetime.utcnow()
        )
        self.rows.append(entry)
        return entry

    async def latest(self, owner_id, limit=100):
        rows = [e for e in self.rows if e.owner_id == owner_id]
        return list(reversed(rows))[:limit]


class FakeChatRepo:
    def __init__(self):
        self.rows: list[ChatMessage] = []

    async def add(self, owner_id, session_id, role, content):
        message = ChatMessage(
            id=str(uuid4()), owner_id=owner_id, session_id=session_id, role=role, content=content, created_at=_now()
        )
        self.rows.append(message)
        return message

    def _owned(self, owner_id, session_id=None):
        return [
            m for m in self.rows if m.owner_id == owner_id and (not session_id or m.session_id == session_id)
        ]

    async def history(self, owner_id, session_id=None, limit=100):
        return self._owned(owner_id, session_id)[-limit:]

    async def sessions(self, owner_id):
        grouped: dict[str, list[ChatMessage]] = {}
        for m in self._owned(owner_id):
            grouped.setdefault(m.session_id, []).append(m)
        rows = [
            {
                "session_id": sid,
                "title": next((m.content for m in msgs if m.role == "user"), ""),
                "message_count": len(msgs),
                "started_at": msgs[0].created_at,
                "last_message_at": msgs[-1].created_at,
            }
            for sid, msgs in grouped.items()
        ]
        return list(reversed(rows))

    async def clear(self, owner_id, session_id=None):
        doomed = self._owned(owner_id, session_id)
        self.rows = [m for m in self.rows if m not in doomed]
        return len(doomed)


@pytest.fixture
def product_repo():
    return FakeProductRepo()


@pytest.fixture
def sale_repo(product_repo):
    return FakeSaleRepo(product_repo)


@pytest.fixture
def settings_repo():
    return FakeSettingsRepo()


@pytest.fixture
def activity_repo():
    return FakeActivityRepo()


@pytest.fixture
def chat_repo():
    return FakeChatRepo()
