import sys
from pathlib import Path
import os
from datetime import datetime, timezone
from decimal import Decimal

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("DATABASE_URL", "postgresql://localhost/test")
os.environ.setdefault("RAZORPAY_KEY_ID", "rzp_test_key")
os.environ.setdefault("RAZORPAY_KEY_SECRET", "test-secret")
os.environ.setdefault("LOG_FILE", str(ROOT / "tests" / "test-run.log"))

from app.core.exceptions import GatewayException
from app.crud import payments as payment_crud
from app.crud import pricing as pricing_crud
from app.models.payment import Payment
from app.models.pricing import Pricing


class FakeStore:
    """In-memory stand-in for the crud layer, same signatures and return values."""

    def __init__(self):
        self.pricing_rows: list[Pricing] = []
        self.payments: list[Payment] = []
        self._next_payment_id = 1

    async def count_pricing(self, db) -> int:
        return len(self.pricing_rows)

    async def get_pricing(self, db):
        return self.pricing_rows[0] if self.pricing_rows else None

    async def insert_pricing(self, db, base_price, discount_percentage):
        row = Pricing(
            id=len(self.pricing_rows) + 1,
            base_price=Decimal(base_price),
            discount_percentage=Decimal(discount_percentage),
            last_updated=datetime.now(timezone.utc),
        )
        self.pricing_rows.append(row)
        return row

    async def update_pricing(self, db, base_price, discount_percentage) -> int:
        for row in self.pricing_rows:
            row.base_price = base_price
            row.discount_percentage = discount_percentage
            row.last_updated = datetime.now(timezone.utc)
        return len(self.pricing_rows)

    async def insert_payment(self, db, payment) -> int:
        payment.id = self._next_payment_id
        payment.created_at = datetime.now(timezone.utc)
        self._next_payment_id += 1
        self.payments.append(payment)
        return payment.id

    async def update_payment_status(self, db, payment_id, status) -> int:
        for payment in self.payments:
            if payment.id == payment_id:
                payment.status = status
                return 1
        return 0

    async def list_payments(self, db):
        return sorted(self.payments, key=lambda p: (-p.date.timestamp(), p.id))


class FakeGateway:
    def __init__(self):
        self.orders: list[tuple[int, str]] = []
        self.payments: dict[str, dict] = {}
        self.fetch_calls: list[str] = []
        self.create_error: Exception | None = None

    async def create_order(self, amount_minor_units: int, currency: str) -> str:
        if self.create_error:
            raise self.create_error
        self.orders.append((amount_minor_units, currency))
        return f"order_{len(self.orders)}"

    async def fetch_payment(self, payment_id: str) -> dict:
        self.fetch_calls.append(payment_id)
        if payment_id not in self.payments:
            raise GatewayException(
                f"The id provided does not exist: {payment_id}", gateway_status=400
            )
        return self.payments[payment_id]

    def compute_signature(self, order_id: str, payment_id: str) -> str:
        return "signature"

    async def aclose(self):
        pass


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def store(monkeypatch) -> FakeStore:
    fake = FakeStore()
    monkeypatch.setattr(pricing_crud, "count_pricing", fake.count_pricing)
    monkeypatch.setattr(pricing_crud, "get_pricing", fake.get_pricing)
    monkeypatch.setattr(pricing_crud, "insert_pricing", fake.insert_pricing)
    monkeypatch.setattr(pricing_crud, "update_pricing", fake.update_pricing)
    monkeypatch.setattr(payment_crud, "insert_payment", fake.insert_payment)
    monkeypatch.setattr(payment_crud, "update_payment_status", fake.update_payment_status)
    monkeypatch.setattr(payment_crud, "list_payments", fake.list_payments)
    return fake


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def payment_body() -> dict:
    return {
        "fullName": "Asha Rao",
        "phone": "9876543210",
        "email": "asha.rao@example.com",
        "orderId": "order_N1x2y3",
        "amount": "29.85",
        "status": "pending",
        "date": "2024-05-01T10:00:00Z",
    }
