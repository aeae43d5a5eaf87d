from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import DatabaseException
from app.crud import payments as payment_crud
from app.crud import pricing as pricing_crud
from app.models.payment import Payment, PaymentStatus


def make_payment() -> Payment:
    return Payment(
        full_name="AshaRao",
        phone="9876543210",
        email="asha.rao@example.com",
        order_id="order_N1x2y3",
        amount=Decimal("29.85"),
        base_price=Decimal("199.00"),
        discount_percentage=Decimal("85.0"),
        status=PaymentStatus.pending,
        date=datetime(2024, 5, 1, 10, tzinfo=timezone.utc),
    )


@pytest.mark.anyio
async def test_list_payments_orders_by_date_then_insertion():
    db = AsyncMock(spec=AsyncSession)
    result = MagicMock()
    result.scalars.return_value.all.return_value = []
    db.execute.return_value = result

    assert await payment_crud.list_payments(db) == []

    statement = str(db.execute.call_args.args[0])
    assert "ORDER BY payments.date DESC, payments.id ASC" in statement


@pytest.mark.anyio
async def test_insert_payment_commits_and_returns_id():
    db = AsyncMock(spec=AsyncSession)
    payment = make_payment()

    def assign_id():
        payment.id = 7

    db.commit.side_effect = assign_id

    assert await payment_crud.insert_payment(db, payment) == 7
    db.add.assert_called_once_with(payment)


@pytest.mark.anyio
async def test_insert_payment_failure_rolls_back():
    db = AsyncMock(spec=AsyncSession)
    db.commit.side_effect = OperationalError("INSERT", {}, Exception("connection lost"))

    with pytest.raises(DatabaseException) as excinfo:
        await payment_crud.insert_payment(db, make_payment())

    db.rollback.assert_awaited_once()
    assert excinfo.value.status_code == 500
    # driver detail stays in the log
    assert "connection lost" not in excinfo.value.detail


@pytest.mark.anyio
@pytest.mark.parametrize("rowcount", [0, 1])
async def test_update_payment_status_returns_rowcount(rowcount):
    db = AsyncMock(spec=AsyncSession)
    db.execute.return_value = MagicMock(rowcount=rowcount)

    assert await payment_crud.update_payment_status(db, 3, PaymentStatus.failed) == rowcount
    db.commit.assert_awaited_once()


@pytest.mark.anyio
async def test_update_payment_status_failure():
    db = AsyncMock(spec=AsyncSession)
    db.execute.side_effect = SQLAlchemyError("boom")

    with pytest.raises(DatabaseException):
        await payment_crud.update_payment_status(db, 3, PaymentStatus.failed)
    db.rollback.assert_awaited_once()


@pytest.mark.anyio
async def test_count_pricing():
    db = AsyncMock(spec=AsyncSession)
    db.execute.return_value = MagicMock(**{"scalar_one.return_value": 1})

    assert await pricing_crud.count_pricing(db) == 1


@pytest.mark.anyio
async def test_get_pricing_failure():
    db = AsyncMock(spec=AsyncSession)
    db.execute.side_effect = SQLAlchemyError("boom")

    with pytest.raises(DatabaseException) as excinfo:
        await pricing_crud.get_pricing(db)
    assert excinfo.value.detail == "Failed to read pricing"


@pytest.mark.anyio
async def test_update_pricing_returns_rowcount():
    db = AsyncMock(spec=AsyncSession)
    db.execute.return_value = MagicMock(rowcount=1)

    assert await pricing_crud.update_pricing(db, Decimal("250"), Decimal("10")) == 1
    db.commit.assert_awaited_once()
