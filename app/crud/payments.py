from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from app.models.payment import Payment, PaymentStatus
from app.core.exceptions import DatabaseException
import logging

logger = logging.getLogger(__name__)


async def insert_payment(db: AsyncSession, payment: Payment) -> int:
    try:
        db.add(payment)
        await db.commit()
        return payment.id
    except SQLAlchemyError:
        await db.rollback()
        logger.exception(f"failed to persist payment for order_id={payment.order_id}")
        raise DatabaseException(500, "Failed to save payment")


async def update_payment_status(db: AsyncSession, payment_id: int, status: PaymentStatus) -> int:
    """Returns the number of rows affected, 0 when no payment has this id."""
    try:
        result = await db.execute(
            update(Payment)
            .where(Payment.id == payment_id)
            .values(status=status)
            .execution_options(synchronize_session=False)
        )
        await db.commit()
        return result.rowcount
    except SQLAlchemyError:
        await db.rollback()
        logger.exception(f"failed to update status of payment {payment_id}")
        raise DatabaseException(500, "Failed to update payment")


async def list_payments(db: AsyncSession) -> List[Payment]:
    # newest first, equal dates keep insertion order
    try:
        result = await db.execute(
            select(Payment).order_by(Payment.date.desc(), Payment.id.asc())
        )
        return list(result.scalars().all())
    except SQLAlchemyError:
        logger.exception("failed to list payments")
        raise DatabaseException(500, "Failed to fetch payments")
