from sqlalchemy import select, update, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from decimal import Decimal
from typing import Optional
from app.models.pricing import Pricing, utcnow
from app.core.exceptions import DatabaseException
import logging

logger = logging.getLogger(__name__)


async def count_pricing(db: AsyncSession) -> int:
    try:
        result = await db.execute(select(func.count()).select_from(Pricing))
        return result.scalar_one()
    except SQLAlchemyError:
        logger.exception("failed to count pricing rows")
        raise DatabaseException(500, "Failed to read pricing")


async def get_pricing(db: AsyncSession) -> Optional[Pricing]:
    try:
        result = await db.execute(select(Pricing).order_by(Pricing.id).limit(1))
        return result.scalars().first()
    except SQLAlchemyError:
        logger.exception("failed to read pricing")
        raise DatabaseException(500, "Failed to read pricing")


async def insert_pricing(db: AsyncSession, base_price: Decimal, discount_percentage: Decimal) -> Pricing:
    pricing = Pricing(
        base_price=base_price,
        discount_percentage=discount_percentage,
        last_updated=utcnow(),
    )
    try:
        db.add(pricing)
        await db.commit()
        return pricing
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("failed to insert pricing")
        raise DatabaseException(500, "Failed to save pricing")


async def update_pricing(db: AsyncSession, base_price: Decimal, discount_percentage: Decimal) -> int:
    """Overwrites the singleton row. Returns the number of rows affected."""
    try:
        result = await db.execute(
            update(Pricing)
            .values(
                base_price=base_price,
                discount_percentage=discount_percentage,
                last_updated=utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        await db.commit()
        return result.rowcount
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("failed to update pricing")
        raise DatabaseException(500, "Failed to update pricing")
