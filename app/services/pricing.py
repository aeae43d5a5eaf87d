from sqlalchemy.ext.asyncio import AsyncSession
from decimal import Decimal
from app.crud import pricing as pricing_crud
from app.core.exceptions import NotFoundException
from app.schemas.pricing import PricingSchema
from app.utils.money import Money, apply_discount
from app.utils.validators import validate_numeric_range
from typing import Any
import logging

logger = logging.getLogger(__name__)

DEFAULT_BASE_PRICE = Decimal("199.00")
DEFAULT_DISCOUNT_PERCENTAGE = Decimal("85.0")


def final_price(base_price: Decimal, discount_percentage: Decimal) -> Money:
    """basePrice * (1 - discountPercentage / 100), rounded half-up to 2 places."""
    return apply_discount(base_price, discount_percentage)


class PricingService:
    def __init__(self):
        pass

    async def get_pricing(self, db: AsyncSession) -> PricingSchema:
        pricing = await pricing_crud.get_pricing(db)
        if not pricing:
            logger.warning("pricing requested but no pricing row exists")
            raise NotFoundException("no pricing data")
        return PricingSchema.from_record(pricing)

    async def update_pricing(self, base_price: Any, discount_percentage: Any, db: AsyncSession) -> PricingSchema:
        logger.info(f"method=update_pricing base_price={base_price} discount_percentage={discount_percentage}")
        base = validate_numeric_range(
            base_price, "basePrice", minimum=Decimal("0"), min_inclusive=False
        )
        discount = validate_numeric_range(
            discount_percentage, "discountPercentage", minimum=Decimal("0"), maximum=Decimal("100")
        )

        updated = await pricing_crud.update_pricing(db, base, discount)
        if updated == 0:
            raise NotFoundException("no pricing data")
        logger.info(f"pricing updated base_price={base} discount_percentage={discount}")
        return await self.get_pricing(db)

    async def ensure_default_pricing(self, db: AsyncSession) -> bool:
        """Seeds the default price when the table is empty. Returns True if a row was created."""
        if await pricing_crud.count_pricing(db) > 0:
            return False
        await pricing_crud.insert_pricing(db, DEFAULT_BASE_PRICE, DEFAULT_DISCOUNT_PERCENTAGE)
        logger.info(
            f"seeded default pricing base_price={DEFAULT_BASE_PRICE} "
            f"discount_percentage={DEFAULT_DISCOUNT_PERCENTAGE}"
        )
        return True
