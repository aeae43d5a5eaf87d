from pydantic import BaseModel
from datetime import datetime
from typing import Any, Optional
from app.models.pricing import Pricing


class UpdatePricingRequest(BaseModel):
    # left untyped so the service reports bad values with its own messages
    basePrice: Optional[Any] = None
    discountPercentage: Optional[Any] = None


class PricingSchema(BaseModel):
    basePrice: str
    discountPercentage: str
    finalPrice: str
    lastUpdated: datetime

    @classmethod
    def from_record(cls, pricing: Pricing) -> "PricingSchema":
        return cls(
            basePrice=f"{pricing.base_price:.2f}",
            discountPercentage=f"{pricing.discount_percentage:.1f}",
            finalPrice=str(pricing.final_price),
            lastUpdated=pricing.last_updated,
        )
