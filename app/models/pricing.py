from sqlalchemy import Column, Integer, Numeric, DateTime, CheckConstraint
from datetime import datetime, timezone
from app.models.base import Base
from app.utils.money import Money, apply_discount


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Pricing(Base):
    """Singleton row holding the product price. The final price is never stored."""
    __tablename__ = "pricing"
    __table_args__ = (
        CheckConstraint("base_price > 0", name="ck_pricing_base_price_positive"),
        CheckConstraint(
            "discount_percentage >= 0 AND discount_percentage <= 100",
            name="ck_pricing_discount_range",
        ),
    )
    id = Column(Integer, primary_key=True, autoincrement=True)
    # unconstrained NUMERIC, values are stored exactly as validated
    base_price = Column(Numeric(asdecimal=True), nullable=False)
    discount_percentage = Column(Numeric(asdecimal=True), nullable=False, default=0)
    last_updated = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    @property
    def final_price(self) -> Money:
        return apply_discount(self.base_price, self.discount_percentage)
