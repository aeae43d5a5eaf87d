from decimal import Decimal, ROUND_HALF_UP

class Money:
    def __init__(self, amount: str | float | int | Decimal):
        if isinstance(amount, float):
            amount = str(amount)
        self.amount = Decimal(amount).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"

    def __repr__(self) -> str:
        return f"Money({str(self.amount)})"


def apply_discount(base: int | Decimal | float | str, percentage: int | Decimal | float | str) -> Money:
    """base * (1 - percentage / 100). Only the result is rounded, the inputs are used as given."""
    factor = Decimal('1') - Decimal(str(percentage)) / Decimal('100')
    return Money(Decimal(str(base)) * factor)
