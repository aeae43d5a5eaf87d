from .pricing import Pricing
from .payment import Payment, PaymentStatus

__all__ = ["Pricing", "Payment", "PaymentStatus"]
