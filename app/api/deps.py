from fastapi import Depends, Request
from app.external.razorpay import RazorpayService
from app.services.payment import PaymentService
from app.services.pricing import PricingService


def get_razorpay_service(request: Request) -> RazorpayService:
    """The gateway client created at startup, see app.main."""
    return request.app.state.razorpay

def get_pricing_service() -> PricingService:
    return PricingService()

def get_payment_service(gateway: RazorpayService = Depends(get_razorpay_service)) -> PaymentService:
    return PaymentService(gateway)
