from pydantic import BaseModel, Field
from datetime import datetime
from typing import Any, Optional
from app.models.payment import Payment


class CreateOrderRequest(BaseModel):
    amount: Optional[Any] = None  # minor units (paise)
    currency: Optional[Any] = None


class CreateOrderResponse(BaseModel):
    success: bool = True
    orderId: str


class SubmitPaymentRequest(BaseModel):
    fullName: Optional[Any] = None
    phone: Optional[Any] = None
    email: Optional[Any] = None
    paymentId: Optional[Any] = None
    orderId: Optional[Any] = None
    amount: Optional[Any] = None
    status: Optional[Any] = None
    date: Optional[Any] = None


class UpdateStatusRequest(BaseModel):
    status: Optional[Any] = None


class PaymentSchema(BaseModel):
    id: int
    fullName: str
    phone: str
    email: str
    paymentId: Optional[str] = None
    orderId: str
    amount: str
    basePrice: str
    discountPercentage: str
    status: str
    date: datetime
    createdAt: Optional[datetime] = Field(default=None)

    @classmethod
    def from_record(cls, payment: Payment) -> "PaymentSchema":
        return cls(
            id=payment.id,
            fullName=payment.full_name,
            phone=payment.phone,
            email=payment.email,
            paymentId=payment.payment_id,
            orderId=payment.order_id,
            amount=f"{payment.amount:.2f}",
            basePrice=f"{payment.base_price:.2f}",
            discountPercentage=f"{payment.discount_percentage:.1f}",
            status=payment.status.value if hasattr(payment.status, "value") else str(payment.status),
            date=payment.date,
            createdAt=payment.created_at,
        )
