from sqlalchemy import Column, String, DateTime, Integer, Numeric, Enum as SqlEnum
from enum import Enum
from app.models.base import Base
from app.models.pricing import utcnow

# payments.id is an int4 serial
MAX_PAYMENT_ID = 2**31 - 1


class PaymentStatus(str, Enum):
    pending = "pending"
    success = "success"
    failed = "failed"


class Payment(Base):
    __tablename__ = "payments"
    id = Column(Integer, primary_key=True, autoincrement=True)
    full_name = Column(String, nullable=False)
    phone = Column(String(10), nullable=False)
    email = Column(String, nullable=False)
    payment_id = Column(String, nullable=True)
    order_id = Column(String, nullable=False)
    amount = Column(Numeric(asdecimal=True), nullable=False)
    # pricing snapshot at submission time, kept even if pricing changes later
    base_price = Column(Numeric(asdecimal=True), nullable=False)
    discount_percentage = Column(Numeric(asdecimal=True), nullable=False)
    status = Column(SqlEnum(PaymentStatus, name="payment_status"), nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
