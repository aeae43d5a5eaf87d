from sqlalchemy.ext.asyncio import AsyncSession
from decimal import Decimal, InvalidOperation, ROUND_DOWN
from datetime import datetime, timezone
from typing import Any, Dict, List
from pydantic import TypeAdapter, ValidationError
from app.crud import payments as payment_crud
from app.crud import pricing as pricing_crud
from app.core.exceptions import (
    AmountMismatchException,
    GatewayException,
    NotFoundException,
    ValidationException,
)
from app.external.razorpay import RazorpayService
from app.models.payment import MAX_PAYMENT_ID, Payment, PaymentStatus
from app.schemas.payment import SubmitPaymentRequest, PaymentSchema
from app.services.pricing import final_price
from app.utils.money import Money
from app.utils.validators import sanitize, validate_phone, validate_email, validate_status
import re
import logging

logger = logging.getLogger(__name__)

_CURRENCY_PATTERN = re.compile(r"^[A-Za-z]{3}$")
_datetime_adapter = TypeAdapter(datetime)

REQUIRED_FIELDS = ("fullName", "phone", "email", "amount", "status", "date", "orderId")
CAPTURED = "captured"


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def format_amount(value: Any) -> str:
    """Client amount rounded half-up to 2 places, as the string used for the exact-match check."""
    if isinstance(value, bool):
        raise ValidationException("invalid amount")
    try:
        return str(Money(value if isinstance(value, (int, float, Decimal)) else str(value).strip()))
    except (InvalidOperation, ValueError):
        raise ValidationException("invalid amount")


def parse_date(value: Any) -> datetime:
    """ISO-8601 string or epoch (seconds or milliseconds). Naive values are taken as UTC."""
    try:
        parsed = _datetime_adapter.validate_python(value)
    except ValidationError:
        raise ValidationException("invalid date")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class PaymentService:
    def __init__(self, gateway: RazorpayService):
        self.gateway = gateway

    async def create_order(self, amount: Any, currency: Any) -> str:
        if not amount or _is_blank(currency):
            raise ValidationException("Amount and currency are required.")
        if isinstance(amount, bool):
            raise ValidationException("Invalid amount.")
        try:
            parsed = Decimal(str(amount).strip())
        except (InvalidOperation, ValueError):
            raise ValidationException("Invalid amount.")
        if not parsed.is_finite():
            raise ValidationException("Invalid amount.")
        # minor units, fractional part dropped
        minor_units = int(parsed.to_integral_value(rounding=ROUND_DOWN))
        if minor_units <= 0:
            raise ValidationException("Invalid amount.")
        if not isinstance(currency, str) or not _CURRENCY_PATTERN.match(currency.strip()):
            raise ValidationException("Invalid currency.")

        return await self.gateway.create_order(minor_units, currency.strip().upper())

    async def submit_payment(self, request: SubmitPaymentRequest, db: AsyncSession) -> Dict[str, int]:
        """
        Validates a payment attempt and records it.

        Every check runs before the single insert, so a rejected attempt
        leaves no row behind. The amount check is a string-exact comparison
        of both values formatted to 2 places, not a numeric tolerance.

        Raises:
            ValidationException: missing or malformed fields, amount mismatch,
                missing pricing, or a failed gateway reconciliation.
            DatabaseException: the store rejected the read or the insert.
        """
        missing = [name for name in REQUIRED_FIELDS if _is_blank(getattr(request, name))]
        if missing:
            logger.info(f"payment rejected, missing fields {missing}")
            raise ValidationException("missing required fields")

        full_name = sanitize(request.fullName)
        order_id = sanitize(request.orderId)
        payment_id = sanitize(request.paymentId) or None
        if not full_name or not order_id:
            raise ValidationException("missing required fields")

        phone = validate_phone(request.phone)
        email = validate_email(request.email)
        status = validate_status(request.status)
        paid_at = parse_date(request.date)
        received = format_amount(request.amount)

        logger.info(f"method=submit_payment order_id={order_id} payment_id={payment_id} status={status}")

        pricing = await pricing_crud.get_pricing(db)
        if not pricing:
            raise ValidationException("no pricing data")

        expected = str(final_price(pricing.base_price, pricing.discount_percentage))
        if expected != received:
            logger.warning(
                f"amount mismatch order_id={order_id} expected={expected} received={received}"
            )
            raise AmountMismatchException(expected, received)

        if payment_id and status == PaymentStatus.success.value:
            await self._verify_with_gateway(payment_id, order_id)

        payment = Payment(
            full_name=full_name,
            phone=phone,
            email=email,
            payment_id=payment_id,
            order_id=order_id,
            amount=Decimal(received),
            base_price=pricing.base_price,
            discount_percentage=pricing.discount_percentage,
            status=PaymentStatus(status),
            date=paid_at,
        )
        record_id = await payment_crud.insert_payment(db, payment)
        logger.info(f"payment {record_id} saved order_id={order_id} status={status}")
        return {"id": record_id}

    async def _verify_with_gateway(self, payment_id: str, order_id: str):
        """Cross-checks a claimed success against Razorpay's record of the payment."""
        try:
            gateway_payment = await self.gateway.fetch_payment(payment_id)
        except GatewayException as ex:
            logger.warning(f"payment lookup failed payment_id={payment_id}: {ex.detail}")
            raise ValidationException("payment verification failed")

        # TODO: compare against the checkout signature once clients send razorpay_signature
        signature = self.gateway.compute_signature(order_id, payment_id)
        logger.debug(f"computed signature for payment_id={payment_id}: {signature}")

        if gateway_payment.get("order_id") != order_id:
            logger.warning(
                f"order mismatch payment_id={payment_id} claimed={order_id} "
                f"gateway={gateway_payment.get('order_id')}"
            )
            raise ValidationException("payment verification failed")
        if gateway_payment.get("status") != CAPTURED:
            logger.warning(
                f"payment_id={payment_id} not captured, gateway status={gateway_payment.get('status')}"
            )
            raise ValidationException("payment verification failed")

    async def update_status(self, payment_id: int, status: Any, db: AsyncSession) -> Dict[str, Any]:
        normalized = validate_status(status)
        logger.info(f"method=update_status payment_id={payment_id} status={normalized}")
        if not 1 <= payment_id <= MAX_PAYMENT_ID:
            raise NotFoundException("payment not found")
        updated = await payment_crud.update_payment_status(db, payment_id, PaymentStatus(normalized))
        if updated == 0:
            raise NotFoundException("payment not found")
        return {"id": payment_id, "status": normalized}

    async def list_payments(self, db: AsyncSession) -> List[PaymentSchema]:
        payments = await payment_crud.list_payments(db)
        return [PaymentSchema.from_record(p) for p in payments]
