import re
import math
from decimal import Decimal, InvalidOperation
from typing import Any, Optional
from app.core.exceptions import ValidationException
from app.models.payment import PaymentStatus

_DISALLOWED_CHARS = re.compile(r"[^A-Za-z0-9@._-]")
_PHONE_PATTERN = re.compile(r"^\d{10}$")
_PHONE_SEPARATORS = re.compile(r"[-._]")
_EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9._-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")


def sanitize(text: Any) -> str:
    """
    Trims whitespace and drops every character outside [A-Za-z0-9@._-].

    Args:
        text: Untrusted input. Anything that is not a string yields "".

    Returns:
        str: The cleaned value.
    """
    if not isinstance(text, str):
        return ""
    return _DISALLOWED_CHARS.sub("", text.strip())


def validate_phone(text: Any) -> str:
    """Returns the sanitized phone, separators removed, if it is exactly 10 digits."""
    phone = _PHONE_SEPARATORS.sub("", sanitize(text))
    if not _PHONE_PATTERN.match(phone):
        raise ValidationException("invalid phone")
    return phone


def validate_email(text: Any) -> str:
    email = sanitize(text)
    if not _EMAIL_PATTERN.match(email):
        raise ValidationException("invalid email")
    return email


def validate_status(text: Any) -> str:
    """Case-insensitive match against PaymentStatus, returns the stored (lower-case) form."""
    if not isinstance(text, str):
        raise ValidationException("invalid status")
    status = text.strip().lower()
    if status not in {s.value for s in PaymentStatus}:
        raise ValidationException("invalid status")
    return status


def validate_numeric_range(
    value: Any,
    name: str,
    minimum: Optional[Decimal] = None,
    maximum: Optional[Decimal] = None,
    min_inclusive: bool = True,
    max_inclusive: bool = True,
) -> Decimal:
    """
    Parses value as a decimal and checks it against the given bounds.

    Args:
        value: int, float, Decimal or numeric string. Booleans are rejected.
        name: field name used in the error message.
        minimum / maximum: optional bounds, None means unbounded.
        min_inclusive / max_inclusive: whether the bound itself is allowed.

    Returns:
        Decimal: the parsed value.

    Raises:
        ValidationException: if the value is unparseable or out of range.
    """
    if isinstance(value, bool) or value is None:
        raise ValidationException(f"{name} must be a number.")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValidationException(f"{name} must be a number.")
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationException(f"{name} must be a number.")
    if not number.is_finite():
        raise ValidationException(f"{name} must be a number.")

    if minimum is not None:
        if number < minimum or (number == minimum and not min_inclusive):
            raise ValidationException(f"{name} is out of range.")
    if maximum is not None:
        if number > maximum or (number == maximum and not max_inclusive):
            raise ValidationException(f"{name} is out of range.")
    return number
