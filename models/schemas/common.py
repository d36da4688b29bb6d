from decimal import Decimal, InvalidOperation

from marshmallow import ValidationError

TWO_PLACES = Decimal("0.01")


def normalize_email(value):
    return value.strip().lower() if isinstance(value, str) else value


def validate_not_blank(value: str) -> None:
    if value is None or not value.strip():
        raise ValidationError("Must not be blank.")


def to_positive_decimal_2(value) -> Decimal:
    if value is None:
        raise ValidationError("Amount is required.")
    try:
        d = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError("Invalid decimal.")
    if not d.is_finite() or d <= 0:
        raise ValidationError("Amount must be positive.")
    if d.as_tuple().exponent < -2:
        raise ValidationError("Amount must have at most 2 decimal places.")
    return d.quantize(TWO_PLACES)
