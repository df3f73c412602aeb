from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation

from marshmallow import Schema, ValidationError, fields, pre_load

from models.base_model import utcnow

MAX_KEY_LENGTH = 20
MAX_TEXT_LENGTH = 255
# Integer columns are 32-bit signed
MAX_INT = 2**31 - 1


def bounded(max_length: int = MAX_TEXT_LENGTH):
    """Validator: non-blank text of at most max_length characters."""
    def _validate(value: str) -> None:
        if not value or not value.strip():
            raise ValidationError("Must not be empty.")
        if len(value) > max_length:
            raise ValidationError(f"Must be at most {max_length} characters.")
    return _validate


def validate_not_future(d: date) -> None:
    if d and d > utcnow().date():
        raise ValidationError("Date cannot be in the future.")


def validate_not_past(dt: datetime) -> None:
    if dt and dt < utcnow():
        raise ValidationError("Delivery date cannot be in the past.")


def to_naive_utc(dt: datetime) -> datetime:
    if dt.tzinfo is not None:
        return dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def to_decimal_2(value) -> Decimal:
    if value is None:
        return None
    try:
        d = Decimal(str(value))
    except (InvalidOperation, TypeError):
        raise ValidationError("Invalid decimal.")
    if not d.is_finite():
        raise ValidationError("Must be a finite number.")
    return d.quantize(Decimal("0.01"))


class DateField(fields.Date):
    """Date field that also accepts date objects from Python callers."""

    def _deserialize(self, value, attr, data, **kwargs):
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        return super()._deserialize(value, attr, data, **kwargs)


class DateTimeField(fields.DateTime):
    """
    DateTime field normalized to naive UTC.
    Accepts datetime/date objects and ISO strings with or without a time part.
    A bare date means the end of that day, so a delivery due today is not past.
    """

    def _deserialize(self, value, attr, data, **kwargs):
        if isinstance(value, datetime):
            return to_naive_utc(value)
        if isinstance(value, date):
            return datetime.combine(value, datetime.max.time())
        if isinstance(value, str):
            try:
                return datetime.combine(date.fromisoformat(value), datetime.max.time())
            except ValueError:
                pass
        return to_naive_utc(super()._deserialize(value, attr, data, **kwargs))


class StrippedSchema(Schema):
    """Base schema that trims surrounding whitespace from every string input."""

    @pre_load
    def _strip_strings(self, data, **kwargs):
        if not isinstance(data, dict):
            return data
        return {k: v.strip() if isinstance(v, str) else v for k, v in data.items()}
