"""Input validation helpers."""

import math

from daily_journal.domain.errors import ValidationError


def parse_number(value: object, message: str) -> float:
    """Return value as a finite float or raise ValidationError with message."""
    if isinstance(value, bool):
        raise ValidationError(message)
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError as exc:
            raise ValidationError(message) from exc
    else:
        raise ValidationError(message)
    if not math.isfinite(number):
        raise ValidationError(message)
    return number
