"""Shared type definitions for routing problem and result models.

Numeric values cross the model boundary as decimal strings so that no
precision is lost on the way to the decimal backends.
"""

from decimal import Decimal, InvalidOperation
from typing import Annotated, Any

from pydantic import BeforeValidator, Field


def _parse_decimal(value: Any, kind: str) -> Decimal:
    if isinstance(value, bool):
        raise ValueError(f"{kind} must be a decimal string or int, got bool")
    if isinstance(value, int):
        return Decimal(value)
    if not isinstance(value, str):
        raise ValueError(f"{kind} must be a decimal string or int, got {type(value).__name__}")
    try:
        d = Decimal(value.strip())
    except InvalidOperation as err:
        raise ValueError(f"{kind} must be a decimal string: '{value}'") from err
    if not d.is_finite():
        raise ValueError(f"{kind} must be finite: '{value}'")
    return d


def validate_decimal(value: Any) -> str:
    """Validate a finite (possibly negative) decimal string.

    Args:
        value: Value to validate (string or int)

    Returns:
        The value as a decimal string

    Raises:
        ValueError: If value is not a finite decimal
    """
    _parse_decimal(value, "Decimal")
    return value.strip() if isinstance(value, str) else str(value)


def validate_amount(value: Any) -> str:
    """Validate a non-negative decimal string (reserves, basket amounts)."""
    d = _parse_decimal(value, "Amount")
    if d < 0:
        raise ValueError(f"Amount cannot be negative: {value}")
    return value.strip() if isinstance(value, str) else str(value)


def validate_fee(value: Any) -> str:
    """Validate a fee multiplier in (0, 1]."""
    d = _parse_decimal(value, "Fee")
    if not 0 < d <= 1:
        raise ValueError(f"Fee must be in (0, 1]: {value}")
    return value.strip() if isinstance(value, str) else str(value)


# Finite decimal as string (may be negative)
DecimalString = Annotated[
    str,
    BeforeValidator(validate_decimal),
    Field(description="Finite decimal as string"),
]

# Non-negative decimal as string
AmountString = Annotated[
    str,
    BeforeValidator(validate_amount),
    Field(description="Non-negative decimal amount as string"),
]

# Fee multiplier (1 - fee rate) as string
FeeString = Annotated[
    str,
    BeforeValidator(validate_fee),
    Field(description="Fee multiplier in (0, 1] as string, e.g. '0.997'"),
]
