"""Locale-independent number formatting for labels."""

from __future__ import annotations

import numbers
from decimal import Decimal
from typing import Any, Callable

from eiremap.labels.errors import TypeMismatch


def format_grouped(value: Any, digits: int = 0) -> str:
    """Format *value* with ``,`` thousands separators and *digits* decimals.

    Always uses a comma separator and a period decimal point, whatever the
    system locale.

        >>> format_grouped(1000000)
        '1,000,000'
        >>> format_grouped(12345.678, digits=2)
        '12,345.68'
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise TypeMismatch(f"cannot group non-numeric value {value!r}")
    if digits < 0:
        raise ValueError(f"digits must be >= 0, got {digits}")
    if isinstance(value, numbers.Integral):
        # exact, even past 2**53
        return f"{Decimal(int(value)):,.{digits}f}"
    return f"{float(value):,.{digits}f}"


def grouped(digits: int = 0) -> Callable[[Any], str]:
    """Return a field transform applying :func:`format_grouped` with *digits* decimals."""

    def transform(value: Any) -> str:
        return format_grouped(value, digits=digits)

    transform.__name__ = f"grouped_{digits}"
    return transform
