"""Printf-style label templates with typed positional placeholders.

Supported placeholders:

    %s      any value, rendered with ``str()``
    %.Ns    the same, cut to at most N characters
    %d      an integer
    %.Nd    an integer with at least N digits, zero-padded
    %f      a float, 6 decimals
    %.Nf    a float, N decimals
    %%      a literal percent sign

Everything else in the template, markup included, is kept verbatim.
"""

from __future__ import annotations

import enum
import math
import numbers
import re
from dataclasses import dataclass
from typing import Any

from eiremap.labels.errors import TypeMismatch

_PLACEHOLDER_RE = re.compile(r"%(?:(%)|(?:\.(\d+))?([sdf]))")

DEFAULT_FLOAT_DIGITS = 6


class Kind(str, enum.Enum):
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"


_CONVERSION_KINDS = {"s": Kind.STRING, "d": Kind.INTEGER, "f": Kind.FLOAT}


@dataclass(frozen=True)
class Placeholder:
    kind: Kind
    digits: int | None = None

    def render(self, value: Any) -> str:
        """Render *value* for this placeholder, raising TypeMismatch if it does not fit."""
        if self.kind is Kind.STRING:
            text = str(value)
            return text if self.digits is None else text[:self.digits]

        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise TypeMismatch(
                f"{self.kind.value} placeholder got {type(value).__name__} value {value!r}"
            )

        if self.kind is Kind.INTEGER:
            if isinstance(value, numbers.Integral):
                number = int(value)
            elif math.isfinite(value) and float(value).is_integer():
                number = int(value)
            else:
                raise TypeMismatch(f"integer placeholder got non-integral value {value!r}")
            digits = str(abs(number)).zfill(self.digits or 0)
            return f"-{digits}" if number < 0 else digits

        digits = DEFAULT_FLOAT_DIGITS if self.digits is None else self.digits
        return f"{float(value):.{digits}f}"


@dataclass(frozen=True)
class Template:
    """A parsed template: literal text segments interleaved with placeholders.

    ``segments`` always has ``len(placeholders) + 1`` entries, so rendering is
    ``segments[0] + v0 + segments[1] + v1 + ... + segments[-1]``.
    """

    text: str
    segments: tuple[str, ...]
    placeholders: tuple[Placeholder, ...]

    @classmethod
    def parse(cls, text: str) -> Template:
        segments: list[str] = []
        placeholders: list[Placeholder] = []
        current: list[str] = []
        pos = 0
        for match in _PLACEHOLDER_RE.finditer(text):
            current.append(text[pos:match.start()])
            pos = match.end()
            if match.group(1):
                current.append("%")
                continue
            digits = match.group(2)
            placeholders.append(Placeholder(
                kind=_CONVERSION_KINDS[match.group(3)],
                digits=int(digits) if digits is not None else None,
            ))
            segments.append("".join(current))
            current = []
        current.append(text[pos:])
        segments.append("".join(current))
        return cls(text=text, segments=tuple(segments), placeholders=tuple(placeholders))

    def __len__(self) -> int:
        return len(self.placeholders)

    def render(self, rendered_values: list[str]) -> str:
        """Join already-rendered values into the literal segments."""
        parts = [self.segments[0]]
        for value, segment in zip(rendered_values, self.segments[1:]):
            parts.append(value)
            parts.append(segment)
        return "".join(parts)
