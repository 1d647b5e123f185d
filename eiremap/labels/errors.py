"""Errors raised while formatting labels."""

from __future__ import annotations


class LabelError(Exception):
    """Base class for every label formatting failure."""


class TemplateMismatch(LabelError, ValueError):
    """Placeholder count in the template differs from the number of fields."""


class MissingAttribute(LabelError, KeyError):
    """A field names an attribute that a feature does not carry."""

    def __init__(self, attribute: str, index: int | None = None):
        self.attribute = attribute
        self.index = index
        where = f" on feature {index}" if index is not None else ""
        super().__init__(f"Missing attribute {attribute!r}{where}")

    def __str__(self) -> str:
        return self.args[0]


class TypeMismatch(LabelError, TypeError):
    """An extracted value does not fit the kind of its placeholder."""
