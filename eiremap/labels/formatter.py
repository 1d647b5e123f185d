"""Turn feature attributes into hover labels.

Example:

    >>> format_labels(
    ...     [{"LEA": "Dublin South", "Pop2016": 12345}],
    ...     "<strong>%s</strong><br>Pop: %s",
    ...     [Field("LEA"), Field("Pop2016", transform=grouped(0))],
    ... )
    ['<strong>Dublin South</strong><br>Pop: 12,345']
"""

from __future__ import annotations

import html
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Callable

import pandas as pd

from eiremap.features import iter_attributes
from eiremap.labels.errors import MissingAttribute, TemplateMismatch, TypeMismatch
from eiremap.labels.template import Kind, Template

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Field:
    """Pulls one attribute off a feature, optionally transforming it.

    ``kind`` is optional; when set it must match the kind of the placeholder
    this field fills.
    """

    attribute: str
    transform: Callable[[Any], Any] | None = None
    kind: Kind | None = None

    def __post_init__(self):
        if self.kind is None:
            return
        try:
            kind = Kind(self.kind)
        except ValueError:
            known = ", ".join(k.value for k in Kind)
            raise TypeMismatch(
                f"Field {self.attribute!r} has unknown kind {self.kind!r} (expected one of {known})"
            ) from None
        object.__setattr__(self, "kind", kind)

    def extract(self, attributes: Mapping[str, Any], index: int | None = None) -> Any:
        try:
            value = attributes[self.attribute]
        except KeyError:
            raise MissingAttribute(self.attribute, index) from None
        if _is_null(value):
            raise MissingAttribute(self.attribute, index)
        if self.transform is not None:
            value = self.transform(value)
        return value


def _is_null(value: Any) -> bool:
    return value is None or (pd.api.types.is_scalar(value) and pd.isna(value))


def format_labels(
    features: Any,
    template: str | Template,
    fields: Sequence[Field],
    escape_values: bool = False,
) -> list[str]:
    """Build one label per feature by substituting *fields* into *template*.

    Labels come back in feature order, one per feature. Markup in the template
    is kept verbatim; substituted values are HTML-escaped only when
    *escape_values* is set.

    Raises TemplateMismatch, MissingAttribute or TypeMismatch. Nothing is
    skipped: the first bad feature fails the whole call.
    """
    if not isinstance(template, Template):
        template = Template.parse(template)

    if len(template) != len(fields):
        raise TemplateMismatch(
            f"Template has {len(template)} placeholders but {len(fields)} fields were given"
        )

    for pos, (placeholder, fld) in enumerate(zip(template.placeholders, fields)):
        if fld.kind is not None and fld.kind is not placeholder.kind:
            raise TypeMismatch(
                f"Field {pos} ({fld.attribute!r}) is {fld.kind.value} "
                f"but placeholder {pos} is {placeholder.kind.value}"
            )

    labels = []
    for index, attributes in enumerate(iter_attributes(features)):
        rendered = []
        for placeholder, fld in zip(template.placeholders, fields):
            try:
                text = placeholder.render(fld.extract(attributes, index))
            except TypeMismatch as exc:
                raise TypeMismatch(f"Feature {index}, attribute {fld.attribute!r}: {exc}") from None
            rendered.append(html.escape(text) if escape_values else text)
        labels.append(template.render(rendered))

    logger.debug("Formatted %d labels with template %r", len(labels), template.text)
    return labels
