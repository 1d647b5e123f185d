"""Label formatting: template + ordered fields → one hover label per feature."""

from eiremap.labels.errors import LabelError, MissingAttribute, TemplateMismatch, TypeMismatch
from eiremap.labels.formatter import Field, format_labels
from eiremap.labels.numbers import format_grouped, grouped
from eiremap.labels.template import Kind, Placeholder, Template

__all__ = [
    "Field",
    "Kind",
    "LabelError",
    "MissingAttribute",
    "Placeholder",
    "Template",
    "TemplateMismatch",
    "TypeMismatch",
    "format_grouped",
    "format_labels",
    "grouped",
]
