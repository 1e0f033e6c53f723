"""Errors raised by the knowledge store."""

from typing import Any, Optional

from storyfacts.knowledge.models import value_name


class KnowledgeError(Exception):
    """Base class for knowledge store errors."""


class AmbiguousValue(KnowledgeError, ValueError):
    """A single value was requested but several facts compete for it.

    Raised by ``get_value`` when more than one true fact exists and by
    ``get_support`` when no value is given and more than one fact exists.
    Use the plural accessors for multi-valued properties.
    """

    def __init__(self, entity_property: str, values: Optional[list[Any]] = None):
        self.entity_property = entity_property
        self.values = list(values or [])
        names = ", ".join(value_name(v) for v in self.values)
        super().__init__(f"property '{entity_property}' has multiple values: [{names}]")
