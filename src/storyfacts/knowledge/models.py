"""
Core data models for the temporal knowledge store.

A fact records that a property of an entity has (or does not have) a
value, together with the support: the set of story clauses whose truth
justifies it.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterable, Optional

Support = frozenset

EMPTY_SUPPORT: Support = frozenset()


def as_support(support: Optional[Iterable[Any]]) -> Support:
    """Normalize None, sets and lists of clauses into a frozenset."""
    if support is None:
        return EMPTY_SUPPORT
    if isinstance(support, frozenset):
        return support
    return frozenset(support)


def union_support(*supports: Optional[Iterable[Any]]) -> Support:
    """Union of several supports, ignoring missing ones."""
    result: set = set()
    for support in supports:
        if support:
            result.update(support)
    return frozenset(result)


@dataclass(frozen=True)
class Fact:
    """A (value, truth_value, support) triple recorded under a property.

    Facts are immutable. Ledgers replace facts rather than edit them, so
    snapshots can share Fact objects without leaking later changes into
    earlier story steps.
    """
    value: Any
    truth_value: bool = True
    support: Support = field(default=EMPTY_SUPPORT)

    def __post_init__(self):
        if not isinstance(self.support, frozenset):
            object.__setattr__(self, "support", as_support(self.support))

    def with_support(self, support: Optional[Iterable[Any]]) -> "Fact":
        """Return a copy whose support also includes ``support``."""
        if not support:
            return self
        return replace(self, support=union_support(self.support, support))


def value_name(value: Any) -> str:
    """Display name of a fact value: the entity name, or str() otherwise."""
    return getattr(value, "name", None) or str(value)


class ClauseKind(Enum):
    """Tag carried by every clause submitted to the knowledge store."""
    EVENT = "event"   # A world event handled by its action
    RULE = "rule"     # Registration of a standing deduction rule
