"""
Fact ledger for a single entity at a single story step.

Each property maps to an ordered list of facts. New facts are appended;
conflict resolution removes facts rather than reordering them. Properties
listed as exclusive hold at most one true fact at a time.
"""

import logging
from typing import Any, Iterable, Iterator, Optional

from storyfacts.knowledge.errors import AmbiguousValue
from storyfacts.knowledge.models import (
    EMPTY_SUPPORT,
    Fact,
    Support,
    as_support,
    union_support,
    value_name,
)

logger = logging.getLogger(__name__)


class EntityProperties:
    """Everything known about one entity, keyed by property name.

    Example, John is not in the kitchen:

        ledger.add("is_in", kitchen, False, {clause})
    """

    def __init__(self, exclusive: Iterable[str] = ()):
        self.exclusive = frozenset(exclusive)
        self._facts: dict[str, list[Fact]] = {}

    # ------------------------------------------------------------------ #
    # Updates
    # ------------------------------------------------------------------ #

    def add(self, property: str, value: Any, truth_value: bool = True,
            support: Optional[Iterable[Any]] = None) -> Fact:
        """Record a fact, dropping facts it contradicts.

        Any earlier fact about the same value is removed. For exclusive
        properties a new true fact also retracts every other true fact.
        """
        exclusive = property in self.exclusive
        kept = []
        for fact in self._facts.get(property, []):
            if fact.value == value:
                continue
            if exclusive and truth_value and fact.truth_value:
                logger.debug(f"Retracting {property}={value_name(fact.value)} in favour of {value_name(value)}")
                continue
            kept.append(fact)
        new_fact = Fact(value, truth_value, as_support(support))
        kept.append(new_fact)
        self._facts[property] = kept
        return new_fact

    def set(self, property: str, value: Any, truth_value: bool = True,
            support: Optional[Iterable[Any]] = None) -> Fact:
        """Replace everything known about ``property`` with a single fact."""
        new_fact = Fact(value, truth_value, as_support(support))
        self._facts[property] = [new_fact]
        return new_fact

    def merge(self, property: str, facts: Iterable[Fact],
              support: Optional[Iterable[Any]] = None) -> None:
        """Append facts, then collapse the property to its first true fact.

        Used to fold what is known about one entity into another. When no
        true fact results, all facts are kept.
        """
        self.rawadd(property, facts, support)
        true_facts = [f for f in self._facts[property] if f.truth_value]
        if true_facts:
            self._facts[property] = [true_facts[0]]

    def rawset(self, property: str, facts: Iterable[Fact],
               support: Optional[Iterable[Any]] = None) -> None:
        """Replace the facts of a property without conflict resolution.

        ``support`` is added to the support of every incoming fact.
        """
        self._facts[property] = [f.with_support(support) for f in facts]

    def rawadd(self, property: str, facts: Iterable[Fact],
               support: Optional[Iterable[Any]] = None) -> None:
        """Append facts without conflict resolution."""
        self._facts.setdefault(property, []).extend(f.with_support(support) for f in facts)

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def is_true(self, property: str, value: Any, return_support: bool = False):
        """Whether ``property`` is known to have ``value``."""
        truth_value = False
        support = EMPTY_SUPPORT
        for fact in self._facts.get(property, ()):
            if fact.value == value and fact.truth_value:
                truth_value = True
                support = fact.support
                break
        if return_support:
            return truth_value, support
        return truth_value

    def is_false(self, property: str, value: Any, return_support: bool = False):
        """Whether ``property`` is known not to have ``value``.

        For exclusive properties any other true value implies falsity.
        """
        truth_value = False
        support = EMPTY_SUPPORT
        exclusive = property in self.exclusive
        for fact in self._facts.get(property, ()):
            if fact.value == value and not fact.truth_value:
                truth_value = True
                support = fact.support
            elif exclusive and fact.value != value and fact.truth_value:
                truth_value = True
                support = fact.support
        if return_support:
            return truth_value, support
        return truth_value

    def get_truth_value(self, property: str, value: Any, return_support: bool = False):
        """True, False, or None when nothing is known about ``value``."""
        is_true, true_support = self.is_true(property, value, return_support=True)
        is_false, false_support = self.is_false(property, value, return_support=True)
        if not (is_true or is_false):
            if return_support:
                return None, EMPTY_SUPPORT
            return None
        truth_value = bool(is_true)
        if return_support:
            return truth_value, union_support(true_support, false_support)
        return truth_value

    def get_value(self, property: str, return_support: bool = False):
        """The single true value of a property, or None if unknown."""
        values, supports = self.get_values(property, return_support=True)
        if len(values) > 1:
            raise AmbiguousValue(property, values)
        value = values[0] if values else None
        support = supports[0] if supports else EMPTY_SUPPORT
        if return_support:
            return value, support
        return value

    def get_values(self, property: str, return_support: bool = False):
        """All true values of a property, in recording order."""
        return self._select(property, True, return_support)

    def get_non_values(self, property: str, return_support: bool = False):
        """All values the property is recorded not to have."""
        return self._select(property, False, return_support)

    def get_support(self, property: str, value: Any = None) -> Optional[Support]:
        """Support of the only fact of a property, or of the fact for ``value``."""
        facts = self._facts.get(property)
        if not facts:
            return None
        if value is None:
            if len(facts) > 1:
                raise AmbiguousValue(property, [f.value for f in facts])
            return facts[0].support
        for fact in facts:
            if fact.value == value:
                return fact.support
        return None

    def _select(self, property: str, truth_value: bool, return_support: bool):
        values = []
        supports = []
        for fact in self._facts.get(property, ()):
            if fact.truth_value == truth_value:
                values.append(fact.value)
                supports.append(fact.support)
        if return_support:
            return values, supports
        return values

    # ------------------------------------------------------------------ #
    # Inspection
    # ------------------------------------------------------------------ #

    def facts(self, property: str) -> tuple[Fact, ...]:
        """Facts recorded for a property, oldest first."""
        return tuple(self._facts.get(property, ()))

    def properties(self) -> Iterator[str]:
        return iter(self._facts)

    def items(self) -> Iterator[tuple[str, tuple[Fact, ...]]]:
        for property, facts in self._facts.items():
            yield property, tuple(facts)

    def copy(self) -> "EntityProperties":
        """Structural copy: new fact lists, shared immutable facts."""
        clone = EntityProperties(self.exclusive)
        clone._facts = {property: list(facts) for property, facts in self._facts.items()}
        return clone

    def __contains__(self, property: str) -> bool:
        return bool(self._facts.get(property))

    def __eq__(self, other) -> bool:
        if not isinstance(other, EntityProperties):
            return NotImplemented
        return self._facts == other._facts

    def __repr__(self) -> str:
        return f"EntityProperties({sorted(self._facts)})"
