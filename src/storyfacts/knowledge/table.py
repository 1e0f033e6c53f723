"""
Snapshot table: the knowledge state of every entity at one story step.
"""

from typing import Any, Iterable, Iterator, Optional

from storyfacts.knowledge.properties import EntityProperties


class KnowledgeTable:
    """Sparse mapping from entity to its fact ledger.

    Ledgers are only ever created by ``ledger()``; plain reads through
    ``lookup()`` or ``in`` never materialize an entity.
    """

    def __init__(self, exclusive: Iterable[str] = ()):
        self.exclusive = frozenset(exclusive)
        self._ledgers: dict[Any, EntityProperties] = {}

    def ledger(self, entity: Any) -> EntityProperties:
        """Get the ledger of ``entity``, creating an empty one if needed."""
        ledger = self._ledgers.get(entity)
        if ledger is None:
            ledger = EntityProperties(self.exclusive)
            self._ledgers[entity] = ledger
        return ledger

    def lookup(self, entity: Any) -> Optional[EntityProperties]:
        """Get the ledger of ``entity`` without creating it."""
        return self._ledgers.get(entity)

    def find(self, property: str, value: Any = None) -> list[Any]:
        """Entities whose single true value of ``property`` is ``value``.

        With ``value`` omitted, every entity with a known value matches.
        """
        matches = []
        for entity, ledger in self._ledgers.items():
            known = ledger.get_value(property)
            if known is not None and (value is None or known == value):
                matches.append(entity)
        return matches

    def copy(self) -> "KnowledgeTable":
        clone = KnowledgeTable(self.exclusive)
        clone._ledgers = {entity: ledger.copy() for entity, ledger in self._ledgers.items()}
        return clone

    def items(self) -> Iterator[tuple[Any, EntityProperties]]:
        return iter(list(self._ledgers.items()))

    def __contains__(self, entity: Any) -> bool:
        return entity in self._ledgers

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._ledgers))

    def __len__(self) -> int:
        return len(self._ledgers)
