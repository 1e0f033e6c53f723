"""
Knowledge - temporal knowledge store.

Keeps one snapshot (KnowledgeTable) per processed clause. Each snapshot
starts as a structural copy of its predecessor and is then updated by the
clause's action and by every applicable registered rule. Earlier snapshots
are never touched again, so any story step can be queried after the fact.
"""

import logging
from typing import Any, Iterable, Optional, Sequence

from storyfacts.knowledge.models import EMPTY_SUPPORT, ClauseKind, Support, union_support
from storyfacts.knowledge.rules import Rule
from storyfacts.knowledge.table import KnowledgeTable

logger = logging.getLogger(__name__)


class Knowledge:
    """Ordered sequence of knowledge snapshots, one per story clause.

    Args:
        world: World handed to actions and rules when they run.
        rules: Rules active from the first clause on.
        exclusive: Properties that hold at most one true value per entity,
            e.g. ``is_in``: John in the kitchen means he is not in the
            bathroom.
    """

    def __init__(
        self,
        world: Any = None,
        rules: Optional[Iterable[Rule]] = None,
        exclusive: Iterable[str] = (),
    ):
        self.t = 0
        self.world = world
        self.rules: list[Rule] = list(rules or [])
        self.exclusive = frozenset(exclusive)
        self._initial = KnowledgeTable(self.exclusive)
        self._snapshots: list[KnowledgeTable] = []
        self._story: list[Any] = []

    # ------------------------------------------------------------------ #
    # Updates
    # ------------------------------------------------------------------ #

    def update(self, clause: Any) -> KnowledgeTable:
        """Process one clause and return the resulting snapshot.

        The snapshot is only committed once the action and all rule
        firings have succeeded; if any of them raises, the store is left
        exactly as it was.
        """
        t = self.t + 1
        table = self.current().copy()
        story = tuple(self._story) + (clause,)

        if clause.kind is ClauseKind.RULE:
            self.rules.append(clause.rule)
            logger.debug(f"t={t}: registered rule {clause.rule!r}")
        else:
            clause.action.update_knowledge(self.world, table, clause, clause.actor, *clause.args)
            self._apply_rules(t, clause, table, story)

        self._snapshots.append(table)
        self._story.append(clause)
        self.t = t
        return table

    def _apply_rules(self, t: int, clause: Any, table: KnowledgeTable,
                     story: Sequence[Any]) -> None:
        for rule in self.rules:
            if rule.is_applicable(clause, table, story):
                logger.debug(f"t={t}: rule {rule!r} fired on {clause!r}")
                rule.perform(self.world, clause)
                rule.update_knowledge(self.world, table, clause)

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def current(self) -> KnowledgeTable:
        """The latest snapshot.

        Before the first clause this is the initial table; anything written
        to it is carried into the first snapshot.
        """
        if not self._snapshots:
            return self._initial
        return self._snapshots[-1]

    def at(self, t: int) -> KnowledgeTable:
        """The snapshot after clause ``t`` (1-based)."""
        if not 1 <= t <= self.t:
            raise IndexError(f"no snapshot at t={t} (story has {self.t} steps)")
        return self._snapshots[t - 1]

    @property
    def story(self) -> tuple:
        """Every clause processed so far, in order."""
        return tuple(self._story)

    def get_value_history(self, entity: Any, property: str,
                          resolve_location: bool = True) -> tuple[list, list[Support]]:
        """Distinct consecutive values of ``property`` over the whole story.

        With ``resolve_location``, a value that is an actor is replaced by
        that actor's own value, so an object carried by John is reported
        where John is.

        Returns:
            Tuple of (values, supports), parallel lists.
        """
        values: list = []
        supports: list[Support] = []
        for table in self._snapshots:
            value, support = value_at(table, entity, property, resolve_location)
            if value is not None and (not values or values[-1] != value):
                values.append(value)
                supports.append(support)
        return values, supports

    # ------------------------------------------------------------------ #
    # History and export
    # ------------------------------------------------------------------ #

    def augment_with_value_histories(self, entities: Iterable[Any], property: str,
                                     resolve_location: bool = False) -> dict:
        """Materialize value histories as record entities. See ``history``."""
        from storyfacts.knowledge.history import augment_with_value_histories
        return augment_with_value_histories(self, entities, property, resolve_location)

    def describe(self, t: int) -> str:
        from storyfacts.knowledge.export import describe
        return describe(self, t)

    def describe_all(self) -> str:
        from storyfacts.knowledge.export import describe_all
        return describe_all(self)

    def describe_graph(self, t: int) -> str:
        from storyfacts.knowledge.export import describe_graph
        return describe_graph(self, t)

    def __len__(self) -> int:
        return self.t


def value_at(table: KnowledgeTable, entity: Any, property: str,
             resolve_location: bool = True) -> tuple[Any, Support]:
    """The true value of ``property`` for ``entity`` in one snapshot.

    Returns (None, empty support) when nothing is known. Never creates
    ledgers in ``table``.
    """
    ledger = table.lookup(entity)
    if ledger is None:
        return None, EMPTY_SUPPORT
    value, support = ledger.get_value(property, return_support=True)
    if resolve_location and value is not None and getattr(value, "is_actor", False):
        carrier = table.lookup(value)
        if carrier is None:
            return None, support
        value, carrier_support = carrier.get_value(property, return_support=True)
        support = union_support(support, carrier_support)
    return value, support
