"""
Rule interface for forward-chaining deductions.

Rules are registered with the store by submitting a ``RuleClause``. After
each event the store asks every rule, in registration order, whether it
applies; applicable rules act on the world and then on the snapshot.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Sequence

from storyfacts.knowledge.models import ClauseKind
from storyfacts.knowledge.table import KnowledgeTable


class Rule(ABC):
    """A standing deduction that fires on matching events."""

    name: str = "rule"

    @abstractmethod
    def is_applicable(self, clause: Any, knowledge: KnowledgeTable,
                      story: Sequence[Any]) -> bool:
        """Whether the rule fires for ``clause``.

        ``story`` holds every clause processed so far, ``clause`` last.
        """

    def perform(self, world: Any, clause: Any) -> None:
        """Apply the rule's consequences to the world. No-op by default."""

    @abstractmethod
    def update_knowledge(self, world: Any, knowledge: KnowledgeTable, clause: Any) -> None:
        """Record the derived facts in the current snapshot."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


@dataclass(eq=False)
class RuleClause:
    """Story clause that registers ``rule`` with the knowledge store."""
    rule: Rule
    kind: ClauseKind = field(default=ClauseKind.RULE, init=False)

    def __repr__(self) -> str:
        return f"rule {self.rule.name}"
