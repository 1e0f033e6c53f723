"""
Story clauses and questions.

A clause is one event: an actor performing an action on some arguments,
stated as true or false. Questions point at a clause and carry the set of
story clauses that support their answer.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

import numpy as np

from storyfacts.knowledge.models import ClauseKind, value_name
from storyfacts.world.actions import Action

logger = logging.getLogger(__name__)

MAX_SAMPLE_ATTEMPTS = 200


class Clause:
    """A single world event submitted to the knowledge store."""

    kind = ClauseKind.EVENT

    def __init__(self, world, truth_value: bool, actor, action: Action, *args: Any):
        self.world = world
        self.truth_value = truth_value
        self.actor = actor
        self.action = action
        self.args = tuple(args)

    def is_valid(self) -> bool:
        return self.action.is_valid(self.world, self.actor, *self.args)

    def perform(self) -> None:
        """Apply the event to the world. False statements change nothing."""
        if self.truth_value:
            self.action.perform(self.world, self.actor, *self.args)

    @classmethod
    def sample_valid(
        cls,
        world,
        truth_values: Sequence[bool],
        actors: Sequence[Any],
        actions: Sequence[Action],
        *arg_pools: Sequence[Any],
        rng: np.random.Generator,
        max_attempts: int = MAX_SAMPLE_ATTEMPTS,
    ) -> Optional["Clause"]:
        """Draw random clauses until a valid one turns up.

        Returns None when no valid clause was found within ``max_attempts``.
        """
        pools = [truth_values, actors, actions, *arg_pools]
        if any(len(pool) == 0 for pool in pools):
            return None
        for _ in range(max_attempts):
            truth_value, actor, action, *args = [pool[rng.integers(len(pool))] for pool in pools]
            clause = cls(world, bool(truth_value), actor, action, *args)
            if clause.is_valid():
                return clause
        logger.debug(f"No valid clause for {[a.name for a in actions]} after {max_attempts} attempts")
        return None

    def __repr__(self) -> str:
        words = [value_name(self.actor), self.action.name, *(value_name(a) for a in self.args)]
        text = " ".join(words)
        return text if self.truth_value else f"not {text}"


@dataclass(eq=False)
class Question:
    """A question about ``clause``; ``kind`` says how it is asked (e.g. eval)."""
    kind: str
    clause: Clause
    support: frozenset = field(default_factory=frozenset)

    def __repr__(self) -> str:
        return f"{self.kind}? {self.clause!r}"
