"""Deduction rules over world relations."""

from storyfacts.knowledge.models import ClauseKind, union_support
from storyfacts.knowledge.rules import Rule
from storyfacts.world.actions import OPPOSITE_DIRECTIONS


class InverseDirectionRule(Rule):
    """From "b is <dir> of a" derive "a is <opposite dir> of b".

    The derived fact is supported by whatever supports the stated one.
    """

    name = "inverse_direction"

    def is_applicable(self, clause, knowledge, story) -> bool:
        return (
            clause.kind is ClauseKind.EVENT
            and clause.action.name == "set"
            and clause.truth_value
            and len(clause.args) == 3
            and clause.args[1] in OPPOSITE_DIRECTIONS
        )

    def perform(self, world, clause) -> None:
        entity, direction, other = clause.args
        world.set_state(other, OPPOSITE_DIRECTIONS[direction], entity)

    def update_knowledge(self, world, knowledge, clause) -> None:
        entity, direction, other = clause.args
        support = knowledge.ledger(entity).get_support(direction, other)
        knowledge.ledger(other).add(
            OPPOSITE_DIRECTIONS[direction], entity, True, union_support(support)
        )
