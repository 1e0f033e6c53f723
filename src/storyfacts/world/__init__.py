"""
Story world: entities, actions, clauses and deduction rules.
"""

from storyfacts.world.actions import ACTIONS, OPPOSITE_DIRECTIONS, Action, InvalidAction
from storyfacts.world.clause import Clause, Question
from storyfacts.world.entity import Entity
from storyfacts.world.rules import InverseDirectionRule
from storyfacts.world.world import World

__all__ = [
    "ACTIONS",
    "Action",
    "Clause",
    "Entity",
    "InvalidAction",
    "InverseDirectionRule",
    "OPPOSITE_DIRECTIONS",
    "Question",
    "World",
]
