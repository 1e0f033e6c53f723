"""
Actions available to clauses.

Each action validates and performs itself against the world, and knows
which facts to record in the knowledge store when a clause using it is
processed. ``set_pos`` and ``set_dir`` only build the world and never
appear in stories.
"""

from storyfacts.knowledge.models import union_support

OPPOSITE_DIRECTIONS = {
    "n": "s", "ne": "sw", "e": "w", "se": "nw", "s": "n",
    "sw": "ne", "w": "e", "nw": "se", "u": "d", "d": "u",
}


class InvalidAction(ValueError):
    """An action was performed whose preconditions do not hold."""


class Action:
    """Base action. Subclasses override the three hooks as needed."""

    name = "action"

    def is_valid(self, world, actor, *args) -> bool:
        return True

    def perform(self, world, actor, *args) -> None:
        raise NotImplementedError(f"{self.name} cannot be performed")

    def update_knowledge(self, world, knowledge, clause, actor, *args) -> None:
        """Record what the clause tells the reader. No-op by default."""

    def __repr__(self) -> str:
        return f"<action {self.name}>"


class SetAction(Action):
    """God states a relation directly, e.g. the kitchen is north of the garden."""

    name = "set"

    def is_valid(self, world, actor, entity=None, relation=None, value=None) -> bool:
        return bool(actor.is_god) and entity is not None and relation is not None

    def perform(self, world, actor, entity, relation, value) -> None:
        world.set_state(entity, relation, value)

    def update_knowledge(self, world, knowledge, clause, actor, entity, relation, value) -> None:
        knowledge.ledger(entity).add(relation, value, clause.truth_value, {clause})


class Teleport(Action):
    name = "teleport"

    def is_valid(self, world, actor, location=None) -> bool:
        return (
            bool(actor.is_actor)
            and location is not None
            and bool(location.is_location)
            and world.location_of(actor) is not location
        )

    def perform(self, world, actor, location) -> None:
        world.set_state(actor, "is_in", location)

    def update_knowledge(self, world, knowledge, clause, actor, location) -> None:
        if clause.truth_value:
            knowledge.ledger(actor).set("is_in", location, True, {clause})
        else:
            knowledge.ledger(actor).add("is_in", location, False, {clause})


class Get(Action):
    name = "get"

    def is_valid(self, world, actor, thing=None) -> bool:
        return (
            bool(actor.is_actor)
            and thing is not None
            and bool(thing.is_gettable)
            and world.get_state(thing, "is_in") is not None
            and world.get_state(thing, "is_in") is world.location_of(actor)
        )

    def perform(self, world, actor, thing) -> None:
        world.set_state(thing, "is_in", actor)

    def update_knowledge(self, world, knowledge, clause, actor, thing) -> None:
        knowledge.ledger(thing).set("is_in", actor, True, {clause})


class Drop(Action):
    name = "drop"

    def is_valid(self, world, actor, thing=None) -> bool:
        return (
            bool(actor.is_actor)
            and thing is not None
            and world.get_state(thing, "is_in") is actor
            and world.location_of(actor) is not None
        )

    def perform(self, world, actor, thing) -> None:
        world.set_state(thing, "is_in", world.location_of(actor))

    def update_knowledge(self, world, knowledge, clause, actor, thing) -> None:
        # The object ends up wherever the reader last saw the actor
        actor_ledger = knowledge.lookup(actor)
        location, support = (None, None)
        if actor_ledger is not None:
            location, support = actor_ledger.get_value("is_in", return_support=True)
        if location is None:
            # Where the actor is was never told; only the carrier is known to change
            knowledge.ledger(thing).add("is_in", actor, False, {clause})
            return
        knowledge.ledger(thing).set("is_in", location, True, union_support({clause}, support))


class Give(Action):
    name = "give"

    def is_valid(self, world, actor, thing=None, recipient=None) -> bool:
        return (
            bool(actor.is_actor)
            and recipient is not None
            and bool(recipient.is_actor)
            and recipient is not actor
            and thing is not None
            and world.get_state(thing, "is_in") is actor
            and world.location_of(actor) is world.location_of(recipient)
        )

    def perform(self, world, actor, thing, recipient) -> None:
        world.set_state(thing, "is_in", recipient)

    def update_knowledge(self, world, knowledge, clause, actor, thing, recipient) -> None:
        knowledge.ledger(thing).set("is_in", recipient, True, {clause})


class SetPos(Action):
    name = "set_pos"

    def is_valid(self, world, actor, entity=None, x=0, y=0) -> bool:
        return bool(actor.is_god) and entity is not None

    def perform(self, world, actor, entity, x, y) -> None:
        world.set_state(entity, "pos", (x, y))


class SetDir(Action):
    """Place ``other`` in ``direction`` of ``entity`` (and vice versa)."""

    name = "set_dir"

    def is_valid(self, world, actor, entity=None, direction=None, other=None) -> bool:
        return (
            bool(actor.is_god)
            and direction in OPPOSITE_DIRECTIONS
            and entity is not None and bool(entity.is_location)
            and other is not None and bool(other.is_location)
        )

    def perform(self, world, actor, entity, direction, other) -> None:
        world.set_state(entity, direction, other)
        world.set_state(other, OPPOSITE_DIRECTIONS[direction], entity)


set_ = SetAction()
teleport = Teleport()
get = Get()
drop = Drop()
give = Give()
set_pos = SetPos()
set_dir = SetDir()

ACTIONS: dict[str, Action] = {
    action.name: action
    for action in (set_, teleport, get, drop, give, set_pos, set_dir)
}


def lookup(name: str) -> Action:
    try:
        return ACTIONS[name]
    except KeyError:
        raise InvalidAction(f"unknown action '{name}'") from None
