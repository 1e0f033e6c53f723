"""
Two-hop direction reasoning.

Three locations lie on a line. The story states two adjacent relations;
the question asks about one of them, possibly in the opposite direction,
so answering needs the inverse-direction rule.
"""

from storyfacts.knowledge.rules import Rule
from storyfacts.world import actions
from storyfacts.world.actions import OPPOSITE_DIRECTIONS
from storyfacts.world.clause import Clause, Question
from storyfacts.world.rules import InverseDirectionRule
from storyfacts.world.world import World
from storyfacts.tasks.base import Task

LOCATION_OPTIONS = ("bedroom", "bathroom", "kitchen", "office", "garden", "hallway")


class IsDir(Task):
    name = "is_dir"

    def new_world(self) -> World:
        world = World()
        names = self.rng.choice(len(LOCATION_OPTIONS), size=3, replace=False)
        self.locations = [
            world.create_entity(LOCATION_OPTIONS[i], {"is_location": True}) for i in names
        ]

        # Locations are laid out along this direction
        self.dir = self.choice(("n", "e"))
        for i, location in enumerate(self.locations):
            offset = i - 1
            world.perform_action(
                "set_pos", world.god(), location,
                offset if self.dir == "e" else 0,
                offset if self.dir == "n" else 0,
            )
            if i > 0:
                world.perform_action("set_dir", world.god(), self.locations[i - 1], self.dir, location)
        return world

    def rules(self) -> list[Rule]:
        return [InverseDirectionRule()]

    def generate_story(self, world, knowledge, story):
        first, middle, last = self.locations
        statements = [
            Clause(world, True, world.god(), actions.set_, first, self.dir, middle),
            Clause(world, True, world.god(), actions.set_, middle, self.dir, last),
        ]
        # Give the two relations in either order
        if self.rng.integers(2):
            statements.reverse()

        for clause in statements:
            clause.perform()
            story.append(clause)
            knowledge.update(clause)

        ask_dir = self.choice((self.dir, OPPOSITE_DIRECTIONS[self.dir]))
        target = last if ask_dir == self.dir else first
        question = Clause(world, True, world.god(), actions.set_, middle, ask_dir, target)

        # The store knows which statement (stated or inverted) answers it
        _, support = knowledge.current().lookup(middle).is_true(ask_dir, target, return_support=True)
        story.append(Question("eval", question, support))
        return story
