"""
Task base class.

A task builds a fresh world, then generates a story into a knowledge
store: clauses are performed on the world, fed to the store, and
interleaved with questions whose support comes from the store.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import numpy as np

from storyfacts.knowledge.rules import Rule
from storyfacts.knowledge.store import Knowledge
from storyfacts.world.clause import Clause, Question
from storyfacts.world.world import World

logger = logging.getLogger(__name__)

# Properties that hold a single true value per entity
DEFAULT_EXCLUSIVE = ("is_in",)


@dataclass
class StoryResult:
    """One generated story with the world and knowledge it produced."""
    task: str
    world: World
    knowledge: Knowledge
    story: list[Any] = field(default_factory=list)

    @property
    def clauses(self) -> list[Clause]:
        return [entry for entry in self.story if not isinstance(entry, Question)]

    @property
    def questions(self) -> list[Question]:
        return [entry for entry in self.story if isinstance(entry, Question)]


class Task:
    """Base class for story tasks.

    Args:
        rng: Source of randomness. Pass a seeded generator for
            reproducible stories.
    """

    name = "task"
    exclusive: tuple[str, ...] = DEFAULT_EXCLUSIVE

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()

    def new_world(self) -> World:
        raise NotImplementedError

    def rules(self) -> list[Rule]:
        """Rules active for the whole story."""
        return []

    def generate_story(self, world: World, knowledge: Knowledge, story: list) -> list:
        raise NotImplementedError

    def generate(self) -> StoryResult:
        world = self.new_world()
        knowledge = Knowledge(world, rules=self.rules(), exclusive=self.exclusive)
        story = self.generate_story(world, knowledge, [])
        logger.debug(f"{self.name}: generated story with {len(story)} lines")
        return StoryResult(task=self.name, world=world, knowledge=knowledge, story=story)

    def choice(self, options):
        """Pick one element of a sequence with the task's generator."""
        return options[self.rng.integers(len(options))]
