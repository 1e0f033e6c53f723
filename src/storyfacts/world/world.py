"""
World - the registry and ground-truth state of a story world.

The knowledge store tracks what the reader has been told; the world
tracks what is actually the case, which actions consult to decide
whether a clause is legal.
"""

import logging
from importlib import resources
from pathlib import Path
from typing import Any, Optional, Union

from storyfacts.world import actions
from storyfacts.world.actions import InvalidAction
from storyfacts.world.entity import Entity

logger = logging.getLogger(__name__)

GOD_NAME = "god"
BASIC_WORLD = "world_basic.txt"


class World:
    """Entities by name plus their mutable world state.

    World files hold one command per line, ``#`` starts a comment:

        create John is_actor
        set John is_in kitchen
    """

    def __init__(self):
        self.entities: dict[str, Entity] = {}
        self._state: dict[Entity, dict[str, Any]] = {}
        self._god = self.create_entity(GOD_NAME, {"is_god": True})

    @classmethod
    def basic(cls) -> "World":
        """World with the bundled actors, locations and objects."""
        world = cls()
        source = resources.files("storyfacts.world").joinpath("worlds").joinpath(BASIC_WORLD)
        world.load_lines(source.read_text(encoding="utf-8").splitlines(), BASIC_WORLD)
        return world

    # ------------------------------------------------------------------ #
    # Entities
    # ------------------------------------------------------------------ #

    def create_entity(self, name: str, properties: Optional[dict[str, Any]] = None) -> Entity:
        if name in self.entities:
            raise ValueError(f"entity '{name}' already exists")
        entity = Entity(name, properties)
        self.entities[name] = entity
        self._state[entity] = {}
        return entity

    def get(self, name: str) -> Entity:
        try:
            return self.entities[name]
        except KeyError:
            raise KeyError(f"unknown entity '{name}'") from None

    def god(self) -> Entity:
        return self._god

    def get_actors(self) -> list[Entity]:
        return [e for e in self.entities.values() if e.is_actor]

    def get_locations(self) -> list[Entity]:
        return [e for e in self.entities.values() if e.is_location]

    def get_objects(self) -> list[Entity]:
        return [e for e in self.entities.values() if e.is_gettable]

    # ------------------------------------------------------------------ #
    # State
    # ------------------------------------------------------------------ #

    def get_state(self, entity: Entity, key: str) -> Any:
        return self._state.get(entity, {}).get(key)

    def set_state(self, entity: Entity, key: str, value: Any) -> None:
        self._state.setdefault(entity, {})[key] = value

    def location_of(self, entity: Entity) -> Optional[Entity]:
        """The location an entity is in, following carriers."""
        seen = set()
        place = self.get_state(entity, "is_in")
        while place is not None and not place.is_location and place not in seen:
            seen.add(place)
            place = self.get_state(place, "is_in")
        if place is not None and place.is_location:
            return place
        return None

    def perform_action(self, name: str, actor: Entity, *args: Any) -> None:
        """Perform a named action directly on the world, e.g. during setup."""
        action = actions.lookup(name)
        if not action.is_valid(self, actor, *args):
            raise InvalidAction(f"{actor.name} cannot {name} {' '.join(map(str, args))}")
        action.perform(self, actor, *args)

    # ------------------------------------------------------------------ #
    # Loading
    # ------------------------------------------------------------------ #

    def load(self, path: Union[str, Path]) -> None:
        path = Path(path)
        self.load_lines(path.read_text(encoding="utf-8").splitlines(), str(path))

    def load_lines(self, lines: list[str], source: str = "<world>") -> None:
        for lineno, raw in enumerate(lines, 1):
            line = raw.split("#", 1)[0].strip()
            if not line:
                continue
            command, *words = line.split()
            if command == "create" and words:
                name, flags = words[0], words[1:]
                self.create_entity(name, {flag: True for flag in flags})
            elif command == "set" and len(words) == 3:
                entity, relation, value = words
                self.perform_action("set", self._god, self.get(entity), relation, self.get(value))
            else:
                raise ValueError(f"{source}:{lineno}: cannot parse '{raw.strip()}'")
        logger.debug(f"Loaded {len(self.entities)} entities from {source}")
