"""Entities of a story world."""

from typing import Any, Optional


class Entity:
    """A named thing in the world with a fixed set of capability flags.

    Flags are read as attributes: ``entity.is_actor`` is False unless the
    entity was created with ``{"is_actor": True}``. Entities compare and
    hash by identity.
    """

    __slots__ = ("name", "properties")

    def __init__(self, name: str, properties: Optional[dict[str, Any]] = None):
        self.name = name
        self.properties = dict(properties or {})

    def __getattr__(self, attr: str) -> Any:
        if attr.startswith("is_"):
            return self.properties.get(attr, False)
        raise AttributeError(f"{type(self).__name__!s} has no attribute {attr!r}")

    def __repr__(self) -> str:
        return f"Entity({self.name!r})"

    def __str__(self) -> str:
        return self.name
