"""
Value-history augmentation.

Turns the value history of a property into explicit record entities so
that question logic can walk "where was the apple before the office?"
without rescanning the timeline. For entity E and property P, every step
t gets:

    E.history_now_P  -> latest record
    E.history_P      -> every record so far
    record_i.prev    -> record_{i-1}
    record_i.value   -> the i-th distinct value
"""

import logging
from typing import Any, Iterable

from storyfacts.knowledge.store import value_at
from storyfacts.world.entity import Entity

logger = logging.getLogger(__name__)


def record_name(property: str, entity: Any, index: int) -> str:
    return f"record_{property}#{entity.name}_{index}"


def augment_with_value_histories(knowledge, entities: Iterable[Any], property: str,
                                 resolve_location: bool = False) -> dict[Any, list[Entity]]:
    """Add history records for ``property`` of each entity to every snapshot.

    This rewrites already finalized snapshots and is meant to run once,
    after the story is complete.

    Returns:
        Mapping of entity to the list of record entities created for it.
    """
    now_property = f"history_now_{property}"
    all_property = f"history_{property}"
    created: dict[Any, list[Entity]] = {}

    for entity in entities:
        history: list = []
        records: list[Entity] = []

        for t in range(1, knowledge.t + 1):
            table = knowledge.at(t)
            value, _ = value_at(table, entity, property, resolve_location)
            if value is not None and (not history or history[-1] != value):
                history.append(value)
                records.append(Entity(record_name(property, entity, len(history))))

            if not history:
                continue

            ledger = table.ledger(entity)
            ledger.set(now_property, records[-1], True)
            for previous, record in zip(records, records[1:]):
                table.ledger(record).set("prev", previous, True)
            for record, record_value in zip(records, history):
                ledger.add(all_property, record, True)
                table.ledger(record).set("value", record_value, True)

        logger.debug(f"{entity.name}: {len(records)} {property} records")
        created[entity] = records

    return created
