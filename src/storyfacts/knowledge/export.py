"""
Read-only renderings of a knowledge snapshot.

``describe`` produces a plain-text dump for debugging. ``describe_graph``
produces the node/edge JSON written next to generated stories:

    {"nodes": ["John", "kitchen"],
     "edges": [{"type": "actor_is_in_location", "from": "John", "to": "kitchen"}]}
"""

import json
from typing import Any

from storyfacts.knowledge.models import value_name

# Relations rewritten as their opposite with swapped endpoints
FLIP_RELATIONS = {"s": "n", "e": "w"}

# Capability flags reported in edge types, in this order
TYPE_TAGS = ("actor", "location", "gettable", "motivation", "animal")

NEGATION_PREFIX = "not_"


def type_tags(thing: Any) -> str:
    """Hyphen-joined capability tags of an entity, e.g. ``actor-animal``."""
    return "-".join(tag for tag in TYPE_TAGS if getattr(thing, f"is_{tag}", False))


def describe(knowledge, t: int) -> str:
    lines = []
    for entity, ledger in knowledge.at(t).items():
        lines.append(f"{value_name(entity)}:\n")
        for relation, facts in ledger.items():
            targets = "".join(
                f"{value_name(f.value)}({str(f.truth_value).lower()}), " for f in facts
            )
            lines.append(f"\t{relation}[ {targets}]\n")
    return "".join(lines)


def describe_all(knowledge) -> str:
    return "".join(describe(knowledge, t) + "-------\n" for t in range(1, knowledge.t + 1))


def graph_dict(knowledge, t: int) -> dict:
    """Nodes and typed edges of snapshot ``t``, nodes in first-seen order."""
    nodes: dict[str, None] = {}
    edges = []
    for entity, ledger in knowledge.at(t).items():
        nodes[value_name(entity)] = None
        for relation, facts in ledger.items():
            for fact in facts:
                nodes[value_name(fact.value)] = None
                source, target, name = entity, fact.value, relation
                if relation in FLIP_RELATIONS:
                    source, target, name = fact.value, entity, FLIP_RELATIONS[relation]
                prefix = "" if fact.truth_value else NEGATION_PREFIX
                edges.append({
                    "type": f"{prefix}{type_tags(source)}_{name}_{type_tags(target)}",
                    "from": value_name(source),
                    "to": value_name(target),
                })
    return {"nodes": list(nodes), "edges": edges}


def describe_graph(knowledge, t: int) -> str:
    return json.dumps(graph_dict(knowledge, t))
