"""
Temporal knowledge store with truth maintenance and provenance.

One snapshot per story clause; facts carry the set of clauses that
support them; exclusive properties hold at most one true value.
"""

from storyfacts.knowledge.errors import AmbiguousValue, KnowledgeError
from storyfacts.knowledge.models import (
    EMPTY_SUPPORT,
    ClauseKind,
    Fact,
    Support,
    union_support,
)
from storyfacts.knowledge.properties import EntityProperties
from storyfacts.knowledge.rules import Rule, RuleClause
from storyfacts.knowledge.store import Knowledge
from storyfacts.knowledge.table import KnowledgeTable

__all__ = [
    "AmbiguousValue",
    "ClauseKind",
    "EMPTY_SUPPORT",
    "EntityProperties",
    "Fact",
    "Knowledge",
    "KnowledgeError",
    "KnowledgeTable",
    "Rule",
    "RuleClause",
    "Support",
    "union_support",
]
