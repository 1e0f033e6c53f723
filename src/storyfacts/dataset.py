"""
Dataset assembly: turn generated stories into JSON-ready records.
"""

import logging
from typing import Iterator

import numpy as np

from storyfacts.config import GeneratorConfig
from storyfacts.knowledge.export import graph_dict
from storyfacts.tasks import StoryResult, get_task
from storyfacts.world.clause import Question

logger = logging.getLogger(__name__)


class StoryLimitExceeded(RuntimeError):
    """No story within the length limit could be generated."""


def story_record(result: StoryResult, knowledge_graph: bool = False) -> dict:
    """Serialize a story; question supports refer to 1-based story lines."""
    lines: list[str] = []
    questions: list[dict] = []
    line_of: dict[int, int] = {}

    for entry in result.story:
        lines.append(repr(entry))
        line = len(lines)
        if isinstance(entry, Question):
            support = sorted(line_of[id(c)] for c in entry.support if id(c) in line_of)
            questions.append({
                "line": line,
                "kind": entry.kind,
                "clause": repr(entry.clause),
                "answer": "yes" if entry.clause.truth_value else "no",
                "support": support,
            })
        else:
            line_of[id(entry)] = line

    record = {"task": result.task, "story": lines, "questions": questions}
    if knowledge_graph:
        knowledge = result.knowledge
        record["graphs"] = [graph_dict(knowledge, t) for t in range(1, knowledge.t + 1)]
    return record


def generate_records(task_name: str, count: int, config: GeneratorConfig) -> Iterator[dict]:
    """Generate ``count`` story records, discarding stories over the limit."""
    rng = np.random.default_rng(config.seed)
    task = get_task(task_name, rng=rng)

    for index in range(count):
        for _ in range(config.max_retries):
            result = task.generate()
            if config.limit_story is None or len(result.story) <= config.limit_story:
                break
            logger.debug(f"Discarding {len(result.story)}-line story (limit {config.limit_story})")
        else:
            raise StoryLimitExceeded(
                f"{task_name}: no story within {config.limit_story} lines "
                f"after {config.max_retries} attempts"
            )
        yield story_record(result, config.knowledge_graph)
        if (index + 1) % 100 == 0:
            logger.info(f"{task_name}: {index + 1}/{count} stories")
