"""
Story tasks, registered by name.
"""

from typing import Optional

import numpy as np

from storyfacts.tasks.base import StoryResult, Task
from storyfacts.tasks.is_dir import IsDir
from storyfacts.tasks.who_what_gave import WhoWhatGave

TASKS: dict[str, type[Task]] = {
    IsDir.name: IsDir,
    WhoWhatGave.name: WhoWhatGave,
}


class UnknownTask(KeyError):
    """No task is registered under the requested name."""


def get_task(name: str, rng: Optional[np.random.Generator] = None) -> Task:
    try:
        task_cls = TASKS[name]
    except KeyError:
        raise UnknownTask(f"unknown task '{name}' (available: {', '.join(sorted(TASKS))})") from None
    return task_cls(rng=rng)


__all__ = ["IsDir", "StoryResult", "TASKS", "Task", "UnknownTask", "WhoWhatGave", "get_task"]
