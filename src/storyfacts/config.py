"""
Generator configuration.

Defaults live in module constants. A JSON config file can override them
and the STORYFACTS_SEED environment variable overrides the seed; CLI
flags are applied last by the caller.
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".storyfacts"
CONFIG_FILE = CONFIG_DIR / "config.json"
SEED_ENV_VAR = "STORYFACTS_SEED"

DEFAULT_LIMIT_STORY = None   # Longest story kept, in lines (None: no limit)
DEFAULT_MAX_RETRIES = 100    # Attempts per story before giving up


@dataclass
class GeneratorConfig:
    """Settings for a dataset generation run."""
    seed: Optional[int] = None
    limit_story: Optional[int] = DEFAULT_LIMIT_STORY
    knowledge_graph: bool = False
    max_retries: int = DEFAULT_MAX_RETRIES

    def to_dict(self) -> dict:
        return {
            "seed": self.seed,
            "limit_story": self.limit_story,
            "knowledge_graph": self.knowledge_graph,
            "max_retries": self.max_retries,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GeneratorConfig":
        return cls(
            seed=data.get("seed"),
            limit_story=data.get("limit_story", DEFAULT_LIMIT_STORY),
            knowledge_graph=bool(data.get("knowledge_graph", False)),
            max_retries=data.get("max_retries", DEFAULT_MAX_RETRIES),
        )


def load_config(path: Optional[Union[str, Path]] = None) -> GeneratorConfig:
    """Load configuration from ``path`` (or the default file) and the environment.

    An explicitly given file must exist; the default file is optional.
    """
    data: dict = {}
    if path is not None:
        data = _read_config_file(Path(path))
    elif CONFIG_FILE.exists():
        try:
            data = _read_config_file(CONFIG_FILE)
        except (ValueError, OSError) as e:
            logger.warning(f"Ignoring unreadable config {CONFIG_FILE}: {e}")

    config = GeneratorConfig.from_dict(data)

    env_seed = os.environ.get(SEED_ENV_VAR)
    if env_seed:
        try:
            config.seed = int(env_seed)
        except ValueError:
            logger.warning(f"Ignoring non-integer {SEED_ENV_VAR}={env_seed!r}")
    return config


def _read_config_file(config_path: Path) -> dict:
    """Parse a JSON config file; raises ValueError unless it holds an object."""
    data = json.loads(config_path.read_text())
    if not isinstance(data, dict):
        raise ValueError(f"{config_path}: expected a JSON object, got {type(data).__name__}")
    return data
