"""Best-score persistence collaborators."""

import json
import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class BestScoreStore(Protocol):
    """Read once at startup, written once per qualifying game over."""

    def read(self) -> int: ...

    def write(self, score: int) -> None: ...


class MemoryBestScoreStore:
    """In-process store for tests and headless runs."""

    def __init__(self, initial: int = 0):
        self._score = initial
        self.writes = 0

    def read(self) -> int:
        return self._score

    def write(self, score: int) -> None:
        self._score = score
        self.writes += 1


class JsonBestScoreStore:
    """Persistent best score using a small JSON file.

    Missing or unreadable files read as 0. Write failures are logged and
    swallowed.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def read(self) -> int:
        if not self.path.exists():
            return 0
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
            score = int(data.get("best_score", 0))
            logger.info(f"Loaded best score {score} from {self.path}")
            return max(0, score)
        except Exception as e:
            logger.error(f"Failed to load best score: {e}")
            return 0

    def write(self, score: int) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                json.dump({"best_score": int(score)}, f, indent=2)
            logger.debug(f"Saved best score {score}")
        except Exception as e:
            logger.error(f"Failed to save best score: {e}")
