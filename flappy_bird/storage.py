"""High score persistence: one integer under a single JSON key."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .config import HIGH_SCORE_FILE, HIGH_SCORE_KEY

log = logging.getLogger(__name__)


class HighScoreStore:
    def __init__(self, path: Path | str = HIGH_SCORE_FILE, key: str = HIGH_SCORE_KEY) -> None:
        self.path = Path(path)
        self.key = key

    def load(self) -> int:
        """Return the stored high score, or 0 when it is missing or unusable."""
        if not self.path.exists():
            return 0
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            log.warning("Ignoring unreadable high score file %s: %s", self.path, exc)
            return 0

        value = data.get(self.key) if isinstance(data, dict) else None
        # bool is an int subclass; reject it along with other non-integers
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            log.warning("Ignoring malformed high score %r in %s", value, self.path)
            return 0
        log.info("Loaded high score %d from %s", value, self.path)
        return value

    def save(self, score: int) -> bool:
        """Write score back; returns False (and logs) if the file can't be written."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps({self.key: int(score)}), encoding="utf-8")
        except OSError as exc:
            log.warning("Could not save high score to %s: %s", self.path, exc)
            return False
        log.info("Saved high score %d to %s", score, self.path)
        return True
