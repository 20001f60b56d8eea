"""
Score persistence for sessions.

The session treats the store as an append-only top-N leaderboard plus a
per-player stats slot. ScoreStore keeps everything in memory;
JsonScoreStore mirrors it to a JSON file after every write.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, ValidationError

from .models import ScoreRecord, SessionStats


logger = logging.getLogger(__name__)


class ScoreStore(BaseModel):
    """
    In-memory leaderboard and per-player stats.

    Attributes:
        scores: Leaderboard entries, highest score first
        stats: Raw stats dictionaries keyed by player name
    """

    scores: List[ScoreRecord] = Field(default_factory=list)
    stats: Dict[str, Dict[str, Any]] = Field(default_factory=dict)

    def add_score(self, record: ScoreRecord, limit: int = 10) -> None:
        """Append a record and keep only the top `limit` by score."""
        scores = self.scores + [record]
        scores.sort(key=lambda r: r.score, reverse=True)
        self.scores = scores[:limit]
        self._flush()

    def leaderboard(self) -> List[ScoreRecord]:
        """Leaderboard entries, highest score first (copies)."""
        return [r.model_copy() for r in self.scores]

    def load_stats(self, name: str) -> Optional[SessionStats]:
        """
        Load saved stats for a player.

        Returns:
            The stats, or None if nothing usable is stored
        """
        raw = self.stats.get(name)
        if raw is None:
            return None
        try:
            return SessionStats(**raw)
        except (TypeError, ValidationError) as e:
            logger.warning("Ignoring unreadable stats for '%s': %s", name, e)
            return None

    def save_stats(self, name: str, stats: SessionStats) -> None:
        self.stats[name] = stats.model_dump()
        self._flush()

    def _flush(self) -> None:
        """Persist state. No-op for the in-memory store."""


class JsonScoreStore(ScoreStore):
    """
    Score store backed by a JSON file.

    A missing or corrupt file yields an empty store. Write failures are
    logged and not retried.
    """

    path: Path

    def model_post_init(self, __context) -> None:
        """Load existing data from disk."""
        data = self._read()
        self.scores = self._parse_scores(data.get("leaderboard"))
        stats = data.get("stats")
        self.stats = stats if isinstance(stats, dict) else {}

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not read score store %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Score store %s has unexpected format, starting fresh", self.path)
            return {}
        return data

    @staticmethod
    def _parse_scores(raw: Any) -> List[ScoreRecord]:
        if not isinstance(raw, list):
            return []
        scores = []
        for entry in raw:
            try:
                scores.append(ScoreRecord(**entry))
            except (TypeError, ValidationError):
                logger.warning("Skipping unreadable leaderboard entry: %r", entry)
        scores.sort(key=lambda r: r.score, reverse=True)
        return scores

    def _flush(self) -> None:
        data = {
            "leaderboard": [r.model_dump() for r in self.scores],
            "stats": self.stats,
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                json.dump(data, f, indent=2, default=str)
        except OSError as e:
            logger.error("Could not write score store %s: %s", self.path, e)
