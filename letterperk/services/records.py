"""
Local record of which daily puzzles have been played.

Records live in a single JSON object on disk, one entry per puzzle date under
the key ``daily_game_played_<date>``. Entries older than 48 hours are pruned
on demand.
"""

import json
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from ..engine.models import DailyGameRecord


logger = logging.getLogger(__name__)

STORAGE_KEY_PREFIX = "daily_game_played_"
CLEANUP_THRESHOLD = timedelta(hours=48)


def storage_key(date: str) -> str:
    return f"{STORAGE_KEY_PREFIX}{date}"


class DailyRecordStore:
    """
    Daily play records backed by a JSON file.

    A missing or unreadable file behaves as an empty store. Write failures are
    logged and otherwise ignored; losing a record only means the player may
    replay the day.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path) as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read daily records from {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            logger.warning(f"Failed to store daily records in {self.path}: {e}")

    def has_played(self, date: str) -> bool:
        """Whether any record exists for ``date``."""
        return storage_key(date) in self._read()

    def get_result(self, date: str) -> Optional[DailyGameRecord]:
        """
        Stored record for ``date``.

        Entries that cannot be parsed, or whose puzzle date does not match the
        key, are removed and reported as missing.
        """
        data = self._read()
        key = storage_key(date)
        if key not in data:
            return None

        try:
            record = DailyGameRecord.model_validate(data[key])
        except ValidationError:
            record = None

        if record is not None and record.puzzle_date == date:
            return record

        del data[key]
        self._write(data)
        return None

    def mark_played(
        self,
        date: str,
        score: int,
        word_count: int,
        now: Optional[datetime] = None,
    ) -> DailyGameRecord:
        """Record that the puzzle for ``date`` was finished with ``score``."""
        record = DailyGameRecord(
            score=score,
            word_count=word_count,
            played_at=now or datetime.now(timezone.utc),
            puzzle_date=date,
        )
        data = self._read()
        data[storage_key(date)] = record.model_dump(mode="json")
        self._write(data)
        return record

    def cleanup_old_records(self, now: Optional[datetime] = None) -> int:
        """
        Remove records played more than 48 hours before ``now``, and corrupt ones.

        Returns:
            Number of records removed
        """
        now = now or datetime.now(timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)

        data = self._read()
        stale = []
        for key, value in data.items():
            if not key.startswith(STORAGE_KEY_PREFIX):
                continue
            try:
                played_at = DailyGameRecord.model_validate(value).played_at
            except ValidationError:
                stale.append(key)
                continue
            if played_at.tzinfo is None:
                played_at = played_at.replace(tzinfo=timezone.utc)
            if now - played_at > CLEANUP_THRESHOLD:
                stale.append(key)

        if stale:
            for key in stale:
                del data[key]
            self._write(data)
            logger.debug(f"Pruned {len(stale)} daily records")
        return len(stale)
