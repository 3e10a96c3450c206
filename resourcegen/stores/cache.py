"""Incremental-build cache for the generated ResourceManager source."""

from __future__ import annotations

import json
import shutil
from datetime import UTC, datetime
from pathlib import Path
from typing import Optional, Sequence

from ..logging import get_logger
from ..models import CacheEntry

_CACHE_VERSION = 1
CONTENT_FILE_NAME = "content.kt"
TIMESTAMP_FILE_NAME = "timestamp.json"


class CacheManager:
    """Keeps the last generated content keyed by module name.

    Freshness is a single scalar: the newest ``st_mtime_ns`` across the files
    under observation. Content edits that keep the modification time, or a
    file swapped within the same timestamp granularity, go unnoticed.
    """

    def __init__(
        self,
        cache_root: Path,
        module_name: str,
        files_under_observation: Sequence[Path],
    ) -> None:
        self.cache_dir = Path(cache_root) / module_name
        self.files_under_observation = list(files_under_observation)
        self.logger = get_logger("cache")

    @property
    def content_path(self) -> Path:
        return self.cache_dir / CONTENT_FILE_NAME

    @property
    def timestamp_path(self) -> Path:
        return self.cache_dir / TIMESTAMP_FILE_NAME

    def is_cache_up_to_date(self) -> bool:
        """Return True when a record exists and its timestamp matches the observed files."""
        stored = self._load_timestamp()
        if stored is None:
            return False
        return stored == self.most_recent_timestamp()

    def get_cached_content(self) -> Optional[str]:
        """Return the cached content without checking freshness."""
        try:
            return self.content_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def invalidate_cache(self) -> None:
        """Delete the record; a missing record is not an error."""
        if not self.cache_dir.exists():
            return
        shutil.rmtree(self.cache_dir)
        self.logger.debug("Cache invalidated at %s", self.cache_dir)

    def cache(self, content: str) -> CacheEntry:
        """Overwrite the record with ``content`` and the current observed timestamp."""
        entry = CacheEntry(
            content_snapshot=content,
            most_recent_input_timestamp=self.most_recent_timestamp(),
        )
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.content_path.write_text(entry.content_snapshot, encoding="utf-8")
        payload = {
            "version": _CACHE_VERSION,
            "most_recent_input_timestamp": entry.most_recent_input_timestamp,
            "updated_at": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
        }
        self.timestamp_path.write_text(
            json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8"
        )
        self.logger.debug("Cached generated content at %s", self.cache_dir)
        return entry

    def most_recent_timestamp(self) -> int:
        """Return the newest modification time (ns) among existing observed files, or 0."""
        newest = 0
        for path in self.files_under_observation:
            try:
                mtime_ns = path.stat().st_mtime_ns
            except FileNotFoundError:
                continue
            newest = max(newest, mtime_ns)
        return newest

    # ------------------------------------------------------------------
    # Internal helpers

    def _load_timestamp(self) -> Optional[int]:
        try:
            data = json.loads(self.timestamp_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, json.JSONDecodeError):
            return None
        if not isinstance(data, dict) or data.get("version") != _CACHE_VERSION:
            return None
        timestamp = data.get("most_recent_input_timestamp")
        if not isinstance(timestamp, int) or isinstance(timestamp, bool):
            return None
        if not self.content_path.exists():
            return None
        return timestamp


__all__ = ["CacheManager"]
