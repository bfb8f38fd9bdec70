# quran_tracker/quran_cache.py
import os
import json
import time
import logging
import threading
from typing import Any, Callable, Dict, Optional

import platformdirs

from . import config

logger = logging.getLogger(__name__)


class QuranCache:
    """Time-bounded key/value cache kept in a single JSON file.

    Every entry stores the time it was written; an entry older than
    ``duration`` seconds is treated as missing and dropped on the next read.
    """
    CACHE_FILE_NAME = config.CACHE_FILE_NAME
    PREFIX = config.CACHE_PREFIX

    def __init__(self, cache_dir: Optional[str] = None, duration: int = config.CACHE_DURATION,
                 clock: Callable[[], float] = time.time):
        self.duration = duration
        self._clock = clock
        self._lock = threading.Lock()
        self.CACHE_DIR = ""
        self.CACHE_FILE = ""

        try:
            self.CACHE_DIR = cache_dir or platformdirs.user_cache_dir(config.APP_NAME, config.APP_AUTHOR)
            os.makedirs(self.CACHE_DIR, exist_ok=True)
            self.CACHE_FILE = os.path.join(self.CACHE_DIR, self.CACHE_FILE_NAME)
            logger.debug("Cache file: %s", self.CACHE_FILE)
        except OSError as e:
            # Paths stay empty: the cache then lives in memory only
            logger.error("Could not prepare cache directory %s: %s", self.CACHE_DIR, e)
            self.CACHE_DIR = self.CACHE_FILE = ""

        self.cache_data: Dict[str, dict] = self.load_cache()

    def load_cache(self) -> dict:
        """Load cached data or return empty dict"""
        if not self.CACHE_FILE or not os.path.exists(self.CACHE_FILE):
            return {}
        try:
            with open(self.CACHE_FILE, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load cache file %s: %s", self.CACHE_FILE, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Cache file %s has an unexpected format, ignoring it", self.CACHE_FILE)
            return {}
        return data

    def save_cache(self):
        """Save current cache to disk"""
        if not self.CACHE_FILE:
            return
        try:
            os.makedirs(self.CACHE_DIR, exist_ok=True)
            with open(self.CACHE_FILE, 'w', encoding='utf-8') as f:
                json.dump(self.cache_data, f, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Could not write cache file %s: %s", self.CACHE_FILE, e)

    def save(self, key: str, value: Any):
        """Store ``value`` under ``key``, stamped with the current time."""
        with self._lock:
            self.cache_data[f"{self.PREFIX}{key}"] = {
                "timestamp": self._clock(),
                "data": value,
            }
            self.save_cache()

    def load(self, key: str) -> Optional[Any]:
        """Return the value for ``key``, or None if absent, expired or malformed."""
        full_key = f"{self.PREFIX}{key}"
        with self._lock:
            item = self.cache_data.get(full_key)
            if item is None:
                return None
            timestamp = item.get("timestamp") if isinstance(item, dict) else None
            if not isinstance(timestamp, (int, float)) or isinstance(timestamp, bool):
                logger.warning("Dropping malformed cache entry %s", key)
                self._evict(full_key)
                return None
            if self._clock() - timestamp > self.duration:
                logger.debug("Cache entry %s expired", key)
                self._evict(full_key)
                return None
            return item.get("data")

    def _evict(self, full_key: str):
        del self.cache_data[full_key]
        self.save_cache()
