"""In-process cache of interpreted looks keyed by normalized prompt.

Entries are never mutated after insertion; a put replaces the entry wholesale.
The cache is bounded (LRU) and entries expire after a TTL. Either limit can be
disabled with 0.
"""

from __future__ import annotations

import hashlib
import re
import threading
import time
from collections import OrderedDict
from typing import Callable, Optional

from glam_agents.domain.models import CacheEntry, CanonicalLook, LookSource
from setup_logging_optimized import get_logger

logger = get_logger(__name__)

_WHITESPACE = re.compile(r"\s+")


def normalize_prompt_key(prompt_text: str, image_bytes: Optional[bytes] = None) -> str:
    """Trim, lowercase and collapse whitespace; append an image digest when present."""
    key = _WHITESPACE.sub(" ", (prompt_text or "").strip().lower())
    if image_bytes:
        key = f"{key}#img:{hashlib.sha1(image_bytes).hexdigest()[:12]}"
    return key


class LookCache:
    """Thread-safe LRU + TTL cache of CanonicalLook by prompt key."""

    def __init__(
        self,
        max_entries: int = 256,
        ttl_seconds: float = 3600.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()

    def get(self, prompt_key: str) -> Optional[CanonicalLook]:
        """Stored look for the key, or None when absent or expired."""
        now = self._clock()
        with self._lock:
            entry = self._entries.get(prompt_key)
            if entry is None:
                return None
            if self.ttl_seconds and (now - entry.created_at) > self.ttl_seconds:
                del self._entries[prompt_key]
                logger.debug(f"Look cache entry expired: {prompt_key!r}")
                return None
            self._entries.move_to_end(prompt_key)
            return entry.look

    def put(self, prompt_key: str, look: CanonicalLook) -> CanonicalLook:
        """Store a look (tagged as a cache source) and return the stored instance."""
        stored = look if look.source == LookSource.CACHE else look.with_source(LookSource.CACHE)
        entry = CacheEntry(prompt_key=prompt_key, look=stored, created_at=self._clock())
        with self._lock:
            self._entries[prompt_key] = entry
            self._entries.move_to_end(prompt_key)
            if self.max_entries:
                while len(self._entries) > self.max_entries:
                    evicted, _ = self._entries.popitem(last=False)
                    logger.debug(f"Look cache evicted: {evicted!r}")
        return stored

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, prompt_key: str) -> bool:
        return self.get(prompt_key) is not None
