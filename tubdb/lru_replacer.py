"""Least-recently-used replacement policy for buffer pool frames."""

from __future__ import annotations

import threading
from collections import OrderedDict


class LRUReplacer:
    """Tracks unpinned frames and picks the least recently unpinned as victim."""

    def __init__(self, num_pages: int) -> None:
        self.num_pages = num_pages
        self._frames: OrderedDict[int, None] = OrderedDict()
        self._lock = threading.Lock()

    def victim(self) -> int | None:
        """Remove and return the least recently unpinned frame, or None."""
        with self._lock:
            if not self._frames:
                return None
            frame_id, _ = self._frames.popitem(last=False)
            return frame_id

    def pin(self, frame_id: int) -> None:
        """Stop tracking ``frame_id``; it may no longer be evicted."""
        with self._lock:
            self._frames.pop(frame_id, None)

    def unpin(self, frame_id: int) -> None:
        """Make ``frame_id`` eligible for eviction, if it is not already."""
        with self._lock:
            if frame_id not in self._frames:
                self._frames[frame_id] = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._frames)