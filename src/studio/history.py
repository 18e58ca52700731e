"""Session history of generated clips.

Clips are kept newest first. Each entry owns its encoded WAV data; saving a
clip writes it to disk as voice-gen-<id>.wav.
"""

import logging
import threading
from pathlib import Path
from typing import Iterator, Optional

from src.studio.models import HistoryItem

logger = logging.getLogger(__name__)


class HistoryError(Exception):
    """Error raised for missing or unavailable history entries."""

    pass


class SessionHistory:
    """Thread-safe, newest-first list of generated clips.

    Example:
        ```python
        history = SessionHistory(max_items=20)
        history.add(item)
        history.save_latest(Path("./output"))
        ```
    """

    def __init__(self, max_items: Optional[int] = None) -> None:
        """Initialize session history.

        Args:
            max_items: Optional maximum number of clips. When exceeded, the
                oldest clips are dropped. Unbounded if None.
        """
        if max_items is not None and max_items < 1:
            raise ValueError(f"max_items must be at least 1, got {max_items}")

        self.max_items = max_items
        self._items: list[HistoryItem] = []
        self._lock = threading.Lock()

    def add(self, item: HistoryItem) -> None:
        """Insert a clip at the front of the history."""
        with self._lock:
            self._items.insert(0, item)
            if self.max_items is not None and len(self._items) > self.max_items:
                dropped = self._items[self.max_items:]
                del self._items[self.max_items:]
                logger.debug(f"History limit reached, dropped {len(dropped)} clip(s)")
        logger.info(f"Added clip {item.id} to history ({item.duration:.2f}s)")

    @property
    def items(self) -> list[HistoryItem]:
        """Snapshot of the clips, newest first."""
        with self._lock:
            return list(self._items)

    @property
    def latest(self) -> Optional[HistoryItem]:
        """Most recent clip, or None if the history is empty."""
        with self._lock:
            return self._items[0] if self._items else None

    def get(self, item_id: str) -> HistoryItem:
        """Get a clip by ID.

        Raises:
            HistoryError: If no clip has the given ID.
        """
        with self._lock:
            for item in self._items:
                if item.id == item_id:
                    return item
        raise HistoryError(f"No clip with id {item_id}")

    def remove(self, item_id: str) -> HistoryItem:
        """Remove a clip by ID and return it.

        Raises:
            HistoryError: If no clip has the given ID.
        """
        with self._lock:
            for index, item in enumerate(self._items):
                if item.id == item_id:
                    del self._items[index]
                    logger.info(f"Removed clip {item_id} from history")
                    return item
        raise HistoryError(f"No clip with id {item_id}")

    def clear(self) -> None:
        """Remove all clips."""
        with self._lock:
            self._items.clear()

    def save(self, item_id: str, directory: str | Path) -> Path:
        """Write a clip to directory/voice-gen-<id>.wav.

        Returns:
            Path of the written file.

        Raises:
            HistoryError: If no clip has the given ID.
        """
        item = self.get(item_id)
        return item.audio.save(Path(directory) / item.filename)

    def save_latest(self, directory: str | Path) -> Path:
        """Write the most recent clip to disk.

        Raises:
            HistoryError: If the history is empty.
        """
        item = self.latest
        if item is None:
            raise HistoryError("No generated audio to save")
        return item.audio.save(Path(directory) / item.filename)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __iter__(self) -> Iterator[HistoryItem]:
        return iter(self.items)
