"""LabelRegistry - cross-engine mutual exclusion keyed by label."""
from __future__ import annotations

import logging
import threading

logger = logging.getLogger(__name__)


class LabelRegistry:
    """Maps a label to the engine currently playing under it.

    Engines sharing a registry and a label never play at the same time.
    Labels are created on first use and persist once seen.
    """

    def __init__(self) -> None:
        self._holders: dict[str, object | None] = {}
        self._lock = threading.Lock()

    def acquire(self, label: str, owner: object) -> bool:
        """Claim ``label`` for ``owner``. True if free or already held by owner."""
        with self._lock:
            holder = self._holders.setdefault(label, None)
            if holder is not None and holder is not owner:
                logger.debug("label %r busy", label)
                return False
            self._holders[label] = owner
            return True

    def release(self, label: str, owner: object) -> bool:
        with self._lock:
            if self._holders.get(label) is not owner:
                return False
            self._holders[label] = None
            return True

    def is_active(self, label: str) -> bool:
        with self._lock:
            return self._holders.get(label) is not None

    def holder(self, label: str) -> object | None:
        with self._lock:
            return self._holders.get(label)

    def labels(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._holders)
