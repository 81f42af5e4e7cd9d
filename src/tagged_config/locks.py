from __future__ import annotations

import logging

from .exceptions import ConfigLockedError

logger = logging.getLogger("tagged_config.locks")
logger.addHandler(logging.NullHandler())


class LockGuard:
    """One-way latch marking the end of a build phase."""

    def __init__(self, owner: str = "object") -> None:
        self._owner = owner
        self._locked = False

    def lock(self) -> None:
        self._locked = True

    def ensure_unlocked(self, action: str = "modify") -> None:
        if self._locked:
            logger.error("Attempted to %s %s after it was finalized", action, self._owner)
            raise ConfigLockedError(f"Cannot {action} {self._owner}: already finalized")

    def is_locked(self) -> bool:
        return self._locked
