from __future__ import annotations

from enum import Enum


class LockMode(Enum):
    """Select locking behavior for shared caches.

    Use ``THREAD`` (the default) whenever caches may be reached from more than
    one thread. ``NONE`` removes locking for single-threaded embedding where
    every call happens on one thread.
    """

    THREAD = "thread"
    """Guard cache reads/writes with ``threading.Lock``."""

    NONE = "none"
    """Disable locking around cache reads/writes."""
