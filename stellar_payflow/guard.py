"""
Single in-flight action guard.

One action at a time per session: a second payment would load the same
sequence number as the first one still in flight and be rejected. The
check-and-set has no await in between, so it is atomic on one event loop.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from stellar_payflow.errors import ActionInProgressError


class ActionGuard:
    """Admits at most one action; others are rejected, not queued."""

    def __init__(self) -> None:
        self._active: str | None = None

    @property
    def active(self) -> str | None:
        """Name of the action in flight, or None."""
        return self._active

    @property
    def busy(self) -> bool:
        return self._active is not None

    @contextmanager
    def hold(self, action: str) -> Iterator[None]:
        """Hold the guard for the duration of ``action``.

        Raises:
            ActionInProgressError: If another action holds the guard.
        """
        if self._active is not None:
            raise ActionInProgressError(action, self._active)
        self._active = action
        try:
            yield
        finally:
            self._active = None
