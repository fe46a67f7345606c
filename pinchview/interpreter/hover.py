from __future__ import annotations

import logging
from typing import Generic, Optional, TypeVar

from pinchview.core.types import HoverChange

log = logging.getLogger(__name__)

T = TypeVar("T")


class HoverStabilizer(Generic[T]):
    """
    Dwell filter over a raw per-frame hit-test.

    A new raw hit only becomes a candidate; the candidate is committed once it
    has been seen unchanged for `dwell_ms`. Every hover change therefore lags
    by the dwell window, and single-frame boundary jitter never commits.
    """

    def __init__(self, dwell_ms: float = 70.0) -> None:
        self.dwell_ms = float(dwell_ms)
        self.current: Optional[T] = None
        self.candidate: Optional[T] = None
        self.candidate_since_ms: float = 0.0

    def update(self, raw: Optional[T], t_ms: float) -> Optional[HoverChange]:
        if raw != self.candidate:
            self.candidate = raw
            self.candidate_since_ms = t_ms
            return None
        if self.current != self.candidate and (t_ms - self.candidate_since_ms) >= self.dwell_ms:
            return self._commit(self.candidate)
        return None

    def clear(self) -> Optional[HoverChange]:
        """Drop hover immediately (mode switch, hand lost)."""
        self.candidate = None
        if self.current is None:
            return None
        return self._commit(None)

    def reset(self) -> None:
        self.current = None
        self.candidate = None
        self.candidate_since_ms = 0.0

    def _commit(self, nxt: Optional[T]) -> HoverChange:
        change = HoverChange(previous=self.current, next=nxt)
        self.current = nxt
        log.debug("hover %s -> %s", change.previous, change.next)
        return change
