"""
Stale-request guard.

Every analysis request takes a token from a generation counter. When a newer
request starts, older tokens become stale and whatever they eventually
produce is dropped instead of overwriting the newer result.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Optional, TypeVar

from core.errors import StaleRequestDiscarded

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RequestToken:
    generation: int
    label: str = ""


class RequestTracker:
    """Thread-safe generation counter handing out RequestTokens."""

    def __init__(self):
        self._lock = threading.Lock()
        self._generation = 0

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def begin(self, label: str = "") -> RequestToken:
        """Start a new request; every previously issued token becomes stale."""
        with self._lock:
            self._generation += 1
            return RequestToken(self._generation, label)

    def is_current(self, token: Optional[RequestToken]) -> bool:
        # Work started without a token is never superseded.
        if token is None:
            return True
        with self._lock:
            return token.generation == self._generation

    def ensure_current(self, token: Optional[RequestToken]) -> None:
        """Raise StaleRequestDiscarded if *token* has been superseded."""
        if not self.is_current(token):
            raise StaleRequestDiscarded(token)

    def accept(self, token: Optional[RequestToken], result: T) -> Optional[T]:
        """Return *result* if *token* is still current, otherwise drop it and return None."""
        if self.is_current(token):
            return result
        logger.info(
            "[REQUEST] Dropping result of superseded request #%s (%s)",
            token.generation,
            token.label or "unlabelled",
        )
        return None
