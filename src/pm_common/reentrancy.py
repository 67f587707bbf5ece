"""Scoped in-progress flags that reject nested calls on the same key."""

import logging
from collections.abc import Hashable, Iterator
from contextlib import contextmanager

from src.pm_common.errors import ReentrantCallError

logger = logging.getLogger(__name__)


class ReentrancyGuard:
    """Per-key non-reentrant lock.

    Entering a key that is already held raises ReentrantCallError immediately;
    the flag is cleared on every exit path of the outer scope.
    """

    def __init__(self) -> None:
        self._in_progress: set[Hashable] = set()

    def is_held(self, key: Hashable) -> bool:
        return key in self._in_progress

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        if key in self._in_progress:
            logger.warning("Reentrant call rejected: key=%s", key)
            raise ReentrantCallError(key)
        self._in_progress.add(key)
        try:
            yield
        finally:
            self._in_progress.discard(key)
