"""Observable store tracking whether any request is in flight."""

import itertools
import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)

Listener = Callable[[bool], None]


class LoadingState:
    """Set of in-flight request ids with change notifications.

    Listeners receive the new `is_loading` value each time a request starts
    or finishes.
    """

    def __init__(self) -> None:
        self._active: set[int] = set()
        self._listeners: list[Listener] = []
        self._ids = itertools.count(1)

    @property
    def is_loading(self) -> bool:
        return bool(self._active)

    @property
    def active_count(self) -> int:
        return len(self._active)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        loading = self.is_loading
        for listener in list(self._listeners):
            try:
                listener(loading)
            except Exception as e:
                logger.warning(f"Loading listener failed: {e}")

    def begin(self) -> int:
        request_id = next(self._ids)
        self._active.add(request_id)
        self._notify()
        return request_id

    def end(self, request_id: int) -> None:
        self._active.discard(request_id)
        self._notify()

    @contextmanager
    def track(self) -> Iterator[int]:
        """Mark a request as in flight for the duration of the block."""
        request_id = self.begin()
        try:
            yield request_id
        finally:
            self.end(request_id)
