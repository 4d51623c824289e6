"""
Resolved handle cache with single-flight computation.

Concurrent callers asking for the same key share one in-flight lookup.
Failed lookups are not cached so a later call retries against the bundle.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Hashable
from concurrent.futures import Future

from src.core.entities import ResolvedHandle


class HandleCache:
    """Thread-safe memo of resolved handles."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._futures: dict[Hashable, Future[ResolvedHandle]] = {}
        self._computations = 0

    def get_or_compute(
        self,
        key: Hashable,
        compute: Callable[[], ResolvedHandle],
    ) -> ResolvedHandle:
        with self._lock:
            future = self._futures.get(key)
            owner = future is None
            if owner:
                future = Future()
                self._futures[key] = future
                self._computations += 1

        assert future is not None
        if not owner:
            return future.result()

        try:
            handle = compute()
        except BaseException as exc:
            with self._lock:
                self._futures.pop(key, None)
            future.set_exception(exc)
            raise

        future.set_result(handle)
        return handle

    def clear(self, match: Callable[[Hashable], bool] | None = None) -> int:
        """Drop every entry, or only the keys match() accepts. Returns the count dropped."""
        with self._lock:
            if match is None:
                dropped = len(self._futures)
                self._futures.clear()
                return dropped
            stale = [key for key in self._futures if match(key)]
            for key in stale:
                del self._futures[key]
            return len(stale)

    @property
    def computations(self) -> int:
        """Number of lookups actually performed."""
        with self._lock:
            return self._computations

    def __len__(self) -> int:
        with self._lock:
            return len(self._futures)
