"""Concurrency primitives: compute-once cells and bounded blocking fan-out."""

from __future__ import annotations

import asyncio
import threading
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

T = TypeVar("T")

_UNSET = object()


class LazyCell(Generic[T]):
    """Thread-safe compute-once cell.

    The factory runs at most once, on first access; concurrent first readers
    block on the lock and observe the same value. A factory that raises leaves
    the cell empty so a later access retries.
    """

    __slots__ = ("_factory", "_lock", "_value")

    def __init__(self, factory: Callable[[], T]) -> None:
        self._factory: Callable[[], T] | None = factory
        self._lock = threading.Lock()
        self._value: object = _UNSET

    @property
    def is_resolved(self) -> bool:
        return self._value is not _UNSET

    def get(self) -> T:
        value = self._value
        if value is not _UNSET:
            return value  # type: ignore[return-value]
        with self._lock:
            if self._value is _UNSET:
                factory = self._factory
                assert factory is not None
                self._value = factory()
                self._factory = None
            return self._value  # type: ignore[return-value]


def run_blocking(calls: Sequence[Callable[[], T]], *, max_concurrency: int) -> list[T]:
    """Run blocking callables on worker threads; results keep input order.

    At most ``max_concurrency`` calls are in flight at once. With
    ``max_concurrency == 1`` the calls run inline, one after another. The
    first failure propagates once every started call has finished.
    """

    if max_concurrency <= 0:
        raise ValueError("max_concurrency must be > 0")
    if max_concurrency == 1 or len(calls) <= 1:
        return [call() for call in calls]
    return asyncio.run(_run_blocking(calls, max_concurrency))


async def _run_blocking(calls: Sequence[Callable[[], T]], max_concurrency: int) -> list[T]:
    semaphore = asyncio.Semaphore(max_concurrency)

    async def _bounded(call: Callable[[], T]) -> T:
        async with semaphore:
            return await asyncio.to_thread(call)

    return list(await asyncio.gather(*(_bounded(call) for call in calls)))


__all__ = ["LazyCell", "run_blocking"]
