from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Callable, Generic, Protocol, TypeVar


V = TypeVar("V")


class Cancellable(Protocol):
    def cancel(self) -> None: ...


Scheduler = Callable[[float, Callable[[], None]], Cancellable]


def loop_timer(delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
    """Schedule ``callback`` on the running event loop. Must be called from inside the loop."""
    return asyncio.get_running_loop().call_later(delay, callback)


@dataclass
class _Entry(Generic[V]):
    value: V
    expiry: Cancellable | None = None


class ExpiringStore(Generic[V]):
    """Key/value map whose entries are removed by a deletion scheduled at insert time.

    Expiry never inspects timestamps on read. With ``cancel_on_overwrite`` off, the
    deletion scheduled by an earlier ``put`` still fires and removes whatever is
    stored under that key at that moment, including a newer value.

    All calls and scheduled deletions run on the event loop thread, so no locking is done.
    """

    def __init__(
        self,
        ttl_seconds: float = 3600,
        cancel_on_overwrite: bool = False,
        scheduler: Scheduler = loop_timer,
    ) -> None:
        self._ttl_seconds = ttl_seconds
        self._cancel_on_overwrite = cancel_on_overwrite
        self._scheduler = scheduler
        self._items: dict[str, _Entry[V]] = {}

    def put(self, key: str, value: V) -> None:
        previous = self._items.get(key)
        if previous is not None and previous.expiry is not None and self._cancel_on_overwrite:
            previous.expiry.cancel()
        entry: _Entry[V] = _Entry(value=value)
        self._items[key] = entry
        entry.expiry = self._scheduler(self._ttl_seconds, lambda: self._expire(key, entry))

    def get(self, key: str) -> V | None:
        entry = self._items.get(key)
        return entry.value if entry else None

    def __contains__(self, key: str) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)

    def _expire(self, key: str, entry: _Entry[V]) -> None:
        if self._cancel_on_overwrite and self._items.get(key) is not entry:
            return
        self._items.pop(key, None)
