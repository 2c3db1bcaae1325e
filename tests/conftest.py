from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

import pytest

import app.main as main
from app.notifier import DeliveryResult
from app.repository import ExpiringStore


@dataclass
class ScheduledCall:
    delay: float
    callback: Callable[[], None]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class ManualScheduler:
    calls: list[ScheduledCall] = field(default_factory=list)

    def __call__(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(delay, callback)
        self.calls.append(call)
        return call

    def fire(self, index: int) -> None:
        call = self.calls[index]
        if not call.cancelled:
            call.callback()

    def fire_all(self) -> None:
        for index in range(len(self.calls)):
            self.fire(index)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture(autouse=True)
def fresh_stores(monkeypatch, scheduler):
    monkeypatch.setattr(main, "paid_store", ExpiringStore(ttl_seconds=3600, scheduler=scheduler))
    monkeypatch.setattr(main, "free_store", ExpiringStore(ttl_seconds=3600, scheduler=scheduler))


@pytest.fixture
def sent(monkeypatch):
    """Replace outbound webhook and email delivery with recorders."""
    calls: dict[str, list] = {"webhooks": [], "emails": []}

    async def fake_webhook(url, payload):
        calls["webhooks"].append((url, payload))
        return DeliveryResult(ok=True, detail="204")

    async def fake_email(to, subject, html_body):
        calls["emails"].append((to, subject, html_body))
        return DeliveryResult(ok=True, detail="sent")

    monkeypatch.setattr(main.notifier, "send", fake_webhook)
    monkeypatch.setattr(main.mailer, "send", fake_email)
    return calls
