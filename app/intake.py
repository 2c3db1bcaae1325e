from __future__ import annotations

from typing import Any

from app.notifier import DeliveryResult, WebhookNotifier
from app.repository import ExpiringStore
from app.schemas import SubmissionRecord


async def intake(
    store: ExpiringStore[SubmissionRecord],
    record: SubmissionRecord,
    notifier: WebhookNotifier,
    webhook_url: str | None,
    payload: dict[str, Any],
    attempt_if_unset: bool,
) -> DeliveryResult | None:
    """Store ``record`` under its Discord id, then notify the operator once.

    Returns ``None`` when no webhook was attempted.
    """
    store.put(record.discord_id, record)
    if not webhook_url and not attempt_if_unset:
        return None
    return await notifier.send(webhook_url, payload)
