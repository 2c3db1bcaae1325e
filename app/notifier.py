from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import httpx

from app.config import settings

logger = logging.getLogger(__name__)

PAID_COLOR = 0xFFC107
FREE_COLOR = 0x5865F2


@dataclass(frozen=True)
class DeliveryResult:
    ok: bool
    detail: str


class WebhookNotifier:
    """Single-attempt JSON POST to a chat webhook. Failures are logged, never raised."""

    def __init__(
        self,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport

    async def send(self, url: str | None, payload: dict[str, Any]) -> DeliveryResult:
        if not url:
            logger.warning("Webhook error: no URL configured")
            return DeliveryResult(ok=False, detail="no url")
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(url, json=payload)
        except Exception as exc:
            logger.warning("Webhook error: %s", exc)
            return DeliveryResult(ok=False, detail=str(exc))

        logger.info("Webhook sent: %s", response.status_code)
        return DeliveryResult(ok=response.is_success, detail=str(response.status_code))


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _format_amount(amount: Any) -> str:
    if amount is None:
        return ""
    if isinstance(amount, float) and amount.is_integer():
        return str(int(amount))
    return str(amount)


def _field(name: str, value: Any, inline: bool = False) -> dict[str, Any]:
    field = {"name": name, "value": str(value)}
    if inline:
        field["inline"] = True
    return field


def paid_embed(
    name: str,
    email: str,
    discord_name: str,
    discord_id: str,
    product: str,
    amount: Any,
    payment_id: str,
    currency_symbol: str = settings.currency_symbol,
) -> dict[str, Any]:
    amount_text = _format_amount(amount)
    return {
        "embeds": [
            {
                "title": "🧾 New Manual Payment Submitted",
                "color": PAID_COLOR,
                "fields": [
                    _field("Name", name, inline=True),
                    _field("Email", email, inline=True),
                    _field("Discord", discord_name, inline=True),
                    _field("Discord ID", discord_id),
                    _field("Product", product, inline=True),
                    _field("Amount", f"{currency_symbol}{amount_text}", inline=True),
                    _field("Transaction ID", payment_id),
                ],
                "timestamp": _timestamp(),
            }
        ]
    }


def free_embed(name: str, email: str, discord: str, discord_id: str) -> dict[str, Any]:
    return {
        "embeds": [
            {
                "title": "🎁 Free Pack Claimed",
                "color": FREE_COLOR,
                "fields": [
                    _field("Name", name),
                    _field("Email", email),
                    _field("Discord", discord),
                    _field("Discord ID", discord_id),
                ],
                "timestamp": _timestamp(),
            }
        ]
    }
