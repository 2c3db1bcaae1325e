from __future__ import annotations

import html
import logging
import smtplib
from email.mime.text import MIMEText

from fastapi.concurrency import run_in_threadpool

from app.config import settings
from app.notifier import DeliveryResult

logger = logging.getLogger(__name__)


class ConfirmationMailer:
    """Sends HTML confirmations through an authenticated SMTP relay over implicit TLS."""

    def __init__(
        self,
        sender: str | None = None,
        password: str | None = None,
        host: str | None = None,
        port: int | None = None,
    ) -> None:
        self.sender = sender or settings.email_from
        self._password = password or settings.email_pass
        self.host = host or settings.smtp_host
        self.port = port or settings.smtp_port

    def _build(self, to: str, subject: str, html_body: str) -> MIMEText:
        msg = MIMEText(html_body, "html", "utf-8")
        msg["Subject"] = subject
        msg["From"] = self.sender or ""
        msg["To"] = to
        return msg

    def _deliver(self, msg: MIMEText) -> None:
        with smtplib.SMTP_SSL(self.host, self.port) as smtp:
            smtp.login(self.sender or "", self._password or "")
            smtp.send_message(msg)

    async def send(self, to: str, subject: str, html_body: str) -> DeliveryResult:
        try:
            await run_in_threadpool(self._deliver, self._build(to, subject, html_body))
        except Exception as exc:
            logger.warning("Email error (ignored): %s", exc)
            return DeliveryResult(ok=False, detail=str(exc))
        logger.info("Confirmation email sent to %s", to)
        return DeliveryResult(ok=True, detail="sent")


def payment_confirmation(
    name: str, product: str, payment_id: str, store_name: str = settings.store_name
) -> tuple[str, str]:
    """Return ``(subject, html_body)`` for a submitted manual payment."""
    subject = f"Payment Submitted | {product}"
    body = f"""
<div style="font-family: Arial; padding:20px;">
  <h2>🧾 Payment Received</h2>
  <p>Hi <b>{html.escape(name)}</b>,</p>
  <p>Your payment details have been submitted successfully.</p>
  <ul>
    <li>Product: <b>{html.escape(product)}</b></li>
    <li>Transaction ID: <b>{html.escape(payment_id)}</b></li>
    <li>Status: <b>Under Verification</b></li>
  </ul>
  <p>Our team will contact you on Discord shortly.</p>
  <p>— {html.escape(store_name)}</p>
</div>
"""
    return subject, body
