import asyncio
import json

import httpx

from app.notifier import FREE_COLOR, PAID_COLOR, WebhookNotifier, free_embed, paid_embed


def test_send_posts_json_payload():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(204)

    notifier = WebhookNotifier(transport=httpx.MockTransport(handler))
    result = asyncio.run(notifier.send("https://hooks.example/paid", {"embeds": []}))

    assert result.ok
    assert result.detail == "204"
    assert seen == {"method": "POST", "url": "https://hooks.example/paid", "body": {"embeds": []}}


def test_send_reports_non_success_status_without_raising():
    notifier = WebhookNotifier(transport=httpx.MockTransport(lambda request: httpx.Response(500)))
    result = asyncio.run(notifier.send("https://hooks.example/paid", {}))
    assert not result.ok
    assert result.detail == "500"


def test_send_swallows_network_error(caplog):
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    notifier = WebhookNotifier(transport=httpx.MockTransport(handler))
    result = asyncio.run(notifier.send("https://hooks.example/paid", {}))

    assert not result.ok
    assert "Webhook error" in caplog.text


def test_send_with_unset_url_fails_quietly():
    calls = []
    notifier = WebhookNotifier(transport=httpx.MockTransport(lambda request: calls.append(request)))
    result = asyncio.run(notifier.send(None, {}))
    assert not result.ok
    assert calls == []


def test_paid_embed_fields():
    embed = paid_embed("A", "a@x.com", "A#1", "123456789012345678", "Pro", "500", "TXN1", currency_symbol="$")["embeds"][0]

    assert embed["color"] == PAID_COLOR == 0xFFC107
    assert embed["timestamp"].endswith("Z")
    assert [f["name"] for f in embed["fields"]] == [
        "Name",
        "Email",
        "Discord",
        "Discord ID",
        "Product",
        "Amount",
        "Transaction ID",
    ]
    assert embed["fields"][5]["value"] == "$500"
    assert "inline" not in embed["fields"][3]


def test_free_embed_fields():
    embed = free_embed("B", "b@x.com", "B#2", "123456789012345678")["embeds"][0]
    assert embed["color"] == FREE_COLOR
    assert embed["fields"][3] == {"name": "Discord ID", "value": "123456789012345678"}


def test_paid_embed_formats_whole_float_amount_without_decimal():
    embed = paid_embed("A", "a@x.com", "A#1", "123456789012345678", "Pro", 500.0, "TXN1", currency_symbol="₹")["embeds"][0]
    assert embed["fields"][5]["value"] == "₹500"


def test_paid_embed_keeps_fractional_amount():
    embed = paid_embed("A", "a@x.com", "A#1", "123456789012345678", "Pro", 499.5, "TXN1", currency_symbol="₹")["embeds"][0]
    assert embed["fields"][5]["value"] == "₹499.5"
