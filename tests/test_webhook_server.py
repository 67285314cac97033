"""Tests for the webhook HTTP server."""

import asyncio
import json
from unittest.mock import AsyncMock

import pytest
from aiohttp.test_utils import TestClient, TestServer

from gitcord.config import Settings
from gitcord.errors import DownstreamError
from gitcord.models import NotificationMessage
from gitcord.transports.base import Notifier
from gitcord.transports.discord_webhook import DiscordWebhookNotifier
from gitcord.webhooks.server import WebhookServer

from conftest import sign

SECRET = "gh-secret"
PATH = "/webhook/github"

PUSH_PAYLOAD = {
    "ref": "refs/heads/main",
    "pusher": {"name": "alice"},
    "commits": [{"id": "abc"}, {"id": "def"}],
    "repository": {"full_name": "org/repo", "html_url": "https://github.com/org/repo"},
}


def _headers(body, event="push", secret=SECRET):
    return {
        "Content-Type": "application/json",
        "X-Hub-Signature-256": sign(body, secret),
        "X-GitHub-Event": event,
        "X-GitHub-Delivery": "72d3162e-cc78-11e3-81ab-4c9367dc0958",
    }


@pytest.fixture
def settings():
    return Settings(github_webhook_secret=SECRET, webhook_path=PATH)


@pytest.fixture
def notifier():
    return AsyncMock(spec=Notifier)


@pytest.fixture
async def client(settings, notifier):
    server = WebhookServer(settings, notifier)
    async with TestClient(TestServer(server._build_app())) as c:
        yield c


@pytest.fixture
async def disabled_client(settings):
    server = WebhookServer(settings, None)
    async with TestClient(TestServer(server._build_app())) as c:
        yield c


class TestRoutes:
    async def test_health(self, client):
        resp = await client.get("/health")
        assert resp.status == 200
        assert await resp.text() == "OK"

    @pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", "PATCH"])
    async def test_non_post_returns_405(self, client, method):
        resp = await client.request(method, PATH)
        assert resp.status == 405
        assert await resp.json() == {"error": "Method not allowed"}

    async def test_unknown_path_returns_404(self, client):
        resp = await client.post("/webhooks/unknown", json={"test": True})
        assert resp.status == 404


class TestAuthentication:
    async def test_invalid_signature_returns_401(self, client, notifier):
        resp = await client.post(
            PATH,
            json=PUSH_PAYLOAD,
            headers={"X-Hub-Signature-256": "sha256=invalid", "X-GitHub-Event": "push"},
        )
        assert resp.status == 401
        assert await resp.json() == {"error": "Invalid signature"}
        notifier.send_notification.assert_not_awaited()

    async def test_missing_signature_returns_401(self, client, notifier):
        resp = await client.post(PATH, json=PUSH_PAYLOAD, headers={"X-GitHub-Event": "push"})
        assert resp.status == 401
        notifier.send_notification.assert_not_awaited()

    async def test_no_secret_configured_rejects(self, notifier):
        server = WebhookServer(Settings(github_webhook_secret="", webhook_path=PATH), notifier)
        body = json.dumps(PUSH_PAYLOAD).encode()
        async with TestClient(TestServer(server._build_app())) as c:
            resp = await c.post(PATH, data=body, headers=_headers(body, secret="anything"))
        assert resp.status == 401

    async def test_signature_over_raw_bytes(self, client, notifier):
        # Formatting that json.dumps would not reproduce
        body = b'{ "ref":"refs/heads/main",\n  "repository": {"full_name": "o/r", "html_url": "u"},"pusher":{"name":"\\u00e9ve"} }'
        resp = await client.post(PATH, data=body, headers=_headers(body))
        assert resp.status == 200
        message = notifier.send_notification.await_args.args[0]
        assert message.field_value("Pusher") == "éve"


class TestDelivery:
    async def test_valid_push_relayed(self, client, notifier):
        body = json.dumps(PUSH_PAYLOAD).encode()
        resp = await client.post(PATH, data=body, headers=_headers(body))
        assert resp.status == 200
        assert await resp.json() == {"message": "Webhook processed successfully"}

        notifier.send_notification.assert_awaited_once()
        message = notifier.send_notification.await_args.args[0]
        assert isinstance(message, NotificationMessage)
        assert message.title == "New Push"
        assert message.field_value("Branch") == "main"
        assert message.field_value("Commits") == "2"
        assert message.field_value("Pusher") == "alice"

    async def test_pull_request_relayed(self, client, notifier):
        payload = {
            "action": "closed",
            "pull_request": {"title": "Fix", "html_url": "u", "state": "closed", "user": {"login": "bob"}},
            "repository": {"full_name": "org/repo"},
        }
        body = json.dumps(payload).encode()
        resp = await client.post(PATH, data=body, headers=_headers(body, event="pull_request"))
        assert resp.status == 200
        message = notifier.send_notification.await_args.args[0]
        assert message.title == "Pull Request Closed"

    @pytest.mark.parametrize("event", ["star", "ping", "fork"])
    async def test_unsupported_event_returns_200_without_sending(self, client, notifier, event):
        body = json.dumps({"zen": "Design for failure.", "repository": {"full_name": "o/r"}}).encode()
        resp = await client.post(PATH, data=body, headers=_headers(body, event=event))
        assert resp.status == 200
        notifier.send_notification.assert_not_awaited()

    async def test_incomplete_payload_returns_200_without_sending(self, client, notifier):
        body = json.dumps({"action": "opened", "repository": {"full_name": "o/r"}}).encode()
        resp = await client.post(PATH, data=body, headers=_headers(body, event="pull_request"))
        assert resp.status == 200
        notifier.send_notification.assert_not_awaited()

    async def test_notifications_disabled_returns_202(self, disabled_client):
        body = json.dumps(PUSH_PAYLOAD).encode()
        resp = await disabled_client.post(PATH, data=body, headers=_headers(body))
        assert resp.status == 202
        assert await resp.json() == {"message": "Webhook received but notifications are disabled"}


class TestErrors:
    async def test_malformed_json_returns_400(self, client):
        body = b"not json"
        resp = await client.post(PATH, data=body, headers=_headers(body))
        assert resp.status == 400
        assert await resp.json() == {"error": "Invalid JSON"}

    async def test_non_object_json_returns_400(self, client):
        body = b"[1, 2, 3]"
        resp = await client.post(PATH, data=body, headers=_headers(body))
        assert resp.status == 400

    async def test_missing_event_header_returns_400(self, client):
        body = json.dumps(PUSH_PAYLOAD).encode()
        headers = _headers(body)
        del headers["X-GitHub-Event"]
        resp = await client.post(PATH, data=body, headers=headers)
        assert resp.status == 400

    async def test_formatter_error_returns_500(self, client, notifier):
        body = json.dumps({"action": "opened", "pull_request": "oops"}).encode()
        resp = await client.post(PATH, data=body, headers=_headers(body, event="pull_request"))
        assert resp.status == 500
        assert await resp.json() == {"error": "Error processing webhook"}
        notifier.send_notification.assert_not_awaited()

    async def test_downstream_error_returns_500(self, client, notifier):
        notifier.send_notification.side_effect = DownstreamError("discord down")
        body = json.dumps(PUSH_PAYLOAD).encode()
        resp = await client.post(PATH, data=body, headers=_headers(body))
        assert resp.status == 500
        notifier.send_notification.assert_awaited_once()

    async def test_discord_timeout_returns_500(self, settings):
        discord_notifier = DiscordWebhookNotifier(
            "https://discord.com/api/webhooks/123456789012345678/" + "t" * 68
        )
        discord_notifier._webhook = AsyncMock()
        discord_notifier._webhook.send.side_effect = asyncio.TimeoutError()
        server = WebhookServer(settings, discord_notifier)
        body = json.dumps(PUSH_PAYLOAD).encode()

        async with TestClient(TestServer(server._build_app())) as c:
            resp = await c.post(PATH, data=body, headers=_headers(body))
            assert resp.status == 500
            assert await resp.json() == {"error": "Error processing webhook"}
        discord_notifier._webhook.send.assert_awaited_once()
