"""Webhook HTTP server using aiohttp."""

from __future__ import annotations

import json
from typing import Any

from aiohttp import web

from gitcord.config import Settings
from gitcord.errors import AuthError, DownstreamError, FormatterError
from gitcord.transports.base import Notifier
from gitcord.utils.logging import get_logger
from gitcord.webhooks.dispatcher import dispatch
from gitcord.webhooks.handlers import authenticate
from gitcord.webhooks.models import InboundWebhook, VerifiedEvent

log = get_logger(__name__)

SIGNATURE_HEADER = "X-Hub-Signature-256"
EVENT_HEADER = "X-GitHub-Event"
DELIVERY_HEADER = "X-GitHub-Delivery"


def _json_error(status: int, error: str) -> web.Response:
    return web.json_response({"error": error}, status=status)


def _json_message(status: int, message: str) -> web.Response:
    return web.json_response({"message": message}, status=status)


class WebhookServer:
    """Receives GitHub webhooks and relays them through a notifier.

    *notifier* may be None, in which case deliveries are authenticated and
    acknowledged with 202 but nothing is sent.
    """

    def __init__(self, settings: Settings, notifier: Notifier | None = None) -> None:
        self._settings = settings
        self._notifier = notifier
        self._runner: web.AppRunner | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        if not self._settings.github_webhook_secret:
            log.warning(
                "webhook_no_secret",
                path=self._settings.webhook_path,
                msg="GITHUB_WEBHOOK_SECRET is not set, all deliveries will be rejected.",
            )
        if self._notifier is None:
            log.warning(
                "webhook_notifications_disabled",
                msg="DISCORD_WEBHOOK_URL is not set, deliveries will not be relayed.",
            )
        app = self._build_app()
        self._runner = web.AppRunner(app)
        await self._runner.setup()
        site = web.TCPSite(self._runner, self._settings.bind, self._settings.port)
        await site.start()
        log.info(
            "webhook_server_started",
            bind=self._settings.bind,
            port=self._settings.port,
            path=self._settings.webhook_path,
        )

    async def stop(self) -> None:
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None
        log.info("webhook_server_stopped")

    # ------------------------------------------------------------------
    # App construction
    # ------------------------------------------------------------------

    def _build_app(self) -> web.Application:
        app = web.Application()
        path = self._settings.webhook_path
        # POST must be registered before the catch-all
        app.router.add_post(path, self._handle_webhook)
        app.router.add_route("*", path, self._method_not_allowed)
        app.router.add_get("/health", self._handle_health)
        return app

    # ------------------------------------------------------------------
    # Request handling
    # ------------------------------------------------------------------

    async def _handle_health(self, request: web.Request) -> web.Response:
        return web.Response(status=200, text="OK")

    async def _method_not_allowed(self, request: web.Request) -> web.Response:
        return _json_error(405, "Method not allowed")

    async def _handle_webhook(self, request: web.Request) -> web.Response:
        # Hash the bytes exactly as received
        inbound = InboundWebhook(
            raw_body=await request.read(),
            event_type=request.headers.get(EVENT_HEADER, ""),
            signature=request.headers.get(SIGNATURE_HEADER, ""),
        )
        delivery = request.headers.get(DELIVERY_HEADER, "")

        try:
            authenticate(inbound, self._settings.github_webhook_secret)
        except AuthError as exc:
            log.warning("webhook_rejected", reason=str(exc), delivery=delivery)
            return _json_error(401, "Invalid signature")

        if not inbound.event_type:
            return _json_error(400, f"Missing {EVENT_HEADER} header")

        payload = self._parse_payload(inbound.raw_body)
        if payload is None:
            return _json_error(400, "Invalid JSON")

        if self._notifier is None:
            log.warning("webhook_notifications_disabled", event_type=inbound.event_type)
            return _json_message(202, "Webhook received but notifications are disabled")

        event = VerifiedEvent.from_inbound(inbound, payload)
        log.debug("webhook_payload", event_type=event.event_type, payload=payload)

        try:
            message = dispatch(event)
            if message is not None:
                await self._notifier.send_notification(message)
        except (FormatterError, DownstreamError) as exc:
            log.error(
                "webhook_processing_failed",
                event_type=event.event_type,
                delivery=delivery,
                error=str(exc),
            )
            return _json_error(500, "Error processing webhook")

        log.info(
            "webhook_received",
            event_type=event.event_type,
            delivery=delivery,
            relayed=message is not None,
        )
        return _json_message(200, "Webhook processed successfully")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_payload(body: bytes) -> dict[str, Any] | None:
        try:
            payload = json.loads(body)
        except ValueError:
            return None
        if not isinstance(payload, dict):
            return None
        return payload
