"""Webhook server for production.

aiohttp web server used in webhook mode. Receives Telegram updates on the
configured webhook path and hands them to the python-telegram-bot
application's update queue, and exposes the health and readiness endpoints
consumed by the hosting platform.
"""

import logging
import time
from datetime import UTC, datetime

from aiohttp import web
from telegram import Update
from telegram.ext import Application

logger = logging.getLogger(__name__)

SECRET_HEADER = "X-Telegram-Bot-Api-Secret-Token"

APPLICATION_KEY = web.AppKey("application", Application)
SECRET_KEY = web.AppKey("webhook_secret", str)
STARTED_AT_KEY = web.AppKey("started_at", float)


async def health(request: web.Request) -> web.Response:
    """Liveness probe with process uptime."""
    uptime = time.monotonic() - request.app[STARTED_AT_KEY]
    return web.json_response(
        {
            "status": "ok",
            "timestamp": datetime.now(UTC).isoformat(),
            "uptime": round(uptime, 3),
        }
    )


async def ready(request: web.Request) -> web.Response:
    """Readiness probe."""
    return web.json_response({"ready": True})


async def telegram_webhook(request: web.Request) -> web.Response:
    """Queue one Telegram update on the bot application."""
    secret = request.app[SECRET_KEY]
    if secret and request.headers.get(SECRET_HEADER) != secret:
        logger.warning("Rejected webhook request with invalid secret token from %s", request.remote)
        return web.Response(status=403)

    application = request.app[APPLICATION_KEY]
    try:
        data = await request.json()
        update = Update.de_json(data, application.bot) if isinstance(data, dict) else None
    except (ValueError, TypeError, KeyError) as e:
        logger.warning("Rejected webhook request with undecodable body: %s", e)
        return web.Response(status=400)
    if update is None:
        logger.warning("Rejected webhook request with malformed JSON")
        return web.Response(status=400)

    await application.update_queue.put(update)
    return web.Response()


def create_web_app(
    application: Application,
    webhook_path: str,
    secret: str | None = None,
    started_at: float | None = None,
) -> web.Application:
    """Build the aiohttp application.

    Args:
        application: python-telegram-bot application receiving the updates.
        webhook_path: Path Telegram posts updates to.
        secret: Expected secret token header, None to skip the check.
        started_at: ``time.monotonic()`` reading at process start.

    Returns:
        Configured aiohttp application.
    """
    app = web.Application()
    app[APPLICATION_KEY] = application
    app[SECRET_KEY] = secret or ""
    app[STARTED_AT_KEY] = started_at if started_at is not None else time.monotonic()

    app.router.add_get("/health", health)
    app.router.add_get("/ready", ready)
    app.router.add_post(webhook_path, telegram_webhook)
    return app


class WebhookServer:
    """Runs the aiohttp application on a TCP site."""

    def __init__(self, app: web.Application, host: str, port: int):
        self.app = app
        self.host = host
        self.port = port
        self._runner: web.AppRunner | None = None

    async def start(self) -> None:
        self._runner = web.AppRunner(self.app)
        await self._runner.setup()
        site = web.TCPSite(self._runner, self.host, self.port)
        await site.start()
        logger.info("Webhook server started on %s:%d", self.host, self.port)

    async def stop(self) -> None:
        if self._runner is None:
            return
        await self._runner.cleanup()
        self._runner = None
        logger.info("Webhook server stopped")
