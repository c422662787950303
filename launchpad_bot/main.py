"""Application entry point.

Main module that initializes and runs the Telegram bot application. Handles
both webhook mode (production, with health endpoints) and polling mode (local
development). Configures logging, wires the middleware pipeline into the
python-telegram-bot application and owns the startup and shutdown lifecycle.
"""

import asyncio
import contextlib
import logging
import os
import platform
import resource
import signal
import sys
import time
from typing import Any

from pydantic import ValidationError
from telegram import BotCommand, Update
from telegram.error import TelegramError
from telegram.ext import Application, ContextTypes, TypeHandler

from .bot.dispatcher import COMMANDS
from .bot.messages import COMMAND_DESCRIPTIONS
from .bot.utils import CONFIG_KEY
from .config import Config, get_config
from .core.container import Container, create_container
from .logging_setup import DATE_FORMAT, LOG_FORMAT, setup_logging
from .server import WebhookServer, create_web_app

logger = logging.getLogger(__name__)

HEALTH_CHECK_INTERVAL = 300


class BotRunner:
    """Builds the bot application and runs it until shutdown.

    Responsibilities:
    - Register the middleware pipeline and the fallback error handler
    - Start and stop the rate limiter sweep and the health heartbeat
    - Run long polling or the webhook server
    - Turn event-loop faults into an orderly stop with a non-zero exit code
    """

    def __init__(self, config: Config, container: Container | None = None):
        self.config = config
        self.container = container or create_container(config)
        self.started_at = time.monotonic()
        self.exit_code = 0
        self._stop_event: asyncio.Event | None = None
        self._heartbeat_task: asyncio.Task[None] | None = None
        self.application = self.build_application()

    @property
    def mode(self) -> str:
        return "webhook" if self.config.use_webhook else "polling"

    def build_application(self) -> Application:
        """Create the python-telegram-bot application with all handlers."""
        application = (
            Application.builder()
            .token(self.config.bot.bot_token)
            .concurrent_updates(True)
            .post_init(self.on_startup)
            .post_stop(self.on_stop)
            .post_shutdown(self.on_shutdown)
            .build()
        )
        application.bot_data[CONFIG_KEY] = self.config
        application.add_handler(TypeHandler(Update, self.container.pipeline()))
        application.add_error_handler(self.on_error)
        return application

    # === LIFECYCLE HOOKS ===

    async def on_startup(self, application: Application) -> None:
        """Start background tasks once the application is initialized."""
        asyncio.get_running_loop().set_exception_handler(self.handle_loop_exception)
        await self.container.rate_limiter().start()
        self._heartbeat_task = asyncio.create_task(self._heartbeat(), name="health-heartbeat")
        await self.register_commands(application)

        logger.info(
            "✅ Bot initialized successfully (username=%s, launchpad=%s, mode=%s)",
            self.config.bot.bot_username,
            self.config.launchpad.url,
            self.mode,
        )

    async def on_stop(self, application: Application) -> None:
        logger.info(
            "🛑 Bot shutting down (uptime=%.0fs)",
            time.monotonic() - self.started_at,
        )

    async def on_shutdown(self, application: Application) -> None:
        """Stop background tasks."""
        await self.container.rate_limiter().stop()
        task = self._heartbeat_task
        self._heartbeat_task = None
        if task is not None:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

    async def register_commands(self, application: Application) -> None:
        """Register the bot commands menu in Telegram."""
        commands = [BotCommand(name, COMMAND_DESCRIPTIONS[name]) for name in COMMANDS]
        try:
            await application.bot.set_my_commands(commands)
        except TelegramError as e:
            logger.warning("Failed to register bot commands menu: %s", e)
            return
        logger.info("Bot commands menu registered successfully.")

    async def on_error(self, update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Log errors raised outside the middleware pipeline."""
        user_id = None
        if isinstance(update, Update) and update.effective_user is not None:
            user_id = update.effective_user.id
        logger.error(
            "Unhandled bot error: %s (user_id=%s)",
            context.error,
            user_id,
            exc_info=context.error,
            extra={"user_id": user_id},
        )

    def handle_loop_exception(self, loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
        """Event-loop exception handler: log the fault and stop the bot."""
        error = context.get("exception")
        logger.error(
            "Unhandled exception in event loop: %s",
            context.get("message", error),
            exc_info=error,
        )
        self.exit_code = 1
        self.request_stop()

    def request_stop(self) -> None:
        if self._stop_event is not None:
            self._stop_event.set()
        elif self.application.running:
            self.application.stop_running()

    # === HEALTH ===

    def log_health(self) -> None:
        usage = resource.getrusage(resource.RUSAGE_SELF)
        logger.info(
            "💓 Health check (uptime=%.0fs, max_rss=%dMB, mode=%s, launchpad=%s, tracked_users=%d)",
            time.monotonic() - self.started_at,
            usage.ru_maxrss // 1024,
            self.mode,
            self.config.launchpad.url,
            len(self.container.rate_limiter()),
        )

    async def _heartbeat(self) -> None:
        while True:
            self.log_health()
            await asyncio.sleep(HEALTH_CHECK_INTERVAL)

    # === RUN ===

    def run(self) -> int:
        """Run the bot until it is stopped.

        Returns:
            Process exit code.
        """
        logger.info(
            "🚀 Bot starting in %s mode (username=%s, launchpad=%s, pid=%d, python=%s, platform=%s)",
            self.mode,
            self.config.bot.bot_username,
            self.config.launchpad.url,
            os.getpid(),
            platform.python_version(),
            sys.platform,
        )

        try:
            if self.config.use_webhook:
                asyncio.run(self._run_webhook())
            else:
                logger.info("Bot running with long polling")
                self.application.run_polling(
                    drop_pending_updates=True,
                    allowed_updates=Update.ALL_TYPES,
                )
        except Exception as e:
            logger.error("Failed to launch bot: %s", e, exc_info=e)
            return 1

        if self.exit_code == 0:
            logger.info("✅ Bot stopped successfully")
        return self.exit_code

    def _on_signal(self, signum: signal.Signals) -> None:
        logger.info("Received %s", signum.name)
        self.request_stop()

    async def _run_webhook(self) -> None:
        webhook = self.config.webhook
        application = self.application
        self._stop_event = asyncio.Event()

        loop = asyncio.get_running_loop()
        for signum in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(signum, self._on_signal, signum)

        server = WebhookServer(
            create_web_app(application, webhook.path, webhook.secret, self.started_at),
            host=webhook.listen_host,
            port=webhook.port,
        )

        await application.initialize()
        try:
            await self.on_startup(application)
            await application.bot.set_webhook(
                url=webhook.url,
                secret_token=webhook.secret,
                allowed_updates=Update.ALL_TYPES,
                drop_pending_updates=True,
            )
            logger.info(
                "Webhook configured (url=%s, has_secret=%s)", webhook.url, bool(webhook.secret)
            )
            await application.start()
            await server.start()
            await self._stop_event.wait()
        finally:
            await server.stop()
            try:
                await application.bot.delete_webhook(drop_pending_updates=True)
                logger.info("Webhook deleted")
            except TelegramError as e:
                logger.error("Error during shutdown: %s", e)
                self.exit_code = 1
            if application.running:
                await application.stop()
            await self.on_stop(application)
            await self.on_shutdown(application)
            await application.shutdown()


def main() -> None:
    """Main application entry point.

    Loads and validates configuration, configures logging and runs the bot
    in webhook mode when a webhook domain and path are configured, otherwise
    in polling mode. Invalid configuration exits with status 1.
    """
    try:
        config = get_config()
    except ValidationError as e:
        logging.basicConfig(format=LOG_FORMAT, datefmt=DATE_FORMAT, level=logging.ERROR)
        logger.error("Invalid configuration: %s", e)
        sys.exit(1)

    setup_logging(config.logging.level, config.logging.logs_dir, config.bot.environment)

    runner = BotRunner(config)
    sys.exit(runner.run())


if __name__ == "__main__":
    main()
