"""Telegram trigger: on message run agent for the sending user and reply."""
import asyncio

from telegram import Update
from telegram.error import NetworkError
from telegram.ext import Application, ContextTypes, MessageHandler, filters

from petbot.config import (
    TELEGRAM_ALLOWED_USER_IDS,
    TELEGRAM_BOT_TOKEN,
    TELEGRAM_CONNECT_TIMEOUT,
    TELEGRAM_PROXY,
    TELEGRAM_READ_TIMEOUT,
)
from petbot.gateway import handle_message
from petbot.logging_utils import get_logger

logger = get_logger(__name__)

# Fail fast if we cannot reach Telegram after a few retries (e.g. proxy/firewall/DNS)
MAX_STARTUP_RETRIES = 3
STARTUP_RETRY_DELAY_S = 2.0


def is_allowed(user_id: str | None) -> bool:
    if user_id is None:
        return False
    return not TELEGRAM_ALLOWED_USER_IDS or user_id in TELEGRAM_ALLOWED_USER_IDS


async def handle_telegram_message(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not update.message or not update.message.text:
        return
    # The sender's id is the runtime value bound to the tools; the model never sees it
    user_id = str(update.effective_user.id) if update.effective_user else None
    if not is_allowed(user_id):
        try:
            await update.message.reply_text("Unauthorized.")
        except NetworkError as e:
            logger.warning("telegram_network_error_reply", error=str(e))
        return
    text = update.message.text.strip()
    try:
        loop = asyncio.get_running_loop()
        reply = await loop.run_in_executor(
            None, lambda: handle_message(text, user_id=user_id, trigger="telegram")
        )
        await update.message.reply_text(reply)
    except NetworkError:
        logger.exception("telegram_network_error")
        try:
            await update.message.reply_text(
                "Could not reach Telegram. Check network/proxy (TELEGRAM_PROXY) and try again."
            )
        except NetworkError as e:
            logger.warning("telegram_network_error_reply", error=str(e))
    except Exception as e:
        logger.exception("telegram_handler_error")
        try:
            await update.message.reply_text(f"Something went wrong: {e!s}")
        except NetworkError:
            logger.warning("telegram_network_error_reply", original_error=str(e))


async def check_connection(application: Application) -> None:
    """post_init hook: make sure the Bot API is reachable before polling starts."""
    for attempt in range(1, MAX_STARTUP_RETRIES + 1):
        try:
            await application.bot.get_me()
            return
        except NetworkError as e:
            if attempt < MAX_STARTUP_RETRIES:
                logger.warning(
                    "telegram_startup_retry",
                    attempt=attempt,
                    max=MAX_STARTUP_RETRIES,
                    error=str(e),
                )
                await asyncio.sleep(STARTUP_RETRY_DELAY_S)
            else:
                logger.error("telegram_startup_connection_failed", error=str(e))
                raise RuntimeError(
                    "Cannot reach Telegram API after %d attempts. "
                    "Check TELEGRAM_PROXY, firewall, and DNS." % MAX_STARTUP_RETRIES
                ) from e


def run_telegram() -> None:
    """Start the Telegram bot with long-polling."""
    builder = (
        Application.builder()
        .token(TELEGRAM_BOT_TOKEN)
        .connect_timeout(TELEGRAM_CONNECT_TIMEOUT)
        .read_timeout(TELEGRAM_READ_TIMEOUT)
        .get_updates_connect_timeout(TELEGRAM_CONNECT_TIMEOUT)
        .get_updates_read_timeout(TELEGRAM_READ_TIMEOUT)
    )
    if TELEGRAM_PROXY:
        builder = builder.proxy(TELEGRAM_PROXY).get_updates_proxy(TELEGRAM_PROXY)

    app = builder.post_init(check_connection).build()
    app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, handle_telegram_message))
    app.run_polling(allowed_updates=Update.ALL_TYPES, bootstrap_retries=MAX_STARTUP_RETRIES)
