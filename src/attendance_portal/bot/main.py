from __future__ import annotations

import logging

from telegram import Update

from ..common.logging_utils import configure_logging
from ..main import load_settings
from .client import PortalClient
from .handlers import build_application

logger = logging.getLogger(__name__)


def main() -> None:
    settings = load_settings()
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    logging.getLogger("httpx").setLevel(logging.WARNING)

    token = getattr(settings, "TELEGRAM_BOT_TOKEN", "")
    if not token:
        raise SystemExit("TELEGRAM_BOT_TOKEN is not set")

    portal = PortalClient(
        getattr(settings, "API_URL"),
        bot_key=getattr(settings, "BOT_API_KEY", "") or None,
        timeout=float(getattr(settings, "API_TIMEOUT_SECONDS", 10)),
    )
    application = build_application(token, portal)

    logger.info("Telegram Attendance Bot is running against %s", portal.base_url)
    application.run_polling(allowed_updates=Update.ALL_TYPES)


if __name__ == "__main__":
    main()
