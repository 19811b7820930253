from __future__ import annotations

import asyncio
import logging

from telegram import Update
from telegram.constants import ParseMode
from telegram.ext import Application, CommandHandler, ContextTypes

from . import messages
from .client import PortalClient, PortalError

logger = logging.getLogger(__name__)

PORTAL_KEY = "portal"


def _portal(context: ContextTypes.DEFAULT_TYPE) -> PortalClient:
    return context.application.bot_data[PORTAL_KEY]


async def _reply(update: Update, text: str, *, markdown: bool = True) -> None:
    await update.effective_message.reply_text(text, parse_mode=ParseMode.MARKDOWN if markdown else None)


async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await _reply(update, messages.welcome(update.effective_user.first_name), markdown=False)


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await _reply(update, messages.help_text())


async def login_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    user = update.effective_user
    try:
        record = await asyncio.to_thread(_portal(context).check_in, str(user.id))
    except PortalError as e:
        logger.warning("Check-in failed for %s: %s %s", user.id, e.status, e.message)
        await _reply(update, messages.check_in_error(e))
        return
    await _reply(update, messages.checked_in(user.first_name, record))


async def logout_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    user = update.effective_user
    try:
        record = await asyncio.to_thread(_portal(context).check_out, str(user.id))
    except PortalError as e:
        logger.warning("Check-out failed for %s: %s %s", user.id, e.status, e.message)
        await _reply(update, messages.check_out_error(e))
        return
    await _reply(update, messages.checked_out(user.first_name, record))


async def status_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    user = update.effective_user
    try:
        today = await asyncio.to_thread(_portal(context).today, str(user.id))
    except PortalError as e:
        logger.warning("Status check failed for %s: %s %s", user.id, e.status, e.message)
        await _reply(update, messages.lookup_error(e, "check status"))
        return
    await _reply(update, messages.status(today.get("record")))


async def employee_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    user = update.effective_user
    try:
        employee = await asyncio.to_thread(_portal(context).employee_by_telegram, str(user.id))
    except PortalError as e:
        logger.warning("Employee lookup failed for %s: %s %s", user.id, e.status, e.message)
        await _reply(update, messages.lookup_error(e, "retrieve your information"))
        return
    await _reply(update, messages.employee_info(employee))


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    logger.error("Unhandled bot error", exc_info=context.error)


def build_application(token: str, portal: PortalClient) -> Application:
    application = Application.builder().token(token).build()
    application.bot_data[PORTAL_KEY] = portal

    application.add_handler(CommandHandler("start", start_command))
    application.add_handler(CommandHandler("help", help_command))
    application.add_handler(CommandHandler("login", login_command))
    application.add_handler(CommandHandler("logout", logout_command))
    application.add_handler(CommandHandler("status", status_command))
    application.add_handler(CommandHandler("employee", employee_command))
    application.add_error_handler(error_handler)
    return application
