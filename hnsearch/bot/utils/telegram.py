"""Telegram sending helpers with retry support."""

from __future__ import annotations

from typing import Any

from aiogram.exceptions import TelegramBadRequest, TelegramNetworkError
from aiogram.types import Message

from hnsearch.logging import logger
from hnsearch.utils.retry import retry_async

TELEGRAM_SEND_MAX_ATTEMPTS = 3
TELEGRAM_SEND_BASE_DELAY = 0.3


async def answer_with_retry(message: Message, text: str, **kwargs: Any) -> Any:
    """Send a reply with retry/backoff."""

    async def _send():
        return await message.answer(text, **kwargs)

    return await retry_async(
        _send,
        max_attempts=TELEGRAM_SEND_MAX_ATTEMPTS,
        base_delay=TELEGRAM_SEND_BASE_DELAY,
        retry_on=(TelegramNetworkError,),
        logger=logger,
        operation_name="telegram_answer",
    )


async def edit_with_retry(message: Message, text: str, **kwargs: Any) -> Any:
    """Replace a message's text; an unchanged message is not an error."""

    async def _edit():
        return await message.edit_text(text, **kwargs)

    try:
        return await retry_async(
            _edit,
            max_attempts=TELEGRAM_SEND_MAX_ATTEMPTS,
            base_delay=TELEGRAM_SEND_BASE_DELAY,
            retry_on=(TelegramNetworkError,),
            logger=logger,
            operation_name="telegram_edit",
        )
    except TelegramBadRequest as exc:
        if "message is not modified" not in str(exc):
            raise
        logger.debug("telegram_edit_unchanged", message_id=getattr(message, "message_id", None))
        return None


__all__ = ["answer_with_retry", "edit_with_retry"]
