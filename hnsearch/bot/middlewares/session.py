"""Middleware that injects the chat's search controller per update."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict

from aiogram import BaseMiddleware
from aiogram.types import CallbackQuery, Message, TelegramObject

from hnsearch.logging import chat_log_context
from hnsearch.services.sessions import SessionRegistry


class SessionMiddleware(BaseMiddleware):
    def __init__(self, registry: SessionRegistry) -> None:
        super().__init__()
        self.registry = registry

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        chat_id = self._extract_chat_id(event)
        data["sessions"] = self.registry
        if chat_id is None:
            return await handler(event, data)
        data["controller"] = self.registry.get(chat_id)
        with chat_log_context(chat_id):
            return await handler(event, data)

    @staticmethod
    def _extract_chat_id(event: TelegramObject) -> int | None:
        if isinstance(event, Message):
            return event.chat.id
        if isinstance(event, CallbackQuery) and event.message is not None:
            return event.message.chat.id
        return None


__all__ = ["SessionMiddleware"]
