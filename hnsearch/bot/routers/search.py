"""Telegram handlers translating chat input into search intents."""

from __future__ import annotations

from typing import Awaitable, Callable

from aiogram import F, Router
from aiogram.filters import Command, CommandStart
from aiogram.types import CallbackQuery, Message

from hnsearch.bot.utils.rendering import (
    DISMISS_PREFIX,
    LOADING_TEXT,
    MORE_CALLBACK,
    SORT_PREFIX,
    render_keyboard,
    render_text,
)
from hnsearch.bot.utils.telegram import answer_with_retry, edit_with_retry
from hnsearch.config import get_settings
from hnsearch.domain.models import SessionState, SortKey
from hnsearch.logging import logger
from hnsearch.services.controller import QueryController
from hnsearch.services.sessions import SessionRegistry

router = Router()
settings = get_settings()

HELP_TEXT = "\n".join(
    [
        "Hacker News search",
        "/search <term> - run a new search (plain text works too)",
        "/more - load the next page of results",
        "/filter [text] - only show titles containing text; no text clears it",
        "/sort <" + "|".join(key.value for key in SortKey) + "> - order the list",
        "Use the Dismiss buttons to hide a story.",
    ]
)


def _command_argument(message: Message) -> str:
    parts = message.text.split(maxsplit=1) if message.text else []
    return parts[1].strip() if len(parts) > 1 else ""


async def _send_rendered(message: Message, state: SessionState) -> None:
    await answer_with_retry(
        message,
        render_text(state, settings.render),
        reply_markup=render_keyboard(state, settings.render),
        parse_mode=None,
    )


async def _edit_rendered(message: Message, state: SessionState) -> None:
    await edit_with_retry(
        message,
        render_text(state, settings.render),
        reply_markup=render_keyboard(state, settings.render),
        parse_mode=None,
    )


async def _fetch_and_render(
    message: Message,
    operation: Callable[[], Awaitable[SessionState]],
) -> None:
    placeholder = await answer_with_retry(message, LOADING_TEXT, parse_mode=None)
    state = await operation()
    await _edit_rendered(placeholder, state)


@router.message(CommandStart())
async def handle_start(message: Message, sessions: SessionRegistry | None = None) -> None:
    if sessions is None:
        return
    controller = sessions.reset(message.chat.id)
    await answer_with_retry(message, HELP_TEXT, parse_mode=None)
    await _fetch_and_render(message, controller.start)


@router.message(Command("help"))
async def handle_help(message: Message) -> None:
    await answer_with_retry(message, HELP_TEXT, parse_mode=None)


@router.message(Command("search"))
async def handle_search(message: Message, controller: QueryController | None = None) -> None:
    if controller is None:
        return
    term = _command_argument(message)
    if not term:
        await answer_with_retry(message, "Usage: /search <term>", parse_mode=None)
        return
    await _fetch_and_render(message, lambda: controller.submit_query(term))


@router.message(Command("more"))
async def handle_more(message: Message, controller: QueryController | None = None) -> None:
    if controller is None:
        return
    await _fetch_and_render(message, controller.request_more)


@router.message(Command("filter"))
async def handle_filter(message: Message, controller: QueryController | None = None) -> None:
    if controller is None:
        return
    state = controller.change_filter_term(_command_argument(message))
    await _send_rendered(message, state)


@router.message(Command("sort"))
async def handle_sort(message: Message, controller: QueryController | None = None) -> None:
    if controller is None:
        return
    try:
        key = SortKey.parse(_command_argument(message))
    except ValueError as exc:
        await answer_with_retry(message, str(exc), parse_mode=None)
        return
    state = controller.change_sort_key(key)
    await _send_rendered(message, state)


@router.message(F.text)
async def handle_text(message: Message, controller: QueryController | None = None) -> None:
    if controller is None:
        return
    text = message.text.strip()
    if not text or text.startswith("/"):
        await answer_with_retry(message, HELP_TEXT, parse_mode=None)
        return
    await _fetch_and_render(message, lambda: controller.submit_query(text))


@router.callback_query(F.data.startswith(DISMISS_PREFIX))
async def handle_dismiss_callback(
    callback: CallbackQuery,
    controller: QueryController | None = None,
) -> None:
    if controller is None or callback.message is None:
        await callback.answer()
        return
    object_id = callback.data[len(DISMISS_PREFIX):]
    state = controller.dismiss(object_id)
    await callback.answer("Dismissed")
    await _edit_rendered(callback.message, state)


@router.callback_query(F.data.startswith(SORT_PREFIX))
async def handle_sort_callback(
    callback: CallbackQuery,
    controller: QueryController | None = None,
) -> None:
    if controller is None or callback.message is None:
        await callback.answer()
        return
    try:
        key = SortKey.parse(callback.data[len(SORT_PREFIX):])
    except ValueError:
        logger.warning("unknown_sort_callback", data=callback.data)
        await callback.answer("Unknown sort order")
        return
    state = controller.change_sort_key(key)
    await callback.answer()
    await _edit_rendered(callback.message, state)


@router.callback_query(F.data == MORE_CALLBACK)
async def handle_more_callback(
    callback: CallbackQuery,
    controller: QueryController | None = None,
) -> None:
    if controller is None or callback.message is None:
        await callback.answer()
        return
    await callback.answer()
    await edit_with_retry(callback.message, LOADING_TEXT, parse_mode=None)
    state = await controller.request_more()
    await _edit_rendered(callback.message, state)


__all__ = ["router"]
