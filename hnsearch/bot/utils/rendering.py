"""Turn a session snapshot into Telegram message text and keyboard."""

from __future__ import annotations

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup

from hnsearch.config import RenderSettings
from hnsearch.core.view import derive_view
from hnsearch.domain.models import Item, SessionState, SortKey

# Telegram messages are limited to 4096 characters.
TELEGRAM_MESSAGE_LIMIT = 3900
CALLBACK_DATA_LIMIT = 64

LOADING_TEXT = "Loading ..."
ERROR_TEXT = "Something went wrong."
EMPTY_SESSION_TEXT = "No search yet. Send /search <term> to start."
NO_MATCHES_TEXT = "No stories match the current filter."

DISMISS_PREFIX = "dismiss:"
SORT_PREFIX = "sort:"
MORE_CALLBACK = "more"


def _format_item(position: int, item: Item, *, show_url: bool) -> str:
    lines = [
        f"{position}. {item.title}",
        f"   by {item.author or 'unknown'} | {item.num_comments} comments | {item.points} points",
    ]
    if show_url and item.url:
        lines.append(f"   {item.url}")
    return "\n".join(lines)


def _header(state: SessionState, shown: int) -> str:
    query = state.query
    total = len(state.result.hits) if state.result else 0
    page = state.result.page if state.result else 0
    parts = [f'Search: "{query.search_term}"']
    if query.filter_term:
        parts.append(f'filter: "{query.filter_term}"')
    if query.sort_key is not SortKey.NONE:
        parts.append(f"sort: {query.sort_key.value}")
    parts.append(f"showing {shown} of {total} (page {page})")
    return " | ".join(parts)


def render_text(state: SessionState, settings: RenderSettings | None = None) -> str:
    """Pick the loading, error or list view for the snapshot."""

    settings = settings or RenderSettings()
    if state.query.is_loading:
        return LOADING_TEXT
    if state.query.error is not None:
        return ERROR_TEXT
    if state.result is None:
        return EMPTY_SESSION_TEXT

    visible = derive_view(state.result.hits, state.query.filter_term, state.query.sort_key)
    shown = visible[: settings.max_items]
    if not shown:
        return f"{_header(state, 0)}\n\n{NO_MATCHES_TEXT}"

    text = _header(state, len(shown))
    for position, item in enumerate(shown, start=1):
        block = _format_item(position, item, show_url=settings.show_urls)
        if len(text) + len(block) + 2 > TELEGRAM_MESSAGE_LIMIT:
            text += "\n\n...[truncated]"
            break
        text += f"\n\n{block}"
    return text


def render_keyboard(
    state: SessionState,
    settings: RenderSettings | None = None,
) -> InlineKeyboardMarkup | None:
    settings = settings or RenderSettings()
    if state.query.is_loading or state.result is None:
        return None

    rows: list[list[InlineKeyboardButton]] = []
    if state.query.error is None:
        visible = derive_view(state.result.hits, state.query.filter_term, state.query.sort_key)
        dismiss_row: list[InlineKeyboardButton] = []
        for position, item in enumerate(visible[: settings.max_items], start=1):
            callback_data = f"{DISMISS_PREFIX}{item.object_id}"
            if len(callback_data.encode("utf-8")) > CALLBACK_DATA_LIMIT:
                continue
            dismiss_row.append(
                InlineKeyboardButton(text=f"Dismiss {position}", callback_data=callback_data)
            )
            if len(dismiss_row) == 5:
                rows.append(dismiss_row)
                dismiss_row = []
        if dismiss_row:
            rows.append(dismiss_row)

        rows.append(
            [
                InlineKeyboardButton(
                    text=key.value.capitalize(),
                    callback_data=f"{SORT_PREFIX}{key.value}",
                )
                for key in SortKey
            ]
        )

    if state.result.has_more:
        rows.append([InlineKeyboardButton(text="More", callback_data=MORE_CALLBACK)])
    if not rows:
        return None
    return InlineKeyboardMarkup(inline_keyboard=rows)


__all__ = [
    "DISMISS_PREFIX",
    "EMPTY_SESSION_TEXT",
    "ERROR_TEXT",
    "LOADING_TEXT",
    "MORE_CALLBACK",
    "NO_MATCHES_TEXT",
    "SORT_PREFIX",
    "render_keyboard",
    "render_text",
]
