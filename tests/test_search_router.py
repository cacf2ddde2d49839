"""Tests for search router commands and callbacks with dummy Telegram objects."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from hnsearch.bot.routers import search as search_router
from hnsearch.bot.routers.search import (
    HELP_TEXT,
    handle_dismiss_callback,
    handle_filter,
    handle_help,
    handle_more,
    handle_more_callback,
    handle_search,
    handle_sort,
    handle_sort_callback,
    handle_start,
    handle_text,
)
from hnsearch.bot.utils.rendering import ERROR_TEXT, LOADING_TEXT
from hnsearch.config import AppSettings
from hnsearch.domain.models import SearchResult, SortKey
from hnsearch.services.controller import QueryController
from hnsearch.services.exceptions import FetchFailure
from hnsearch.services.sessions import SessionRegistry


class DummyMessage:
    def __init__(self, text: str = "", chat_id: int = 1) -> None:
        self.text = text
        self.chat = SimpleNamespace(id=chat_id)
        self.message_id = 1
        self.answers: list["DummyMessage"] = []
        self.edits: list[tuple[str, dict]] = []
        self.sent_text = text
        self.kwargs: dict = {}

    async def answer(self, text: str, **kwargs):
        reply = DummyMessage(text, chat_id=self.chat.id)
        reply.kwargs = kwargs
        self.answers.append(reply)
        return reply

    async def edit_text(self, text: str, **kwargs):
        self.edits.append((text, kwargs))
        self.sent_text = text
        return self


class DummyCallback:
    def __init__(self, data: str, message: DummyMessage | None = None) -> None:
        self.data = data
        self.message = message or DummyMessage()
        self.answered: list[str | None] = []

    async def answer(self, text: str | None = None, **kwargs):
        self.answered.append(text)


class PagedFetcher:
    def __init__(self, pages: dict[int, SearchResult] | None = None, error: Exception | None = None) -> None:
        self.pages = pages or {}
        self.error = error
        self.calls: list[tuple[str, int]] = []

    async def fetch_page(self, term: str, page: int) -> SearchResult:
        self.calls.append((term, page))
        if self.error is not None:
            raise self.error
        return self.pages[page]


@pytest.fixture
def pages(make_item):
    return {
        0: SearchResult(
            hits=[
                make_item("1", title="Tampa Bay Rays", points=3),
                make_item("2", title="Florida news", points=9),
            ],
            page=0,
            nbPages=2,
        ),
        1: SearchResult(hits=[make_item("3", title="Tampa weather", points=1)], page=1, nbPages=2),
    }


@pytest.mark.asyncio
async def test_handle_start_resets_and_fetches_default(pages):
    fetcher = PagedFetcher(pages)
    registry = SessionRegistry(fetcher, AppSettings(default_query="tampa"))
    registry.get(1).change_filter_term("stale")
    message = DummyMessage("/start")

    await handle_start(message, sessions=registry)

    assert fetcher.calls == [("tampa", 0)]
    assert message.answers[0].text == HELP_TEXT
    placeholder = message.answers[1]
    assert placeholder.text == LOADING_TEXT
    final_text, kwargs = placeholder.edits[-1]
    assert "Tampa Bay Rays" in final_text
    assert kwargs["reply_markup"] is not None
    assert registry.get(1).state.query.filter_term == ""


@pytest.mark.asyncio
async def test_handle_search_requires_term():
    controller = QueryController(PagedFetcher())
    message = DummyMessage("/search")

    await handle_search(message, controller=controller)

    assert message.answers[0].text.startswith("Usage")


@pytest.mark.asyncio
async def test_handle_search_and_more(pages):
    fetcher = PagedFetcher(pages)
    controller = QueryController(fetcher)

    await handle_search(DummyMessage("/search tampa bay"), controller=controller)
    more = DummyMessage("/more")
    await handle_more(more, controller=controller)

    assert fetcher.calls == [("tampa bay", 0), ("tampa bay", 1)]
    final_text, _ = more.answers[0].edits[-1]
    assert "showing 3 of 3 (page 1)" in final_text


@pytest.mark.asyncio
async def test_failed_search_shows_error():
    controller = QueryController(PagedFetcher(error=FetchFailure("down")))
    message = DummyMessage("/search tampa")

    await handle_search(message, controller=controller)

    assert message.answers[0].edits[-1][0] == ERROR_TEXT
    assert controller.state.query.is_loading is False


@pytest.mark.asyncio
async def test_plain_text_runs_a_search(pages):
    fetcher = PagedFetcher(pages)
    controller = QueryController(fetcher)

    await handle_text(DummyMessage("florida"), controller=controller)

    assert fetcher.calls == [("florida", 0)]


@pytest.mark.asyncio
async def test_unknown_command_text_shows_help():
    controller = QueryController(PagedFetcher())
    message = DummyMessage("/unknown")

    await handle_text(message, controller=controller)

    assert message.answers[0].text == HELP_TEXT


@pytest.mark.asyncio
async def test_handle_help():
    message = DummyMessage("/help")
    await handle_help(message)
    assert "/filter" in message.answers[0].text


@pytest.mark.asyncio
async def test_filter_and_sort_commands_do_not_fetch(pages):
    fetcher = PagedFetcher(pages)
    controller = QueryController(fetcher)
    await controller.submit_query("tampa")

    filter_message = DummyMessage("/filter TAMPA")
    await handle_filter(filter_message, controller=controller)
    sort_message = DummyMessage("/sort points")
    await handle_sort(sort_message, controller=controller)

    assert len(fetcher.calls) == 1
    assert controller.state.query.filter_term == "TAMPA"
    assert controller.state.query.sort_key is SortKey.POINTS
    assert "Florida news" not in filter_message.answers[0].text
    assert "sort: points" in sort_message.answers[0].text

    clear = DummyMessage("/filter")
    await handle_filter(clear, controller=controller)
    assert controller.state.query.filter_term == ""


@pytest.mark.asyncio
async def test_sort_command_rejects_unknown_key():
    controller = QueryController(PagedFetcher())
    message = DummyMessage("/sort date")

    await handle_sort(message, controller=controller)

    assert "Unknown sort key" in message.answers[0].text
    assert controller.state.query.sort_key is SortKey.NONE


@pytest.mark.asyncio
async def test_dismiss_callback_edits_message(pages):
    controller = QueryController(PagedFetcher(pages))
    await controller.submit_query("tampa")
    callback = DummyCallback("dismiss:1")

    await handle_dismiss_callback(callback, controller=controller)

    assert callback.answered == ["Dismissed"]
    text, _ = callback.message.edits[-1]
    assert "Tampa Bay Rays" not in text
    assert [item.object_id for item in controller.state.result.hits] == ["2"]


@pytest.mark.asyncio
async def test_sort_callback(pages):
    controller = QueryController(PagedFetcher(pages))
    await controller.submit_query("tampa")
    callback = DummyCallback("sort:points")

    await handle_sort_callback(callback, controller=controller)

    text, _ = callback.message.edits[-1]
    assert text.index("Florida news") < text.index("Tampa Bay Rays")

    bad = DummyCallback("sort:nope")
    await handle_sort_callback(bad, controller=controller)
    assert bad.answered == ["Unknown sort order"]
    assert controller.state.query.sort_key is SortKey.POINTS


@pytest.mark.asyncio
async def test_more_callback_shows_loading_then_results(pages):
    fetcher = PagedFetcher(pages)
    controller = QueryController(fetcher)
    await controller.submit_query("tampa")
    callback = DummyCallback("more")

    await handle_more_callback(callback, controller=controller)

    edits = [text for text, _ in callback.message.edits]
    assert edits[0] == LOADING_TEXT
    assert "Tampa weather" in edits[-1]
    assert fetcher.calls[-1] == ("tampa", 1)


@pytest.mark.asyncio
async def test_handlers_ignore_missing_controller():
    message = DummyMessage("/search x")
    await handle_search(message)
    await handle_more(message)
    callback = DummyCallback("dismiss:1")
    await handle_dismiss_callback(callback)

    assert message.answers == []
    assert callback.answered == [None]


@pytest.mark.asyncio
async def test_render_settings_follow_module_settings(monkeypatch, pages):
    settings = AppSettings()
    settings.render.max_items = 1
    monkeypatch.setattr(search_router, "settings", settings)
    controller = QueryController(PagedFetcher(pages))
    message = DummyMessage("/search tampa")

    await handle_search(message, controller=controller)

    text, _ = message.answers[0].edits[-1]
    assert "showing 1 of 2" in text
