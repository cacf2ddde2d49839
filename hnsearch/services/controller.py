"""Search session controller: drives fetches and owns loading/error state."""

from __future__ import annotations

from typing import Callable, Protocol

from hnsearch.core.reducer import (
    Action,
    FetchFailed,
    FilterChanged,
    ItemDismissed,
    MoreRequested,
    PageReceived,
    QuerySubmitted,
    SortChanged,
    next_page,
    reduce,
)
from hnsearch.core.view import derive_view
from hnsearch.domain.models import Item, QueryState, SearchResult, SessionState, SortKey
from hnsearch.logging import logger
from hnsearch.services.exceptions import FetchFailure

StateListener = Callable[[SessionState], None]


class PageFetcher(Protocol):
    async def fetch_page(self, term: str, page: int) -> SearchResult: ...


class QueryController:
    """Holds one session's state and applies user intents to it.

    Fetches are not tracked: overlapping ``submit_query``/``request_more``
    calls merge in completion order and each completion clears the loading
    flag.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        *,
        search_term: str = "",
        filter_term: str = "",
        session_id: object | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._session_id = session_id
        self._state = SessionState(
            query=QueryState(search_term=search_term, filter_term=filter_term)
        )
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> SessionState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action: Action) -> SessionState:
        self._state = reduce(self._state, action)
        for listener in list(self._listeners):
            listener(self._state)
        return self._state

    async def start(self) -> SessionState:
        """Run the initial search for the configured term."""

        return await self.submit_query(self._state.query.search_term)

    async def submit_query(self, term: str) -> SessionState:
        self.dispatch(QuerySubmitted(term))
        logger.info("search_submitted", session=self._session_id, term=term)
        return await self._fetch(term, 0)

    async def request_more(self) -> SessionState:
        page = next_page(self._state)
        term = self._state.query.search_term
        self.dispatch(MoreRequested())
        logger.info("search_more_requested", session=self._session_id, term=term, page=page)
        return await self._fetch(term, page)

    def change_filter_term(self, term: str) -> SessionState:
        return self.dispatch(FilterChanged(term))

    def change_sort_key(self, key: SortKey) -> SessionState:
        return self.dispatch(SortChanged(key))

    def dismiss(self, object_id: str) -> SessionState:
        before = self._state
        after = self.dispatch(ItemDismissed(object_id))
        logger.info(
            "search_item_dismissed",
            session=self._session_id,
            object_id=object_id,
            removed=after is not before,
        )
        return after

    def view(self) -> list[Item]:
        state = self._state
        if state.result is None:
            return []
        return derive_view(state.result.hits, state.query.filter_term, state.query.sort_key)

    async def _fetch(self, term: str, page: int) -> SessionState:
        try:
            result = await self._fetcher.fetch_page(term, page)
        except FetchFailure as exc:
            logger.warning(
                "search_fetch_failed",
                session=self._session_id,
                term=term,
                page=page,
                status_code=exc.status_code,
                error=str(exc),
            )
            return self.dispatch(FetchFailed(exc))

        state = self.dispatch(PageReceived(result))
        logger.info(
            "search_page_merged",
            session=self._session_id,
            term=term,
            page=result.page,
            received=len(result.hits),
            accumulated=len(state.result.hits) if state.result else 0,
        )
        return state


__all__ = ["PageFetcher", "QueryController", "StateListener"]
