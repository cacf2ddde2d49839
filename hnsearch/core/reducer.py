"""Pure session transitions: ``reduce(state, action) -> state``."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Union

from hnsearch.core.store import dismiss, merge_page
from hnsearch.domain.models import SearchResult, SessionState, SortKey
from hnsearch.services.exceptions import FetchFailure


@dataclass(frozen=True, slots=True)
class QuerySubmitted:
    term: str


@dataclass(frozen=True, slots=True)
class MoreRequested:
    pass


@dataclass(frozen=True, slots=True)
class PageReceived:
    result: SearchResult


@dataclass(frozen=True, slots=True)
class FetchFailed:
    error: FetchFailure


@dataclass(frozen=True, slots=True)
class FilterChanged:
    term: str


@dataclass(frozen=True, slots=True)
class SortChanged:
    key: SortKey


@dataclass(frozen=True, slots=True)
class ItemDismissed:
    object_id: str


Action = Union[
    QuerySubmitted,
    MoreRequested,
    PageReceived,
    FetchFailed,
    FilterChanged,
    SortChanged,
    ItemDismissed,
]


def next_page(state: SessionState) -> int:
    return 0 if state.result is None else state.result.page + 1


def reduce(state: SessionState, action: Action) -> SessionState:
    query = state.query
    if isinstance(action, QuerySubmitted):
        return replace(state, query=replace(query, search_term=action.term, is_loading=True))
    if isinstance(action, MoreRequested):
        return replace(state, query=replace(query, is_loading=True))
    if isinstance(action, PageReceived):
        return SessionState(
            query=replace(query, is_loading=False, error=None),
            result=merge_page(state.result, action.result),
        )
    if isinstance(action, FetchFailed):
        # Accumulated hits survive a failed fetch.
        return replace(state, query=replace(query, is_loading=False, error=action.error))
    if isinstance(action, FilterChanged):
        return replace(state, query=replace(query, filter_term=action.term))
    if isinstance(action, SortChanged):
        return replace(state, query=replace(query, sort_key=action.key))
    if isinstance(action, ItemDismissed):
        if state.result is None:
            return state
        updated = dismiss(state.result, action.object_id)
        if updated is state.result:
            return state
        return replace(state, result=updated)
    raise TypeError(f"Unsupported action: {action!r}")


__all__ = [
    "Action",
    "FetchFailed",
    "FilterChanged",
    "ItemDismissed",
    "MoreRequested",
    "PageReceived",
    "QuerySubmitted",
    "SortChanged",
    "next_page",
    "reduce",
]
