"""Accumulated result set transitions: page merges and dismissal."""

from __future__ import annotations

from dataclasses import replace

from hnsearch.domain.models import ResultState, SearchResult


def merge_page(state: ResultState | None, incoming: SearchResult) -> ResultState:
    """Merge an incoming page into the accumulated state.

    Page 0 always replaces whatever was accumulated; any other page is
    appended after the existing hits. Duplicated ``object_id`` values are kept.
    """

    if incoming.page == 0 or state is None:
        previous = ()
    else:
        previous = state.hits
    return ResultState(
        hits=(*previous, *incoming.hits),
        page=incoming.page,
        nb_pages=incoming.nb_pages,
    )


def dismiss(state: ResultState, object_id: str) -> ResultState:
    """Drop every hit carrying ``object_id``; unknown ids leave the hits as is."""

    remaining = tuple(item for item in state.hits if item.object_id != object_id)
    if len(remaining) == len(state.hits):
        return state
    return replace(state, hits=remaining)


__all__ = ["dismiss", "merge_page"]
