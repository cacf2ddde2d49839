"""Derive the displayed hit list from accumulated hits, sort key and filter term."""

from __future__ import annotations

from typing import Callable, Iterable, Sequence

from hnsearch.domain.models import Item, SortKey

SortStrategy = Callable[[Sequence[Item]], list[Item]]


def _ascending(key: Callable[[Item], object]) -> SortStrategy:
    def strategy(hits: Sequence[Item]) -> list[Item]:
        return sorted(hits, key=key)

    return strategy


def _descending(key: Callable[[Item], int]) -> SortStrategy:
    # Negated key, not reverse=True: ties must keep input order.
    def strategy(hits: Sequence[Item]) -> list[Item]:
        return sorted(hits, key=lambda item: -key(item))

    return strategy


SORT_STRATEGIES: dict[SortKey, SortStrategy] = {
    SortKey.NONE: list,
    SortKey.TITLE: _ascending(lambda item: item.title or ""),
    SortKey.AUTHOR: _ascending(lambda item: item.author),
    SortKey.COMMENTS: _descending(lambda item: item.num_comments),
    SortKey.POINTS: _descending(lambda item: item.points),
}


def sort_hits(hits: Sequence[Item], sort_key: SortKey) -> list[Item]:
    return SORT_STRATEGIES[sort_key](hits)


def matches_filter(item: Item, filter_term: str) -> bool:
    """Titleless items never match, not even the empty filter."""

    if not item.title:
        return False
    return filter_term.lower() in item.title.lower()


def filter_hits(hits: Iterable[Item], filter_term: str) -> list[Item]:
    return [item for item in hits if matches_filter(item, filter_term)]


def derive_view(hits: Sequence[Item], filter_term: str, sort_key: SortKey) -> list[Item]:
    """Sort the full set first, then filter."""

    return filter_hits(sort_hits(hits, sort_key), filter_term)


__all__ = [
    "SORT_STRATEGIES",
    "derive_view",
    "filter_hits",
    "matches_filter",
    "sort_hits",
]
