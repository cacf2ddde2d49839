"""Shared pytest fixtures for the search core and bot tests."""

from __future__ import annotations

import pytest

from hnsearch.domain.models import Item


@pytest.fixture
def make_item():
    def factory(object_id: str, **fields) -> Item:
        fields.setdefault("title", f"Story {object_id}")
        fields.setdefault("url", f"https://example.com/{object_id}")
        fields.setdefault("author", "pg")
        return Item(objectID=object_id, **fields)

    return factory


@pytest.fixture(autouse=True)
def clear_settings_cache():
    from hnsearch.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
