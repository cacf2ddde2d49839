"""Models shared across the core and the bot layer.

Wire data (``Item``, ``SearchResult``) is parsed with pydantic; the state
records owned by the controller are frozen dataclasses replaced on every
transition.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from hnsearch.services.exceptions import FetchFailure


class Item(BaseModel):
    """One search hit. Extra API fields are dropped."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    object_id: str = Field(alias="objectID")
    title: str | None = None
    url: str = ""
    author: str = ""
    num_comments: int = Field(default=0, ge=0)
    points: int = Field(default=0, ge=0)

    @field_validator("object_id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("url", "author", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("num_comments", "points", mode="before")
    @classmethod
    def _null_to_zero(cls, value: Any) -> Any:
        return 0 if value is None else value


class SearchResult(BaseModel):
    """A single page returned by the search endpoint."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    hits: tuple[Item, ...]
    page: int = Field(ge=0)
    nb_pages: int | None = Field(default=None, alias="nbPages")
    nb_hits: int | None = Field(default=None, alias="nbHits")
    hits_per_page: int | None = Field(default=None, alias="hitsPerPage")


class SortKey(str, Enum):
    NONE = "none"
    TITLE = "title"
    AUTHOR = "author"
    COMMENTS = "comments"
    POINTS = "points"

    @classmethod
    def parse(cls, text: str | None) -> "SortKey":
        """Resolve a user-supplied name; raises ``ValueError`` when unknown."""

        name = (text or "").strip().lower()
        if not name:
            return cls.NONE
        try:
            return cls(name)
        except ValueError:
            choices = ", ".join(key.value for key in cls)
            raise ValueError(f"Unknown sort key {text!r}; expected one of: {choices}") from None


@dataclass(frozen=True, slots=True)
class ResultState:
    hits: tuple[Item, ...] = ()
    page: int = 0
    nb_pages: int | None = None

    @property
    def has_more(self) -> bool:
        if self.nb_pages is None:
            return True
        return self.page + 1 < self.nb_pages


@dataclass(frozen=True, slots=True)
class QueryState:
    search_term: str = ""
    filter_term: str = ""
    sort_key: SortKey = SortKey.NONE
    is_loading: bool = False
    error: FetchFailure | None = None


@dataclass(frozen=True, slots=True)
class SessionState:
    query: QueryState = field(default_factory=QueryState)
    result: ResultState | None = None


__all__ = [
    "Item",
    "QueryState",
    "ResultState",
    "SearchResult",
    "SessionState",
    "SortKey",
]
