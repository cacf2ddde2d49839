"""In-memory registry of per-chat search sessions."""

from __future__ import annotations

from collections import OrderedDict

from hnsearch.config import AppSettings
from hnsearch.logging import logger
from hnsearch.services.controller import PageFetcher, QueryController


class SessionRegistry:
    """Creates controllers lazily and evicts the least recently used one."""

    def __init__(self, fetcher: PageFetcher, settings: AppSettings) -> None:
        self._fetcher = fetcher
        self._settings = settings
        self._sessions: OrderedDict[int, QueryController] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, chat_id: object) -> bool:
        return chat_id in self._sessions

    def get(self, chat_id: int) -> QueryController:
        controller = self._sessions.get(chat_id)
        if controller is not None:
            self._sessions.move_to_end(chat_id)
            return controller

        controller = QueryController(
            self._fetcher,
            search_term=self._settings.default_query,
            filter_term=self._settings.default_filter,
            session_id=chat_id,
        )
        self._sessions[chat_id] = controller
        while len(self._sessions) > self._settings.max_sessions:
            evicted, _ = self._sessions.popitem(last=False)
            logger.info("search_session_evicted", session=evicted)
        return controller

    def reset(self, chat_id: int) -> QueryController:
        self._sessions.pop(chat_id, None)
        return self.get(chat_id)


__all__ = ["SessionRegistry"]
