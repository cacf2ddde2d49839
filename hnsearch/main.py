"""Application entrypoint."""

from __future__ import annotations

import asyncio

import httpx
from aiogram import Bot, Dispatcher
from aiogram.client.session.aiohttp import AiohttpSession

from hnsearch.bot.middlewares import SessionMiddleware, ThrottleMiddleware
from hnsearch.bot.routers import setup_routers
from hnsearch.config import get_settings
from hnsearch.logging import configure_logging, logger
from hnsearch.services.search_api import HackerNewsSearchClient
from hnsearch.services.sessions import SessionRegistry


async def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level_number(), log_format=settings.log_format)
    if settings.telegram_token is None:
        raise RuntimeError("HNSEARCH_TELEGRAM_TOKEN is not configured.")

    session = (
        AiohttpSession(proxy=settings.telegram_proxy) if settings.telegram_proxy else None
    )
    bot = Bot(token=settings.telegram_token.get_secret_value(), session=session)
    dp = Dispatcher()
    dp.include_router(setup_routers())

    async with httpx.AsyncClient() as http_client:
        search_client = HackerNewsSearchClient(http_client, settings.search_api)
        registry = SessionRegistry(search_client, settings)

        # Throttle first so rejected updates never create a session.
        throttle_middleware = ThrottleMiddleware(settings)
        session_middleware = SessionMiddleware(registry)
        dp.message.middleware(throttle_middleware)
        dp.message.middleware(session_middleware)
        dp.callback_query.middleware(throttle_middleware)
        dp.callback_query.middleware(session_middleware)

        logger.info(
            "bot_starting",
            environment=settings.environment,
            search_base=settings.search_api.search_base(),
        )
        await dp.start_polling(bot)


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
