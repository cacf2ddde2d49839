from hnsearch.bot.middlewares.session import SessionMiddleware
from hnsearch.bot.middlewares.throttle import ThrottleMiddleware

__all__ = [
    "SessionMiddleware",
    "ThrottleMiddleware",
]
