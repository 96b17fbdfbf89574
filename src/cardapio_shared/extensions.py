"""
Shared Flask extensions.
"""

from flask_wtf.csrf import CSRFProtect

from cardapio_shared.query_cache import QueryCache, QueryRefetcher

# CSRF Protection instance (shared across apps)
csrf = CSRFProtect()


class QueryState:
    """Per-application query cache and refetcher, stored in ``app.extensions``."""

    def __init__(self, cache: QueryCache | None = None, refetcher: QueryRefetcher | None = None):
        self.cache = cache or QueryCache()
        self.refetcher = refetcher or QueryRefetcher()

    def init_app(self, app) -> None:
        app.extensions["cardapio_queries"] = self
