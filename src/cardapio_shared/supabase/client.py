"""
Supabase client bootstrap for database reads and RPC calls.
"""

from __future__ import annotations

import logging
import os

from supabase import Client, create_client

from cardapio_shared.config import AppConfig, load_config

logger = logging.getLogger(__name__)


class SupabaseClientFactory:
    """Lazily built, process wide client using the public anon key."""

    _client: Client | None = None

    @classmethod
    def get_client(cls, config: AppConfig | None = None) -> Client:
        if cls._client is None:
            config = config or load_config(os.getenv("APP_NAME", "cardapio"))
            if not config.supabase_url or not config.supabase_anon_key:
                raise RuntimeError("Supabase credentials missing (SUPABASE_URL / SUPABASE_ANON_KEY)")
            cls._client = create_client(config.supabase_url, config.supabase_anon_key)
            logger.info("Supabase client initialized for %s", config.supabase_url)
        return cls._client
