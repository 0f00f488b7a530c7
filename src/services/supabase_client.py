"""Supabase client wrapper with async context manager support."""

from typing import Optional
from supabase import create_client, Client
from supabase.client import ClientOptions
from src.utils.config import ListingsConfig
from src.utils.errors import SupabaseError
import logging

logger = logging.getLogger(__name__)

# Global client instance (singleton pattern)
_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """Get or create Supabase client singleton."""
    global _client

    if _client is None:
        url, key = ListingsConfig.supabase_credentials()

        if not url or not key:
            raise SupabaseError("SUPABASE_URL and SUPABASE_ANON_KEY must be set")

        # Read-only public access: no user session to keep alive
        options = ClientOptions(
            auto_refresh_token=False,
            persist_session=False,
        )

        try:
            _client = create_client(url, key, options)
        except Exception as e:
            raise SupabaseError(f"Failed to create Supabase client: {e}") from e
        logger.info("Supabase client initialized", extra={"url": url})

    return _client


class SupabaseClient:
    """Async context manager for Supabase client."""

    def __init__(self):
        self.client: Optional[Client] = None

    async def __aenter__(self) -> Client:
        self.client = get_supabase_client()
        return self.client

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            logger.error(
                "Supabase operation error",
                extra={"error": str(exc_val), "type": exc_type.__name__}
            )
        return False
