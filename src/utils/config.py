"""Environment-backed settings for Supabase, storage and public URLs."""

import os
from typing import Optional


class ListingsConfig:
    """Centralized listings configuration."""

    SUPABASE_URL = os.environ.get("SUPABASE_URL")
    # Public reads only need the anon key; the service role key is accepted for server-side deployments
    SUPABASE_KEY = os.environ.get("SUPABASE_ANON_KEY") or os.environ.get("SUPABASE_SERVICE_ROLE_KEY")
    LISTING_IMAGES_BUCKET = os.environ.get("LISTING_IMAGES_BUCKET", "listing-images")
    SITE_DOMAIN = os.environ.get("SITE_DOMAIN", "https://roverpass.com").rstrip("/")
    SITE_PATH_PREFIX = os.environ.get("SITE_PATH_PREFIX", "/rv-parks-for-sale").rstrip("/")

    @classmethod
    def supabase_credentials(cls) -> tuple[Optional[str], Optional[str]]:
        """Return (url, key), re-reading the environment for values set after import."""
        url = os.environ.get("SUPABASE_URL") or cls.SUPABASE_URL
        key = (
            os.environ.get("SUPABASE_ANON_KEY")
            or os.environ.get("SUPABASE_SERVICE_ROLE_KEY")
            or cls.SUPABASE_KEY
        )
        return url, key
