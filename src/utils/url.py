"""Public URL helpers for listing pages."""

from src.utils.config import ListingsConfig


def absolute_path(path: str) -> str:
    """Normalize a route path: drop the site prefix if present and ensure a leading slash."""
    prefix = ListingsConfig.SITE_PATH_PREFIX
    processed = path or ""
    if prefix and processed.startswith(prefix):
        processed = processed[len(prefix):]

    return processed if processed.startswith("/") else f"/{processed}"


def full_url(path: str) -> str:
    """Build a fully qualified public URL for a route path."""
    return f"{ListingsConfig.SITE_DOMAIN}{ListingsConfig.SITE_PATH_PREFIX}{absolute_path(path)}"


def listing_url(listing_id: str) -> str:
    """Public page URL for a listing."""
    return full_url(f"/listings/{listing_id}")
