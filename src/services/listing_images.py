"""Listing image URL resolution and primary-first ordering."""

from typing import Callable, Optional, Sequence
from supabase import Client
from src.models.listing import ListingImageRow
from src.utils.config import ListingsConfig


def resolve_image_url(client: Client, storage_path: str, bucket: Optional[str] = None) -> str:
    """Public URL for an object in the listing images bucket."""
    return client.storage.from_(bucket or ListingsConfig.LISTING_IMAGES_BUCKET).get_public_url(storage_path)


class ImageUrlResolver:
    """Resolves storage paths against one client and bucket."""

    def __init__(self, client: Client, bucket: Optional[str] = None):
        self.client = client
        self.bucket = bucket or ListingsConfig.LISTING_IMAGES_BUCKET

    def __call__(self, storage_path: str) -> str:
        return resolve_image_url(self.client, storage_path, self.bucket)


def order_primary_first(urls: list[str], primary_flags: Sequence[bool]) -> list[str]:
    """
    Move the first URL flagged primary to the front.

    Only one URL is moved and the rest keep their relative order.
    """
    ordered = list(urls)
    primary_index = next((i for i, flag in enumerate(primary_flags) if flag), -1)
    if 0 < primary_index < len(ordered):
        ordered.insert(0, ordered.pop(primary_index))
    return ordered


def resolve_listing_images(images: Optional[Sequence[dict]], resolver: Callable[[str], str]) -> list[str]:
    """Resolve a listing's nested image rows to public URLs, primary first."""
    if not images:
        return []

    rows = [ListingImageRow.model_validate(image) for image in images]
    urls = [resolver(row.storage_path) for row in rows]
    return order_primary_first(urls, [bool(row.is_primary) for row in rows])
