"""Listing normalizer - map raw listings rows to display records."""

from datetime import datetime, timezone
from typing import Any, Callable, Iterable
from src.models.listing import Listing, ListingBroker, ListingLocation, ListingStatus
from src.services.listing_images import resolve_listing_images
from src.utils.errors import ListingNormalizationError
from src.utils.logging import get_structured_logger, mask_user_id

logger = get_structured_logger(__name__)

ImageResolver = Callable[[str], str]


def placeholder_broker(user_id: Any) -> ListingBroker:
    """Contact card for a listing owner; only the owner id is real."""
    return ListingBroker(id=str(user_id) if user_id else "")


def normalize_listing_row(row: dict, resolver: ImageResolver, featured: bool = False) -> Listing:
    """
    Map one listings row (with nested listing_images) to a Listing.

    Falsy column values fall back to defaults, so a stored 0 and a missing
    value both come out as 0.

    Raises ListingNormalizationError when the row cannot be mapped.
    """
    try:
        listing_id = row["id"]
        if listing_id is None or listing_id == "":
            raise ValueError("row has no id")

        images = resolve_listing_images(row.get("listing_images"), resolver)

        return Listing(
            id=str(listing_id),
            title=row.get("title") or "Untitled Listing",
            description=row.get("description") or "",
            price=row.get("price") or 0,
            location=ListingLocation(
                address=row.get("address") or "",
                city=row.get("city") or "",
                state=row.get("state") or "",
                lat=row.get("latitude") or 0,
                lng=row.get("longitude") or 0,
            ),
            num_sites=row.get("num_sites") or 0,
            occupancy_rate=row.get("occupancy_rate") or 0,
            annual_revenue=row.get("annual_revenue") or 0,
            cap_rate=row.get("cap_rate") or 0,
            images=images,
            broker=placeholder_broker(row.get("user_id")),
            property_type=row.get("property_type") or None,
            created_at=row.get("created_at") or datetime.now(timezone.utc).isoformat(),
            featured=featured,
            status=row.get("status") or ListingStatus.APPROVED,
        )
    except Exception as e:
        raise ListingNormalizationError(f"Failed to normalize listing row: {e}") from e


def normalize_listing_rows(
    rows: Iterable[dict],
    resolver: ImageResolver,
    featured: bool = False,
) -> tuple[list[Listing], int]:
    """Normalize rows, skipping any that fail. Returns (listings, dropped_count)."""
    listings: list[Listing] = []
    dropped = 0

    for row in rows:
        try:
            listings.append(normalize_listing_row(row, resolver, featured=featured))
        except ListingNormalizationError as e:
            dropped += 1
            logger.warning(
                "Dropped listing row that failed to normalize",
                listing_id=row.get("id") if isinstance(row, dict) else None,
                user_id=mask_user_id(row.get("user_id")) if isinstance(row, dict) else None,
                error=str(e),
            )

    return listings, dropped
