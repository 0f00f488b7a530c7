"""Public listings retrieval - approved listings, featured, by id and count.

Every operation comes in two forms. ``query_*`` returns a FetchResult that
says whether the read failed. ``fetch_*`` / ``count_*`` return only the data
and never raise: store, transport and filter errors become an empty list,
None or 0.
"""

from typing import Optional, Union
from src.models.listing import FetchResult, Listing, ListingFilters
from src.services.supabase_client import SupabaseClient
from src.services.listing_images import ImageUrlResolver
from src.services.listing_normalizer import normalize_listing_rows
from src.services.listing_query import (
    build_approved_count_query,
    build_approved_listings_query,
    build_featured_listings_query,
    build_listing_by_id_query,
)
from src.utils.errors import InvalidFiltersError, SupabaseError
from src.utils.logging import get_structured_logger, log_timing

logger = get_structured_logger(__name__)

FEATURED_LIMIT = 3

FiltersArg = Optional[Union[ListingFilters, dict]]


def _coerce_filters(filters: FiltersArg) -> Optional[ListingFilters]:
    if filters is None or isinstance(filters, ListingFilters):
        return filters
    return ListingFilters.from_mapping(filters)


def _execute(query, operation: str):
    try:
        return query.execute()
    except Exception as e:
        raise SupabaseError(f"Failed to {operation}: {e}") from e


async def query_approved_listings(filters: FiltersArg = None) -> FetchResult[list[Listing]]:
    """Approved listings matching the filters."""
    try:
        listing_filters = _coerce_filters(filters)
        async with SupabaseClient() as client:
            with log_timing("fetch_approved_listings", logger=logger):
                query = build_approved_listings_query(client, listing_filters)
                result = _execute(query, "fetch approved listings")

            listings, dropped = normalize_listing_rows(result.data or [], ImageUrlResolver(client))
    except InvalidFiltersError as e:
        logger.warning("Rejected listing filters", error=str(e))
        return FetchResult(data=[], error=str(e))
    except Exception as e:
        logger.error("Error fetching approved listings", error=str(e))
        return FetchResult(data=[], error=str(e))

    logger.info(
        "Fetched approved listings",
        count=len(listings),
        dropped=dropped,
        filtered=listing_filters is not None,
    )
    return FetchResult(data=listings, dropped=dropped)


async def query_featured_approved_listings() -> FetchResult[list[Listing]]:
    """Newest approved listings, marked featured (there is no featured column)."""
    try:
        async with SupabaseClient() as client:
            with log_timing("fetch_featured_listings", logger=logger):
                query = build_featured_listings_query(client, limit=FEATURED_LIMIT)
                result = _execute(query, "fetch featured listings")

            listings, dropped = normalize_listing_rows(
                result.data or [], ImageUrlResolver(client), featured=True
            )
    except Exception as e:
        logger.error("Error fetching featured listings", error=str(e))
        return FetchResult(data=[], error=str(e))

    return FetchResult(data=listings, dropped=dropped)


async def query_approved_listing_by_id(listing_id: str) -> FetchResult[Optional[Listing]]:
    """A single approved listing; data is None when missing, unapproved or unreadable."""
    if not listing_id:
        return FetchResult(data=None)

    try:
        async with SupabaseClient() as client:
            with log_timing("fetch_listing_by_id", logger=logger, listing_id=listing_id):
                query = build_listing_by_id_query(client, listing_id)
                result = _execute(query, "fetch listing")

            listings, dropped = normalize_listing_rows(
                (result.data or [])[:1], ImageUrlResolver(client)
            )
    except Exception as e:
        logger.error("Error fetching listing", listing_id=listing_id, error=str(e))
        return FetchResult(data=None, error=str(e))

    if dropped:
        return FetchResult(data=None, error=f"Listing {listing_id} could not be normalized", dropped=dropped)
    return FetchResult(data=listings[0] if listings else None)


async def query_approved_listing_count() -> FetchResult[int]:
    """Exact count of approved listings without fetching rows."""
    try:
        async with SupabaseClient() as client:
            with log_timing("count_approved_listings", logger=logger):
                result = _execute(build_approved_count_query(client), "count approved listings")
    except Exception as e:
        logger.error("Error counting approved listings", error=str(e))
        return FetchResult(data=0, error=str(e))

    return FetchResult(data=result.count or 0)


async def fetch_approved_listings(filters: FiltersArg = None) -> list[Listing]:
    """Approved listings matching the filters; [] on any failure."""
    return (await query_approved_listings(filters)).data


async def fetch_featured_approved_listings() -> list[Listing]:
    """The three newest approved listings, featured; [] on any failure."""
    return (await query_featured_approved_listings()).data


async def fetch_approved_listing_by_id(listing_id: str) -> Optional[Listing]:
    """An approved listing or None."""
    return (await query_approved_listing_by_id(listing_id)).data


async def count_approved_listings() -> int:
    """Number of approved listings; 0 on any failure."""
    return (await query_approved_listing_count()).data
