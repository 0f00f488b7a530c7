"""Listing query builder - translate filters into a PostgREST read on the listings table."""

import re
from typing import Optional
from supabase import Client
from src.models.listing import (
    ListingFilters,
    ListingStatus,
    PRICE_MAX_SENTINEL,
    SITES_MAX_SENTINEL,
)

LISTINGS_TABLE = "listings"

LISTING_COLUMNS = (
    "id, title, description, price, address, city, state, "
    "latitude, longitude, num_sites, occupancy_rate, annual_revenue, "
    "cap_rate, created_at, status, property_type, user_id, "
    "listing_images(storage_path, is_primary)"
)

SEARCH_COLUMNS = ("title", "description", "city", "state")

# Characters that would split or break a PostgREST logic tree unless the value is quoted
_RESERVED_CHARS = re.compile(r'[,()"\\]')


def _search_pattern(term: str) -> str:
    pattern = f"%{term}%"
    if _RESERVED_CHARS.search(pattern):
        escaped = pattern.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return pattern


def build_search_clause(search: str) -> Optional[str]:
    """OR clause matching the search term (case-insensitive, contains) in any searchable column."""
    term = (search or "").strip()
    if not term:
        return None

    pattern = _search_pattern(term)
    return ",".join(f"{column}.ilike.{pattern}" for column in SEARCH_COLUMNS)


def apply_listing_filters(query, filters: Optional[ListingFilters]):
    """
    Constrain a listings query with the filters that are set.

    Zero, empty and sentinel values are skipped. Distinct fields combine with
    AND; the search term expands to a single OR group.
    """
    if filters is None:
        return query

    if filters.price_min is not None and filters.price_min > 0:
        query = query.gte("price", filters.price_min)

    if filters.price_max is not None and filters.price_max < PRICE_MAX_SENTINEL:
        query = query.lte("price", filters.price_max)

    if filters.state:
        query = query.eq("state", filters.state)

    if filters.sites_min is not None and filters.sites_min > 0:
        query = query.gte("num_sites", filters.sites_min)

    if filters.sites_max is not None and filters.sites_max < SITES_MAX_SENTINEL:
        query = query.lte("num_sites", filters.sites_max)

    if filters.cap_rate_min is not None and filters.cap_rate_min > 0:
        query = query.gte("cap_rate", filters.cap_rate_min)

    if filters.occupancy_rate_min is not None and filters.occupancy_rate_min > 0:
        query = query.gte("occupancy_rate", filters.occupancy_rate_min)

    search_clause = build_search_clause(filters.search)
    if search_clause:
        query = query.or_(search_clause)

    return query


def approved_listings_query(client: Client):
    """Base select of approved listings with their images."""
    return (
        client.table(LISTINGS_TABLE)
        .select(LISTING_COLUMNS)
        .eq("status", ListingStatus.APPROVED.value)
    )


def build_approved_listings_query(client: Client, filters: Optional[ListingFilters] = None):
    """Approved listings matching the filters, store default order."""
    return apply_listing_filters(approved_listings_query(client), filters)


def build_featured_listings_query(client: Client, limit: int = 3):
    """Most recently created approved listings."""
    return approved_listings_query(client).order("created_at", desc=True).limit(limit)


def build_listing_by_id_query(client: Client, listing_id: str):
    """Single approved listing by ID."""
    return approved_listings_query(client).eq("id", listing_id).limit(1)


def build_approved_count_query(client: Client):
    """Head-only exact count of approved listings."""
    return (
        client.table(LISTINGS_TABLE)
        .select("id", count="exact", head=True)
        .eq("status", ListingStatus.APPROVED.value)
    )
