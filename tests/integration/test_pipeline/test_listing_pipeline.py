"""End-to-end tests: filters to query to normalized listings, over an in-memory store."""

import pytest
from src.models.listing import ListingFilters
from src.services.listing_service import fetch_approved_listings
from tests.utils.assertions import assert_all_approved
from tests.utils.factories import create_listing_row
from tests.utils.fakes import FakeSupabaseClient
from tests.utils.helpers import patched_supabase


FILTER_SETS = [
    {},
    {"priceMin": 100000},
    {"priceMin": 100000, "priceMax": 9999999},
    {"state": "TX"},
    {"sitesMin": 50, "sitesMax": 999},
    {"capRateMin": 6},
    {"occupancyRateMin": 80},
    {"search": "austin"},
    {"search": "AUSTIN", "state": "TX"},
]


@pytest.mark.integration
@pytest.mark.asyncio
@pytest.mark.parametrize("filters", FILTER_SETS)
async def test_every_result_is_approved(fake_supabase, filters):
    """Test no filter combination can surface an unapproved listing."""
    with patched_supabase(fake_supabase):
        listings = await fetch_approved_listings(filters)

    assert_all_approved(listings)
    assert "lst-pending" not in {listing.id for listing in listings}


@pytest.mark.integration
@pytest.mark.asyncio
async def test_search_matches_city_case_insensitively():
    """Test a city match is found in any case and unrelated fields are not searched."""
    client = FakeSupabaseClient(tables={"listings": [
        create_listing_row(id="in-city", title="Riverside Park", description="Shaded sites", city="AUSTIN", state="TX"),
        create_listing_row(id="in-broker", title="Prairie Stop", description="Big rigs welcome", city="Waco", state="TX", address="1 Austin Ave"),
    ]})

    with patched_supabase(client):
        listings = await fetch_approved_listings(ListingFilters(search="austin"))

    assert [listing.id for listing in listings] == ["in-city"]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_price_sentinel_end_to_end(fake_supabase):
    """Test the 10,000,000 price max leaves the upper bound open."""
    with patched_supabase(fake_supabase):
        bounded = await fetch_approved_listings({"priceMax": 3000000})
        unbounded = await fetch_approved_listings({"priceMax": 10000000})

    assert "lst-naples" not in {listing.id for listing in bounded}
    assert "lst-naples" in {listing.id for listing in unbounded}
    assert fake_supabase.queries[-1].called("lte") == []


@pytest.mark.integration
@pytest.mark.asyncio
async def test_search_with_comma_keeps_four_conditions():
    """Test a comma in the search term stays inside one quoted value."""
    client = FakeSupabaseClient(tables={"listings": [
        create_listing_row(id="near-austin", title="Lakeside RV", description="Minutes from Austin, TX", city="Bastrop", state="TX"),
        create_listing_row(id="elsewhere", title="Gulf Breeze", description="Beach access", city="Naples", state="FL"),
    ]})

    with patched_supabase(client):
        listings = await fetch_approved_listings(ListingFilters(search="Austin, TX"))

    assert [listing.id for listing in listings] == ["near-austin"]
    ((_, clause),) = client.queries[-1].called("or")
    assert clause.count(".ilike.") == 4
    assert len(client.queries[-1].or_conditions) == 4
