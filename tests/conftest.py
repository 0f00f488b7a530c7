"""Shared pytest fixtures and configuration."""

import os
import pytest
from unittest.mock import MagicMock
from freezegun import freeze_time

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("LOG_FORMAT", "text")

from tests.utils.factories import create_image_row, create_listing_row  # noqa: E402
from tests.utils.fakes import FakeSupabaseClient  # noqa: E402


@pytest.fixture
def mock_supabase_client():
    """Mock Supabase client whose query builder methods chain back to one query mock."""
    client = MagicMock()
    query = MagicMock()
    for method in ("select", "eq", "gte", "lte", "or_", "order", "limit"):
        getattr(query, method).return_value = query
    query.execute.return_value = MagicMock(data=[], count=0)
    client.table.return_value = query
    client.storage.from_.return_value.get_public_url.side_effect = (
        lambda path: f"https://test.supabase.co/storage/v1/object/public/listing-images/{path}"
    )
    client.query = query
    return client


@pytest.fixture
def resolver():
    """Image resolver producing predictable public URLs."""
    return lambda path: f"https://cdn.test/{path}"


@pytest.fixture
def listing_rows():
    """Mixed-status listings across Texas and Florida."""
    return [
        create_listing_row(
            id="lst-austin",
            title="Hill Country Escape",
            description="Quiet park near the river",
            city="Austin",
            state="TX",
            price=1500000,
            num_sites=120,
            cap_rate=8.5,
            occupancy_rate=82,
            created_at="2024-11-01T10:00:00+00:00",
        ),
        create_listing_row(
            id="lst-naples",
            title="Gulf Coast Resort",
            description="Beachfront sites with full hookups",
            city="Naples",
            state="FL",
            price=4200000,
            num_sites=250,
            cap_rate=6.1,
            occupancy_rate=91,
            created_at="2024-12-01T10:00:00+00:00",
        ),
        create_listing_row(
            id="lst-pending",
            title="Austin Pending Park",
            city="Austin",
            state="TX",
            status="pending",
            created_at="2024-12-05T10:00:00+00:00",
        ),
        create_listing_row(
            id="lst-dallas",
            title="Lakeside Campground",
            description="Near Lake Austin road",
            city="Dallas",
            state="TX",
            price=90000,
            num_sites=40,
            cap_rate=0,
            occupancy_rate=55,
            created_at="2024-10-01T10:00:00+00:00",
            images=[],
        ),
        create_listing_row(
            id="lst-orlando",
            title="Theme Park RV Stop",
            description="Minutes from the attractions",
            city="Orlando",
            state="FL",
            price=2750000,
            num_sites=180,
            cap_rate=7.2,
            occupancy_rate=88,
            created_at="2024-11-15T10:00:00+00:00",
            images=[
                create_image_row("orlando/a.jpg"),
                create_image_row("orlando/b.jpg"),
                create_image_row("orlando/c.jpg", is_primary=True),
            ],
        ),
    ]


@pytest.fixture
def fake_supabase(listing_rows):
    """In-memory Supabase client over the listing rows."""
    return FakeSupabaseClient(tables={"listings": listing_rows})


@pytest.fixture
def failing_supabase():
    """Supabase client whose every query fails at execute time."""
    return FakeSupabaseClient(error=ConnectionError("connection refused"))


@pytest.fixture
def freeze_time_fixture():
    """Fixture for freezing time in tests."""
    with freeze_time("2024-12-09 12:00:00") as frozen_time:
        yield frozen_time
