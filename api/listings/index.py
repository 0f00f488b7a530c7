"""Approved listings search endpoint: GET /api/listings?priceMin=...&state=...&search=..."""

from src.models.listing import ListingFilters
from src.services.listing_service import fetch_approved_listings
from src.utils.errors import InvalidFiltersError
from src.utils.http import JsonHandler, run_async
from src.utils.url import listing_url


class handler(JsonHandler):
    """Vercel serverless function handler for listing search."""

    def handle_get(self, params):
        try:
            filters = ListingFilters.from_query_params(params)
        except InvalidFiltersError as e:
            return 400, {"error": str(e)}

        listings = run_async(fetch_approved_listings(filters))
        return 200, {
            "listings": [listing.to_payload(shareUrl=listing_url(listing.id)) for listing in listings],
            "count": len(listings),
        }
