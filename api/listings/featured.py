"""Featured listings endpoint: GET /api/listings/featured"""

from src.services.listing_service import fetch_featured_approved_listings
from src.utils.http import JsonHandler, run_async
from src.utils.url import listing_url


class handler(JsonHandler):
    """Vercel serverless function handler for the home page's featured listings."""

    def handle_get(self, params):
        listings = run_async(fetch_featured_approved_listings())
        return 200, {
            "listings": [listing.to_payload(shareUrl=listing_url(listing.id)) for listing in listings],
        }
