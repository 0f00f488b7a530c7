"""Single listing endpoint: GET /api/listings/detail?id=<listing id>"""

from src.services.listing_service import fetch_approved_listing_by_id
from src.utils.http import JsonHandler, run_async
from src.utils.url import listing_url


class handler(JsonHandler):
    """Vercel serverless function handler for a listing page."""

    def handle_get(self, params):
        listing_id = (params.get("id") or [""])[-1].strip()
        if not listing_id:
            return 400, {"error": "id is required"}

        listing = run_async(fetch_approved_listing_by_id(listing_id))
        if listing is None:
            return 404, {"error": "listing not found"}

        return 200, {"listing": listing.to_payload(shareUrl=listing_url(listing.id))}
