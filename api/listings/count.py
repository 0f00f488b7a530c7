"""Approved listings count endpoint: GET /api/listings/count"""

from src.services.listing_service import count_approved_listings
from src.utils.http import JsonHandler, run_async


class handler(JsonHandler):
    """Vercel serverless function handler for the listings counter."""

    def handle_get(self, params):
        return 200, {"count": run_async(count_approved_listings())}
