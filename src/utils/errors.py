"""Error handling utilities."""


class ListingsError(Exception):
    """Base exception for the listings backend."""
    pass


class SupabaseError(ListingsError):
    """Supabase operation error."""
    pass


class InvalidFiltersError(ListingsError):
    """Listing filters contain unknown or malformed keys."""
    pass


class ListingNormalizationError(ListingsError):
    """A raw listing row could not be mapped to a display record."""
    pass
