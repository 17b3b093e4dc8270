"""Error handling utilities."""

from typing import Optional


class MarketplaceError(Exception):
    """Base exception for the marketplace backend."""
    pass


class SupabaseError(MarketplaceError):
    """Supabase operation error."""
    pass


class ImageUploadError(MarketplaceError):
    """Uploading a listing image to storage failed."""

    def __init__(self, message: str, filename: Optional[str] = None):
        super().__init__(message)
        self.filename = filename


class ListingApiError(MarketplaceError):
    """Listing endpoint returned a non-2xx response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DescriptionError(MarketplaceError):
    """AI description generation error."""
    pass


class InvalidTransitionError(MarketplaceError):
    """Wizard action is not legal in the current stage."""
    pass


class DraftError(MarketplaceError):
    """Draft field update rejected."""
    pass
