"""Server-side persistence of wizard payloads into the ``sellers`` table."""

from typing import Optional

from src.models.listing import SellerListing
from src.services.supabase_client import create_seller_listing, update_seller_listing
from src.utils.logging import get_structured_logger, mask_listing_payload

logger = get_structured_logger(__name__)

REQUIRED_FIELDS = ("name", "email")


class PayloadError(ValueError):
    """Payload failed required-field or type checks."""
    pass


def parse_listing_payload(payload) -> SellerListing:
    if not isinstance(payload, dict):
        raise PayloadError("Request body must be a JSON object")

    missing = [f for f in REQUIRED_FIELDS if not str(payload.get(f) or "").strip()]
    if missing:
        raise PayloadError(f"Missing required fields: {', '.join(missing)}")

    try:
        return SellerListing.model_validate(payload)
    except ValueError as e:
        raise PayloadError(f"Invalid listing payload: {e}") from e


async def save_listing_payload(payload, listing_id: Optional[str] = None) -> dict:
    """Validate a wizard payload and create or update the listing row."""
    try:
        listing = parse_listing_payload(payload)
    except PayloadError as e:
        logger.warning(
            "Rejected listing payload",
            listing_id=listing_id,
            error=str(e),
            payload=mask_listing_payload(payload) if isinstance(payload, dict) else None,
        )
        raise

    row = listing.to_row()
    if listing_id:
        saved = await update_seller_listing(listing_id, row)
        logger.info("Listing updated", listing_id=listing_id, image_count=len(listing.image_urls))
    else:
        saved = await create_seller_listing(row)
        logger.info("Listing created", listing_id=saved.get("id"), image_count=len(listing.image_urls))
    return saved
