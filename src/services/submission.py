"""Listing submission pipeline: upload images, normalize, create or update."""

import httpx

from src.models.draft import ListingDraft
from src.models.submission import (
    ServerFailure,
    SubmissionResult,
    SubmissionSuccess,
    UploadFailure,
)
from src.services.image_uploader import ImageUploader, upload_images
from src.services.listing_api import ListingApiClient
from src.services.payload import build_listing_payload
from src.utils.errors import ImageUploadError, ListingApiError
from src.utils.logging import get_structured_logger, log_timing

logger = get_structured_logger(__name__)

UPLOAD_FAILED_MESSAGE = "Image upload failed. Please try again."
SUBMISSION_FAILED_MESSAGE = "Submission failed"
CONFIRMATION_PATH = "/thank-you"


async def submit_listing(
    draft: ListingDraft,
    uploader: ImageUploader,
    api: ListingApiClient,
) -> SubmissionResult:
    """Run the whole pipeline for ``draft`` and return a tagged result.

    Steps run strictly in order. Every attempt re-uploads every pending
    image; URLs from an earlier failed attempt are not reused.
    """
    log = logger.bind(draft_id=draft.draft_id, listing_id=draft.listing_id)

    with log_timing("submit_listing", logger=log, image_count=len(draft.images)):
        try:
            image_urls = await upload_images(draft.images, uploader)
        except ImageUploadError as e:
            return UploadFailure(message=UPLOAD_FAILED_MESSAGE, filename=e.filename)

        payload = build_listing_payload(draft, image_urls)

        try:
            listing = await api.save_listing(payload, listing_id=draft.listing_id if draft.is_editing else None)
        except ListingApiError as e:
            return ServerFailure(message=str(e) or SUBMISSION_FAILED_MESSAGE, status_code=e.status_code)
        except httpx.HTTPError as e:
            log.error("Submission request failed", error=str(e))
            return ServerFailure(message=str(e) or SUBMISSION_FAILED_MESSAGE)

    log.info(
        "Listing submitted",
        saved_listing_id=listing.get("id"),
        editing=draft.is_editing,
        image_count=len(image_urls),
    )
    return SubmissionSuccess(listing=listing, redirect_to=CONFIRMATION_PATH)
