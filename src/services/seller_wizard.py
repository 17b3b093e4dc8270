"""Seller onboarding session: reducer state plus the async side effects."""

import asyncio
from typing import Iterable, Optional, Union

from src.models.description import DescriptionRequest
from src.models.draft import ListingDraft, PendingImage
from src.models.listing import SellerListing
from src.models.submission import ServerFailure, SubmissionResult, SubmissionSuccess
from src.models.wizard import (
    AddImages,
    AIDescriptionReceived,
    NextStep,
    OpenPreview,
    PreviousStep,
    RemoveImage,
    ReturnToEdit,
    SetField,
    SubmissionFailed,
    SubmissionStarted,
    SubmissionSucceeded,
    WizardAction,
    WizardState,
)
from src.services.image_uploader import ImageUploader
from src.services.listing_api import ListingApiClient
from src.services.preview import ListingPreview, build_preview
from src.services.submission import SUBMISSION_FAILED_MESSAGE, submit_listing
from src.services.supabase_client import get_seller_listing
from src.services.wizard import initial_state, needs_ai_description, reduce
from src.utils.errors import DescriptionError, DraftError
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

ImageFile = Union[tuple[str, bytes], tuple[str, bytes, Optional[str]]]


class SellerWizard:
    """One seller's onboarding session.

    State changes go through ``dispatch``; the description request and the
    submission run as tasks whose results are applied only while the session
    is still active.
    """

    def __init__(
        self,
        api: Optional[ListingApiClient] = None,
        uploader: Optional[ImageUploader] = None,
        draft: Optional[ListingDraft] = None,
    ):
        self.api = api or ListingApiClient()
        self.uploader = uploader or ImageUploader()
        self.state: WizardState = initial_state(draft)
        self._description_task: Optional[asyncio.Task] = None
        self._submission_task: Optional[asyncio.Task] = None
        self._abandoned = False

    @classmethod
    async def for_listing(cls, listing_id: str, **kwargs) -> "SellerWizard":
        """Open the wizard on an existing listing (edit flow)."""
        row = await get_seller_listing(listing_id)
        if row is None:
            raise DraftError(f"Listing not found: {listing_id}")
        draft = ListingDraft.from_listing(SellerListing.model_validate(row))
        return cls(draft=draft, **kwargs)

    @property
    def draft(self) -> ListingDraft:
        return self.state.draft

    def dispatch(self, action: WizardAction) -> WizardState:
        self.state = reduce(self.state, action)
        return self.state

    def set_field(self, name: str, value) -> WizardState:
        return self.dispatch(SetField(name=name, value=value))

    def next_step(self) -> WizardState:
        return self.dispatch(NextStep())

    def previous_step(self) -> WizardState:
        return self.dispatch(PreviousStep())

    def add_images(self, files: Iterable[ImageFile]) -> list[str]:
        """Queue files for upload at submit time; returns their preview URLs."""
        images = tuple(PendingImage.from_file(*f) for f in files)
        self.dispatch(AddImages(images=images))
        return [i.preview_url for i in images]

    def remove_image(self, preview_url: str) -> WizardState:
        return self.dispatch(RemoveImage(preview_url=preview_url))

    def open_preview(self) -> ListingPreview:
        """Enter preview, requesting an AI description once per draft."""
        self.dispatch(OpenPreview())
        if needs_ai_description(self.state) and not self._description_pending():
            request = DescriptionRequest.from_draft(self.draft)
            self._description_task = asyncio.create_task(
                self._fetch_description(self.draft.draft_id, request)
            )
        return build_preview(self.draft)

    def return_to_edit(self) -> WizardState:
        return self.dispatch(ReturnToEdit())

    def preview(self) -> ListingPreview:
        return build_preview(self.draft)

    async def wait_for_description(self) -> None:
        if self._description_task is not None:
            await asyncio.gather(self._description_task, return_exceptions=True)

    def _description_pending(self) -> bool:
        return self._description_task is not None and not self._description_task.done()

    async def _fetch_description(self, draft_id: str, request: DescriptionRequest) -> None:
        try:
            description = await self.api.generate_description(request)
        except DescriptionError as e:
            logger.warning("AI description generation failed", draft_id=draft_id, error=str(e))
            return

        if self._abandoned:
            return
        self.dispatch(AIDescriptionReceived(draft_id=draft_id, description=description))
        logger.info("AI description merged into draft", draft_id=draft_id, description_length=len(description))

    async def submit(self) -> SubmissionResult:
        """Run the submission pipeline and fold its result into the state."""
        self.dispatch(SubmissionStarted())
        draft = self.draft
        self._submission_task = asyncio.create_task(submit_listing(draft, self.uploader, self.api))

        try:
            result = await self._submission_task
        except asyncio.CancelledError:
            if not self._abandoned:
                self.dispatch(SubmissionFailed(message="Submission cancelled"))
            raise
        except Exception as e:
            logger.error("Submission pipeline crashed", exc_info=True, draft_id=draft.draft_id, error=str(e))
            result = ServerFailure(message=SUBMISSION_FAILED_MESSAGE)

        if self._abandoned or self.draft.draft_id != draft.draft_id:
            logger.info("Discarding submission result for abandoned draft", draft_id=draft.draft_id)
            return result

        if isinstance(result, SubmissionSuccess):
            self.dispatch(SubmissionSucceeded(listing=result.listing, redirect_to=result.redirect_to))
        else:
            self.dispatch(SubmissionFailed(message=result.message))
        return result

    def abandon(self) -> None:
        """Stop applying async results and cancel anything in flight."""
        self._abandoned = True
        for task in (self._description_task, self._submission_task):
            if task is not None and not task.done():
                task.cancel()
