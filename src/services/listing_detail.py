"""Listing detail page: load a listing, resolve the buyer, send an inquiry."""

import asyncio
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ValidationError

from src.models.buyer import BuyerProfile, SessionUser
from src.models.listing import SellerListing
from src.models.message import Message
from src.services.preview import format_currency
from src.services.supabase_client import (
    get_buyer_by_email,
    get_seller_listing,
    get_session_user,
    insert_message,
)
from src.utils.errors import SupabaseError
from src.utils.logging import get_structured_logger, mask_email, sanitize_message_text

logger = get_structured_logger(__name__)

NO_DESCRIPTION = "No description available."


class PageStatus(str, Enum):
    LOADING = "loading"
    NOT_FOUND = "not_found"
    READY = "ready"


class VisitorStatus(str, Enum):
    ANONYMOUS = "anonymous"
    NEEDS_PROFILE = "needs_profile"
    BUYER = "buyer"


class ContactStatus(str, Enum):
    PROFILE_REQUIRED = "profile_required"
    FORM = "form"
    SENT = "sent"


class ListingDetailView(BaseModel):
    """What the detail page renders."""
    listing_id: str
    title: Optional[str] = None
    subtitle: str = ""
    asking_price: str = ""
    images: list[str] = []
    description: str = NO_DESCRIPTION
    contact: ContactStatus
    onboarding_url: Optional[str] = None


def onboarding_url(listing_id: str) -> str:
    return f"/buyer-onboarding?redirect=/listings/{listing_id}"


class ListingDetailPage:
    """State of one listing detail page view."""

    def __init__(self, listing_id: str, access_token: Optional[str] = None):
        self.listing_id = listing_id
        self.log = logger.bind(listing_id=listing_id)
        self.access_token = access_token
        self.listing: Optional[SellerListing] = None
        self.user: Optional[SessionUser] = None
        self.buyer: Optional[BuyerProfile] = None
        self.loading = True
        self.sent = False

    async def load(self) -> "ListingDetailPage":
        """Fetch the listing and the buyer context independently."""
        await asyncio.gather(self.load_listing(), self.load_buyer_context())
        return self

    async def load_listing(self) -> None:
        try:
            row = await get_seller_listing(self.listing_id)
        except SupabaseError as e:
            self.log.error("Error loading listing", error=str(e))
            return
        if row is None:
            return
        try:
            self.listing = SellerListing.model_validate(row)
        except ValidationError as e:
            self.log.error("Stored listing failed validation", error=str(e))

    async def load_buyer_context(self) -> None:
        try:
            await self._resolve_buyer()
        finally:
            self.loading = False

    async def _resolve_buyer(self) -> None:
        try:
            user = await get_session_user(self.access_token)
        except SupabaseError as e:
            self.log.info("No usable session, treating visitor as anonymous", error=str(e))
            return
        if user is None or not user.get("email"):
            return
        self.user = SessionUser.model_validate(user)

        try:
            row = await get_buyer_by_email(self.user.email)
        except SupabaseError as e:
            self.log.warning("Buyer profile lookup failed", email=mask_email(self.user.email), error=str(e))
            return
        if row is None:
            return
        try:
            self.buyer = BuyerProfile.model_validate(row)
        except ValidationError as e:
            self.log.warning("Incomplete buyer profile", email=mask_email(self.user.email), error=str(e))

    @property
    def status(self) -> PageStatus:
        if self.loading:
            return PageStatus.LOADING
        if self.listing is None:
            return PageStatus.NOT_FOUND
        return PageStatus.READY

    @property
    def visitor(self) -> VisitorStatus:
        if self.buyer is not None:
            return VisitorStatus.BUYER
        if self.user is not None:
            return VisitorStatus.NEEDS_PROFILE
        return VisitorStatus.ANONYMOUS

    @property
    def contact(self) -> ContactStatus:
        if self.buyer is None:
            return ContactStatus.PROFILE_REQUIRED
        if self.sent:
            return ContactStatus.SENT
        return ContactStatus.FORM

    async def send_message(self, text: str) -> bool:
        """Persist an inquiry. Returns True once the message is stored.

        Does nothing without a buyer profile, with blank text, or after a
        message was already sent from this page.
        """
        if not text or not text.strip() or self.buyer is None or self.sent:
            return False

        message = Message(
            buyer_email=self.buyer.email,
            buyer_name=self.buyer.name,
            message=text,
            seller_id=self.listing_id,
        )
        try:
            await insert_message(message.to_row())
        except SupabaseError as e:
            self.log.error(
                "Message send failed",
                buyer_email=mask_email(self.buyer.email),
                error=str(e),
            )
            return False

        self.sent = True
        self.log.info(
            "Buyer inquiry sent",
            buyer_email=mask_email(self.buyer.email),
            message_preview=sanitize_message_text(text, max_length=80),
        )
        return True

    def render(self) -> Optional[ListingDetailView]:
        """View model for a loaded listing; None while loading or not found."""
        if self.status != PageStatus.READY:
            return None

        listing = self.listing
        return ListingDetailView(
            listing_id=self.listing_id,
            title=listing.business_name,
            subtitle=f"{listing.industry or ''} – {listing.location or ''}",
            asking_price=format_currency(listing.asking_price),
            images=listing.gallery,
            description=listing.ai_description or listing.business_description or NO_DESCRIPTION,
            contact=self.contact,
            onboarding_url=onboarding_url(self.listing_id) if self.buyer is None else None,
        )
