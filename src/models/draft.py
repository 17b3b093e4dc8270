"""Seller onboarding draft - the unsaved, in-memory listing being composed."""

import mimetypes
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from ulid import ULID

from src.models.listing import DescriptionChoice, FinancingType, SellerListing


def generate_draft_id() -> str:
    """Generate a draft identity (ULID format)."""
    return str(ULID())


class PendingImage(BaseModel):
    """Image selected in the wizard but not uploaded yet."""
    model_config = ConfigDict(frozen=True)

    filename: str
    content: bytes = Field(repr=False)
    content_type: Optional[str] = None
    preview_url: str = Field(..., description="Local, ephemeral URL used only for display")

    @classmethod
    def from_file(cls, filename: str, content: bytes, content_type: Optional[str] = None) -> "PendingImage":
        if content_type is None:
            content_type = mimetypes.guess_type(filename)[0]
        return cls(
            filename=filename,
            content=content,
            content_type=content_type,
            preview_url=f"blob:{ULID()}",
        )


# Raw numeric inputs; coerced to numbers only when the payload is built.
NUMERIC_FIELDS = (
    "annual_revenue",
    "annual_profit",
    "sde",
    "asking_price",
    "employees",
    "monthly_lease",
    "inventory_value",
    "equipment_value",
)

# Wizard-only state with no column of its own.
DRAFT_ONLY_FIELDS = ("draft_id", "listing_id", "images", "existing_image_urls")


class ListingDraft(BaseModel):
    """All listing fields as raw form input, plus the transient wizard fields.

    Aliases are the form control names, which are also the keys the listing
    endpoints receive for fields without a dedicated column mapping.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, coerce_numbers_to_str=True)

    draft_id: str = Field(default_factory=generate_draft_id)
    listing_id: Optional[str] = Field(None, description="Set when editing an existing listing")

    name: str = ""
    email: str = ""
    business_name: str = Field("", alias="businessName")
    hide_business_name: bool = Field(False, alias="hideBusinessName")
    industry: str = ""
    location: str = ""
    location_city: str = ""
    location_state: str = ""
    website: str = ""

    annual_revenue: str = Field("", alias="annualRevenue")
    annual_profit: str = Field("", alias="annualProfit")
    sde: str = ""
    asking_price: str = Field("", alias="askingPrice")
    employees: str = ""
    monthly_lease: str = ""
    inventory_value: str = ""
    equipment_value: str = ""

    includes_inventory: bool = Field(False, alias="includesInventory")
    includes_building: bool = Field(False, alias="includesBuilding")
    real_estate_included: bool = False
    relocatable: bool = False
    home_based: bool = False
    financing_type: FinancingType = Field(FinancingType.BUYER_FINANCED, alias="financingType")

    business_description: str = Field("", alias="businessDescription")
    ai_description: str = Field("", alias="aiDescription")
    description_choice: DescriptionChoice = Field(DescriptionChoice.MANUAL, alias="descriptionChoice")

    customer_type: str = Field("", alias="customerType")
    owner_involvement: str = Field("", alias="ownerInvolvement")
    growth_potential: str = Field("", alias="growthPotential")
    reason_for_selling: str = Field("", alias="reasonForSelling")
    training_offered: str = Field("", alias="trainingOffered")
    sentence_summary: str = Field("", alias="sentenceSummary")
    customers: str = ""
    best_sellers: str = Field("", alias="bestSellers")
    customer_love: str = Field("", alias="customerLove")
    repeat_customers: str = Field("", alias="repeatCustomers")
    keeps_them_coming: str = Field("", alias="keepsThemComing")
    proud_of: str = Field("", alias="proudOf")
    advice_to_buyer: str = Field("", alias="adviceToBuyer")

    images: tuple[PendingImage, ...] = ()
    existing_image_urls: tuple[str, ...] = Field((), description="Already-stored URLs kept on update")

    @property
    def is_editing(self) -> bool:
        return bool(self.listing_id)

    @property
    def combined_location(self) -> str:
        """``"{city}, {state}"`` when both are set, else the free-text location."""
        if self.location_city and self.location_state:
            return f"{self.location_city}, {self.location_state}"
        return self.location

    @property
    def unique_edge(self) -> str:
        return self.customer_love or self.proud_of

    @classmethod
    def from_listing(cls, listing: SellerListing) -> "ListingDraft":
        """Seed a draft from a stored listing for the edit flow."""
        values = {}
        for field_name in cls.model_fields:
            if field_name in DRAFT_ONLY_FIELDS:
                continue
            value = getattr(listing, field_name, None)
            if value is None:
                continue
            if field_name in NUMERIC_FIELDS:
                value = _format_stored_number(value)
            values[field_name] = value

        # The published variant may only survive in original_description.
        if not values.get("business_description") and listing.original_description:
            values["business_description"] = listing.original_description

        return cls(listing_id=listing.id, existing_image_urls=tuple(listing.gallery), **values)


def _format_stored_number(value) -> str:
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return str(number)
