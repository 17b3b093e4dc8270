"""Seller listing models (rows of the ``sellers`` table)."""

from enum import Enum
from typing import Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class FinancingType(str, Enum):
    """How the buyer pays for the business."""
    BUYER_FINANCED = "buyer-financed"
    SELLER_FINANCED = "seller-financed"
    RENT_TO_OWN = "rent-to-own"


class DescriptionChoice(str, Enum):
    """Which description variant is published."""
    MANUAL = "manual"
    AI = "ai"


def _column(name: str, form_name: Optional[str] = None, default=None, **kwargs):
    """Field readable from its column name or from the wizard form name."""
    if form_name is None:
        return Field(default, **kwargs)
    return Field(default, validation_alias=AliasChoices(name, form_name), **kwargs)


class SellerListing(BaseModel):
    """Business-for-sale listing as stored in the row store.

    Accepts both the column names and the camelCase form names the wizard
    payload carries, preferring the column name when both are present.
    Null columns read as the field default; numeric ids read as strings.
    """
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: Optional[str] = Field(None, description="Listing ID")
    name: Optional[str] = Field(None, description="Seller contact name")
    email: Optional[str] = Field(None, description="Seller contact email")
    business_name: Optional[str] = _column("business_name", "businessName")
    hide_business_name: bool = _column("hide_business_name", "hideBusinessName", False)
    industry: Optional[str] = None
    location: Optional[str] = Field(None, description="Combined or free-text location")
    location_city: Optional[str] = None
    location_state: Optional[str] = None
    website: Optional[str] = None

    annual_revenue: float = _column("annual_revenue", "annualRevenue", 0)
    annual_profit: float = _column("annual_profit", "annualProfit", 0)
    sde: float = Field(0, description="Seller's discretionary earnings")
    asking_price: float = _column("asking_price", "askingPrice", 0)
    employees: int = 0
    monthly_lease: float = 0
    inventory_value: float = 0
    equipment_value: float = 0

    includes_inventory: bool = _column("includes_inventory", "includesInventory", False)
    includes_building: bool = _column("includes_building", "includesBuilding", False)
    real_estate_included: bool = False
    relocatable: bool = False
    home_based: bool = False
    financing_type: FinancingType = _column(
        "financing_type", "financingType", FinancingType.BUYER_FINANCED
    )

    business_description: Optional[str] = _column("business_description", "businessDescription")
    original_description: Optional[str] = None
    ai_description: Optional[str] = None
    description_choice: DescriptionChoice = _column(
        "description_choice", "descriptionChoice", DescriptionChoice.MANUAL
    )

    customer_type: Optional[str] = _column("customer_type", "customerType")
    owner_involvement: Optional[str] = _column("owner_involvement", "ownerInvolvement")
    growth_potential: Optional[str] = _column("growth_potential", "growthPotential")
    reason_for_selling: Optional[str] = _column("reason_for_selling", "reasonForSelling")
    training_offered: Optional[str] = _column("training_offered", "trainingOffered")
    sentence_summary: Optional[str] = _column("sentence_summary", "sentenceSummary")
    customers: Optional[str] = None
    best_sellers: Optional[str] = _column("best_sellers", "bestSellers")
    customer_love: Optional[str] = _column("customer_love", "customerLove")
    repeat_customers: Optional[str] = _column("repeat_customers", "repeatCustomers")
    keeps_them_coming: Optional[str] = _column("keeps_them_coming", "keepsThemComing")
    proud_of: Optional[str] = _column("proud_of", "proudOf")
    advice_to_buyer: Optional[str] = _column("advice_to_buyer", "adviceToBuyer")

    image_urls: list[str] = Field(default_factory=list, description="Public image URLs, in order")
    images: Optional[list[str]] = Field(None, description="Legacy image URL column")
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @field_validator(
        "hide_business_name",
        "annual_revenue",
        "annual_profit",
        "sde",
        "asking_price",
        "employees",
        "monthly_lease",
        "inventory_value",
        "equipment_value",
        "includes_inventory",
        "includes_building",
        "real_estate_included",
        "relocatable",
        "home_based",
        "financing_type",
        "description_choice",
        "image_urls",
        mode="before",
    )
    @classmethod
    def _null_as_default(cls, value, info: ValidationInfo):
        if value is None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return value

    @property
    def gallery(self) -> list[str]:
        """Image URLs to display, falling back to the legacy column."""
        return self.image_urls or self.images or []

    def to_row(self) -> dict:
        """Column values for an insert or update."""
        return self.model_dump(
            mode="json",
            exclude={"id", "images", "created_at", "updated_at"},
            exclude_none=True,
        )
