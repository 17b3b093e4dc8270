"""Derived values for the listing preview and the listing detail page."""

import posixpath
from typing import Any, Optional
from urllib.parse import urlparse
from pydantic import BaseModel

from src.models.draft import ListingDraft
from src.models.listing import FinancingType
from src.services.payload import parse_amount

NO_MANUAL_DESCRIPTION = "No description provided."
NO_AI_DESCRIPTION = "AI description not yet generated."


def to_title_case(text: str) -> str:
    """Capitalize the first letter of each space-separated word, lowercase the rest."""
    return " ".join(word[:1].upper() + word[1:] for word in text.lower().split(" "))


def format_currency(value: Any) -> str:
    """``$`` plus a grouped amount with up to three decimals; blank input is ''."""
    if value is None or value == "":
        return ""
    amount = parse_amount(value)
    text = f"{amount:,.3f}".rstrip("0").rstrip(".")
    return f"${text}"


def yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def financing_label(financing_type: FinancingType) -> str:
    return financing_type.value.replace("-", " ")


def listing_title(industry: str, business_name: str, hide_business_name: bool) -> str:
    if industry:
        return f"{to_title_case(industry)} Business for Sale"
    if hide_business_name:
        return "Confidential Business Listing"
    return business_name


class PreviewImage(BaseModel):
    preview_url: str
    filename: str


class DescriptionPreview(BaseModel):
    manual: str
    ai: str
    choice: str


class ListingPreview(BaseModel):
    """Everything the preview screen shows for a draft."""
    title: str
    location: str
    images: list[PreviewImage]
    financials: dict[str, str]
    details: dict[str, str]
    description: Optional[DescriptionPreview] = None


def _url_filename(url: str) -> str:
    return posixpath.basename(urlparse(url).path) or url


def build_preview(draft: ListingDraft) -> ListingPreview:
    financials = {
        "Asking Price": format_currency(draft.asking_price),
        "Annual Revenue": format_currency(draft.annual_revenue),
        "SDE": format_currency(draft.sde),
        "Annual Profit": format_currency(draft.annual_profit),
        "Inventory Value": format_currency(draft.inventory_value),
        "Equipment Value": format_currency(draft.equipment_value),
        "Includes Inventory": yes_no(draft.includes_inventory),
        "Includes Building": yes_no(draft.includes_building),
        "Real Estate Included": yes_no(draft.real_estate_included),
    }
    details = {
        "Employees": draft.employees,
        "Monthly Lease": format_currency(draft.monthly_lease),
        "Home-Based": yes_no(draft.home_based),
        "Relocatable": yes_no(draft.relocatable),
        "Financing Type": financing_label(draft.financing_type),
        "Customer Type": draft.customer_type,
        "Owner Involvement": draft.owner_involvement,
        "Reason for Selling": draft.reason_for_selling,
        "Training Offered": draft.training_offered,
    }

    description = None
    if draft.ai_description or draft.business_description:
        description = DescriptionPreview(
            manual=draft.business_description or NO_MANUAL_DESCRIPTION,
            ai=draft.ai_description or NO_AI_DESCRIPTION,
            choice=draft.description_choice.value,
        )

    return ListingPreview(
        title=listing_title(draft.industry, draft.business_name, draft.hide_business_name),
        location=draft.combined_location,
        images=[
            *(PreviewImage(preview_url=url, filename=_url_filename(url)) for url in draft.existing_image_urls),
            *(PreviewImage(preview_url=i.preview_url, filename=i.filename) for i in draft.images),
        ],
        financials=financials,
        details=details,
        description=description,
    )
