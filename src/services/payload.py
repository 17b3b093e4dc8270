"""Normalize a wizard draft into the listing endpoint payload."""

import math
import re
from typing import Any, Iterable

from src.models.draft import DRAFT_ONLY_FIELDS, ListingDraft, NUMERIC_FIELDS
from src.models.listing import DescriptionChoice

_DECIMAL_PREFIX = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INTEGER_PREFIX = re.compile(r"^[+-]?\d+")

# Draft attribute -> payload key; employees is the only integer count.
AMOUNT_FIELDS = {
    "annual_revenue": "annual_revenue",
    "annual_profit": "annual_profit",
    "sde": "sde",
    "asking_price": "asking_price",
    "monthly_lease": "monthly_lease",
    "inventory_value": "inventory_value",
    "equipment_value": "equipment_value",
}
COUNT_FIELDS = {
    "employees": "employees",
}


def _clean_numeric_text(raw: Any) -> str:
    text = str(raw).strip()
    if text.startswith("$"):
        text = text[1:]
    return text.replace(",", "")


def parse_amount(raw: Any) -> float:
    """Parse the leading decimal number of ``raw``; anything unparseable is 0.

    Currency symbols and thousands separators are tolerated, so
    ``"$250,000"`` parses as 250000.
    """
    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, (int, float)):
        return raw if math.isfinite(raw) else 0

    match = _DECIMAL_PREFIX.match(_clean_numeric_text(raw))
    if not match:
        return 0
    value = float(match.group())
    if not math.isfinite(value) or value == 0:
        return 0
    return value


def parse_count(raw: Any) -> int:
    """Parse the leading integer of ``raw`` (``"12.7"`` -> 12); unparseable is 0."""
    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, float):
        return int(raw) if math.isfinite(raw) else 0
    if isinstance(raw, int):
        return raw

    match = _INTEGER_PREFIX.match(_clean_numeric_text(raw))
    return int(match.group()) if match else 0


def split_descriptions(draft: ListingDraft) -> tuple[str, str]:
    """Return ``(original_description, ai_description)`` gated by the publish choice.

    The unselected variant is always blank.
    """
    if draft.description_choice == DescriptionChoice.AI:
        return "", draft.ai_description
    return draft.business_description, ""


def build_listing_payload(draft: ListingDraft, image_urls: Iterable[str]) -> dict:
    """Shape ``draft`` into the JSON body for the create/update endpoints.

    Stored images kept from the edit flow come first, then ``image_urls``
    from this submission's uploads.
    """
    rest = draft.model_dump(
        mode="json",
        by_alias=True,
        exclude={*DRAFT_ONLY_FIELDS, *NUMERIC_FIELDS},
    )

    original_description, ai_description = split_descriptions(draft)

    payload = {
        **rest,
        "location": draft.combined_location,
        "image_urls": [*draft.existing_image_urls, *image_urls],
        "original_description": original_description,
        "ai_description": ai_description,
        "description_choice": draft.description_choice.value,
        "hide_business_name": draft.hide_business_name,
        "business_description": draft.business_description,
    }
    for attr, key in AMOUNT_FIELDS.items():
        payload[key] = parse_amount(getattr(draft, attr))
    for attr, key in COUNT_FIELDS.items():
        payload[key] = parse_count(getattr(draft, attr))

    return payload
