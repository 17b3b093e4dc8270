"""Tests for preview rendering helpers."""

import pytest

from src.models.draft import ListingDraft
from src.models.listing import FinancingType
from src.services.preview import (
    NO_AI_DESCRIPTION,
    build_preview,
    financing_label,
    format_currency,
    listing_title,
    to_title_case,
)
from tests.utils.factories import create_pending_image


@pytest.mark.unit
@pytest.mark.parametrize("value,expected", [
    ("250000", "$250,000"),
    ("250000.5", "$250,000.5"),
    ("1234.5678", "$1,234.568"),
    ("0", "$0"),
    ("", ""),
    (None, ""),
    (1500000.0, "$1,500,000"),
])
def test_format_currency(value, expected):
    assert format_currency(value) == expected


@pytest.mark.unit
def test_to_title_case():
    assert to_title_case("COFFEE shop") == "Coffee Shop"


@pytest.mark.unit
def test_listing_title_precedence():
    assert listing_title("dry cleaning", "Acme", True) == "Dry Cleaning Business for Sale"
    assert listing_title("", "Acme", True) == "Confidential Business Listing"
    assert listing_title("", "Acme", False) == "Acme"


@pytest.mark.unit
def test_financing_label():
    assert financing_label(FinancingType.SELLER_FINANCED) == "seller financed"
    assert financing_label(FinancingType.RENT_TO_OWN) == "rent to own"


@pytest.mark.unit
def test_build_preview(complete_draft):
    image = create_pending_image("front.jpg")
    draft = complete_draft.model_copy(update={"images": (image,), "includes_building": True})

    preview = build_preview(draft)

    assert preview.title == "Bakery Business for Sale"
    assert preview.location == "Austin, Texas"
    assert preview.financials["Asking Price"] == "$250,000.5"
    assert preview.financials["Includes Building"] == "Yes"
    assert preview.details["Employees"] == "6"
    assert preview.details["Financing Type"] == "buyer financed"
    assert [i.preview_url for i in preview.images] == [image.preview_url]
    assert preview.description.manual == complete_draft.business_description
    assert preview.description.ai == NO_AI_DESCRIPTION


@pytest.mark.unit
def test_build_preview_omits_empty_description_section():
    assert build_preview(ListingDraft()).description is None


@pytest.mark.unit
def test_build_preview_lists_stored_images_first(complete_draft):
    image = create_pending_image("new.jpg")
    draft = complete_draft.model_copy(update={
        "images": (image,),
        "existing_image_urls": ("https://cdn.test/seller-images/01ABC-old.jpg",),
    })

    preview = build_preview(draft)

    assert [(i.preview_url, i.filename) for i in preview.images] == [
        ("https://cdn.test/seller-images/01ABC-old.jpg", "01ABC-old.jpg"),
        (image.preview_url, "new.jpg"),
    ]
