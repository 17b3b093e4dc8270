"""Tests for ListingDraft and PendingImage models."""

import pytest
from pydantic import ValidationError

from src.models.draft import ListingDraft, PendingImage
from src.models.listing import DescriptionChoice, SellerListing


@pytest.mark.unit
def test_draft_initial_values():
    draft = ListingDraft()

    assert draft.asking_price == ""
    assert draft.images == ()
    assert draft.listing_id is None
    assert draft.is_editing is False
    assert draft.description_choice == DescriptionChoice.MANUAL
    assert len(draft.draft_id) == 26


@pytest.mark.unit
def test_draft_is_immutable():
    draft = ListingDraft()

    with pytest.raises(ValidationError):
        draft.industry = "bakery"


@pytest.mark.unit
def test_draft_accepts_form_names_and_attribute_names():
    by_alias = ListingDraft(businessName="Acme", askingPrice="100")
    by_name = ListingDraft(business_name="Acme", asking_price="100")

    assert by_alias.business_name == by_name.business_name == "Acme"
    assert by_alias.asking_price == by_name.asking_price == "100"


@pytest.mark.unit
def test_draft_coerces_numbers_to_text():
    draft = ListingDraft(asking_price=250000)

    assert draft.asking_price == "250000"


@pytest.mark.unit
def test_combined_location_uses_city_and_state():
    draft = ListingDraft(location_city="Austin", location_state="Texas", location="ignored")

    assert draft.combined_location == "Austin, Texas"


@pytest.mark.unit
@pytest.mark.parametrize("city,state", [("Austin", ""), ("", "Texas"), ("", "")])
def test_combined_location_falls_back_to_free_text(city, state):
    draft = ListingDraft(location_city=city, location_state=state, location="Somewhere, TX")

    assert draft.combined_location == "Somewhere, TX"


@pytest.mark.unit
def test_unique_edge_prefers_customer_love():
    assert ListingDraft(customer_love="Fresh bread", proud_of="Award").unique_edge == "Fresh bread"
    assert ListingDraft(proud_of="Award").unique_edge == "Award"


@pytest.mark.unit
def test_from_listing_seeds_edit_draft(seller_row):
    seller_row.update({"asking_price": 250000.0, "sde": 80000.5, "employees": 6})
    draft = ListingDraft.from_listing(SellerListing.model_validate(seller_row))

    assert draft.listing_id == seller_row["id"]
    assert draft.is_editing is True
    assert draft.asking_price == "250000"
    assert draft.sde == "80000.5"
    assert draft.employees == "6"
    assert draft.business_name == seller_row["business_name"]
    assert draft.images == ()
    assert draft.existing_image_urls == tuple(seller_row["image_urls"])


@pytest.mark.unit
def test_from_listing_recovers_manual_text_from_original_description():
    listing = SellerListing(id="l-1", original_description="Written by the owner")

    assert ListingDraft.from_listing(listing).business_description == "Written by the owner"


@pytest.mark.unit
def test_pending_image_gets_unique_preview_url():
    first = PendingImage.from_file("shop.jpg", b"\xff\xd8")
    second = PendingImage.from_file("shop.jpg", b"\xff\xd8")

    assert first.preview_url.startswith("blob:")
    assert first.preview_url != second.preview_url
    assert first.content_type == "image/jpeg"


@pytest.mark.unit
def test_from_listing_keeps_legacy_images():
    listing = SellerListing(id="l-1", image_urls=None, images=["https://cdn.test/old.jpg"])

    assert ListingDraft.from_listing(listing).existing_image_urls == ("https://cdn.test/old.jpg",)
