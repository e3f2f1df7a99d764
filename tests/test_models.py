from __future__ import annotations

from datetime import datetime, timezone

import pytest

from perfumesite.core.errors import ValidationError
from perfumesite.core.models import (
    DEFAULT_SECTION_ORDER,
    Page,
    Section,
    apply_update,
    brand_email,
    default_about_text,
    duplicate_page,
    iso_timestamp,
    move_section,
    new_page,
    new_section,
    remove_section,
    section_id,
)
from perfumesite.core.themes import ThemeCatalog

WHEN = datetime(2024, 5, 1, 9, 30, 0, 123000, tzinfo=timezone.utc)
LATER = datetime(2024, 5, 2, 10, 0, tzinfo=timezone.utc)


def test_iso_timestamp_uses_millisecond_z_format() -> None:
    assert iso_timestamp(WHEN) == "2024-05-01T09:30:00.123Z"


def test_section_id_is_type_and_epoch_millis() -> None:
    assert section_id("hero", WHEN) == f"hero-{int(WHEN.timestamp() * 1000)}"


def test_brand_email_strips_whitespace_and_lowercases() -> None:
    assert brand_email("Noor") == "info@noor.com"
    assert brand_email("Maison  Du\tSoir") == "info@maisondusoir.com"


def test_new_page_fills_defaults(catalog: ThemeCatalog) -> None:
    theme = catalog.get("modern-luxury")
    page = new_page({"brandName": "Noor", "themeId": "modern-luxury"}, theme, "page-x", WHEN)

    assert page.tagline == "Luxury Scents. Timeless Elegance."
    assert page.cta_text == "Get Offer"
    assert page.perfume_type == "luxury"
    assert page.about_text == default_about_text("Noor")
    assert page.offer_title == "Exclusive Offer"
    assert page.logo_path is None
    assert page.theme_name == "Modern Luxury"
    assert page.created_at == page.updated_at == "2024-05-01T09:30:00.123Z"
    assert tuple(s.type for s in page.sections) == DEFAULT_SECTION_ORDER


def test_default_sections_are_seeded_from_page_fields(catalog: ThemeCatalog) -> None:
    payload = {
        "brandName": "Noor",
        "themeId": "luxury-oud",
        "tagline": "Smoke and gold.",
        "ctaText": "Order",
        "offerTitle": "Eid Offer",
    }
    page = new_page(payload, catalog.get("luxury-oud"), "page-x", WHEN)
    by_type = {s.type: s for s in page.sections}

    assert by_type["hero"].data == {"tagline": "Smoke and gold.", "ctaText": "Order"}
    assert by_type["about"].data["title"] == "The Art of Fragrance"
    assert by_type["features"].data["items"] == [
        "INSTALLMENT",
        "3 DAYS RETURN",
        "CASH ON DELIVERY",
        "FAST DELIVERY",
    ]
    assert by_type["offer"].data["title"] == "Eid Offer"
    assert by_type["policy"].data == {"email": "info@noor.com"}
    assert by_type["footer"].data == {}
    assert len({s.id for s in page.sections}) == 6


def test_new_page_keeps_supplied_sections(catalog: ThemeCatalog) -> None:
    payload = {
        "brandName": "Noor",
        "themeId": "pure-minimal",
        "sections": [{"id": "t1", "type": "text", "data": {"text": "Hello"}}, {"type": "cta"}],
    }
    page = new_page(payload, catalog.get("pure-minimal"), "page-x", WHEN)
    assert [s.type for s in page.sections] == ["text", "cta"]
    assert page.sections[0].id == "t1"
    assert page.sections[1].id.startswith("cta-")
    assert page.sections[1].data == {}


@pytest.mark.parametrize(
    "payload",
    [{}, {"themeId": "pure-minimal"}, {"brandName": "  ", "themeId": "pure-minimal"}, {"brandName": "Noor"}],
)
def test_new_page_requires_brand_and_theme(catalog: ThemeCatalog, payload: dict) -> None:
    with pytest.raises(ValidationError):
        new_page(payload, catalog.get("pure-minimal"), "page-x", WHEN)


def _stored(catalog: ThemeCatalog) -> Page:
    page = new_page(
        {"brandName": "Noor", "themeId": "fresh-citrus", "logoPath": "/uploads/logo.png"},
        catalog.get("fresh-citrus"),
        "page-x",
        WHEN,
    )
    return page


def test_update_ignores_empty_strings(catalog: ThemeCatalog) -> None:
    page = _stored(catalog)
    updated = apply_update(page, {"tagline": "", "brandName": None}, catalog.get("fresh-citrus"), LATER)
    assert updated.tagline == page.tagline
    assert updated.brand_name == "Noor"
    assert updated.logo_path == "/uploads/logo.png"


def test_update_clears_logo_on_explicit_none(catalog: ThemeCatalog) -> None:
    page = _stored(catalog)
    assert apply_update(page, {"logoPath": None}, catalog.get("fresh-citrus"), LATER).logo_path is None
    assert apply_update(page, {"logoPath": ""}, catalog.get("fresh-citrus"), LATER).logo_path is None


def test_update_replaces_sections_wholesale(catalog: ThemeCatalog) -> None:
    page = _stored(catalog)
    updated = apply_update(
        page, {"sections": [{"id": "f", "type": "footer", "data": {}}]}, catalog.get("fresh-citrus"), LATER
    )
    assert [s.id for s in updated.sections] == ["f"]
    assert len(page.sections) == 6


def test_update_refreshes_theme_name_and_timestamp(catalog: ThemeCatalog) -> None:
    page = _stored(catalog)
    theme = catalog.get("oriental-gold")
    updated = apply_update(page, {"themeId": "oriental-gold", "ctaText": "Buy"}, theme, LATER)
    assert updated.theme_id == "oriental-gold"
    assert updated.theme_name == "Oriental Gold"
    assert updated.cta_text == "Buy"
    assert updated.created_at == page.created_at
    assert updated.updated_at == iso_timestamp(LATER)


def test_update_does_not_trust_theme_name_input(catalog: ThemeCatalog) -> None:
    page = _stored(catalog)
    updated = apply_update(page, {"themeName": "Hacked"}, catalog.get("fresh-citrus"), LATER)
    assert updated.theme_name == "Fresh Citrus"


def test_duplicate_deep_copies_sections(catalog: ThemeCatalog) -> None:
    page = _stored(catalog)
    copy = duplicate_page(page, "page-y", catalog.get("fresh-citrus"), LATER)

    copy.sections[2].data["items"].append("GIFT WRAP")
    copy.sections.pop()

    assert len(page.sections) == 6
    assert "GIFT WRAP" not in page.sections[2].data["items"]
    assert copy.brand_name == "Noor (Copy)"
    assert copy.created_at == copy.updated_at == iso_timestamp(LATER)


def test_page_dict_uses_camel_case_keys(catalog: ThemeCatalog) -> None:
    page = _stored(catalog)
    data = page.to_dict()
    assert data["brandName"] == "Noor"
    assert data["logoPath"] == "/uploads/logo.png"
    assert Page.from_dict(data) == page


def test_page_from_legacy_record_has_no_sections() -> None:
    page = Page.from_dict(
        {
            "id": "page-1",
            "brandName": "Oud House",
            "themeId": "luxury-oud",
            "themeName": "Luxury Oud",
            "createdAt": "2023-01-01T00:00:00.000Z",
        }
    )
    assert page.sections == []
    assert page.updated_at == "2023-01-01T00:00:00.000Z"
    assert page.about_text.startswith("Oud House represents")


def test_new_section_uses_starter_data(page: Page) -> None:
    section = new_section("contact", page, WHEN)
    assert section.data == {"email": "info@maisonambre.com"}
    assert section.id == section_id("contact", WHEN)
    with pytest.raises(ValidationError):
        new_section("carousel", page)


def test_move_and_remove_section_return_new_lists() -> None:
    sections = [Section("a", "hero"), Section("b", "about"), Section("c", "footer")]
    assert [s.id for s in move_section(sections, 0, 1)] == ["b", "a", "c"]
    assert [s.id for s in move_section(sections, 2, 1)] == ["a", "b", "c"]
    assert [s.id for s in remove_section(sections, 1)] == ["a", "c"]
    assert [s.id for s in sections] == ["a", "b", "c"]
