from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from perfumesite.core.generator import compose, export_page, font_href
from perfumesite.core.models import Page, Section
from perfumesite.core.themes import ThemeCatalog


def test_font_href_encodes_both_families(catalog: ThemeCatalog) -> None:
    href = font_href(catalog.get("luxury-oud"))
    assert href.startswith("https://fonts.googleapis.com/css2?family=Cormorant%20Garamond:wght@300;400;500;600;700")
    assert "&family=Montserrat:wght@300;400;500" in href
    assert href.endswith("&display=swap")


def test_compose_is_deterministic(page: Page, catalog: ThemeCatalog) -> None:
    theme = catalog.get(page.theme_id)
    assert compose(page, theme) == compose(page, theme)


def test_compose_keeps_section_order(page: Page, catalog: ThemeCatalog) -> None:
    theme = catalog.get(page.theme_id)
    html = compose(page, theme)
    assert html.index("MAISON AMBRE") < html.index("The Art of Fragrance")

    swapped = replace(page, sections=list(reversed(page.sections)))
    html = compose(swapped, theme)
    assert html.index("The Art of Fragrance") < html.index("MAISON AMBRE")


def test_compose_injects_theme_variables(page: Page, catalog: ThemeCatalog) -> None:
    theme = catalog.get(page.theme_id)
    html = compose(page, theme)
    assert html.startswith("<!DOCTYPE html>")
    assert f"--primary: {theme.colors.primary};" in html
    assert f"--text-dark: {theme.colors.text_dark};" in html
    assert "border-radius: 50px;" in html
    assert "<title>Maison Ambre | Luxury Perfumes</title>" in html
    assert "IntersectionObserver" in html


def test_unknown_sections_are_skipped(page: Page, catalog: ThemeCatalog) -> None:
    theme = catalog.get(page.theme_id)
    with_unknown = replace(page, sections=page.sections + [Section("x", "carousel", {})])
    assert compose(with_unknown, theme) == compose(page, theme)

    hero, about = page.sections
    in_between = replace(page, sections=[hero, Section("x", "carousel", {}), about])
    assert compose(in_between, theme) == compose(page, theme)


def test_pages_without_sections_use_fixed_layout(page: Page, catalog: ThemeCatalog) -> None:
    legacy = replace(page, sections=[])
    html = compose(legacy, catalog.get(page.theme_id))
    for fragment in ("MAISON AMBRE", "Bright by nature.", "Made in Grasse.", "20% Off", "info@maisonambre.com"):
        assert fragment in html


def test_export_writes_artifact(tmp_path: Path, page: Page, catalog: ThemeCatalog) -> None:
    theme = catalog.get(page.theme_id)
    path = export_page(page, theme, tmp_path / "out")
    assert path == tmp_path / "out" / "page-1.html"
    assert path.read_text(encoding="utf-8") == compose(page, theme)
