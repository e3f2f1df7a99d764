"""Page export helpers."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from urllib.parse import quote

from . import storage
from .models import Page
from .sections import OFFER_CARDS, button_radius, render, template_env, tones
from .themes import Theme, is_dark

FONTS_URL = "https://fonts.googleapis.com/css2"


def _font_family(name: str, weights: str) -> str:
    return f"family={quote(name, safe='')}:wght@{weights}"


def font_href(theme: Theme) -> str:
    """Google Fonts stylesheet URL for the theme's heading and body fonts."""
    return (
        f"{FONTS_URL}?{_font_family(theme.font, '300;400;500;600;700')}"
        f"&{_font_family(theme.font_body, '300;400;500')}&display=swap"
    )


def _shell_context(theme: Theme) -> dict:
    dark = is_dark(theme.id)
    return {
        "theme": theme,
        "tone": tones(dark),
        "radius": button_radius(theme),
        "font_href": font_href(theme),
    }


def compose_legacy(page: Page, theme: Theme) -> str:
    """Fixed six-block document for pages saved without a section list."""

    tpl = template_env().get_template("legacy.html.j2")
    return tpl.render(
        page=page,
        cards=OFFER_CARDS,
        year=date.today().year,
        **_shell_context(theme),
    )


def compose(page: Page, theme: Theme) -> str:
    if not page.sections:
        return compose_legacy(page, theme)

    dark = is_dark(theme.id)
    content = "".join(render(section, page, theme, dark) for section in page.sections)
    tpl = template_env().get_template("page.html.j2")
    return tpl.render(
        brand_name=page.brand_name,
        content=content,
        **_shell_context(theme),
    )


def export_page(page: Page, theme: Theme, output_dir: str | Path) -> Path:
    """Compose ``page`` and write it to ``<output_dir>/<page id>.html``."""

    return storage.write_artifact(output_dir, page.id, compose(page, theme))
