"""Per-type section rendering.

``render`` turns one section of a page into an HTML fragment. Each section
type is an entry in ``SECTION_BUILDERS`` (field defaults) paired with a
template under ``templates/sections``; colors come from ``TONES`` so a
fragment only ever references the theme's CSS custom properties.
"""

from __future__ import annotations

from datetime import date
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .models import DEFAULT_ABOUT_TITLE, DEFAULT_FEATURES, DEFAULT_OFFER_TITLE, Page, Section
from .themes import Theme

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"

# Background/foreground pairs for light and dark themes.
TONES: Dict[bool, Dict[str, str]] = {
    True: {
        "surface_bg": "var(--background)",
        "surface_fg": "var(--text)",
        "muted_bg": "var(--secondary)",
        "card_bg": "rgba(255,255,255,0.05)",
        "brand_fg": "var(--text)",
        "rule": "var(--accent)",
        "button_fg": "var(--primary)",
        "note_bg": "rgba(255,255,255,0.05)",
        "hero_bg": "linear-gradient(135deg, var(--primary) 0%, var(--secondary) 100%)",
        "band_bg": "var(--secondary)",
        "offer_bg": "linear-gradient(180deg, var(--secondary) 0%, var(--primary) 100%)",
    },
    False: {
        "surface_bg": "#ffffff",
        "surface_fg": "var(--text-dark)",
        "muted_bg": "var(--background)",
        "card_bg": "#ffffff",
        "brand_fg": "#ffffff",
        "rule": "#ffffff",
        "button_fg": "#ffffff",
        "note_bg": "rgba(0,0,0,0.03)",
        "hero_bg": "var(--background)",
        "band_bg": "var(--primary)",
        "offer_bg": "var(--primary)",
    },
}

BUTTON_RADII = {"pill": "50px", "sharp": "0", "rounded": "8px"}

# First matching keyword wins, so longer phrases sit before their suffixes.
FEATURE_ICONS = (
    ("INSTALLMENT", "\U0001F4B3"),
    ("3 DAYS RETURN", "\U0001F504"),
    ("RETURN", "\U0001F504"),
    ("CASH ON DELIVERY", "\U0001F4B5"),
    ("COD", "\U0001F4B5"),
    ("FAST DELIVERY", "\U0001F69A"),
    ("DELIVERY", "\U0001F69A"),
    ("FREE SHIPPING", "\U0001F4E6"),
    ("SHIPPING", "\U0001F4E6"),
    ("WARRANTY", "\U0001F6E1\uFE0F"),
    ("GUARANTEE", "✅"),
    ("ORIGINAL", "⭐"),
    ("AUTHENTIC", "\U0001F48E"),
    ("24/7 SUPPORT", "\U0001F4DE"),
    ("SUPPORT", "\U0001F4DE"),
)
DEFAULT_FEATURE_ICON = "✨"

OFFER_CARDS = (
    {"label": "Limited Time", "headline": "20% Off", "detail": "On your first purchase"},
    {"label": "Exclusive", "headline": "Free Gift", "detail": "With orders over $150"},
    {"label": "Members Only", "headline": "VIP Access", "detail": "Early collection previews"},
)

TESTIMONIALS = (
    {"quote": "Absolutely stunning fragrance. I get compliments everywhere I go!", "author": "Sarah M."},
    {"quote": "The quality is exceptional. Worth every penny!", "author": "Ahmed K."},
)

POLICY_TITLE = "Exchange & Return Policy"
POLICY_CONDITIONS = [
    "The original box and packaging must be kept, even if the product has been opened.",
    "The item must be in good condition, with all accessories and packaging included.",
    "Returns are accepted within 3 days of receiving your order.",
]
POLICY_REFUND_PROCESS = [
    "Our courier will collect the return directly from your address.",
    "Once the item is checked, your refund will be processed.",
    "Cairo and Giza: Refund in cash on the spot when collecting the returned order.",
    "Other governorates: Refund processed through shipping company.",
]
POLICY_NOTICE = "If you receive a wrong or damaged product, please contact our customer service immediately."


@lru_cache(maxsize=None)
def template_env(templates_dir: Path = TEMPLATES_DIR) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )


def tones(dark: bool) -> Dict[str, str]:
    return TONES[bool(dark)]


def button_radius(theme: Theme) -> str:
    return BUTTON_RADII.get(theme.button_style, BUTTON_RADII["rounded"])


def feature_icon(item: str) -> str:
    upper = item.upper()
    for keyword, icon in FEATURE_ICONS:
        if keyword in upper:
            return icon
    return DEFAULT_FEATURE_ICON


def _pick(data: Mapping[str, Any], key: str, default: Any) -> Any:
    value = data.get(key)
    if value is None or value == "":
        return default
    return value


def _as_list(value: Any) -> List[str]:
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return [str(value)]


# ---------------------------------------------------------------------------
# Context builders, one per section type
# ---------------------------------------------------------------------------


def _hero(data: Mapping[str, Any], page: Page) -> Dict[str, Any]:
    return {
        "tagline": _pick(data, "tagline", page.tagline),
        "cta_text": _pick(data, "ctaText", page.cta_text),
        "logo_path": page.logo_path,
        "heading": page.brand_name.upper(),
    }


def _about(data: Mapping[str, Any], page: Page) -> Dict[str, Any]:
    return {
        "title": _pick(data, "title", DEFAULT_ABOUT_TITLE),
        "text": _pick(data, "text", page.about_text),
    }


def _features(data: Mapping[str, Any], page: Page) -> Dict[str, Any]:
    items = _as_list(_pick(data, "items", DEFAULT_FEATURES))
    return {
        "items": [{"label": item, "icon": feature_icon(item)} for item in items],
        "columns": max(len(items), 1),
    }


def _offer(data: Mapping[str, Any], page: Page) -> Dict[str, Any]:
    return {
        "title": _pick(data, "title", DEFAULT_OFFER_TITLE),
        "description": _pick(data, "description", "Discover your signature scent"),
        "cards": OFFER_CARDS,
        "cta_text": page.cta_text,
    }


def _policy(data: Mapping[str, Any], page: Page) -> Dict[str, Any]:
    return {
        "title": _pick(data, "title", POLICY_TITLE),
        "intro": _pick(
            data,
            "intro",
            f"At {page.brand_name}, your satisfaction is our top priority. We allow our "
            "customers to open and inspect their orders upon delivery.",
        ),
        "conditions": _as_list(_pick(data, "conditions", POLICY_CONDITIONS)),
        "refund_process": _as_list(_pick(data, "refundProcess", POLICY_REFUND_PROCESS)),
        "notice": _pick(data, "notice", POLICY_NOTICE),
        "email": _pick(data, "email", page.email),
        "bg_color": _pick(data, "bgColor", None),
        "text_color": _pick(data, "textColor", None),
    }


def _footer(data: Mapping[str, Any], page: Page) -> Dict[str, Any]:
    return {"heading": page.brand_name.upper(), "year": date.today().year}


def _gallery(data: Mapping[str, Any], page: Page) -> Dict[str, Any]:
    return {"title": "Gallery", "tiles": 3}


def _testimonials(data: Mapping[str, Any], page: Page) -> Dict[str, Any]:
    return {"title": "What Our Customers Say", "quotes": TESTIMONIALS}


def _contact(data: Mapping[str, Any], page: Page) -> Dict[str, Any]:
    return {
        "title": "Contact Us",
        "prompt": "Have questions? We'd love to hear from you.",
        "email": page.email,
    }


def _cta(data: Mapping[str, Any], page: Page) -> Dict[str, Any]:
    return {"title": _pick(data, "title", "Ready to Experience Luxury?"), "cta_text": page.cta_text}


def _text(data: Mapping[str, Any], page: Page) -> Dict[str, Any]:
    return {"text": _pick(data, "text", "")}


SECTION_BUILDERS: Dict[str, Callable[[Mapping[str, Any], Page], Dict[str, Any]]] = {
    "hero": _hero,
    "about": _about,
    "features": _features,
    "offer": _offer,
    "policy": _policy,
    "footer": _footer,
    "gallery": _gallery,
    "testimonials": _testimonials,
    "contact": _contact,
    "cta": _cta,
    "text": _text,
}


def render(section: Section, page: Page, theme: Theme, dark: bool) -> str:
    """Render one section; unknown types produce an empty string."""

    builder = SECTION_BUILDERS.get(section.type)
    if builder is None:
        return ""
    context = builder(section.data or {}, page)
    template = template_env().get_template(f"sections/{section.type}.html.j2")
    return template.render(
        tone=tones(dark),
        theme=theme,
        brand_name=page.brand_name,
        radius=button_radius(theme),
        **context,
    )
