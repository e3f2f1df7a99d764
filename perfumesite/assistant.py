"""Keyword-based theme suggestions and canned marketing copy.

Nothing here is a learned model: themes are scored by matching words
against their mood tags, and copy comes from fixed per-category tables.
Prompt-driven copy is delegated to a ``PromptCopywriter`` supplied by the
host application.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol, Tuple

import structlog

from .core.errors import ValidationError
from .core.models import DEFAULT_CTA_TEXT, DEFAULT_TAGLINE, Page
from .core.pages import PageStore
from .core.themes import Theme, ThemeCatalog

logger = structlog.get_logger()

DEFAULT_CATEGORY = "luxury"

TAGLINES: Dict[str, Tuple[str, ...]] = {
    "luxury": (
        "Luxury Scents. Timeless Elegance.",
        "Where Luxury Meets Essence.",
        "The Art of Refined Fragrance.",
    ),
    "fresh": (
        "Fresh. Pure. Unforgettable.",
        "Embrace the Freshness Within.",
        "A Breath of Pure Elegance.",
    ),
    "oriental": (
        "Exotic Essence. Eternal Allure.",
        "The Mystery of the Orient.",
        "Ancient Secrets. Modern Luxury.",
    ),
    "floral": (
        "Blooming Elegance.",
        "The Essence of Petals.",
        "Where Flowers Meet Luxury.",
    ),
    "masculine": (
        "Bold. Powerful. Unforgettable.",
        "The Scent of Strength.",
        "Confidence in Every Note.",
    ),
    "feminine": (
        "Grace. Beauty. Sophistication.",
        "The Essence of Femininity.",
        "Elegance Redefined.",
    ),
}

ABOUT_TEMPLATES: Dict[str, str] = {
    "luxury": (
        "{brand} represents the pinnacle of luxury perfumery. Each fragrance is meticulously "
        "crafted using the finest ingredients sourced from around the world, blending tradition "
        "with modern sophistication."
    ),
    "fresh": (
        "{brand} captures the essence of nature's purest elements. Our fragrances are designed "
        "to invigorate your senses and leave a lasting impression of freshness and vitality."
    ),
    "oriental": (
        "{brand} draws inspiration from ancient Eastern traditions. Our exotic blends combine "
        "rare ingredients to create fragrances that are mysterious, captivating, and unforgettable."
    ),
    "floral": (
        "{brand} celebrates the timeless beauty of flowers. Each fragrance captures the delicate "
        "essence of nature's most precious blooms, creating scents that are romantic and enchanting."
    ),
    "masculine": (
        "{brand} crafts bold fragrances for the modern man. Our scents embody strength, "
        "confidence, and sophistication, leaving a powerful impression wherever you go."
    ),
    "feminine": (
        "{brand} creates elegant fragrances that celebrate femininity. Our scents are designed "
        "to empower and enchant, reflecting the grace and beauty of the modern woman."
    ),
}


@dataclass(frozen=True, slots=True)
class ThemeSuggestion:
    theme: Theme
    score: int

    @property
    def is_random(self) -> bool:
        return self.score == 0

    def to_dict(self) -> dict:
        return {"theme": self.theme.to_dict(), "score": self.score}


@dataclass(frozen=True, slots=True)
class CopySuggestion:
    tagline: str
    about_text: str

    def to_dict(self) -> dict:
        return {"tagline": self.tagline, "aboutText": self.about_text}


@dataclass(frozen=True, slots=True)
class PromptCopy:
    """What a prompt copywriter may return; any field can be missing."""

    tagline: Optional[str] = None
    cta_text: Optional[str] = None
    about_text: Optional[str] = None
    offer_title: Optional[str] = None
    offer_description: Optional[str] = None


class PromptCopywriter(Protocol):
    def generate(self, brand_name: str, prompt: str, theme_id: str) -> PromptCopy: ...


def score_theme(theme: Theme, keywords: List[str]) -> int:
    tags = [tag.lower() for tag in theme.mood]
    name = theme.name.lower()
    score = 0
    for keyword in keywords:
        if any(keyword in tag or tag in keyword for tag in tags):
            score += 2
        if keyword in name:
            score += 1
    return score


def suggest_theme(
    catalog: ThemeCatalog,
    perfume_type: str,
    mood: str = "",
    rng: random.Random | None = None,
) -> ThemeSuggestion:
    """Pick the catalog theme whose mood tags best match the description.

    Ties keep the earliest theme in catalog order. When nothing matches a
    theme is drawn at random and the score is 0.
    """

    keywords = f"{perfume_type or ''} {mood or ''}".lower().split()
    best: Optional[Theme] = None
    best_score = 0
    for theme in catalog:
        score = score_theme(theme, keywords)
        if score > best_score:
            best, best_score = theme, score
    if best is None:
        themes = catalog.list()
        if not themes:
            raise ValueError("theme catalog is empty")
        best = (rng or random).choice(themes)
        logger.info("No theme matched, picked at random", theme_id=best.id)
    return ThemeSuggestion(theme=best, score=best_score)


def copy_category(perfume_type: str, mood: str = "") -> str:
    text = (perfume_type or mood or DEFAULT_CATEGORY).lower()
    for category in TAGLINES:
        if category in text:
            return category
    return DEFAULT_CATEGORY


def generate_copy(
    brand_name: str,
    perfume_type: str,
    mood: str = "",
    rng: random.Random | None = None,
) -> CopySuggestion:
    category = copy_category(perfume_type, mood)
    tagline = (rng or random).choice(TAGLINES[category])
    return CopySuggestion(tagline=tagline, about_text=ABOUT_TEMPLATES[category].format(brand=brand_name))


def create_from_prompt(
    store: PageStore,
    copywriter: PromptCopywriter,
    brand_name: str,
    prompt: str,
    theme_id: str,
    logo_path: Optional[str] = None,
) -> Page:
    """Ask ``copywriter`` for page copy and create a page from the answer."""

    if not prompt or not prompt.strip():
        raise ValidationError("A prompt is required")
    copy = copywriter.generate(brand_name, prompt, theme_id)
    payload = {
        "brandName": brand_name,
        "themeId": theme_id,
        "logoPath": logo_path,
        "tagline": copy.tagline or DEFAULT_TAGLINE,
        "ctaText": copy.cta_text or DEFAULT_CTA_TEXT,
        "aboutText": copy.about_text,
        "offerTitle": copy.offer_title,
        "offerDescription": copy.offer_description,
    }
    return store.create(payload)
