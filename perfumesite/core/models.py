"""Data models for the perfume page builder.

Records are stored as camelCase JSON documents (``brandName``,
``themeId``...) and exposed to Python as snake_case dataclasses. Every
mutation builds a new ``Page`` instead of editing one in place.
"""

from __future__ import annotations

import copy
import re
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from .errors import ValidationError
from .themes import Theme

SECTION_TYPES = (
    "hero",
    "about",
    "features",
    "offer",
    "policy",
    "footer",
    "gallery",
    "testimonials",
    "contact",
    "cta",
    "text",
)

DEFAULT_SECTION_ORDER = ("hero", "about", "features", "offer", "policy", "footer")

DEFAULT_TAGLINE = "Luxury Scents. Timeless Elegance."
DEFAULT_CTA_TEXT = "Get Offer"
DEFAULT_PERFUME_TYPE = "luxury"
DEFAULT_ABOUT_TITLE = "The Art of Fragrance"
DEFAULT_OFFER_TITLE = "Exclusive Offer"
DEFAULT_OFFER_DESCRIPTION = "Discover your signature scent with our exclusive collection."
DEFAULT_FEATURES = ["INSTALLMENT", "3 DAYS RETURN", "CASH ON DELIVERY", "FAST DELIVERY"]

# Plain fields follow "replace when truthy"; logoPath and sections are
# handled separately in apply_update.
_TRUTHY_FIELDS = (
    ("brandName", "brand_name"),
    ("tagline", "tagline"),
    ("ctaText", "cta_text"),
    ("perfumeType", "perfume_type"),
    ("aboutText", "about_text"),
    ("offerTitle", "offer_title"),
    ("offerDescription", "offer_description"),
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_timestamp(when: datetime) -> str:
    """Format like ``2024-05-01T09:30:00.123Z``."""
    return when.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def epoch_millis(when: datetime) -> int:
    return int(when.timestamp() * 1000)


def section_id(section_type: str, when: Optional[datetime] = None) -> str:
    return f"{section_type}-{epoch_millis(when or utc_now())}"


def brand_email(brand_name: str) -> str:
    handle = re.sub(r"\s+", "", brand_name.lower())
    return f"info@{handle}.com"


def default_about_text(brand_name: str) -> str:
    return (
        f"{brand_name} represents the pinnacle of luxury perfumery. Each fragrance is "
        "meticulously crafted using the finest ingredients sourced from around the world, "
        "blending tradition with modern sophistication. Our master perfumers dedicate "
        "themselves to creating scents that transcend time, leaving an unforgettable "
        "impression wherever you go."
    )


@dataclass(slots=True)
class Section:
    id: str
    type: str
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"id": self.id, "type": self.type, "data": copy.deepcopy(self.data)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Section":
        section_type = str(data.get("type", ""))
        payload = data.get("data")
        return cls(
            id=str(data.get("id") or section_id(section_type)),
            type=section_type,
            data=copy.deepcopy(dict(payload)) if isinstance(payload, Mapping) else {},
        )


@dataclass(slots=True)
class Page:
    id: str
    brand_name: str
    theme_id: str
    theme_name: str
    created_at: str
    updated_at: str
    logo_path: Optional[str] = None
    tagline: str = DEFAULT_TAGLINE
    cta_text: str = DEFAULT_CTA_TEXT
    perfume_type: str = DEFAULT_PERFUME_TYPE
    about_text: str = ""
    offer_title: str = DEFAULT_OFFER_TITLE
    offer_description: str = DEFAULT_OFFER_DESCRIPTION
    sections: List[Section] = field(default_factory=list)

    @property
    def email(self) -> str:
        return brand_email(self.brand_name)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "brandName": self.brand_name,
            "themeId": self.theme_id,
            "themeName": self.theme_name,
            "logoPath": self.logo_path,
            "tagline": self.tagline,
            "ctaText": self.cta_text,
            "perfumeType": self.perfume_type,
            "aboutText": self.about_text,
            "offerTitle": self.offer_title,
            "offerDescription": self.offer_description,
            "sections": [s.to_dict() for s in self.sections],
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Page":
        brand_name = str(data.get("brandName", ""))
        sections_data = data.get("sections") or []
        return cls(
            id=str(data["id"]),
            brand_name=brand_name,
            theme_id=str(data.get("themeId", "")),
            theme_name=str(data.get("themeName", "")),
            created_at=str(data.get("createdAt", "")),
            updated_at=str(data.get("updatedAt", data.get("createdAt", ""))),
            logo_path=data.get("logoPath") or None,
            tagline=data.get("tagline") or DEFAULT_TAGLINE,
            cta_text=data.get("ctaText") or DEFAULT_CTA_TEXT,
            perfume_type=data.get("perfumeType") or DEFAULT_PERFUME_TYPE,
            about_text=data.get("aboutText") or default_about_text(brand_name),
            offer_title=data.get("offerTitle") or DEFAULT_OFFER_TITLE,
            offer_description=data.get("offerDescription") or DEFAULT_OFFER_DESCRIPTION,
            sections=[Section.from_dict(s) for s in sections_data if isinstance(s, Mapping)],
        )


def sections_from_payload(items: Any) -> List[Section]:
    if not isinstance(items, list):
        raise ValidationError("sections must be a list")
    sections: List[Section] = []
    for item in items:
        if isinstance(item, Section):
            sections.append(Section(item.id, item.type, copy.deepcopy(item.data)))
        elif isinstance(item, Mapping):
            sections.append(Section.from_dict(item))
        else:
            raise ValidationError(f"section must be an object, got {type(item).__name__}")
    return sections


def default_sections(page: Page, when: Optional[datetime] = None) -> List[Section]:
    """The six-section layout every new page starts with."""

    when = when or utc_now()
    seeds: Dict[str, Dict[str, Any]] = {
        "hero": {"tagline": page.tagline, "ctaText": page.cta_text},
        "about": {"title": DEFAULT_ABOUT_TITLE, "text": page.about_text},
        "features": {"items": list(DEFAULT_FEATURES)},
        "offer": {"title": page.offer_title, "description": page.offer_description},
        "policy": {"email": page.email},
        "footer": {},
    }
    return [Section(section_id(kind, when), kind, seeds[kind]) for kind in DEFAULT_SECTION_ORDER]


def require_create_fields(payload: Mapping[str, Any]) -> None:
    brand_name = payload.get("brandName")
    if not brand_name or not str(brand_name).strip() or not payload.get("themeId"):
        raise ValidationError("Brand name and theme are required")


def new_page(payload: Mapping[str, Any], theme: Theme, page_id: str, when: datetime) -> Page:
    """Build a fresh page record from a create payload.

    ``theme`` must already be resolved from ``payload["themeId"]``.
    """

    require_create_fields(payload)
    brand_name = str(payload["brandName"])
    stamp = iso_timestamp(when)
    page = Page(
        id=page_id,
        brand_name=brand_name,
        theme_id=theme.id,
        theme_name=theme.name,
        created_at=stamp,
        updated_at=stamp,
        logo_path=payload.get("logoPath") or None,
        tagline=payload.get("tagline") or DEFAULT_TAGLINE,
        cta_text=payload.get("ctaText") or DEFAULT_CTA_TEXT,
        perfume_type=payload.get("perfumeType") or DEFAULT_PERFUME_TYPE,
        about_text=payload.get("aboutText") or default_about_text(brand_name),
        offer_title=payload.get("offerTitle") or DEFAULT_OFFER_TITLE,
        offer_description=payload.get("offerDescription") or DEFAULT_OFFER_DESCRIPTION,
    )
    supplied = payload.get("sections")
    sections = sections_from_payload(supplied) if supplied else default_sections(page, when)
    return replace(page, sections=sections)


def apply_update(page: Page, changes: Mapping[str, Any], theme: Theme, when: datetime) -> Page:
    """Merge a partial update into ``page``.

    Plain fields are replaced only by truthy values, so ``{"tagline": ""}``
    keeps the stored tagline. ``logoPath`` is replaced whenever the key is
    present, so ``{"logoPath": None}`` clears the logo. ``sections`` is
    replaced wholesale when given.
    """

    updates: Dict[str, Any] = {}
    for key, attr in _TRUTHY_FIELDS:
        value = changes.get(key)
        if value:
            updates[attr] = str(value)
    if "logoPath" in changes:
        updates["logo_path"] = changes["logoPath"] or None
    if changes.get("sections") is not None:
        updates["sections"] = sections_from_payload(changes["sections"])
    updates["theme_id"] = theme.id
    updates["theme_name"] = theme.name
    updates["updated_at"] = iso_timestamp(when)
    return replace(page, **updates)


def duplicate_page(page: Page, page_id: str, theme: Theme, when: datetime) -> Page:
    stamp = iso_timestamp(when)
    return replace(
        page,
        id=page_id,
        brand_name=f"{page.brand_name} (Copy)",
        theme_name=theme.name,
        sections=[Section(s.id, s.type, copy.deepcopy(s.data)) for s in page.sections],
        created_at=stamp,
        updated_at=stamp,
    )


# ---------------------------------------------------------------------------
# Section list editing
# ---------------------------------------------------------------------------


def default_section_data(section_type: str, page: Page) -> Dict[str, Any]:
    """Starter data for a section added to an existing page."""

    starters: Dict[str, Dict[str, Any]] = {
        "hero": {"tagline": page.tagline, "ctaText": page.cta_text},
        "about": {"title": "About Us", "text": "Tell your brand story here..."},
        "features": {"items": ["Feature 1", "Feature 2", "Feature 3", "Feature 4"]},
        "offer": {"title": "Special Offer", "description": "Limited time offer for our valued customers"},
        "policy": {"email": page.email},
        "gallery": {"images": []},
        "testimonials": {"items": []},
        "contact": {"email": page.email},
        "cta": {"title": "Ready to Experience Luxury?"},
        "text": {"text": "Add your custom text here..."},
    }
    return copy.deepcopy(starters.get(section_type, {}))


def new_section(section_type: str, page: Page, when: Optional[datetime] = None) -> Section:
    if section_type not in SECTION_TYPES:
        raise ValidationError(f"Unknown section type: {section_type!r}")
    return Section(section_id(section_type, when), section_type, default_section_data(section_type, page))


def move_section(sections: List[Section], index: int, direction: int) -> List[Section]:
    """Swap the section at ``index`` with its neighbour; out of range is a no-op."""

    moved = list(sections)
    target = index + direction
    if not (0 <= index < len(moved)) or not (0 <= target < len(moved)):
        return moved
    moved[index], moved[target] = moved[target], moved[index]
    return moved


def remove_section(sections: List[Section], index: int) -> List[Section]:
    if not (0 <= index < len(sections)):
        return list(sections)
    return [s for i, s in enumerate(sections) if i != index]
