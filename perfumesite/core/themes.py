"""Theme catalog: the fixed set of visual themes a page can use."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from . import storage
from .errors import InvalidThemeError, NotFoundError

SEED_THEMES_PATH = Path(__file__).resolve().parents[1] / "data" / "themes.json"

# Light/dark contrast is decided by id, never by a theme field. New dark
# themes must be listed here.
DARK_THEME_IDS = frozenset(
    {"luxury-oud", "sensual-night", "dark-masculine", "modern-luxury", "oriental-gold"}
)

BUTTON_STYLES = ("rounded", "pill", "sharp")


def is_dark(theme_id: str) -> bool:
    return theme_id in DARK_THEME_IDS


@dataclass(frozen=True, slots=True)
class ThemeColors:
    primary: str
    secondary: str
    accent: str
    text: str
    text_dark: str
    background: str

    def to_dict(self) -> dict:
        return {
            "primary": self.primary,
            "secondary": self.secondary,
            "accent": self.accent,
            "text": self.text,
            "textDark": self.text_dark,
            "background": self.background,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ThemeColors":
        return cls(
            primary=data.get("primary", "#000000"),
            secondary=data.get("secondary", "#333333"),
            accent=data.get("accent", "#c9a45c"),
            text=data.get("text", "#ffffff"),
            text_dark=data.get("textDark", "#111111"),
            background=data.get("background", "#ffffff"),
        )


@dataclass(frozen=True, slots=True)
class Theme:
    id: str
    name: str
    mood: Tuple[str, ...]
    font: str
    font_body: str
    colors: ThemeColors
    button_style: str = "rounded"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "mood": list(self.mood),
            "font": self.font,
            "fontBody": self.font_body,
            "colors": self.colors.to_dict(),
            "buttonStyle": self.button_style,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Theme":
        button_style = data.get("buttonStyle", "rounded")
        if button_style not in BUTTON_STYLES:
            button_style = "rounded"
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", data["id"])),
            mood=tuple(str(m) for m in data.get("mood", [])),
            font=data.get("font", "Playfair Display"),
            font_body=data.get("fontBody", "Lato"),
            colors=ThemeColors.from_dict(data.get("colors", {})),
            button_style=button_style,
        )


class ThemeCatalog:
    """Read-only, ordered collection of themes keyed by id."""

    def __init__(self, themes: List[Theme]) -> None:
        self._themes = list(themes)
        self._by_id: Dict[str, Theme] = {t.id: t for t in self._themes}

    def __iter__(self) -> Iterator[Theme]:
        return iter(self._themes)

    def __len__(self) -> int:
        return len(self._themes)

    def __contains__(self, theme_id: object) -> bool:
        return theme_id in self._by_id

    def list(self) -> List[Theme]:
        return list(self._themes)

    def find(self, theme_id: Optional[str]) -> Optional[Theme]:
        if not theme_id:
            return None
        return self._by_id.get(theme_id)

    def get(self, theme_id: str) -> Theme:
        """Look up a theme for a read, raising ``NotFoundError`` if absent."""

        theme = self.find(theme_id)
        if theme is None:
            raise NotFoundError("theme", theme_id)
        return theme

    def resolve(self, theme_id: Optional[str]) -> Theme:
        """Look up the theme a page write refers to.

        Writes report an unknown id as ``InvalidThemeError`` rather than a
        missing resource, because the page (not the theme) is the subject.
        """

        theme = self.find(theme_id)
        if theme is None:
            raise InvalidThemeError(str(theme_id))
        return theme


def load_catalog(path: str | Path | None = None) -> ThemeCatalog:
    """Load a catalog from ``path``, or the packaged seed when ``None``."""

    raw = storage.load_collection(path or SEED_THEMES_PATH, "themes", create=False)
    return ThemeCatalog([Theme.from_dict(item) for item in raw if isinstance(item, dict)])
