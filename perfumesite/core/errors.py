"""Exceptions raised by the page engine."""

from __future__ import annotations


class PerfumeSiteError(Exception):
    """Base class for every error the engine reports to its caller."""


class ValidationError(PerfumeSiteError):
    """Required input is missing or malformed."""


class InvalidThemeError(PerfumeSiteError):
    """A page refers to a theme id that is not in the catalog."""

    def __init__(self, theme_id: str) -> None:
        super().__init__(f"Invalid theme: {theme_id!r}")
        self.theme_id = theme_id


class NotFoundError(PerfumeSiteError):
    """A page or theme id is absent."""

    def __init__(self, kind: str, item_id: str) -> None:
        super().__init__(f"{kind.capitalize()} not found: {item_id!r}")
        self.kind = kind
        self.item_id = item_id
