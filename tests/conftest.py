from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from perfumesite.core.models import Page, Section  # noqa: E402
from perfumesite.core.pages import PageStore  # noqa: E402
from perfumesite.core.themes import ThemeCatalog, load_catalog  # noqa: E402


class TickingClock:
    """Returns a later instant on every call."""

    def __init__(self, start: datetime | None = None, step_ms: int = 5) -> None:
        self.now = start or datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)
        self.step = timedelta(milliseconds=step_ms)

    def __call__(self) -> datetime:
        self.now += self.step
        return self.now


@pytest.fixture
def catalog() -> ThemeCatalog:
    return load_catalog()


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def store(tmp_path: Path, catalog: ThemeCatalog, clock: TickingClock) -> PageStore:
    return PageStore(catalog, tmp_path / "pages.json", tmp_path / "generated", clock=clock)


@pytest.fixture
def page() -> Page:
    return Page(
        id="page-1",
        brand_name="Maison Ambre",
        theme_id="fresh-citrus",
        theme_name="Fresh Citrus",
        created_at="2024-03-01T12:00:00.000Z",
        updated_at="2024-03-01T12:00:00.000Z",
        tagline="Bright by nature.",
        cta_text="Shop Now",
        about_text="Made in Grasse.",
        sections=[
            Section("hero-1", "hero", {}),
            Section("about-1", "about", {}),
        ],
    )
