"""Persisted page operations.

Every mutating call loads the pages collection, writes (or removes) the
page's HTML artifact, and only then rewrites the collection, so a stored
record always has a matching ``<id>.html`` next to it.
"""

from __future__ import annotations

import threading
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, List, Mapping, Optional

import structlog

from . import storage
from .errors import NotFoundError
from .generator import export_page
from .models import (
    Page,
    apply_update,
    duplicate_page,
    epoch_millis,
    new_page,
    require_create_fields,
    utc_now,
)
from .themes import ThemeCatalog

logger = structlog.get_logger()

PAGES_KEY = "pages"


def new_page_id(when: datetime) -> str:
    return f"page-{epoch_millis(when)}-{uuid.uuid4().hex[:6]}"


class PageStore:
    def __init__(
        self,
        catalog: ThemeCatalog,
        pages_path: str | Path,
        generated_dir: str | Path,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.catalog = catalog
        self.pages_path = Path(pages_path)
        self.generated_dir = Path(generated_dir)
        self.clock = clock
        self._lock = threading.Lock()

    # -- collection I/O -----------------------------------------------------

    def _load(self) -> List[Page]:
        return [Page.from_dict(item) for item in storage.load_collection(self.pages_path, PAGES_KEY)]

    def _save(self, pages: List[Page]) -> None:
        storage.save_collection(self.pages_path, PAGES_KEY, [p.to_dict() for p in pages])

    @staticmethod
    def _index_of(pages: List[Page], page_id: str) -> int:
        for index, page in enumerate(pages):
            if page.id == page_id:
                return index
        raise NotFoundError("page", page_id)

    def artifact_path(self, page_id: str) -> Path:
        return storage.artifact_path(self.generated_dir, page_id)

    # -- reads ----------------------------------------------------------------

    def list(self) -> List[Page]:
        with self._lock:
            return self._load()

    def get(self, page_id: str) -> Page:
        with self._lock:
            pages = self._load()
        return pages[self._index_of(pages, page_id)]

    # -- writes ---------------------------------------------------------------

    def create(self, payload: Mapping[str, Any]) -> Page:
        require_create_fields(payload)
        theme = self.catalog.resolve(payload.get("themeId"))
        with self._lock:
            when = self.clock()
            page = new_page(payload, theme, new_page_id(when), when)
            export_page(page, theme, self.generated_dir)
            pages = self._load()
            pages.append(page)
            self._save(pages)
        logger.info("Page created", page_id=page.id, theme_id=theme.id, sections=len(page.sections))
        return page

    def update(self, page_id: str, changes: Mapping[str, Any]) -> Page:
        with self._lock:
            pages = self._load()
            index = self._index_of(pages, page_id)
            current = pages[index]
            theme = self.catalog.resolve(changes.get("themeId") or current.theme_id)
            page = apply_update(current, changes, theme, self.clock())
            export_page(page, theme, self.generated_dir)
            pages[index] = page
            self._save(pages)
        logger.info("Page updated", page_id=page_id, fields=sorted(changes))
        return page

    def duplicate(self, page_id: str) -> Page:
        with self._lock:
            pages = self._load()
            source = pages[self._index_of(pages, page_id)]
            theme = self.catalog.resolve(source.theme_id)
            when = self.clock()
            page = duplicate_page(source, new_page_id(when), theme, when)
            export_page(page, theme, self.generated_dir)
            pages.append(page)
            self._save(pages)
        logger.info("Page duplicated", page_id=page.id, source_id=page_id)
        return page

    def delete(self, page_id: str) -> None:
        with self._lock:
            pages = self._load()
            index = self._index_of(pages, page_id)
            removed = storage.remove_artifact(self.generated_dir, page_id)
            if not removed:
                logger.warning("Page artifact already missing", page_id=page_id)
            del pages[index]
            self._save(pages)
        logger.info("Page deleted", page_id=page_id)

    def rebuild(self, page_id: Optional[str] = None) -> List[Path]:
        """Regenerate artifacts from stored records without touching them."""

        with self._lock:
            pages = self._load()
            if page_id is not None:
                pages = [pages[self._index_of(pages, page_id)]]
            written = [
                export_page(page, self.catalog.resolve(page.theme_id), self.generated_dir)
                for page in pages
            ]
        logger.info("Pages rebuilt", count=len(written))
        return written
