"""Runtime settings, read from the environment (and an optional ``.env``)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

APP_NAME = "PerfumeSite"


def app_data_dir() -> Path:
    """Return the platform-specific application data directory."""
    if os.name == "nt":
        base = Path(os.getenv("LOCALAPPDATA", Path.home()))
    else:
        base = Path.home() / ".local" / "share"
    return base / APP_NAME


@dataclass(slots=True)
class Settings:
    data_dir: Path
    themes_path: Optional[Path] = None
    log_level: str = "INFO"

    @property
    def pages_path(self) -> Path:
        return self.data_dir / "pages.json"

    @property
    def generated_dir(self) -> Path:
        return self.data_dir / "generated"


def load_settings(env_file: str | Path | None = None) -> Settings:
    load_dotenv(env_file)
    data_dir = os.getenv("PERFUMESITE_DATA_DIR")
    themes_path = os.getenv("PERFUMESITE_THEMES_PATH")
    return Settings(
        data_dir=Path(data_dir).expanduser() if data_dir else app_data_dir(),
        themes_path=Path(themes_path).expanduser() if themes_path else None,
        log_level=os.getenv("PERFUMESITE_LOG_LEVEL", "INFO").upper(),
    )
