import json
import os
from pathlib import Path
from typing import List


def load_collection(path: str | Path, key: str, create: bool = True) -> List[dict]:
    """Read every document of a ``{key: [...]}`` JSON file.

    A missing file is initialised as an empty collection when ``create`` is
    set; otherwise the ``FileNotFoundError`` propagates.
    """
    path = Path(path)
    if not path.exists() and create:
        save_collection(path, key, [])
    data = json.loads(path.read_text(encoding="utf-8"))
    items = data.get(key, []) if isinstance(data, dict) else []
    return [item for item in items if isinstance(item, dict)]


def save_collection(path: str | Path, key: str, items: List[dict]) -> None:
    """Rewrite the whole collection; readers never see a half-written file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(f"{path.name}.tmp")
    tmp.write_text(json.dumps({key: items}, indent=2, ensure_ascii=False), encoding="utf-8")
    os.replace(tmp, path)


def artifact_path(directory: str | Path, page_id: str) -> Path:
    return Path(directory) / f"{page_id}.html"


def write_artifact(directory: str | Path, page_id: str, html: str) -> Path:
    target = artifact_path(directory, page_id)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(html, encoding="utf-8")
    return target


def remove_artifact(directory: str | Path, page_id: str) -> bool:
    """Delete a page's HTML file; returns ``False`` when it was already gone."""
    target = artifact_path(directory, page_id)
    try:
        target.unlink()
    except FileNotFoundError:
        return False
    return True
