"""Command-line entry point."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

import typer

from . import assistant
from .config import Settings, load_settings
from .core.errors import InvalidThemeError, NotFoundError, PerfumeSiteError, ValidationError
from .core.pages import PageStore
from .core.themes import ThemeCatalog, load_catalog
from .log import configure_logging

app = typer.Typer(help="Build single-page perfume brand sites from themes and sections.", no_args_is_help=True)

EXIT_CODES = {ValidationError: 2, InvalidThemeError: 3, NotFoundError: 4}


class _State:
    settings: Settings
    catalog: ThemeCatalog
    store: PageStore


def _echo_json(data: Any) -> None:
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _fail(exc: PerfumeSiteError) -> typer.Exit:
    typer.echo(f"Error: {exc}", err=True)
    return typer.Exit(code=EXIT_CODES.get(type(exc), 1))


def _read_sections(path: Optional[Path]) -> Optional[list]:
    if path is None:
        return None
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("sections")
    if not isinstance(data, list):
        raise typer.BadParameter("expected a JSON list of sections", param_hint="--sections")
    return data


def _payload(**fields: Any) -> Dict[str, Any]:
    return {key: value for key, value in fields.items() if value is not None}


@app.callback()
def _setup(
    ctx: typer.Context,
    data_dir: Optional[Path] = typer.Option(None, "--data-dir", help="Where pages.json and generated/ live."),
    themes: Optional[Path] = typer.Option(None, "--themes", help="Alternative themes.json catalog."),
) -> None:
    settings = load_settings()
    if data_dir is not None:
        settings.data_dir = data_dir
    if themes is not None:
        settings.themes_path = themes
    configure_logging(settings.log_level)

    state = _State()
    state.settings = settings
    state.catalog = load_catalog(settings.themes_path)
    state.store = PageStore(state.catalog, settings.pages_path, settings.generated_dir)
    ctx.obj = state


@app.command("themes")
def list_themes(ctx: typer.Context, as_json: bool = typer.Option(False, "--json")) -> None:
    """List the theme catalog."""
    catalog: ThemeCatalog = ctx.obj.catalog
    if as_json:
        _echo_json([t.to_dict() for t in catalog])
        return
    for theme in catalog:
        typer.echo(f"{theme.id:<16} {theme.name:<16} {', '.join(theme.mood[:2])}")


@app.command("pages")
def list_pages(ctx: typer.Context) -> None:
    """List stored pages."""
    for page in ctx.obj.store.list():
        typer.echo(f"{page.id}  {page.brand_name}  [{page.theme_name}]  {len(page.sections)} sections")


@app.command("show")
def show_page(ctx: typer.Context, page_id: str) -> None:
    """Print a stored page record as JSON."""
    try:
        page = ctx.obj.store.get(page_id)
    except PerfumeSiteError as exc:
        raise _fail(exc)
    _echo_json(page.to_dict())


@app.command("create")
def create_page(
    ctx: typer.Context,
    brand: str = typer.Option(..., "--brand", help="Brand name."),
    theme: str = typer.Option(..., "--theme", help="Theme id."),
    tagline: Optional[str] = typer.Option(None, "--tagline"),
    cta_text: Optional[str] = typer.Option(None, "--cta"),
    perfume_type: Optional[str] = typer.Option(None, "--type"),
    about_text: Optional[str] = typer.Option(None, "--about"),
    offer_title: Optional[str] = typer.Option(None, "--offer-title"),
    offer_description: Optional[str] = typer.Option(None, "--offer-description"),
    logo: Optional[str] = typer.Option(None, "--logo", help="Path of an uploaded logo image."),
    sections: Optional[Path] = typer.Option(None, "--sections", help="JSON file with the section list."),
) -> None:
    """Create a page and generate its HTML."""
    payload = _payload(
        brandName=brand,
        themeId=theme,
        tagline=tagline,
        ctaText=cta_text,
        perfumeType=perfume_type,
        aboutText=about_text,
        offerTitle=offer_title,
        offerDescription=offer_description,
        logoPath=logo,
        sections=_read_sections(sections),
    )
    try:
        page = ctx.obj.store.create(payload)
    except PerfumeSiteError as exc:
        raise _fail(exc)
    typer.echo(page.id)


@app.command("update")
def update_page(
    ctx: typer.Context,
    page_id: str,
    brand: Optional[str] = typer.Option(None, "--brand"),
    theme: Optional[str] = typer.Option(None, "--theme"),
    tagline: Optional[str] = typer.Option(None, "--tagline"),
    cta_text: Optional[str] = typer.Option(None, "--cta"),
    perfume_type: Optional[str] = typer.Option(None, "--type"),
    about_text: Optional[str] = typer.Option(None, "--about"),
    offer_title: Optional[str] = typer.Option(None, "--offer-title"),
    offer_description: Optional[str] = typer.Option(None, "--offer-description"),
    logo: Optional[str] = typer.Option(None, "--logo"),
    clear_logo: bool = typer.Option(False, "--clear-logo", help="Remove the page's logo."),
    sections: Optional[Path] = typer.Option(None, "--sections", help="JSON file replacing the section list."),
) -> None:
    """Update a page and regenerate its HTML."""
    changes = _payload(
        brandName=brand,
        themeId=theme,
        tagline=tagline,
        ctaText=cta_text,
        perfumeType=perfume_type,
        aboutText=about_text,
        offerTitle=offer_title,
        offerDescription=offer_description,
        logoPath=logo,
        sections=_read_sections(sections),
    )
    if clear_logo:
        changes["logoPath"] = None
    try:
        page = ctx.obj.store.update(page_id, changes)
    except PerfumeSiteError as exc:
        raise _fail(exc)
    typer.echo(page.updated_at)


@app.command("duplicate")
def duplicate_page(ctx: typer.Context, page_id: str) -> None:
    """Copy a page under a new id."""
    try:
        page = ctx.obj.store.duplicate(page_id)
    except PerfumeSiteError as exc:
        raise _fail(exc)
    typer.echo(page.id)


@app.command("delete")
def delete_page(ctx: typer.Context, page_id: str) -> None:
    """Delete a page and its generated HTML."""
    try:
        ctx.obj.store.delete(page_id)
    except PerfumeSiteError as exc:
        raise _fail(exc)
    typer.echo(f"Deleted {page_id}")


@app.command("rebuild")
def rebuild_pages(ctx: typer.Context, page_id: Optional[str] = typer.Argument(None)) -> None:
    """Regenerate HTML for one page, or all pages."""
    try:
        written = ctx.obj.store.rebuild(page_id)
    except PerfumeSiteError as exc:
        raise _fail(exc)
    for path in written:
        typer.echo(str(path))


@app.command("suggest-theme")
def suggest_theme(
    ctx: typer.Context,
    perfume_type: str,
    mood: str = typer.Option("", "--mood"),
) -> None:
    """Suggest a theme from a perfume type and mood."""
    suggestion = assistant.suggest_theme(ctx.obj.catalog, perfume_type, mood)
    _echo_json({"theme": suggestion.theme.id, "name": suggestion.theme.name, "score": suggestion.score})


@app.command("generate-copy")
def generate_copy(
    brand: str,
    perfume_type: str,
    mood: str = typer.Option("", "--mood"),
) -> None:
    """Generate a tagline and about text."""
    _echo_json(assistant.generate_copy(brand, perfume_type, mood).to_dict())


def main() -> None:
    app()


if __name__ == "__main__":
    main()
