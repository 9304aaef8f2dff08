"""Page management commands for the sitesmith CLI."""

from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console

from ..app import handle_exceptions
from ..exceptions import NotFoundError
from ..models.base import validate_model
from ..models.page import CreatePageRequest, UpdatePageRequest
from ..utils.documents import load_list
from ..utils.factory import get_services, render_result
from .templates import PAGE_COLUMNS, template_not_found

app = typer.Typer()
console = Console(stderr=True)


def page_not_found(template_id: str, page_id: str) -> NotFoundError:
    return NotFoundError(
        f"Page '{page_id}' not found in template '{template_id}'",
        resource="page",
        resource_id=page_id,
    )


def seo_patch(title: Optional[str], description: Optional[str]) -> Optional[Dict[str, Any]]:
    patch = {}
    if title is not None:
        patch["title"] = title
    if description is not None:
        patch["description"] = description
    return patch or None


@app.command("list")
@handle_exceptions
def list_pages(
    ctx: typer.Context,
    template_id: str = typer.Argument(..., help="Template ID"),
) -> None:
    """List the pages of a template in display order."""
    services = get_services(ctx)
    if services.templates.get_visible(template_id, services.user_id) is None:
        raise template_not_found(template_id)

    pages = services.pages.get_pages(template_id)
    render_result(ctx, [page.to_document() for page in pages], columns=PAGE_COLUMNS, title="Pages")


@app.command()
@handle_exceptions
def get(
    ctx: typer.Context,
    template_id: str = typer.Argument(..., help="Template ID"),
    page_id: str = typer.Argument(..., help="Page ID"),
) -> None:
    """Show a page with its SEO settings and sections."""
    services = get_services(ctx)
    page = services.pages.get_page(template_id, page_id, services.user_id)
    if page is None:
        raise page_not_found(template_id, page_id)

    document = page.to_document()
    if ctx.obj.get("output_format") in ("json", "yaml"):
        render_result(ctx, document)
        return

    render_result(ctx, document, columns=PAGE_COLUMNS + ["updatedAt"], title=page.name)
    render_result(
        ctx,
        [
            {
                "id": section.id,
                "name": section.name,
                "hidden": section.hidden,
                "components": [component.type for component in section.components],
            }
            for section in page.sections
        ],
        columns=["id", "name", "hidden", "components"],
        title="Sections",
    )


@app.command()
@handle_exceptions
def create(
    ctx: typer.Context,
    template_id: str = typer.Argument(..., help="Template ID"),
    name: str = typer.Option(..., "--name", help="Page name"),
    slug: str = typer.Option(..., "--slug", help="URL slug, unique within the template"),
    homepage: bool = typer.Option(False, "--homepage", help="Mark as the homepage"),
    seo_title: Optional[str] = typer.Option(None, "--seo-title", help="SEO title (defaults to the page name)"),
    seo_description: Optional[str] = typer.Option(None, "--seo-description", help="SEO description"),
    sections_file: Optional[Path] = typer.Option(None, "--sections-file", help="JSON/YAML list of sections"),
    clone_from: Optional[str] = typer.Option(None, "--clone-from", help="Copy sections and SEO from a page"),
) -> None:
    """Add a page to a template you own.

    Examples:
        # Empty page
        sitesmith pages create TEMPLATE_ID --name About --slug about

        # Copy the layout of an existing page
        sitesmith pages create TEMPLATE_ID --name Team --slug team --clone-from PAGE_ID
    """
    services = get_services(ctx)
    request = validate_model(
        CreatePageRequest,
        {
            "name": name,
            "slug": slug,
            "is_homepage": homepage,
            "seo": seo_patch(seo_title, seo_description),
            "sections": load_list(sections_file),
            "clone_from_id": clone_from,
        },
    )
    page = services.pages.create(template_id, services.user_id, request)
    if page is None:
        raise template_not_found(template_id)

    console.print(f"[green]Page created:[/green] {page.id} (/{page.slug})")
    if ctx.obj.get("output_format") in ("json", "yaml"):
        render_result(ctx, page.to_document())


@app.command()
@handle_exceptions
def update(
    ctx: typer.Context,
    template_id: str = typer.Argument(..., help="Template ID"),
    page_id: str = typer.Argument(..., help="Page ID"),
    name: Optional[str] = typer.Option(None, "--name", help="Page name"),
    slug: Optional[str] = typer.Option(None, "--slug", help="URL slug"),
    seo_title: Optional[str] = typer.Option(None, "--seo-title", help="SEO title"),
    seo_description: Optional[str] = typer.Option(None, "--seo-description", help="SEO description"),
    sections_file: Optional[Path] = typer.Option(None, "--sections-file", help="JSON/YAML list replacing all sections"),
) -> None:
    """Update a page of a template you own."""
    services = get_services(ctx)
    request = validate_model(
        UpdatePageRequest,
        {
            "name": name,
            "slug": slug,
            "seo": seo_patch(seo_title, seo_description),
            "sections": load_list(sections_file),
        },
    )
    page = services.pages.update(template_id, page_id, services.user_id, request)
    if page is None:
        raise page_not_found(template_id, page_id)

    console.print(f"[green]Page updated:[/green] {page.id}")
    if ctx.obj.get("output_format") in ("json", "yaml"):
        render_result(ctx, page.to_document())


@app.command()
@handle_exceptions
def delete(
    ctx: typer.Context,
    template_id: str = typer.Argument(..., help="Template ID"),
    page_id: str = typer.Argument(..., help="Page ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete a page. The homepage cannot be deleted."""
    services = get_services(ctx)
    if not yes and not typer.confirm(f"Delete page {page_id}?"):
        console.print("[yellow]Cancelled[/yellow]")
        raise typer.Exit(1)

    if not services.pages.delete(template_id, page_id, services.user_id):
        raise NotFoundError(
            f"Page '{page_id}' could not be deleted (missing, not owned, or the homepage)",
            resource="page",
            resource_id=page_id,
        )
    console.print(f"[green]Page deleted:[/green] {page_id}")


@app.command()
@handle_exceptions
def reorder(
    ctx: typer.Context,
    template_id: str = typer.Argument(..., help="Template ID"),
    page_ids: List[str] = typer.Argument(..., help="Page IDs in the new order"),
) -> None:
    """Set the display order of pages.

    Pages are numbered in the order given. Unknown or repeated ids reject
    the whole request and leave the order unchanged.
    """
    services = get_services(ctx)
    if not services.pages.reorder(template_id, services.user_id, page_ids):
        raise template_not_found(template_id)
    console.print(f"[green]Reordered {len(page_ids)} pages[/green]")
