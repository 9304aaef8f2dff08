"""Template management commands for the sitesmith CLI.

This module provides commands for listing, inspecting, creating, updating,
duplicating and deleting templates.
"""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from ..app import handle_exceptions
from ..exceptions import NotFoundError
from ..models.base import validate_model
from ..models.template import CreateTemplateRequest, TemplateSearchParams, UpdateTemplateRequest
from ..utils.documents import load_mapping
from ..utils.factory import get_services, render_result

app = typer.Typer()
console = Console(stderr=True)

LIST_COLUMNS = ["id", "name", "category", "status", "isSystemTemplate", "pageCount", "currentVersion", "updatedAt"]
PAGE_COLUMNS = ["id", "name", "slug", "isHomepage", "sortOrder"]


def template_not_found(template_id: str) -> NotFoundError:
    return NotFoundError(f"Template '{template_id}' not found", resource="template", resource_id=template_id)


@app.command("list")
@handle_exceptions
def list_templates(
    ctx: typer.Context,
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Match name or description"),
    category: Optional[str] = typer.Option(None, "--category", help="Filter by category"),
    tags: Optional[List[str]] = typer.Option(None, "--tag", help="Filter by tag (repeatable)"),
    status: Optional[str] = typer.Option(None, "--status", help="Filter by status (draft, published, archived)"),
    system: Optional[bool] = typer.Option(None, "--system/--no-system", help="Only system or only own templates"),
    sort_by: str = typer.Option("updated_at", "--sort-by", help="Sort by name, created_at or updated_at"),
    sort_order: str = typer.Option("desc", "--sort-order", help="asc or desc"),
    page: int = typer.Option(1, "--page", help="Page number"),
    limit: int = typer.Option(20, "--limit", help="Templates per page (max 100)"),
) -> None:
    """Search templates visible to you.

    Examples:
        # Your templates and system templates, most recently updated first
        sitesmith templates list

        # Published event templates tagged "gala"
        sitesmith templates list --category event --status published --tag gala
    """
    services = get_services(ctx)
    params = validate_model(
        TemplateSearchParams,
        {
            "search": search,
            "category": category,
            "tags": tags or [],
            "status": status,
            "is_system_template": system,
            "sort_by": sort_by,
            "sort_order": sort_order,
            "page": page,
            "limit": limit,
        },
    )
    result = services.templates.search(services.user_id, params)

    if ctx.obj.get("output_format") in ("json", "yaml"):
        render_result(ctx, result.to_document())
        return

    render_result(
        ctx,
        [item.to_document() for item in result.items],
        columns=LIST_COLUMNS,
        title=f"Templates (page {result.page} of {max(result.total_pages, 1)}, {result.total} total)",
    )


@app.command()
@handle_exceptions
def system(ctx: typer.Context) -> None:
    """List published system templates."""
    services = get_services(ctx)
    items = services.templates.list_system_templates()
    render_result(ctx, [item.to_document() for item in items], columns=LIST_COLUMNS, title="System templates")


@app.command()
@handle_exceptions
def get(
    ctx: typer.Context,
    template_id: str = typer.Argument(..., help="Template ID"),
) -> None:
    """Show a template with its pages."""
    services = get_services(ctx)
    template = services.templates.get_visible(template_id, services.user_id)
    if template is None:
        raise template_not_found(template_id)

    document = template.to_document()
    if ctx.obj.get("output_format") in ("json", "yaml"):
        render_result(ctx, document)
        return

    summary = {key: value for key, value in document.items() if key not in ("theme", "globalSettings", "pages")}
    render_result(ctx, summary, columns=list(summary.keys()), title=template.name)
    render_result(ctx, [page.to_document() for page in template.pages], columns=PAGE_COLUMNS, title="Pages")


@app.command()
@handle_exceptions
def create(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", help="Template name"),
    description: str = typer.Option("", "--description", help="Template description"),
    category: str = typer.Option("multi-page", "--category", help="Template category"),
    tags: Optional[List[str]] = typer.Option(None, "--tag", help="Tag (repeatable)"),
    status: str = typer.Option("draft", "--status", help="Initial status"),
    theme_file: Optional[Path] = typer.Option(None, "--theme-file", help="JSON/YAML theme overrides"),
    settings_file: Optional[Path] = typer.Option(None, "--settings-file", help="JSON/YAML global settings overrides"),
    clone_from: Optional[str] = typer.Option(None, "--clone-from", help="Copy theme, settings and pages from a template"),
) -> None:
    """Create a new template.

    Examples:
        # Blank template with a single home page
        sitesmith templates create --name "Annual Report"

        # Start from a system template with a custom palette
        sitesmith templates create --name "Gala 2026" --clone-from TEMPLATE_ID --theme-file theme.yaml
    """
    services = get_services(ctx)
    request = validate_model(
        CreateTemplateRequest,
        {
            "name": name,
            "description": description,
            "category": category,
            "tags": tags or [],
            "status": status,
            "theme": load_mapping(theme_file),
            "global_settings": load_mapping(settings_file),
            "clone_from_id": clone_from,
        },
    )
    template = services.templates.create(services.user_id, request)
    console.print(f"[green]Template created:[/green] {template.id}")
    render_result(ctx, template.to_document() if ctx.obj.get("output_format") in ("json", "yaml") else {
        "id": template.id,
        "name": template.name,
        "category": template.category,
        "status": template.status,
        "pages": len(template.pages),
    })


@app.command()
@handle_exceptions
def update(
    ctx: typer.Context,
    template_id: str = typer.Argument(..., help="Template ID"),
    name: Optional[str] = typer.Option(None, "--name", help="Template name"),
    description: Optional[str] = typer.Option(None, "--description", help="Template description"),
    category: Optional[str] = typer.Option(None, "--category", help="Template category"),
    tags: Optional[List[str]] = typer.Option(None, "--tag", help="Replace tags (repeatable)"),
    status: Optional[str] = typer.Option(None, "--status", help="draft, published or archived"),
    theme_file: Optional[Path] = typer.Option(None, "--theme-file", help="JSON/YAML theme patch"),
    settings_file: Optional[Path] = typer.Option(None, "--settings-file", help="JSON/YAML global settings patch"),
    metadata_file: Optional[Path] = typer.Option(None, "--metadata-file", help="JSON/YAML metadata patch"),
) -> None:
    """Update a template you own.

    Theme, settings and metadata patches are merged over the stored values.

    Examples:
        # Publish a template
        sitesmith templates update TEMPLATE_ID --status published

        # Change the primary color only
        echo '{colors: {primary: "#0f766e"}}' > patch.yaml
        sitesmith templates update TEMPLATE_ID --theme-file patch.yaml
    """
    services = get_services(ctx)
    request = validate_model(
        UpdateTemplateRequest,
        {
            "name": name,
            "description": description,
            "category": category,
            "tags": tags or None,
            "status": status,
            "theme": load_mapping(theme_file),
            "global_settings": load_mapping(settings_file),
            "metadata": load_mapping(metadata_file),
        },
    )
    template = services.templates.update(template_id, services.user_id, request)
    if template is None:
        raise template_not_found(template_id)

    console.print(f"[green]Template updated:[/green] {template.id}")
    if ctx.obj.get("output_format") in ("json", "yaml"):
        render_result(ctx, template.to_document())


@app.command()
@handle_exceptions
def delete(
    ctx: typer.Context,
    template_id: str = typer.Argument(..., help="Template ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete a template you own, with its pages and versions."""
    services = get_services(ctx)
    if not yes and not typer.confirm(f"Delete template {template_id} and all its pages and versions?"):
        console.print("[yellow]Cancelled[/yellow]")
        raise typer.Exit(1)

    if not services.templates.delete(template_id, services.user_id):
        raise template_not_found(template_id)
    console.print(f"[green]Template deleted:[/green] {template_id}")


@app.command()
@handle_exceptions
def duplicate(
    ctx: typer.Context,
    template_id: str = typer.Argument(..., help="Template ID"),
    name: Optional[str] = typer.Option(None, "--name", help="Name of the copy (default: '<name> (Copy)')"),
) -> None:
    """Copy a visible template into a new one you own."""
    services = get_services(ctx)
    template = services.templates.duplicate(template_id, services.user_id, name)
    if template is None:
        raise template_not_found(template_id)

    console.print(f"[green]Template duplicated:[/green] {template.id} ({template.name})")
    if ctx.obj.get("output_format") in ("json", "yaml"):
        render_result(ctx, template.to_document())
