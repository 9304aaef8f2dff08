"""Version snapshot commands for the sitesmith CLI."""

from typing import Optional

import typer
from rich.console import Console

from ..app import handle_exceptions
from ..exceptions import NotFoundError
from ..utils.factory import get_services, render_result
from .templates import template_not_found

app = typer.Typer()
console = Console(stderr=True)

VERSION_COLUMNS = ["id", "version", "changes", "pages", "createdBy", "createdAt"]


def version_row(version) -> dict:
    return {
        "id": version.id,
        "version": version.version,
        "changes": version.changes,
        "pages": len(version.snapshot.pages),
        "createdBy": version.created_by,
        "createdAt": version.created_at,
    }


@app.command("list")
@handle_exceptions
def list_versions(
    ctx: typer.Context,
    template_id: str = typer.Argument(..., help="Template ID"),
) -> None:
    """List the snapshots of a template, newest first."""
    services = get_services(ctx)
    versions = services.versions.list(template_id, services.user_id)

    if ctx.obj.get("output_format") in ("json", "yaml"):
        render_result(ctx, [version.to_document() for version in versions])
        return
    render_result(ctx, [version_row(version) for version in versions], columns=VERSION_COLUMNS, title="Versions")


@app.command()
@handle_exceptions
def show(
    ctx: typer.Context,
    template_id: str = typer.Argument(..., help="Template ID"),
    version_id: str = typer.Argument(..., help="Version ID"),
) -> None:
    """Show one snapshot."""
    services = get_services(ctx)
    version = services.versions.get(template_id, version_id, services.user_id)
    if version is None:
        raise NotFoundError(f"Version '{version_id}' not found", resource="version", resource_id=version_id)

    if ctx.obj.get("output_format") in ("json", "yaml"):
        render_result(ctx, version.to_document())
        return
    render_result(ctx, version_row(version), columns=VERSION_COLUMNS, title=f"Version {version.version}")
    render_result(
        ctx,
        [{"name": page.name, "slug": page.slug, "isHomepage": page.is_homepage} for page in version.snapshot.pages],
        columns=["name", "slug", "isHomepage"],
        title="Snapshot pages",
    )


@app.command()
@handle_exceptions
def create(
    ctx: typer.Context,
    template_id: str = typer.Argument(..., help="Template ID"),
    changes: Optional[str] = typer.Option(None, "--changes", "-m", help="Description of the changes"),
) -> None:
    """Snapshot a template you own and bump its version."""
    services = get_services(ctx)
    version = services.versions.create(template_id, services.user_id, changes)
    if version is None:
        raise template_not_found(template_id)

    console.print(f"[green]Version created:[/green] {version.version} ({version.id})")
    if ctx.obj.get("output_format") in ("json", "yaml"):
        render_result(ctx, version.to_document())


@app.command()
@handle_exceptions
def restore(
    ctx: typer.Context,
    template_id: str = typer.Argument(..., help="Template ID"),
    version_id: str = typer.Argument(..., help="Version ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Replace a template's theme, settings and pages with a snapshot.

    Page ids are regenerated. The template's current version number is not
    changed and no new snapshot is recorded.
    """
    services = get_services(ctx)
    if not yes and not typer.confirm(f"Overwrite template {template_id} with version {version_id}?"):
        console.print("[yellow]Cancelled[/yellow]")
        raise typer.Exit(1)

    template = services.versions.restore(template_id, version_id, services.user_id)
    if template is None:
        raise NotFoundError(
            f"Version '{version_id}' of template '{template_id}' not found",
            resource="version",
            resource_id=version_id,
        )
    console.print(f"[green]Restored template {template.id}[/green] ({len(template.pages)} pages)")
    if ctx.obj.get("output_format") in ("json", "yaml"):
        render_result(ctx, template.to_document())
