"""Preview and static build commands for the sitesmith CLI."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..app import handle_exceptions
from ..exceptions import NotFoundError, PersistenceError
from ..utils.factory import get_services, render_result
from .templates import template_not_found

app = typer.Typer()
console = Console(stderr=True)


def write_text(path: Path, content: str) -> None:
    """Write a build artifact.

    Raises:
        PersistenceError: If the file cannot be written
    """
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise PersistenceError(f"Cannot write {path}: {e.strerror}", operation="write file", cause=e) from e


@app.command()
@handle_exceptions
def preview(
    ctx: typer.Context,
    template_id: str = typer.Argument(..., help="Template ID"),
    page: str = typer.Option("home", "--page", help="Slug of the page to render"),
    out: Optional[Path] = typer.Option(None, "--out", help="Write the HTML to this file instead of stdout"),
) -> None:
    """Render one page of a template to HTML.

    When no page has the requested slug the homepage is rendered, and
    failing that the first page.

    Examples:
        # Print the homepage
        sitesmith site preview TEMPLATE_ID

        # Save the about page
        sitesmith site preview TEMPLATE_ID --page about --out about.html
    """
    services = get_services(ctx)
    generated = services.previews.generate_template_preview(template_id, services.user_id, page)
    if generated is None:
        raise NotFoundError(
            f"Template '{template_id}' not found or has no page to preview",
            resource="template",
            resource_id=template_id,
        )

    if out is None:
        typer.echo(generated.html)
        return
    write_text(out, generated.html)
    console.print(f"[green]Wrote {generated.slug} to {out}[/green]")


@app.command()
@handle_exceptions
def build(
    ctx: typer.Context,
    template_id: str = typer.Argument(..., help="Template ID"),
    out_dir: Path = typer.Option(Path("site"), "--out-dir", help="Directory for the generated files"),
) -> None:
    """Render every page of a template to ``<slug>.html`` and ``<slug>.css``.

    Pages that fail to render are reported in the log and skipped.
    """
    services = get_services(ctx)
    pages = services.previews.generate_site(template_id, services.user_id)
    if pages is None:
        raise template_not_found(template_id)

    try:
        out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise PersistenceError(f"Cannot create {out_dir}: {e.strerror}", operation="create directory", cause=e) from e

    written = []
    for generated in pages:
        html_path = out_dir / f"{generated.slug}.html"
        css_path = out_dir / f"{generated.slug}.css"
        write_text(html_path, generated.html)
        write_text(css_path, generated.css)
        written.append({"slug": generated.slug, "html": str(html_path), "css": str(css_path)})

    console.print(f"[green]Built {len(written)} pages into {out_dir}[/green]")
    render_result(ctx, written, columns=["slug", "html", "css"], title="Generated files")
