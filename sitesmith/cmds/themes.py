"""Theme commands for the sitesmith CLI.

Palettes and font pairings are applied through the template store, so
only the template owner can change them.
"""

from typing import List, Optional

import typer
from rich.console import Console

from ..app import handle_exceptions
from ..exceptions import ValidationError
from ..theming import FONT_PAIRINGS, PALETTE_PRESETS, get_font_pairing, get_palette
from ..utils.documents import parse_assignments
from ..utils.factory import get_services, render_result
from .templates import template_not_found

app = typer.Typer()
console = Console(stderr=True)


@app.command()
@handle_exceptions
def css(
    ctx: typer.Context,
    template_id: str = typer.Argument(..., help="Template ID"),
) -> None:
    """Print the CSS custom properties of a template's theme."""
    services = get_services(ctx)
    variables = services.themes.get_css_variables(template_id, services.user_id)
    if variables is None:
        raise template_not_found(template_id)
    typer.echo(variables, nl=False)


@app.command()
@handle_exceptions
def palette(
    ctx: typer.Context,
    template_id: str = typer.Argument(..., help="Template ID"),
    preset: Optional[str] = typer.Option(None, "--preset", help="Palette preset id (see 'themes presets')"),
    colors: Optional[List[str]] = typer.Option(None, "--color", help="Color override as key=value (repeatable)"),
) -> None:
    """Apply a palette to a template.

    Individual ``--color`` values are applied on top of the preset.

    Examples:
        # Apply a preset
        sitesmith themes palette TEMPLATE_ID --preset forest

        # Preset with a custom accent
        sitesmith themes palette TEMPLATE_ID --preset ocean --color accent=#e11d48
    """
    services = get_services(ctx)
    values = dict(get_palette(preset).colors) if preset else {}
    values.update(parse_assignments(colors, "--color"))
    if not values:
        raise ValidationError("Give --preset or at least one --color", field="palette")

    template = services.themes.apply_palette(template_id, services.user_id, values)
    if template is None:
        raise template_not_found(template_id)

    console.print(f"[green]Palette applied to {template.name}[/green]")
    if ctx.obj.get("output_format") in ("json", "yaml"):
        render_result(ctx, template.theme.to_document()["colors"])


@app.command()
@handle_exceptions
def fonts(
    ctx: typer.Context,
    template_id: str = typer.Argument(..., help="Template ID"),
    pairing: Optional[str] = typer.Option(None, "--pairing", help="Font pairing id (see 'themes presets')"),
    heading: Optional[str] = typer.Option(None, "--heading", help="Heading font stack"),
    body: Optional[str] = typer.Option(None, "--body", help="Body font stack"),
) -> None:
    """Set the heading and body fonts of a template."""
    services = get_services(ctx)
    if pairing:
        chosen = get_font_pairing(pairing)
        heading = heading or chosen.heading_font
        body = body or chosen.body_font

    template = services.themes.apply_font_pairing(template_id, services.user_id, heading, body)
    if template is None:
        raise template_not_found(template_id)

    typography = template.theme.typography
    console.print(f"[green]Fonts applied to {template.name}[/green]")
    render_result(
        ctx,
        {"headingFontFamily": typography.heading_font_family, "fontFamily": typography.font_family},
        columns=["headingFontFamily", "fontFamily"],
    )


@app.command()
@handle_exceptions
def presets(ctx: typer.Context) -> None:
    """List built-in palettes and font pairings."""
    palettes = [
        {"kind": "palette", "id": item.id, "name": item.name, "values": ", ".join(f"{k}={v}" for k, v in item.colors.items())}
        for item in PALETTE_PRESETS.values()
    ]
    pairings = [
        {"kind": "fonts", "id": item.id, "name": item.name, "values": f"{item.heading_font} / {item.body_font}"}
        for item in FONT_PAIRINGS.values()
    ]
    render_result(ctx, palettes + pairings, columns=["kind", "id", "name", "values"], title="Theme presets")
