"""Configuration management commands for the sitesmith CLI.

This module provides commands for creating, listing, inspecting, switching
and deleting configuration profiles.
"""

from typing import Optional

import typer
from rich.console import Console
from rich.prompt import Prompt

from ..app import handle_exceptions
from ..config import DEFAULT_ORGANIZATION, DEFAULT_TRACKING_ENDPOINT
from ..exceptions import ConfigError

app = typer.Typer()
console = Console(stderr=True)

PROFILE_COLUMNS = ["name", "user_id", "database_url", "output_format", "organization_name", "active"]


@app.command()
@handle_exceptions
def init(
    ctx: typer.Context,
    profile_name: str = typer.Option("default", "--name", help="Profile name"),
    user_id: Optional[str] = typer.Option(None, "--user", help="User id that owns created templates"),
    database_url: Optional[str] = typer.Option(None, "--database-url", help="SQLAlchemy URL (default: local SQLite)"),
    output_format: str = typer.Option("table", "--output-format", help="Default output format"),
    organization: str = typer.Option(DEFAULT_ORGANIZATION, "--organization", help="Organization for footer defaults"),
    cdn_base_url: Optional[str] = typer.Option(None, "--cdn-base-url", help="Image CDN base URL"),
    no_image_optimization: bool = typer.Option(False, "--no-image-optimization", help="Use image URLs as given"),
    tracking_endpoint: str = typer.Option(DEFAULT_TRACKING_ENDPOINT, "--tracking-endpoint", help="Analytics beacon URL"),
    interactive: bool = typer.Option(True, "--interactive/--no-interactive", help="Prompt for missing values"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing profile"),
) -> None:
    """Create a configuration profile.

    The first profile created becomes the active one.

    Examples:
        # Local SQLite workspace
        sitesmith config init --user alice

        # Shared Postgres database
        sitesmith config init --name team --user alice --database-url postgresql://db/sites
    """
    config_manager = ctx.obj["config_manager"]

    if not user_id and interactive:
        user_id = Prompt.ask("User id")
    if not user_id:
        raise ConfigError("A user id is required (--user)")

    profile = config_manager.create_profile(
        name=profile_name,
        user_id=user_id,
        database_url=database_url,
        output_format=output_format,
        organization_name=organization,
        cdn_base_url=cdn_base_url,
        image_optimization=not no_image_optimization,
        tracking_endpoint=tracking_endpoint,
        overwrite=force,
    )

    if config_manager.get_active_profile() == profile.name:
        console.print(f"[green]Profile '{profile.name}' saved and set as active![/green]")
    else:
        console.print(f"[green]Profile '{profile.name}' saved![/green]")
    console.print(f"[dim]Database: {config_manager.resolve_database_url(profile)}[/dim]")


@app.command("list")
@handle_exceptions
def list_profiles(ctx: typer.Context) -> None:
    """List configuration profiles."""
    config_manager = ctx.obj["config_manager"]
    profiles = config_manager.list_profiles()
    if not profiles:
        console.print("[yellow]No profiles configured. Run 'sitesmith config init' to create one.[/yellow]")
        return
    ctx.obj["output_formatter"].render(
        profiles,
        format=ctx.obj.get("output_format"),
        columns=PROFILE_COLUMNS,
        title="Configuration Profiles",
    )


@app.command()
@handle_exceptions
def show(
    ctx: typer.Context,
    profile_name: Optional[str] = typer.Argument(None, help="Profile name (default: active profile)"),
) -> None:
    """Show a profile's settings."""
    config_manager = ctx.obj["config_manager"]
    if profile_name:
        profile = config_manager.get_profile(profile_name)
    else:
        profile = config_manager.get_default_profile()

    data = profile.model_dump()
    data["resolved_database_url"] = config_manager.resolve_database_url(profile)
    ctx.obj["output_formatter"].render(
        data,
        format=ctx.obj.get("output_format"),
        columns=list(data.keys()),
        title=f"Profile {profile.name}",
    )


@app.command()
@handle_exceptions
def use(
    ctx: typer.Context,
    profile_name: str = typer.Argument(..., help="Profile to activate"),
) -> None:
    """Make a profile the active one."""
    ctx.obj["config_manager"].set_active_profile(profile_name)
    console.print(f"[green]Active profile: {profile_name}[/green]")


@app.command()
@handle_exceptions
def delete(
    ctx: typer.Context,
    profile_name: str = typer.Argument(..., help="Profile to delete"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete a profile. Its database is left in place."""
    if not yes and not typer.confirm(f"Delete profile '{profile_name}'?"):
        console.print("[yellow]Cancelled[/yellow]")
        raise typer.Exit(1)
    ctx.obj["config_manager"].delete_profile(profile_name)
    console.print(f"[green]Profile '{profile_name}' deleted[/green]")
