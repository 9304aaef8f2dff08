"""Main Typer application for the sitesmith CLI.

This module contains the main Typer app instance and registers all command
groups. It provides the entry point for the CLI and handles global options
like profile, caller identity, debug logging and output formatting.
"""

import functools
import logging
import sys
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.traceback import install

from . import __version__
from .config import ConfigManager, Profile
from .exceptions import ConfigError, SitesmithError
from .output import OutputFormatter
from .utils.errors import format_error_for_user

# Create main Typer app
app = typer.Typer(
    name="sitesmith",
    help="Build, version and render themed multi-page websites",
    context_settings={"help_option_names": ["-h", "--help"]},
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()
output_formatter = OutputFormatter(console)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"sitesmith {__version__}")
        raise typer.Exit()


def configure_logging(debug: bool) -> None:
    """Route library logging through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=debug, show_path=debug)],
        force=True,
    )
    if debug:
        install(show_locals=True)


def resolve_profile(
    config_manager: ConfigManager,
    profile_name: Optional[str],
    user: Optional[str],
) -> Optional[Profile]:
    """Pick the profile for this invocation.

    An explicit ``--profile`` wins, then the active profile, then a profile
    built from environment variables. Environment overrides and ``--user``
    are applied on top.

    Raises:
        ConfigError: If a named profile does not exist
    """
    if profile_name:
        profile = config_manager.get_profile(profile_name)
    else:
        try:
            profile = config_manager.get_default_profile()
        except ConfigError:
            profile = None
            if config_manager.has_environment_config():
                profile = Profile(**config_manager.get_environment_config())

    if profile is not None:
        profile = config_manager.apply_environment(profile)

    if user:
        if profile is None:
            profile = Profile(name="cli", user_id=user)
        else:
            profile = profile.model_copy(update={"user_id": user})

    return profile


# Global options
@app.callback()
def main(
    ctx: typer.Context,
    profile: Optional[str] = typer.Option(
        None,
        "--profile",
        "-p",
        help="Configuration profile to use",
    ),
    user: Optional[str] = typer.Option(
        None,
        "--user",
        "-u",
        help="Act as this user id (overrides the profile)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output",
    ),
    output_format: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format (table, json, yaml)",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """sitesmith - build themed multi-page websites from the command line.

    Templates hold a theme, site-wide settings and ordered pages made of
    sections and components. sitesmith stores them, versions them and
    renders them to static HTML.

    Examples:
        # Set up a local profile
        sitesmith config init --user alice

        # Create a template and add a page
        sitesmith templates create --name "Spring Gala"
        sitesmith pages create TEMPLATE_ID --name About --slug about

        # Snapshot, then render the whole site
        sitesmith versions create TEMPLATE_ID --changes "First draft"
        sitesmith site build TEMPLATE_ID --out-dir ./public
    """
    configure_logging(debug)

    try:
        config_manager = ConfigManager()
        profile_obj = resolve_profile(config_manager, profile, user)
    except ConfigError as e:
        console.print(f"[red]Error loading configuration: {e}[/red]")
        raise typer.Exit(1)

    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["output_format"] = output_format or (profile_obj.output_format if profile_obj else None)
    ctx.obj["console"] = console
    ctx.obj["config_manager"] = config_manager
    ctx.obj["output_formatter"] = output_formatter
    ctx.obj["profile"] = profile_obj

    if debug:
        console.print("[dim]Debug mode enabled[/dim]")
        if profile_obj:
            console.print(f"[dim]Using profile: {profile_obj.name} (user {profile_obj.user_id})[/dim]")
        else:
            console.print("[dim]No profile configured[/dim]")


def handle_exceptions(func):
    """Decorator to handle common exceptions in commands."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SitesmithError as e:
            ctx = kwargs.get("ctx")
            debug = bool(ctx and ctx.obj and ctx.obj.get("debug"))
            console.print(f"[red]{format_error_for_user(e, debug)}[/red]")
            if not debug and not isinstance(e, ConfigError):
                console.print("[dim]Use --debug for more details[/dim]")
            raise typer.Exit(1)
        except KeyboardInterrupt:
            console.print("\n[yellow]Operation cancelled by user[/yellow]")
            raise typer.Exit(130)
    return wrapper


_commands_registered = False


def register_commands():
    """Register all command groups with the main app (once)."""
    global _commands_registered
    if _commands_registered:
        return

    from .cmds import (
        config_app,
        pages_app,
        site_app,
        templates_app,
        themes_app,
        versions_app,
    )

    app.add_typer(config_app, name="config", help="Manage configuration profiles")
    app.add_typer(templates_app, name="templates", help="Manage templates")
    app.add_typer(pages_app, name="pages", help="Manage template pages")
    app.add_typer(versions_app, name="versions", help="Manage template versions")
    app.add_typer(themes_app, name="themes", help="Work with template themes")
    app.add_typer(site_app, name="site", help="Preview and build sites")
    _commands_registered = True


def cli():
    """Entry point for the CLI."""
    register_commands()

    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    cli()
