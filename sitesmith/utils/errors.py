"""Formatting of sitesmith errors for CLI display."""

from ..exceptions import (
    ConfigError,
    NotFoundError,
    PersistenceError,
    RenderError,
    SitesmithError,
    ValidationError,
)


def format_error_for_user(error: Exception, debug: bool = False) -> str:
    """Format an error message for user display.

    Args:
        error: The exception to format
        debug: Whether to include debug information

    Returns:
        Formatted error message
    """
    if isinstance(error, NotFoundError):
        return f"Not found: {error.message}"

    if isinstance(error, ValidationError):
        message = f"Validation error: {error.message}"
        if error.field:
            message += f"\nField: {error.field}"
        if debug and error.details.get("errors"):
            for item in error.details["errors"][:5]:
                location = ".".join(str(part) for part in item.get("loc", ()))
                message += f"\n  - {location}: {item.get('msg')}"
        return message

    if isinstance(error, PersistenceError):
        message = f"Storage error: {error.message}"
        message += "\nNo changes were saved."
        if debug and error.cause is not None:
            message += f"\nCause: {error.cause.__class__.__name__}: {error.cause}"
        return message

    if isinstance(error, RenderError):
        message = f"Render error: {error.message}"
        if error.slug:
            message += f"\nPage: {error.slug}"
        return message

    if isinstance(error, ConfigError):
        return f"Configuration error: {error.message}"

    if isinstance(error, SitesmithError):
        message = error.message
        if debug and error.details:
            message += f"\nDetails: {error.details}"
        return message

    return f"Unexpected error: {error}"
