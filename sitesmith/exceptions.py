"""Exception classes for sitesmith.

This module defines the error taxonomy shared by the stores, the renderer
and the CLI. Missing and forbidden resources are not exceptions inside the
stores (they collapse to ``None``/``False``); the CLI raises
:class:`NotFoundError` when it needs to report one.
"""

from typing import Optional, Dict, Any


class SitesmithError(Exception):
    """Base exception class for all sitesmith errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigError(SitesmithError):
    """Exception raised for configuration-related errors."""
    pass


class NotFoundError(SitesmithError):
    """Exception raised when a resource is missing or not visible to the caller."""

    def __init__(
        self,
        message: str,
        resource: Optional[str] = None,
        resource_id: Optional[str] = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            resource: Kind of resource (template, page, version)
            resource_id: Identifier that was looked up
        """
        super().__init__(message, {"resource": resource, "id": resource_id})
        self.resource = resource
        self.resource_id = resource_id


class ValidationError(SitesmithError):
    """Exception raised for invalid input such as empty patches or duplicate slugs."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            field: Field that failed validation
            details: Optional additional error details
        """
        super().__init__(message, details)
        self.field = field


class PersistenceError(SitesmithError):
    """Exception raised when a storage operation fails and was rolled back."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            operation: Name of the operation that failed
            cause: Underlying storage exception
        """
        super().__init__(message, {"operation": operation})
        self.operation = operation
        self.cause = cause


class RenderError(SitesmithError):
    """Exception raised when a page cannot be rendered at all."""

    def __init__(self, message: str, slug: Optional[str] = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            slug: Slug of the page being rendered
        """
        super().__init__(message, {"slug": slug})
        self.slug = slug
