"""Shared fixtures for sitesmith tests."""

import pytest

from sitesmith.config import ContentDefaults
from sitesmith.models.template import CreateTemplateRequest
from sitesmith.publishing import PreviewService
from sitesmith.storage.database import Database
from sitesmith.stores import PageStore, TemplateStore, VersionStore
from sitesmith.theming import ThemeService

OWNER = "alice"
OTHER = "bob"


@pytest.fixture
def database():
    """In-memory database with the schema created."""
    db = Database("sqlite://")
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def defaults():
    """Content defaults with a fixed copyright year."""
    return ContentDefaults.for_organization("Acme Trust", year=2026)


@pytest.fixture
def templates(database, defaults):
    return TemplateStore(database, defaults)


@pytest.fixture
def pages(database):
    return PageStore(database)


@pytest.fixture
def versions(database, defaults):
    return VersionStore(database, defaults)


@pytest.fixture
def themes(templates):
    return ThemeService(templates)


@pytest.fixture
def previews(templates):
    return PreviewService(templates)


@pytest.fixture
def template(templates):
    """A draft template owned by OWNER with its default homepage."""
    return templates.create(
        OWNER,
        CreateTemplateRequest(name="Spring Gala", description="Annual fundraiser", tags=["Gala", "events"]),
    )


@pytest.fixture
def system_template(templates):
    """A published system template."""
    return templates.create_system_template(
        CreateTemplateRequest(name="Charity Starter", category="donation", status="published")
    )
