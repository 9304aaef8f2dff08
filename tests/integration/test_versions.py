"""Integration tests for template versions and restore."""

import pytest

from sitesmith.models.page import CreatePageRequest, UpdatePageRequest
from sitesmith.models.template import UpdateTemplateRequest

OWNER = "alice"
OTHER = "bob"


class TestCreateVersion:
    """Test cases for creating versions."""

    def test_create(self, versions, templates, template):
        """Test a snapshot bumps the template's version."""
        version = versions.create(template.id, OWNER, "First cut")
        assert version.version == "1.0.1"
        assert version.changes == "First cut"
        assert version.created_by == OWNER
        assert [page.slug for page in version.snapshot.pages] == ["home"]
        assert version.snapshot.theme == template.theme
        assert templates.get(template.id).current_version == "1.0.1"

    def test_successive_versions(self, versions, template):
        """Test each snapshot takes the next patch number."""
        numbers = [versions.create(template.id, OWNER).version for _ in range(3)]
        assert numbers == ["1.0.1", "1.0.2", "1.0.3"]

    def test_not_owned(self, versions, template, system_template):
        """Test only owners can snapshot a template."""
        assert versions.create(template.id, OTHER) is None
        assert versions.create(system_template.id, OTHER) is None
        assert versions.create("missing", OWNER) is None


class TestReadVersions:
    """Test cases for listing and reading versions."""

    def test_list_newest_first(self, versions, template):
        """Test versions are listed newest first."""
        for _ in range(3):
            versions.create(template.id, OWNER)
        assert [version.version for version in versions.list(template.id, OWNER)] == ["1.0.3", "1.0.2", "1.0.1"]

    def test_list_not_visible(self, versions, template):
        """Test invisible templates list nothing."""
        versions.create(template.id, OWNER)
        assert versions.list(template.id, OTHER) == []

    def test_get(self, versions, template):
        """Test a version is readable through a visible template only."""
        created = versions.create(template.id, OWNER)
        assert versions.get(template.id, created.id, OWNER).version == "1.0.1"
        assert versions.get(template.id, created.id, OTHER) is None
        assert versions.get("other-template", created.id, OWNER) is None

    def test_read_without_caller(self, versions, template):
        """Test private versions and their notes stay hidden without a caller."""
        created = versions.create(template.id, OWNER, "secret note")
        assert versions.list(template.id, None) == []
        assert versions.list(template.id, "") == []
        assert versions.get(template.id, created.id, None) is None


class TestRestoreVersion:
    """Test cases for restoring versions."""

    @pytest.fixture
    def snapshot(self, versions, pages, template):
        """A version holding a two-page site."""
        pages.create(template.id, OWNER, CreatePageRequest(name="About", slug="about"))
        return versions.create(template.id, OWNER, "Two pages")

    def test_restore(self, versions, templates, pages, template, snapshot):
        """Test restore brings back theme, settings and pages."""
        templates.update(
            template.id,
            OWNER,
            UpdateTemplateRequest(theme={"colors": {"primary": "#000000"}}, global_settings={"language": "fr"}),
        )
        about = pages.get_pages(template.id)[1]
        pages.update(template.id, about.id, OWNER, UpdatePageRequest(name="Changed"))
        pages.create(template.id, OWNER, CreatePageRequest(name="Extra", slug="extra"))

        restored = versions.restore(template.id, snapshot.id, OWNER)
        assert restored.theme.colors.primary == template.theme.colors.primary
        assert restored.global_settings.language == "en"
        assert [(page.slug, page.name) for page in restored.pages] == [("home", "Home"), ("about", "About")]
        assert [page.sort_order for page in restored.pages] == [0, 1]

    def test_restore_new_page_ids(self, versions, template, snapshot):
        """Test restored pages get fresh ids."""
        restored = versions.restore(template.id, snapshot.id, OWNER)
        old_ids = {page.id for page in snapshot.snapshot.pages}
        assert old_ids.isdisjoint({page.id for page in restored.pages})

    def test_restore_keeps_version_number(self, versions, templates, template, snapshot):
        """Test restore records no new version."""
        versions.create(template.id, OWNER)
        restored = versions.restore(template.id, snapshot.id, OWNER)
        assert restored.current_version == "1.0.2"
        assert len(versions.list(template.id, OWNER)) == 2

    def test_restore_denied(self, versions, template, snapshot):
        """Test restore needs ownership and a matching version."""
        assert versions.restore(template.id, snapshot.id, OTHER) is None
        assert versions.restore(template.id, "missing", OWNER) is None
