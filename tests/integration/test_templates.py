"""Integration tests for the template store.

Runs against an in-memory SQLite database to check visibility, ownership,
search, merging updates, cloning and cascading deletes.
"""

import pytest
from sqlalchemy import delete, func, select

from sitesmith.exceptions import ValidationError
from sitesmith.models.page import CreatePageRequest
from sitesmith.models.template import CreateTemplateRequest, TemplateSearchParams, UpdateTemplateRequest
from sitesmith.storage.tables import PageRow, VersionRow

OWNER = "alice"
OTHER = "bob"


class TestCreateAndGet:
    """Test cases for creating and reading templates."""

    def test_create_defaults(self, template):
        """Test a new template gets defaults and one homepage."""
        assert template.user_id == OWNER
        assert template.status == "draft"
        assert template.category == "multi-page"
        assert template.tags == ["gala", "events"]
        assert template.current_version == "1.0.0"
        assert template.metadata == {"version": "1.0.0"}
        assert template.global_settings.footer.copyright == "© 2026 Acme Trust. All rights reserved."
        assert len(template.pages) == 1
        home = template.pages[0]
        assert home.is_homepage
        assert home.slug == "home"
        assert home.seo.title == "Spring Gala"
        assert home.seo.description == "Annual fundraiser"

    def test_create_with_overrides(self, templates):
        """Test theme and settings overrides merge over the defaults."""
        created = templates.create(
            OWNER,
            CreateTemplateRequest(
                name="Custom",
                theme={"colors": {"primary": "#111111"}},
                global_settings={"language": "da", "footer": {"showNewsletter": True}},
            ),
        )
        assert created.theme.colors.primary == "#111111"
        assert created.theme.colors.secondary == "#7c3aed"
        assert created.global_settings.language == "da"
        assert created.global_settings.footer.show_newsletter is True
        assert "Acme Trust" in created.global_settings.footer.copyright

    def test_create_invalid_theme(self, templates):
        """Test invalid theme overrides are rejected."""
        with pytest.raises(ValidationError):
            templates.create(OWNER, CreateTemplateRequest(name="Bad", theme={"typography": {"fontWeightBold": 50}}))

    def test_visibility(self, templates, template, system_template):
        """Test owners and system templates are visible, others are not."""
        assert templates.get(template.id, OWNER) is not None
        assert templates.get(template.id, OTHER) is None
        assert templates.get(template.id) is not None
        assert templates.get(system_template.id, OTHER) is not None
        assert templates.get("missing", OWNER) is None

    def test_get_visible(self, templates, template, system_template):
        """Test checked reads have no unchecked path."""
        assert templates.get_visible(template.id, OWNER) is not None
        assert templates.get_visible(template.id, OTHER) is None
        assert templates.get_visible(template.id, None) is None
        assert templates.get_visible(template.id, "") is None
        assert templates.get_visible(system_template.id, None) is not None

    def test_clone(self, templates, pages, template):
        """Test cloning copies theme, settings and pages."""
        templates.update(template.id, OWNER, UpdateTemplateRequest(theme={"colors": {"accent": "#ff0000"}}))
        pages.create(template.id, OWNER, CreatePageRequest(name="About", slug="about"))

        clone = templates.create(OWNER, CreateTemplateRequest(name="Clone", clone_from_id=template.id))
        assert clone.theme.colors.accent == "#ff0000"
        assert [page.slug for page in clone.pages] == ["home", "about"]
        assert {page.id for page in clone.pages}.isdisjoint({page.id for page in pages.get_pages(template.id)})

    def test_clone_invisible_source(self, templates, template):
        """Test an invisible clone source falls back to defaults."""
        clone = templates.create(OTHER, CreateTemplateRequest(name="Sneaky", clone_from_id=template.id))
        assert [page.slug for page in clone.pages] == ["home"]
        assert clone.pages[0].seo.title == "Sneaky"

    def test_clone_source_without_pages(self, templates, database, template):
        """Test a clone gets a default homepage when the source has no pages."""
        with database.transaction("clear pages") as session:
            session.execute(delete(PageRow).where(PageRow.template_id == template.id))

        clone = templates.create(OWNER, CreateTemplateRequest(name="Empty copy", clone_from_id=template.id))
        assert [page.slug for page in clone.pages] == ["home"]
        assert clone.pages[0].is_homepage
        assert clone.pages[0].seo.title == "Empty copy"


class TestSearch:
    """Test cases for template search."""

    @pytest.fixture
    def catalog(self, templates, system_template):
        templates.create(OWNER, CreateTemplateRequest(name="Alpha 100% Off", category="event", tags=["sale"]))
        templates.create(OWNER, CreateTemplateRequest(name="Beta", description="Blog layout", category="blog"))
        templates.create(OWNER, CreateTemplateRequest(name="Gamma", status="published", tags=["sale", "Gala"]))
        templates.create(OTHER, CreateTemplateRequest(name="Bob's site"))
        return system_template

    def test_search_visible(self, templates, catalog):
        """Test results include own and system templates only."""
        result = templates.search(OWNER)
        names = {item.name for item in result.items}
        assert names == {"Alpha 100% Off", "Beta", "Gamma", "Charity Starter"}
        assert result.total == 4

    def test_search_without_caller(self, templates, catalog):
        """Test an anonymous search only lists system templates."""
        result = templates.search(None)
        assert [item.name for item in result.items] == ["Charity Starter"]

    def test_search_text(self, templates, catalog):
        """Test search matches name and description case-insensitively."""
        result = templates.search(OWNER, TemplateSearchParams(search="blog"))
        assert [item.name for item in result.items] == ["Beta"]

    def test_search_wildcards_are_literal(self, templates, catalog):
        """Test LIKE wildcards in the search term match literally."""
        result = templates.search(OWNER, TemplateSearchParams(search="100%"))
        assert [item.name for item in result.items] == ["Alpha 100% Off"]
        assert templates.search(OWNER, TemplateSearchParams(search="_")).total == 0

    def test_filters(self, templates, catalog):
        """Test category, status, tag and system filters."""
        assert templates.search(OWNER, TemplateSearchParams(category="event")).total == 1
        assert templates.search(OWNER, TemplateSearchParams(status="published")).total == 2
        assert templates.search(OWNER, TemplateSearchParams(tags=["SALE"])).total == 2
        assert templates.search(OWNER, TemplateSearchParams(is_system_template=True)).total == 1
        assert templates.search(OWNER, TemplateSearchParams(is_system_template=False)).total == 3

    def test_sort_and_paging(self, templates, catalog):
        """Test sorting by name and paging."""
        params = TemplateSearchParams(sort_by="name", sort_order="asc", limit=3)
        first = templates.search(OWNER, params)
        assert [item.name for item in first.items] == ["Alpha 100% Off", "Beta", "Charity Starter"]
        assert first.total_pages == 2
        second = templates.search(OWNER, params.model_copy(update={"page": 2}))
        assert [item.name for item in second.items] == ["Gamma"]

    def test_page_count(self, templates, pages, template):
        """Test list items report their page count."""
        pages.create(template.id, OWNER, CreatePageRequest(name="About", slug="about"))
        item = templates.search(OWNER).items[0]
        assert item.page_count == 2

    def test_list_system_templates(self, templates, catalog):
        """Test only published system templates are listed."""
        templates.create_system_template(CreateTemplateRequest(name="Draft System"))
        assert [item.name for item in templates.list_system_templates()] == ["Charity Starter"]


class TestUpdate:
    """Test cases for template updates."""

    def test_partial_theme_merge(self, templates, template):
        """Test theme patches keep unrelated values."""
        updated = templates.update(
            template.id,
            OWNER,
            UpdateTemplateRequest(theme={"colors": {"primary": "#000000"}, "spacing": {"xl": "3rem"}}),
        )
        assert updated.theme.colors.primary == "#000000"
        assert updated.theme.colors.accent == template.theme.colors.accent
        assert updated.theme.spacing.xl == "3rem"
        assert updated.updated_at >= template.updated_at

    def test_scalar_fields(self, templates, template):
        """Test name, status, tags and metadata updates."""
        updated = templates.update(
            template.id,
            OWNER,
            UpdateTemplateRequest(name="Renamed", status="published", tags=["New"], metadata={"audience": "donors"}),
        )
        assert updated.name == "Renamed"
        assert updated.status == "published"
        assert updated.tags == ["new"]
        assert updated.metadata == {"version": "1.0.0", "audience": "donors"}

    def test_not_owned(self, templates, template, system_template):
        """Test non-owners cannot update, not even system templates."""
        request = UpdateTemplateRequest(name="Hijacked")
        assert templates.update(template.id, OTHER, request) is None
        assert templates.update(system_template.id, OTHER, request) is None
        assert templates.get(template.id).name == "Spring Gala"

    def test_empty_patch(self, templates, template):
        """Test an empty patch is rejected."""
        with pytest.raises(ValidationError):
            templates.update(template.id, OWNER, UpdateTemplateRequest())

    def test_invalid_patch_leaves_template(self, templates, template):
        """Test an invalid patch changes nothing."""
        with pytest.raises(ValidationError):
            templates.update(
                template.id,
                OWNER,
                UpdateTemplateRequest(name="Changed", theme={"typography": {"fontWeightNormal": 0}}),
            )
        assert templates.get(template.id).name == "Spring Gala"


class TestDeleteAndDuplicate:
    """Test cases for deleting and duplicating templates."""

    def test_delete_cascades(self, templates, versions, database, template):
        """Test deleting removes pages and versions."""
        versions.create(template.id, OWNER)
        assert templates.delete(template.id, OWNER) is True
        assert templates.get(template.id) is None
        with database.session() as session:
            assert session.scalar(select(func.count()).select_from(PageRow)) == 0
            assert session.scalar(select(func.count()).select_from(VersionRow)) == 0

    def test_delete_denied(self, templates, template, system_template):
        """Test non-owners and system templates cannot be deleted."""
        assert templates.delete(template.id, OTHER) is False
        assert templates.delete(system_template.id, OTHER) is False
        assert templates.delete("missing", OWNER) is False
        assert templates.get(template.id) is not None

    def test_duplicate(self, templates, template):
        """Test duplicates are owned by the caller with a copy suffix."""
        copy = templates.duplicate(template.id, OWNER)
        assert copy.id != template.id
        assert copy.name == "Spring Gala (Copy)"
        assert copy.tags == template.tags
        assert copy.status == "draft"
        assert [page.slug for page in copy.pages] == ["home"]

    def test_duplicate_system_template(self, templates, system_template):
        """Test any caller may duplicate a system template."""
        copy = templates.duplicate(system_template.id, OTHER, "Mine")
        assert copy.user_id == OTHER
        assert copy.name == "Mine"
        assert copy.is_system_template is False

    def test_duplicate_invisible(self, templates, template):
        """Test invisible templates cannot be duplicated."""
        assert templates.duplicate(template.id, OTHER) is None
