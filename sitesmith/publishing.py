"""Assembling published content and rendering template previews."""

import logging
from typing import List, Optional

from .exceptions import RenderError
from .models.base import utcnow
from .models.page import Page
from .models.published import (
    GeneratedPage,
    PublishedContent,
    PublishedFooter,
    PublishedFooterColumn,
    PublishedFooterLink,
    PublishedNavigation,
    PublishedNavItem,
    SeoDefaults,
)
from .models.settings import NavigationItem
from .models.template import Template
from .render.site import SiteGenerator
from .stores.templates import TemplateStore

logger = logging.getLogger(__name__)

PREVIEW_VERSION = "1.0.0-preview"


def _nav_item(item: NavigationItem, fallback_id: str) -> PublishedNavItem:
    return PublishedNavItem(
        id=item.id or fallback_id,
        label=item.label,
        url=item.href,
        open_in_new_tab=item.is_external,
        children=[_nav_item(child, f"{fallback_id}-{index}") for index, child in enumerate(item.children)],
    )


def build_published_content(
    template: Template,
    pages: Optional[List[Page]] = None,
    version: str = PREVIEW_VERSION,
) -> PublishedContent:
    """Project a template and its pages into the renderer's input.

    Args:
        template: Template supplying theme and settings
        pages: Pages to include; defaults to the template's own pages
        version: Version label of the published content

    Returns:
        Content bundle for :class:`SiteGenerator`
    """
    settings = template.global_settings
    header = settings.header
    footer = settings.footer

    navigation = PublishedNavigation(
        items=[_nav_item(item, f"nav-{index}") for index, item in enumerate(header.navigation)],
        logo=header.logo,
        logo_alt=header.logo_alt,
        sticky=header.sticky,
        transparent=header.transparent,
    )
    published_footer = PublishedFooter(
        columns=[
            PublishedFooterColumn(
                id=f"col-{column_index}",
                title=column.title,
                links=[
                    PublishedFooterLink(id=f"link-{column_index}-{link_index}", label=link.label, url=link.href)
                    for link_index, link in enumerate(column.links)
                ],
            )
            for column_index, column in enumerate(footer.columns)
        ],
        social_links=footer.social_links,
        copyright=footer.copyright,
        show_newsletter=footer.show_newsletter,
        newsletter_title=footer.newsletter_title,
        newsletter_description=footer.newsletter_description,
        background_color=footer.background_color,
        text_color=footer.text_color,
    )
    seo_defaults = SeoDefaults(
        title=template.name,
        description=template.description,
        keywords=template.tags,
        favicon=settings.favicon or "/favicon.ico",
        google_analytics_id=settings.analytics_id,
        custom_head_code=settings.custom_head_code,
    )

    return PublishedContent(
        template_id=template.id,
        template_name=template.name,
        theme=template.theme,
        pages=template.pages if pages is None else pages,
        navigation=navigation,
        footer=published_footer,
        seo_defaults=seo_defaults,
        language=settings.language or "en",
        custom_css=settings.custom_css,
        published_at=utcnow(),
        version=version,
    )


def select_page(pages: List[Page], page_slug: Optional[str]) -> Optional[Page]:
    """Page with the given slug, else the homepage, else the first page."""
    for page in pages:
        if page.slug == page_slug:
            return page
    for page in pages:
        if page.is_homepage:
            return page
    return pages[0] if pages else None


class PreviewService:
    """Renders stored templates for preview and static builds."""

    def __init__(self, template_store: TemplateStore, generator: Optional[SiteGenerator] = None) -> None:
        self.template_store = template_store
        self.generator = generator or SiteGenerator()

    def generate_template_preview(
        self,
        template_id: str,
        owner_id: Optional[str],
        page_slug: Optional[str] = "home",
    ) -> Optional[GeneratedPage]:
        """Render one page of a visible template.

        Args:
            template_id: Template to preview
            owner_id: Caller identity; without one only system templates are visible
            page_slug: Preferred page; falls back to the homepage, then the first page

        Returns:
            The generated page, or None when the template is not visible, has
            no pages or fails to render
        """
        template = self.template_store.get_visible(template_id, owner_id)
        if template is None:
            return None

        page = select_page(template.pages, page_slug)
        if page is None:
            logger.debug("Template %s has no pages to preview", template_id)
            return None

        content = build_published_content(template, [page])
        try:
            return self.generator.generate_page(page, content)
        except RenderError as e:
            logger.error("Preview of template %s failed: %s", template_id, e.message)
            return None

    def generate_site(self, template_id: str, caller_id: Optional[str]) -> Optional[List[GeneratedPage]]:
        """Render every page of a visible template, or None when not visible."""
        template = self.template_store.get_visible(template_id, caller_id)
        if template is None:
            return None
        content = build_published_content(template)
        pages = self.generator.generate_site(content)
        logger.info("Generated %d of %d pages for template %s", len(pages), len(template.pages), template_id)
        return pages
