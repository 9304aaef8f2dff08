"""Static site generation.

Turns a :class:`PublishedContent` bundle into one standalone HTML document
(with inline CSS) per page.
"""

import json
import logging
from typing import List, Optional

from ..config import RenderSettings
from ..exceptions import RenderError
from ..models.page import Page
from ..models.published import GeneratedPage, PublishedContent, PublishedFooter, PublishedNavItem, PublishedNavigation
from .components import render_section, social_icon
from .css import generate_theme_css
from .escape import escape_html, style_value
from .images import ImageOptimizer

logger = logging.getLogger(__name__)

NEW_TAB = ' target="_blank" rel="noopener noreferrer"'


def _script_string(value: str) -> str:
    """JavaScript string literal safe to embed in a script element."""
    return json.dumps(value).replace("</", "<\\/")


class SiteGenerator:
    """Renders published content to static pages."""

    def __init__(self, settings: Optional[RenderSettings] = None) -> None:
        """Initialize the generator.

        Args:
            settings: Image CDN and analytics endpoint options
        """
        self.settings = settings or RenderSettings()
        self.images = ImageOptimizer(self.settings)

    def generate_site(self, content: PublishedContent) -> List[GeneratedPage]:
        """Render every page of a site.

        A page that cannot be rendered is logged and left out; the other
        pages are still produced.

        Args:
            content: Published content bundle

        Returns:
            Generated pages in content order
        """
        generated = []
        for page in content.pages:
            try:
                generated.append(self.generate_page(page, content))
            except RenderError as e:
                logger.error("Skipping page %s: %s", e.slug, e.message)
        return generated

    def generate_page(self, page: Page, content: PublishedContent) -> GeneratedPage:
        """Render a single page.

        Raises:
            RenderError: If the document cannot be assembled
        """
        try:
            css = generate_theme_css(content.theme, content.custom_css)
            html = self.generate_html(page, content, css)
        except RenderError:
            raise
        except Exception as e:
            logger.exception("Failed to render page %s", page.slug)
            raise RenderError(f"Failed to render page '{page.slug}': {e}", slug=page.slug) from e
        logger.debug("Rendered page %s (%d bytes)", page.slug, len(html))
        return GeneratedPage(slug=page.slug, html=html, css=css)

    def generate_html(self, page: Page, content: PublishedContent, css: str) -> str:
        """Assemble the full HTML document of a page."""
        seo = page.seo
        defaults = content.seo_defaults
        title = seo.title or page.name or defaults.title
        description = seo.description or defaults.description
        keywords = seo.keywords or defaults.keywords
        og_image = seo.og_image or defaults.og_image
        favicon = defaults.favicon or "/favicon.ico"

        head = [
            '<meta charset="UTF-8">',
            '<meta name="viewport" content="width=device-width, initial-scale=1.0">',
            f"<title>{escape_html(title)}</title>",
            f'<meta name="description" content="{escape_html(description)}">',
        ]
        if keywords:
            head.append(f'<meta name="keywords" content="{escape_html(", ".join(keywords))}">')
        if seo.no_index:
            head.append('<meta name="robots" content="noindex">')
        if seo.canonical_url:
            head.append(f'<link rel="canonical" href="{escape_html(seo.canonical_url)}">')
        head.append(f'<link rel="icon" href="{escape_html(favicon)}">')
        head.append(f'<meta property="og:title" content="{escape_html(seo.og_title or title)}">')
        head.append(f'<meta property="og:description" content="{escape_html(seo.og_description or description)}">')
        if og_image:
            head.append(f'<meta property="og:image" content="{escape_html(og_image)}">')
        head.append('<meta name="twitter:card" content="summary_large_image">')
        head.append(f'<meta name="twitter:title" content="{escape_html(title)}">')
        head.append(f'<meta name="twitter:description" content="{escape_html(description)}">')
        if defaults.google_analytics_id:
            head.append(self.generate_google_analytics(defaults.google_analytics_id))
        if defaults.custom_head_code:
            # owner-provided markup, inserted as is
            head.append(defaults.custom_head_code)
        head.append(f"<style>\n{css}\n</style>")

        sections = "\n".join(render_section(section, content.theme, self.images) for section in page.sections)

        return "\n".join(
            [
                "<!DOCTYPE html>",
                f'<html lang="{escape_html(content.language or "en")}">',
                "<head>",
                "\n".join(f"  {line}" for line in head),
                "</head>",
                "<body>",
                self.generate_navigation(content.navigation),
                f"<main>\n{sections}\n</main>",
                self.generate_footer(content.footer),
                self.generate_tracking_script(content.template_id),
                "</body>",
                "</html>",
            ]
        )

    def generate_google_analytics(self, analytics_id: str) -> str:
        return (
            f'<script async src="https://www.googletagmanager.com/gtag/js?id={escape_html(analytics_id)}"></script>\n'
            "  <script>\n"
            "    window.dataLayer = window.dataLayer || [];\n"
            "    function gtag(){dataLayer.push(arguments);}\n"
            "    gtag('js', new Date());\n"
            f"    gtag('config', {_script_string(analytics_id)});\n"
            "  </script>"
        )

    def generate_tracking_script(self, site_id: str) -> str:
        """Inline pageview beacon posting to the configured tracking endpoint."""
        endpoint = self.settings.tracking_endpoint.format(site_id=site_id)
        return f"""<script>
  (function() {{
    var visitorId = localStorage.getItem('sitesmith_visitor_id') || (function() {{
      var id = 'v_' + Math.random().toString(36).substr(2, 9) + Date.now().toString(36);
      localStorage.setItem('sitesmith_visitor_id', id);
      return id;
    }})();
    var sessionId = sessionStorage.getItem('sitesmith_session_id') || (function() {{
      var id = 's_' + Math.random().toString(36).substr(2, 9) + Date.now().toString(36);
      sessionStorage.setItem('sitesmith_session_id', id);
      return id;
    }})();
    fetch({_script_string(endpoint)}, {{
      method: 'POST',
      headers: {{ 'Content-Type': 'application/json' }},
      body: JSON.stringify({{
        eventType: 'pageview',
        pagePath: window.location.pathname,
        visitorId: visitorId,
        sessionId: sessionId
      }})
    }}).catch(function() {{}});
  }})();
</script>"""

    def generate_navigation(self, nav: PublishedNavigation) -> str:
        """Site header; empty when there are no navigation items."""
        if not nav.items:
            return ""

        classes = ["site-nav"]
        if nav.sticky:
            classes.append("nav--sticky")
        if nav.transparent:
            classes.append("nav--transparent")

        parts = [f'<nav class="{" ".join(classes)}">', '<div class="nav-container">']
        if nav.logo:
            parts.append(
                f'<a href="/" class="nav-logo"><img src="{escape_html(nav.logo)}" '
                f'alt="{escape_html(nav.logo_alt or "Logo")}"></a>'
            )
        parts.append('<button class="nav-toggle" aria-label="Toggle navigation"><span></span><span></span><span></span></button>')
        parts.append('<ul class="nav-menu">')
        parts.extend(self.generate_nav_item(item) for item in nav.items)
        parts.append("</ul>")
        parts.append("</div>")
        parts.append("</nav>")
        return "\n".join(parts)

    def generate_nav_item(self, item: PublishedNavItem) -> str:
        target = NEW_TAB if item.open_in_new_tab else ""
        link = f'<a href="{escape_html(item.url)}"{target}>{escape_html(item.label)}</a>'
        if not item.children:
            return f'<li class="nav-item">{link}</li>'

        children = "\n".join(
            f'<li><a href="{escape_html(child.url)}"{NEW_TAB if child.open_in_new_tab else ""}>'
            f"{escape_html(child.label)}</a></li>"
            for child in item.children
        )
        return f'<li class="nav-item nav-item--dropdown">{link}\n<ul class="nav-dropdown">\n{children}\n</ul>\n</li>'

    def generate_footer(self, footer: PublishedFooter) -> str:
        """Site footer with columns, social links, newsletter and copyright."""
        style = ""
        if footer.background_color:
            style = (
                f' style="background-color: {style_value(footer.background_color)}; '
                f'color: {style_value(footer.text_color or "inherit")}"'
            )

        parts = [f'<footer class="site-footer"{style}>', '<div class="footer-container">']

        if footer.columns:
            parts.append('<div class="footer-columns">')
            for column in footer.columns:
                links = "\n".join(
                    f'<li><a href="{escape_html(link.url)}">{escape_html(link.label)}</a></li>' for link in column.links
                )
                parts.append(f'<div class="footer-column">\n<h4>{escape_html(column.title)}</h4>\n<ul>\n{links}\n</ul>\n</div>')
            parts.append("</div>")

        if footer.social_links:
            parts.append('<div class="footer-social">')
            for link in footer.social_links:
                parts.append(
                    f'<a href="{escape_html(link.url)}"{NEW_TAB} aria-label="{escape_html(link.platform)}">'
                    f"{social_icon(link.platform)}</a>"
                )
            parts.append("</div>")

        if footer.show_newsletter:
            parts.append('<div class="footer-newsletter">')
            parts.append(f"<h4>{escape_html(footer.newsletter_title or 'Subscribe to our newsletter')}</h4>")
            if footer.newsletter_description:
                parts.append(f"<p>{escape_html(footer.newsletter_description)}</p>")
            parts.append(
                '<form class="newsletter-form">'
                '<input type="email" placeholder="Enter your email" required>'
                '<button type="submit">Subscribe</button>'
                "</form>"
            )
            parts.append("</div>")

        parts.append(f'<div class="footer-copyright">\n<p>{escape_html(footer.copyright)}</p>\n</div>')
        parts.append("</div>")
        parts.append("</footer>")
        return "\n".join(parts)
