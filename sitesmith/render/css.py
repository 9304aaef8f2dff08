"""Site stylesheet generation."""

from string import Template
from typing import List, Optional, Tuple

from ..models.theme import Theme
from .escape import css_value

THEME_CSS = Template("""
/* Reset and base styles */
*, *::before, *::after {
  box-sizing: border-box;
}

html {
  font-size: 16px;
  scroll-behavior: smooth;
}

body {
  margin: 0;
  padding: 0;
  font-family: $font_family;
  font-size: $base_font_size;
  line-height: $line_height;
  color: $text;
  background-color: $background;
}

h1, h2, h3, h4, h5, h6 {
  font-family: $heading_font_family;
  line-height: $heading_line_height;
  font-weight: $font_weight_bold;
  margin-top: 0;
}

a {
  color: $primary;
  text-decoration: none;
}

a:hover {
  text-decoration: underline;
}

img {
  max-width: 100%;
  height: auto;
}

/* Navigation */
.site-nav {
  background: $surface;
  border-bottom: 1px solid $border;
  padding: 1rem 0;
}

.site-nav.nav--sticky {
  position: sticky;
  top: 0;
  z-index: 1000;
}

.site-nav.nav--transparent {
  background: transparent;
  border-bottom: none;
}

.nav-container {
  max-width: 1200px;
  margin: 0 auto;
  padding: 0 1rem;
  display: flex;
  align-items: center;
  justify-content: space-between;
}

.nav-logo img {
  height: 40px;
  width: auto;
}

.nav-menu {
  list-style: none;
  margin: 0;
  padding: 0;
  display: flex;
  gap: 2rem;
}

.nav-item a {
  color: $text;
  font-weight: $font_weight_medium;
}

.nav-item a:hover {
  color: $primary;
  text-decoration: none;
}

.nav-item--dropdown {
  position: relative;
}

.nav-dropdown {
  display: none;
  position: absolute;
  list-style: none;
  margin: 0;
  padding: 0.5rem 0;
  background: $surface;
  border: 1px solid $border;
}

.nav-item--dropdown:hover .nav-dropdown {
  display: block;
}

.nav-toggle {
  display: none;
  background: none;
  border: none;
  cursor: pointer;
  padding: 0.5rem;
}

.nav-toggle span {
  display: block;
  width: 24px;
  height: 2px;
  background: $text;
  margin: 5px 0;
  transition: 0.3s;
}

/* Footer */
.site-footer {
  background: $surface;
  border-top: 1px solid $border;
  padding: 3rem 0 1.5rem;
  margin-top: auto;
}

.footer-container {
  max-width: 1200px;
  margin: 0 auto;
  padding: 0 1rem;
}

.footer-columns {
  display: grid;
  grid-template-columns: repeat(auto-fit, minmax(200px, 1fr));
  gap: 2rem;
  margin-bottom: 2rem;
}

.footer-column h4 {
  margin-bottom: 1rem;
  font-size: 1rem;
}

.footer-column ul {
  list-style: none;
  margin: 0;
  padding: 0;
}

.footer-column li {
  margin-bottom: 0.5rem;
}

.footer-column a {
  color: $text_muted;
}

.footer-column a:hover {
  color: $primary;
}

.footer-social {
  display: flex;
  gap: 1rem;
  justify-content: center;
  margin-bottom: 2rem;
}

.footer-social a {
  color: $text_muted;
}

.footer-social a:hover {
  color: $primary;
}

.footer-newsletter {
  text-align: center;
  max-width: 400px;
  margin: 0 auto 2rem;
}

.footer-copyright {
  text-align: center;
  color: $text_muted;
  font-size: 0.875rem;
  padding-top: 1.5rem;
  border-top: 1px solid $border;
}

/* Sections */
.site-section {
  padding: 4rem 0;
}

.section-container {
  padding: 0 1rem;
}

/* Responsive */
@media (max-width: 768px) {
  .nav-menu {
    display: none;
    position: absolute;
    top: 100%;
    left: 0;
    right: 0;
    background: $surface;
    flex-direction: column;
    padding: 1rem;
    gap: 1rem;
    border-bottom: 1px solid $border;
  }

  .nav-menu.open {
    display: flex;
  }

  .nav-toggle {
    display: block;
  }

  .stats-grid {
    grid-template-columns: repeat(2, 1fr) !important;
  }

  .gallery-grid {
    grid-template-columns: repeat(2, 1fr) !important;
  }

  .footer-columns {
    grid-template-columns: 1fr;
    text-align: center;
  }
}

@media (max-width: 480px) {
  .stats-grid {
    grid-template-columns: 1fr !important;
  }

  .gallery-grid {
    grid-template-columns: 1fr !important;
  }
}
""")


def neutralize_custom_css(custom_css: str) -> str:
    """Keep owner CSS from closing the surrounding style element."""
    return custom_css.replace("</", "<\\/")


# (variable, theme group, attribute) in output order
CSS_VARIABLES: List[Tuple[str, str, str]] = [
    ("--color-primary", "colors", "primary"),
    ("--color-secondary", "colors", "secondary"),
    ("--color-accent", "colors", "accent"),
    ("--color-background", "colors", "background"),
    ("--color-surface", "colors", "surface"),
    ("--color-text", "colors", "text"),
    ("--color-text-muted", "colors", "text_muted"),
    ("--color-border", "colors", "border"),
    ("--color-error", "colors", "error"),
    ("--color-success", "colors", "success"),
    ("--color-warning", "colors", "warning"),
    ("--font-body", "typography", "font_family"),
    ("--font-heading", "typography", "heading_font_family"),
    ("--font-base-size", "typography", "base_font_size"),
    ("--line-height", "typography", "line_height"),
    ("--line-height-heading", "typography", "heading_line_height"),
    ("--font-weight-normal", "typography", "font_weight_normal"),
    ("--font-weight-medium", "typography", "font_weight_medium"),
    ("--font-weight-bold", "typography", "font_weight_bold"),
    ("--spacing-xs", "spacing", "xs"),
    ("--spacing-sm", "spacing", "sm"),
    ("--spacing-md", "spacing", "md"),
    ("--spacing-lg", "spacing", "lg"),
    ("--spacing-xl", "spacing", "xl"),
    ("--spacing-xxl", "spacing", "xxl"),
    ("--radius-sm", "border_radius", "sm"),
    ("--radius-md", "border_radius", "md"),
    ("--radius-lg", "border_radius", "lg"),
    ("--radius-full", "border_radius", "full"),
    ("--shadow-sm", "shadows", "sm"),
    ("--shadow-md", "shadows", "md"),
    ("--shadow-lg", "shadows", "lg"),
    ("--shadow-xl", "shadows", "xl"),
]


def generate_css_variables(theme: Theme) -> str:
    """Render a theme as a ``:root`` block of CSS custom properties.

    Args:
        theme: Theme to render

    Returns:
        CSS text, one declaration per line, ending with a newline
    """
    lines = [":root {"]
    for name, group, attribute in CSS_VARIABLES:
        value = getattr(getattr(theme, group), attribute)
        lines.append(f"  {name}: {css_value(value)};")
    lines.append("}")
    return "\n".join(lines) + "\n"


def generate_theme_css(theme: Theme, custom_css: Optional[str] = None) -> str:
    """Build the stylesheet for a site.

    Args:
        theme: Theme supplying colors and typography
        custom_css: Owner CSS appended after the theme rules

    Returns:
        CSS text
    """
    colors = theme.colors
    typography = theme.typography
    css = generate_css_variables(theme) + THEME_CSS.substitute(
        font_family=css_value(typography.font_family),
        heading_font_family=css_value(typography.heading_font_family),
        base_font_size=css_value(typography.base_font_size),
        line_height=css_value(typography.line_height),
        heading_line_height=css_value(typography.heading_line_height),
        font_weight_medium=typography.font_weight_medium,
        font_weight_bold=typography.font_weight_bold,
        primary=css_value(colors.primary),
        text=css_value(colors.text),
        text_muted=css_value(colors.text_muted),
        background=css_value(colors.background),
        surface=css_value(colors.surface),
        border=css_value(colors.border),
    )
    if custom_css:
        css += "\n/* Custom CSS */\n" + neutralize_custom_css(custom_css) + "\n"
    return css
