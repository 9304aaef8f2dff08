"""HTML and CSS rendering of published sites."""

from .components import render_component, render_section
from .css import generate_css_variables, generate_theme_css
from .escape import css_value, escape_html
from .images import ImageOptimizer
from .site import SiteGenerator

__all__ = [
    "SiteGenerator",
    "ImageOptimizer",
    "render_component",
    "render_section",
    "generate_theme_css",
    "generate_css_variables",
    "escape_html",
    "css_value",
]
