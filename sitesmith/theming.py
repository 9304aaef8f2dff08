"""Theme utilities.

This module turns a theme into CSS custom properties and applies palette and
font-pairing presets to stored templates.
"""

import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel

from .exceptions import NotFoundError, ValidationError
from .models.template import Template, UpdateTemplateRequest
from .render.css import CSS_VARIABLES, generate_css_variables
from .stores.templates import TemplateStore

logger = logging.getLogger(__name__)

__all__ = [
    "CSS_VARIABLES",
    "FONT_PAIRINGS",
    "FontPairing",
    "PALETTE_PRESETS",
    "PalettePreset",
    "ThemeService",
    "generate_css_variables",
    "get_font_pairing",
    "get_palette",
]


class PalettePreset(BaseModel):
    """Named set of theme colors."""

    id: str
    name: str
    colors: Dict[str, str]


class FontPairing(BaseModel):
    """Named heading and body font stacks."""

    id: str
    name: str
    heading_font: str
    body_font: str


PALETTE_PRESETS: Dict[str, PalettePreset] = {
    preset.id: preset
    for preset in [
        PalettePreset(
            id="ocean",
            name="Ocean",
            colors={"primary": "#0369a1", "secondary": "#0e7490", "accent": "#f97316", "surface": "#f0f9ff"},
        ),
        PalettePreset(
            id="forest",
            name="Forest",
            colors={"primary": "#15803d", "secondary": "#3f6212", "accent": "#ca8a04", "surface": "#f7fee7"},
        ),
        PalettePreset(
            id="sunset",
            name="Sunset",
            colors={"primary": "#c2410c", "secondary": "#be123c", "accent": "#facc15", "surface": "#fff7ed"},
        ),
        PalettePreset(
            id="slate",
            name="Slate",
            colors={
                "primary": "#334155",
                "secondary": "#475569",
                "accent": "#0ea5e9",
                "background": "#ffffff",
                "surface": "#f1f5f9",
                "text": "#0f172a",
            },
        ),
        PalettePreset(
            id="midnight",
            name="Midnight",
            colors={
                "primary": "#818cf8",
                "secondary": "#c084fc",
                "accent": "#fbbf24",
                "background": "#0f172a",
                "surface": "#1e293b",
                "text": "#f1f5f9",
                "textMuted": "#94a3b8",
                "border": "#334155",
            },
        ),
    ]
}

FONT_PAIRINGS: Dict[str, FontPairing] = {
    pairing.id: pairing
    for pairing in [
        FontPairing(
            id="modern",
            name="Modern",
            heading_font='"Inter", system-ui, sans-serif',
            body_font='"Inter", system-ui, sans-serif',
        ),
        FontPairing(
            id="editorial",
            name="Editorial",
            heading_font='"Playfair Display", Georgia, serif',
            body_font='"Source Sans 3", system-ui, sans-serif',
        ),
        FontPairing(
            id="friendly",
            name="Friendly",
            heading_font='"Poppins", system-ui, sans-serif',
            body_font='"Open Sans", system-ui, sans-serif',
        ),
        FontPairing(
            id="classic",
            name="Classic",
            heading_font='"Merriweather", Georgia, serif',
            body_font='"Lato", system-ui, sans-serif',
        ),
    ]
}


def get_palette(preset_id: str) -> PalettePreset:
    """Look up a palette preset.

    Raises:
        NotFoundError: If no preset has this id
    """
    try:
        return PALETTE_PRESETS[preset_id]
    except KeyError:
        raise NotFoundError(f"Palette '{preset_id}' not found", resource="palette", resource_id=preset_id)


def get_font_pairing(pairing_id: str) -> FontPairing:
    """Look up a font pairing preset.

    Raises:
        NotFoundError: If no pairing has this id
    """
    try:
        return FONT_PAIRINGS[pairing_id]
    except KeyError:
        raise NotFoundError(f"Font pairing '{pairing_id}' not found", resource="font pairing", resource_id=pairing_id)


class ThemeService:
    """Theme operations on stored templates.

    Writes go through :meth:`TemplateStore.update`, so ownership rules and
    merge semantics are the store's.
    """

    def __init__(self, template_store: TemplateStore) -> None:
        self.template_store = template_store

    def apply_palette(self, template_id: str, owner_id: str, palette: Dict[str, Any]) -> Optional[Template]:
        """Merge a partial color set into a template's theme.

        Args:
            template_id: Template ID
            owner_id: Caller identity
            palette: Color keys to overwrite

        Returns:
            The updated template, or None when missing or not owned

        Raises:
            ValidationError: If the palette is empty or holds invalid values
        """
        if not palette:
            raise ValidationError("Palette has no colors", field="palette")
        request = UpdateTemplateRequest(theme={"colors": dict(palette)})
        template = self.template_store.update(template_id, owner_id, request)
        if template is not None:
            logger.info("Applied palette to template %s", template_id)
        return template

    def apply_font_pairing(
        self,
        template_id: str,
        owner_id: str,
        heading_font: Optional[str] = None,
        body_font: Optional[str] = None,
    ) -> Optional[Template]:
        """Set the heading and/or body font stacks of a template.

        Returns:
            The updated template, or None when missing or not owned
        """
        typography: Dict[str, str] = {}
        if heading_font:
            typography["headingFontFamily"] = heading_font
        if body_font:
            typography["fontFamily"] = body_font
        if not typography:
            raise ValidationError("Font pairing needs a heading or body font", field="typography")

        request = UpdateTemplateRequest(theme={"typography": typography})
        template = self.template_store.update(template_id, owner_id, request)
        if template is not None:
            logger.info("Applied font pairing to template %s", template_id)
        return template

    def get_css_variables(self, template_id: str, caller_id: Optional[str]) -> Optional[str]:
        """CSS custom properties of a visible template, or None."""
        template = self.template_store.get_visible(template_id, caller_id)
        if template is None:
            return None
        return generate_css_variables(template.theme)
