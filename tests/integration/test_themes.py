"""Integration tests for theme operations on stored templates."""

import pytest

from sitesmith.exceptions import NotFoundError, ValidationError
from sitesmith.theming import get_font_pairing, get_palette

OWNER = "alice"
OTHER = "bob"


class TestThemeService:
    """Test cases for the ThemeService class."""

    def test_apply_palette(self, themes, template):
        """Test a partial palette keeps the other colors."""
        updated = themes.apply_palette(template.id, OWNER, {"primary": "#123456", "textMuted": "#999999"})
        assert updated.theme.colors.primary == "#123456"
        assert updated.theme.colors.text_muted == "#999999"
        assert updated.theme.colors.secondary == template.theme.colors.secondary

    def test_apply_palette_preset(self, themes, template):
        """Test a preset palette can be applied."""
        preset = get_palette("midnight")
        updated = themes.apply_palette(template.id, OWNER, preset.colors)
        assert updated.theme.colors.background == "#0f172a"
        assert updated.theme.colors.text_muted == "#94a3b8"

    def test_apply_empty_palette(self, themes, template):
        """Test an empty palette is rejected."""
        with pytest.raises(ValidationError):
            themes.apply_palette(template.id, OWNER, {})

    def test_apply_palette_not_owned(self, themes, template):
        """Test non-owners cannot change the theme."""
        assert themes.apply_palette(template.id, OTHER, {"primary": "#000000"}) is None

    def test_apply_font_pairing(self, themes, template):
        """Test heading and body fonts are set independently."""
        pairing = get_font_pairing("editorial")
        updated = themes.apply_font_pairing(template.id, OWNER, pairing.heading_font, pairing.body_font)
        assert updated.theme.typography.heading_font_family == pairing.heading_font
        assert updated.theme.typography.font_family == pairing.body_font

        updated = themes.apply_font_pairing(template.id, OWNER, body_font="Georgia, serif")
        assert updated.theme.typography.heading_font_family == pairing.heading_font
        assert updated.theme.typography.font_family == "Georgia, serif"

    def test_apply_font_pairing_empty(self, themes, template):
        """Test at least one font is required."""
        with pytest.raises(ValidationError):
            themes.apply_font_pairing(template.id, OWNER)

    def test_get_css_variables(self, themes, template, system_template):
        """Test CSS variables are rendered for visible templates."""
        themes.apply_palette(template.id, OWNER, {"primary": "#abcdef"})
        css = themes.get_css_variables(template.id, OWNER)
        assert css.startswith(":root {")
        assert "  --color-primary: #abcdef;" in css
        assert themes.get_css_variables(template.id, OTHER) is None
        assert themes.get_css_variables(system_template.id, OTHER) is not None

    def test_get_css_variables_without_caller(self, themes, template, system_template):
        """Test only system templates are readable without a caller."""
        assert themes.get_css_variables(template.id, None) is None
        assert themes.get_css_variables(system_template.id, None).startswith(":root {")

    def test_unknown_presets(self):
        """Test unknown preset ids raise NotFoundError."""
        with pytest.raises(NotFoundError):
            get_palette("neon")
        with pytest.raises(NotFoundError):
            get_font_pairing("comic")
