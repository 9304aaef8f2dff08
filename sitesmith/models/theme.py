"""Theme model for sitesmith templates."""

from typing import Any, Dict, Optional

from pydantic import Field, field_validator

from .base import SitesmithModel, merge_model

DEFAULT_FONT_STACK = '"Inter", system-ui, -apple-system, sans-serif'


class ColorPalette(SitesmithModel):
    """Theme colors."""

    primary: str = "#2563eb"
    secondary: str = "#7c3aed"
    accent: str = "#f59e0b"
    background: str = "#ffffff"
    surface: str = "#f8fafc"
    text: str = "#1e293b"
    text_muted: str = "#64748b"
    border: str = "#e2e8f0"
    error: str = "#ef4444"
    success: str = "#22c55e"
    warning: str = "#f59e0b"


class Typography(SitesmithModel):
    """Font stacks, sizes and weights."""

    font_family: str = DEFAULT_FONT_STACK
    heading_font_family: str = DEFAULT_FONT_STACK
    base_font_size: str = "16px"
    line_height: str = "1.5"
    heading_line_height: str = "1.2"
    font_weight_normal: int = 400
    font_weight_medium: int = 500
    font_weight_bold: int = 700

    @field_validator("font_weight_normal", "font_weight_medium", "font_weight_bold")
    @classmethod
    def validate_weight(cls, v: int) -> int:
        """Validate font weight range."""
        if v < 100 or v > 900:
            raise ValueError("Font weight must be between 100 and 900")
        return v


class Spacing(SitesmithModel):
    """Spacing scale."""

    xs: str = "0.25rem"
    sm: str = "0.5rem"
    md: str = "1rem"
    lg: str = "1.5rem"
    xl: str = "2rem"
    xxl: str = "3rem"


class BorderRadius(SitesmithModel):
    """Border radius scale."""

    sm: str = "0.25rem"
    md: str = "0.5rem"
    lg: str = "1rem"
    full: str = "9999px"


class Shadows(SitesmithModel):
    """Box shadow scale."""

    sm: str = "0 1px 2px 0 rgb(0 0 0 / 0.05)"
    md: str = "0 4px 6px -1px rgb(0 0 0 / 0.1)"
    lg: str = "0 10px 15px -3px rgb(0 0 0 / 0.1)"
    xl: str = "0 25px 50px -12px rgb(0 0 0 / 0.25)"


class Theme(SitesmithModel):
    """Complete design-token bundle of a template.

    Every group is always fully populated; stored or patched documents that
    omit keys get the defaults above.
    """

    colors: ColorPalette = Field(default_factory=ColorPalette)
    typography: Typography = Field(default_factory=Typography)
    spacing: Spacing = Field(default_factory=Spacing)
    border_radius: BorderRadius = Field(default_factory=BorderRadius)
    shadows: Shadows = Field(default_factory=Shadows)

    def merged(self, patch: Optional[Dict[str, Any]]) -> "Theme":
        """Merge a partial theme over this one, group by group.

        Keys present in the patch overwrite, absent keys keep their value and
        groups absent from the patch are left untouched.
        """
        return merge_model(self, patch)
