"""HTML rendering of page components.

One function per component class, looked up through ``RENDERERS``. Every
user-supplied value goes through :func:`escape_html` (text and attributes)
or :func:`style_value` (inline CSS).
"""

import logging
import math
import re
from typing import Callable, Dict, Optional, Type

from ..models.component import (
    BaseComponent,
    ButtonComponent,
    ContactFormComponent,
    DividerComponent,
    DonationFormComponent,
    GalleryComponent,
    HeadingComponent,
    ImageComponent,
    NewsletterSignupComponent,
    SocialLinksComponent,
    SpacerComponent,
    StatsComponent,
    TestimonialComponent,
    TextComponent,
    UnknownComponent,
    VideoComponent,
)
from ..models.page import Section
from ..models.theme import Theme
from .escape import escape_html, style_value
from .images import ImageOptimizer

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_WIDTH = 1200
DEFAULT_SECTION_WIDTH = "1200px"

_PIXEL_WIDTH_RE = re.compile(r"^\s*(\d+)\s*(px)?\s*$")
_YOUTUBE_RE = re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/)([^&\s]+)")
_VIMEO_RE = re.compile(r"vimeo\.com/(\d+)")

BUTTON_VARIANTS = {
    "primary": "background: {primary}; color: white; border: none",
    "secondary": "background: {secondary}; color: white; border: none",
    "outline": "background: transparent; color: {primary}; border: 2px solid {primary}",
}
BUTTON_SIZES = {
    "sm": "padding: 0.5rem 1rem; font-size: 0.875rem",
    "md": "padding: 0.75rem 1.5rem; font-size: 1rem",
    "lg": "padding: 1rem 2rem; font-size: 1.125rem",
}
JUSTIFY = {"left": "flex-start", "center": "center", "right": "flex-end"}

SOCIAL_ICONS = {
    "facebook": (
        '<svg width="24" height="24" viewBox="0 0 24 24" fill="currentColor"><path d="M24 12.073c0-6.627-5.373-12-12-12'
        "s-12 5.373-12 12c0 5.99 4.388 10.954 10.125 11.854v-8.385H7.078v-3.47h3.047V9.43c0-3.007 1.792-4.669 4.533-4.669 "
        "1.312 0 2.686.235 2.686.235v2.953H15.83c-1.491 0-1.956.925-1.956 1.874v2.25h3.328l-.532 3.47h-2.796v8.385C19.612 "
        '23.027 24 18.062 24 12.073z"/></svg>'
    ),
    "twitter": (
        '<svg width="24" height="24" viewBox="0 0 24 24" fill="currentColor"><path d="M18.244 2.25h3.308l-7.227 8.26 '
        "8.502 11.24H16.17l-5.214-6.817L4.99 21.75H1.68l7.73-8.835L1.254 2.25H8.08l4.713 6.231zm-1.161 17.52h1.833L7.084 "
        '4.126H5.117z"/></svg>'
    ),
    "instagram": (
        '<svg width="24" height="24" viewBox="0 0 24 24" fill="currentColor"><path d="M12 2.163c3.204 0 3.584.012 4.85.07 '
        "3.252.148 4.771 1.691 4.919 4.919.058 1.265.069 1.645.069 4.849 0 3.205-.012 3.584-.069 4.849-.149 3.225-1.664 "
        "4.771-4.919 4.919-1.266.058-1.644.07-4.85.07-3.204 0-3.584-.012-4.849-.07-3.26-.149-4.771-1.699-4.919-4.92-.058"
        "-1.265-.07-1.644-.07-4.849 0-3.204.013-3.583.07-4.849.149-3.227 1.664-4.771 4.919-4.919 1.266-.057 1.645-.069 "
        "4.849-.069zm0 5.838c-3.403 0-6.162 2.759-6.162 6.162s2.759 6.163 6.162 6.163 6.162-2.759 6.162-6.163c0-3.403"
        "-2.759-6.162-6.162-6.162zm0 10.162c-2.209 0-4-1.79-4-4 0-2.209 1.791-4 4-4s4 1.791 4 4c0 2.21-1.791 4-4 4z"
        'm6.406-11.845c-.796 0-1.441.645-1.441 1.44s.645 1.44 1.441 1.44c.795 0 1.439-.645 1.439-1.44s-.644-1.44-1.439-1.44z"/></svg>'
    ),
    "linkedin": (
        '<svg width="24" height="24" viewBox="0 0 24 24" fill="currentColor"><path d="M20.447 20.452h-3.554v-5.569c0'
        "-1.328-.027-3.037-1.852-3.037-1.853 0-2.136 1.445-2.136 2.939v5.667H9.351V9h3.414v1.561h.046c.477-.9 1.637-1.85 "
        "3.37-1.85 3.601 0 4.267 2.37 4.267 5.455v6.286zM5.337 7.433c-1.144 0-2.063-.926-2.063-2.065 0-1.138.92-2.063 "
        "2.063-2.063 1.14 0 2.064.925 2.064 2.063 0 1.139-.925 2.065-2.064 2.065zm1.782 13.019H3.555V9h3.564v11.452z"
        "M22.225 0H1.771C.792 0 0 .774 0 1.729v20.542C0 23.227.792 24 1.771 24h20.451C23.2 24 24 23.227 24 22.271V1.729"
        'C24 .774 23.2 0 22.222 0h.003z"/></svg>'
    ),
    "youtube": (
        '<svg width="24" height="24" viewBox="0 0 24 24" fill="currentColor"><path d="M23.498 6.186a3.016 3.016 0 0 0'
        "-2.122-2.136C19.505 3.545 12 3.545 12 3.545s-7.505 0-9.377.505A3.017 3.017 0 0 0 .502 6.186C0 8.07 0 12 0 12s0 "
        "3.93.502 5.814a3.016 3.016 0 0 0 2.122 2.136c1.871.505 9.376.505 9.376.505s7.505 0 9.377-.505a3.015 3.015 0 0 0 "
        '2.122-2.136C24 15.93 24 12 24 12s0-3.93-.502-5.814zM9.545 15.568V8.432L15.818 12l-6.273 3.568z"/></svg>'
    ),
    "email": (
        '<svg width="24" height="24" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2"><path '
        'd="M3 8l7.89 5.26a2 2 0 002.22 0L21 8M5 19h14a2 2 0 002-2V7a2 2 0 00-2-2H5a2 2 0 00-2 2v10a2 2 0 002 2z"/></svg>'
    ),
}


def social_icon(platform: str) -> str:
    """Inline SVG icon for a social platform; unknown platforms get the email icon."""
    return SOCIAL_ICONS.get((platform or "").lower(), SOCIAL_ICONS["email"])


def pixel_width(width: Optional[str]) -> Optional[int]:
    """Numeric pixel width of a declared CSS width ("640" or "640px"), else None."""
    match = _PIXEL_WIDTH_RE.match(width or "")
    return int(match.group(1)) if match else None


def video_embed_url(src: str, provider: str) -> str:
    """Embed URL for YouTube and Vimeo links; other URLs are returned as is."""
    if provider == "youtube":
        match = _YOUTUBE_RE.search(src)
        if match:
            return f"https://www.youtube.com/embed/{match.group(1)}"
    elif provider == "vimeo":
        match = _VIMEO_RE.search(src)
        if match:
            return f"https://player.vimeo.com/video/{match.group(1)}"
    return src


def format_amount(amount: float) -> str:
    """Plain decimal text for an amount, without exponent or rounding to six digits."""
    if float(amount).is_integer():
        return str(int(amount))
    return f"{amount:f}".rstrip("0").rstrip(".")



def render_heading(component: HeadingComponent, theme: Theme, images: ImageOptimizer) -> str:
    tag = f"h{component.level}"
    color = component.color or theme.colors.text
    style = (
        f"text-align: {style_value(component.align)}; color: {style_value(color)}; "
        f"font-family: {style_value(theme.typography.heading_font_family)}"
    )
    return f'<{tag} style="{style}">{escape_html(component.content)}</{tag}>'


def render_text(component: TextComponent, theme: Theme, images: ImageOptimizer) -> str:
    color = component.color or theme.colors.text
    style = (
        f"text-align: {style_value(component.align)}; color: {style_value(color)}; "
        f"font-family: {style_value(theme.typography.font_family)}; "
        f"line-height: {style_value(theme.typography.line_height)}"
    )
    return f'<p style="{style}">{escape_html(component.content)}</p>'


def render_button(component: ButtonComponent, theme: Theme, images: ImageOptimizer) -> str:
    variant = BUTTON_VARIANTS.get(component.variant, BUTTON_VARIANTS["primary"]).format(
        primary=style_value(theme.colors.primary),
        secondary=style_value(theme.colors.secondary),
    )
    size = BUTTON_SIZES.get(component.size, BUTTON_SIZES["md"])
    style = (
        f"{variant}; {size}; border-radius: {style_value(theme.border_radius.md)}; cursor: pointer; "
        "display: inline-flex; align-items: center; justify-content: center; text-decoration: none"
    )
    if component.full_width:
        style += "; width: 100%"
    return f'<a href="{escape_html(component.url or "#")}" class="btn" style="{style}">{escape_html(component.text)}</a>'


def render_image(component: ImageComponent, theme: Theme, images: ImageOptimizer) -> str:
    if not component.src:
        return (
            '<div class="image-placeholder" style="background: #f3f4f6; padding: 2rem; '
            'text-align: center; color: #9ca3af;">Image placeholder</div>'
        )

    width = pixel_width(component.width) or DEFAULT_IMAGE_WIDTH
    picture = images.picture(
        component.src,
        component.alt,
        width=width,
        quality=80,
        lazy=not component.priority,
        class_name="component-image",
    )
    parts = []
    if component.priority:
        parts.append(images.preload_link(component.src, width=width))
    parts.append('<figure style="margin: 0;">')
    parts.append(
        f'<div style="width: {style_value(component.width)}; height: {style_value(component.height)}; '
        f'overflow: hidden; border-radius: 0.5rem;">{picture}</div>'
    )
    if component.caption:
        parts.append(
            '<figcaption style="text-align: center; font-size: 0.875rem; color: #6b7280; margin-top: 0.5rem">'
            f"{escape_html(component.caption)}</figcaption>"
        )
    parts.append("</figure>")
    return "\n".join(parts)


def render_divider(component: DividerComponent, theme: Theme, images: ImageOptimizer) -> str:
    color = component.color or theme.colors.border
    return (
        f'<hr style="border: none; border-top: {style_value(component.thickness)} solid {style_value(color)}; '
        f'width: {style_value(component.width)}; margin: 1rem auto;">'
    )


def render_spacer(component: SpacerComponent, theme: Theme, images: ImageOptimizer) -> str:
    return f'<div style="height: {style_value(component.height)}"></div>'


def render_stats(component: StatsComponent, theme: Theme, images: ImageOptimizer) -> str:
    if not component.items:
        return ""
    items = "\n".join(
        '<div class="stat-item">'
        f'<div style="font-size: 2rem; font-weight: bold; color: {style_value(theme.colors.primary)}">'
        f"{escape_html(item.value)}</div>"
        f'<div style="color: {style_value(theme.colors.text_muted)}">{escape_html(item.label)}</div>'
        "</div>"
        for item in component.items
    )
    return (
        f'<div class="stats-grid" style="display: grid; grid-template-columns: repeat({component.columns}, 1fr); '
        f'gap: 2rem; text-align: center;">\n{items}\n</div>'
    )


def render_testimonial(component: TestimonialComponent, theme: Theme, images: ImageOptimizer) -> str:
    text_color = style_value(theme.colors.text)
    parts = [
        '<blockquote style="text-align: center; margin: 0;">',
        f'<p style="font-size: 1.25rem; font-style: italic; color: {text_color}">'
        f"&quot;{escape_html(component.quote)}&quot;</p>",
    ]
    if component.avatar:
        parts.append(
            f'<img src="{escape_html(component.avatar)}" alt="{escape_html(component.author)}" '
            'style="width: 3rem; height: 3rem; border-radius: 50%; margin: 1rem auto;">'
        )
    parts.append(f'<footer><strong style="color: {text_color}">{escape_html(component.author)}</strong>')
    if component.title:
        parts.append(
            f'<br><span style="color: {style_value(theme.colors.text_muted)}">{escape_html(component.title)}</span>'
        )
    parts.append("</footer>")
    parts.append("</blockquote>")
    return "\n".join(parts)


def render_gallery(component: GalleryComponent, theme: Theme, images: ImageOptimizer) -> str:
    if not component.items:
        return '<div class="gallery-placeholder">Gallery - add images in editor</div>'

    thumbnail_width = math.ceil(DEFAULT_IMAGE_WIDTH / component.columns)
    cells = []
    for item in component.items:
        picture = images.picture(item.src, item.alt, width=thumbnail_width, quality=75, lazy=True, class_name="gallery-image")
        caption = ""
        if item.caption:
            caption = (
                '<div style="position: absolute; bottom: 0; left: 0; right: 0; background: rgba(0,0,0,0.5); '
                f'color: white; padding: 0.5rem; font-size: 0.875rem;">{escape_html(item.caption)}</div>'
            )
        cells.append(
            '<div class="gallery-item" style="position: relative; overflow: hidden; border-radius: 0.5rem; '
            f'aspect-ratio: 1;">{picture}{caption}</div>'
        )
    return (
        f'<div class="gallery-grid" style="display: grid; grid-template-columns: repeat({component.columns}, 1fr); '
        f'gap: 1rem;">\n' + "\n".join(cells) + "\n</div>"
    )


def render_video(component: VideoComponent, theme: Theme, images: ImageOptimizer) -> str:
    if not component.src:
        return (
            '<div class="video-placeholder" style="background: #1f2937; padding: 4rem; text-align: center; '
            'color: #9ca3af; border-radius: 0.5rem;">Video - add URL in editor</div>'
        )
    embed_url = video_embed_url(component.src, component.provider)
    return (
        f'<div style="position: relative; aspect-ratio: {style_value(component.aspect_ratio)}; overflow: hidden; '
        'border-radius: 0.5rem;">'
        f'<iframe src="{escape_html(embed_url)}" style="position: absolute; top: 0; left: 0; width: 100%; '
        'height: 100%;" frameborder="0" allow="accelerometer; autoplay; clipboard-write; encrypted-media; '
        'gyroscope; picture-in-picture" allowfullscreen></iframe>'
        "</div>"
    )


def _form_field(label: str, control: str, theme: Theme) -> str:
    return (
        '<div style="margin-bottom: 1rem;">'
        f'<label style="display: block; margin-bottom: 0.5rem; color: {style_value(theme.colors.text)}">{label}</label>'
        f"{control}"
        "</div>"
    )


def _input_style(theme: Theme) -> str:
    return (
        f"width: 100%; padding: 0.75rem; border: 1px solid {style_value(theme.colors.border)}; "
        f"border-radius: {style_value(theme.border_radius.md)};"
    )


def render_contact_form(component: ContactFormComponent, theme: Theme, images: ImageOptimizer) -> str:
    field_style = _input_style(theme)
    fields = [
        _form_field("Name", f'<input type="text" name="name" required style="{field_style}">', theme),
        _form_field("Email", f'<input type="email" name="email" required style="{field_style}">', theme),
    ]
    if component.include_phone:
        fields.append(_form_field("Phone", f'<input type="tel" name="phone" style="{field_style}">', theme))
    if component.include_message:
        fields.append(
            _form_field(
                "Message",
                f'<textarea name="message" rows="4" required style="{field_style} resize: vertical;"></textarea>',
                theme,
            )
        )
    submit = (
        f'<button type="submit" style="width: 100%; padding: 0.75rem; background: {style_value(theme.colors.primary)}; '
        f'color: white; border: none; border-radius: {style_value(theme.border_radius.md)}; cursor: pointer; '
        f'font-weight: 500;">{escape_html(component.submit_text)}</button>'
    )
    return (
        '<form class="contact-form" style="max-width: 500px; margin: 0 auto;">\n'
        + "\n".join(fields)
        + f"\n{submit}\n</form>"
    )


def render_newsletter_signup(component: NewsletterSignupComponent, theme: Theme, images: ImageOptimizer) -> str:
    radius = style_value(theme.border_radius.md)
    return (
        '<form class="newsletter-form" style="display: flex; gap: 0.5rem; max-width: 400px; margin: 0 auto;">'
        '<input type="email" name="email" placeholder="Enter your email" required style="flex: 1; padding: 0.75rem; '
        f'border: 1px solid {style_value(theme.colors.border)}; border-radius: {radius};">'
        f'<button type="submit" style="padding: 0.75rem 1.5rem; background: {style_value(theme.colors.primary)}; '
        f"color: white; border: none; border-radius: {radius}; cursor: pointer; font-weight: 500; "
        f'white-space: nowrap;">{escape_html(component.button_text)}</button>'
        "</form>"
    )


def render_donation_form(component: DonationFormComponent, theme: Theme, images: ImageOptimizer) -> str:
    primary = style_value(theme.colors.primary)
    radius = style_value(theme.border_radius.md)
    buttons = "\n".join(
        f'<button type="button" class="amount-btn" data-amount="{format_amount(amount)}" '
        f"style=\"padding: 0.75rem 1.5rem; background: white; border: 2px solid {primary}; border-radius: {radius}; "
        f'cursor: pointer; color: {primary}; font-weight: 500;">${format_amount(amount)}</button>'
        for amount in component.suggested_amounts
    )
    parts = [
        '<form class="donation-form" style="max-width: 400px; margin: 0 auto; text-align: center;">',
        '<div style="display: flex; gap: 0.5rem; justify-content: center; margin-bottom: 1rem; flex-wrap: wrap;">',
        buttons,
        "</div>",
    ]
    if component.allow_custom_amount:
        parts.append(
            '<div style="margin-bottom: 1rem;">'
            '<input type="number" name="custom_amount" placeholder="Custom amount" style="width: 100%; '
            f'padding: 0.75rem; border: 1px solid {style_value(theme.colors.border)}; border-radius: {radius}; '
            'text-align: center;"></div>'
        )
    parts.append(
        f'<button type="submit" style="width: 100%; padding: 1rem; background: {primary}; color: white; border: none; '
        f'border-radius: {radius}; cursor: pointer; font-weight: 600; font-size: 1.125rem;">'
        f"{escape_html(component.button_text)}</button>"
    )
    parts.append("</form>")
    return "\n".join(parts)


def render_social_links(component: SocialLinksComponent, theme: Theme, images: ImageOptimizer) -> str:
    if not component.links:
        return ""
    links = "\n".join(
        f'<a href="{escape_html(link.url)}" target="_blank" rel="noopener noreferrer" '
        f'aria-label="{escape_html(link.platform)}" style="color: inherit; transition: opacity 0.2s;">'
        f"{social_icon(link.platform)}</a>"
        for link in component.links
    )
    justify = JUSTIFY.get(component.align, "center")
    return (
        f'<div class="social-links" style="display: flex; gap: 1rem; justify-content: {justify}; flex-wrap: wrap;">\n'
        f"{links}\n</div>"
    )


def render_unknown(component: BaseComponent, theme: Theme, images: ImageOptimizer) -> str:
    # "--" would end the comment early
    kind = escape_html(component.type).replace("--", "- -")
    return f"<!-- Unknown component type: {kind} -->"


ComponentRenderer = Callable[[BaseComponent, Theme, ImageOptimizer], str]

RENDERERS: Dict[Type[BaseComponent], ComponentRenderer] = {
    HeadingComponent: render_heading,
    TextComponent: render_text,
    ButtonComponent: render_button,
    ImageComponent: render_image,
    DividerComponent: render_divider,
    SpacerComponent: render_spacer,
    StatsComponent: render_stats,
    TestimonialComponent: render_testimonial,
    GalleryComponent: render_gallery,
    VideoComponent: render_video,
    ContactFormComponent: render_contact_form,
    NewsletterSignupComponent: render_newsletter_signup,
    DonationFormComponent: render_donation_form,
    SocialLinksComponent: render_social_links,
    UnknownComponent: render_unknown,
}


def render_component(component: BaseComponent, theme: Theme, images: ImageOptimizer) -> str:
    """Render one component.

    A component that fails to render is replaced by a comment so the rest of
    the section still renders.
    """
    renderer = RENDERERS.get(type(component), render_unknown)
    try:
        return renderer(component, theme, images)
    except Exception:
        logger.exception("Failed to render %s component %s", component.type, component.id)
        return "<!-- Component failed to render -->"


def render_section(section: Section, theme: Theme, images: ImageOptimizer) -> str:
    """Render a visible section; hidden sections render as an empty string."""
    if section.hidden:
        return ""

    style = []
    if section.background_color:
        style.append(f"background-color: {style_value(section.background_color)}")
    if section.background_image:
        style.append(
            f"background-image: url(&#39;{style_value(section.background_image)}&#39;); "
            "background-size: cover; background-position: center"
        )
    for side in ("top", "bottom", "left", "right"):
        value = getattr(section, f"padding_{side}")
        if value:
            style.append(f"padding-{side}: {style_value(value)}")
    style_attr = f' style="{"; ".join(style)}"' if style else ""
    max_width = style_value(section.max_width or DEFAULT_SECTION_WIDTH)

    components = "\n".join(render_component(component, theme, images) for component in section.components)
    return (
        f'<section class="site-section"{style_attr}>\n'
        f'<div class="section-container" style="max-width: {max_width}; margin: 0 auto;">\n'
        f"{components}\n"
        "</div>\n"
        "</section>"
    )
