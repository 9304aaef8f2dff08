"""Responsive image markup and optimized image URLs.

URLs are rewritten for a transforming image CDN (Cloudflare-style
``/cdn-cgi/image/`` paths) when a CDN base URL is configured, and get
transformation query parameters otherwise.
"""

from typing import List, Optional
from urllib.parse import quote, urlencode

from ..config import RenderSettings
from .escape import escape_html

BREAKPOINTS: List[int] = [320, 640, 768, 1024, 1280, 1920]
SIZES = "(max-width: 640px) 100vw, (max-width: 768px) 100vw, (max-width: 1024px) 50vw, 100vw"


class ImageOptimizer:
    """Builds optimized image URLs and ``<picture>`` elements."""

    def __init__(self, settings: Optional[RenderSettings] = None, breakpoints: Optional[List[int]] = None) -> None:
        self.settings = settings or RenderSettings()
        self.breakpoints = breakpoints or BREAKPOINTS

    @property
    def enabled(self) -> bool:
        return self.settings.image_optimization

    def optimized_url(
        self,
        url: str,
        width: Optional[int] = None,
        height: Optional[int] = None,
        quality: int = 80,
        fmt: str = "webp",
        fit: str = "cover",
    ) -> str:
        """Return the transformed URL of an image.

        Args:
            url: Original image URL
            width: Target width in pixels
            height: Target height in pixels
            quality: Compression quality
            fmt: Output format, or "original" to keep the source format
            fit: Resize mode

        Returns:
            The optimized URL, or ``url`` unchanged when optimization is off
        """
        if not self.enabled or not url:
            return url

        if self.settings.cdn_base_url:
            transformations = []
            if width:
                transformations.append(f"width={width}")
            if height:
                transformations.append(f"height={height}")
            transformations.append(f"quality={quality}")
            if fmt != "original":
                transformations.append(f"format={fmt}")
            transformations.append(f"fit={fit}")
            return f"{self.settings.cdn_base_url}/cdn-cgi/image/{','.join(transformations)}/{quote(url, safe='')}"

        params = [("q", quality)]
        if fmt != "original":
            params.append(("f", fmt))
        if width:
            params.append(("w", width))
        if height:
            params.append(("h", height))
        params.append(("fit", fit))
        separator = "&" if "?" in url else "?"
        return f"{url}{separator}{urlencode(params)}"

    def srcset(self, url: str, quality: int = 80, fmt: str = "webp") -> str:
        """Comma-separated srcset over the configured breakpoints."""
        if not self.enabled or not url:
            return ""
        return ", ".join(
            f"{self.optimized_url(url, width=width, quality=quality, fmt=fmt)} {width}w" for width in self.breakpoints
        )

    def picture(
        self,
        url: str,
        alt: str = "",
        width: Optional[int] = None,
        height: Optional[int] = None,
        quality: int = 80,
        lazy: bool = True,
        class_name: Optional[str] = None,
    ) -> str:
        """Render a ``<picture>`` with AVIF and WebP sources and a responsive ``<img>``."""
        if not url:
            return ""

        avif = self.optimized_url(url, width, height, quality, fmt="avif")
        webp = self.optimized_url(url, width, height, quality, fmt="webp")
        srcset = self.srcset(url, quality=quality)

        attributes = [f'src="{escape_html(webp)}"']
        if srcset:
            attributes.append(f'srcset="{escape_html(srcset)}"')
            attributes.append(f'sizes="{SIZES}"')
        attributes.append(f'alt="{escape_html(alt)}"')
        if lazy:
            attributes.append('loading="lazy"')
        if class_name:
            attributes.append(f'class="{escape_html(class_name)}"')
        if width:
            attributes.append(f'width="{width}"')
        if height:
            attributes.append(f'height="{height}"')
        attributes.append('decoding="async"')

        return (
            "<picture>"
            f'<source type="image/avif" srcset="{escape_html(avif)}">'
            f'<source type="image/webp" srcset="{escape_html(webp)}">'
            f"<img {' '.join(attributes)}>"
            "</picture>"
        )

    def preload_link(self, url: str, width: Optional[int] = None, quality: int = 80) -> str:
        """``<link rel="preload">`` hint for an above-the-fold image."""
        href = self.optimized_url(url, width=width, quality=quality, fmt="webp")
        return f'<link rel="preload" as="image" href="{escape_html(href)}" type="image/webp">'
