"""Page component models.

Components form a tagged union on ``type``. Every attribute has a default
so any stored component can be rendered; attributes that fail validation are
dropped on load rather than rejecting the whole page, and components of an
unrecognized type are kept as :class:`UnknownComponent` so they survive a
round trip through storage unchanged.
"""

import logging
from typing import Any, Dict, List, Optional, Type

from pydantic import AliasChoices, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from typing_extensions import Literal

from .base import SitesmithModel, new_id, to_camel
from .settings import SocialLink

logger = logging.getLogger(__name__)

TextAlign = Literal["left", "center", "right", "justify"]


class BaseComponent(SitesmithModel):
    """Fields shared by all components."""

    id: str = Field(default_factory=new_id)
    type: str

    class Config:
        """Pydantic configuration."""
        extra = "allow"


class HeadingComponent(BaseComponent):
    type: Literal["heading"] = "heading"
    content: str = ""
    level: int = 2
    align: TextAlign = "left"
    color: Optional[str] = None

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: int) -> int:
        """Validate heading level."""
        if v < 1 or v > 6:
            raise ValueError("Heading level must be between 1 and 6")
        return v


class TextComponent(BaseComponent):
    type: Literal["text"] = "text"
    content: str = ""
    align: TextAlign = "left"
    color: Optional[str] = None


class ButtonComponent(BaseComponent):
    type: Literal["button"] = "button"
    text: str = "Button"
    url: str = Field(default="#", validation_alias=AliasChoices("url", "href"))
    variant: str = "primary"
    size: str = "md"
    full_width: bool = False


class ImageComponent(BaseComponent):
    type: Literal["image"] = "image"
    src: str = ""
    alt: str = ""
    width: str = "100%"
    height: str = "auto"
    caption: Optional[str] = None
    priority: bool = False


class DividerComponent(BaseComponent):
    type: Literal["divider"] = "divider"
    color: Optional[str] = None
    thickness: str = "1px"
    width: str = "100%"


class SpacerComponent(BaseComponent):
    type: Literal["spacer"] = "spacer"
    height: str = "2rem"


class StatItem(SitesmithModel):
    id: Optional[str] = None
    value: str = ""
    label: str = ""


class StatsComponent(BaseComponent):
    type: Literal["stats"] = "stats"
    items: List[StatItem] = []
    columns: int = Field(default=4, ge=1, le=6)


class TestimonialComponent(BaseComponent):
    type: Literal["testimonial"] = "testimonial"
    quote: str = ""
    author: str = ""
    title: Optional[str] = None
    avatar: Optional[str] = None


class GalleryItem(SitesmithModel):
    id: Optional[str] = None
    src: str = ""
    alt: str = ""
    caption: Optional[str] = None


class GalleryComponent(BaseComponent):
    type: Literal["gallery"] = "gallery"
    items: List[GalleryItem] = []
    columns: int = Field(default=3, ge=1, le=6)


class VideoComponent(BaseComponent):
    type: Literal["video"] = "video"
    src: str = ""
    provider: str = "youtube"
    aspect_ratio: str = "16/9"


class ContactFormComponent(BaseComponent):
    type: Literal["contact-form"] = "contact-form"
    submit_text: str = "Send Message"
    include_phone: bool = True
    include_message: bool = True


class NewsletterSignupComponent(BaseComponent):
    type: Literal["newsletter-signup"] = "newsletter-signup"
    button_text: str = "Subscribe"


class DonationFormComponent(BaseComponent):
    type: Literal["donation-form"] = "donation-form"
    suggested_amounts: List[float] = [25, 50, 100, 250]
    allow_custom_amount: bool = True
    button_text: str = "Donate Now"


class SocialLinksComponent(BaseComponent):
    type: Literal["social-links"] = "social-links"
    links: List[SocialLink] = []
    align: TextAlign = "center"


class UnknownComponent(BaseComponent):
    """Component whose type is not one of the known kinds."""

    id: Optional[Any] = None
    type: str = "unknown"


COMPONENT_TYPES: Dict[str, Type[BaseComponent]] = {
    "heading": HeadingComponent,
    "text": TextComponent,
    "button": ButtonComponent,
    "image": ImageComponent,
    "divider": DividerComponent,
    "spacer": SpacerComponent,
    "stats": StatsComponent,
    "testimonial": TestimonialComponent,
    "gallery": GalleryComponent,
    "video": VideoComponent,
    "contact-form": ContactFormComponent,
    "newsletter-signup": NewsletterSignupComponent,
    "donation-form": DonationFormComponent,
    "social-links": SocialLinksComponent,
}


def _invalid_keys(error: PydanticValidationError) -> set:
    keys = set()
    for item in error.errors():
        if item.get("loc"):
            key = str(item["loc"][0])
            keys.add(key)
            keys.add(to_camel(key))
    return keys


def parse_component(data: Any) -> BaseComponent:
    """Parse a stored component leniently.

    Args:
        data: Component document or model instance

    Returns:
        The matching component variant, or an UnknownComponent
    """
    if isinstance(data, BaseComponent):
        return data
    if not isinstance(data, dict):
        return UnknownComponent(type=type(data).__name__)

    kind = data.get("type")
    model = COMPONENT_TYPES.get(kind) if isinstance(kind, str) else None
    if model is None:
        raw = dict(data)
        raw["type"] = str(kind) if kind is not None else "unknown"
        return UnknownComponent.model_validate(raw)

    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        invalid = _invalid_keys(e)
        logger.debug("Dropping invalid %s attributes: %s", kind, sorted(invalid))
        cleaned = {key: value for key, value in data.items() if key not in invalid}

    try:
        return model.model_validate(cleaned)
    except PydanticValidationError:
        logger.warning("Component of type %s could not be parsed", kind)
        return UnknownComponent.model_validate(dict(data, type=kind))
