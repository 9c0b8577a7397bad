"""Responsive figures for images embedded in project write-ups.

An image resolves to three widths, one per breakpoint. A breakpoint without an
explicit size inherits the base ``size`` and otherwise the next smaller
breakpoint, ending at ``100%``. Full-bleed figures reinterpret the percentages
as viewport units so they can escape the article column.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

# Attributes forwarded to the <img> element; everything else is dropped.
SAFE_IMG_ATTRS = frozenset(
    {
        "loading",
        "decoding",
        "width",
        "height",
        "sizes",
        "srcset",
        "class",
        "style",
        "id",
        "role",
        "aria-label",
        "aria-hidden",
    }
)
# Sizing and caption keys never reach the element, even if allow-listed later.
RESERVED_IMG_ATTRS = frozenset(
    {"size", "sizeMobile", "sizeTablet", "sizeDesktop", "widthPercent", "fullPage", "title"}
)

SizeValue = str | int | float | None


class ImageSpec(BaseModel):
    """An image reference plus its sizing and caption options."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    src: str = ""
    alt: str = ""
    title: str | None = None
    size: SizeValue = Field(default=None, validation_alias=AliasChoices("size", "widthPercent", "width_percent"))
    size_mobile: SizeValue = Field(default=None, validation_alias=AliasChoices("size_mobile", "sizeMobile"))
    size_tablet: SizeValue = Field(default=None, validation_alias=AliasChoices("size_tablet", "sizeTablet"))
    size_desktop: SizeValue = Field(default=None, validation_alias=AliasChoices("size_desktop", "sizeDesktop"))
    full_page: bool = Field(default=False, validation_alias=AliasChoices("full_page", "fullPage"))
    attrs: dict[str, str] = Field(default_factory=dict)

    @field_validator("src", "alt", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("attrs", mode="before")
    @classmethod
    def _stringify_attrs(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            return {str(k): str(v) for k, v in value.items() if v is not None}
        return value


@dataclass(frozen=True, slots=True)
class ResponsiveSizes:
    mobile: str
    tablet: str
    desktop: str


@dataclass(frozen=True, slots=True)
class FigureView:
    """Everything the figure template needs."""

    css_class: str
    src: str
    alt: str
    caption: str | None
    sizes: ResponsiveSizes
    full_page: bool
    figure_style: str
    inner_style: str
    img_attrs: dict[str, str]
    caption_color: str


def to_percent(value: SizeValue) -> str | None:
    """Normalize ``70``, ``"70"`` or ``"70%"`` to ``"70%"``.

    >>> to_percent(70), to_percent("70"), to_percent(" 70% "), to_percent("wide")
    ('70%', '70%', '70%', None)
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return f"{value:g}%"
    text = str(value).strip()
    if not text:
        return None
    if text.endswith("%"):
        return text
    try:
        number = float(text)
    except ValueError:
        return None
    return f"{number:g}%"


def resolve_sizes(spec: ImageSpec) -> ResponsiveSizes:
    """Resolve per-breakpoint widths, falling back upward from mobile."""
    base = to_percent(spec.size)
    mobile = to_percent(spec.size_mobile) or base or "100%"
    tablet = to_percent(spec.size_tablet) or base or mobile
    desktop = to_percent(spec.size_desktop) or base or tablet
    return ResponsiveSizes(mobile=mobile, tablet=tablet, desktop=desktop)


def to_viewport_units(sizes: ResponsiveSizes) -> ResponsiveSizes:
    return ResponsiveSizes(
        mobile=_pct_to_vw(sizes.mobile),
        tablet=_pct_to_vw(sizes.tablet),
        desktop=_pct_to_vw(sizes.desktop),
    )


def _pct_to_vw(value: str) -> str:
    return value[:-1] + "vw" if value.endswith("%") else value


def sanitize_attrs(attrs: Mapping[str, Any]) -> dict[str, str]:
    """Keep only attributes that are valid on the rendered ``<img>``."""
    return {
        key: str(value)
        for key, value in attrs.items()
        if key not in RESERVED_IMG_ATTRS and key in SAFE_IMG_ATTRS and value is not None
    }


def caption_for(spec: ImageSpec) -> str | None:
    return spec.title or spec.alt or None


def figure_class(src: str, position: int) -> str:
    digest = hashlib.sha1(f"{src}:{position}".encode()).hexdigest()[:10]
    return f"folio-img-{digest}"


def build_figure(
    spec: ImageSpec,
    *,
    position: int = 0,
    caption_color: str = "rgba(255,255,255,0.7)",
    log_missing: bool = False,
) -> FigureView | None:
    """Build the figure view for ``spec`` or ``None`` when it has no source."""
    if not spec.src:
        if log_missing:
            logger.debug("Skipping image without a source (alt=%r)", spec.alt)
        return None

    sizes = resolve_sizes(spec)
    if spec.full_page:
        sizes = to_viewport_units(sizes)
        figure_style = (
            "position: relative; left: 50%; transform: translateX(-50%); width: 100vw; "
            "margin: 1rem 0; display: block;"
        )
    else:
        figure_style = "width: 100%; margin: 1rem auto; text-align: center; display: block;"
    # Widths live in the scoped stylesheet so the breakpoint rules can apply.
    inner_style = "max-width: 100vw; margin-left: auto; margin-right: auto;"

    return FigureView(
        css_class=figure_class(spec.src, position),
        src=spec.src,
        alt=spec.alt,
        caption=caption_for(spec),
        sizes=sizes,
        full_page=spec.full_page,
        figure_style=figure_style,
        inner_style=inner_style,
        img_attrs=sanitize_attrs(spec.attrs),
        caption_color=caption_color,
    )
