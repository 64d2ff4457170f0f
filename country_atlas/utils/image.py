"""Flag SVG helpers: emoji conversion, resizing, data URLs, filters and shapes."""

import base64
import html
import re
from typing import NamedTuple
from urllib.parse import quote

from country_atlas.errors import InvalidInputError
from country_atlas.models.country import flag_emoji

_SVG_OPEN_TAG = re.compile(r"<svg[^>]*>")
_VIEWBOX_ATTR = re.compile(r'viewBox="([^"]+)"')
# Only the svg element's own width/height, not stroke-width and friends.
_WIDTH_ATTR = re.compile(r'(?<![\w-])width="([^"]+)"')
_HEIGHT_ATTR = re.compile(r'(?<![\w-])height="([^"]+)"')

DEFAULT_VIEWBOX = "0 0 640 480"


class FlagSize(NamedTuple):
    width: int
    height: int


FLAG_SIZES: dict[str, FlagSize] = {
    "TINY": FlagSize(16, 12),
    "SMALL": FlagSize(32, 24),
    "MEDIUM": FlagSize(64, 48),
    "LARGE": FlagSize(128, 96),
    "XLARGE": FlagSize(256, 192),
    "ICON": FlagSize(24, 24),
    "THUMBNAIL": FlagSize(100, 75),
    "BANNER": FlagSize(800, 600),
}


def emoji_to_unicode(emoji: str) -> str:
    """'🇮🇳' -> '1F1EE-1F1F3'."""
    return "-".join(f"{ord(ch):04X}" for ch in emoji)


def iso_to_flag_emoji(iso2: str) -> str:
    return flag_emoji(iso2)


def _open_tag(svg: str) -> str:
    match = _SVG_OPEN_TAG.search(svg)
    return match.group(0) if match else ""


def _viewbox(svg: str) -> str:
    tag = _open_tag(svg)
    viewbox = _VIEWBOX_ATTR.search(tag)
    if viewbox:
        return viewbox.group(1)
    width, height = _WIDTH_ATTR.search(tag), _HEIGHT_ATTR.search(tag)
    if width and height:
        return f"0 0 {width.group(1)} {height.group(1)}"
    return DEFAULT_VIEWBOX


def _intrinsic_size(svg: str) -> tuple[float, float]:
    parts = _viewbox(svg).replace(",", " ").split()
    try:
        width, height = float(parts[2]), float(parts[3])
    except (IndexError, ValueError):
        return 640.0, 480.0
    if width <= 0 or height <= 0:
        return 640.0, 480.0
    return width, height


def resize_flag_svg(svg: str, width: int, height: int) -> str:
    """Replace the root element with one carrying explicit width and height."""
    new_tag = (
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="{_viewbox(svg)}" '
        f'width="{width}" height="{height}">'
    )
    return _SVG_OPEN_TAG.sub(new_tag, svg, count=1)


def resize_flag_svg_maintain_ratio(svg: str, max_width: int, max_height: int) -> str:
    original_width, original_height = _intrinsic_size(svg)
    ratio = original_width / original_height
    width, height = float(max_width), max_width / ratio
    if height > max_height:
        height = float(max_height)
        width = max_height * ratio
    return resize_flag_svg(svg, round(width), round(height))


def svg_to_data_url(svg: str) -> str:
    return "data:image/svg+xml," + quote(svg, safe="-_.!~*()")


def svg_to_base64_data_url(svg: str) -> str:
    encoded = base64.b64encode(svg.encode("utf-8")).decode("ascii")
    return f"data:image/svg+xml;base64,{encoded}"


def generate_flag_img_tag(
    svg: str,
    width: int = 64,
    height: int = 48,
    alt: str = "Flag",
    class_name: str = "",
    maintain_ratio: bool = True,
) -> str:
    if maintain_ratio:
        resized = resize_flag_svg_maintain_ratio(svg, width, height)
    else:
        resized = resize_flag_svg(svg, width, height)

    class_attr = f' class="{html.escape(class_name)}"' if class_name else ""
    return (
        f'<img src="{svg_to_data_url(resized)}" alt="{html.escape(alt)}" '
        f'width="{width}" height="{height}"{class_attr} />'
    )


def resize_flag_with_preset(svg: str, preset: str) -> str:
    size = FLAG_SIZES.get(preset.upper())
    if size is None:
        raise InvalidInputError(
            "preset", preset, f"Expected one of: {', '.join(FLAG_SIZES)}"
        )
    return resize_flag_svg(svg, size.width, size.height)


def apply_flag_filter(
    svg: str,
    grayscale: float | None = None,
    brightness: float | None = None,
    contrast: float | None = None,
    opacity: float | None = None,
    blur: float | None = None,
) -> str:
    """Add a CSS filter style to the root element. Percentages for the first three."""
    filters = []
    if grayscale is not None:
        filters.append(f"grayscale({grayscale}%)")
    if brightness is not None:
        filters.append(f"brightness({brightness}%)")
    if contrast is not None:
        filters.append(f"contrast({contrast}%)")
    if opacity is not None:
        filters.append(f"opacity({opacity})")
    if blur is not None:
        filters.append(f"blur({blur}px)")

    if not filters:
        return svg
    return svg.replace("<svg", f'<svg style="filter: {" ".join(filters)};"', 1)


def apply_flag_shape(svg: str, shape: str, size: int = 64) -> str:
    if shape == "square":
        return resize_flag_svg(svg, size, size)
    if shape == "circle":
        half = size / 2
        clip = f'<clipPath id="circle-clip"><circle cx="{half:g}" cy="{half:g}" r="{half:g}" /></clipPath>'
    elif shape == "rounded":
        radius = size * 0.1
        clip = (
            f'<clipPath id="rounded-clip"><rect x="0" y="0" width="{size}" height="{size}" '
            f'rx="{radius:g}" ry="{radius:g}" /></clipPath>'
        )
    else:
        raise InvalidInputError("shape", shape, "Expected circle, rounded or square")

    width, height = _intrinsic_size(svg)
    content = _SVG_OPEN_TAG.sub("", svg, count=1).replace("</svg>", "").strip()
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {size} {size}" '
        f'width="{size}" height="{size}">'
        f"<defs>{clip}</defs>"
        f'<g clip-path="url(#{shape}-clip)" transform="scale({size / width:g} {size / height:g})">'
        f"{content}</g></svg>"
    )
