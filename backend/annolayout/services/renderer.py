"""Page preview renderer: draw comment boxes and leader lines with Pillow.

Each annotation is drawn as:
  * a rectangle outline at its (overlay-aware) position;
  * its content, wrapped the same way the editor wraps it;
  * a leader line from the anchor to the point where it meets the box,
    computed by the shared ``line_box_intersection``;
  * a small dot on the anchor.

The drag overlay, when given, takes precedence over committed positions so a
preview can show boxes mid-drag.
"""

import functools
import io
import logging
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from annolayout.models.annotation import Annotation
from annolayout.services.collision import annotation_bounds
from annolayout.services.drag_overlay import DragOverlay
from annolayout.services.geometry import Bounds, line_box_intersection
from annolayout.services.sizing import apply_auto_line_breaks

logger = logging.getLogger("annolayout.renderer")

_SANS_FONT_CANDIDATES = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    "/usr/share/fonts/truetype/noto/NotoSans-Regular.ttf",
    "/usr/share/fonts/truetype/freefont/FreeSans.ttf",
]


def _find_sans_font() -> str | None:
    """Find a sans-serif TrueType font on the system."""
    for p in _SANS_FONT_CANDIDATES:
        if Path(p).exists():
            return p
    return None


@functools.lru_cache(maxsize=16)
def _get_font(size: int) -> ImageFont.ImageFont | ImageFont.FreeTypeFont:
    font_path = _find_sans_font()
    if font_path is None:
        return ImageFont.load_default()
    return ImageFont.truetype(font_path, size=size)


@dataclass(frozen=True)
class PreviewStyle:
    """Colors are RGB."""
    background: tuple[int, int, int] = (255, 255, 255)
    box_outline: tuple[int, int, int] = (255, 152, 0)
    box_fill: tuple[int, int, int] = (255, 248, 225)
    text_color: tuple[int, int, int] = (33, 33, 33)
    leader_color: tuple[int, int, int] = (255, 152, 0)   # #ff9800
    line_width: int = 1
    anchor_radius: int = 2
    font_size: int = 11
    text_padding: int = 4


def render_page_preview(
    annotations: list[Annotation],
    container: Bounds,
    overlay: DragOverlay | None = None,
    style: PreviewStyle | None = None,
) -> bytes:
    """Render *annotations* on a blank page of the container size; return PNG bytes.

    Annotations without a position (and no in-flight drag) are skipped; those
    without a leader anchor get no leader line.
    """
    if style is None:
        style = PreviewStyle()
    if overlay is None:
        overlay = DragOverlay()

    size = (max(round(container.width), 1), max(round(container.height), 1))
    img = Image.new("RGB", size, style.background)
    draw = ImageDraw.Draw(img)
    font = _get_font(style.font_size)

    drawn = 0
    for ann in annotations:
        position = overlay.position_for(ann)
        if position is None:
            continue
        box = annotation_bounds(ann).moved_to(position)

        if ann.has_leader:
            end = line_box_intersection(
                ann.leader_x, ann.leader_y, box.x, box.y, box.width, box.height,
            )
            draw.line(
                [(ann.leader_x, ann.leader_y), (end.x, end.y)],
                fill=style.leader_color,
                width=style.line_width,
            )
            r = style.anchor_radius
            draw.ellipse(
                [ann.leader_x - r, ann.leader_y - r, ann.leader_x + r, ann.leader_y + r],
                fill=style.leader_color,
            )

        draw.rectangle(
            [box.left, box.top, box.right, box.bottom],
            fill=style.box_fill,
            outline=style.box_outline,
            width=style.line_width,
        )
        if ann.content:
            draw.multiline_text(
                (box.left + style.text_padding, box.top + style.text_padding),
                apply_auto_line_breaks(ann.content),
                fill=style.text_color,
                font=font,
            )
        drawn += 1

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    logger.debug("Rendered preview %dx%d with %d annotations (%d dragged)",
                 size[0], size[1], drawn, len(overlay))
    return buf.getvalue()
