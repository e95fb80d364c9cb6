from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from io import BytesIO

from PIL import Image, ImageDraw, ImageFont
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from app.schemas.ats import OptimizedPreview

logger = logging.getLogger(__name__)

# Preview is laid out at 96 dpi A4 width and rasterized at twice that for sharper text.
RASTER_SCALE = 2
PAGE_WIDTH_PX = 794 * RASTER_SCALE
PADDING_PX = 32 * RASTER_SCALE
NAME_FONT_SIZE = 24 * RASTER_SCALE
HEADING_FONT_SIZE = 15 * RASTER_SCALE
BODY_FONT_SIZE = 12 * RASTER_SCALE
LINE_SPACING = 1.4
BULLET_INDENT_PX = 16 * RASTER_SCALE
_BULLET_PREFIXES = ("•", "-", "*")

TEXT_COLOR = (17, 24, 39)
MUTED_COLOR = (75, 85, 99)
RULE_COLOR = (209, 213, 219)


class ExportError(RuntimeError):
    pass


@dataclass(frozen=True)
class _Block:
    kind: str
    text: str = ""
    size: int = BODY_FONT_SIZE
    color: tuple[int, int, int] = TEXT_COLOR
    centered: bool = False
    indent: int = 0


def export_file_name(today: date | None = None) -> str:
    return f"ATS-Optimized-Resume-{(today or date.today()).isoformat()}.pdf"


def _wrap(draw: ImageDraw.ImageDraw, text: str, font: ImageFont.ImageFont, max_width: int) -> list[str]:
    lines: list[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if current and draw.textlength(candidate, font=font) > max_width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


def _blocks(preview: OptimizedPreview) -> list[_Block]:
    blocks = [_Block(kind="text", text=preview.name, size=NAME_FONT_SIZE, centered=True)]
    for line in preview.contact_lines:
        blocks.append(_Block(kind="text", text=line, color=MUTED_COLOR, centered=True))
    blocks.append(_Block(kind="rule"))

    for section in preview.sections:
        blocks.append(_Block(kind="gap"))
        blocks.append(_Block(kind="text", text=section.title.upper(), size=HEADING_FONT_SIZE))
        blocks.append(_Block(kind="rule"))
        for line in section.lines:
            indent = BULLET_INDENT_PX if line.startswith(_BULLET_PREFIXES) else 0
            blocks.append(_Block(kind="text", text=line, indent=indent))
    return blocks


def rasterize_preview(preview: OptimizedPreview) -> Image.Image:
    """Draw the single-column preview onto a white bitmap sized to its content."""
    measure = ImageDraw.Draw(Image.new("RGB", (1, 1)))
    fonts: dict[int, ImageFont.ImageFont] = {}
    content_width = PAGE_WIDTH_PX - 2 * PADDING_PX

    laid_out: list[tuple[str, int, int, ImageFont.ImageFont, tuple[int, int, int]]] = []
    rules: list[int] = []
    y = PADDING_PX
    for block in _blocks(preview):
        if block.kind == "gap":
            y += BODY_FONT_SIZE
            continue
        if block.kind == "rule":
            rules.append(y + RASTER_SCALE * 3)
            y += RASTER_SCALE * 8
            continue
        if block.size not in fonts:
            fonts[block.size] = ImageFont.load_default(size=block.size)
        font = fonts[block.size]
        for wrapped in _wrap(measure, block.text, font, content_width - block.indent):
            if block.centered:
                x = int((PAGE_WIDTH_PX - measure.textlength(wrapped, font=font)) / 2)
            else:
                x = PADDING_PX + block.indent
            laid_out.append((wrapped, x, y, font, block.color))
            y += int(block.size * LINE_SPACING)

    image = Image.new("RGB", (PAGE_WIDTH_PX, y + PADDING_PX), "white")
    draw = ImageDraw.Draw(image)
    for top in rules:
        draw.line((PADDING_PX, top, PAGE_WIDTH_PX - PADDING_PX, top), fill=RULE_COLOR, width=RASTER_SCALE)
    for text, x, top, font, color in laid_out:
        draw.text((x, top), text, font=font, fill=color)
    return image


def fit_to_page(image_width: int, image_height: int) -> tuple[float, float, float, float]:
    """Placement (x, y, width, height) in points on an A4 page: full width, shrunk to fit, top aligned."""
    page_width, page_height = A4
    width = page_width
    height = image_height * page_width / image_width
    if height > page_height:
        scale = page_height / height
        width *= scale
        height = page_height
    x = (page_width - width) / 2
    y = page_height - height
    return x, y, width, height


def render_preview_pdf(preview: OptimizedPreview) -> bytes:
    try:
        image = rasterize_preview(preview)
        x, y, width, height = fit_to_page(*image.size)

        buffer = BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=A4)
        pdf.setTitle(f"{preview.name} - ATS Optimized Resume")
        pdf.drawImage(ImageReader(image), x, y, width=width, height=height)
        pdf.showPage()
        pdf.save()
    except (OSError, ValueError) as exc:
        raise ExportError("Failed to render the optimized resume PDF.") from exc

    logger.info("preview_exported name=%s raster=%sx%s", preview.name, image.size[0], image.size[1])
    return buffer.getvalue()
