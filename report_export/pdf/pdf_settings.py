"""Fonts and layout settings for PDF generation."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

from reportlab.lib import colors
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from ..errors import RenderingBackendError


def _style_colors() -> Dict[str, colors.Color]:
    return {
        "title": colors.black,
        "meta": colors.Color(100 / 255, 100 / 255, 100 / 255),
        "label": colors.black,
        "description": colors.black,
        "heading": colors.black,
        "body": colors.black,
        "tags-label": colors.black,
        "tags": colors.Color(80 / 255, 80 / 255, 80 / 255),
        "footer": colors.Color(150 / 255, 150 / 255, 150 / 255),
    }


@dataclass(slots=True)
class PageSettings:
    """Geometry constants used during layout.

    Distances are layout units (millimetres by default) measured from the
    top edge of the page. ``unit`` converts them to PDF points.

    Example:
        >>> settings = PageSettings()
        >>> settings.content_bottom, settings.heading_limit
        (280.0, 270.0)
    """

    page_width: float = 210.0
    page_height: float = 297.0
    unit: float = mm
    left_margin: float = 20.0
    top_margin: float = 20.0
    bottom_margin: float = 17.0
    content_width: float = 170.0
    header_offset: float = 45.0
    heading_height: float = 8.0
    heading_reserve: float = 10.0
    line_height: float = 5.0
    section_gap: float = 10.0
    tags_label_height: float = 7.0
    footer_offset: float = 10.0
    font_name: str = "Helvetica"
    font_bold_name: str = "Helvetica-Bold"
    title_font_size: float = 24.0
    meta_font_size: float = 12.0
    heading_font_size: float = 14.0
    body_font_size: float = 10.0
    footer_font_size: float = 10.0
    footer_brand: str | None = None
    strip_inline_markup: bool = True
    style_colors: Dict[str, colors.Color] = field(default_factory=_style_colors)

    @property
    def content_bottom(self) -> float:
        """Return the y offset body text may not run past.

        Returns:
            Offset from the top edge in layout units.
        """

        return self.page_height - self.bottom_margin

    @property
    def heading_limit(self) -> float:
        """Return the y offset past which a section starts on a fresh page."""

        return self.content_bottom - self.heading_reserve

    @property
    def footer_y(self) -> float:
        """Return the baseline of the page footer."""

        return self.content_bottom + self.footer_offset

    def font_for(self, style: str) -> tuple[str, float]:
        """Return ``(font name, size)`` for a draw-instruction style hint.

        Example:
            >>> PageSettings().font_for("heading")
            ('Helvetica-Bold', 14.0)
        """

        sizes = {
            "title": self.title_font_size,
            "meta": self.meta_font_size,
            "label": self.meta_font_size,
            "tags-label": self.meta_font_size,
            "heading": self.heading_font_size,
            "footer": self.footer_font_size,
        }
        bold = style in {"title", "heading", "label", "tags-label"}
        font = self.font_bold_name if bold else self.font_name
        return font, sizes.get(style, self.body_font_size)

    def color_for(self, style: str) -> colors.Color:
        """Return the fill colour for a style hint, black when unknown."""

        return self.style_colors.get(style, colors.black)


def register_ttf_font(path: Path, name: str | None = None) -> str:
    """Register a TrueType font with ReportLab and return its name.

    Args:
        path: Path to a ``.ttf`` file.
        name: Registered name; defaults to the file stem.
    Returns:
        The name to use in ``PageSettings.font_name``.
    Raises:
        RenderingBackendError: If the file is missing or unreadable.
    """

    font_name = name or path.stem
    if font_name in pdfmetrics.getRegisteredFontNames():
        return font_name
    if not path.exists():
        raise RenderingBackendError(f"Font file not found: {path}")
    try:
        pdfmetrics.registerFont(TTFont(font_name, str(path)))
    except Exception as exc:
        raise RenderingBackendError(f"Could not load font {path}: {exc}") from exc
    return font_name
