"""PowerPoint export for generated reports."""

from __future__ import annotations

import io
import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.text import PP_ALIGN
from pptx.util import Inches, Pt

from .cleaning import clean_text
from .errors import RenderingBackendError
from .markdown import SECTION_MARKER, TITLE_MARKER
from .models import DEFAULT_SECTION_TITLE

logger = logging.getLogger(__name__)

_LIST_ITEM = re.compile(r"^(?:-\s|\d+\.\s)")
_BLANK_LAYOUT = 6


@dataclass(slots=True)
class SlideSpec:
    """Content planned for a single slide.

    Attributes:
        title: Section heading shown at the top of the slide.
        text: Paragraph text, possibly multi-line.
        bullets: Bullet points with list markers removed.
    """

    title: str
    text: str = ""
    bullets: List[str] = field(default_factory=list)


@dataclass(slots=True)
class SlideSettings:
    """Deck geometry, fonts and colours.

    Example:
        >>> SlideSettings().content_width
        12.0
    """

    slide_width: float = 13.333
    slide_height: float = 7.5
    margin_left: float = 0.5
    font_name: str = "Arial"
    brand: str = "Generated by AI Information Tool"
    author: str = "AI Information Tool"
    accent_color: str = "1565C0"
    muted_color: str = "546E7A"
    faint_color: str = "78909C"
    body_color: str = "333333"
    background_color: str = "F5F5F5"
    cover_title_size: float = 44.0
    cover_brand_size: float = 20.0
    cover_date_size: float = 14.0
    section_title_size: float = 32.0
    slide_title_size: float = 28.0
    body_size: float = 16.0
    strip_inline_markup: bool = True

    @property
    def content_width(self) -> float:
        """Return the text box width in inches (90% of the slide)."""

        return round(self.slide_width * 0.9, 1)


def plan_slides(markdown: str, title: str) -> List[SlideSpec]:
    """Split markdown into content slides.

    ``#`` and ``##`` headings open a new slide section, except a ``#`` line
    repeating the deck title. Paragraph text and list items never share a
    slide: switching between them closes the current slide and continues
    under the same heading. Text before any heading falls under
    "Introduction".

    Args:
        markdown: Report body.
        title: Deck title, used to skip a duplicated level-1 heading.
    Returns:
        Slides in source order.

    Example:
        >>> [(s.title, s.text, s.bullets) for s in plan_slides(
        ...     '# Deck\\n## Why\\nBecause.\\n- one\\n2. two\\n## Next\\nLater', 'Deck')]
        [('Why', 'Because.', []), ('Why', '', ['one', 'two']), ('Next', 'Later', [])]
    """

    slides: List[SlideSpec] = []
    section = DEFAULT_SECTION_TITLE
    text_lines: List[str] = []
    points: List[str] = []
    is_list = False

    def flush() -> None:
        text = "\n".join(text_lines).strip()
        if text or points:
            slides.append(SlideSpec(title=section, text=text, bullets=list(points)))

    for line in markdown.split("\n"):
        stripped = line.strip()
        if line.startswith(TITLE_MARKER) and line[len(TITLE_MARKER):].strip() == title:
            continue
        if line.startswith(TITLE_MARKER) or line.startswith(SECTION_MARKER):
            flush()
            section = line.lstrip("#").strip()
            text_lines, points, is_list = [], [], False
        elif _LIST_ITEM.match(stripped):
            if not is_list and "".join(text_lines).strip():
                slides.append(SlideSpec(title=section, text="\n".join(text_lines).strip()))
                text_lines = []
            points.append(_LIST_ITEM.sub("", stripped, count=1))
            is_list = True
        elif stripped:
            if is_list and points:
                slides.append(SlideSpec(title=section, bullets=list(points)))
                points = []
            text_lines.append(line)
            is_list = False
    flush()
    return slides


def _rgb(value: str) -> RGBColor:
    return RGBColor.from_string(value)


def _add_text(
    slide,
    text: str,
    *,
    settings: SlideSettings,
    top: float,
    height: float,
    size: float,
    color: str | None = None,
    bold: bool = False,
    italic: bool = False,
    center: bool = False,
) -> None:
    """Add a text box spanning the content width of ``slide``."""

    box = slide.shapes.add_textbox(
        Inches(settings.margin_left),
        Inches(top),
        Inches(settings.content_width),
        Inches(height),
    )
    frame = box.text_frame
    frame.word_wrap = True
    for index, line in enumerate(text.split("\n")):
        paragraph = frame.paragraphs[0] if index == 0 else frame.add_paragraph()
        paragraph.text = line
        if center:
            paragraph.alignment = PP_ALIGN.CENTER
        for run in paragraph.runs:
            font = run.font
            font.name = settings.font_name
            font.size = Pt(size)
            font.bold = bold
            font.italic = italic
            if color:
                font.color.rgb = _rgb(color)


def _blank_slide(deck, *, settings: SlideSettings, shaded: bool = False):
    slide = deck.slides.add_slide(deck.slide_layouts[_BLANK_LAYOUT])
    if shaded:
        fill = slide.background.fill
        fill.solid()
        fill.fore_color.rgb = _rgb(settings.background_color)
    return slide


def _cover_slide(deck, *, title: str, created: datetime, settings: SlideSettings) -> None:
    slide = _blank_slide(deck, settings=settings, shaded=True)
    _add_text(
        slide,
        title,
        settings=settings,
        top=2.0,
        height=1.5,
        size=settings.cover_title_size,
        color=settings.accent_color,
        bold=True,
        center=True,
    )
    _add_text(
        slide,
        settings.brand,
        settings=settings,
        top=4.0,
        height=0.5,
        size=settings.cover_brand_size,
        color=settings.muted_color,
        center=True,
    )
    _add_text(
        slide,
        f"Created: {created.date().isoformat()}",
        settings=settings,
        top=5.0,
        height=0.5,
        size=settings.cover_date_size,
        color=settings.faint_color,
        center=True,
    )


def _prompt_slide(deck, *, prompt: str, settings: SlideSettings) -> None:
    slide = _blank_slide(deck, settings=settings)
    _add_text(
        slide,
        DEFAULT_SECTION_TITLE,
        settings=settings,
        top=0.5,
        height=0.8,
        size=settings.section_title_size,
        color=settings.accent_color,
        bold=True,
    )
    _add_text(
        slide,
        "Original Prompt:",
        settings=settings,
        top=1.5,
        height=0.5,
        size=settings.body_size,
        bold=True,
    )
    _add_text(
        slide,
        prompt,
        settings=settings,
        top=2.0,
        height=1.0,
        size=settings.body_size,
        color=settings.muted_color,
        italic=True,
    )


def _content_slide(deck, *, spec: SlideSpec, settings: SlideSettings) -> None:
    slide = _blank_slide(deck, settings=settings)
    clean = clean_text if settings.strip_inline_markup else (lambda value: value)
    _add_text(
        slide,
        clean(spec.title),
        settings=settings,
        top=0.5,
        height=0.8,
        size=settings.slide_title_size,
        color=settings.accent_color,
        bold=True,
    )
    if spec.text:
        _add_text(
            slide,
            "\n".join(clean(line) for line in spec.text.split("\n")),
            settings=settings,
            top=1.5,
            height=4.5,
            size=settings.body_size,
            color=settings.body_color,
        )
    if spec.bullets:
        _add_text(
            slide,
            "\n".join(f"• {clean(point)}" for point in spec.bullets),
            settings=settings,
            top=3.5 if spec.text else 1.5,
            height=4.5,
            size=settings.body_size,
            color=settings.body_color,
        )


def _closing_slide(deck, *, settings: SlideSettings) -> None:
    slide = _blank_slide(deck, settings=settings, shaded=True)
    _add_text(
        slide,
        "Thank You!",
        settings=settings,
        top=2.0,
        height=1.5,
        size=settings.cover_title_size,
        color=settings.accent_color,
        bold=True,
        center=True,
    )
    _add_text(
        slide,
        settings.brand,
        settings=settings,
        top=4.0,
        height=0.5,
        size=settings.cover_brand_size,
        color=settings.muted_color,
        center=True,
    )


def render_pptx(
    *,
    title: str,
    markdown: str,
    prompt: str | None = None,
    created: datetime | None = None,
    settings: SlideSettings | None = None,
) -> bytes:
    """Render a report into a ``.pptx`` deck.

    The deck holds a cover slide, an optional slide quoting the original
    prompt, one slide per planned content block, and a closing slide.

    Args:
        title: Deck title.
        markdown: Report body.
        prompt: Optional prompt that produced the report.
        created: Creation timestamp shown on the cover; defaults to now.
        settings: Optional ``SlideSettings`` override.
    Returns:
        The presentation file contents.
    Raises:
        RenderingBackendError: If python-pptx fails to build the deck.
    """

    resolved = settings or SlideSettings()
    specs = plan_slides(markdown, title)
    try:
        deck = Presentation()
        deck.slide_width = Inches(resolved.slide_width)
        deck.slide_height = Inches(resolved.slide_height)
        deck.core_properties.title = title
        deck.core_properties.subject = title
        deck.core_properties.author = resolved.author
        _cover_slide(deck, title=title, created=created or datetime.now(), settings=resolved)
        if prompt:
            _prompt_slide(deck, prompt=prompt, settings=resolved)
        for spec in specs:
            _content_slide(deck, spec=spec, settings=resolved)
        _closing_slide(deck, settings=resolved)
        buffer = io.BytesIO()
        deck.save(buffer)
    except Exception as exc:
        raise RenderingBackendError(f"PowerPoint rendering failed: {exc}") from exc
    logger.info("Built %r deck with %d content slide(s)", title, len(specs))
    return buffer.getvalue()
