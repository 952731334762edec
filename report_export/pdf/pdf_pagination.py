"""Cursor-based pagination of report sections into page layouts."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence

from ..cleaning import clean_text
from ..models import Document, PageLayout, Section
from .pdf_constants import DEBUG_PAGINATION, EPSILON, FOOTER_TEMPLATE
from .pdf_settings import PageSettings
from .pdf_text import TextWrapper

logger = logging.getLogger(__name__)

META_OFFSET = 10.0
DESCRIPTION_LABEL_OFFSET = 20.0
DESCRIPTION_OFFSET = 28.0


@dataclass(slots=True)
class _Cursor:
    """Vertical write position on the page currently being laid out."""

    pages: List[PageLayout]
    y: float

    @property
    def page(self) -> PageLayout:
        return self.pages[-1]

    def new_page(self, *, top: float) -> None:
        self.pages.append(PageLayout(number=len(self.pages) + 1))
        self.y = top


def _debug(*, msg: str) -> None:
    """Log pagination debug output, echoing it when enabled.

    Args:
        msg: Message to emit.
    Returns:
        None.
    """

    logger.debug(msg)
    if DEBUG_PAGINATION:
        print(msg)


def paginate(
    *,
    document: Document,
    settings: PageSettings,
    wrap_text: TextWrapper,
) -> List[PageLayout]:
    """Lay out a document into fixed-size pages of draw instructions.

    The first page carries the title and generation header. Each section
    starts on a fresh page when the cursor is already past the heading
    limit, and its wrapped body moves to a fresh page when the whole body
    would run past the content bottom. Bodies are never split, so a section
    taller than a page overflows it. Footers are stamped once the total page
    count is known.

    Args:
        document: Document to lay out.
        settings: Page geometry and fonts.
        wrap_text: Collaborator returning wrapped lines for a width.
    Returns:
        Pages in order, numbered from 1.
    Raises:
        Whatever ``wrap_text`` raises, unchanged.
    """

    cursor = _Cursor(pages=[PageLayout(number=1)], y=0.0)
    header_bottom = _draw_header(
        page=cursor.page, document=document, settings=settings, wrap_text=wrap_text
    )
    cursor.y = max(settings.top_margin + settings.header_offset, header_bottom)
    for section in document.sections:
        _draw_section(cursor=cursor, section=section, settings=settings, wrap_text=wrap_text)
    if document.tags:
        _draw_tags(cursor=cursor, tags=document.tags, settings=settings)
    stamp_footers(pages=cursor.pages, settings=settings)
    return cursor.pages


def _draw_header(
    *,
    page: PageLayout,
    document: Document,
    settings: PageSettings,
    wrap_text: TextWrapper,
) -> float:
    """Emit the title block at the top of the first page.

    Returns:
        The y coordinate below the last header line plus the section gap.
        A long description pushes this past the reserved header offset.
    """

    top = settings.top_margin
    x = settings.left_margin
    page.add(document.title, x, top, "title")
    date_label = f"Generated on: {document.generated_at.date().isoformat()}"
    meta = (
        f"Category: {document.category} | {date_label}"
        if document.category
        else date_label
    )
    page.add(meta, x, top + META_OFFSET, "meta")
    last_y = top + META_OFFSET
    if document.description:
        page.add("Description:", x, top + DESCRIPTION_LABEL_OFFSET, "label")
        last_y = top + DESCRIPTION_LABEL_OFFSET
        lines = wrap_text(document.description, settings.content_width)
        for index, line in enumerate(lines):
            last_y = top + DESCRIPTION_OFFSET + index * settings.line_height
            page.add(line, x, last_y, "description")
    return last_y + settings.line_height + settings.section_gap




def _section_text(*, section: Section, settings: PageSettings) -> tuple[str, str]:
    """Return ``(heading, body)`` text for a section as it will be drawn."""

    if not settings.strip_inline_markup:
        return section.title, section.text()
    body = "\n".join(clean_text(line) for line in section.content)
    return clean_text(section.title), body


def _draw_section(
    *,
    cursor: _Cursor,
    section: Section,
    settings: PageSettings,
    wrap_text: TextWrapper,
) -> None:
    """Emit one section heading and its wrapped body, breaking pages first."""

    if cursor.y > settings.heading_limit:
        _debug(msg=f"section {section.title!r}: cursor {cursor.y:.2f} past heading limit")
        cursor.new_page(top=settings.top_margin)
    heading, body = _section_text(section=section, settings=settings)
    cursor.page.add(heading, settings.left_margin, cursor.y, "heading")
    cursor.y += settings.heading_height

    lines = wrap_text(body, settings.content_width)
    extent = len(lines) * settings.line_height
    if cursor.y + extent > settings.content_bottom + EPSILON:
        _debug(
            msg=(
                f"section {section.title!r}: {extent:.2f} from {cursor.y:.2f} "
                f"overflows {settings.content_bottom:.2f}"
            )
        )
        cursor.new_page(top=settings.top_margin)
        if extent > settings.content_bottom - settings.top_margin + EPSILON:
            logger.warning(
                "Section %r is taller than a page and will overflow page %d",
                section.title,
                cursor.page.number,
            )
    for index, line in enumerate(lines):
        cursor.page.add(
            line, settings.left_margin, cursor.y + index * settings.line_height, "body"
        )
    cursor.y += extent + settings.section_gap


def _draw_tags(*, cursor: _Cursor, tags: Sequence[str], settings: PageSettings) -> None:
    """Emit the trailing tag list."""

    if cursor.y > settings.heading_limit:
        cursor.new_page(top=settings.top_margin)
    cursor.page.add("Tags:", settings.left_margin, cursor.y, "tags-label")
    cursor.y += settings.tags_label_height
    cursor.page.add(", ".join(tags), settings.left_margin, cursor.y, "tags")
    cursor.y += settings.line_height


def footer_text(*, page: int, total: int, brand: str | None = None) -> str:
    """Return the footer label for a page.

    Example:
        >>> footer_text(page=2, total=5)
        'Page 2 of 5'
        >>> footer_text(page=1, total=1, brand='Generated by Taskify AI')
        'Page 1 of 1 | Generated by Taskify AI'
    """

    label = FOOTER_TEMPLATE.format(page=page, total=total)
    return f"{label} | {brand}" if brand else label


def stamp_footers(*, pages: Sequence[PageLayout], settings: PageSettings) -> None:
    """Add ``Page i of N`` footers once pagination is complete."""

    total = len(pages)
    for page in pages:
        page.add(
            footer_text(page=page.number, total=total, brand=settings.footer_brand),
            settings.left_margin,
            settings.footer_y,
            "footer",
        )
