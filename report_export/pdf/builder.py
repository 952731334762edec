"""PDF generation for exported reports."""

from __future__ import annotations

import io
import logging
from typing import List, Sequence

from reportlab.pdfgen import canvas

from ..errors import RenderingBackendError
from ..models import Document, PageLayout
from .pdf_pagination import paginate
from .pdf_settings import PageSettings
from .pdf_text import make_text_wrapper

__all__ = [
    "PageSettings",
    "layout_document",
    "render_pdf",
    "render_pages",
]

logger = logging.getLogger(__name__)

PDF_CREATOR = "report-export"


def layout_document(*, document: Document, settings: PageSettings | None = None) -> List[PageLayout]:
    """Paginate a document using ReportLab metrics for the body font.

    Args:
        document: Document to lay out.
        settings: Optional ``PageSettings`` override.
    Returns:
        Page layouts with footers stamped.
    Raises:
        RenderingBackendError: If the body font cannot be measured.
    """

    resolved = settings or PageSettings()
    wrap_text = make_text_wrapper(
        resolved.font_name, resolved.body_font_size, unit=resolved.unit
    )
    return paginate(document=document, settings=resolved, wrap_text=wrap_text)


def render_pages(
    *,
    pages: Sequence[PageLayout],
    settings: PageSettings,
    title: str | None = None,
) -> bytes:
    """Flatten page layouts into PDF bytes.

    Layout coordinates grow downward from the top edge; ReportLab's grow
    upward from the bottom, so every y is flipped against the page height.

    Args:
        pages: Page layouts in order.
        settings: Page settings used for the layout.
        title: Optional PDF metadata title.
    Returns:
        The PDF file contents.
    Raises:
        RenderingBackendError: If ReportLab fails to draw any run.
    """

    unit = settings.unit
    buffer = io.BytesIO()
    pdf = canvas.Canvas(
        buffer,
        pagesize=(settings.page_width * unit, settings.page_height * unit),
    )
    pdf.setCreator(PDF_CREATOR)
    if title:
        pdf.setTitle(title)
    try:
        for page in pages:
            for item in page.instructions:
                font_name, font_size = settings.font_for(item.style)
                pdf.setFont(font_name, font_size)
                pdf.setFillColor(settings.color_for(item.style))
                pdf.drawString(
                    item.x * unit,
                    (settings.page_height - item.y) * unit,
                    item.text,
                )
            pdf.showPage()
        pdf.save()
    except Exception as exc:
        raise RenderingBackendError(f"PDF rendering failed: {exc}") from exc
    return buffer.getvalue()


def render_pdf(*, document: Document, settings: PageSettings | None = None) -> bytes:
    """Render a document to PDF bytes.

    Example:
        >>> from report_export.markdown import build_document
        >>> data = render_pdf(document=build_document('# T\\n## A\\nbody'))
        >>> data[:5]
        b'%PDF-'
    """

    resolved = settings or PageSettings()
    pages = layout_document(document=document, settings=resolved)
    logger.info("Laid out %r on %d page(s)", document.title, len(pages))
    return render_pages(pages=pages, settings=resolved, title=document.title)

