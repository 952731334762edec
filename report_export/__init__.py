"""Export LLM-generated markdown reports as PDF documents or slide decks."""

from .errors import DownloadDeliveryError, ExportError, RenderingBackendError
from .markdown import build_document, extract_title, markdown_to_sections
from .models import Document, DrawInstruction, PageLayout, Section

__all__ = [
    "Document",
    "DownloadDeliveryError",
    "DrawInstruction",
    "ExportError",
    "PageLayout",
    "RenderingBackendError",
    "Section",
    "build_document",
    "extract_title",
    "markdown_to_sections",
]
