"""PDF export: pagination and ReportLab rendering."""

from .builder import layout_document, render_pages, render_pdf
from .pdf_settings import PageSettings, register_ttf_font

__all__ = [
    "PageSettings",
    "layout_document",
    "register_ttf_font",
    "render_pages",
    "render_pdf",
]
