"""Word-wrap helpers backed by ReportLab font metrics."""

from __future__ import annotations

from typing import Callable, List

from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics

from ..errors import RenderingBackendError

TextWrapper = Callable[[str, float], List[str]]


def wrap_lines(text: str, max_width: float, measure: Callable[[str], float]) -> List[str]:
    """Greedily wrap ``text`` so each line measures at most ``max_width``.

    Explicit line breaks are kept and blank lines come back as empty
    strings. Words are never split; a word wider than ``max_width`` gets a
    line of its own.

    Example:
        >>> wrap_lines("aa bb cc\\n\\ndddddd", 5, len)
        ['aa bb', 'cc', '', 'dddddd']
    """

    lines: List[str] = []
    for raw in text.split("\n"):
        words = raw.split()
        if not words:
            lines.append("")
            continue
        current = words[0]
        for word in words[1:]:
            candidate = f"{current} {word}"
            if measure(candidate) <= max_width:
                current = candidate
            else:
                lines.append(current)
                current = word
        lines.append(current)
    return lines


def make_text_wrapper(font_name: str, font_size: float, unit: float = mm) -> TextWrapper:
    """Return a ``wrap_text(text, max_width)`` collaborator for a font.

    Args:
        font_name: Font registered with ReportLab (standard 14 or TTF).
        font_size: Size in points.
        unit: Points per layout unit; ``max_width`` is given in layout units.
    Returns:
        Callable producing wrapped lines.
    Raises:
        RenderingBackendError: If the font is unknown to ReportLab.

    Example:
        >>> wrap = make_text_wrapper("Helvetica", 10)
        >>> wrap("short line", 170)
        ['short line']
    """

    try:
        pdfmetrics.getFont(font_name)
    except Exception as exc:
        raise RenderingBackendError(f"Unknown font {font_name!r}: {exc}") from exc

    def measure(value: str) -> float:
        return pdfmetrics.stringWidth(value, font_name, font_size)

    def wrap_text(text: str, max_width: float) -> List[str]:
        try:
            return wrap_lines(text, max_width * unit, measure)
        except Exception as exc:
            raise RenderingBackendError(
                f"Could not measure text with {font_name!r}: {exc}"
            ) from exc

    return wrap_text
