"""
Split LLM-generated markdown into titled sections.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List

from .models import DEFAULT_SECTION_TITLE, Document, Section

logger = logging.getLogger(__name__)

TITLE_MARKER = "# "
SECTION_MARKER = "## "
UNTITLED = "Untitled Report"


def extract_title(markdown: str) -> str | None:
    """Return the text of the first level-1 heading, if any.

    Example:
        >>> extract_title('intro\\n# My Report\\n## A')
        'My Report'
        >>> extract_title('## Only sections') is None
        True
    """

    for line in markdown.split("\n"):
        if line.startswith(TITLE_MARKER):
            return line[len(TITLE_MARKER):].strip() or None
    return None


def markdown_to_sections(markdown: str) -> List[Section]:
    """Split markdown into sections delimited by ``## `` headings.

    Level-1 heading lines are consumed as the document title and never land
    in a section. Content before the first level-2 heading belongs to an
    implicit "Introduction" section. Sections without any lines are dropped.

    Args:
        markdown: Source text with ``\\n`` line breaks.
    Returns:
        Sections in source order.

    Example:
        >>> [(s.title, s.content) for s in markdown_to_sections('# T\\n## A\\none\\n## B\\n## C\\ntwo')]
        [('A', ['one']), ('C', ['two'])]
    """

    sections: List[Section] = []
    current = Section(title=DEFAULT_SECTION_TITLE)
    saw_heading = False
    for line in markdown.split("\n"):
        if line.startswith(TITLE_MARKER):
            continue
        if line.startswith(SECTION_MARKER):
            if current.content:
                sections.append(current)
            else:
                logger.debug("Dropping empty section %r", current.title)
            saw_heading = True
            current = Section(title=line[len(SECTION_MARKER):].strip())
            continue
        current.content.append(line)
    if current.content:
        sections.append(current)
    if saw_heading:
        return sections
    if not any(line.strip() for section in sections for line in section.content):
        logger.warning("Markdown body is empty after title extraction")
        return []
    return sections


def build_document(
    markdown: str,
    *,
    title: str | None = None,
    generated_at: datetime | None = None,
    category: str | None = None,
    description: str | None = None,
    tags: List[str] | None = None,
) -> Document:
    """Sectionize ``markdown`` and wrap it in a Document.

    When ``title`` is omitted the first level-1 heading is used, falling
    back to ``"Untitled Report"``.

    Example:
        >>> doc = build_document('# Notes\\n## A\\nbody')
        >>> doc.title, [s.title for s in doc.sections]
        ('Notes', ['A'])
    """

    return Document(
        title=title or extract_title(markdown) or UNTITLED,
        generated_at=generated_at or datetime.now(),
        sections=tuple(markdown_to_sections(markdown)),
        category=category,
        description=description,
        tags=tuple(tags or ()),
    )
