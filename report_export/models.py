"""
Typed containers for exportable report content.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List


DEFAULT_SECTION_TITLE = "Introduction"


@dataclass(slots=True)
class Section:
    """A titled span of report body delimited by level-2 headings.

    Attributes:
        title: Heading text with the ``## `` marker stripped.
        content: Raw lines belonging to the section, in source order.
    """

    title: str = DEFAULT_SECTION_TITLE
    content: List[str] = field(default_factory=list)

    def text(self) -> str:
        """Return the section body joined with line breaks.

        Example:
            >>> Section('Intro', ['a', '', 'b']).text()
            'a\\n\\nb'
        """

        return "\n".join(self.content)


@dataclass(slots=True, frozen=True)
class Document:
    """Complete export target built fresh for every export request."""

    title: str
    generated_at: datetime
    sections: tuple[Section, ...]
    category: str | None = None
    description: str | None = None
    tags: tuple[str, ...] = ()


@dataclass(slots=True, frozen=True)
class DrawInstruction:
    """A text run positioned on a page.

    Coordinates are layout units measured from the top-left corner with y
    growing downward; the renderer converts them to its own space.
    """

    text: str
    x: float
    y: float
    style: str


@dataclass(slots=True)
class PageLayout:
    """Draw instructions collected for a single page."""

    number: int
    instructions: List[DrawInstruction] = field(default_factory=list)

    def add(self, text: str, x: float, y: float, style: str) -> DrawInstruction:
        """Append a text run and return it."""

        item = DrawInstruction(text=text, x=x, y=y, style=style)
        self.instructions.append(item)
        return item

    def texts(self, style: str | None = None) -> List[str]:
        """Return the text of every run, optionally filtered by style.

        Example:
            >>> page = PageLayout(1)
            >>> _ = page.add('Hello', 20, 20, 'title')
            >>> _ = page.add('body', 20, 30, 'body')
            >>> page.texts('title')
            ['Hello']
        """

        return [
            item.text
            for item in self.instructions
            if style is None or item.style == style
        ]

    def bottom(self) -> float:
        """Return the lowest y coordinate used on the page, ignoring footers."""

        ys = [item.y for item in self.instructions if item.style != "footer"]
        return max(ys) if ys else 0.0
