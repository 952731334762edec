import re

import pytest

from report_export.models import Document, Section
from report_export.pdf.pdf_pagination import footer_text, paginate

FOOTER_RE = re.compile(r"^Page (\d+) of (\d+)$")


def _document(sections, generated_at, **kwargs):
    return Document(
        title="Quarterly Review",
        generated_at=generated_at,
        sections=tuple(sections),
        **kwargs,
    )


def _lines(count, text="x"):
    return Section(title=f"{count} lines", content=[text] * count)


def _find(page, text):
    return [item for item in page.instructions if item.text == text]


def test_first_page_carries_header_and_first_section(settings, wrap_text, generated_at):
    document = _document([Section("Summary", ["All good."])], generated_at)
    pages = paginate(document=document, settings=settings, wrap_text=wrap_text)

    assert len(pages) == 1
    page = pages[0]
    assert page.texts("title") == ["Quarterly Review"]
    assert page.texts("meta") == ["Generated on: 2024-01-02"]
    heading = _find(page, "Summary")[0]
    body = _find(page, "All good.")[0]
    assert (heading.y, body.y) == (65.0, 73.0)
    assert heading.x == body.x == settings.left_margin
    assert page.texts("footer") == ["Page 1 of 1"]


def test_category_and_description_fill_the_header(settings, wrap_text, generated_at):
    document = _document(
        [],
        generated_at,
        category="Finance",
        description="word " * 60,
    )
    page = paginate(document=document, settings=settings, wrap_text=wrap_text)[0]

    assert page.texts("meta") == ["Category: Finance | Generated on: 2024-01-02"]
    assert page.texts("label") == ["Description:"]
    description = [item for item in page.instructions if item.style == "description"]
    assert len(description) == 2
    assert [item.y for item in description] == [48.0, 53.0]


def test_long_description_pushes_the_first_section_down(settings, wrap_text, generated_at):
    document = _document(
        [Section("Summary", ["All good."])],
        generated_at,
        description="word " * 300,
    )
    page = paginate(document=document, settings=settings, wrap_text=wrap_text)[0]

    description = [item for item in page.instructions if item.style == "description"]
    # 34 words per 170 unit line, so 9 lines from 48 to 88
    assert len(description) == 9
    assert description[-1].y == 88.0
    heading = _find(page, "Summary")[0]
    assert heading.y == 88.0 + settings.line_height + settings.section_gap
    assert _find(page, "All good.")[0].y == heading.y + settings.heading_height


def test_short_description_keeps_the_reserved_header(settings, wrap_text, generated_at):
    document = _document(
        [Section("Summary", ["All good."])], generated_at, description="brief"
    )
    page = paginate(document=document, settings=settings, wrap_text=wrap_text)[0]
    assert _find(page, "brief")[0].y == 48.0
    assert _find(page, "Summary")[0].y == 65.0


def test_empty_document_is_a_single_header_page(settings, wrap_text, generated_at):
    pages = paginate(
        document=_document([], generated_at), settings=settings, wrap_text=wrap_text
    )
    assert len(pages) == 1
    assert pages[0].texts("heading") == []
    assert pages[0].texts("footer") == ["Page 1 of 1"]


def test_body_that_exactly_fills_the_page_stays(unit_settings, wrap_text, generated_at):
    # heading at 65, body from 73; 207 one-unit lines end exactly at 280
    document = _document([_lines(207)], generated_at)
    pages = paginate(document=document, settings=unit_settings, wrap_text=wrap_text)
    assert len(pages) == 1
    assert pages[0].texts("body")[0] == "x"


def test_body_one_line_over_moves_to_next_page(unit_settings, wrap_text, generated_at):
    document = _document([_lines(208)], generated_at)
    pages = paginate(document=document, settings=unit_settings, wrap_text=wrap_text)

    assert len(pages) == 2
    assert pages[0].texts("heading") == ["208 lines"]
    assert pages[0].texts("body") == []
    first_body = [item for item in pages[1].instructions if item.style == "body"][0]
    assert first_body.y == unit_settings.top_margin


def test_heading_moves_once_cursor_passes_heading_limit(unit_settings, wrap_text, generated_at):
    # 73 + 188 + 10 leaves the cursor at 271, past the 270 limit
    document = _document([_lines(188), Section("Next", ["tail"])], generated_at)
    pages = paginate(document=document, settings=unit_settings, wrap_text=wrap_text)

    assert len(pages) == 2
    next_heading = _find(pages[1], "Next")[0]
    assert next_heading.y == unit_settings.top_margin
    assert _find(pages[1], "tail")[0].y == unit_settings.top_margin + unit_settings.heading_height


def test_heading_at_limit_stays_on_page(unit_settings, wrap_text, generated_at):
    document = _document([_lines(187), Section("Next", ["tail"])], generated_at)
    pages = paginate(document=document, settings=unit_settings, wrap_text=wrap_text)

    assert len(pages) == 1
    assert _find(pages[0], "Next")[0].y == 270.0
    assert _find(pages[0], "tail")[0].y == 278.0


def test_over_height_section_overflows_instead_of_failing(
    unit_settings, wrap_text, generated_at, caplog
):
    document = _document([_lines(400)], generated_at)
    pages = paginate(document=document, settings=unit_settings, wrap_text=wrap_text)

    assert len(pages) == 2
    assert len(pages[1].texts("body")) == 400
    assert pages[1].bottom() > unit_settings.content_bottom
    assert "taller than a page" in caplog.text


def test_footers_number_every_page(settings, wrap_text, generated_at):
    sections = [
        Section(f"Part {n}", ["sentence " * 40] * 12) for n in range(8)
    ]
    pages = paginate(
        document=_document(sections, generated_at), settings=settings, wrap_text=wrap_text
    )

    assert len(pages) > 2
    numbers = []
    for page in pages:
        (footer,) = page.texts("footer")
        match = FOOTER_RE.match(footer)
        assert match is not None
        numbers.append(int(match.group(1)))
        assert int(match.group(2)) == len(pages)
    assert numbers == list(range(1, len(pages) + 1))


def test_body_text_stays_above_content_bottom(settings, wrap_text, generated_at):
    sections = [Section(f"Part {n}", ["lorem ipsum " * 30] * 5) for n in range(10)]
    pages = paginate(
        document=_document(sections, generated_at), settings=settings, wrap_text=wrap_text
    )
    for page in pages:
        assert page.bottom() <= settings.content_bottom


def test_footer_brand_is_appended(settings, wrap_text, generated_at):
    settings.footer_brand = "Generated by Taskify AI"
    page = paginate(
        document=_document([], generated_at), settings=settings, wrap_text=wrap_text
    )[0]
    assert page.texts("footer") == ["Page 1 of 1 | Generated by Taskify AI"]


def test_tags_follow_the_last_section(settings, wrap_text, generated_at):
    document = _document([Section("Only", ["body"])], generated_at, tags=("ai", "pdf"))
    page = paginate(document=document, settings=settings, wrap_text=wrap_text)[0]

    label = _find(page, "Tags:")[0]
    tags = _find(page, "ai, pdf")[0]
    # body at 73, then a 10 unit gap after a single 5 unit line
    assert label.y == 88.0
    assert tags.y == 95.0


def test_inline_markup_is_stripped_unless_disabled(settings, wrap_text, generated_at):
    document = _document([Section("**Bold** heading", ["Use `pip` and **care**."])], generated_at)

    page = paginate(document=document, settings=settings, wrap_text=wrap_text)[0]
    assert page.texts("heading") == ["Bold heading"]
    assert page.texts("body") == ["Use pip and care."]

    settings.strip_inline_markup = False
    page = paginate(document=document, settings=settings, wrap_text=wrap_text)[0]
    assert page.texts("heading") == ["**Bold** heading"]
    assert page.texts("body") == ["Use `pip` and **care**."]


def test_wrap_failures_propagate_unchanged(settings, generated_at):
    class MeasureFailure(RuntimeError):
        pass

    def broken_wrap(text, max_width):
        raise MeasureFailure("no metrics")

    document = _document([Section("A", ["body"])], generated_at)
    with pytest.raises(MeasureFailure):
        paginate(document=document, settings=settings, wrap_text=broken_wrap)


def test_paginate_is_repeatable(settings, wrap_text, generated_at):
    sections = [Section(f"Part {n}", ["text " * 50] * 6) for n in range(5)]
    document = _document(sections, generated_at)
    first = paginate(document=document, settings=settings, wrap_text=wrap_text)
    second = paginate(document=document, settings=settings, wrap_text=wrap_text)
    assert first == second


def test_footer_text_format():
    assert footer_text(page=3, total=7) == "Page 3 of 7"
