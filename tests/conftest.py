"""Shared fixtures for report export tests."""

from __future__ import annotations

from datetime import datetime
from typing import List

import pytest

from report_export.pdf.pdf_settings import PageSettings
from report_export.pdf.pdf_text import wrap_lines


def char_wrap(text: str, max_width: float) -> List[str]:
    """Wrap treating every character as one layout unit wide."""

    return wrap_lines(text, max_width, len)


@pytest.fixture
def wrap_text():
    return char_wrap


@pytest.fixture
def settings() -> PageSettings:
    return PageSettings()


@pytest.fixture
def unit_settings() -> PageSettings:
    """Settings with one-unit lines so extents are whole numbers."""

    return PageSettings(line_height=1.0)


@pytest.fixture
def generated_at() -> datetime:
    return datetime(2024, 1, 2, 9, 30)
