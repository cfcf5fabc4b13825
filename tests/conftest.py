"""Shared fixtures"""

import pytest

from jhf.font_source import reset_font_dir


@pytest.fixture(autouse=True)
def bundled_fonts():
    """Every test starts and ends with the bundled font directory configured"""
    reset_font_dir()
    yield
    reset_font_dir()
