"""Shared pytest fixtures for loading run report fixtures."""

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture()
def tickler_text() -> str:
    return (FIXTURES_DIR / "tickler_a20.txt").read_text(encoding="utf-8")


@pytest.fixture()
def mayberry_text() -> str:
    return (FIXTURES_DIR / "mayberry_seeded.txt").read_text(encoding="utf-8")


@pytest.fixture()
def run_page_html() -> str:
    return (FIXTURES_DIR / "run_page.html").read_text(encoding="utf-8")


@pytest.fixture()
def fixtures_dir() -> Path:
    return FIXTURES_DIR
