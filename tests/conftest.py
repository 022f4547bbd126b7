"""Shared fixtures for the oxmlmaker test suite."""

from __future__ import annotations

import copy
from pathlib import Path

import pytest

FIXTURE_DIR = Path(__file__).parent / "fixtures"

PAGE_SIZE = {"width": 12240, "height": 15840}
PAGE_MARGIN = {
    "top": 1440, "right": 1440, "bottom": 1440, "left": 1440,
    "header": 720, "footer": 720, "gutter": 0,
}


@pytest.fixture
def sample_json() -> Path:
    return FIXTURE_DIR / "sample.json"


@pytest.fixture
def params() -> dict:
    """A document with one paragraph and one two-column table."""
    return {
        "sections": [
            {"paragraph": {"text": "Hello, World!"}},
            {
                "table": {
                    "columns": [
                        {"name": "Name", "width": 2000},
                        {"name": "Age", "width": 1500},
                    ],
                    "rows": [
                        {"cells": [
                            {"value": "name", "width": 2000},
                            {"value": "age", "width": 1500},
                        ]}
                    ],
                    "data": {
                        0: [
                            {"name": "John", "age": 30},
                            {"name": "Jane", "age": 25},
                        ]
                    },
                    "font_size": 22,
                }
            },
        ],
        "page_size": copy.deepcopy(PAGE_SIZE),
        "page_margin": copy.deepcopy(PAGE_MARGIN),
    }
