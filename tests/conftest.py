"""
Shared test fixtures and path constants for layout-fields tests.

Fixture file paths are defined here as module-level constants for
easy discovery and modification.
"""

from pathlib import Path

import pytest

from layout_fields.config import FieldDefinition, RowLayoutOptions
from layout_fields.layout_registry import LayoutDefinition, LayoutRegistry

# ---------------------------------------------------------------------------
# Fixture file paths
# ---------------------------------------------------------------------------
FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"

TEST_LAYOUTS_DIR = FIXTURES_DIR / "layouts"
LISTING_YAML = FIXTURES_DIR / "listing.yaml"
ROWS_CSV = FIXTURES_DIR / "rows.csv"


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (runs against fixture files)",
    )


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def sidebar_layout() -> LayoutDefinition:
    return LayoutDefinition(
        id="sidebar",
        label="Main with sidebar",
        category="Test",
        template="layout--sidebar",
        region_names={"main": "Main", "sidebar": "Sidebar"},
    )


@pytest.fixture
def stacked_layout() -> LayoutDefinition:
    return LayoutDefinition(
        id="stacked",
        label="Stacked",
        category="Other",
        region_names={"header": "Header", "main": "Main"},
    )


@pytest.fixture
def registry(sidebar_layout, stacked_layout) -> LayoutRegistry:
    return LayoutRegistry([sidebar_layout, stacked_layout])


@pytest.fixture
def fields() -> dict[str, FieldDefinition]:
    return {
        "title": FieldDefinition(name="title", label="Title"),
        "body": FieldDefinition(name="body", label="Body"),
        "author": FieldDefinition(name="author", label="Author"),
    }


@pytest.fixture
def options() -> RowLayoutOptions:
    return RowLayoutOptions(
        layout="sidebar",
        default_region="main",
        assigned_regions={"author": "sidebar"},
    )
