"""
layout-fields: render listing rows into the regions of a layout.

Public API surface:

- ``open_row_renderer(options_path, ...)`` -- **recommended entry point**.
  Loads a row options YAML file (selected layout, default region,
  per-field region assignments and, optionally, field definitions) and
  returns a ``LayoutFieldsRow``.

- ``render_listing(rows, row_renderer)`` -- renders every row of a
  ``pandas.DataFrame`` and returns one ``LayoutBuild`` per row.

- ``resolve_regions(...)`` -- the pure field -> region bucketing used by
  the row renderer.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

import pandas as pd

from layout_fields.composer import LayoutBuild
from layout_fields.config import (
    FieldDefinition,
    RowLayoutOptions,
    load_field_definitions,
    load_options,
)
from layout_fields.layout_registry import LayoutRegistry
from layout_fields.region_map import resolve_regions
from layout_fields.rendering import RegionRenderer
from layout_fields.row_plugin import LayoutFieldsRow

__all__ = [
    "open_row_renderer",
    "render_listing",
    "resolve_regions",
    "LayoutBuild",
    "LayoutFieldsRow",
    "RowLayoutOptions",
]

logger = logging.getLogger(__name__)


def open_row_renderer(
    options_path: str | Path,
    fields: Mapping[str, FieldDefinition] | None = None,
    layouts_dir: str | Path | None = None,
    renderer: RegionRenderer | None = None,
) -> LayoutFieldsRow:
    """Build a row renderer from an options YAML file.

    Args:
        options_path: Path to the row options YAML.
        fields: Field definitions in display order. If ``None``, they are
            read from the ``fields`` block of the options file.
        layouts_dir: Directory of layout YAML files. Defaults to the
            bundled layouts.
        renderer: Region renderer. Defaults to ``FieldListRenderer``.

    Returns:
        A ``LayoutFieldsRow``.

    Raises:
        FileNotFoundError: If *options_path* does not exist.
        OptionsValidationError: If the options file is empty or malformed.

    Examples::

        row_renderer = layout_fields.open_row_renderer("listing.yaml")
        builds = layout_fields.render_listing(df, row_renderer)
    """
    logger.info("open_row_renderer() -- options_path=%s", options_path)
    options = load_options(options_path)
    if fields is None:
        fields = load_field_definitions(options_path)

    registry = LayoutRegistry.from_directory(Path(layouts_dir) if layouts_dir else None)
    return LayoutFieldsRow(options, registry, fields, renderer=renderer)


def render_listing(rows: pd.DataFrame, row_renderer: LayoutFieldsRow) -> list[LayoutBuild]:
    """Render each row of *rows* with *row_renderer*.

    The region map is resolved once and reused for every row.

    Raises:
        UnknownLayoutError: If the selected layout does not exist.
    """
    logger.info(
        "render_listing() -- %d row(s), layout=%r",
        len(rows), row_renderer.options.layout,
    )
    # Row dicts keep each column's own dtype
    builds = [row_renderer.render(row) for row in rows.to_dict("records")]
    logger.info(
        "Rendered %d row(s), %d empty",
        len(builds), sum(1 for b in builds if not b),
    )
    return builds
