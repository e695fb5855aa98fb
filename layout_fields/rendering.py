"""
Region rendering for layout-fields.

Renders the fields placed in each region of a row into a content fragment.

The renderer only sees the fields of the region it is rendering: the
shared ``RenderContext`` is narrowed to that region's fields for the
duration of the call and restored afterwards, whether rendering produced
content, produced nothing, or raised.

A renderer reports "no content" by returning ``None`` (or a blank string).
Renderers may also raise ``EmptyRenderResult``; both cases omit the region.
"""

from __future__ import annotations

import html
import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any, Protocol

import pandas as pd

from layout_fields.config import FieldDefinition
from layout_fields.exceptions import EmptyRenderResult

logger = logging.getLogger(__name__)


class RenderContext:
    """Field set shared by every region rendered for one row.

    Attributes:
        fields: The currently visible field definitions, keyed by name.
    """

    def __init__(self, fields: Mapping[str, FieldDefinition]) -> None:
        self.fields: dict[str, FieldDefinition] = dict(fields)

    @contextmanager
    def narrowed(self, field_names: list[str]) -> Iterator[dict[str, FieldDefinition]]:
        """Temporarily restrict the visible fields to *field_names*.

        Names unknown to the context are ignored. The original field set is
        restored on exit, including when the body raises.
        """
        original = self.fields
        self.fields = {name: original[name] for name in field_names if name in original}
        try:
            yield self.fields
        finally:
            self.fields = original


class RegionRenderer(Protocol):
    """Renders the fields visible in a ``RenderContext`` for one row."""

    def render(self, row: Any, context: RenderContext) -> str | None:
        ...


def _is_empty_value(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        # pd.isna on list-likes returns an array
        return False


def _row_value(row: Any, column: str) -> Any:
    if isinstance(row, pd.Series):
        return row.get(column)
    if isinstance(row, Mapping):
        return row.get(column)
    return getattr(row, column, None)


class FieldListRenderer:
    """Default region renderer: one ``<div>`` per field with a value.

    Values are HTML-escaped. Excluded fields are never printed. A field with
    an empty value prints its ``empty_text`` if it has one, otherwise
    nothing.

    Args:
        show_labels: Prefix each value with the field's label.
        separator: Joins the field fragments.
    """

    def __init__(self, show_labels: bool = False, separator: str = "\n") -> None:
        self.show_labels = show_labels
        self.separator = separator

    def render(self, row: Any, context: RenderContext) -> str | None:
        parts: list[str] = []
        for name, definition in context.fields.items():
            if definition.exclude:
                continue
            fragment = self.render_field(row, definition)
            if fragment:
                parts.append(fragment)
        if not parts:
            return None
        return self.separator.join(parts)

    def render_field(self, row: Any, definition: FieldDefinition) -> str:
        value = _row_value(row, definition.source_column)
        if _is_empty_value(value):
            if not definition.empty_text:
                return ""
            text = html.escape(definition.empty_text)
        else:
            text = html.escape(str(value))

        css_name = definition.name.replace("_", "-")
        if self.show_labels:
            text = (
                f'<span class="field__label">{html.escape(definition.display_label)}</span> '
                f"{text}"
            )
        return f'<div class="field field--name-{css_name}">{text}</div>'


def render_region(
    row: Any,
    field_names: list[str],
    renderer: RegionRenderer,
    context: RenderContext,
) -> str | None:
    """Render one region's fields; ``None`` when nothing visible came out."""
    with context.narrowed(field_names):
        try:
            content = renderer.render(row, context)
        except EmptyRenderResult:
            content = None
    if content is None or not str(content).strip():
        return None
    return content


def render_regions(
    row: Any,
    region_map: Mapping[str, list[str]],
    renderer: RegionRenderer,
    context: RenderContext,
) -> dict[str, str]:
    """Render each non-empty region of *region_map*.

    Regions that render no content are omitted from the result.

    Returns:
        Dict mapping region name -> rendered content, in region map order.
    """
    rendered: dict[str, str] = {}
    for region_name, field_names in region_map.items():
        if not field_names:
            continue
        content = render_region(row, field_names, renderer, context)
        if content is None:
            logger.debug("Region '%s' rendered no content; omitted", region_name)
            continue
        rendered[region_name] = content
    return rendered
