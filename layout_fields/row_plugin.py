"""
Layout fields row renderer.

Displays the fields of a listing row in the regions of a layout rather
than as a flat list. Built by composition from:

- ``RowLayoutOptions``: selected layout, default region, assignments.
- ``LayoutRegistry``: layout definitions and instances.
- Field definitions: the row's fields in display order.
- A ``RegionRenderer``: renders one region's fields.

``render(row)`` resolves the region map once per renderer instance, renders
every region inside a narrowed ``RenderContext`` and hands the non-empty
results to the selected layout.

``settings_form()`` describes the configuration UI for the options.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

from layout_fields.composer import LayoutBuild, compose_layout
from layout_fields.config import FieldDefinition, RowLayoutOptions
from layout_fields.exceptions import UnknownLayoutError
from layout_fields.layout_registry import LayoutDefinition, LayoutRegistry
from layout_fields.region_map import RegionMap, find_invalid_assignments
from layout_fields.rendering import (
    FieldListRenderer,
    RegionRenderer,
    RenderContext,
    render_regions,
)

logger = logging.getLogger(__name__)

DEFAULT_REGION_EMPTY_OPTION = "Default region"


# ---------------------------------------------------------------------------
# Settings form description
# ---------------------------------------------------------------------------

class SelectElement(BaseModel):
    """A select list in the settings form."""

    title: str
    options: dict[str, Any] = Field(default_factory=dict)
    default_value: str = ""
    description: str = ""
    empty_option: str | None = None


class SettingsForm(BaseModel):
    """Configuration UI for a layout fields row renderer.

    ``layout`` and ``default_region`` are ``None`` when no layout is
    available at all.
    """

    layout: SelectElement | None = None
    default_region: SelectElement | None = None
    assigned_regions: dict[str, SelectElement] = Field(default_factory=dict)
    assigned_regions_description: str = (
        "You can use the dropdown menus above to select a region for each "
        "field to be rendered in."
    )
    stale_assignments: dict[str, str] = Field(
        default_factory=dict,
        description="Assignments to regions the shown layout does not have",
    )

    @property
    def is_empty(self) -> bool:
        return self.layout is None


# ---------------------------------------------------------------------------
# Row renderer
# ---------------------------------------------------------------------------

class LayoutFieldsRow:
    """Renders listing rows into the regions of a layout.

    Attributes:
        options: The row's layout options.
        registry: Source of layout definitions.
        fields: Field definitions keyed by name, in display order.
        renderer: Renders the fields of one region.
    """

    def __init__(
        self,
        options: RowLayoutOptions,
        registry: LayoutRegistry,
        fields: Mapping[str, FieldDefinition],
        renderer: RegionRenderer | None = None,
    ) -> None:
        self.options = options
        self.registry = registry
        self.fields = dict(fields)
        self.renderer = renderer or FieldListRenderer()
        self.context = RenderContext(self.fields)
        self._region_map: RegionMap | None = None

    def __repr__(self) -> str:
        return (
            f"LayoutFieldsRow(layout={self.options.layout!r}, "
            f"default_region={self.options.default_region!r}, "
            f"fields={list(self.fields)})"
        )

    # -- Layout -------------------------------------------------------------

    @property
    def layout_definition(self) -> LayoutDefinition:
        """Definition of the selected layout.

        Raises:
            UnknownLayoutError: If the selected layout does not exist.
        """
        return self.registry.get_definition(self.options.layout)

    @property
    def region_map(self) -> RegionMap:
        if self._region_map is None:
            self._region_map = RegionMap(
                self.context.fields, self.options, self.layout_definition
            )
        return self._region_map

    def reset(self) -> None:
        """Forget the cached region map, e.g. after editing ``options``."""
        self._region_map = None

    # -- Rendering ----------------------------------------------------------

    def render(self, row: Any) -> LayoutBuild:
        """Render one row into the selected layout.

        Returns:
            The layout build, or an empty build if no region had content.

        Raises:
            UnknownLayoutError: If the selected layout does not exist
                and the renderer has fields.
        """
        if not self.fields:
            return LayoutBuild.empty()
        rendered = render_regions(row, self.region_map.map, self.renderer, self.context)
        return compose_layout(self.registry, self.options.layout, rendered)

    # -- Settings form ------------------------------------------------------

    def _form_layout_definition(self) -> LayoutDefinition | None:
        try:
            return self.layout_definition
        except UnknownLayoutError as e:
            fallback = self.registry.first_definition()
            logger.info(
                "Settings form: %s; showing layout '%s' instead",
                e, fallback.id if fallback else None,
            )
            return fallback

    def settings_form(self, field_labels: Mapping[str, str] | None = None) -> SettingsForm:
        """Describe the settings form for this row renderer.

        An unknown selected layout is replaced by the first available
        layout so the form can still be shown.

        Args:
            field_labels: Field name -> label, in display order. Defaults
                to the labels of the configured fields.
        """
        definition = self._form_layout_definition()
        if definition is None:
            return SettingsForm()

        if field_labels is None:
            field_labels = {name: f.display_label for name, f in self.fields.items()}

        form = SettingsForm(
            layout=SelectElement(
                title="Panel layout",
                options=self.registry.get_layout_options(group_by_category=True),
                default_value=definition.id,
            ),
            default_region=SelectElement(
                title="Default region",
                description="Defines the region in which the fields will be rendered by default.",
                options=dict(definition.region_names),
                default_value=self.options.default_region,
            ),
            stale_assignments=find_invalid_assignments(
                self.options.assigned_regions, definition.regions
            ),
        )
        for field_name, label in field_labels.items():
            form.assigned_regions[field_name] = SelectElement(
                title=label,
                options=dict(definition.region_names),
                default_value=self.options.get_assigned_region(field_name),
                empty_option=DEFAULT_REGION_EMPTY_OPTION,
            )
        return form
