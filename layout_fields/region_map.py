"""
Region assignment for layout-fields.

Buckets the fields of a listing row into the regions of the selected
layout. A field goes to its assigned region when that region exists in
the layout; otherwise (no assignment, or an assignment left over from a
previously selected layout) it goes to the default region.

The default region itself is not checked against the layout. A default
region the layout does not declare still receives the fallback fields;
the layout then drops them when it builds.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterable, Mapping

from layout_fields.config import RowLayoutOptions
from layout_fields.layout_registry import LayoutDefinition

logger = logging.getLogger(__name__)


def resolve_regions(
    fields: Iterable[str],
    assignments: Mapping[str, str],
    default_region: str,
    valid_regions: Collection[str],
) -> dict[str, list[str]]:
    """Map each region name to the fields placed in it.

    Regions appear in the order they first receive a field, and fields keep
    their input order within a region. Regions that receive no field are
    absent.

    Args:
        fields: Field names in display order.
        assignments: Field name -> assigned region. May be partial.
        default_region: Region for fields without a valid assignment.
        valid_regions: Regions of the active layout.

    Returns:
        Dict mapping region name -> list of field names.
    """
    region_map: dict[str, list[str]] = {}
    for field_name in fields:
        assigned = assignments.get(field_name)
        if assigned is not None and assigned in valid_regions:
            target = assigned
        else:
            target = default_region
        region_map.setdefault(target, []).append(field_name)
    return region_map


def find_invalid_assignments(
    assignments: Mapping[str, str],
    valid_regions: Collection[str],
) -> dict[str, str]:
    """Return the assignments whose region is not in *valid_regions*.

    Empty assignments mean "use the default region" and are not reported.
    """
    return {
        field_name: region
        for field_name, region in assignments.items()
        if region and region not in valid_regions
    }


class RegionMap:
    """Lazily resolved region map for one render pass.

    The map is resolved on first access and cached until ``reset()``.

    Args:
        fields: Field names in display order.
        options: The row's persisted layout options.
        definition: Definition of the selected layout.
    """

    def __init__(
        self,
        fields: Iterable[str],
        options: RowLayoutOptions,
        definition: LayoutDefinition,
    ) -> None:
        self._fields = list(fields)
        self._options = options
        self._definition = definition
        self._map: dict[str, list[str]] | None = None

    @property
    def map(self) -> dict[str, list[str]]:
        if self._map is None:
            self._map = self._generate()
        return self._map

    def reset(self) -> None:
        """Drop the cached map; the next access resolves it again."""
        self._map = None

    def region_for(self, field_name: str) -> str | None:
        for region_name, field_names in self.map.items():
            if field_name in field_names:
                return region_name
        return None

    def _generate(self) -> dict[str, list[str]]:
        valid_regions = self._definition.regions

        stale = find_invalid_assignments(self._options.assigned_regions, valid_regions)
        stale = {f: r for f, r in stale.items() if f in self._fields}
        if stale:
            logger.warning(
                "Layout '%s' has no region(s) for assignment(s) %s; "
                "using default region '%s'",
                self._definition.id, stale, self._options.default_region,
            )
        if self._fields and self._options.default_region not in valid_regions:
            # Kept as-is: fallback fields end up in a region the layout drops.
            logger.warning(
                "Default region '%s' is not a region of layout '%s'",
                self._options.default_region, self._definition.id,
            )

        region_map = resolve_regions(
            self._fields,
            self._options.assigned_regions,
            self._options.default_region,
            valid_regions,
        )
        logger.debug("Resolved region map for layout '%s': %s", self._definition.id, region_map)
        return region_map
