"""
Layout registry for layout-fields.

Loads layout definition YAML files from layout_fields/layouts/ and provides
structured access via Pydantic models. Each layout defines:
- id: unique identifier (e.g., "twocol")
- label: human-readable name shown in the settings form
- category: group heading for the layout select list
- template: name of the template the host uses to print the layout
- region_names: ordered mapping of region machine name -> human label

New layouts are added by dropping a YAML file in the directory, no code
changes needed.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from layout_fields.exceptions import LayoutDefinitionError, UnknownLayoutError

logger = logging.getLogger(__name__)

# Directory containing the bundled layout YAML files
_LAYOUTS_DIR = Path(__file__).parent / "layouts"


class LayoutDefinition(BaseModel):
    """A layout definition loaded from YAML."""

    id: str
    label: str = ""
    category: str = "Other"
    description: str = ""
    template: str = ""
    region_names: dict[str, str]

    @field_validator("region_names")
    @classmethod
    def _check_has_regions(cls, value: dict[str, str]) -> dict[str, str]:
        if not value:
            raise ValueError("A layout must declare at least one region")
        return value

    @property
    def regions(self) -> list[str]:
        """Region machine names in declaration order."""
        return list(self.region_names)

    def has_region(self, region_name: str) -> bool:
        return region_name in self.region_names


def load_layout(path: Path) -> LayoutDefinition:
    """Load a single layout YAML file.

    The layout id defaults to the file stem when the file has no ``id`` key.

    Raises:
        LayoutDefinitionError: If the file is empty or fails validation.
    """
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, dict):
        raise LayoutDefinitionError(f"Layout file is empty or not a mapping: {path}")

    raw.setdefault("id", path.stem)
    try:
        return LayoutDefinition.model_validate(raw)
    except ValidationError as exc:
        raise LayoutDefinitionError(f"Invalid layout file {path}: {exc}") from exc


def load_all_layouts(layouts_dir: Path | None = None) -> list[LayoutDefinition]:
    """Load all layout YAML files in a directory, sorted by file name.

    Files that fail to load are logged and skipped.

    Args:
        layouts_dir: Directory to scan for .yaml files. Defaults to
            the built-in layouts/ directory.
    """
    layouts_dir = layouts_dir or _LAYOUTS_DIR
    layouts: list[LayoutDefinition] = []
    for yaml_path in sorted(layouts_dir.glob("*.yaml")):
        try:
            layout = load_layout(yaml_path)
        except (LayoutDefinitionError, yaml.YAMLError) as e:
            logger.warning("Failed to load layout from %s: %s", yaml_path, e)
            continue
        layouts.append(layout)
        logger.debug("Loaded layout: %s from %s", layout.id, yaml_path)
    logger.info("Loaded %d layouts from %s", len(layouts), layouts_dir)
    return layouts


class Layout:
    """A layout instance that arranges rendered region content.

    Created by ``LayoutRegistry.create_instance()``.
    """

    def __init__(
        self,
        definition: LayoutDefinition,
        settings: dict[str, Any] | None = None,
    ) -> None:
        self.definition = definition
        self.settings = dict(settings or {})

    def build(self, regions: dict[str, str]):
        """Arrange region content in the order the layout declares it.

        Content for regions the layout does not declare is dropped.

        Returns:
            A ``LayoutBuild``.
        """
        from layout_fields.composer import LayoutBuild

        ordered: dict[str, str] = {}
        for region_name in self.definition.regions:
            if region_name in regions:
                ordered[region_name] = regions[region_name]

        dropped = [r for r in regions if not self.definition.has_region(r)]
        if dropped:
            logger.debug(
                "Layout '%s' has no region(s) %s; content dropped",
                self.definition.id, dropped,
            )

        return LayoutBuild(
            layout_id=self.definition.id,
            regions=ordered,
            template=self.definition.template,
            settings=self.settings,
        )


class LayoutRegistry:
    """Lookup of layout definitions by id.

    Definitions keep the order they were given in; ``first_definition()``
    is the one the settings form falls back to.
    """

    def __init__(self, definitions: list[LayoutDefinition]) -> None:
        self._definitions: dict[str, LayoutDefinition] = {}
        for definition in definitions:
            if definition.id in self._definitions:
                logger.warning("Duplicate layout id '%s'; keeping the first", definition.id)
                continue
            self._definitions[definition.id] = definition

    @classmethod
    def from_directory(cls, layouts_dir: Path | None = None) -> LayoutRegistry:
        return cls(load_all_layouts(layouts_dir))

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, layout_id: object) -> bool:
        return layout_id in self._definitions

    def get_definitions(self) -> dict[str, LayoutDefinition]:
        return dict(self._definitions)

    def get_definition(self, layout_id: str) -> LayoutDefinition:
        """Return the definition for *layout_id*.

        Raises:
            UnknownLayoutError: If no layout has that id (including ``""``).
        """
        try:
            return self._definitions[layout_id]
        except KeyError:
            raise UnknownLayoutError(
                f"Unknown layout '{layout_id}'. "
                f"Available layouts: {list(self._definitions)}"
            ) from None

    def first_definition(self) -> LayoutDefinition | None:
        return next(iter(self._definitions.values()), None)

    def get_layout_options(
        self, group_by_category: bool = False
    ) -> dict[str, str] | dict[str, dict[str, str]]:
        """Selectable layouts for a settings form.

        Returns ``{id: label}``, or ``{category: {id: label}}`` when
        *group_by_category* is set.
        """
        if not group_by_category:
            return {d.id: d.label or d.id for d in self._definitions.values()}

        grouped: dict[str, dict[str, str]] = {}
        for d in self._definitions.values():
            grouped.setdefault(d.category, {})[d.id] = d.label or d.id
        return grouped

    def create_instance(
        self, layout_id: str, settings: dict[str, Any] | None = None
    ) -> Layout:
        return Layout(self.get_definition(layout_id), settings)
