"""
Configuration models and YAML I/O for layout-fields.

This module defines the Pydantic models for a row layout options file,
plus helper functions for loading and saving it.

Key models:
- RowLayoutOptions: Selected layout, default region, per-field assignments.
- FieldDefinition: One displayable field of a listing row.

Key functions:
- load_options(path) -> RowLayoutOptions: Load and validate from YAML.
- save_options(options, path, fields=None): Serialize to YAML.
- load_field_definitions(path) -> dict[str, FieldDefinition]: Read the
  optional ``fields`` block of the same file, in file order.

Example options file::

    layout: twocol
    default_region: first
    assigned_regions:
      title: first
      teaser: second
    fields:
      - name: title
        label: Title
      - name: teaser
        label: Teaser
        empty_text: "(no teaser)"
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from layout_fields.exceptions import OptionsValidationError

logger = logging.getLogger(__name__)


class RowLayoutOptions(BaseModel):
    """Persisted settings of one layout-fields row renderer.

    All three settings default to empty values when unset, matching a
    freshly added row renderer that has not been configured yet.
    """

    layout: str = Field("", description="Id of the selected layout definition")
    default_region: str = Field(
        "", description="Region that receives fields without a valid assignment"
    )
    assigned_regions: dict[str, str] = Field(
        default_factory=dict,
        description="Field name -> region name. Fields may be left out.",
    )

    @field_validator("layout", "default_region", mode="before")
    @classmethod
    def _none_to_empty_string(cls, value: object) -> object:
        # A YAML key written without a value loads as None
        return "" if value is None else value

    @field_validator("assigned_regions", mode="before")
    @classmethod
    def _none_to_empty_dict(cls, value: object) -> object:
        return {} if value is None else value

    def get_assigned_region(self, field_name: str) -> str:
        """Return the region assigned to *field_name*, or ``""`` if unset."""
        return self.assigned_regions.get(field_name, "")


class FieldDefinition(BaseModel):
    """A displayable field of a listing row."""

    name: str
    label: str = ""
    column: str | None = Field(
        None, description="Row column holding the value; defaults to ``name``"
    )
    exclude: bool = Field(
        False, description="Hidden field: assigned to a region but never printed"
    )
    empty_text: str = Field("", description="Printed when the value is empty")

    @property
    def source_column(self) -> str:
        return self.column or self.name

    @property
    def display_label(self) -> str:
        return self.label or self.name


def _read_yaml(path: str | Path) -> dict[str, Any]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Options file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise OptionsValidationError(f"Options file is empty: {path}")
    if not isinstance(raw, dict):
        raise OptionsValidationError(
            f"Options file must contain a mapping, got {type(raw).__name__}: {path}"
        )
    return raw


def load_options(path: str | Path) -> RowLayoutOptions:
    """Load and validate a row layout options file.

    Keys other than ``layout``, ``default_region`` and ``assigned_regions``
    (such as the ``fields`` block) are ignored here.

    Raises:
        FileNotFoundError: If the options file does not exist.
        OptionsValidationError: If the file is empty or not a mapping.
        pydantic.ValidationError: If the content fails schema validation.
    """
    raw = _read_yaml(path)
    known = {k: raw[k] for k in ("layout", "default_region", "assigned_regions") if k in raw}
    options = RowLayoutOptions.model_validate(known)
    logger.info(
        "Loaded options from %s (layout=%r, %d assignment(s))",
        path, options.layout, len(options.assigned_regions),
    )
    return options


def load_field_definitions(path: str | Path) -> dict[str, FieldDefinition]:
    """Load the ``fields`` block of an options file, preserving file order.

    Returns an empty dict when the file has no ``fields`` key.

    Raises:
        OptionsValidationError: If the block is not a list of field
            mappings, an entry fails validation, or a name is repeated.
    """
    raw = _read_yaml(path)
    entries = raw.get("fields") or []
    if not isinstance(entries, list):
        raise OptionsValidationError(
            f"'fields' must be a list of field definitions in {path}"
        )

    fields: dict[str, FieldDefinition] = {}
    for entry in entries:
        try:
            definition = FieldDefinition.model_validate(entry)
        except ValidationError as exc:
            raise OptionsValidationError(
                f"Invalid field definition in {path}: {entry!r}\n{exc}"
            ) from exc
        if definition.name in fields:
            raise OptionsValidationError(
                f"Field '{definition.name}' is defined more than once in {path}"
            )
        fields[definition.name] = definition

    logger.info("Loaded %d field definition(s) from %s", len(fields), path)
    return fields


def save_options(
    options: RowLayoutOptions,
    path: str | Path,
    fields: dict[str, FieldDefinition] | None = None,
) -> None:
    """Serialize options (and optionally field definitions) to YAML."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = options.model_dump(mode="json")
    if fields:
        data["fields"] = [
            f.model_dump(mode="json", exclude_defaults=True) for f in fields.values()
        ]
    with open(path, "w", encoding="utf-8") as f:
        f.write("# layout-fields row options\n")
        f.write("# Assign fields to regions of the selected layout.\n\n")
        yaml.dump(
            data,
            f,
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )
    logger.info("Saved options to %s", path)
