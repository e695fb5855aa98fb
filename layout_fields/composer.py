"""
Layout composition for layout-fields.

Hands rendered region content to the selected layout. When no region
rendered anything, the layout is not instantiated at all and an empty
``LayoutBuild`` is returned.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

logger = logging.getLogger(__name__)


@dataclass
class LayoutBuild:
    """Structured output of one composed row.

    Attributes:
        layout_id: Id of the layout that built this output. Empty for the
            no-op build.
        regions: Region name -> rendered content, in layout order.
        template: Template the host should print the layout with.
        settings: Layout instance settings.
    """

    layout_id: str = ""
    regions: dict[str, str] = field(default_factory=dict)
    template: str = ""
    settings: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> LayoutBuild:
        return cls()

    def __bool__(self) -> bool:
        return bool(self.regions)

    def to_dict(self) -> dict[str, Any]:
        return {
            "layout": self.layout_id,
            "template": self.template,
            "settings": dict(self.settings),
            "regions": dict(self.regions),
        }


class LayoutComposer(Protocol):
    """Composes rendered region content into a ``LayoutBuild``."""

    def compose(self, region_content: dict[str, str]) -> LayoutBuild:
        ...


def compose_layout(registry, layout_id: str, region_content: dict[str, str]) -> LayoutBuild:
    """Build *layout_id* with *region_content*.

    Args:
        registry: A ``LayoutRegistry``.
        layout_id: The selected layout.
        region_content: Region name -> rendered content.

    Returns:
        The layout's build, or ``LayoutBuild.empty()`` without touching the
        registry when *region_content* is empty.

    Raises:
        UnknownLayoutError: If *layout_id* is unknown and there is content.
    """
    if not region_content:
        return LayoutBuild.empty()
    layout = registry.create_instance(layout_id)
    return layout.build(region_content)


class RegistryComposer:
    """``LayoutComposer`` bound to one layout of a registry."""

    def __init__(self, registry, layout_id: str) -> None:
        self.registry = registry
        self.layout_id = layout_id

    def compose(self, region_content: dict[str, str]) -> LayoutBuild:
        return compose_layout(self.registry, self.layout_id, region_content)
