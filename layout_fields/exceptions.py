"""
Custom exception hierarchy for layout-fields.

Callers can catch specific exceptions (e.g., UnknownLayoutError vs
OptionsValidationError) without relying on generic ValueError/RuntimeError.
"""


class LayoutFieldsError(Exception):
    """Base exception for all layout-fields errors."""


class UnknownLayoutError(LayoutFieldsError):
    """Raised when a layout id does not resolve to a known layout definition.

    The render path lets this propagate. Only the settings form absorbs it,
    by substituting the first available layout.
    """


class OptionsValidationError(LayoutFieldsError):
    """Raised when a row layout options file cannot be used.

    For example, the file is empty or its ``fields`` block is malformed.
    """


class LayoutDefinitionError(LayoutFieldsError):
    """Raised when a layout YAML file is structurally invalid."""


class EmptyRenderResult(LayoutFieldsError):
    """Raised by a region renderer that produced no visible content.

    Renderers should prefer returning ``None``; this exception exists for
    renderers that signal emptiness by raising. ``render_regions`` treats
    both the same way: the region is omitted.
    """
