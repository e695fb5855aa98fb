"""
Layout definitions sub-package for layout-fields.

Contains YAML files that declare each bundled layout and its regions.
The loader module (layout_registry.py in the parent package) reads these
files at runtime.
"""
