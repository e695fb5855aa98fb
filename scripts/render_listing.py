"""
Demo script: render a CSV listing into layout regions via the public API.

Usage:
    uv run python scripts/render_listing.py listing.yaml rows.csv
    uv run python scripts/render_listing.py listing.yaml rows.csv --labels
    uv run python scripts/render_listing.py listing.yaml --form

The options file selects the layout, the default region, the per-field
region assignments and lists the fields. Each CSV row is rendered and the
resulting layout builds are printed as YAML.
"""

from __future__ import annotations

import argparse
import logging
import sys

import pandas as pd
import yaml

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("render_listing")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> None:
    import layout_fields
    from layout_fields.exceptions import LayoutFieldsError
    from layout_fields.rendering import FieldListRenderer

    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("options", help="Row options YAML file")
    parser.add_argument("rows", nargs="?", help="CSV file with one listing row per line")
    parser.add_argument("--labels", action="store_true", help="Print field labels")
    parser.add_argument("--layouts-dir", default=None, help="Directory of layout YAML files")
    parser.add_argument("--form", action="store_true", help="Print the settings form instead")
    args = parser.parse_args()

    try:
        row_renderer = layout_fields.open_row_renderer(
            args.options,
            layouts_dir=args.layouts_dir,
            renderer=FieldListRenderer(show_labels=args.labels),
        )
    except (FileNotFoundError, LayoutFieldsError) as e:
        log.error("%s", e)
        sys.exit(1)

    if args.form:
        form = row_renderer.settings_form()
        yaml.safe_dump(form.model_dump(mode="json"), sys.stdout, allow_unicode=True, sort_keys=False)
        return

    if not args.rows:
        parser.error("rows is required unless --form is given")

    rows = pd.read_csv(args.rows, dtype=str, keep_default_na=False)
    try:
        builds = layout_fields.render_listing(rows, row_renderer)
    except LayoutFieldsError as e:
        log.error("%s", e)
        sys.exit(1)

    yaml.safe_dump(
        [b.to_dict() for b in builds],
        sys.stdout,
        allow_unicode=True,
        sort_keys=False,
    )


if __name__ == "__main__":
    main()
