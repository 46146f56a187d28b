"""CLI entry point for builder-export.

Reads a captured page (JSON) or an HTML fragment, runs the export pipeline
and writes the document as JSON, destination markup or a review tree.
"""

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

from builder_export.component import (
    CapturedPage,
    ColorPalette,
    ComponentLibrary,
    TemplateParts,
    TypographySystem,
    parse_html_components,
)
from builder_export.config import EnvVar, ExportOptions, get_environment
from builder_export.core import get_logger, setup_logging
from builder_export.destinations import get_destination, list_destinations
from builder_export.exporter import export_page

logger = get_logger("cli")

FORMATS = ("json", "markup", "tree", "all")


# =============================================================================
# Input Loading
# =============================================================================


def _load_model(path: Path | None, model: type[BaseModel]):
    if path is None:
        return None
    return model.model_validate_json(path.read_text(encoding="utf-8"))


def load_page(args: argparse.Namespace) -> CapturedPage:
    """Build the captured page from the input file and the design input flags."""
    if args.html is not None:
        components = parse_html_components(args.html.read_text(encoding="utf-8"))
        page = CapturedPage(components=components)
    elif args.input is not None:
        page = CapturedPage.model_validate_json(args.input.read_text(encoding="utf-8"))
    else:
        raise ValueError("an input file or --html is required")

    overrides = {
        "color_palette": _load_model(args.palette, ColorPalette),
        "typography_system": _load_model(args.typography, TypographySystem),
        "component_library": _load_model(args.library, ComponentLibrary),
        "template_parts": _load_model(args.template_parts, TemplateParts),
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    return page.model_copy(update=overrides) if overrides else page


# =============================================================================
# Export Command
# =============================================================================


def cmd_export(args: argparse.Namespace) -> int:
    """Handle the export command."""
    try:
        page = load_page(args)
        options = ExportOptions.from_environment(
            destination=args.destination,
            export_layouts=args.layouts or None,
            create_global_presets=args.presets or None,
            validate_export=False if args.no_validate else None,
            optimize_export=False if args.no_optimize else None,
        )
        result = export_page(page, options)
    except ValidationError as e:
        logger.error(f"Invalid input: {e}")
        return 1
    except (OSError, ValueError, KeyError) as e:
        logger.error(f"Export failed: {e}")
        return 1

    if args.format == "json":
        result_text = result.json
    elif args.format == "markup":
        result_text = result.markup
    elif args.format == "tree":
        result_text = result.tree
    else:
        result_text = (
            f"## Tree\n{result.tree}\n\n"
            f"## Markup ({result.destination})\n{result.markup}\n\n"
            f"## JSON\n```json\n{result.json}\n```"
        )

    if args.output:
        args.output.write_text(result_text, encoding="utf-8")
        logger.info(f"Export saved to {args.output}")
    else:
        print(result_text)

    if result.report is not None:
        logger.info(
            f"Validation: {len(result.report.errors)} error(s), "
            f"{len(result.report.warnings)} warning(s)"
        )
    return 0


def cmd_destinations(_args: argparse.Namespace) -> int:
    """Handle the destinations command."""
    for name in list_destinations():
        destination = get_destination(name)
        print(f"{name}\t{len(destination.module_map)} component types, "
              f"{len(destination.vocabulary)} modules")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m builder_export",
        description="Export captured pages to page-builder documents",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    export_parser = subparsers.add_parser(
        "export",
        help="Export a captured page",
    )
    export_parser.add_argument(
        "input",
        type=Path,
        nargs="?",
        default=None,
        help="Captured page JSON (a page object or a bare component list)",
    )
    export_parser.add_argument(
        "--html",
        type=Path,
        default=None,
        help="Read components from an HTML fragment instead",
    )
    export_parser.add_argument(
        "--destination",
        "-d",
        type=str,
        default=None,
        help="Destination name (default: EXPORT_DESTINATION or divi)",
    )
    export_parser.add_argument(
        "--format",
        "-f",
        type=str,
        default="json",
        choices=FORMATS,
        help="Output format (default: json)",
    )
    export_parser.add_argument("--palette", type=Path, default=None, help="Color palette JSON")
    export_parser.add_argument(
        "--typography", type=Path, default=None, help="Typography system JSON"
    )
    export_parser.add_argument("--library", type=Path, default=None, help="Component library JSON")
    export_parser.add_argument(
        "--template-parts", type=Path, default=None, help="Header/footer template parts JSON"
    )
    export_parser.add_argument(
        "--layouts", action="store_true", help="Export reusable layouts"
    )
    export_parser.add_argument(
        "--presets", action="store_true", help="Create global presets"
    )
    export_parser.add_argument(
        "--no-validate", action="store_true", help="Skip validation"
    )
    export_parser.add_argument(
        "--no-optimize", action="store_true", help="Skip pruning of empty structure"
    )
    export_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output file path (prints to stdout if not specified)",
    )
    export_parser.set_defaults(func=cmd_export)

    destinations_parser = subparsers.add_parser(
        "destinations",
        help="List available destinations",
    )
    destinations_parser.set_defaults(func=cmd_destinations)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    load_dotenv()
    setup_logging(get_environment(EnvVar.EXPORT_LOG_LEVEL))

    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    if not args.command:
        parser.print_help()
        return 1
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
