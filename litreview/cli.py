#!/usr/bin/env python3
"""litreview CLI - Manage literature review fields and data from the command line.

Usage:
    litreview fields list
    litreview fields add <name> [--type TYPE] [--options A,B] [--default VALUE]
    litreview fields update <field_id> [--name NAME] [--type TYPE] [--options A,B] [--default VALUE]
    litreview fields delete <field_id> [--yes]
    litreview set <item_id> <field_id> <value>
    litreview show
    litreview stats
    litreview export {csv,json} [-o PATH]
    litreview clear [--yes]

Examples:
    # Add a select field for the study design
    litreview fields add "Study design" --type select --options "RCT,Cohort,Case study"

    # Mark item 12 as included
    litreview set 12 included yes

    # Export the review table of a BibTeX library
    litreview --library refs.bib export csv -o review.csv
"""

import argparse
import sys

from .exceptions import LitReviewError
from .utils.logging import get_logger

logger = get_logger(__name__)


def get_version():
    """Get package version."""
    try:
        from litreview import __version__
        return __version__
    except ImportError:
        return "1.0.0"


def _open(args):
    from litreview.config import Config
    from litreview.litreview import LitReview

    config = Config.from_env(args.env_file)
    if args.store:
        config.store_path = args.store
    if args.locale:
        config.locale = args.locale
    return LitReview(library_path=args.library, config=config)


def _split_options(text):
    if text is None:
        return None
    return [opt.strip() for opt in text.split(",") if opt.strip()]


def _confirm(args, prompt):
    if args.yes:
        return True
    answer = input(f"{prompt} [y/N] ")
    return answer.strip().lower() in ("y", "yes")


def cmd_fields_list(args):
    """List the review field definitions."""
    review = _open(args)
    fields = review.list_fields()

    print(f"{'ID':<32} {'Type':<8} {'Name':<20} Options")
    print("-" * 72)
    for f in fields:
        options = ", ".join(f.options or [])
        print(f"{f.id:<32} {f.type:<8} {f.name:<20} {options}")
    print(f"\n{len(fields)} fields")
    return 0


def cmd_fields_add(args):
    """Add a review field."""
    review = _open(args)
    try:
        definition = review.add_field(
            name=args.name,
            type=args.type,
            options=_split_options(args.options),
            default_value=args.default if args.default is not None else "",
        )
    except LitReviewError as e:
        print(f"Error: {e}")
        return 1
    print(f"Added field {definition.id} ({definition.name})")
    return 0


def cmd_fields_update(args):
    """Change name, type, options or default of a review field."""
    review = _open(args)
    if review.registry.get_field(args.field_id) is None:
        print(f"Error: Unknown field: {args.field_id}")
        return 1

    changes = {}
    if args.name is not None:
        changes["name"] = args.name
    if args.type is not None:
        changes["type"] = args.type
    if args.options is not None:
        changes["options"] = _split_options(args.options)
    if args.default is not None:
        changes["default_value"] = args.default

    try:
        review.update_field(args.field_id, **changes)
    except LitReviewError as e:
        print(f"Error: {e}")
        return 1
    print(f"Updated field {args.field_id}")
    return 0


def cmd_fields_delete(args):
    """Delete a review field and its values in every record."""
    review = _open(args)
    definition = review.registry.get_field(args.field_id)
    if definition is None:
        print(f"Error: Unknown field: {args.field_id}")
        return 1
    if not _confirm(args, f"Delete field '{definition.name}' and its values in all items?"):
        print("Aborted")
        return 1
    try:
        review.delete_field(args.field_id)
    except LitReviewError as e:
        print(f"Error: {e}")
        return 1
    print(f"Deleted field {args.field_id}")
    return 0


def cmd_set(args):
    """Set one review value of an item."""
    from litreview.locale import get_string

    review = _open(args)
    try:
        review.update_value(args.item_id, args.field_id, args.value)
    except LitReviewError as e:
        print(f"Error: {e}")
        return 1
    print(get_string("value-saved", review.config.locale))
    return 0


def cmd_show(args):
    """Print the review table of the library."""
    from litreview.exceptions import ItemSourceError
    from litreview.views import render_table

    review = _open(args)
    try:
        table = review.table()
    except ItemSourceError as e:
        print(f"Error: {e}")
        return 1
    print(render_table(table, review.config.locale, max_width=args.width))
    return 0


def cmd_stats(args):
    """Print review statistics."""
    from litreview.views import format_statistics

    review = _open(args)
    print(format_statistics(review.statistics(), review.config.locale))
    return 0


def cmd_export(args):
    """Export review data to CSV or JSON."""
    from litreview.locale import get_string

    review = _open(args)
    try:
        path = review.export(args.format, args.output)
    except LitReviewError as e:
        logger.error(f"Export failed: {e}")
        print(get_string("review-export-failed", review.config.locale, error=e))
        return 1
    print(get_string("review-export-success", review.config.locale, path=path))
    return 0


def cmd_clear(args):
    """Remove all review data."""
    from litreview.locale import get_string

    review = _open(args)
    if not _confirm(args, "Remove all review data?"):
        print("Aborted")
        return 1
    try:
        review.clear()
    except LitReviewError as e:
        print(f"Error: {e}")
        return 1
    print(get_string("review-cleared", review.config.locale))
    return 0


def build_parser():
    parser = argparse.ArgumentParser(
        prog="litreview",
        description="litreview - custom review fields for literature reviews",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  litreview fields add "Study design" --type select --options "RCT,Cohort"
  litreview set 12 included yes
  litreview --library refs.bib export csv -o review.csv
        """
    )
    parser.add_argument("--version", action="version", version=f"litreview {get_version()}")
    parser.add_argument("--store", help="Preference file (or set LITREVIEW_STORE_PATH)")
    parser.add_argument("--library", help="BibTeX library (or set LITREVIEW_LIBRARY)")
    parser.add_argument("--locale", choices=["zh", "en"], help="Language of headers and messages")
    parser.add_argument("--env-file", help="Path to a .env file")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # fields command
    fields_parser = subparsers.add_parser("fields", help="Manage review fields")
    fields_sub = fields_parser.add_subparsers(dest="fields_command")

    fields_sub.add_parser("list", help="List review fields")

    add_parser = fields_sub.add_parser("add", help="Add a review field")
    add_parser.add_argument("name", help="Display name")
    add_parser.add_argument("--type", default="text",
                            choices=["text", "select", "number", "date", "boolean"],
                            help="Field type (default: text)")
    add_parser.add_argument("--options", help="Comma-separated options for select fields")
    add_parser.add_argument("--default", help="Default value")

    update_parser = fields_sub.add_parser("update", help="Update a review field")
    update_parser.add_argument("field_id", help="Field id")
    update_parser.add_argument("--name", help="New display name")
    update_parser.add_argument("--type", choices=["text", "select", "number", "date", "boolean"],
                               help="New field type")
    update_parser.add_argument("--options", help="Comma-separated options for select fields")
    update_parser.add_argument("--default", help="New default value")

    delete_parser = fields_sub.add_parser("delete", help="Delete a review field")
    delete_parser.add_argument("field_id", help="Field id")
    delete_parser.add_argument("-y", "--yes", action="store_true", help="Don't ask for confirmation")

    # set command
    set_parser = subparsers.add_parser("set", help="Set a review value of an item")
    set_parser.add_argument("item_id", type=int, help="Item id")
    set_parser.add_argument("field_id", help="Field id")
    set_parser.add_argument("value", help="Value (yes/no for boolean fields)")

    # show command
    show_parser = subparsers.add_parser("show", help="Print the review table")
    show_parser.add_argument("--width", type=int, default=30, help="Max column width (default: 30)")

    # stats command
    subparsers.add_parser("stats", help="Print review statistics")

    # export command
    export_parser = subparsers.add_parser("export", help="Export review data")
    export_parser.add_argument("format", choices=["csv", "json"], help="Export format")
    export_parser.add_argument("-o", "--output", help="Output file path")

    # clear command
    clear_parser = subparsers.add_parser("clear", help="Remove all review data")
    clear_parser.add_argument("-y", "--yes", action="store_true", help="Don't ask for confirmation")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    if args.command == "fields":
        fields_commands = {
            "list": cmd_fields_list,
            "add": cmd_fields_add,
            "update": cmd_fields_update,
            "delete": cmd_fields_delete,
        }
        handler = fields_commands.get(args.fields_command or "list")
    else:
        # Dispatch to command handler
        commands = {
            "set": cmd_set,
            "show": cmd_show,
            "stats": cmd_stats,
            "export": cmd_export,
            "clear": cmd_clear,
        }
        handler = commands[args.command]

    try:
        return handler(args)
    except LitReviewError as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
