# main.py

"""Entry point for the jewelry catalog admin console (TUI or headless CLI)."""

import argparse
import asyncio
import logging
import sys

from jewelry_admin.config.logging_config import setup_logging
from jewelry_admin.config.settings import Settings
from jewelry_admin.models.catalog import ObjectKind
from jewelry_admin.models.forms import CollectionForm, ProductForm
from jewelry_admin.models.options import Currency, Material

logger = logging.getLogger("jewelry_admin.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    kind_ids = [k["id"] for k in Settings.OBJECT_KINDS]

    parser = argparse.ArgumentParser(
        prog="jewelry_admin",
        description="Admin console for the jewelry store catalog.",
        epilog="Run without a command to launch the interactive TUI.",
    )
    sub = parser.add_subparsers(dest="command")

    stats = sub.add_parser("stats", help="Show dashboard statistics.")
    stats.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )

    list_cmd = sub.add_parser("list", help="List products, collections or reviews.")
    list_cmd.add_argument("kind", choices=kind_ids)
    list_cmd.add_argument(
        "-q",
        "--query",
        default=None,
        help="Only show records containing this text.",
    )
    list_cmd.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )

    delete = sub.add_parser("delete", help="Delete one object.")
    delete.add_argument("kind", choices=kind_ids)
    delete.add_argument("object_id", help="Cosmic object id.")

    product = sub.add_parser(
        "add-product", help="Create a product (or update one with --id)."
    )
    product.add_argument("--id", default=None, dest="object_id")
    product.add_argument("--title", required=True)
    product.add_argument("--name", required=True)
    product.add_argument("--price", required=True)
    product.add_argument(
        "--currency",
        default=Currency.USD.value,
        choices=[c.value for c in Currency],
    )
    product.add_argument(
        "--material",
        default="",
        choices=["", *(m.value for m in Material)],
    )
    product.add_argument("--sku", default="")
    product.add_argument("--description", default="")
    product.add_argument(
        "--collection", default="", dest="collection_id",
        help="Id of the owning collection.",
    )
    product.add_argument(
        "--out-of-stock",
        action="store_true",
        default=False,
        dest="out_of_stock",
    )

    collection = sub.add_parser(
        "add-collection",
        help="Create a collection (or update one with --id).",
    )
    collection.add_argument("--id", default=None, dest="object_id")
    collection.add_argument("--name", required=True)
    collection.add_argument(
        "--title", default=None,
        help="Object title (default: same as --name).",
    )
    collection.add_argument("--description", default="")
    collection.add_argument(
        "--inactive",
        action="store_true",
        default=False,
    )
    return parser


def _run_tui() -> None:
    """Launch the interactive Textual TUI."""
    from jewelry_admin.ui.app import JewelryAdminApp

    try:
        app = JewelryAdminApp()
        app.run()
    except Exception:
        logger.critical("Fatal error during TUI run", exc_info=True)
        raise
    finally:
        logger.info("jewelry_admin TUI shutting down")


def _run_cli(args: argparse.Namespace) -> int:
    """Dispatch a headless command and return its exit code."""
    from jewelry_admin.cli import runner

    if args.command == "stats":
        return asyncio.run(runner.run_stats(args.output_format))
    if args.command == "list":
        return runner.run_list(
            ObjectKind(args.kind), args.query, args.output_format
        )
    if args.command == "delete":
        return runner.run_delete(ObjectKind(args.kind), args.object_id)
    if args.command == "add-product":
        form = ProductForm(
            title=args.title,
            name=args.name,
            description=args.description,
            price=args.price,
            currency=args.currency,
            sku=args.sku,
            material=args.material,
            in_stock=not args.out_of_stock,
            collection_id=args.collection_id,
        )
        return runner.run_save_product(form, args.object_id)
    form_c = CollectionForm(
        title=args.title or args.name,
        name=args.name,
        description=args.description,
        active=not args.inactive,
    )
    return runner.run_save_collection(form_c, args.object_id)


def main() -> None:
    """Route to the TUI (no command) or a headless CLI command."""
    parser = _build_parser()
    args = parser.parse_args()

    # The TUI owns the terminal; only headless commands echo to stderr
    log_file = setup_logging(console=args.command is not None)
    logger.info("jewelry_admin starting, log file: %s", log_file)

    if args.command is None:
        _run_tui()
    else:
        sys.exit(_run_cli(args))


if __name__ == "__main__":
    main()
