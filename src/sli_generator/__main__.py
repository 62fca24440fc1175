"""
Command line entry point.

Examples:
    python -m sli_generator pdf --data sli.json
    python -m sli_generator pdf --store store.json --order-id 42 --pipeline raster
    python -m sli_generator html --store store.json --sli-id 7 --output preview.html
    python -m sli_generator template --output sli_template.html
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

from .assembly import JsonSliRepository
from .config import config
from .errors import SliError
from .layout import PAGE_SIZES
from .renderers import build_skeleton
from .schemas.document import HTML_CONTENT_TYPE, GeneratedDocument
from .schemas.sli import SliInput
from .service import (
    PIPELINES,
    document_filename,
    generate_for_order,
    generate_for_standalone,
    generate_markup,
    generate_pdf,
)


def load_input(path: Path) -> SliInput:
    with path.open("r", encoding="utf-8") as handle:
        return SliInput.model_validate(json.load(handle))


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--data", type=Path, help="JSON file with a normalized SLI record.")
    source.add_argument("--store", type=Path, help="JSON store with orders, products and SLIs.")
    parser.add_argument("--order-id", help="Order whose SLI to render (with --store).")
    parser.add_argument("--sli-id", help="Standalone SLI to render (with --store).")
    parser.add_argument("--template", type=Path, default=None, help="HTML template to populate.")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Destination file (default generated/SLI-<reference>_<timestamp>.<ext>).",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="sli-generator",
        description="Generate a Shipper's Letter of Instruction from JSON data.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    html_parser = commands.add_parser("html", help="Render the printable HTML form.")
    _add_source_arguments(html_parser)

    pdf_parser = commands.add_parser("pdf", help="Render the form as PDF.")
    _add_source_arguments(pdf_parser)
    pdf_parser.add_argument("--pipeline", choices=PIPELINES, default="vector")

    template_parser = commands.add_parser("template", help="Export the blank HTML template.")
    template_parser.add_argument("--output", type=Path, default=None)

    args = parser.parse_args(argv)
    if args.command != "template" and args.store is not None:
        if (args.order_id is None) == (args.sli_id is None):
            parser.error("--store needs exactly one of --order-id or --sli-id")
    return args


def _render(args: argparse.Namespace) -> GeneratedDocument:
    pipeline = getattr(args, "pipeline", "vector")
    if args.store is not None:
        repository = JsonSliRepository.from_file(args.store)
        if args.order_id is not None:
            return generate_for_order(
                args.order_id, repository, args.command, pipeline, template_path=args.template
            )
        return generate_for_standalone(
            args.sli_id, repository, args.command, pipeline, template_path=args.template
        )

    data = load_input(args.data)
    if args.command == "html":
        return GeneratedDocument(
            content=generate_markup(data, template_path=args.template).encode("utf-8"),
            content_type=HTML_CONTENT_TYPE,
            filename=document_filename(data, "html"),
        )
    return generate_pdf(data, pipeline, template_path=args.template)


def _default_output(filename: str) -> Path:
    stem, _, extension = filename.rpartition(".")
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return config.OUTPUT_DIR / f"{stem}_{timestamp}.{extension}"


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "template":
        config.validate()
        output_path = args.output or config.OUTPUT_DIR / "sli_template.html"
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(build_skeleton(page=PAGE_SIZES[config.PAGE_SIZE]), encoding="utf-8")
        print(f"Template written to {output_path}")
        return

    try:
        document = _render(args)
    except SliError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        sys.exit(1)

    output_path = args.output or _default_output(document.filename)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(document.content)
    print(f"SLI generated at {output_path} ({document.page_count} page(s))")


if __name__ == "__main__":
    main()
