"""Command-line interface for oxmlmaker.

Usage::

    oxmlmaker report.json                       # writes report.docx
    oxmlmaker report.json -o out/report.docx    # explicit output path
    oxmlmaker report.json -t skeleton/          # custom package parts
    oxmlmaker report.json --publish --app-root /srv/app
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from oxmlmaker import __version__
from oxmlmaker.converter import Converter
from oxmlmaker.errors import OxmlMakerError


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="oxmlmaker",
        description="Render a JSON content model to a DOCX document.",
    )
    parser.add_argument(
        "input",
        help="Path to the JSON content model.",
    )
    parser.add_argument(
        "-o", "--output",
        help="Output DOCX file path. Defaults to <input>.docx.",
    )
    parser.add_argument(
        "-t", "--template-dir",
        help="Directory with fixed package parts ([Content_Types].xml, _rels/.rels, ...).",
    )
    parser.add_argument(
        "--publish",
        action="store_true",
        help="Publish into the public directory instead of writing to --output.",
    )
    parser.add_argument(
        "--public-dir",
        help="Public directory for --publish (default: ./public).",
    )
    parser.add_argument(
        "--app-root",
        help="Application root; --publish then targets <app-root>/public.",
    )
    parser.add_argument(
        "-e", "--encoding",
        default="utf-8",
        help="Input file encoding (default: %(default)s).",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print progress information.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

    input_path = Path(args.input)
    if not input_path.is_file():
        print(f"Error: file not found: {input_path}", file=sys.stderr)
        return 1

    converter = Converter(
        template_dir=args.template_dir,
        public_dir=args.public_dir,
        app_root=args.app_root,
    )

    try:
        if args.publish:
            model = converter.loader.load_file(input_path, encoding=args.encoding)
            filename = Path(args.output).name if args.output else input_path.with_suffix(".docx").name
            output_path = converter.create(filename, model)
        else:
            output_path = Path(args.output) if args.output else input_path.with_suffix(".docx")
            converter.convert_file(input_path, output_path, encoding=args.encoding)
    except (OxmlMakerError, OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.verbose:
        print(f"Input:  {input_path}")
        print(f"Output: {output_path}")
        print(f"Done. {output_path.stat().st_size} bytes written.")
    else:
        print(f"Converted: {output_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
