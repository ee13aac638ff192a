"""Command line interface for the gettext book preprocessor."""

from __future__ import annotations

import argparse
import sys
from typing import Iterable, Optional, TextIO

from .catalog import load_catalog
from .configuration import load_settings
from .documents import flatten_chapters, parse_input, write_book
from .errors import BookGettextError
from .logger import get_logger
from .structures import Book
from .translator import TranslationSummary, translate_book

logger = get_logger(__name__)

SUPPORTED_HOST_VERSION = "0.4"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bookgettext",
        description=(
            "Book preprocessor that replaces paragraphs with their translations "
            "from a GNU gettext PO file while preserving layout."
        ),
    )
    subparsers = parser.add_subparsers(dest="command")
    supports = subparsers.add_parser(
        "supports",
        help="Report whether the given renderer is supported (all renderers are).",
    )
    supports.add_argument("renderer", help="Name of the renderer being queried.")
    return parser


def host_version_supported(version: str) -> bool:
    """Return True when the host version belongs to the supported release series."""

    parts = version.strip().split(".")
    return ".".join(parts[:2]) == SUPPORTED_HOST_VERSION


def preprocess(stdin: TextIO, stdout: TextIO) -> Book:
    """Read a book from ``stdin``, translate it and write it to ``stdout``.

    Nothing is written unless the whole book was translated.
    """

    context, book = parse_input(stdin)
    if not host_version_supported(context.mdbook_version):
        logger.warning(
            "The gettext preprocessor was built against version %s.x, "
            "but we're being called from version %s",
            SUPPORTED_HOST_VERSION,
            context.mdbook_version or "unknown",
        )

    settings = load_settings(context)
    po_path = settings.resolve_po_file(context.root)
    catalog = load_catalog(po_path)

    summary = TranslationSummary()
    translated = translate_book(book, catalog, summary)
    logger.info(
        "Translated %d of %d paragraphs across %d chapters using %s.",
        summary.translated_paragraphs,
        summary.paragraphs,
        len(flatten_chapters(book.sections)),
        po_path,
    )
    write_book(translated, stdout)
    return translated


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.command == "supports":
        # Paragraph substitution is renderer independent.
        return 0

    try:
        preprocess(sys.stdin, sys.stdout)
    except BookGettextError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
