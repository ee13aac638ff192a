"""Catalog-driven translation of text units and whole books."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Optional

from .catalog import Catalog
from .segmenter import count_lines, extract_paragraphs
from .structures import Book, BookItem, Chapter, Paragraph, PartTitle, Separator


@dataclass
class TranslationSummary:
    """Counters collected while translating a book."""

    text_units: int = 0
    paragraphs: int = 0
    translated_paragraphs: int = 0

    @property
    def untranslated_paragraphs(self) -> int:
        return self.paragraphs - self.translated_paragraphs


def _lookup(paragraph: Paragraph, catalog: Catalog) -> Optional[str]:
    entry = catalog.find_entry(paragraph.source)
    if entry is None:
        return None
    return entry.translation()


def translate(
    text: str,
    catalog: Catalog,
    summary: Optional[TranslationSummary] = None,
) -> str:
    """Translate ``text`` paragraph by paragraph, keeping its line layout.

    Paragraphs missing from the catalog, or whose translation is empty,
    are copied unchanged. Blank lines between paragraphs are reproduced
    one for one, which matters inside fenced code blocks. Trailing blank
    lines are kept as well, so the output has as many lines as the input.
    """

    output: List[str] = []
    current_lineno = 1

    for paragraph in extract_paragraphs(text):
        # Fill in the blank lines skipped by the segmenter.
        while current_lineno < paragraph.start_line:
            output.append("\n")
            current_lineno += 1
        current_lineno += paragraph.line_count

        translated = _lookup(paragraph, catalog)
        if summary is not None:
            summary.paragraphs += 1
            if translated is not None:
                summary.translated_paragraphs += 1

        if translated is None:
            output.append(paragraph.text)
            continue
        if not paragraph.terminator:
            # A final unterminated line stays unterminated.
            output.append(translated.rstrip("\r\n"))
            continue
        output.append(translated)
        if not translated.endswith("\n"):
            output.append(paragraph.terminator)

    # Trailing blank lines never start a paragraph.
    total_lines = count_lines(text)
    while current_lineno <= total_lines:
        output.append("\n")
        current_lineno += 1

    result = "".join(output)
    if text.endswith("\n") and not result.endswith("\n"):
        result += "\n"
    if summary is not None:
        summary.text_units += 1
    return result


def translate_item(
    item: BookItem,
    catalog: Catalog,
    summary: Optional[TranslationSummary] = None,
) -> BookItem:
    """Return a translated copy of one book item and its sub-items."""

    if isinstance(item, Chapter):
        return replace(
            item,
            content=translate(item.content, catalog, summary),
            name=translate(item.name, catalog, summary),
            sub_items=tuple(
                translate_item(sub_item, catalog, summary) for sub_item in item.sub_items
            ),
        )
    if isinstance(item, PartTitle):
        return PartTitle(title=translate(item.title, catalog, summary))
    if isinstance(item, Separator):
        return item
    raise TypeError(f"Unsupported book item: {item!r}")


def translate_book(
    book: Book,
    catalog: Catalog,
    summary: Optional[TranslationSummary] = None,
) -> Book:
    """Translate every chapter, chapter title and part title in ``book``.

    The input book is left untouched; a new book with the same shape is
    returned. Counters are collected into ``summary`` when one is given.
    """

    sections = tuple(translate_item(item, catalog, summary) for item in book.sections)
    return replace(book, sections=sections)
