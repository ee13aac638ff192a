"""Paragraph segmentation for text units."""

from __future__ import annotations

from typing import Iterator, List

from .structures import Paragraph


def _iter_lines(text: str) -> Iterator[str]:
    """Yield lines split on ``\\n`` only, each keeping its terminator."""

    index = 0
    length = len(text)
    while index < length:
        end = text.find("\n", index)
        if end == -1:
            yield text[index:]
            return
        yield text[index:end + 1]
        index = end + 1


def is_blank(line: str) -> bool:
    """A line is blank when nothing is left after trimming its newline."""

    return line in ("", "\n", "\r\n")


def count_lines(text: str) -> int:
    """Return the number of lines in ``text`` (``"a\\n"`` is one line)."""

    if not text:
        return 0
    return text.count("\n") + (0 if text.endswith("\n") else 1)


def extract_paragraphs(text: str) -> Iterator[Paragraph]:
    """Lazily yield ``(start_line, paragraph_text)`` pairs for ``text``.

    Paragraphs are maximal runs of non-blank lines. Blank lines are never
    yielded; the gap between one paragraph's end and the next one's
    ``start_line`` tells the caller how many were skipped. Line numbers
    are 1-based.
    """

    current: List[str] = []
    start_line = 0
    for lineno, line in enumerate(_iter_lines(text), start=1):
        if is_blank(line):
            if current:
                yield Paragraph(start_line, "".join(current))
                current = []
            continue
        if not current:
            start_line = lineno
        current.append(line)
    if current:
        yield Paragraph(start_line, "".join(current))
