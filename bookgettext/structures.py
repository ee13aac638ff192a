"""Core data structures for the bookgettext preprocessor."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, NamedTuple, Tuple, Union


class Paragraph(NamedTuple):
    """A maximal run of non-blank lines inside a text unit."""

    start_line: int
    text: str

    @property
    def terminator(self) -> str:
        if self.text.endswith("\r\n"):
            return "\r\n"
        if self.text.endswith("\n"):
            return "\n"
        return ""

    @property
    def source(self) -> str:
        """The paragraph without its final line terminator (the catalog key)."""

        terminator = self.terminator
        return self.text[: len(self.text) - len(terminator)]

    @property
    def line_count(self) -> int:
        return self.source.count("\n") + 1


@dataclass(frozen=True)
class Separator:
    """A horizontal rule between groups of chapters. Carries no text."""


@dataclass(frozen=True)
class PartTitle:
    """A heading that groups the chapters following it."""

    title: str


@dataclass(frozen=True)
class Chapter:
    """A chapter with its title, Markdown body and nested sub-chapters.

    ``extra`` holds the host's remaining chapter fields (number, path,
    source path, parent names) so they survive a round trip untouched.
    """

    name: str
    content: str
    sub_items: Tuple["BookItem", ...] = ()
    extra: Mapping[str, Any] = field(default_factory=dict)


BookItem = Union[Chapter, PartTitle, Separator]


@dataclass(frozen=True)
class Book:
    """The ordered top-level items of a book."""

    sections: Tuple[BookItem, ...] = ()
    extra: Mapping[str, Any] = field(default_factory=dict)
