"""Decoding and encoding of the host's preprocessor JSON."""

from __future__ import annotations

import json
import pathlib
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, TextIO, Tuple

from .errors import BookFormatError
from .structures import Book, BookItem, Chapter, PartTitle, Separator

CHAPTER_KEY = "Chapter"
PART_TITLE_KEY = "PartTitle"
SEPARATOR_VALUE = "Separator"


@dataclass(frozen=True)
class PreprocessorContext:
    """What the host tells a preprocessor about the current build."""

    root: pathlib.Path
    config: Mapping[str, Any] = field(default_factory=dict)
    renderer: str = ""
    mdbook_version: str = ""

    def preprocessor_config(self, name: str) -> Optional[Mapping[str, Any]]:
        """Return the ``preprocessor.<name>`` table, if the book defines one."""

        preprocessors = self.config.get("preprocessor")
        if not isinstance(preprocessors, Mapping):
            return None
        table = preprocessors.get(name)
        if not isinstance(table, Mapping):
            return None
        return table


def _expect_mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise BookFormatError(
            f"Expected {what} to be an object, found {type(value).__name__}."
        )
    return value


def _expect_string(container: Mapping[str, Any], key: str, what: str) -> str:
    value = container.get(key)
    if not isinstance(value, str):
        raise BookFormatError(
            f"Expected {what} field '{key}' to be a string, "
            f"found {type(value).__name__}."
        )
    return value


def _parse_items(raw_items: Any, what: str) -> Tuple[BookItem, ...]:
    if not isinstance(raw_items, list):
        raise BookFormatError(
            f"Expected {what} to be a list, found {type(raw_items).__name__}."
        )
    return tuple(_parse_item(raw) for raw in raw_items)


def _parse_item(raw: Any) -> BookItem:
    if raw == SEPARATOR_VALUE:
        return Separator()
    if isinstance(raw, Mapping) and len(raw) == 1:
        ((kind, payload),) = raw.items()
        if kind == PART_TITLE_KEY:
            if not isinstance(payload, str):
                raise BookFormatError("Expected a part title to be a string.")
            return PartTitle(title=payload)
        if kind == CHAPTER_KEY:
            return _parse_chapter(_expect_mapping(payload, "a chapter"))
    raise BookFormatError(f"Unrecognised book item: {json.dumps(raw)[:80]}")


def _parse_chapter(raw: Mapping[str, Any]) -> Chapter:
    extra = {
        key: value
        for key, value in raw.items()
        if key not in {"name", "content", "sub_items"}
    }
    return Chapter(
        name=_expect_string(raw, "name", "chapter"),
        content=_expect_string(raw, "content", "chapter"),
        sub_items=_parse_items(raw.get("sub_items", []), "chapter sub_items"),
        extra=extra,
    )


def parse_book(data: Any) -> Book:
    """Build a :class:`Book` from the host's JSON representation."""

    raw = _expect_mapping(data, "the book")
    extra = {key: value for key, value in raw.items() if key != "sections"}
    return Book(sections=_parse_items(raw.get("sections"), "book sections"), extra=extra)


def _dump_item(item: BookItem) -> Any:
    if isinstance(item, Chapter):
        chapter: Dict[str, Any] = {
            "name": item.name,
            "content": item.content,
        }
        chapter.update(item.extra)
        chapter["sub_items"] = [_dump_item(sub_item) for sub_item in item.sub_items]
        return {CHAPTER_KEY: chapter}
    if isinstance(item, PartTitle):
        return {PART_TITLE_KEY: item.title}
    if isinstance(item, Separator):
        return SEPARATOR_VALUE
    raise TypeError(f"Unsupported book item: {item!r}")


def dump_book(book: Book) -> Dict[str, Any]:
    """Return the host's JSON representation of ``book``."""

    data: Dict[str, Any] = {"sections": [_dump_item(item) for item in book.sections]}
    data.update(book.extra)
    return data


def parse_context(data: Any) -> PreprocessorContext:
    raw = _expect_mapping(data, "the preprocessor context")
    config = raw.get("config", {})
    return PreprocessorContext(
        root=pathlib.Path(str(raw.get("root", "."))),
        config=_expect_mapping(config, "the book configuration"),
        renderer=str(raw.get("renderer", "")),
        mdbook_version=str(raw.get("mdbook_version", "")),
    )


def parse_input(stream: TextIO) -> Tuple[PreprocessorContext, Book]:
    """Read the ``[context, book]`` pair the host writes to stdin."""

    try:
        payload = json.load(stream)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise BookFormatError(f"Could not decode preprocessor input as JSON: {exc}") from exc

    if not isinstance(payload, list) or len(payload) != 2:
        raise BookFormatError(
            "Expected preprocessor input to be a [context, book] JSON array."
        )
    context_data, book_data = payload
    return parse_context(context_data), parse_book(book_data)


def write_book(book: Book, stream: TextIO) -> None:
    """Serialise ``book`` to ``stream`` in the host's format."""

    json.dump(dump_book(book), stream, ensure_ascii=False)
    stream.flush()


def flatten_chapters(items: Tuple[BookItem, ...]) -> List[Chapter]:
    """Flatten chapters depth-first, in reading order."""

    chapters: List[Chapter] = []
    for item in items:
        if isinstance(item, Chapter):
            chapters.append(item)
            chapters.extend(flatten_chapters(item.sub_items))
    return chapters
