"""Translation catalog backed by GNU gettext PO files."""

from __future__ import annotations

import pathlib
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Optional

import polib

from .errors import CatalogLoadError
from .logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CatalogEntry:
    """A source string and its (possibly empty) translation."""

    source: str
    target: str = ""

    def translation(self) -> Optional[str]:
        """Return the target, or ``None`` when the entry is untranslated."""

        return self.target or None


class Catalog:
    """Read-only lookup of catalog entries by exact source text."""

    def __init__(self, entries: Iterable[CatalogEntry] = ()) -> None:
        table: Dict[str, CatalogEntry] = {}
        for entry in entries:
            # gettext resolves duplicates to the first definition.
            table.setdefault(entry.source, entry)
        self._entries: Mapping[str, CatalogEntry] = MappingProxyType(table)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> "Catalog":
        return cls(CatalogEntry(source, target) for source, target in mapping.items())

    def find_entry(self, source: str) -> Optional[CatalogEntry]:
        return self._entries.get(source)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, source: object) -> bool:
        return source in self._entries

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries.values())

    def __repr__(self) -> str:
        return f"Catalog({len(self)} entries)"


def load_catalog(path: pathlib.Path) -> Catalog:
    """Parse a PO file into a :class:`Catalog`."""

    # polib parses any string that is not an existing path as PO content.
    if not path.is_file():
        raise CatalogLoadError(f"Could not parse {path} as PO file: file not found")
    try:
        po = polib.pofile(str(path), check_for_duplicates=False)
    except (OSError, ValueError) as exc:
        raise CatalogLoadError(f"Could not parse {path} as PO file: {exc}") from exc

    entries = [
        CatalogEntry(source=entry.msgid, target=entry.msgstr)
        for entry in po
        if entry.msgid and not entry.obsolete
    ]
    catalog = Catalog(entries)
    logger.debug(
        "Loaded %d entries from %s (%d%% translated).",
        len(catalog),
        path,
        po.percent_translated(),
    )
    return catalog
