"""Shared fixtures for the bookgettext test-suite."""

import json

import polib
import pytest

from bookgettext.catalog import Catalog


@pytest.fixture
def write_po(tmp_path):
    """Write a PO file from a ``{msgid: msgstr}`` mapping and return its path."""

    def _write(mapping, name="fr.po", obsolete=()):
        po = polib.POFile()
        po.metadata = {"Content-Type": "text/plain; charset=UTF-8"}
        for source, target in mapping.items():
            po.append(polib.POEntry(msgid=source, msgstr=target))
        for source, target in obsolete:
            po.append(polib.POEntry(msgid=source, msgstr=target, obsolete=True))
        path = tmp_path / name
        po.save(str(path))
        return path

    return _write


@pytest.fixture
def french_catalog():
    return Catalog.from_mapping(
        {
            "Hello": "Bonjour",
            "Untranslated": "",
            "# Getting Started": "# Premiers pas",
            "Getting Started": "Premiers pas",
            "Line one\nline two": "Ligne un\nligne deux",
        }
    )


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    monkeypatch.delenv("BOOKGETTEXT_PO_FILE", raising=False)


@pytest.fixture
def preprocessor_input(tmp_path):
    """Build the ``[context, book]`` JSON the host writes to stdin."""

    def _make(book, config=None, version="0.4.40"):
        context = {
            "root": str(tmp_path),
            "config": config if config is not None else {},
            "renderer": "html",
            "mdbook_version": version,
        }
        return json.dumps([context, book])

    return _make
