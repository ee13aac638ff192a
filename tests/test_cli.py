"""End-to-end tests for the preprocessor command line."""

import io
import json

import pytest

from bookgettext import cli

BOOK = {
    "sections": [
        {"PartTitle": "User Guide"},
        {
            "Chapter": {
                "name": "Introduction",
                "content": "# Introduction\n\nHello\n\n```\na\n\n\nb\n```\n",
                "number": [1],
                "sub_items": [],
                "path": "intro.md",
                "source_path": "intro.md",
                "parent_names": [],
            }
        },
        "Separator",
    ],
    "__non_exhaustive": None,
}


@pytest.fixture
def french_po(write_po):
    return write_po(
        {
            "User Guide": "Guide de l’utilisateur",
            "Introduction": "Introduction",
            "# Introduction": "# Présentation",
            "Hello": "Bonjour",
        },
        name="fr.po",
    )


def _run(monkeypatch, capsys, stdin_text, argv=()):
    monkeypatch.setattr("sys.stdin", io.StringIO(stdin_text))
    exit_code = cli.main(list(argv))
    captured = capsys.readouterr()
    return exit_code, captured.out, captured.err


def test_supports_every_renderer():
    assert cli.main(["supports", "html"]) == 0
    assert cli.main(["supports", "epub"]) == 0


def test_translates_book(monkeypatch, capsys, french_po, preprocessor_input):
    stdin_text = preprocessor_input(
        BOOK, config={"preprocessor": {"gettext": {"po-file": french_po.name}}}
    )
    exit_code, out, err = _run(monkeypatch, capsys, stdin_text)

    assert exit_code == 0
    book = json.loads(out)
    part, chapter, separator = book["sections"]
    assert part == {"PartTitle": "Guide de l’utilisateur"}
    assert chapter["Chapter"]["content"] == (
        "# Présentation\n\nBonjour\n\n```\na\n\n\nb\n```\n"
    )
    assert chapter["Chapter"]["path"] == "intro.md"
    assert separator == "Separator"
    assert book["__non_exhaustive"] is None


def test_missing_configuration_writes_nothing(monkeypatch, capsys, preprocessor_input):
    exit_code, out, err = _run(monkeypatch, capsys, preprocessor_input(BOOK))

    assert exit_code == 1
    assert out == ""
    assert "Could not read preprocessor.gettext configuration" in err


def test_unparseable_catalog_writes_nothing(
    monkeypatch, capsys, tmp_path, preprocessor_input
):
    (tmp_path / "broken.po").write_text("this is not a PO file\n", encoding="utf-8")
    stdin_text = preprocessor_input(
        BOOK, config={"preprocessor": {"gettext": {"po-file": "broken.po"}}}
    )
    exit_code, out, err = _run(monkeypatch, capsys, stdin_text)

    assert exit_code == 1
    assert out == ""
    assert "as PO file" in err


def test_malformed_input(monkeypatch, capsys):
    exit_code, out, err = _run(monkeypatch, capsys, "{}")
    assert exit_code == 1
    assert out == ""


def test_undecodable_input(monkeypatch, capsys):
    stdin = io.TextIOWrapper(io.BytesIO(b'[{"root": "\xff"}, {}]'), encoding="utf-8")
    monkeypatch.setattr("sys.stdin", stdin)
    exit_code = cli.main([])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert captured.out == ""
    assert "Could not decode preprocessor input" in captured.err


@pytest.mark.parametrize(
    "version,expected",
    [("0.4.40", True), ("0.4.0", True), ("0.5.0", False), ("1.0", False), ("", False)],
)
def test_host_version_supported(version, expected):
    assert cli.host_version_supported(version) is expected
