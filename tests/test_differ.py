"""Tests for symbol set differences and archive comparison."""

from __future__ import annotations

from pathlib import Path

import pytest

from doccarchive.differ import ArchiveDiffer, diff
from doccarchive.models import IdentifierURL
from doccarchive.symbols import SymbolSet

from tests._fixtures.archive_builder import ArchiveBuilder


def _urls(*paths: str) -> list[IdentifierURL]:
    return [IdentifierURL.parse(f"doc://pkg/documentation/{path}") for path in paths]


SAMPLES = [
    ((), ()),
    (("Foo",), ()),
    ((), ("Foo",)),
    (("Foo", "Bar"), ("Bar", "Baz")),
    (("Foo", "Bar", "Baz"), ("Foo", "Bar", "Baz")),
    (("Kit", "Kit/Button", "Kit/Label"), ("Kit", "Kit/Button/init()", "Kit/Label")),
]


@pytest.mark.parametrize(("old", "new"), SAMPLES)
def test_diff_is_a_set_difference(old: tuple[str, ...], new: tuple[str, ...]) -> None:
    old_urls, new_urls = _urls(*old), _urls(*new)

    result = diff(old_urls, new_urls)

    assert set(result.additions) == set(new_urls) - set(old_urls)
    assert set(result.removals) == set(old_urls) - set(new_urls)
    assert not set(result.additions) & set(result.removals)


@pytest.mark.parametrize(("old", "new"), SAMPLES)
def test_diff_against_itself_is_empty(old: tuple[str, ...], new: tuple[str, ...]) -> None:
    for paths in (old, new):
        result = diff(_urls(*paths), _urls(*paths))

        assert result.is_empty
        assert len(result.additions) == 0
        assert len(result.removals) == 0


def test_diff_with_empty_archives() -> None:
    symbols = _urls("Foo", "Bar")

    assert list(diff([], symbols).additions) == symbols
    assert list(diff(symbols, []).removals) == symbols
    assert diff([], []).is_empty


def test_diff_scenario_produces_external_links() -> None:
    initial = _urls("Foo", "Bar")
    newer = _urls("Bar", "Baz")

    result = diff(initial, newer)

    assert list(result.additions) == _urls("Baz")
    assert list(result.removals) == _urls("Foo")
    assert result.addition_links == ["doc:documentation/Baz/"]
    assert result.removal_links == ["doc:documentation/Foo/"]


def test_diff_collapses_duplicates_within_an_archive() -> None:
    result = diff(_urls("Foo"), _urls("Bar", "Bar", "Foo", "Bar"))

    assert list(result.additions) == _urls("Bar")
    assert result.removals == SymbolSet()


def test_diff_preserves_discovery_order() -> None:
    result = diff([], _urls("Zeta", "Alpha", "Mid"))

    assert result.addition_links == [
        "doc:documentation/Zeta/",
        "doc:documentation/Alpha/",
        "doc:documentation/Mid/",
    ]


def test_external_links_collapse_urls_sharing_a_link() -> None:
    urls = [
        IdentifierURL.parse("doc://one/documentation/Foo"),
        IdentifierURL.parse("doc://two/documentation/Foo"),
    ]

    result = diff([], urls)

    assert len(result.additions) == 2
    assert result.addition_links == ["doc:documentation/Foo/"]


def test_archive_differ_compares_archives(archive_builder: ArchiveBuilder) -> None:
    initial = archive_builder.archive(
        "v1/Kit.doccarchive",
        symbols=["doc://pkg/documentation/Kit/Foo", "doc://pkg/documentation/Kit/Bar"],
        files={"data/tutorials/notes.json": '{"kind": "article"}'},
    )
    newer = archive_builder.archive(
        "v2/Kit.doccarchive",
        symbols=["doc://pkg/documentation/Kit/Bar", "doc://pkg/documentation/Kit/Baz"],
    )

    comparison = ArchiveDiffer().compare(initial, newer)

    assert comparison.framework_name == "Kit"
    assert comparison.initial == initial
    assert comparison.result.addition_links == ["doc:documentation/Kit/Baz/"]
    assert comparison.result.removal_links == ["doc:documentation/Kit/Foo/"]


def test_archive_differ_falls_back_to_newer_archive_name(
    archive_builder: ArchiveBuilder, tmp_path: Path
) -> None:
    initial = tmp_path / "missing.doccarchive"
    newer = archive_builder.archive("Kit.doccarchive", symbols=["doc://pkg/documentation/Kit/Baz"])

    comparison = ArchiveDiffer().compare(initial, newer)

    assert comparison.framework_name == "Kit"
    assert comparison.result.addition_links == ["doc:documentation/Kit/Baz/"]
    assert len(comparison.result.removals) == 0


def test_archive_differ_falls_back_to_placeholder(tmp_path: Path) -> None:
    differ = ArchiveDiffer(placeholder_name="Unknown")

    comparison = differ.compare(tmp_path / "a.doccarchive", tmp_path / "b.doccarchive")

    assert comparison.framework_name == "Unknown"
    assert comparison.result.is_empty
