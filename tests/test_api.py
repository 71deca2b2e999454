"""Unit tests for the public API functions.

compare, compare_files, is_equivalent and list_differences.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from xml_semantic_diff import (
    CompareConfig,
    ComparisonResult,
    DifferenceCategory,
    Document,
    MatchStrategy,
    ResourceNotFoundError,
    compare,
    compare_files,
    is_equivalent,
    list_differences,
)


@pytest.fixture
def resources(tmp_path: Path) -> Path:
    (tmp_path / "xml").mkdir()
    (tmp_path / "xml" / "control.xml").write_text(
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        "<catalog>\n"
        '  <book id="1"><title>Dune</title></book>\n'
        '  <book id="2"><title>Emma</title></book>\n'
        "</catalog>\n",
        encoding="utf-8",
    )
    (tmp_path / "xml" / "reordered.xml").write_text(
        "<catalog>"
        '<book id="2"><title>Emma</title></book>'
        '<book id="1"><title>  Dune </title></book>'
        "</catalog>",
        encoding="utf-8",
    )
    (tmp_path / "xml" / "changed.xml").write_text(
        "<catalog>"
        '<book id="1"><title>Dune Messiah</title></book>'
        "</catalog>",
        encoding="utf-8",
    )
    return tmp_path


class TestCompare:
    """Tests for the compare() function."""

    def test_returns_comparison_result(self) -> None:
        result = compare("<r/>", "<r/>")
        assert isinstance(result, ComparisonResult)
        assert result.is_equivalent()

    def test_accepts_documents(self) -> None:
        result = compare(Document.from_string("<r/>", "a"), Document.from_string("<r/>", "b"))
        assert (result.control_source, result.test_source) == ("a", "b")

    def test_config_passthrough(self) -> None:
        result = compare(
            '<r><a k="1"/></r>',
            '<r><a k="2"/></r>',
            config=CompareConfig(match_strategy=MatchStrategy.NAME),
        )
        assert [r.category for r in result] == [DifferenceCategory.ATTRIBUTE_VALUE]


class TestIsEquivalent:
    def test_reordered(self) -> None:
        assert is_equivalent("<r><a/><b/></r>", "<r><b/><a/></r>")

    def test_changed(self) -> None:
        assert not is_equivalent("<r>1</r>", "<r>2</r>")

    def test_config_passthrough(self) -> None:
        config = CompareConfig(normalize_whitespace=False)
        assert not is_equivalent("<r>a</r>", "<r> a</r>", config=config)


class TestCompareFiles:
    def test_reordered_files_equivalent(self, resources: Path) -> None:
        result = compare_files(
            "xml/control.xml", "xml/reordered.xml", resource_root=resources
        )
        assert result.is_equivalent()
        assert result.control_source == "xml/control.xml"

    def test_missing_file_raises(self, resources: Path) -> None:
        with pytest.raises(ResourceNotFoundError):
            compare_files("xml/control.xml", "xml/nope.xml", resource_root=resources)


class TestListDifferences:
    def test_empty_for_equivalent_files(self, resources: Path) -> None:
        assert list_differences(
            "xml/control.xml", "xml/reordered.xml", resource_root=resources
        ) == []

    def test_plain_messages(self, resources: Path) -> None:
        messages = list_differences(
            "xml/control.xml", "xml/changed.xml", resource_root=resources
        )
        assert messages == [
            'Text difference at /catalog/book/title: expected "Dune" '
            'but found "Dune Messiah"',
            'Missing node on test side: expected <book id="2"> at /catalog/book',
        ]
        assert all(isinstance(m, str) for m in messages)

    def test_fresh_state_per_call(self, resources: Path) -> None:
        first = list_differences("xml/control.xml", "xml/changed.xml", resource_root=resources)
        (resources / "xml" / "changed.xml").write_text(
            (resources / "xml" / "reordered.xml").read_text(encoding="utf-8"),
            encoding="utf-8",
        )
        second = list_differences("xml/control.xml", "xml/changed.xml", resource_root=resources)
        assert first != []
        assert second == []
