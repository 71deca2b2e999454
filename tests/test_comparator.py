"""Tests for XmlComparator, the orchestrator for unordered XML comparison.

Covers:
- Core comparison functionality (identical, reordered, changed documents)
- String and Document inputs, source labels
- aggregate(): loading through the per-instance document cache
- Selector and config wiring
- Statelessness (two identical calls give identical differences)
- computation_time_ms is always a non-negative float
"""

from __future__ import annotations

from pathlib import Path

import pytest

from xml_semantic_diff.algorithm.config import CompareConfig, MatchStrategy
from xml_semantic_diff.algorithm.selectors import ByName
from xml_semantic_diff.comparator import XmlComparator
from xml_semantic_diff.exceptions import MalformedXmlError, ResourceNotFoundError
from xml_semantic_diff.loader import Document
from xml_semantic_diff.result import DifferenceCategory

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class _CountingSource:
    def __init__(self, docs: dict[str, str]) -> None:
        self.docs = docs
        self.calls: list[str] = []

    def load(self, logical_path: str) -> Document:
        self.calls.append(logical_path)
        if logical_path not in self.docs:
            raise ResourceNotFoundError("resource not found", logical_path)
        return Document(source=logical_path, text=self.docs[logical_path])


# ---------------------------------------------------------------------------
# Core functionality
# ---------------------------------------------------------------------------


class TestCoreComparison:
    def test_identical_documents_are_equivalent(self) -> None:
        result = XmlComparator().compare("<r><a>1</a></r>", "<r><a>1</a></r>")
        assert result.is_equivalent()
        assert result.differences == ()

    def test_reordered_documents_are_equivalent(self) -> None:
        control = '<r><item id="1">a</item><item id="2">b</item><x/></r>'
        test = '<r><x/><item id="2">b</item><item id="1">a</item></r>'
        assert XmlComparator().compare(control, test).is_equivalent()

    def test_text_change_reported(self) -> None:
        result = XmlComparator().compare("<r><a>1</a></r>", "<r><a>2</a></r>")
        (record,) = result.differences
        assert record.category == DifferenceCategory.VALUE

    def test_several_differences_in_walk_order(self) -> None:
        control = "<r><a>1</a><b/><c>3</c></r>"
        test = "<r><c>4</c><a>2</a><d/></r>"
        result = XmlComparator().compare(control, test)
        assert [r.category for r in result] == [
            DifferenceCategory.VALUE,
            DifferenceCategory.STRUCTURE_MISSING,
            DifferenceCategory.VALUE,
            DifferenceCategory.STRUCTURE_EXTRA,
        ]

    def test_malformed_document_raises(self) -> None:
        with pytest.raises(MalformedXmlError) as exc_info:
            XmlComparator().compare("<r/>", "<r>")
        assert exc_info.value.source == "<test>"

    def test_unencodable_string_raises_document_error(self) -> None:
        with pytest.raises(MalformedXmlError) as exc_info:
            XmlComparator().compare("<r>\ud800</r>", "<r/>")
        assert exc_info.value.source == "<control>"


class TestInputs:
    def test_string_sources_are_labelled(self) -> None:
        result = XmlComparator().compare("<r/>", "<r/>")
        assert result.control_source == "<control>"
        assert result.test_source == "<test>"

    def test_document_sources_are_kept(self) -> None:
        result = XmlComparator().compare(
            Document(source="expected.xml", text="<r/>"),
            Document(source="actual.xml", text="<r/>"),
        )
        assert result.control_source == "expected.xml"
        assert result.test_source == "actual.xml"

    def test_computation_time_non_negative(self) -> None:
        result = XmlComparator().compare("<r/>", "<r/>")
        assert isinstance(result.computation_time_ms, float)
        assert result.computation_time_ms >= 0.0


# ---------------------------------------------------------------------------
# aggregate()
# ---------------------------------------------------------------------------


class TestAggregate:
    def test_loads_from_resource_root(self, tmp_path: Path) -> None:
        (tmp_path / "control.xml").write_text("<r><a/><b/></r>", encoding="utf-8")
        (tmp_path / "test.xml").write_text("<r><b/><a/></r>", encoding="utf-8")
        result = XmlComparator(resource_root=tmp_path).aggregate("control.xml", "test.xml")
        assert result.is_equivalent()
        assert result.control_source == "control.xml"
        assert result.test_source == "test.xml"

    def test_missing_document_raises(self, tmp_path: Path) -> None:
        (tmp_path / "control.xml").write_text("<r/>", encoding="utf-8")
        with pytest.raises(ResourceNotFoundError):
            XmlComparator(resource_root=tmp_path).aggregate("control.xml", "nope.xml")

    def test_custom_source_used(self) -> None:
        source = _CountingSource({"a.xml": "<r/>", "b.xml": "<r/>"})
        assert XmlComparator(loader=source).aggregate("a.xml", "b.xml").is_equivalent()
        assert source.calls == ["a.xml", "b.xml"]

    def test_control_loaded_once_across_comparisons(self) -> None:
        source = _CountingSource({"c.xml": "<r/>", "t1.xml": "<r/>", "t2.xml": "<s/>"})
        cmp = XmlComparator(loader=source)
        assert cmp.aggregate("c.xml", "t1.xml").is_equivalent()
        assert not cmp.aggregate("c.xml", "t2.xml").is_equivalent()
        assert source.calls == ["c.xml", "t1.xml", "t2.xml"]

    def test_same_path_loaded_once_per_comparison(self) -> None:
        source = _CountingSource({"c.xml": "<r/>"})
        cmp = XmlComparator(loader=source, max_cache_size=1)
        cmp.aggregate("c.xml", "c.xml")
        assert source.calls == ["c.xml"]


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------


class TestWiring:
    def test_default_config(self) -> None:
        assert XmlComparator().config == CompareConfig()

    def test_name_strategy_reports_attribute_values(self) -> None:
        cmp = XmlComparator(config=CompareConfig(match_strategy=MatchStrategy.NAME))
        (record,) = cmp.compare('<r><a k="1"/></r>', '<r><a k="2"/></r>').differences
        assert record.category == DifferenceCategory.ATTRIBUTE_VALUE

    def test_explicit_selector(self) -> None:
        (record,) = XmlComparator(selector=ByName()).compare(
            '<r><a k="1"/></r>', '<r><a/></r>'
        ).differences
        assert record.category == DifferenceCategory.ATTRIBUTE

    def test_strict_reports_unmatched(self) -> None:
        (record,) = XmlComparator().compare(
            '<r><a k="1"/></r>', '<r><a k="2"/></r>'
        ).differences
        assert record.category == DifferenceCategory.STRUCTURE_UNMATCHED

    def test_whitespace_setting_forwarded(self) -> None:
        cmp = XmlComparator(config=CompareConfig(normalize_whitespace=False))
        assert not cmp.compare("<r>a b</r>", "<r> a b</r>").is_equivalent()

    def test_prolog_setting_forwarded(self) -> None:
        control, test = "<!DOCTYPE r><r/>", "<!DOCTYPE s><r/>"
        assert not XmlComparator().compare(control, test).is_equivalent()
        cmp = XmlComparator(config=CompareConfig(compare_prolog=False))
        assert cmp.compare(control, test).is_equivalent()


class TestStatelessness:
    def test_repeated_calls_identical(self) -> None:
        cmp = XmlComparator()
        control = "<r><a>1</a><b/></r>"
        test = "<r><a>2</a></r>"
        assert cmp.compare(control, test).differences == cmp.compare(control, test).differences
