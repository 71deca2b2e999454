"""Deterministic document generators for performance benchmarks.

All generators produce fixed, reproducible documents. No random values.
Four tiers: 10-element flat, 100-element nested, 500-element deeply nested
and 1500-element flat.  Each tier provides both "reordered" (equivalent)
and "changed" pair generators.

The nested tiers keep per-level sibling counts small.  The 1500-element
tier puts every entry under one parent, where identical subtrees must pair
without going through the O(n^3) assignment solver.
"""

from __future__ import annotations

import pytest


def _entries(section: int, count: int, suffix: str = "") -> list[str]:
    return [
        f'<entry key="{section}-{i}">value {section}-{i}{suffix}</entry>'
        for i in range(count)
    ]


def _document(sections: list[str]) -> str:
    return f"<catalog>{''.join(sections)}</catalog>"


def _flat(count: int, reverse: bool = False, suffix: str = "") -> str:
    entries = _entries(0, count, suffix)
    if reverse:
        entries.reverse()
    return _document(entries)


def _nested(
    sections: int, per_section: int, reverse: bool = False, suffix: str = ""
) -> str:
    """``sections`` x ``per_section`` entries, optionally in reverse order."""
    blocks = []
    for s in range(sections):
        entries = _entries(s, per_section, suffix if s % 2 else "")
        if reverse:
            entries.reverse()
        blocks.append(f'<section n="{s}">{"".join(entries)}</section>')
    if reverse:
        blocks.reverse()
    return _document(blocks)


def _deep(groups: int, sections: int, per_section: int, reverse: bool = False) -> str:
    """Three levels: groups x sections x entries."""
    outer = []
    for g in range(groups):
        inner = []
        for s in range(sections):
            entries = _entries(g * sections + s, per_section)
            if reverse:
                entries.reverse()
            inner.append(f'<section n="{s}">{"".join(entries)}</section>')
        if reverse:
            inner.reverse()
        outer.append(f'<group g="{g}">{"".join(inner)}</group>')
    if reverse:
        outer.reverse()
    return _document(outer)


@pytest.fixture
def pair_10_reordered() -> tuple[str, str]:
    return _flat(10), _flat(10, reverse=True)


@pytest.fixture
def pair_10_changed() -> tuple[str, str]:
    return _flat(10), _flat(10, suffix="!")


@pytest.fixture
def pair_100_reordered() -> tuple[str, str]:
    return _nested(10, 10), _nested(10, 10, reverse=True)


@pytest.fixture
def pair_100_changed() -> tuple[str, str]:
    return _nested(10, 10), _nested(10, 10, suffix="!")


@pytest.fixture
def pair_500_reordered() -> tuple[str, str]:
    return _deep(5, 10, 10), _deep(5, 10, 10, reverse=True)


@pytest.fixture
def pair_500_changed() -> tuple[str, str]:
    control = _deep(5, 10, 10)
    return control, control.replace("value 7-", "value 7x-")


@pytest.fixture
def pair_1500_reordered() -> tuple[str, str]:
    return _flat(1500), _flat(1500, reverse=True)


@pytest.fixture
def pair_1500_changed() -> tuple[str, str]:
    test = _flat(1500, reverse=True).replace(">value 0-42<", ">value 0-42!<")
    return _flat(1500), test
