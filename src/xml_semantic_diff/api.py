"""Public API functions for xml-semantic-diff.

This module provides the user-facing functions: compare, compare_files,
is_equivalent and list_differences.  Each call creates a fresh XmlComparator
to guarantee zero global state mutation between calls.
"""

from __future__ import annotations

import os

from xml_semantic_diff.algorithm.config import CompareConfig
from xml_semantic_diff.comparator import XmlComparator
from xml_semantic_diff.loader import Document
from xml_semantic_diff.result import ComparisonResult

__all__ = ["compare", "compare_files", "is_equivalent", "list_differences"]


def compare(
    control: Document | str,
    test: Document | str,
    config: CompareConfig | None = None,
) -> ComparisonResult:
    """Compare two XML documents held in memory.

    Args:
        control: Expected document, as a ``Document`` or an XML string.
        test:    Actual document, as a ``Document`` or an XML string.
        config:  Comparison parameters.  Defaults to ``CompareConfig()``.

    Returns:
        A ``ComparisonResult`` whose ``differences`` are empty when the
        documents are equivalent regardless of sibling order and
        whitespace.

    Raises:
        MalformedXmlError: If either document is not well-formed.
    """
    return XmlComparator(config=config).compare(control, test)


def compare_files(
    control_path: str,
    test_path: str,
    resource_root: str | os.PathLike[str] | None = None,
    config: CompareConfig | None = None,
) -> ComparisonResult:
    """Load two documents below ``resource_root`` and compare them.

    Args:
        control_path:  Logical path of the expected document.
        test_path:     Logical path of the actual document.
        resource_root: Directory the logical paths are resolved against.
                       Defaults to the current working directory.
        config:        Comparison parameters.

    Raises:
        ResourceNotFoundError, DocumentReadError, DocumentDecodeError,
        MalformedXmlError: A document could not be turned into a tree.
    """
    comparator = XmlComparator(config=config, resource_root=resource_root)
    return comparator.aggregate(control_path, test_path)


def is_equivalent(
    control: Document | str,
    test: Document | str,
    config: CompareConfig | None = None,
) -> bool:
    """Return True if the two documents have no reportable difference."""
    return compare(control, test, config=config).is_equivalent()


def list_differences(
    control_path: str,
    test_path: str,
    resource_root: str | os.PathLike[str] | None = None,
    config: CompareConfig | None = None,
) -> list[str]:
    """Return one message per difference between two documents on disk.

    An empty list means the documents are equivalent.
    """
    return compare_files(
        control_path, test_path, resource_root=resource_root, config=config
    ).messages
