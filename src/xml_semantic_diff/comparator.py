"""XmlComparator: orchestrator wiring loader, builder, engine and classifier.

This is the central wiring layer between the raw comparison walk and the
public API.  It turns two documents into a ``ComparisonResult`` holding the
classified differences in discovery order.

Architecture:
- aggregate() loads both documents through a ``DocumentSource`` (wrapped in a
  per-instance ``DocumentCache``), then hands them to compare().
- compare() parses both documents into fresh trees, binds a ``NodeMatcher``
  to the pair, lets the ``ComparisonEngine`` produce the event tuple, and
  folds it through the classifier.
- Trees are never reused across calls.  The only state an instance keeps
  between calls is its document cache, which affects loading speed, never
  results.
"""

from __future__ import annotations

import logging
import os
import time
from typing import TYPE_CHECKING, Any

from xml_semantic_diff.algorithm.classifier import classify_all
from xml_semantic_diff.algorithm.config import CompareConfig
from xml_semantic_diff.algorithm.engine import ComparisonEngine
from xml_semantic_diff.algorithm.matcher import NodeMatcher
from xml_semantic_diff.cache import DocumentCache
from xml_semantic_diff.loader import Document, DocumentLoader
from xml_semantic_diff.result import ComparisonResult
from xml_semantic_diff.tree.builder import TreeBuilder

if TYPE_CHECKING:
    from xml_semantic_diff.algorithm.selectors import ElementSelector
    from xml_semantic_diff.protocols import DocumentSource

__all__ = ["XmlComparator"]

logger = logging.getLogger(__name__)


class XmlComparator:
    """Orchestrator for unordered XML comparison.

    Example::

        from xml_semantic_diff.comparator import XmlComparator

        cmp = XmlComparator(resource_root="tests/resources")
        result = cmp.aggregate("control.xml", "test.xml")
        if not result.is_equivalent():
            for message in result.messages:
                print(message)
    """

    def __init__(
        self,
        loader: DocumentSource | None = None,
        selector: ElementSelector | None = None,
        config: CompareConfig | None = None,
        resource_root: str | os.PathLike[str] | None = None,
        max_cache_size: int = 32,
    ) -> None:
        """Initialise the comparator.

        Args:
            loader: A DocumentSource-conformant object.  Defaults to a
                ``DocumentLoader`` rooted at ``resource_root``.
            selector: Element pairing policy.  Overrides
                ``config.match_strategy`` when given.
            config: Comparison parameters.  Defaults to ``CompareConfig()``.
            resource_root: Root for the default loader; ignored when
                ``loader`` is given.
            max_cache_size: Maximum number of documents held in the
                per-instance LRU cache.  This is an infrastructure parameter,
                not part of ``CompareConfig``.
        """
        self._config: CompareConfig = config if config is not None else CompareConfig()
        raw_loader: Any = (
            loader if loader is not None else DocumentLoader(resource_root)
        )
        self._loader = DocumentCache(raw_loader, max_size=max_cache_size)
        self._engine = ComparisonEngine(selector=selector, config=self._config)
        self._builder = TreeBuilder()

    @property
    def config(self) -> CompareConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def aggregate(self, control_path: str, test_path: str) -> ComparisonResult:
        """Load two documents by logical path and compare them.

        Raises:
            ResourceNotFoundError, DocumentReadError, DocumentDecodeError:
                A document could not be loaded.
            MalformedXmlError: A document is not well-formed.
        """
        control = self._loader.load(control_path)
        test = self._loader.load(test_path)
        return self.compare(control, test)

    def compare(
        self, control: Document | str, test: Document | str
    ) -> ComparisonResult:
        """Compare two in-memory documents (or raw XML strings).

        The comparison never raises because the documents differ; only a
        document that cannot be parsed raises ``MalformedXmlError``.
        """
        t0 = time.perf_counter()

        control_doc = _as_document(control, "<control>")
        test_doc = _as_document(test, "<test>")
        control_tree = self._builder.parse(control_doc)
        test_tree = self._builder.parse(test_doc)

        matcher = NodeMatcher(
            control_tree,
            test_tree,
            self._engine.selector,
            normalize_whitespace=self._config.normalize_whitespace,
        )
        events = self._engine.compare(control_tree, test_tree, matcher)
        differences = classify_all(events, self._config.max_text_preview)

        elapsed_ms = (time.perf_counter() - t0) * 1000.0
        logger.debug(
            "compared %s with %s: %d events, %d differences in %.2f ms",
            control_doc.source,
            test_doc.source,
            len(events),
            len(differences),
            elapsed_ms,
        )

        return ComparisonResult(
            differences=differences,
            control_source=control_doc.source,
            test_source=test_doc.source,
            computation_time_ms=elapsed_ms,
        )


def _as_document(value: Document | str, source: str) -> Document:
    if isinstance(value, Document):
        return value
    return Document.from_string(value, source=source)
