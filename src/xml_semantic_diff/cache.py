"""DocumentCache: LRU-backed caching proxy for any DocumentSource.

Wraps any DocumentSource-conformant object and keeps loaded documents in
memory.  A control document compared against many test documents is read
and decoded once.  LRU eviction occurs silently when ``max_size`` is
exceeded.

Each ``DocumentCache`` instance maintains its own ``LRUCache``; there is no
class-level shared state, so two instances never interfere with each other.
Failed loads are not cached.

Example::

    from xml_semantic_diff.cache import DocumentCache
    from xml_semantic_diff.loader import DocumentLoader

    cache = DocumentCache(DocumentLoader("tests/resources"), max_size=32)
    doc = cache.load("control.xml")        # hits the filesystem
    doc_again = cache.load("control.xml")  # served from memory
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from cachetools import LRUCache

if TYPE_CHECKING:
    from xml_semantic_diff.loader import Document
    from xml_semantic_diff.protocols import DocumentSource

logger = logging.getLogger(__name__)


class DocumentCache:
    """LRU-backed caching proxy around any DocumentSource.

    Satisfies the ``DocumentSource`` Protocol structurally.

    Args:
        source: Any object satisfying the ``DocumentSource`` Protocol.
        max_size: Maximum number of documents held in memory.  Defaults
            to 32.
    """

    def __init__(self, source: DocumentSource, max_size: int = 32) -> None:
        self._source: Any = source
        self._cache: LRUCache[str, Document] = LRUCache(maxsize=max_size)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def max_size(self) -> int:
        """The maximum number of documents this cache can hold."""
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        """The current number of documents stored in the cache."""
        return int(self._cache.currsize)

    @property
    def source(self) -> Any:
        """The wrapped document source."""
        return self._source

    # ------------------------------------------------------------------
    # DocumentSource Protocol surface
    # ------------------------------------------------------------------

    def load(self, logical_path: str) -> Document:
        """Return the document at ``logical_path``; only misses hit the source."""
        cached = self._cache.get(logical_path)
        if cached is not None:
            logger.debug("cache hit for %s", logical_path)
            return cached

        document: Document = self._source.load(logical_path)
        self._cache[logical_path] = document
        return document

    def clear(self) -> None:
        """Drop every cached document."""
        self._cache.clear()
