"""Document and DocumentLoader: resolve logical paths to decoded XML text.

A ``DocumentLoader`` resolves a logical path (e.g. ``"xml/control.xml"``)
against a resource root and returns the content decoded strictly as UTF-8.
The root is either a filesystem directory or an ``importlib.resources``
Traversable, so documents shipped inside a test package can be addressed
the same way as files on disk.

All I/O of a comparison happens here, once, before any tree is built.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, Any

from xml_semantic_diff.exceptions import (
    DocumentDecodeError,
    DocumentReadError,
    ResourceNotFoundError,
)

if TYPE_CHECKING:
    from importlib.resources.abc import Traversable

__all__ = ["Document", "DocumentLoader"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Document:
    """Immutable XML text plus the logical path it was loaded from.

    Attributes:
        source: Logical path of the document, or ``"<string>"`` for text
            supplied in memory.
        text:   The decoded document content.
    """

    source: str
    text: str

    @classmethod
    def from_string(cls, text: str, source: str = "<string>") -> Document:
        return cls(source=source, text=text)


class DocumentLoader:
    """Loads documents from a resource root.

    Satisfies the ``DocumentSource`` Protocol structurally.

    Example::

        loader = DocumentLoader("tests/resources")
        doc = loader.load("xml/control.xml")

        packaged = DocumentLoader.from_package("myproject.fixtures")
        doc = packaged.load("control.xml")
    """

    def __init__(
        self,
        resource_root: str | os.PathLike[str] | Traversable | None = None,
    ) -> None:
        """Initialise the loader.

        Args:
            resource_root: Directory (or Traversable) logical paths are
                resolved against.  Defaults to the current working directory.
        """
        if resource_root is None:
            resource_root = Path.cwd()
        elif isinstance(resource_root, (str, os.PathLike)):
            resource_root = Path(resource_root)
        self._root: Any = resource_root

    @classmethod
    def from_package(cls, package: str) -> DocumentLoader:
        """Create a loader rooted at an importable package's resources."""
        return cls(resources.files(package))

    @property
    def resource_root(self) -> Any:
        return self._root

    def load(self, logical_path: str) -> Document:
        """Read the document at ``logical_path``.

        Raises:
            ResourceNotFoundError: Nothing readable exists at the path, or the
                path is absolute or escapes the resource root.
            DocumentReadError: The path could not be inspected or read.
            DocumentDecodeError: The content is not valid UTF-8.
        """
        try:
            target = self._resolve(logical_path)
            found = target is not None and target.is_file()
        except OSError as exc:
            raise DocumentReadError(exc.strerror or str(exc), logical_path) from exc
        if not found:
            raise ResourceNotFoundError("resource not found", logical_path)

        try:
            raw: bytes = target.read_bytes()
        except FileNotFoundError as exc:
            raise ResourceNotFoundError(str(exc), logical_path) from exc
        except OSError as exc:
            raise DocumentReadError(exc.strerror or str(exc), logical_path) from exc

        try:
            # utf-8-sig: a leading byte-order mark is not content.
            text = raw.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise DocumentDecodeError(exc.reason, logical_path, exc.start) from exc

        logger.debug("loaded %s (%d bytes)", logical_path, len(raw))
        return Document(source=logical_path, text=text)

    def _resolve(self, logical_path: str) -> Any:
        """Return the root-relative target, or None when the path is not allowed."""
        parts = PurePosixPath(logical_path.replace("\\", "/"))
        if parts.is_absolute() or ".." in parts.parts or not parts.parts:
            return None

        target = self._root.joinpath(*parts.parts)
        if isinstance(self._root, Path):
            # Symlinks may still point outside the root.
            try:
                target.resolve().relative_to(self._root.resolve())
            except ValueError:
                return None
        return target
