"""TextNormalizer: makes whitespace-only text differences comparable.

Text content is preserved raw in the tree; normalization happens only when
two texts are compared.  The normalized form:

- strips leading and trailing whitespace
- collapses every internal run of whitespace (spaces, tabs, newlines,
  carriage returns) to a single space

so ``"a b"``, ``"a  b"`` and ``"\\n  a\\tb \\n"`` all normalize to ``"a b"``.
"""

import re

# XML whitespace per the XML 1.0 ``S`` production (space, tab, CR, LF).
_XML_WHITESPACE = re.compile(r"[ \t\r\n]+")


class TextNormalizer:
    """Normalizes XML character data for whitespace-insensitive comparison.

    Example usage:
        normalizer = TextNormalizer()
        normalizer.normalize("  a \\n  b ")   # "a b"
        normalizer.normalize("")              # ""
    """

    def normalize(self, text: str) -> str:
        """Trim ``text`` and collapse internal whitespace runs to one space.

        Non-XML whitespace such as a non-breaking space is content and is
        left untouched.
        """
        return _XML_WHITESPACE.sub(" ", text).strip(" ")

    def is_blank(self, text: str) -> bool:
        """True when ``text`` consists only of XML whitespace."""
        return not self.normalize(text)
