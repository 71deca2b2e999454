"""pytest plugin for xml-semantic-diff.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from xml_semantic_diff import CompareConfig, Document, compare

_BANNER = "=" * 72


@pytest.fixture(scope="session")
def assert_xml_equivalent() -> Any:
    """Fixture that returns a callable XML equivalence asserter.

    The fixture is session-scoped because the returned callable is stateless
    (delegates to compare() which creates a fresh XmlComparator per call).

    Usage in tests::

        def test_reordered(assert_xml_equivalent):
            assert_xml_equivalent(
                "<root><a/><b/></root>",
                "<root><b/><a/></root>",
            )

        def test_changed_value(assert_xml_equivalent):
            with pytest.raises(AssertionError, match=r"1 difference"):
                assert_xml_equivalent("<r>x</r>", "<r>y</r>")

    Returns:
        A callable ``_assert(control, test, config=None) -> None`` that raises
        ``AssertionError`` listing every difference when the documents are
        not equivalent.
    """

    def _assert(
        control: Document | str,
        test: Document | str,
        config: CompareConfig | None = None,
    ) -> None:
        """Assert that two XML documents are equivalent.

        Args:
            control: The expected document (``Document`` or XML string).
            test:    The document produced by the code under test.
            config:  Optional CompareConfig for custom comparison parameters.

        Raises:
            AssertionError: When at least one difference is reported, with
                one ``- <message>`` line per difference.
        """
        result = compare(control, test, config=config)
        if result.is_equivalent():
            return
        lines = [
            _BANNER,
            f"XML documents not equivalent: {len(result)} difference(s)",
            f"  control: {result.control_source}",
            f"  test:    {result.test_source}",
            _BANNER,
        ]
        lines.extend(f"- {message}" for message in result.messages)
        raise AssertionError("\n".join(lines))

    return _assert
