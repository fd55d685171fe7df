"""pytest plugin for xml-snapshot-diff.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pytest

from xml_snapshot_diff import MatcherConfig, SkipRule, compare_xml


@pytest.fixture(scope="session")
def assert_xml_equal() -> Any:
    """Fixture that returns a callable XML equality asserter.

    The fixture is session-scoped because the returned callable is stateless
    (delegates to compare_xml() which creates a fresh comparator per call).

    Usage in tests::

        def test_export(assert_xml_equal):
            rules = [SkipRule.skip_node("//ts")]
            assert_xml_equal(actual_xml, expected_xml, rules=rules)

        def test_changed(assert_xml_equal):
            with pytest.raises(AssertionError, match=r"difference"):
                assert_xml_equal("<a>1</a>", "<a>2</a>")

    Returns:
        A callable ``_assert(actual, expected, rules=(), config=None) -> None``
        that raises ``AssertionError`` when the documents differ.
    """

    def _assert(
        actual: str | bytes,
        expected: str | bytes,
        rules: Sequence[SkipRule] = (),
        config: MatcherConfig | None = None,
    ) -> None:
        """Assert that two XML documents are equal, up to the skip rules.

        Args:
            actual:   The XML produced by the code under test.
            expected: The expected/reference XML.
            rules:    Skip rules applied to both documents.
            config:   Optional MatcherConfig.

        Raises:
            AssertionError: When the trace is not empty, with a message
                listing every difference as ``description: actual != expected``.
        """
        trace = compare_xml(actual, expected, first_rules=rules, config=config)
        if trace.has_differences:
            lines = "\n".join(
                f"  {d.description}: {d.this_value!r} != {d.that_value!r}"
                for d in trace
            )
            raise AssertionError(
                f"XML documents not equal: {len(trace)} difference(s)\n{lines}"
            )

    return _assert
