"""Tests for TreeMatcher.

Verifies:
- Equal trees end with both roots MATCHED_DEEP
- Differing roots stay UNVISITED (virtual document node)
- Paired nodes with unequal content are MATCHED_SHALLOW and descended into
- Text differences are recorded on the first tree's node only, with the
  full signature path and the texts as written in the documents
- Unpaired children stay UNVISITED
- compare() starts from two given nodes
- The configured policy is used
"""

from __future__ import annotations

from xml_snapshot_diff.algorithm.matcher import TreeMatcher
from xml_snapshot_diff.algorithm.policies import (
    GreedyMatchingPolicy,
    OptimalMatchingPolicy,
)
from xml_snapshot_diff.context import ComparisonContext
from xml_snapshot_diff.tree.builder import TreeBuilder
from xml_snapshot_diff.tree.nodes import NodeState

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _context(first: str, second: str) -> ComparisonContext:
    builder = TreeBuilder()
    return ComparisonContext.create(builder.parse(first), builder.parse(second))


def _matched(
    first: str, second: str, matcher: TreeMatcher | None = None
) -> ComparisonContext:
    context = _context(first, second)
    (matcher or TreeMatcher()).match(context)
    return context


# ---------------------------------------------------------------------------
# Root handling
# ---------------------------------------------------------------------------


class TestRoots:
    def test_equal_trees_are_deep_matched(self) -> None:
        ctx = _matched("<r><a>1</a></r>", "<r><a>1</a></r>")
        assert ctx.first.state.state(ctx.first.root) is NodeState.MATCHED_DEEP
        assert ctx.second.state.state(ctx.second.root) is NodeState.MATCHED_DEEP

    def test_equal_trees_do_not_descend(self) -> None:
        ctx = _matched("<r><a>1</a></r>", "<r><a>1</a></r>")
        child = ctx.first.root.children[0]
        assert ctx.first.state.state(child) is NodeState.UNVISITED

    def test_different_root_tags_stay_unvisited(self) -> None:
        ctx = _matched("<r/>", "<s/>")
        assert ctx.first.state.is_unvisited(ctx.first.root)
        assert ctx.second.state.is_unvisited(ctx.second.root)

    def test_different_root_attributes_stay_unvisited(self) -> None:
        ctx = _matched('<r v="1"/>', '<r v="2"/>')
        assert ctx.first.state.is_unvisited(ctx.first.root)

    def test_case_differences_are_equal(self) -> None:
        ctx = _matched("<R><A>X</A></R>", "<r><a>x</a></r>")
        assert ctx.first.state.state(ctx.first.root) is NodeState.MATCHED_DEEP


# ---------------------------------------------------------------------------
# Descent
# ---------------------------------------------------------------------------


class TestDescent:
    def test_localizes_to_deepest_differing_node(self) -> None:
        ctx = _matched(
            "<root><a>1</a><b>2</b></root>", "<root><a>1</a><b>3</b></root>"
        )
        state = ctx.first.state
        a, b = ctx.first.root.children
        assert state.state(ctx.first.root) is NodeState.MATCHED_SHALLOW
        assert state.state(a) is NodeState.MATCHED_DEEP
        assert state.state(b) is NodeState.MATCHED_SHALLOW

    def test_text_difference_recorded_on_first_only(self) -> None:
        ctx = _matched(
            "<root><a>1</a><b>2</b></root>", "<root><a>1</a><b>3</b></root>"
        )
        first_b = ctx.first.root.children[1]
        second_b = ctx.second.root.children[1]
        diff = ctx.first.state.difference(first_b)
        assert diff is not None
        assert diff.description == "Text of XML node <root><b>"
        assert (diff.this_value, diff.that_value) == ("2", "3")
        assert ctx.second.state.difference(second_b) is None

    def test_no_text_difference_when_only_children_differ(self) -> None:
        ctx = _matched("<r><a><x/></a></r>", "<r><a><y/></a></r>")
        a = ctx.first.root.children[0]
        assert ctx.first.state.difference(a) is None
        assert ctx.first.state.difference(ctx.first.root) is None

    def test_unpaired_children_stay_unvisited(self) -> None:
        ctx = _matched("<r><a/><x/></r>", "<r><a/><y/></r>")
        x = ctx.first.root.children[1]
        y = ctx.second.root.children[1]
        assert ctx.first.state.is_unvisited(x)
        assert ctx.second.state.is_unvisited(y)

    def test_full_signature_path_includes_attributes(self) -> None:
        ctx = _matched(
            '<c><e k="1"><v>a</v></e></c>', '<c><e k="1"><v>b</v></e></c>'
        )
        v = ctx.first.root.children[0].children[0]
        diff = ctx.first.state.difference(v)
        assert diff is not None
        assert diff.description == 'Text of XML node <c><e k="1"><v>'

    def test_text_values_keep_original_case(self) -> None:
        ctx = _matched("<r><a>Foo</a></r>", "<r><a>Bar</a></r>")
        diff = ctx.first.state.difference(ctx.first.root.children[0])
        assert diff is not None
        assert (diff.this_value, diff.that_value) == ("Foo", "Bar")


# ---------------------------------------------------------------------------
# Skipped nodes and policies
# ---------------------------------------------------------------------------


class TestSkippedAndPolicy:
    def test_skipped_nodes_are_not_paired(self) -> None:
        context = _context("<r><ts>1</ts></r>", "<r><ts>2</ts></r>")
        context.first.state.skip(context.first.root.children[0])
        context.second.state.skip(context.second.root.children[0])
        TreeMatcher().match(context)
        assert context.first.state.state(context.first.root) is NodeState.MATCHED_DEEP
        assert context.first.state.difference(context.first.root.children[0]) is None

    def test_default_policy_is_greedy(self) -> None:
        assert isinstance(TreeMatcher().policy, GreedyMatchingPolicy)

    def test_greedy_pairs_duplicates_in_order(self) -> None:
        ctx = _matched("<r><i>1</i><i>2</i></r>", "<r><i>2</i><i>1</i></r>")
        first_i = ctx.first.root.children[0]
        diff = ctx.first.state.difference(first_i)
        assert diff is not None
        assert (diff.this_value, diff.that_value) == ("1", "2")

    def test_optimal_pairs_duplicates_by_content(self) -> None:
        ctx = _matched(
            "<r><i>1</i><i>2</i></r>",
            "<r><i>2</i><i>1</i></r>",
            TreeMatcher(OptimalMatchingPolicy()),
        )
        for child in ctx.first.root.children:
            assert ctx.first.state.state(child) is NodeState.MATCHED_DEEP


class TestCompare:
    def test_compare_given_nodes(self) -> None:
        context = _context("<r><a>1</a></r>", "<s><a>2</a></s>")
        TreeMatcher().compare(context.first.root, context.second.root, context)
        a = context.first.root.children[0]
        assert context.first.state.state(context.first.root) is (
            NodeState.MATCHED_SHALLOW
        )
        diff = context.first.state.difference(a)
        assert diff is not None
        assert diff.description == "Text of XML node <r><a>"
