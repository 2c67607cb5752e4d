"""Tests for the pretty-printer."""

import io
import pytest
from baum import Leaf, Inner
from baum.printer import DEFAULT_MAX_WIDTH, PrettyPrinter, flat_width, pretty_print


class TestFlatWidth:
    """Tests for flat width measurement."""

    def test_leaf_widths(self):
        """Test widths of leaves of several lengths."""
        assert flat_width(Leaf([])) == 2
        assert flat_width(Leaf([1])) == 4
        assert flat_width(Leaf([1, 2, 3])) == 10

    def test_inner_widths(self, layout_tree):
        """Test widths of inner nodes."""
        assert flat_width(Inner([])) == 2
        assert flat_width(Inner([Leaf([])])) == 4
        assert flat_width(layout_tree) == 28

    def test_matches_display(self, sample_trees):
        """Test that the width equals the canonical display length."""
        for node in sample_trees:
            assert flat_width(node) == len(str(node))

    def test_measure_covers_every_subtree(self, layout_tree):
        """Test that the measure pass records all subtrees."""
        widths = PrettyPrinter().measure(layout_tree)

        assert widths[id(layout_tree)] == 28
        assert widths[id(layout_tree[1])] == 15
        assert widths[id(layout_tree[1][1])] == 2
        assert len(widths) == 6


class TestPrettyPrinter:
    """Tests for PrettyPrinter class."""

    def test_default_width(self):
        """Test the default column budget."""
        assert PrettyPrinter().max_width == DEFAULT_MAX_WIDTH == 80

    def test_flat_when_fits(self, layout_tree):
        """Test that a tree fitting the width stays on one line."""
        assert pretty_print(layout_tree, 80) == "(0x (0x02_03_04 ()) 0x03_04)"

    def test_simple_literals(self):
        """Test printing of small nodes."""
        assert pretty_print(Leaf([1, 2, 3])) == "0x01_02_03"
        assert pretty_print(Inner([])) == "()"
        assert pretty_print(Inner([Leaf([])])) == "(0x)"

    def test_broken_layout(self, layout_tree):
        """Test nested multi-line layout with four-space steps."""
        expected = "\n".join([
            "(",
            "    0x",
            "    (",
            "        0x02_03_04",
            "        ()",
            "    )",
            "    0x03_04",
            ")",
        ])
        assert pretty_print(layout_tree, 18) == expected

    def test_partially_broken_layout(self, layout_tree):
        """Test that a child fitting from its indentation stays flat."""
        expected = "\n".join([
            "(",
            "    0x",
            "    (0x02_03_04 ())",
            "    0x03_04",
            ")",
        ])
        assert pretty_print(layout_tree, 19) == expected

    def test_exact_fit_is_flat(self, layout_tree):
        """Test that a tree exactly as wide as the budget stays flat."""
        assert "\n" not in pretty_print(layout_tree, 28)
        assert "\n" in pretty_print(layout_tree, 27)

    def test_empty_nodes_never_break(self):
        """Test that empty nodes render flat even with a tiny budget."""
        assert pretty_print(Inner([]), 1) == "()"
        assert pretty_print(Leaf([]), 1) == "0x"

    def test_leaf_wrapping(self):
        """Test wrapping a long leaf with continuation under the digits."""
        node = Leaf([1, 2, 3, 4, 5])
        assert pretty_print(node, 10) == "0x01_02_03\n  04_05"

    def test_leaf_wrapping_tight_budget(self):
        """Test that every byte may wrap when the budget is very small."""
        assert pretty_print(Leaf([1, 2]), 4) == "0x\n  01\n  02"

    def test_leaf_wrapping_inside_inner(self):
        """Test leaf continuation lines inside a broken inner node."""
        node = Inner([Leaf(range(1, 9))])
        expected = "\n".join([
            "(",
            "    0x01_02_03",
            "      04_05_06",
            "      07_08",
            ")",
        ])
        assert pretty_print(node, 16) == expected

    def test_starting_indentation(self, layout_tree):
        """Test that the starting column counts against the budget."""
        printer = PrettyPrinter(38)

        assert "\n" not in printer.format(layout_tree, indentation=10)
        assert printer.format(layout_tree, indentation=11).endswith("\n" + " " * 11 + ")")

    def test_custom_indent_step(self):
        """Test a non-default indentation step."""
        node = Inner([Leaf([1]), Leaf([2])])
        assert PrettyPrinter(7, indent_step=2).format(node) == "(\n  0x01\n  0x02\n)"

    def test_write_to_stream(self, nested_tree):
        """Test rendering into a text stream."""
        out = io.StringIO()
        PrettyPrinter().write_to(nested_tree, out)
        assert out.getvalue() == str(nested_tree)

    def test_invalid_width(self):
        """Test that a non-positive width is rejected."""
        with pytest.raises(ValueError, match="max_width"):
            PrettyPrinter(0)

    def test_width_monotonicity(self, sample_trees):
        """Test that a larger width never produces more lines."""
        for node in sample_trees:
            line_counts = [
                pretty_print(node, width).count("\n") + 1
                for width in range(1, 120)
            ]
            assert line_counts == sorted(line_counts, reverse=True)

    def test_lines_respect_width(self, sample_trees):
        """Test that no line exceeds the budget once indentation allows it."""
        for node in sample_trees:
            for line in pretty_print(node, 40).split("\n"):
                assert len(line) <= 40


class TestDeepTrees:
    """Tests for printing trees nested past the interpreter recursion limit."""

    def test_flat_width(self, deep_tree, deep_levels):
        """Test measuring a deep chain."""
        assert flat_width(deep_tree) == 2 * deep_levels + 4
        assert len(PrettyPrinter().measure(deep_tree)) == deep_levels + 1

    def test_flat_rendering(self, deep_tree):
        """Test that a deep chain within the width prints on one line."""
        assert pretty_print(deep_tree, flat_width(deep_tree)) == str(deep_tree)

    def test_broken_root_with_deep_child(self, deep_tree):
        """Test breaking a root whose deep child fits one step in."""
        width = flat_width(deep_tree) + 4
        node = Inner([deep_tree, Inner([])])

        assert pretty_print(node, width) == "(\n    " + str(deep_tree) + "\n    ()\n)"
