"""Tests for validation utilities."""

import sys
from baum import Leaf, Inner
from baum.types import ErrorType
from baum.utils.validation import ValidationUtils, deep_nesting_threshold


class TestValidateTree:
    """Tests for tree validation."""

    def test_valid_tree(self, nested_tree):
        """Test validation of a well-formed tree."""
        result = ValidationUtils.validate_tree(nested_tree)

        assert result.is_valid
        assert len(result.errors) == 0
        assert len(result.warnings) == 0

    def test_not_a_node(self):
        """Test validation of a non-node root."""
        result = ValidationUtils.validate_tree([Leaf(b"")])

        assert not result.is_valid
        assert result.errors[0].type == ErrorType.STRUCTURE
        assert result.errors[0].location == "root"

    def test_shared_subtree_warning(self):
        """Test that reusing one node object twice is reported."""
        leaf = Leaf(b"a")
        result = ValidationUtils.validate_tree(Inner([leaf, Inner([leaf])]))

        assert result.is_valid
        assert len(result.warnings) == 1
        assert "root[1][0]" in result.warnings[0]

    def test_circular_reference(self):
        """Test that a node reachable from itself is an error."""
        node = Inner([Leaf(b"")])
        object.__setattr__(node, "children", (node,))

        result = ValidationUtils.validate_tree(node)

        assert not result.is_valid
        assert "Circular reference" in result.errors[0].message
        assert result.errors[0].location == "root[0]"

    def test_non_node_child(self):
        """Test that a smuggled non-node child is an error."""
        node = Inner([])
        object.__setattr__(node, "children", (Leaf(b""), "text"))

        result = ValidationUtils.validate_tree(node)

        assert not result.is_valid
        assert result.errors[0].location == "root[1]"

    def test_max_depth(self):
        """Test the nesting ceiling."""
        node = Inner([Inner([Leaf(b"")])])

        assert ValidationUtils.validate_tree(node, max_depth=2).is_valid
        result = ValidationUtils.validate_tree(node, max_depth=1)
        assert not result.is_valid
        assert result.errors[0].type == ErrorType.LIMIT
        assert result.errors[0].location == "root[0][0]"

    def test_max_length(self):
        """Test the leaf length and child count ceiling."""
        assert not ValidationUtils.validate_tree(Leaf(b"abcd"), max_length=3).is_valid
        assert not ValidationUtils.validate_tree(Inner([Leaf(b"")] * 4), max_length=3).is_valid
        assert ValidationUtils.validate_tree(Leaf(b"abc"), max_length=3).is_valid

    def test_max_depth_stops_descent(self):
        """Test that a depth ceiling bounds the walk of a very deep tree."""
        node = Leaf(b"")
        for _ in range(deep_nesting_threshold() + 1):
            node = Inner([node])

        result = ValidationUtils.validate_tree(node, max_depth=10)

        assert not result.is_valid
        assert result.errors[0].type == ErrorType.LIMIT

    def test_deep_nesting_warning(self, deep_tree, deep_levels):
        """Test that a tree past the nesting threshold is valid but flagged."""
        result = ValidationUtils.validate_tree(deep_tree)

        assert result.is_valid
        assert len(result.warnings) == 1
        assert f"Deep nesting detected (depth: {deep_levels})" in result.warnings[0]

    def test_nesting_threshold_boundary(self):
        """Test that the warning starts just past the threshold."""
        node = Leaf(b"")
        for _ in range(deep_nesting_threshold()):
            node = Inner([node])

        assert ValidationUtils.validate_tree(node).warnings == []
        assert len(ValidationUtils.validate_tree(Inner([node])).warnings) == 1

    def test_nesting_threshold_below_half_recursion_limit(self):
        """Test that the threshold leaves room for several frames per level."""
        assert deep_nesting_threshold() < sys.getrecursionlimit() // 2


class TestValidateWidth:
    """Tests for printer width validation."""

    def test_valid_width(self):
        """Test a typical width."""
        result = ValidationUtils.validate_width(80)
        assert result.is_valid
        assert result.warnings == []

    def test_non_positive_width(self):
        """Test zero and negative widths."""
        assert not ValidationUtils.validate_width(0).is_valid
        assert not ValidationUtils.validate_width(-5).is_valid

    def test_non_integer_width(self):
        """Test non-integer widths."""
        assert not ValidationUtils.validate_width("80").is_valid
        assert not ValidationUtils.validate_width(True).is_valid

    def test_small_width_warning(self):
        """Test the warning for very small widths."""
        result = ValidationUtils.validate_width(4)
        assert result.is_valid
        assert len(result.warnings) == 1
