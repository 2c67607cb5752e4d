"""Pytest configuration and fixtures."""

import pytest
import tempfile
from pathlib import Path

from baum import Inner, Leaf


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def simple_tree():
    """Inner node of three leaves."""
    return Inner([Leaf([1]), Leaf([2]), Leaf([3, 4])])


@pytest.fixture
def nested_tree():
    """Tree mixing empty and non-empty nodes at several levels."""
    return Inner([
        Leaf([1, 2, 3]),
        Inner([
            Leaf([]),
            Leaf([0x1]),
            Leaf([0x23, 16, 10, 11 * 16 + 12]),
        ]),
    ])


@pytest.fixture
def layout_tree():
    """Tree used for line-width layout checks."""
    return Inner([
        Leaf([]),
        Inner([Leaf([2, 3, 4]), Inner([])]),
        Leaf([3, 4]),
    ])


@pytest.fixture
def sample_trees(simple_tree, nested_tree, layout_tree):
    """A spread of trees for round-trip checks."""
    return [
        Leaf(b""),
        Leaf(b"\x00"),
        Leaf(bytes(range(256))),
        Inner([]),
        Inner([Inner([Inner([])])]),
        simple_tree,
        nested_tree,
        layout_tree,
        Inner([Leaf(b"\xff" * 40), Inner([Leaf(b"ab"), Leaf(b"")]), Leaf(b"\x10")]),
    ]


@pytest.fixture
def deep_levels():
    """Nesting depth well past the interpreter recursion limit."""
    return 3000


@pytest.fixture
def deep_tree(deep_levels):
    """Single chain of inner nodes around one leaf."""
    node = Leaf([1])
    for _ in range(deep_levels):
        node = Inner([node])
    return node
