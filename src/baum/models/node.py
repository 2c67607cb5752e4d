"""Tree node model: a leaf holds bytes, an inner node holds ordered children."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple, Union

from ..types import (
    ExpectedInnerError,
    ExpectedLeafError,
    LengthMismatchError,
    NodeType,
    WalkEvent,
)

BytesLike = Union[bytes, bytearray, memoryview, Iterable[int]]

# Ranking of diverging traversal events: running out of children sorts
# first, then a leaf, then an inner node.
_EVENT_RANK = {WalkEvent.EXIT: 0, WalkEvent.LEAF: 1, WalkEvent.ENTER: 2}


def walk(root: "Node") -> Iterator[Tuple[WalkEvent, "Node", int]]:
    """
    Traverse a tree depth-first without recursion.

    Yields ``(LEAF, leaf, depth)`` for every leaf and ``(ENTER, inner, depth)``
    / ``(EXIT, inner, depth)`` around the children of every inner node, in
    child order. The root is at depth 0.

    Raises:
        ValueError: If an inner node is reachable from itself
    """
    if root.is_leaf():
        yield WalkEvent.LEAF, root, 0
        return

    path = {id(root)}
    stack = [(root, iter(root.as_children()))]
    yield WalkEvent.ENTER, root, 0

    while stack:
        parent, children = stack[-1]
        child = next(children, None)
        if child is None:
            stack.pop()
            path.discard(id(parent))
            yield WalkEvent.EXIT, parent, len(stack)
            continue

        depth = len(stack)
        if child.is_leaf():
            yield WalkEvent.LEAF, child, depth
            continue

        if id(child) in path:
            raise ValueError("Circular reference detected: node contains itself")
        path.add(id(child))
        stack.append((child, iter(child.as_children())))
        yield WalkEvent.ENTER, child, depth


def compare(left: "Node", right: "Node") -> int:
    """
    Structurally compare two trees.

    Returns:
        Negative, zero or positive as ``left`` sorts before, equal to or after ``right``
    """
    if left is right:
        return 0

    for (left_event, left_node, _), (right_event, right_node, _) in zip(walk(left), walk(right)):
        if left_event is not right_event:
            return -1 if _EVENT_RANK[left_event] < _EVENT_RANK[right_event] else 1
        if left_event is WalkEvent.LEAF and left_node.data != right_node.data:
            return -1 if left_node.data < right_node.data else 1
    return 0


class Node(ABC):
    """
    Base of the two node variants, ``Leaf`` and ``Inner``.

    Nodes are immutable. Equality, hashing and ordering are structural:
    every leaf sorts before every inner node, leaves compare by bytes and
    inner nodes compare their children lexicographically. None of them
    recurse, so arbitrarily deep trees are safe to compare.
    """

    __slots__ = ()

    @staticmethod
    def new_leaf(data: BytesLike = b"") -> "Leaf":
        """Create a leaf from any byte sequence."""
        return Leaf(data)

    @staticmethod
    def new_inner(children: Iterable["Node"] = ()) -> "Inner":
        """Create an inner node from any sequence of nodes."""
        return Inner(children)

    @property
    @abstractmethod
    def node_type(self) -> NodeType:
        """Wire variant of this node."""

    def is_leaf(self) -> bool:
        return self.node_type is NodeType.LEAF

    def is_inner(self) -> bool:
        return self.node_type is NodeType.INNER

    def as_bytes(self) -> bytes:
        """
        Get the payload of a leaf.

        Raises:
            ExpectedLeafError: If this is an inner node
        """
        raise ExpectedLeafError()

    def into_bytes(self) -> bytearray:
        """Get a mutable copy of a leaf's payload."""
        return bytearray(self.as_bytes())

    def as_fixed(self, size: int) -> Tuple[int, ...]:
        """
        View a leaf's payload as exactly ``size`` byte values.

        Args:
            size: Required payload length

        Returns:
            Tuple of ``size`` ints

        Raises:
            ExpectedLeafError: If this is an inner node
            LengthMismatchError: If the payload length differs from ``size``
        """
        data = self.as_bytes()
        if len(data) != size:
            raise LengthMismatchError(size, len(data))
        return tuple(data)

    def as_children(self) -> Tuple["Node", ...]:
        """
        Get the children of an inner node.

        Raises:
            ExpectedInnerError: If this is a leaf
        """
        raise ExpectedInnerError()

    def walk(self) -> Iterator[Tuple[WalkEvent, "Node", int]]:
        """Traverse this tree depth-first; see :func:`walk`."""
        return walk(self)

    def serialize(self) -> bytes:
        """Encode this tree in the binary format."""
        from ..codec import serialize
        return serialize(self)

    @staticmethod
    def deserialize(data: bytes) -> "Node":
        """Decode a tree from the binary format."""
        from ..codec import deserialize
        return deserialize(data)

    def pretty(self, max_width: int = 80) -> str:
        """Render this tree with line breaks to fit ``max_width`` columns."""
        from ..printer import pretty_print
        return pretty_print(self, max_width)

    def __eq__(self, other):
        if not isinstance(other, Node):
            return NotImplemented
        return compare(self, other) == 0

    def __ne__(self, other):
        if not isinstance(other, Node):
            return NotImplemented
        return compare(self, other) != 0

    def __hash__(self):
        return hash(self.serialize())

    def __lt__(self, other):
        if not isinstance(other, Node):
            return NotImplemented
        return compare(self, other) < 0

    def __le__(self, other):
        if not isinstance(other, Node):
            return NotImplemented
        return compare(self, other) <= 0

    def __gt__(self, other):
        if not isinstance(other, Node):
            return NotImplemented
        return compare(self, other) > 0

    def __ge__(self, other):
        if not isinstance(other, Node):
            return NotImplemented
        return compare(self, other) >= 0


@dataclass(frozen=True, eq=False, repr=False)
class Leaf(Node):
    """A node holding an opaque byte string."""

    data: bytes = b""

    def __post_init__(self):
        if not isinstance(self.data, bytes):
            object.__setattr__(self, "data", bytes(self.data))

    @property
    def node_type(self) -> NodeType:
        return NodeType.LEAF

    def as_bytes(self) -> bytes:
        return self.data

    def __len__(self) -> int:
        return len(self.data)

    def __str__(self) -> str:
        return "0x" + "_".join(f"{b:02x}" for b in self.data)

    def __repr__(self) -> str:
        return f"Leaf({self.data!r})"


@dataclass(frozen=True, eq=False, repr=False)
class Inner(Node):
    """A node holding an ordered sequence of child nodes."""

    children: Tuple[Node, ...] = ()

    def __post_init__(self):
        children = tuple(self.children)
        for child in children:
            if not isinstance(child, Node):
                raise TypeError(f"children must be Node instances, got {type(child).__name__}")
        object.__setattr__(self, "children", children)

    @property
    def node_type(self) -> NodeType:
        return NodeType.INNER

    def as_children(self) -> Tuple[Node, ...]:
        return self.children

    def __len__(self) -> int:
        return len(self.children)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.children)

    def __getitem__(self, index: int) -> Node:
        return self.children[index]

    def __str__(self) -> str:
        parts: List[str] = []
        for event, node, _ in walk(self):
            if event is WalkEvent.EXIT:
                parts.append(")")
                continue
            if parts and parts[-1] != "(":
                parts.append(" ")
            parts.append("(" if event is WalkEvent.ENTER else str(node))
        return "".join(parts)

    def __repr__(self) -> str:
        return f"Inner({list(self.children)!r})"
