"""Width-aware pretty-printer for Baum trees."""

import io
import logging
from typing import Dict, List, Optional, TextIO, Tuple, Union

from .models import Node, walk
from .types import WalkEvent

DEFAULT_MAX_WIDTH = 80
INDENT_STEP = 4


def leaf_width(size: int) -> int:
    """Columns taken by the single-line rendering of a leaf of ``size`` bytes."""
    return 2 + 2 * size + max(size - 1, 0)


def measure_widths(node: Node) -> Dict[int, int]:
    """
    Compute the flat width of every subtree of ``node``.

    Returns:
        Mapping of ``id(subtree)`` to its flat width
    """
    widths: Dict[int, int] = {}
    for event, current, _ in walk(node):
        if event is WalkEvent.LEAF:
            widths[id(current)] = leaf_width(len(current))
        elif event is WalkEvent.EXIT:
            children = current.as_children()
            width = 2 + sum(widths[id(child)] for child in children)
            widths[id(current)] = width + max(len(children) - 1, 0)
    return widths


def flat_width(node: Node) -> int:
    """
    Number of columns the single-line rendering of ``node`` occupies.

    Matches ``str(node)``: a leaf takes ``0x`` plus two digits per byte and
    one ``_`` between bytes; an inner node takes its parentheses, its
    children and one space between children.
    """
    if node.is_leaf():
        return leaf_width(len(node))
    return measure_widths(node)[id(node)]


class PrettyPrinter:
    """
    Renders trees as indented text bounded by a maximum column width.

    An inner node stays on one line when it fits from its indentation;
    otherwise each child goes on its own line, indented one step deeper,
    with the closing parenthesis on a line of its own. Long leaves wrap
    with continuation lines aligned under the first digit.
    """

    def __init__(self, max_width: int = DEFAULT_MAX_WIDTH,
                 indent_step: int = INDENT_STEP,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the printer.

        Args:
            max_width: Maximum column width
            indent_step: Spaces added per nesting level of a broken inner node
            logger: Optional logger instance
        """
        if max_width <= 0:
            raise ValueError("max_width must be positive")
        if indent_step < 0:
            raise ValueError("indent_step must be non-negative")
        self.max_width = max_width
        self.indent_step = indent_step
        self.logger = logger or logging.getLogger(__name__)

    def format(self, node: Node, indentation: int = 0) -> str:
        """
        Render a tree to a string.

        Args:
            node: Tree to render
            indentation: Column the rendering starts at

        Returns:
            Rendered text without a trailing newline
        """
        out = io.StringIO()
        self.write_to(node, out, indentation)
        return out.getvalue()

    def write_to(self, node: Node, out: TextIO, indentation: int = 0) -> None:
        """Render a tree into a text stream."""
        widths = self.measure(node)
        self._render(node, indentation, widths, out)

    def measure(self, node: Node) -> Dict[int, int]:
        """
        Compute the flat width of every subtree.

        Returns:
            Mapping of ``id(subtree)`` to its flat width
        """
        widths = measure_widths(node)
        self.logger.debug(f"Measured {len(widths)} subtrees, root width {widths[id(node)]}")
        return widths

    def _render(self, node: Node, indentation: int, widths: Dict[int, int], out: TextIO) -> None:
        # Pending work, popped from the end: literal text or a subtree to lay out.
        work: List[Union[str, Tuple[Node, int]]] = [(node, indentation)]
        while work:
            item = work.pop()
            if isinstance(item, str):
                out.write(item)
                continue

            current, indent = item
            if current.is_leaf():
                self._render_leaf(current.as_bytes(), indent, out)
                continue

            children = current.as_children()
            if not children or indent + widths[id(current)] <= self.max_width:
                # Leaves inside a fitting inner node never reach the wrap column.
                out.write(str(current))
                continue

            child_indent = indent + self.indent_step
            out.write("(\n")
            work.append(" " * indent + ")")
            for child in reversed(children):
                work.append("\n")
                work.append((child, child_indent))
                work.append(" " * child_indent)

    def _render_leaf(self, data: bytes, indentation: int, out: TextIO) -> None:
        out.write("0x")
        continuation = indentation + 2
        column = continuation
        for i, byte in enumerate(data):
            if column + 3 > self.max_width:
                out.write("\n" + " " * continuation)
                column = continuation
            elif i > 0:
                out.write("_")
                column += 1
            out.write(f"{byte:02x}")
            column += 2


def pretty_print(node: Node, max_width: int = DEFAULT_MAX_WIDTH) -> str:
    """Render a tree within ``max_width`` columns."""
    return PrettyPrinter(max_width).format(node)
