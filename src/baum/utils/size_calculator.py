"""Size calculation utilities for Baum trees."""

import logging
from typing import Optional

from ..codec import LENGTH_SIZE, MAGIC
from ..models import Node, walk
from ..printer import flat_width
from ..types import TreeStatistics, WalkEvent

RECORD_HEADER_SIZE = 1 + LENGTH_SIZE


class SizeCalculator:
    """
    Utility class for calculating encoded sizes and tree statistics.

    Sizes follow directly from the tree shape, so they are computed
    without encoding anything.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the size calculator.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def encoded_size(self, node: Node) -> int:
        """
        Calculate the length of the binary encoding of a tree.

        Args:
            node: Tree to measure

        Returns:
            Size in bytes, magic included
        """
        return len(MAGIC) + self.record_size(node)

    def record_size(self, node: Node) -> int:
        """Size of one node record, excluding the magic."""
        size = 0
        for event, current, _ in walk(node):
            if event is WalkEvent.LEAF:
                size += RECORD_HEADER_SIZE + len(current)
            elif event is WalkEvent.ENTER:
                size += RECORD_HEADER_SIZE
        return size

    def get_tree_statistics(self, node: Node) -> TreeStatistics:
        """
        Get shape and size statistics about a tree.

        Args:
            node: Tree to analyze

        Returns:
            TreeStatistics for the whole tree
        """
        stats = TreeStatistics()
        self._count_nodes(node, stats)
        stats.encoded_size = self.encoded_size(node)
        stats.flat_width = flat_width(node)

        self.logger.debug(f"Tree statistics: {stats.to_dict()}")
        return stats

    def _count_nodes(self, node: Node, stats: TreeStatistics) -> None:
        """Count leaves, inner nodes and payload bytes."""
        for event, current, depth in walk(node):
            stats.max_depth = max(stats.max_depth, depth)
            if event is WalkEvent.LEAF:
                stats.leaf_count += 1
                stats.payload_bytes += len(current)
                stats.largest_leaf = max(stats.largest_leaf, len(current))
            elif event is WalkEvent.ENTER:
                stats.inner_count += 1
                stats.widest_inner = max(stats.widest_inner, len(current))
