"""Data models for Baum trees."""

from .node import Node, Leaf, Inner, compare, walk

__all__ = ["Node", "Leaf", "Inner", "compare", "walk"]
