"""Validation utilities for tree well-formedness."""

import sys
from typing import Iterator, List, Optional, Set, Tuple

from ..models import Node
from ..types import ErrorType, ValidationError, ValidationResult

# Interpreter frames one nesting level costs in the recursive parts of the
# data model that remain: repr(), copy.deepcopy() and pickle.
FRAMES_PER_LEVEL = 3


def deep_nesting_threshold() -> int:
    """Depth above which a tree is reported as deeply nested."""
    return sys.getrecursionlimit() // FRAMES_PER_LEVEL


class ValidationUtils:
    """Utility class for validating trees and printer arguments."""

    @staticmethod
    def validate_tree(node: Node, max_depth: Optional[int] = None,
                      max_length: Optional[int] = None) -> ValidationResult:
        """
        Validate that a tree is finite, strictly owned and within limits.

        Args:
            node: Tree to validate
            max_depth: Optional ceiling on nesting depth (the root is depth 0)
            max_length: Optional ceiling on leaf length and child count

        Returns:
            ValidationResult with validation details
        """
        errors: List[ValidationError] = []
        warnings: List[str] = []

        if not isinstance(node, Node):
            errors.append(ValidationError(
                type=ErrorType.STRUCTURE,
                message=f"Root must be a Node, got {type(node).__name__}",
                location="root"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        shared: List[str] = []
        depth = ValidationUtils._walk(node, shared, errors, max_depth, max_length)

        if shared:
            warnings.append(f"Found {len(shared)} shared subtrees, first at {shared[0]}")

        if depth > deep_nesting_threshold():
            warnings.append(f"Deep nesting detected (depth: {depth}). "
                            "repr() and copying of the tree may exceed the recursion limit.")

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    @staticmethod
    def _walk(root: Node, shared: List[str], errors: List[ValidationError],
              max_depth: Optional[int], max_length: Optional[int]) -> int:
        """Check every subtree and return the deepest level reached."""
        path_ids: Set[int] = set()
        seen_ids: Set[int] = set()
        # Each open inner node is (its id, its location, its remaining children).
        stack: List[Tuple[int, str, Iterator[Tuple[int, object]]]] = []
        deepest = 0

        node: Optional[Node] = root
        location = "root"
        while True:
            if node is not None:
                depth = len(stack)
                deepest = max(deepest, depth)
                if ValidationUtils._check_node(node, location, depth, path_ids, seen_ids,
                                               shared, errors, max_depth, max_length):
                    path_ids.add(id(node))
                    stack.append((id(node), location, enumerate(node.as_children())))

            if not stack:
                return deepest

            parent_id, parent_location, children = stack[-1]
            entry = next(children, None)
            if entry is None:
                stack.pop()
                path_ids.discard(parent_id)
                node = None
                continue

            index, child = entry
            location = f"{parent_location}[{index}]"
            if isinstance(child, Node):
                node = child
            else:
                errors.append(ValidationError(
                    type=ErrorType.STRUCTURE,
                    message=f"Child must be a Node, got {type(child).__name__}",
                    location=location
                ))
                node = None

    @staticmethod
    def _check_node(node: Node, location: str, depth: int, path_ids: Set[int],
                    seen_ids: Set[int], shared: List[str], errors: List[ValidationError],
                    max_depth: Optional[int], max_length: Optional[int]) -> bool:
        """Check one node and tell whether its children should be visited."""
        obj_id = id(node)
        if obj_id in path_ids:
            errors.append(ValidationError(
                type=ErrorType.STRUCTURE,
                message="Circular reference detected: node contains itself",
                location=location
            ))
            return False
        if obj_id in seen_ids:
            shared.append(location)
        seen_ids.add(obj_id)

        if max_depth is not None and depth > max_depth:
            errors.append(ValidationError(
                type=ErrorType.LIMIT,
                message=f"Nesting depth {depth} exceeds limit of {max_depth}",
                location=location
            ))
            return False

        if max_length is not None and len(node) > max_length:
            kind = "Leaf length" if node.is_leaf() else "Child count"
            errors.append(ValidationError(
                type=ErrorType.LIMIT,
                message=f"{kind} {len(node)} exceeds limit of {max_length}",
                location=location
            ))

        return node.is_inner()

    @staticmethod
    def validate_width(max_width: int) -> ValidationResult:
        """
        Validate a pretty-printer width.

        Args:
            max_width: Width to validate

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        if isinstance(max_width, bool) or not isinstance(max_width, int):
            errors.append(ValidationError(
                type=ErrorType.STRUCTURE,
                message=f"Width must be an integer, got {type(max_width).__name__}",
                location="max_width"
            ))
        elif max_width <= 0:
            errors.append(ValidationError(
                type=ErrorType.LIMIT,
                message="Width must be positive",
                location="max_width"
            ))
        elif max_width < 8:
            warnings.append("Width is very small (< 8). Most leaves will wrap on every byte.")

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )
