"""Core type definitions for Baum trees, tokens and errors."""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:
    from .models import Node


class NodeType(Enum):
    """Enumeration of node variants, valued by their wire type byte."""
    LEAF = 0
    INNER = 1


class WalkEvent(Enum):
    """Events of a depth-first tree traversal."""
    LEAF = "leaf"
    ENTER = "enter"
    EXIT = "exit"


class TokenType(Enum):
    """Enumeration of text token kinds."""
    LPAREN = "("
    RPAREN = ")"
    BYTES = "bytes"


class ParseStatus(Enum):
    """Outcome of a text parse."""
    OK = "ok"
    LEXING_ERROR = "lexing_error"
    PARSING_ERROR = "parsing_error"


class ErrorType(Enum):
    """Enumeration of error types."""
    INVALID_MAGIC = "invalid_magic"
    INVALID_NODE_TYPE = "invalid_node_type"
    ADDITIONAL_BYTES = "additional_bytes"
    IO = "io"
    LIMIT = "limit"
    LEXING = "lexing"
    PARSING = "parsing"
    CONVERSION = "conversion"
    STRUCTURE = "structure"


@dataclass(frozen=True)
class Token:
    """A single token of the text format."""
    type: TokenType
    value: bytes = b""
    position: int = 0

    def __str__(self) -> str:
        if self.type == TokenType.BYTES:
            return "0x" + "_".join(f"{b:02x}" for b in self.value)
        return self.type.value


@dataclass(frozen=True)
class ParseResult:
    """Result of parsing text into a node."""
    status: ParseStatus
    node: Optional["Node"] = None
    message: str = ""

    def is_lexing_ok(self) -> bool:
        """True unless the text failed to tokenize."""
        return self.status != ParseStatus.LEXING_ERROR

    def is_ok(self) -> bool:
        """True if the text parsed into a node."""
        return self.status == ParseStatus.OK

    def err_message(self) -> str:
        """Error reason, or an empty string when parsing succeeded."""
        return self.message


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of a tree validation."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[str]


@dataclass
class TreeStatistics:
    """Shape and size summary of a tree."""
    leaf_count: int = 0
    inner_count: int = 0
    payload_bytes: int = 0
    max_depth: int = 0
    encoded_size: int = 0
    flat_width: int = 0
    largest_leaf: int = 0
    widest_inner: int = 0

    @property
    def node_count(self) -> int:
        return self.leaf_count + self.inner_count

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": self.node_count,
            "leaves": self.leaf_count,
            "inner_nodes": self.inner_count,
            "payload_bytes": self.payload_bytes,
            "max_depth": self.max_depth,
            "encoded_size": self.encoded_size,
            "flat_width": self.flat_width,
            "largest_leaf": self.largest_leaf,
            "widest_inner": self.widest_inner,
        }


class BaumError(Exception):
    """Base exception for all Baum errors."""

    error_type = ErrorType.STRUCTURE

    def __init__(self, message: str, error_type: Optional[ErrorType] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        if error_type is not None:
            self.error_type = error_type
        self.context = context or {}


class DecodeError(BaumError):
    """Binary input could not be decoded."""


class InvalidMagicNumberError(DecodeError):
    error_type = ErrorType.INVALID_MAGIC


class InvalidNodeTypeError(DecodeError):
    error_type = ErrorType.INVALID_NODE_TYPE


class AdditionalBytesError(DecodeError):
    error_type = ErrorType.ADDITIONAL_BYTES


class DecodeIOError(DecodeError):
    """The underlying source was truncated or failed to read."""
    error_type = ErrorType.IO


class LimitExceededError(BaumError):
    """A configured depth or length ceiling was exceeded."""
    error_type = ErrorType.LIMIT


class LexingError(BaumError):
    """Text contains characters outside the grammar."""
    error_type = ErrorType.LEXING

    def __init__(self, message: str, position: Optional[int] = None):
        super().__init__(message, context={"position": position})
        self.position = position


class ParsingError(BaumError):
    """Tokens do not form exactly one node."""
    error_type = ErrorType.PARSING

    def __init__(self, message: str, position: Optional[int] = None):
        super().__init__(message, context={"position": position})
        self.position = position


class ConversionError(BaumError):
    """A node could not be viewed in the requested form."""
    error_type = ErrorType.CONVERSION


class ExpectedLeafError(ConversionError):
    def __init__(self, message: str = "expected a leaf node, got an inner node"):
        super().__init__(message)


class ExpectedInnerError(ConversionError):
    def __init__(self, message: str = "expected an inner node, got a leaf node"):
        super().__init__(message)


class LengthMismatchError(ConversionError):
    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"leaf holds {actual} bytes, cannot view as {expected} bytes",
            context={"expected": expected, "actual": actual},
        )
        self.expected = expected
        self.actual = actual
