"""
Baum - Self-describing byte trees.

A tree node is either a leaf holding bytes or an inner node holding ordered
children. Trees round-trip through a framed binary format and an
s-expression text format, and can be pretty-printed to a column width.
"""

from .models import Node, Leaf, Inner, walk
from .codec import BinaryCodec, MAGIC, serialize, deserialize
from .tokenizer import Tokenizer, tokenize
from .parser import TextParser, parse, parse_node
from .printer import PrettyPrinter, flat_width, pretty_print
from .types import (
    ParseResult,
    ParseStatus,
    WalkEvent,
    BaumError,
    DecodeError,
    InvalidMagicNumberError,
    InvalidNodeTypeError,
    AdditionalBytesError,
    DecodeIOError,
    LimitExceededError,
    LexingError,
    ParsingError,
    ConversionError,
    ExpectedLeafError,
    ExpectedInnerError,
    LengthMismatchError,
)

__version__ = "1.0.0"
__all__ = [
    "Node",
    "Leaf",
    "Inner",
    "walk",
    "WalkEvent",
    "BinaryCodec",
    "MAGIC",
    "serialize",
    "deserialize",
    "Tokenizer",
    "tokenize",
    "TextParser",
    "parse",
    "parse_node",
    "PrettyPrinter",
    "flat_width",
    "pretty_print",
    "ParseResult",
    "ParseStatus",
    "BaumError",
    "DecodeError",
    "InvalidMagicNumberError",
    "InvalidNodeTypeError",
    "AdditionalBytesError",
    "DecodeIOError",
    "LimitExceededError",
    "LexingError",
    "ParsingError",
    "ConversionError",
    "ExpectedLeafError",
    "ExpectedInnerError",
    "LengthMismatchError",
]
