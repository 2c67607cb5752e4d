"""Binary encoding and decoding of Baum trees."""

import io
import logging
from typing import BinaryIO, List, Optional, Tuple

from .models import Inner, Leaf, Node, walk
from .types import (
    AdditionalBytesError,
    DecodeIOError,
    InvalidMagicNumberError,
    InvalidNodeTypeError,
    LimitExceededError,
    NodeType,
    WalkEvent,
)

MAGIC = b"BAUM1"
LENGTH_SIZE = 8
BYTEORDER = "little"
READ_CHUNK_SIZE = 64 * 1024


class BinaryCodec:
    """
    Encoder and decoder for the self-framing binary tree format.

    A buffer holds the magic ``BAUM1`` followed by exactly one node record:
    a type byte (0 leaf, 1 inner), an unsigned 64-bit little-endian length
    and the payload (raw bytes for a leaf, that many records for an inner
    node). Decoding requires the source to be fully consumed.
    """

    def __init__(self, max_length: Optional[int] = None,
                 max_depth: Optional[int] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the codec.

        Args:
            max_length: Optional ceiling on any declared leaf or child count
            max_depth: Optional ceiling on nesting depth while decoding
            logger: Optional logger instance
        """
        self.max_length = max_length
        self.max_depth = max_depth
        self.logger = logger or logging.getLogger(__name__)

    def serialize(self, node: Node) -> bytes:
        """
        Encode a tree into a new byte string.

        Args:
            node: Tree to encode

        Returns:
            Magic followed by the node record
        """
        buffer = io.BytesIO()
        self.serialize_into(node, buffer)
        return buffer.getvalue()

    def serialize_into(self, node: Node, writer: BinaryIO) -> None:
        """
        Encode a tree into a binary sink.

        Args:
            node: Tree to encode
            writer: Any object with a ``write(bytes)`` method
        """
        writer.write(MAGIC)
        self._write_node(node, writer)

    def _write_node(self, node: Node, writer: BinaryIO) -> None:
        for event, current, _ in walk(node):
            if event is WalkEvent.EXIT:
                continue
            writer.write(bytes([current.node_type.value]))
            writer.write(len(current).to_bytes(LENGTH_SIZE, BYTEORDER))
            if event is WalkEvent.LEAF:
                writer.write(current.as_bytes())

    def deserialize(self, data: bytes) -> Node:
        """
        Decode a buffer holding exactly one encoded tree.

        Args:
            data: Encoded bytes

        Returns:
            Decoded tree

        Raises:
            InvalidMagicNumberError: If the buffer does not start with the magic
            InvalidNodeTypeError: If a record has an unknown type byte
            AdditionalBytesError: If bytes remain after the tree
            DecodeIOError: If the buffer ends early
            LimitExceededError: If a configured ceiling is exceeded
        """
        self.logger.debug(f"Decoding {len(data)} bytes")
        return self.deserialize_from(io.BytesIO(data))

    def deserialize_from(self, reader: BinaryIO) -> Node:
        """
        Decode exactly one tree from a binary source.

        Args:
            reader: Any object with a ``read(n)`` method

        Returns:
            Decoded tree
        """
        magic = self._read_exact(reader, len(MAGIC))
        if magic != MAGIC:
            raise InvalidMagicNumberError(
                f"Invalid magic number {magic!r}, expected {MAGIC!r}",
                context={"magic": magic},
            )

        try:
            node = self._read_node(reader)
        except RecursionError as e:
            raise LimitExceededError("Tree is nested too deeply to decode") from e

        if self._read(reader, 1):
            raise AdditionalBytesError("Unexpected bytes after the encoded tree")

        return node

    def _read_node(self, reader: BinaryIO) -> Node:
        # Each open inner record is (collected children, declared child count).
        stack: List[Tuple[List[Node], int]] = []
        while True:
            depth = len(stack)
            if self.max_depth is not None and depth > self.max_depth:
                raise LimitExceededError(
                    f"Nesting depth exceeds limit of {self.max_depth}",
                    context={"depth": depth},
                )

            type_byte, length = self._read_header(reader)
            if type_byte == NodeType.INNER.value and length > 0:
                stack.append(([], length))
                continue

            if type_byte == NodeType.LEAF.value:
                node: Node = Leaf(self._read_exact(reader, length))
            else:
                node = Inner()

            while stack:
                children, count = stack[-1]
                children.append(node)
                if len(children) < count:
                    break
                stack.pop()
                node = Inner(children)
            else:
                return node

    def _read_header(self, reader: BinaryIO) -> Tuple[int, int]:
        type_byte = self._read_exact(reader, 1)[0]
        if type_byte not in (NodeType.LEAF.value, NodeType.INNER.value):
            raise InvalidNodeTypeError(
                f"Invalid node type byte {type_byte}",
                context={"type_byte": type_byte},
            )

        length = int.from_bytes(self._read_exact(reader, LENGTH_SIZE), BYTEORDER)
        if self.max_length is not None and length > self.max_length:
            raise LimitExceededError(
                f"Declared length {length} exceeds limit of {self.max_length}",
                context={"length": length},
            )
        return type_byte, length

    def _read_exact(self, reader: BinaryIO, size: int) -> bytes:
        # Chunked so a forged length fails on truncation instead of allocating up front.
        chunks = []
        remaining = size
        while remaining > 0:
            chunk = self._read(reader, min(remaining, READ_CHUNK_SIZE))
            if not chunk:
                raise DecodeIOError(
                    f"Unexpected end of input: needed {size} bytes, got {size - remaining}",
                    context={"expected": size, "actual": size - remaining},
                )
            chunks.append(chunk)
            remaining -= len(chunk)
        return b"".join(chunks)

    def _read(self, reader: BinaryIO, size: int) -> bytes:
        try:
            return reader.read(size)
        except OSError as e:
            raise DecodeIOError(f"Failed to read input: {e}") from e


def serialize(node: Node) -> bytes:
    """Encode a tree with the default codec."""
    return BinaryCodec().serialize(node)


def deserialize(data: bytes) -> Node:
    """Decode a tree with the default codec."""
    return BinaryCodec().deserialize(data)
