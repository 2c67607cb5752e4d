"""Tokenizer for the Baum text format."""

import logging
from typing import List, Optional, TextIO, Union

from .types import LexingError, Token, TokenType

HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
SEPARATOR = "_"
WHITESPACE = frozenset(" \t\n\r\x0c")

TextSource = Union[str, bytes, TextIO]


class Tokenizer:
    """
    Splits text into ``(``, ``)`` and byte-literal tokens.

    A byte literal is ``0x`` followed by a run of hex digits and underscores.
    Underscores are separators and are dropped; digits are paired left to
    right. A literal with an odd number of digits is rejected.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def tokenize(self, source: TextSource) -> List[Token]:
        """
        Tokenize a complete text.

        Args:
            source: Text as ``str``, ASCII ``bytes`` or a readable text stream

        Returns:
            Flat list of tokens

        Raises:
            LexingError: On a character outside the grammar or a malformed literal
        """
        text = read_text(source)
        tokens = []
        position = 0
        length = len(text)

        while position < length:
            char = text[position]
            if char == "(":
                tokens.append(Token(TokenType.LPAREN, position=position))
                position += 1
            elif char == ")":
                tokens.append(Token(TokenType.RPAREN, position=position))
                position += 1
            elif char == "0":
                token, position = self._read_literal(text, position)
                tokens.append(token)
            elif char in WHITESPACE:
                position += 1
            else:
                raise LexingError(
                    f"Unexpected character {char!r} at position {position}", position
                )

        self.logger.debug(f"Tokenized {length} characters into {len(tokens)} tokens")
        return tokens

    def _read_literal(self, text: str, start: int):
        position = start + 1
        if position >= len(text) or text[position] != "x":
            found = repr(text[position]) if position < len(text) else "end of input"
            raise LexingError(f"Expected 'x' at position {position}, found {found}", position)
        position += 1

        digits = []
        while position < len(text):
            char = text[position]
            if char in HEX_DIGITS:
                digits.append(char)
            elif char != SEPARATOR:
                break
            position += 1

        if len(digits) % 2:
            raise LexingError(
                f"Incomplete byte sequence in literal at position {start}: "
                f"{len(digits)} hex digits",
                start,
            )

        value = bytes.fromhex("".join(digits))
        return Token(TokenType.BYTES, value, start), position


def read_text(source: TextSource) -> str:
    """Normalize a text source into a string."""
    if isinstance(source, str):
        return source
    if isinstance(source, (bytes, bytearray)):
        try:
            return bytes(source).decode("ascii")
        except UnicodeDecodeError as e:
            raise LexingError(f"Non-ASCII byte at position {e.start}", e.start) from e
    return source.read()


def tokenize(source: TextSource) -> List[Token]:
    """Tokenize text with a default tokenizer."""
    return Tokenizer().tokenize(source)
