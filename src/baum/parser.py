"""Parser for the Baum text format."""

import logging
from typing import List, Optional, Tuple

from .models import Inner, Leaf, Node
from .tokenizer import TextSource, Tokenizer
from .types import (
    LexingError,
    LimitExceededError,
    ParseResult,
    ParseStatus,
    ParsingError,
    Token,
    TokenType,
)


class TextParser:
    """
    Parser turning text such as ``(0x01_02 (0x ()))`` into a tree.

    Lexing and parsing failures are kept apart so a caller can tell
    malformed characters from malformed structure.
    """

    def __init__(self, tokenizer: Optional[Tokenizer] = None,
                 max_depth: Optional[int] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the parser.

        Args:
            tokenizer: Optional Tokenizer instance
            max_depth: Optional ceiling on nesting depth (the root is depth 0)
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.tokenizer = tokenizer or Tokenizer(self.logger)
        self.max_depth = max_depth

    def parse(self, source: TextSource) -> ParseResult:
        """
        Parse text into a tree without raising on bad input.

        Args:
            source: Text to parse

        Returns:
            ParseResult holding the node or the lexing/parsing error message
        """
        try:
            tokens = self.tokenizer.tokenize(source)
        except LexingError as e:
            self.logger.debug(f"Lexing failed: {e}")
            return ParseResult(ParseStatus.LEXING_ERROR, message=str(e))

        try:
            node = self.parse_tokens(tokens)
        except (ParsingError, LimitExceededError) as e:
            self.logger.debug(f"Parsing failed: {e}")
            return ParseResult(ParseStatus.PARSING_ERROR, message=str(e))
        except RecursionError:
            self.logger.debug("Parsing failed: recursion limit reached")
            return ParseResult(ParseStatus.PARSING_ERROR, message="Tree is nested too deeply to parse")

        return ParseResult(ParseStatus.OK, node=node)

    def parse_node(self, source: TextSource) -> Node:
        """
        Parse text into a tree.

        Raises:
            LexingError: If the text cannot be tokenized
            ParsingError: If the tokens do not form exactly one node
        """
        return self.parse_tokens(self.tokenizer.tokenize(source))

    def parse_tokens(self, tokens: List[Token]) -> Node:
        """
        Build a tree from a token list holding exactly one node.

        Raises:
            ParsingError: On missing, unbalanced or trailing tokens
        """
        stream = _TokenStream(tokens)
        node = self._parse_node(stream)

        extra = stream.peek()
        if extra is not None:
            raise ParsingError(
                f"Unexpected token {extra} at position {extra.position} after node",
                extra.position,
            )
        return node

    def _parse_node(self, stream: "_TokenStream") -> Node:
        # Each open inner node is (its '(' token, children parsed so far).
        stack: List[Tuple[Token, List[Node]]] = []
        while True:
            token = stream.peek()
            if stack and token is None:
                opening = stack[-1][0]
                raise ParsingError(
                    f"Unexpected end of input, '(' at position {opening.position} is never closed",
                    opening.position,
                )

            if stack and token.type == TokenType.RPAREN:
                stream.next()
                _, children = stack.pop()
                node: Node = Inner(children)
            else:
                depth = len(stack)
                if self.max_depth is not None and depth > self.max_depth:
                    raise LimitExceededError(
                        f"Nesting depth exceeds limit of {self.max_depth}",
                        context={"depth": depth},
                    )

                token = stream.next()
                if token is None:
                    raise ParsingError("Unexpected end of input, expected a node")
                if token.type == TokenType.RPAREN:
                    raise ParsingError(f"Unexpected ')' at position {token.position}", token.position)
                if token.type == TokenType.LPAREN:
                    stack.append((token, []))
                    continue
                node = Leaf(token.value)

            if not stack:
                return node
            stack[-1][1].append(node)


class _TokenStream:
    """Token list with one token of lookahead."""

    def __init__(self, tokens: List[Token]):
        self._tokens = tokens
        self._index = 0

    def peek(self) -> Optional[Token]:
        if self._index < len(self._tokens):
            return self._tokens[self._index]
        return None

    def next(self) -> Optional[Token]:
        token = self.peek()
        if token is not None:
            self._index += 1
        return token


def parse(source: TextSource) -> ParseResult:
    """Parse text with a default parser, reporting errors in the result."""
    return TextParser().parse(source)


def parse_node(source: TextSource) -> Node:
    """Parse text with a default parser, raising on errors."""
    return TextParser().parse_node(source)
