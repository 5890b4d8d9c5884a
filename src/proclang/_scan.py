"""Cursor and lexical scanning primitives.

There is no separate tokenizer pass. The grammar pulls each lexeme from the
cursor at the point it expects one, and decides between productions by
peeking at raw text.

Identifiers and numbers are read greedily up to the next delimiter and only
then checked against their character class. A lexeme such as `x1` is
consumed whole and rejected; it is never split into `x` and `1`.
"""

__all__ = ["Cursor", "WHITESPACE", "DELIMITERS", "LETTERS", "DIGITS"]

import logging
import string

import proclang


_log = logging.getLogger(__name__)

WHITESPACE = frozenset(" \t\n\r\v\f")
DELIMITERS = WHITESPACE | frozenset(";,:+-=()")
LETTERS = frozenset(string.ascii_letters)
DIGITS = frozenset(string.digits)


class Cursor:
    """Read position into a single source text.

    A cursor belongs to one parse attempt. The position only moves forward.

    Attributes:
        source: (str) The full input text
        position: (int) Zero-based offset of the next unread character
    """

    __slots__ = ("source", "position")

    def __init__(self, source, position=0):
        self.source = source
        self.position = position

    def __repr__(self):
        return f"Cursor(position={self.position}, length={len(self.source)})"

    def at_end(self):
        """(bool) True when every character has been consumed."""
        return self.position >= len(self.source)

    def peek(self):
        """(str) The next unread character, or "" at end of input."""
        return self.source[self.position:self.position + 1]

    def lookahead(self, text):
        """(bool) True if the unread text starts with `text`. Consumes nothing."""
        return self.source.startswith(text, self.position)

    def line_col(self, offset=None):
        """(tuple[int, int]) 1-based line and column of offset (default current)."""
        if offset is None:
            offset = self.position
        return proclang.line_col(self.source, offset)

    def error(self, message, cls=None):
        """Raise a parse error at the current position.

        Args:
            message: (str) Human readable expectation
            cls: (type | None) ParseError subclass, SyntacticError by default
        """
        cls = cls or proclang.SyntacticError
        _log.debug("%s error at %d: %s", cls.kind, self.position, message)
        raise cls(message, self.position, self.source)

    def skip_whitespace(self):
        """Advance past any whitespace."""
        source = self.source
        pos = self.position
        while pos < len(source) and source[pos] in WHITESPACE:
            pos += 1
        self.position = pos

    def match_literal(self, token):
        """Consume exactly `token` after whitespace.

        Returns:
            (int) Offset where the token started

        Raises:
            proclang.SyntacticError: If the upcoming text is not `token`
        """
        if not token:
            raise ValueError("Cannot match an empty token")
        self.skip_whitespace()
        if not self.lookahead(token):
            self.error(f"Expected '{token}'")
        start = self.position
        self.position += len(token)
        return start

    def _read_lexeme(self):
        """Consume characters up to the next delimiter."""
        self.skip_whitespace()
        source = self.source
        start = pos = self.position
        while pos < len(source) and source[pos] not in DELIMITERS:
            pos += 1
        self.position = pos
        return start, source[start:pos]

    def read_identifier(self):
        """Read an identifier made only of letters.

        Returns:
            (tuple[int, str]) Start offset and lexeme

        Raises:
            proclang.LexicalError: If the lexeme is empty or has a non-letter
        """
        start, lexeme = self._read_lexeme()
        if not lexeme:
            self.error("Expected identifier", proclang.LexicalError)
        if not all(ch in LETTERS for ch in lexeme):
            self.error(f"Invalid identifier: '{lexeme}' must consist of letters only",
                       proclang.LexicalError)
        return start, lexeme

    def read_number(self):
        """Read a decimal number made only of digits.

        Returns:
            (tuple[int, str]) Start offset and lexeme

        Raises:
            proclang.LexicalError: If the lexeme is empty or has a non-digit
        """
        start, lexeme = self._read_lexeme()
        if not lexeme:
            self.error("Expected number", proclang.LexicalError)
        if not all(ch in DIGITS for ch in lexeme):
            self.error(f"Invalid number: '{lexeme}' contains invalid characters",
                       proclang.LexicalError)
        return start, lexeme

    def read_string_const(self):
        """Read a double quoted string of letters and digits.

        Returns:
            (tuple[int, str]) Offset of the opening quote and the text between
            the quotes

        Raises:
            proclang.LexicalError: On a bad character or missing closing quote
        """
        self.skip_whitespace()
        if self.peek() != '"':
            self.error("Expected string constant", proclang.LexicalError)
        start = self.position
        self.position += 1
        source = self.source
        while self.position < len(source) and source[self.position] != '"':
            ch = source[self.position]
            if ch not in LETTERS and ch not in DIGITS:
                self.error(f"Invalid character '{ch}' in string constant",
                           proclang.LexicalError)
            self.position += 1
        if self.at_end():
            self.error("Unterminated string constant", proclang.LexicalError)
        text = source[start + 1:self.position]
        self.position += 1
        return start, text
