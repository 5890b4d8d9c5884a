"""Recursive descent parser for procedure programs.

Grammar, one method per nonterminal:

    Program      := 'procedure' Id ';' 'begin' Descriptions Operators 'end'
    Descriptions := ('var' DescrList)?
    DescrList    := Descr ( 'var' Descr )*
    Descr        := VarList ':' Type ';'
    VarList      := Id ( ',' Id )*
    Type         := 'integer' | 'char'
    Operators    := Op+
    Op           := Id ':=' Value ( ('+'|'-') Value )? ';'
    Value        := StringConst | Number | NumExpr
    NumExpr      := SimpleExpr ( ('+'|'-') SimpleExpr )*
    SimpleExpr   := Id | Number | '(' NumExpr ')'

Each method picks its production from the next unread character (or a fixed
keyword substring), consumes the input its nonterminal owns and returns one
finished node. The first violation raises and nothing is caught until
`parse()`, which turns it into a failed `ParseResult`.
"""

__all__ = ["Parser", "parse", "parse_program", "MAX_NESTING"]

import functools
import logging

import proclang
from proclang._node import (
    PROGRAM, WORDS_KEY, ID, CONST, SEPARATOR, OPERATION, ParseNode)
from proclang._scan import LETTERS, DIGITS


_log = logging.getLogger(__name__)

ADDITIVE = ("+", "-")

# Deepest parenthesis nesting accepted in an expression.
MAX_NESTING = 100


def parse(source):
    """Parse a whole program.

    Args:
        source: (str) Complete program text

    Returns:
        (ParseResult) The tree, or the first error encountered
    """
    return Parser(source).parse()


def parse_program(source):
    """Parse a whole program and return the root node.

    Raises:
        proclang.ParseError: On the first lexical or syntactic violation
    """
    return Parser(source).parse_program()


def _production(func):
    """Log entry into a grammar method."""
    @functools.wraps(func)
    def wrapper(self):
        _log.debug("%s at %d", func.__name__, self.cursor.position)
        return func(self)
    return wrapper


class Parser:
    """Parser for a single source text.

    Attributes:
        source: (str) Program text
        cursor: (Cursor) Scanning state of the current attempt
        nesting: (int) Open parentheses around the current expression
    """

    def __init__(self, source):
        if not isinstance(source, str):
            raise TypeError(f"Source must be str, not {type(source).__name__}")
        self.source = source
        self.cursor = proclang.Cursor(source)
        self.nesting = 0

    def parse(self):
        """(ParseResult) Parse the whole source, never raising ParseError."""
        try:
            tree = self.parse_program()
        except proclang.ParseError as err:
            _log.debug("parse failed: %s", err.format())
            return proclang.ParseResult(self.source, error=err)
        return proclang.ParseResult(self.source, tree=tree)

    def parse_program(self):
        """(ParseNode) Parse the whole source, raising on the first error."""
        self.cursor = proclang.Cursor(self.source)
        self.nesting = 0
        tree = self.program()
        self.cursor.skip_whitespace()
        if not self.cursor.at_end():
            self.cursor.error("Unexpected input at the end")
        return tree

    # Leaf helpers

    def _literal(self, token, category):
        start = self.cursor.match_literal(token)
        return ParseNode(token, category, position=start)

    def _identifier(self):
        start, lexeme = self.cursor.read_identifier()
        return ParseNode(lexeme, ID, position=start)

    def _number(self):
        start, lexeme = self.cursor.read_number()
        return ParseNode(lexeme, CONST, position=start)

    def _string(self):
        start, text = self.cursor.read_string_const()
        return ParseNode(text, CONST, position=start)

    def _node(self, label, kids, category=None):
        position = kids[0].position if kids else self.cursor.position
        return ParseNode(label, category, kids, position)

    # Nonterminals

    @_production
    def program(self):
        kids = [self._literal("procedure", WORDS_KEY)]
        kids.append(self._identifier())
        kids.append(self._literal(";", SEPARATOR))
        kids.append(self._literal("begin", WORDS_KEY))
        kids.append(self.descriptions())
        kids.append(self.operators())
        kids.append(self._literal("end", WORDS_KEY))
        return self._node("Program", kids, PROGRAM)

    @_production
    def descriptions(self):
        """Optional declaration block; empty when no `var` follows."""
        kids = []
        self.cursor.skip_whitespace()
        if self.cursor.lookahead("var"):
            kids.append(self._literal("var", WORDS_KEY))
            kids.append(self.descr_list())
        return self._node("Descriptions", kids)

    @_production
    def descr_list(self):
        """Declarations after the first each repeat the `var` keyword."""
        kids = [self.descr()]
        self.cursor.skip_whitespace()
        while self.cursor.lookahead("var"):
            kids.append(self._literal("var", WORDS_KEY))
            kids.append(self.descr())
            self.cursor.skip_whitespace()
        return self._node("DescrList", kids)

    @_production
    def descr(self):
        kids = [self.var_list()]
        self.cursor.skip_whitespace()
        if self.cursor.peek() != ":":
            self.cursor.error("Expected ':' after variable declaration")
        kids.append(self._literal(":", SEPARATOR))
        kids.append(self.type_name())
        kids.append(self._literal(";", SEPARATOR))
        return self._node("Descr", kids)

    @_production
    def var_list(self):
        kids = [self._identifier()]
        self.cursor.skip_whitespace()
        while self.cursor.peek() == ",":
            kids.append(self._literal(",", SEPARATOR))
            kids.append(self._identifier())
            self.cursor.skip_whitespace()
        return self._node("VarList", kids)

    @_production
    def type_name(self):
        self.cursor.skip_whitespace()
        for name in ("integer", "char"):
            if self.cursor.lookahead(name):
                return self._literal(name, WORDS_KEY)
        self.cursor.error("Expected type 'integer' or 'char'")

    @_production
    def operators(self):
        """At least one statement, then more until the text reads `end`."""
        kids = []
        while True:
            kids.append(self.op())
            self.cursor.skip_whitespace()
            if self.cursor.at_end() or self.cursor.lookahead("end"):
                break
        return self._node("Operators", kids)

    @_production
    def op(self):
        kids = [self._identifier()]
        kids.append(self._literal(":=", OPERATION))
        kids.append(self.value())
        self.cursor.skip_whitespace()
        sign = self.cursor.peek()
        if sign in ADDITIVE:
            kids.append(self._literal(sign, OPERATION))
            kids.append(self.value())
        kids.append(self._literal(";", SEPARATOR))
        return self._node("Op", kids)

    @_production
    def value(self):
        """A string or number constant, otherwise a numeric expression."""
        self.cursor.skip_whitespace()
        ch = self.cursor.peek()
        if ch == '"':
            return self._string()
        if ch and ch in DIGITS:
            return self._number()
        return self.num_expr()

    @_production
    def num_expr(self):
        kids = [self.simple_expr()]
        self.cursor.skip_whitespace()
        while self.cursor.peek() in ADDITIVE:
            kids.append(self._literal(self.cursor.peek(), OPERATION))
            kids.append(self.simple_expr())
            self.cursor.skip_whitespace()
        return self._node("Expr", kids)

    @_production
    def simple_expr(self):
        self.cursor.skip_whitespace()
        ch = self.cursor.peek()
        if ch and ch in LETTERS:
            kids = [self._identifier()]
        elif ch and ch in DIGITS:
            kids = [self._number()]
        elif ch == "(":
            if self.nesting >= MAX_NESTING:
                self.cursor.error("Expression nested too deeply")
            kids = [self._literal("(", SEPARATOR)]
            self.nesting += 1
            try:
                kids.append(self.num_expr())
            finally:
                self.nesting -= 1
            kids.append(self._literal(")", SEPARATOR))
        else:
            self.cursor.error("Expected simple numerical expression")
        return self._node("SimpleExpr", kids)
