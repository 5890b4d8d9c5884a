"""Parse tree nodes.

Each grammar function returns one `ParseNode`. Nonterminals used only for
structure (`Descriptions`, `Expr`, ...) carry no category. Leaves carry the
lexeme they were built from and one of the fixed categories below.

Nodes are finished before they are returned. After that they cannot be
changed; the children are stored as a tuple and attribute assignment is
refused.

Source Position:
    Each node records the offset of the first character it consumed. This
    maps to Lark's Token.start_pos when the tree is converted with to_lark().
"""

__all__ = [
    "CATEGORIES",
    "PROGRAM",
    "WORDS_KEY",
    "ID",
    "CONST",
    "SEPARATOR",
    "OPERATION",
    "ParseNode",
]

import lark

import proclang


PROGRAM = "Program"
WORDS_KEY = "WordsKey"
ID = "Id"
CONST = "Const"
SEPARATOR = "Symbols_of_Separating"
OPERATION = "Symbols_of_Operation"

CATEGORIES = (PROGRAM, WORDS_KEY, ID, CONST, SEPARATOR, OPERATION)


class ParseNode:
    """A node of the parse tree.

    Attributes:
        label: (str) Lexeme text or nonterminal display name
        category: (str | None) One of CATEGORIES, or None for structure nodes
        children: (tuple[ParseNode, ...]) Child nodes in derivation order
        position: (int | None) Source offset of the first consumed character
    """

    __slots__ = ("label", "category", "children", "position")

    def __init__(self, label, category=None, children=(), position=None):
        if category is not None and category not in CATEGORIES:
            raise ValueError(f"Unknown node category: {category!r}")
        object.__setattr__(self, "label", label)
        object.__setattr__(self, "category", category)
        object.__setattr__(self, "children", tuple(children))
        object.__setattr__(self, "position", position)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other):
        if not isinstance(other, ParseNode):
            return NotImplemented
        return (
            self.label == other.label
            and self.category == other.category
            and self.children == other.children
        )

    def __hash__(self):
        return hash((self.label, self.category, self.children))

    def __repr__(self):
        if self.category and not self.children:
            return f"ParseNode({self.label!r}, {self.category!r})"
        return f"ParseNode({self.label!r}, children={len(self.children)})"

    @property
    def is_leaf(self):
        """(bool) True when the node has no children."""
        return not self.children

    def walk(self, depth=0):
        """Iterate (depth, node) pairs in depth-first pre-order."""
        yield depth, self
        for child in self.children:
            yield from child.walk(depth + 1)

    def tokens(self):
        """Iterate the tagged leaves, in source order."""
        for _, node in self.walk():
            if node.is_leaf and node.category is not None:
                yield node

    def find(self, label):
        """Iterate every node in pre-order whose label matches."""
        for _, node in self.walk():
            if node.label == label:
                yield node

    def lines(self, source=None):
        """Render the tree as indented lines.

        Args:
            source: (str | None) When given, each line gets an @line:column
                suffix computed from the node position
        """
        for depth, node in self.walk():
            line = "  " * depth + node.label
            if node.category:
                line += f"  [{node.category}]"
            if source is not None and node.position is not None:
                lineno, col = proclang.line_col(source, node.position)
                line += f" @{lineno}:{col}"
            yield line

    def format(self, source=None):
        """(str) The whole tree, one node per line."""
        return "\n".join(self.lines(source))

    def to_lark(self, source=None):
        """Convert to a `lark.Tree`.

        Tagged leaves become `lark.Token` values typed by their category.
        Every other node becomes a `lark.Tree` named by its label, so empty
        nonterminals such as a missing `Descriptions` stay as childless
        trees.

        Args:
            source: (str | None) When given, tokens and tree meta get
                line and column information
        """
        if self.is_leaf and self.category is not None:
            line = column = None
            if source is not None and self.position is not None:
                line, column = proclang.line_col(source, self.position)
            return lark.Token(self.category, self.label,
                              start_pos=self.position, line=line, column=column)

        tree = lark.Tree(self.label, [kid.to_lark(source) for kid in self.children])
        if source is not None and self.position is not None:
            meta = tree.meta
            meta.line, meta.column = proclang.line_col(source, self.position)
            meta.start_pos = self.position
            meta.empty = False
        return tree
