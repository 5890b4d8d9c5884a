"""Outcome of a parse attempt"""

__all__ = ["ParseResult"]


class ParseResult:
    """Either a finished tree or the error that stopped the parse.

    Exactly one of `tree` and `error` is set.

    Attributes:
        source: (str) The text that was parsed
        tree: (ParseNode | None) Root `Program` node on success
        error: (ParseError | None) First violation on failure
    """

    __slots__ = ("source", "tree", "error")

    def __init__(self, source, tree=None, error=None):
        if (tree is None) == (error is None):
            raise ValueError("ParseResult needs exactly one of tree or error")
        self.source = source
        self.tree = tree
        self.error = error

    def __repr__(self):
        if self.error is not None:
            return f"ParseResult(error={self.error.format()!r})"
        return f"ParseResult(tree={self.tree!r})"

    def __bool__(self):
        return self.ok

    @property
    def ok(self):
        """(bool) True when the parse produced a tree."""
        return self.error is None

    def unwrap(self):
        """Return the tree, or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.tree

    def format(self, positions=False):
        """(str) Report text for display.

        Args:
            positions: (bool) Add @line:column to each tree line
        """
        if self.error is not None:
            return f"Parsing failed: {self.error.format()}"
        source = self.source if positions else None
        return "\n".join([
            "Parsing successful!",
            "Parse Tree:",
            self.tree.format(source),
        ])
