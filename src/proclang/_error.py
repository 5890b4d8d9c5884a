"""Error classes and helpers"""

__all__ = ["ParseError", "LexicalError", "SyntacticError", "line_col"]


def line_col(source, offset):
    """Convert a source offset into a 1-based (line, column) pair."""
    offset = min(offset, len(source))
    line = source.count("\n", 0, offset) + 1
    start = source.rfind("\n", 0, offset) + 1
    return line, offset - start + 1


class ParseError(Exception):
    """Exception raised for parsing errors.

    Args:
        message: (str) Error description
        position: (int | None) Optional character position where error occurred
        source: (str | None) Source text, used to compute line and column

    Attributes:
        message: (str) Error description
        position: (int | None) Character position where error occurred
        line: (int | None) 1-based line of position, when source is known
        column: (int | None) 1-based column of position, when source is known
    """

    kind = "parse"

    def __init__(self, message, position=None, source=None):
        self.message = message
        self.position = position
        self.line = self.column = None
        if source is not None and position is not None:
            self.line, self.column = line_col(source, position)
        super().__init__(message)

    def format(self):
        """(str) Diagnostic in the form reported to the user."""
        if self.position is None:
            return self.message
        where = f"Error at position {self.position}"
        if self.line is not None:
            where += f" (line {self.line}, column {self.column})"
        return f"{where}: {self.message}"


class LexicalError(ParseError):
    """A scanned lexeme broke its character class rule."""

    kind = "lexical"


class SyntacticError(ParseError):
    """Upcoming input does not match what the current production requires."""

    kind = "syntactic"
