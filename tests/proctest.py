"""Shared helpers for the proclang tests."""

import pytest

import proclang


def params(names, **cases):
    """Parametrize a test from keyword cases.

    Each keyword becomes the test id and is passed as the `key` argument
    ahead of the named values.
    """
    names = ["key"] + names.replace(",", " ").split()
    values = [(key, *case) for key, case in cases.items()]
    return pytest.mark.parametrize(names, values, ids=list(cases))


def program(body, decls=""):
    """Wrap statements (and optional declarations) in a procedure block."""
    return f"procedure p; begin {decls} {body} end"


def parse_ok(source) -> proclang.ParseNode:
    """Parse source that must succeed and return the tree."""
    result = proclang.parse(source)
    assert result.ok, f"Parse failed: {result.error.format()}"
    return result.tree


def parse_fail(source, kind=None, message=None) -> proclang.ParseError:
    """Parse source that must fail and return the error."""
    result = proclang.parse(source)
    assert not result.ok, f"Expected failure, got tree:\n{result.tree.format()}"
    assert result.tree is None
    err = result.error
    if kind:
        assert err.kind == kind, f"Expected {kind} error, got {err.kind}: {err.message}"
    if message:
        assert message in err.message, f"{err.message!r} does not contain {message!r}"
    return err


def shape(node):
    """Nested (label, category, kids) tuples for compact tree comparison."""
    kids = [shape(kid) for kid in node.children]
    if not kids:
        return (node.label, node.category)
    return (node.label, node.category, kids)


def token_labels(node):
    """Labels of the tagged leaves in source order."""
    return [tok.label for tok in node.tokens()]
