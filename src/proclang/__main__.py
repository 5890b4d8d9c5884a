#!/usr/bin/env python3
"""Proclang CLI - Parse a procedure program and print its tree.

Usage:
    proclang <file>                 # Show the parse tree
    proclang <file> --lark          # Show the tree converted to Lark
    proclang <file> --lark --raw    # Lark's built-in pretty()
    proclang --text "<program>"     # Parse text given on the command line
    proclang                        # Prompt for a filename
"""

import argparse
import logging
import pathlib
import sys

from lark import Token, Tree

import proclang


_log = logging.getLogger("proclang")


def prettylark(node, indent=0, show_positions=False, out=None):
    """Pretty-print a Lark tree built by `ParseNode.to_lark()`.

    Shows tree structure with indentation, with single-token trees compacted
    onto one line.
    """
    out = out or sys.stdout
    prefix = "  " * indent

    if isinstance(node, Token):
        pos = f" @{node.line}:{node.column}" if show_positions and node.line else ""
        print(f"{prefix}{node.type}: {node.value!r}{pos}", file=out)

    elif isinstance(node, Tree):
        pos = ""
        if show_positions and node.meta and not node.meta.empty:
            pos = f" @{node.meta.line}:{node.meta.column}"

        if len(node.children) == 0:
            print(f"{prefix}{node.data}(){pos}", file=out)
        elif len(node.children) == 1 and isinstance(node.children[0], Token):
            child = node.children[0]
            print(f"{prefix}{node.data}: {child.value!r}{pos}", file=out)
        else:
            print(f"{prefix}{node.data}:{pos}", file=out)
            for child in node.children:
                prettylark(child, indent + 1, show_positions, out)

    else:
        print(f"{prefix}??? {type(node).__name__}: {node!r}", file=out)


def read_source(args):
    """Return the program text named by the arguments, or None if unreadable."""
    if args.text:
        return args.source
    name = args.source
    if name is None:
        try:
            name = input("Enter filename: ").strip()
        except EOFError:
            print("Error: No filename given", file=sys.stderr)
            return None
    filepath = pathlib.Path(name)
    try:
        return filepath.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        _log.debug("reading %s failed: %s", filepath, e)
        print(f"Error: Unable to open file {name}", file=sys.stderr)
        return None


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="proclang",
        description="Parse a procedure program and print its parse tree")
    parser.add_argument("source", nargs="?",
        help="Program file to parse (prompted for when omitted)")
    parser.add_argument("--text", action="store_true",
        help="Treat source as program text instead of a filename")
    parser.add_argument("--lark", action="store_true",
        help="Show the tree converted to a Lark tree")
    parser.add_argument("--raw", action="store_true",
        help="Show raw Lark tree output (built-in pretty)")
    parser.add_argument("--pos", action="store_true",
        help="Show line:column positions for nodes")
    parser.add_argument("-v", "--verbose", action="store_true",
        help="Log each grammar step")

    args = parser.parse_args(argv)
    if args.text and args.source is None:
        parser.error("--text requires program text")
    if args.raw and not args.lark:
        parser.error("--raw is only valid with --lark")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s")

    source = read_source(args)
    if source is None:
        return 1

    result = proclang.parse(source)
    if not result.ok:
        print(result.format(), file=sys.stderr)
        return 1

    if not args.lark:
        print(result.format(positions=args.pos))
        return 0

    print("Parsing successful!")
    print("Parse Tree:")
    tree = result.tree.to_lark(source if args.pos else None)
    if args.raw:
        print(tree.pretty(), end="")
    else:
        prettylark(tree, show_positions=args.pos)
    return 0


if __name__ == "__main__":
    sys.exit(main())
