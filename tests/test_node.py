"""Tests for the parse tree node model, rendering and Lark conversion."""

import lark
import pytest

import proclang
import proctest


SOURCE = "procedure p; begin x:=1; end"

RENDERED = """\
Program  [Program]
  procedure  [WordsKey]
  p  [Id]
  ;  [Symbols_of_Separating]
  begin  [WordsKey]
  Descriptions
  Operators
    Op
      x  [Id]
      :=  [Symbols_of_Operation]
      1  [Const]
      ;  [Symbols_of_Separating]
  end  [WordsKey]"""


def test_node_is_immutable():
    node = proclang.ParseNode("x", proclang.ID)
    with pytest.raises(AttributeError):
        node.label = "y"
    with pytest.raises(AttributeError):
        node.children = ()


def test_children_become_tuple():
    kids = [proclang.ParseNode("x", proclang.ID)]
    node = proclang.ParseNode("VarList", children=kids)
    kids.append(proclang.ParseNode("y", proclang.ID))
    assert len(node.children) == 1
    assert isinstance(node.children, tuple)


def test_unknown_category():
    with pytest.raises(ValueError):
        proclang.ParseNode("x", "Identifier")


def test_equality_ignores_position():
    a = proclang.ParseNode("x", proclang.ID, position=3)
    b = proclang.ParseNode("x", proclang.ID, position=9)
    assert a == b
    assert hash(a) == hash(b)
    assert a != proclang.ParseNode("x", proclang.CONST)


def test_format():
    tree = proctest.parse_ok(SOURCE)
    assert tree.format() == RENDERED


def test_format_positions():
    source = "procedure p;\nbegin\n  x := 1;\nend"
    lines = proctest.parse_ok(source).format(source).splitlines()
    assert lines[0] == "Program  [Program] @1:1"
    assert lines[2] == "  p  [Id] @1:11"
    assert lines[-1] == "  end  [WordsKey] @4:1"


def test_walk_depths():
    tree = proctest.parse_ok(SOURCE)
    depths = [(depth, node.label) for depth, node in tree.walk()]
    assert depths[0] == (0, "Program")
    assert (2, "Op") in depths
    assert (3, ":=") in depths


def test_is_leaf():
    tree = proctest.parse_ok(SOURCE)
    assert not tree.is_leaf
    assert next(tree.find("Descriptions")).is_leaf
    assert next(tree.find("x")).is_leaf


def test_to_lark():
    tree = proctest.parse_ok(SOURCE).to_lark()
    assert isinstance(tree, lark.Tree)
    assert tree.data == "Program"
    first = tree.children[0]
    assert isinstance(first, lark.Token)
    assert first.type == "WordsKey"
    assert first == "procedure"
    descriptions = tree.children[4]
    assert isinstance(descriptions, lark.Tree)
    assert descriptions.children == []
    values = list(tree.scan_values(lambda v: isinstance(v, lark.Token)))
    assert values == proctest.token_labels(proctest.parse_ok(SOURCE))


def test_to_lark_positions():
    source = "procedure p;\nbegin\n  x := 1;\nend"
    tree = proctest.parse_ok(source).to_lark(source)
    name = tree.children[1]
    assert (name.start_pos, name.line, name.column) == (10, 1, 11)
    op = next(tree.find_data("Op"))
    assert (op.meta.line, op.meta.column) == (3, 3)


def test_to_lark_transformer():

    class Identifiers(lark.Transformer):
        def Op(self, kids):
            return kids[0].value

        def Operators(self, kids):
            return kids

    source = "procedure p; begin x:=1; y:=2; end"
    tree = proctest.parse_ok(source).to_lark()
    result = Identifiers().transform(tree)
    assert result.children[5] == ["x", "y"]
