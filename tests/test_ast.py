import io

import pytest

from cminus_front.ast import (
    DeclarationKind,
    ExpressionKind,
    Node,
    NodeKind,
    StatementKind,
    format_tree,
    write_tree,
)


def make_id(name, line=1):
    return Node(line, name, NodeKind.EXPRESSION, ExpressionKind.ID)


def test_subkind_is_coerced_to_family():
    node = Node(1, "x", NodeKind.EXPRESSION, 2)
    assert node.subkind is ExpressionKind.ID
    decl = Node(1, "int", NodeKind.DECLARATION, 1)
    assert decl.subkind is DeclarationKind.FUN


def test_unknown_subkind_kept_as_int():
    node = Node(1, "x", NodeKind.STATEMENT, -1)
    assert node.subkind == -1
    assert node.describe().endswith("Tipo_Union: unknown")


def test_lexeme_is_truncated():
    node = make_id("a" * 40)
    assert node.lexeme == "a" * 24


def test_add_child_sets_parent_and_order():
    parent = Node(1, "=", NodeKind.EXPRESSION, ExpressionKind.ASSIGN)
    left, right = make_id("x"), make_id("y")
    assert parent.add_child(left) is parent
    parent.add_child(right)
    assert parent.children == [left, right]
    assert left.parent is parent and right.parent is parent


def test_add_child_beyond_limit_raises():
    parent = Node(1, "if", NodeKind.STATEMENT, StatementKind.IF)
    for name in "abc":
        parent.add_child(make_id(name))
    with pytest.raises(ValueError):
        parent.add_child(make_id("d"))
    assert len(parent.children) == 3


def test_add_sibling_appends_to_chain_end():
    first = make_id("a")
    second = first.add_sibling(make_id("b"))
    third = first.add_sibling(make_id("c"))
    assert [n.lexeme for n in first.siblings()] == ["a", "b", "c"]
    assert third.prev_sibling is second
    assert second.prev_sibling is first
    assert second.parent is None


def test_describe_plain_node():
    node = Node(3, "x", NodeKind.EXPRESSION, ExpressionKind.ID)
    assert node.describe() == "Linha: 3, Lexema: x, Tipo: expression, Tipo_Union: id"


def test_describe_operator_uses_lexeme_and_links():
    op = Node(2, "+", NodeKind.EXPRESSION, ExpressionKind.OP)
    a = make_id("a", 2)
    op.add_child(a)
    b = a.add_sibling(make_id("b", 2))
    assert op.describe() == "Linha: 2, Lexema: +, Tipo: expression, Tipo_Union: +"
    assert a.describe().endswith(", Pai: +")
    assert b.describe().endswith(", Irmao Anterior: a")


def test_describe_declaration_and_statement_names():
    decl = Node(1, "int", NodeKind.DECLARATION, DeclarationKind.PARAM)
    stmt = Node(1, "while", NodeKind.STATEMENT, StatementKind.WHILE)
    assert decl.describe().endswith("Tipo: declaration, Tipo_Union: parameter")
    assert stmt.describe().endswith("Tipo: statement, Tipo_Union: while")


def test_format_tree_layout():
    root = Node(1, "int", NodeKind.DECLARATION, DeclarationKind.VAR)
    root.add_child(make_id("x"))
    root.add_sibling(Node(2, "void", NodeKind.DECLARATION, DeclarationKind.FUN))
    lines = format_tree(root).splitlines()
    assert len(lines) == 3
    assert lines[0].startswith("Linha: 1, Lexema: int")
    assert lines[1].startswith("  Linha: 1, Lexema: x")
    assert lines[2].startswith("-Linha: 2, Lexema: void")


def test_format_tree_nested_siblings_indented():
    root = Node(1, "f", NodeKind.DECLARATION, DeclarationKind.FUN)
    child = make_id("a")
    root.add_child(child)
    child.add_sibling(make_id("b"))
    lines = format_tree(root).splitlines()
    assert lines[2].startswith("  -Linha: 1, Lexema: b")


def test_format_tree_empty():
    assert format_tree(None) == ""


def test_write_tree_matches_format():
    root = make_id("x")
    root.add_sibling(make_id("y"))
    buffer = io.StringIO()
    write_tree(buffer, root)
    assert buffer.getvalue() == format_tree(root)
    assert buffer.getvalue().endswith("\n")