import pytest

from cminus.gramtree import (
    Node,
    SymbolKind,
    format_tree,
    new_empty,
    new_node,
    new_token,
)


def test_id_token_types():
    assert new_token("TYPE", "int", 1).type == SymbolKind.INT
    assert new_token("TYPE", "float", 1).type == SymbolKind.FLOAT
    ident = new_token("ID", "counter", 4)
    assert ident.type == SymbolKind.NONE
    assert ident.text == "counter"
    assert ident.line == 4


@pytest.mark.parametrize(
    "text, expected",
    [("0123", 0o123), ("0x3f", 0x3F), ("42", 42), ("09", 0), ("0x3G", 0x3)],
)
def test_int_token_follows_c_prefixes(text, expected):
    node = new_token("INT", text, 1)
    assert node.int_value == expected
    assert node.type == SymbolKind.CONST_INT


def test_float_token_parses_prefix():
    assert new_token("FLOAT", "1.05e-4", 1).float_value == pytest.approx(1.05e-4, rel=1e-6)
    truncated = new_token("FLOAT", "1.05e", 1)
    assert truncated.float_value == pytest.approx(1.05, rel=1e-6)
    assert truncated.type == SymbolKind.CONST_FLOAT


def test_relop_token_keeps_operator():
    node = new_token("RELOP", "<=", 2)
    assert node.text == "<="
    assert node.type == SymbolKind.NONE


def test_new_node_links_children_and_inherits():
    first = new_token("ID", "x", 7)
    second = new_token("ASSIGNOP", "=", 7)
    third = new_token("INT", "5", 7)
    node = new_node("Exp", first, second, third)
    assert node.children() == [first, second, third]
    assert node.line == 7
    assert node.text == "x"
    assert third.sibling is None


def test_new_node_copies_constant_values():
    int_exp = new_node("Exp", new_token("INT", "7", 1))
    assert int_exp.int_value == 7
    assert int_exp.type == SymbolKind.CONST_INT
    assert int_exp.text is None
    float_exp = new_node("Exp", new_token("FLOAT", "2.5", 1))
    assert float_exp.float_value == pytest.approx(2.5)
    assert float_exp.type == SymbolKind.CONST_FLOAT


def test_new_node_requires_children():
    with pytest.raises(ValueError):
        new_node("Exp")


def test_empty_node_is_hidden_when_printed():
    empty = new_empty("DefList")
    assert empty.is_empty
    assert empty.children() == []
    assert format_tree(empty) == ""


def test_format_tree_nonterminal_and_int():
    tree = new_node("Exp", new_token("INT", "5", 3))
    assert format_tree(tree, 0) == "Exp(3)\n  INT: 5\n"


def test_format_tree_float_uses_six_decimals():
    assert format_tree(new_token("FLOAT", "1.5", 2)) == "FLOAT: 1.500000\n"


def test_format_tree_skips_empty_but_keeps_siblings():
    tree = new_node(
        "CompSt",
        new_token("LC", "{", 1),
        new_empty("DefList"),
        new_token("RC", "}", 2),
    )
    lines = format_tree(tree).splitlines()
    assert lines == ["CompSt(1)", "  LC", "  RC"]


def test_format_tree_indents_by_level():
    tree = new_node("Exp", new_token("ID", "y", 1))
    lines = format_tree(tree, 2).splitlines()
    assert lines[0].startswith("    Exp")
    assert lines[1] == "      ID: y"


def test_node_children_empty_for_token():
    assert isinstance(new_token("SEMI", ";", 1), Node)
    assert new_token("SEMI", ";", 1).children() == []