import io

import pytest

from whenlang.astree import MAX_CHILDREN, Node, NodeType, format_tree, print_tree
from whenlang.symbols import SymbolKind, SymbolTable


@pytest.fixture
def table():
    return SymbolTable()


@pytest.mark.parametrize(
    "code, label",
    [(0, "ASTREE_DECL_LIST"), (21, "ASTREE_INT_LST"), (65, "ASTREE_GTR")],
)
def test_pinned_node_type_values(code, label):
    assert format_tree(Node(code)) == f"ASTREE({label},)\n"


def test_children_are_padded(table):
    leaf = Node(NodeType.KW_BYTE)
    node = Node(NodeType.PARAM, table.insert("a", SymbolKind.IDENTIFIER), (leaf,))
    assert len(node.children) == MAX_CHILDREN
    assert node.child(0) is leaf
    assert node.child(3) is None


def test_child_index_out_of_range():
    node = Node(NodeType.KW_LONG)
    with pytest.raises(IndexError):
        node.child(4)
    with pytest.raises(IndexError):
        node.child(-1)


def test_too_many_children():
    with pytest.raises(ValueError):
        Node(NodeType.DECL_LIST, None, (None,) * 5)


def test_unknown_type_rejected():
    with pytest.raises(ValueError):
        Node(999)


def test_int_type_coerced():
    assert Node(60).type is NodeType.ADD


def test_format_tree(table):
    kw = Node(NodeType.KW_SHORT)
    value = Node(NodeType.INT, table.insert("5", SymbolKind.LIT_INTEGER), (kw,))
    decl = Node(NodeType.VAR_DEC, table.insert("x", SymbolKind.IDENTIFIER), (value,))
    assert format_tree(decl) == (
        "ASTREE(ASTREE_VAR_DEC,x)\n"
        "  ASTREE(ASTREE_INT,5)\n"
        "    ASTREE(ASTREE_KW_SHORT,)\n"
    )


def test_format_tree_skips_empty_slots(table):
    leaf = Node(NodeType.TK_ID, table.insert("y", SymbolKind.IDENTIFIER))
    node = Node(NodeType.ADD, None, (None, leaf))
    assert format_tree(node, 1) == "  ASTREE(ASTREE_ADD,)\n    ASTREE(ASTREE_TK_ID,y)\n"


def test_format_none_is_empty():
    assert format_tree(None) == ""


def test_print_tree_writes_dump(table):
    node = Node(NodeType.KW_READ, table.insert("z", SymbolKind.IDENTIFIER))
    out = io.StringIO()
    print_tree(node, 0, out)
    assert out.getvalue() == format_tree(node)