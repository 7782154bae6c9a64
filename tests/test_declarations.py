import pytest

from whenlang.astree import Node, NodeType
from whenlang.declarations import (
    SemanticError,
    count_arguments,
    count_parameters,
    expression_type,
    set_declarations,
)
from whenlang.symbols import DataType, ExpressionType, Nature, SymbolKind, SymbolTable

T = NodeType


@pytest.fixture
def table():
    return SymbolTable()


def ident(table, name):
    return table.insert(name, SymbolKind.IDENTIFIER)


def lit_int(table, text):
    return Node(T.LIT_INT, table.insert(text, SymbolKind.LIT_INTEGER))


def lit_real(table, text):
    return Node(T.LIT_REAL, table.insert(text, SymbolKind.LIT_REAL))


def test_literal_expression_types(table):
    assert expression_type(lit_int(table, "1")) is ExpressionType.INTEGER
    assert expression_type(lit_real(table, "1.5")) is ExpressionType.REAL
    char = Node(T.LIT_CHAR, table.insert("'a'", SymbolKind.LIT_CHAR))
    assert expression_type(char) is ExpressionType.CHAR
    text = Node(T.LIT_STRING, table.insert('"hi"', SymbolKind.LIT_STRING))
    assert expression_type(text) is ExpressionType.STRING


def test_arithmetic_promotes_to_real(table):
    ints = Node(T.ADD, None, (lit_int(table, "1"), lit_int(table, "2")))
    assert expression_type(ints) is ExpressionType.INTEGER
    mixed = Node(T.MUL, None, (lit_int(table, "1"), lit_real(table, "2.0")))
    assert expression_type(mixed) is ExpressionType.REAL
    wrapped = Node(T.EXP_PARENTHESIS, None, (mixed,))
    assert expression_type(wrapped) is ExpressionType.REAL


@pytest.mark.parametrize("kind", [T.LEQ, T.GTE, T.EQU, T.NEQ, T.AND, T.OR, T.LES, T.GTR])
def test_comparisons_are_boolean(table, kind):
    node = Node(kind, None, (lit_int(table, "1"), lit_int(table, "2")))
    assert expression_type(node) is ExpressionType.BOOLEAN


def test_identifier_uses_symbol_type(table):
    symbol = ident(table, "x")
    node = Node(T.TK_ID, symbol)
    assert expression_type(node) is None
    symbol.expression_type = ExpressionType.CHAR
    assert expression_type(node) is ExpressionType.CHAR


def test_untyped_node_has_no_expression_type(table):
    assert expression_type(Node(T.CMD_LST)) is None
    assert expression_type(None) is None


def test_count_arguments(table):
    assert count_arguments(None) == 0
    last = Node(T.FUNC_ARGS_EXT, None, (lit_int(table, "3"),))
    middle = Node(T.FUNC_ARGS_EXT, None, (lit_int(table, "2"), last))
    first = Node(T.FUNC_ARGS, None, (lit_int(table, "1"), middle))
    assert count_arguments(first) == 3


def test_count_arguments_rejects_other_nodes(table):
    with pytest.raises(SemanticError):
        count_arguments(lit_int(table, "1"))


def param(table, name):
    return Node(T.PARAM, ident(table, name), (Node(T.KW_LONG),))


def test_count_parameters(table):
    assert count_parameters(param(table, "a")) == 1
    pair = Node(T.PARAM_LST, None, (param(table, "b"), param(table, "c")))
    assert count_parameters(pair) == 2
    triple = Node(T.PARAM_LST, None, (param(table, "a"), pair))
    assert count_parameters(triple) == 3


def test_count_parameters_unresolved(table):
    broken = Node(T.PARAM_LST, None, (param(table, "a"),))
    with pytest.raises(SemanticError):
        count_parameters(broken)


def test_variable_declaration(table):
    x = ident(table, "x")
    value = table.insert("5", SymbolKind.LIT_INTEGER)
    decl = Node(T.VAR_DEC, x, (Node(T.INT, value, (Node(T.KW_LONG),)),))
    set_declarations(decl)
    assert x.declared == 1
    assert x.nature == Nature.VARIABLE
    assert x.expression_type == ExpressionType.INTEGER
    assert x.data_type == DataType.LONG


def test_array_declaration(table):
    v = ident(table, "v")
    size = table.insert("10", SymbolKind.LIT_INTEGER)
    decl = Node(T.VAR_DEC, v, (Node(T.ARR_FLOAT, size, (Node(T.KW_DOUBLE),)),))
    set_declarations(decl)
    assert v.nature == Nature.ARRAY
    assert v.expression_type == ExpressionType.REAL
    assert v.data_type == DataType.DOUBLE


def test_redeclared_variable_raises(table):
    x = ident(table, "x")
    value = table.insert("'c'", SymbolKind.LIT_CHAR)

    def decl():
        return Node(T.VAR_DEC, x, (Node(T.CHAR, value, (Node(T.KW_BYTE),)),))

    tree = Node(T.DECL_LIST, None, (decl(), decl()))
    with pytest.raises(SemanticError):
        set_declarations(tree)


def test_function_declaration_with_parameters(table):
    f = ident(table, "f")
    params = Node(T.PARAM_LST, None, (param(table, "a"), param(table, "b")))
    body = Node(T.CMD_BKTS)
    decl = Node(T.FUNC_DEC, f, (Node(T.KW_SHORT), params, body))
    set_declarations(decl)
    assert f.nature == Nature.FUNCTION
    assert f.data_type == DataType.SHORT
    assert f.parameters_number == 2
    a = table.find("a", SymbolKind.IDENTIFIER)
    assert a.declared == 1
    assert a.nature == Nature.VARIABLE
    assert a.data_type == DataType.LONG


def test_function_without_parameters(table):
    g = ident(table, "g")
    set_declarations(Node(T.FUNC_DEC, g, (Node(T.KW_FLOAT), None, Node(T.CMD_BKTS))))
    assert g.parameters_number == 0
    assert g.data_type == DataType.FLOAT


def test_parameter_reused_across_functions_raises(table):
    first = Node(T.FUNC_DEC, ident(table, "f"), (Node(T.KW_BYTE), param(table, "a")))
    second = Node(T.FUNC_DEC, ident(table, "g"), (Node(T.KW_BYTE), param(table, "a")))
    with pytest.raises(SemanticError):
        set_declarations(Node(T.DECL_LIST, None, (first, second)))


def test_function_name_clashing_with_variable_raises(table):
    name = ident(table, "dup")
    value = table.insert("1", SymbolKind.LIT_INTEGER)
    var = Node(T.VAR_DEC, name, (Node(T.INT, value, (Node(T.KW_LONG),)),))
    func = Node(T.FUNC_DEC, name, (Node(T.KW_LONG),))
    with pytest.raises(SemanticError):
        set_declarations(Node(T.DECL_LIST, None, (var, func)))


def test_non_identifier_declaration_is_ignored(table):
    literal = table.insert("7", SymbolKind.LIT_INTEGER)
    value = table.insert("1", SymbolKind.LIT_INTEGER)
    set_declarations(Node(T.VAR_DEC, literal, (Node(T.INT, value, (Node(T.KW_LONG),)),)))
    assert literal.declared == 0
    assert literal.nature == 0


def test_unresolved_data_type_raises(table):
    f = ident(table, "f")
    with pytest.raises(SemanticError):
        set_declarations(Node(T.FUNC_DEC, f, (Node(T.CMD_BKTS),)))