"""Declaration pass and expression typing over the syntax tree."""

from __future__ import annotations

from .astree import Node, NodeType
from .symbols import DataType, ExpressionType, Nature, Symbol, SymbolKind

_T = NodeType


class SemanticError(Exception):
    """Raised when a program breaks a rule of the language."""

    exit_code = 4


_LITERAL_TYPES = {
    _T.LIT_INT: ExpressionType.INTEGER,
    _T.LIT_CHAR: ExpressionType.CHAR,
    _T.LIT_REAL: ExpressionType.REAL,
    _T.LIT_STRING: ExpressionType.STRING,
}

_SYMBOL_TYPED = frozenset({_T.TK_ID, _T.ARRAY_CALL, _T.FUNC_CALL})

_COMPARISONS = frozenset(
    {_T.LEQ, _T.GTE, _T.EQU, _T.NEQ, _T.AND, _T.LES, _T.GTR, _T.OR}
)

_ARITHMETIC = frozenset({_T.ADD, _T.SUB, _T.MUL, _T.DIV})

_KEYWORD_DATA_TYPES = {
    _T.KW_BYTE: DataType.BYTE,
    _T.KW_SHORT: DataType.SHORT,
    _T.KW_LONG: DataType.LONG,
    _T.KW_FLOAT: DataType.FLOAT,
    _T.KW_DOUBLE: DataType.DOUBLE,
}

# Declared form of a variable: (expression type, nature).
_VARIABLE_FORMS = {
    _T.CHAR: (ExpressionType.CHAR, Nature.VARIABLE),
    _T.INT: (ExpressionType.INTEGER, Nature.VARIABLE),
    _T.REAL: (ExpressionType.REAL, Nature.VARIABLE),
    _T.ARR_INT: (ExpressionType.INTEGER, Nature.ARRAY),
    _T.ARR_CHAR: (ExpressionType.CHAR, Nature.ARRAY),
    _T.ARR_FLOAT: (ExpressionType.REAL, Nature.ARRAY),
    _T.ARR: (ExpressionType.INTEGER, Nature.ARRAY),
}

_ARGUMENT_NODES = frozenset({_T.FUNC_ARGS, _T.FUNC_ARGS_EXT})


def _symbol_expression_type(symbol: Symbol | None) -> ExpressionType | None:
    if symbol is None:
        return None
    try:
        return ExpressionType(symbol.expression_type)
    except ValueError:
        return None


def expression_type(node: Node | None) -> ExpressionType | None:
    """Return the type of the expression rooted at ``node``.

    Identifiers, array reads and calls take the type recorded on their
    symbol.  Arithmetic is REAL if either operand is REAL, otherwise
    INTEGER.  A node with no known type gives None.
    """
    if node is None:
        return None
    kind = node.type
    if kind in _LITERAL_TYPES:
        return _LITERAL_TYPES[kind]
    if kind in _SYMBOL_TYPED:
        return _symbol_expression_type(node.symbol)
    if kind in _COMPARISONS:
        return ExpressionType.BOOLEAN
    if kind in _ARITHMETIC:
        if (
            expression_type(node.child(0)) == ExpressionType.REAL
            or expression_type(node.child(1)) == ExpressionType.REAL
        ):
            return ExpressionType.REAL
        return ExpressionType.INTEGER
    if kind is _T.EXP_PARENTHESIS:
        return expression_type(node.child(0))
    return None


def count_arguments(node: Node | None) -> int:
    """Count the arguments in a call's argument chain."""
    count = 0
    while node is not None:
        if node.type not in _ARGUMENT_NODES:
            raise SemanticError("number of arguments can't be resolved")
        count += 1
        node = node.child(1)
    return count


def count_parameters(node: Node) -> int:
    """Count the parameters in a function's parameter list."""
    if node.type is _T.PARAM:
        return 1
    rest = node.child(1)
    if rest is not None and rest.type is _T.PARAM:
        return 2
    if rest is not None and rest.type is _T.PARAM_LST:
        return 1 + count_parameters(rest)
    raise SemanticError("number of parameters can't be resolved")


def _keyword_data_type(node: Node | None, where: str) -> DataType:
    data_type = _KEYWORD_DATA_TYPES.get(node.type) if node is not None else None
    if data_type is None:
        raise SemanticError(f"{where} can't resolve the data type")
    return data_type


def _require_symbol(node: Node, where: str) -> Symbol:
    if node.symbol is None:
        raise SemanticError(f"{where} node has no symbol")
    return node.symbol


def _declare_variable(node: Node) -> None:
    symbol = _require_symbol(node, "variable declaration")
    form = node.child(0)
    if symbol.kind != SymbolKind.IDENTIFIER or form is None:
        return
    if symbol.declared:
        raise SemanticError(f"identifier {symbol.text} is already declared (variable)")
    symbol.declared = 1
    if form.type in _VARIABLE_FORMS:
        symbol.expression_type, symbol.nature = _VARIABLE_FORMS[form.type]
    symbol.data_type = _keyword_data_type(form.child(0), "variable declaration")


def _declare_function(node: Node) -> None:
    symbol = _require_symbol(node, "function declaration")
    if symbol.declared:
        raise SemanticError(f"identifier {symbol.text} is already declared (function)")
    symbol.declared = 1
    if symbol.kind == SymbolKind.IDENTIFIER and node.child(0) is not None:
        symbol.nature = Nature.FUNCTION
    symbol.data_type = _keyword_data_type(node.child(0), "function declaration")
    parameters = node.child(1)
    symbol.parameters_number = 0 if parameters is None else count_parameters(parameters)


def _declare_parameter(node: Node) -> None:
    symbol = _require_symbol(node, "parameter")
    if symbol.declared:
        raise SemanticError(f"identifier {symbol.text} is already declared (parameter)")
    symbol.declared = 1
    if symbol.kind == SymbolKind.IDENTIFIER and node.child(0) is not None:
        symbol.nature = Nature.VARIABLE
    symbol.data_type = _keyword_data_type(node.child(0), "parameter")


_DECLARERS = {
    _T.VAR_DEC: _declare_variable,
    _T.FUNC_DEC: _declare_function,
    _T.PARAM: _declare_parameter,
}


def set_declarations(node: Node | None) -> None:
    """Record every declaration in the tree on its symbol.

    Children are visited before their parent.  Declaring a name twice
    raises SemanticError.
    """
    if node is None:
        return
    for child in node.children:
        set_declarations(child)
    declarer = _DECLARERS.get(node.type)
    if declarer is not None:
        declarer(node)