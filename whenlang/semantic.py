"""Semantic checks over a syntax tree whose declarations are already recorded."""

from __future__ import annotations

from typing import Callable

from .astree import Node, NodeType
from .declarations import SemanticError, count_arguments, expression_type
from .symbols import ExpressionType, Nature, Symbol

_T = NodeType

_NOT_A_VALUE = frozenset({ExpressionType.BOOLEAN, ExpressionType.STRING})
_NOT_AN_INDEX = frozenset({ExpressionType.BOOLEAN, ExpressionType.REAL})
_ARGUMENT_NODES = frozenset({_T.FUNC_ARGS, _T.FUNC_ARGS_EXT})


def _symbol(node: Node) -> Symbol:
    if node.symbol is None:
        raise SemanticError(f"ASTREE_{node.type.name} node has no symbol")
    return node.symbol


def _require_declared(node: Node, wording: str = "isn't declared") -> Symbol:
    symbol = _symbol(node)
    if not symbol.declared:
        raise SemanticError(f"variable {symbol.text} {wording}")
    return symbol


def _require_nature(symbol: Symbol, expected: Nature, allow_unset: bool = False) -> None:
    if symbol.nature == expected or (allow_unset and symbol.nature == 0):
        return
    raise SemanticError(
        f"{symbol.text} got a wrong nature ({symbol.nature}), it should be {int(expected)}"
    )


def _is_value(node: Node | None) -> bool:
    return expression_type(node) not in _NOT_A_VALUE


def _check_returns(node: Node | None) -> None:
    if node is None:
        return
    if node.type is _T.KW_RETURN and not _is_value(node.child(0)):
        raise SemanticError("invalid return")
    for child in node.children:
        _check_returns(child)


def _check_argument_types(node: Node | None) -> None:
    while node is not None:
        kind = expression_type(node.child(0))
        if kind is ExpressionType.BOOLEAN:
            raise SemanticError("argument can't be boolean type")
        if kind is ExpressionType.STRING:
            raise SemanticError("argument can't be string type")
        if node.type not in _ARGUMENT_NODES:
            return
        node = node.child(1)


def _check_declared_only(node: Node) -> None:
    _require_declared(node)


def _check_func_dec(node: Node) -> None:
    symbol = _require_declared(node)
    _require_nature(symbol, Nature.FUNCTION)
    _check_returns(node.child(2))


def _check_print(node: Node) -> None:
    value = node.child(0)
    if value is not None and value.type not in (_T.LIT_STRING, _T.PRINT_LST):
        if not _is_value(value):
            raise SemanticError("print command with invalid types")


def _check_print_list(node: Node) -> None:
    value = node.child(0)
    if value is not None and value.type is not _T.LIT_STRING:
        if not _is_value(value):
            raise SemanticError("print command with invalid types")


def _check_for(node: Node) -> None:
    _require_declared(node)
    if not _is_value(node.child(0)) or not _is_value(node.child(1)):
        raise SemanticError("for command with invalid types")


def _check_return(node: Node) -> None:
    if not _is_value(node.child(0)):
        raise SemanticError("invalid return type")


def _check_condition(command: str) -> Callable[[Node], None]:
    def checker(node: Node) -> None:
        if expression_type(node.child(0)) is not ExpressionType.BOOLEAN:
            raise SemanticError(f"{command} command with invalid types")

    return checker


def _check_attrib(node: Node) -> None:
    symbol = _require_declared(node)
    _require_nature(symbol, Nature.VARIABLE, allow_unset=True)
    if not _is_value(node.child(0)):
        raise SemanticError("attribuition with invalid types")


def _check_attrib_arr(node: Node) -> None:
    symbol = _require_declared(node)
    _require_nature(symbol, Nature.ARRAY, allow_unset=True)
    if expression_type(node.child(0)) in _NOT_AN_INDEX:
        raise SemanticError(f"vector {symbol.text} with invalid index")
    if not _is_value(node.child(1)):
        raise SemanticError("attribuition with invalid types")


def _check_identifier(node: Node) -> None:
    symbol = _require_declared(node)
    _require_nature(symbol, Nature.VARIABLE)


def _check_array_call(node: Node) -> None:
    symbol = _require_declared(node)
    _require_nature(symbol, Nature.ARRAY)
    if expression_type(node.child(0)) in _NOT_AN_INDEX:
        raise SemanticError(f"vector {symbol.text} with invalid index")


def _check_func_call(node: Node) -> None:
    symbol = _require_declared(node, "wasn't declared")
    _require_nature(symbol, Nature.FUNCTION)
    _check_argument_types(node.child(0))
    expected = symbol.parameters_number
    if count_arguments(node.child(0)) != expected:
        raise SemanticError(
            f"wrong number of arguments: {symbol.text}() should receive {expected} arguments"
        )


def _operand_types(node: Node) -> tuple[ExpressionType | None, ExpressionType | None]:
    return expression_type(node.child(0)), expression_type(node.child(1))


def _check_comparison(label: str) -> Callable[[Node], None]:
    def checker(node: Node) -> None:
        types = _operand_types(node)
        if ExpressionType.STRING in types:
            raise SemanticError(f"comparing strings ({label})")
        if ExpressionType.BOOLEAN in types:
            raise SemanticError(f"comparing boolean sizes ({label})")

    return checker


def _check_logical(label: str) -> Callable[[Node], None]:
    def checker(node: Node) -> None:
        types = _operand_types(node)
        if ExpressionType.STRING in types:
            raise SemanticError(f"using strings instead booleans ({label})")
        if any(kind is not ExpressionType.BOOLEAN for kind in types):
            raise SemanticError(f"using booleans instead numbers ({label})")

    return checker


def _check_arithmetic(verb: str) -> Callable[[Node], None]:
    def checker(node: Node) -> None:
        types = _operand_types(node)
        if ExpressionType.STRING in types:
            raise SemanticError(f"{verb} strings")
        if ExpressionType.BOOLEAN in types:
            raise SemanticError(f"{verb} booleans")

    return checker


_CHECKERS: dict[NodeType, Callable[[Node], None]] = {
    _T.VAR_DEC: _check_declared_only,
    _T.FUNC_DEC: _check_func_dec,
    _T.PARAM: _check_declared_only,
    _T.KW_READ: _check_declared_only,
    _T.KW_PRINT: _check_print,
    _T.KW_FOR: _check_for,
    _T.KW_RETURN: _check_return,
    _T.PRINT_LST: _check_print_list,
    _T.KW_WHEN_THEN: _check_condition("when"),
    _T.KW_WHEN_THEN_ELSE: _check_condition("when"),
    _T.KW_WHILE: _check_condition("while"),
    _T.ATTRIB: _check_attrib,
    _T.ATTRIB_ARR: _check_attrib_arr,
    _T.TK_ID: _check_identifier,
    _T.ARRAY_CALL: _check_array_call,
    _T.FUNC_CALL: _check_func_call,
    _T.LEQ: _check_comparison("LEQ"),
    _T.GTE: _check_comparison("GTE"),
    _T.EQU: _check_comparison("EQU"),
    _T.NEQ: _check_comparison("NEQ"),
    _T.LES: _check_comparison("LES"),
    _T.GTR: _check_comparison("GTR"),
    _T.AND: _check_logical("AND"),
    _T.OR: _check_logical("OR"),
    _T.MUL: _check_arithmetic("multiplying"),
    _T.ADD: _check_arithmetic("adding"),
    _T.SUB: _check_arithmetic("subtracting"),
    _T.DIV: _check_arithmetic("dividing"),
}


def check(node: Node | None) -> None:
    """Check the tree against the language's rules, children first.

    The first broken rule raises SemanticError.
    """
    if node is None:
        return
    for child in node.children:
        check(child)
    checker = _CHECKERS.get(node.type)
    if checker is not None:
        checker(node)