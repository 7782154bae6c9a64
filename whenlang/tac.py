"""Three-address intermediate code generated from a checked syntax tree."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable

from .astree import Node, NodeType
from .symbols import Nature, Symbol, SymbolTable

_T = NodeType


class TacType(IntEnum):
    SYMBOL = 0
    VAR = 1
    ARR = 2
    MOVE = 3
    INC = 4
    ADD = 5
    SUB = 6
    MUL = 7
    DIV = 8
    BLE = 9
    BGE = 10
    BEQ = 11
    BNE = 12
    AND = 13
    OR = 14
    BLT = 15
    BGT = 16
    LABEL = 17
    BEGINFUN = 18
    ENDFUN = 19
    PARAM = 20
    FCALL = 21
    ACALL = 22
    AATTRIB = 23
    IFZ = 24
    JUMP = 25
    CALL = 26
    ARG = 27
    RET = 28
    PRINT = 29
    READ = 30

    @property
    def label(self) -> str:
        """The printed name of this instruction type."""
        return f"TAC_{self.name}"


def _text(symbol: Symbol | None) -> str:
    return symbol.text if symbol is not None else ""


@dataclass(eq=False)
class Tac:
    """One instruction: a type, a result and up to two operands."""

    type: TacType
    res: Symbol | None = None
    op1: Symbol | None = None
    op2: Symbol | None = None

    def format(self) -> str:
        """Render as ``TAC(type, res, op1, op2)``; empty slots print empty."""
        return f"TAC({self.type.label}, {_text(self.res)}, {_text(self.op1)}, {_text(self.op2)})"


Code = list[Tac]

_ARITHMETIC = {_T.ADD: TacType.ADD, _T.SUB: TacType.SUB, _T.MUL: TacType.MUL, _T.DIV: TacType.DIV}
_BRANCHES = {
    _T.LEQ: TacType.BLE,
    _T.GTE: TacType.BGE,
    _T.EQU: TacType.BEQ,
    _T.NEQ: TacType.BNE,
    _T.LES: TacType.BLT,
    _T.GTR: TacType.BGT,
}
_LOGICAL = {_T.AND: TacType.AND, _T.OR: TacType.OR}


def _res(code: Code) -> Symbol | None:
    """Result of the last instruction of ``code``, or None if it is empty."""
    return code[-1].res if code else None


def _child_symbol(node: Node, index: int) -> Symbol | None:
    child = node.child(index)
    return child.symbol if child is not None else None


class _Generator:
    def __init__(self, table: SymbolTable) -> None:
        self.table = table
        self._handlers: dict[NodeType, Callable[[Node, list[Code]], Code]] = {
            _T.VAR_DEC: self._var_dec,
            _T.LIT_INT: self._identifier,
            _T.LIT_REAL: self._identifier,
            _T.LIT_CHAR: self._identifier,
            _T.LIT_STRING: self._identifier,
            _T.TK_ID: self._identifier,
            _T.FUNC_DEC: self._function,
            _T.PARAM: self._param,
            _T.KW_RETURN: self._return,
            _T.FUNC_CALL: self._func_call,
            _T.FUNC_ARGS: self._args,
            _T.FUNC_ARGS_EXT: self._args,
            _T.ARRAY_CALL: self._array_call,
            _T.KW_WHEN_THEN: self._when,
            _T.KW_WHEN_THEN_ELSE: self._when_else,
            _T.KW_PRINT: self._print,
            _T.KW_READ: self._read,
            _T.KW_FOR: self._for,
            _T.KW_WHILE: self._while,
            _T.ATTRIB: self._attrib,
            _T.ATTRIB_ARR: self._attrib_arr,
        }
        for kind in _ARITHMETIC:
            self._handlers[kind] = self._arithmetic
        for kind in _BRANCHES:
            self._handlers[kind] = self._boolean
        for kind in _LOGICAL:
            self._handlers[kind] = self._logical

    def parse(self, node: Node | None) -> Code:
        if node is None:
            return []
        children = [self.parse(child) for child in node.children]
        handler = self._handlers.get(node.type)
        if handler is None:
            return [tac for code in children for tac in code]
        return handler(node, children)

    def _var_dec(self, node: Node, c: list[Code]) -> Code:
        symbol = node.symbol
        if symbol is None:
            raise ValueError("variable declaration has no symbol")
        if symbol.nature == Nature.VARIABLE:
            dec = Tac(TacType.VAR, symbol, _child_symbol(node, 0))
        elif symbol.nature == Nature.ARRAY:
            if node.child(0) is None:
                raise ValueError(f"array declaration of {symbol.text} has no size")
            dec = Tac(TacType.ARR, symbol, _child_symbol(node, 0))
        else:
            raise ValueError(f"declaration of {symbol.text} has no variable or array nature")
        return c[0] + [dec]

    def _identifier(self, node: Node, c: list[Code]) -> Code:
        return c[0] + [Tac(TacType.SYMBOL, node.symbol)]

    def _arithmetic(self, node: Node, c: list[Code]) -> Code:
        temp = self.table.new_temporary()
        return c[0] + c[1] + [Tac(_ARITHMETIC[node.type], temp, _res(c[0]), _res(c[1]))]

    def _boolean(self, node: Node, c: list[Code]) -> Code:
        true_label = self.table.new_label()
        end_label = self.table.new_label()
        temp = self.table.new_temporary()
        sequence = [
            Tac(_BRANCHES[node.type], true_label, _res(c[0]), _res(c[1])),
            Tac(TacType.MOVE, temp, self.table.false_symbol),
            Tac(TacType.JUMP, end_label),
            Tac(TacType.LABEL, true_label),
            Tac(TacType.MOVE, temp, self.table.true_symbol),
            Tac(TacType.LABEL, end_label),
            Tac(TacType.SYMBOL, temp),
        ]
        return c[0] + c[1] + sequence

    def _logical(self, node: Node, c: list[Code]) -> Code:
        temp = self.table.new_temporary()
        return c[0] + c[1] + [Tac(_LOGICAL[node.type], temp, _res(c[0]), _res(c[1]))]

    def _function(self, node: Node, c: list[Code]) -> Code:
        return [Tac(TacType.BEGINFUN, node.symbol), *c[1], *c[2], Tac(TacType.ENDFUN)]

    def _param(self, node: Node, c: list[Code]) -> Code:
        return [Tac(TacType.PARAM, node.symbol)]

    def _return(self, node: Node, c: list[Code]) -> Code:
        return c[0] + [Tac(TacType.RET, _res(c[0]))]

    def _func_call(self, node: Node, c: list[Code]) -> Code:
        return c[0] + [Tac(TacType.FCALL, node.symbol, node.symbol)]

    def _args(self, node: Node, c: list[Code]) -> Code:
        arg = Tac(TacType.ARG, _child_symbol(node, 0))
        if c[1]:
            return c[0] + c[1] + [arg]
        return [arg] + c[0]

    def _array_call(self, node: Node, c: list[Code]) -> Code:
        temp = self.table.new_temporary()
        return c[0] + [Tac(TacType.ACALL, temp, node.symbol, _child_symbol(node, 0))]

    def _when(self, node: Node, c: list[Code]) -> Code:
        end_label = self.table.new_label()
        return [
            *c[0],
            Tac(TacType.IFZ, end_label, _res(c[0])),
            *c[1],
            Tac(TacType.LABEL, end_label),
        ]

    def _when_else(self, node: Node, c: list[Code]) -> Code:
        else_label = self.table.new_label()
        end_label = self.table.new_label()
        return [
            *c[0],
            Tac(TacType.IFZ, else_label, _res(c[0])),
            *c[1],
            Tac(TacType.JUMP, end_label),
            Tac(TacType.LABEL, else_label),
            *c[2],
            Tac(TacType.LABEL, end_label),
        ]

    def _print(self, node: Node, c: list[Code]) -> Code:
        return c[0] + [Tac(TacType.PRINT, _res(c[0]))]

    def _read(self, node: Node, c: list[Code]) -> Code:
        return [Tac(TacType.READ, node.symbol)]

    def _for(self, node: Node, c: list[Code]) -> Code:
        # Counts upward only: the loop ends when the counter equals the bound.
        begin_label = self.table.new_label()
        end_label = self.table.new_label()
        temp = self.table.new_temporary()
        return [
            *c[0],
            *c[1],
            Tac(TacType.MOVE, temp, _res(c[0])),
            Tac(TacType.LABEL, begin_label),
            *c[2],
            Tac(TacType.INC, temp, temp),
            Tac(TacType.BEQ, end_label, temp, _res(c[1])),
            Tac(TacType.JUMP, begin_label),
            Tac(TacType.LABEL, end_label),
        ]

    def _while(self, node: Node, c: list[Code]) -> Code:
        begin_label = self.table.new_label()
        end_label = self.table.new_label()
        return [
            *c[0],
            Tac(TacType.LABEL, begin_label),
            Tac(TacType.IFZ, end_label, _res(c[0])),
            *c[1],
            Tac(TacType.JUMP, begin_label),
            Tac(TacType.LABEL, end_label),
        ]

    def _attrib(self, node: Node, c: list[Code]) -> Code:
        return c[0] + [Tac(TacType.MOVE, node.symbol, _res(c[0]))]

    def _attrib_arr(self, node: Node, c: list[Code]) -> Code:
        return c[0] + c[1] + [Tac(TacType.AATTRIB, node.symbol, _res(c[0]), _res(c[1]))]


def _named(symbol: Symbol | None, name: str) -> bool:
    return symbol is not None and symbol.text == name


def _fill_function_calls(code: Code) -> None:
    """Point each call, and every use of the function's name, at its return value."""
    for call in reversed(code):
        if call.type is not TacType.FCALL:
            continue
        name = _text(call.op1)
        start = next(
            (
                index
                for index, tac in reversed(list(enumerate(code)))
                if tac.type is TacType.BEGINFUN and _named(tac.res, name)
            ),
            None,
        )
        if start is None:
            raise ValueError(f"call to undefined function {name}")
        ret = next((tac for tac in code[start:] if tac.type is TacType.RET), None)
        if ret is None:
            raise ValueError(f"function {name} has no return")
        call.res = ret.res
        for tac in reversed(code):
            if tac.type in (TacType.BEGINFUN, TacType.FCALL):
                continue
            if _named(tac.res, name):
                tac.res = ret.res
            elif _named(tac.op1, name):
                tac.op1 = ret.res
            elif _named(tac.op2, name):
                tac.op2 = ret.res


def generate(root: Node | None, table: SymbolTable) -> list[Tac]:
    """Generate the instruction list for ``root`` in execution order.

    Labels, temporaries and boolean constants come from ``table``.  A call
    to a function that is not defined, or that has no return, raises
    ValueError.
    """
    code = _Generator(table).parse(root)
    _fill_function_calls(code)
    return code


def format_code(code: list[Tac]) -> str:
    """Render instructions one per line, in order."""
    return "".join(f"{tac.format()}\n" for tac in code)