"""Abstract syntax tree nodes and their indented dump."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import IntEnum
from typing import TextIO

from .symbols import Symbol

MAX_CHILDREN = 4


class NodeType(IntEnum):
    DECL_LIST = 0

    VAR_DEC = 1
    CHAR = 2
    INT = 3
    REAL = 4

    ARR_INT = 5
    ARR_CHAR = 6
    ARR_FLOAT = 7
    ARR = 8

    INT_LST = 21
    CHAR_LST = 22
    FLOAT_LST = 23

    FUNC_DEC = 24
    PARAM_LST = 25
    PARAM = 26

    LIT_INT = 27
    LIT_REAL = 28
    LIT_CHAR = 29
    LIT_STRING = 30

    CMD_LST = 31
    CMD_BKTS = 32

    KW_READ = 33
    KW_PRINT = 34
    PRINT_LST = 35
    KW_RETURN = 36

    ATTRIB = 37
    ATTRIB_ARR = 38

    KW_BYTE = 39
    KW_SHORT = 40
    KW_LONG = 41
    KW_FLOAT = 42
    KW_DOUBLE = 43

    KW_WHEN_THEN = 44
    KW_WHEN_THEN_ELSE = 45
    KW_WHILE = 46
    KW_FOR = 47

    EXP_PARENTHESIS = 48
    TK_ID = 49
    ARRAY_CALL = 50
    FUNC_CALL = 51
    FUNC_ARGS = 52
    FUNC_ARGS_EXT = 53

    LEQ = 54
    GTE = 55
    EQU = 56
    NEQ = 57
    AND = 58
    OR = 59
    ADD = 60
    SUB = 61
    MUL = 62
    DIV = 63
    LES = 64
    GTR = 65


@dataclass
class Node:
    """A tree node with an optional symbol and exactly four child slots."""

    type: NodeType
    symbol: Symbol | None = None
    children: tuple = field(default_factory=tuple)

    def __post_init__(self) -> None:
        self.type = NodeType(self.type)
        children = tuple(self.children)
        if len(children) > MAX_CHILDREN:
            raise ValueError(f"a node has at most {MAX_CHILDREN} children, got {len(children)}")
        self.children = children + (None,) * (MAX_CHILDREN - len(children))

    def child(self, index: int) -> Node | None:
        """Return the child in slot ``index`` (0 to 3), or None if empty."""
        if not 0 <= index < MAX_CHILDREN:
            raise IndexError(f"child index out of range: {index}")
        return self.children[index]


def format_tree(node: Node | None, level: int = 0) -> str:
    """Render ``node`` and its descendants, two spaces of indent per level."""
    if node is None:
        return ""
    text = node.symbol.text if node.symbol is not None else ""
    lines = [f"{'  ' * level}ASTREE(ASTREE_{node.type.name},{text})\n"]
    lines.extend(format_tree(child, level + 1) for child in node.children)
    return "".join(lines)


def print_tree(node: Node | None, level: int = 0, file: TextIO | None = None) -> None:
    """Write the tree dump to ``file``, standard error by default."""
    (file if file is not None else sys.stderr).write(format_tree(node, level))