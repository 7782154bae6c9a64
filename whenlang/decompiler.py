"""Turn a syntax tree back into source text."""

from __future__ import annotations

from .astree import Node, NodeType

_T = NodeType

# Each template is filled with the node's symbol text (``sym``) and the
# decompiled text of its children (``c0`` to ``c3``).
_TEMPLATES: dict[NodeType, str] = {
    _T.DECL_LIST: "{c0}{c1}",
    _T.VAR_DEC: "{sym} : {c0};\n",
    _T.CHAR: "{c0} {sym}",
    _T.INT: "{c0} {sym}",
    _T.REAL: "{c0} {sym}",
    _T.ARR_INT: "{c0}[{sym}] {c1}",
    _T.ARR_CHAR: "{c0}[{sym}] {c1}",
    _T.ARR_FLOAT: "{c0}[{sym}] {c1}",
    _T.ARR: "{c0}[{sym}]",
    _T.INT_LST: "{sym} {c0}",
    _T.CHAR_LST: "{sym} {c0}",
    _T.FLOAT_LST: "{sym} {c0}",
    _T.FUNC_DEC: "{c0} {sym}({c1}) {c2};\n",
    _T.PARAM_LST: "{c0},{c1}",
    _T.PARAM: "{c0} {sym}",
    _T.LIT_INT: "{sym}",
    _T.LIT_REAL: "{sym}",
    _T.LIT_CHAR: "{sym}",
    _T.LIT_STRING: "{sym}",
    _T.CMD_LST: "{c0}{c1};\n",
    _T.CMD_BKTS: "{{\n{c0}}}",
    _T.KW_READ: "read {sym}",
    _T.KW_PRINT: "print {c0}",
    _T.PRINT_LST: "{c0} {c1}",
    _T.KW_RETURN: "return {c0}",
    _T.ATTRIB: "{sym} = {c0}",
    _T.ATTRIB_ARR: "{sym} # {c0} = {c1}",
    _T.KW_BYTE: "byte",
    _T.KW_SHORT: "short",
    _T.KW_LONG: "long",
    _T.KW_FLOAT: "float",
    _T.KW_DOUBLE: "double",
    _T.KW_WHEN_THEN: "when({c0}) then {c1}",
    _T.KW_WHEN_THEN_ELSE: "when({c0}) then {c1} else {c2}",
    _T.KW_WHILE: "while({c0})\n{c1}",
    _T.KW_FOR: "for({sym} = {c0} to {c1})\n{c2}",
    _T.EXP_PARENTHESIS: "({c0})",
    _T.TK_ID: "{sym}",
    _T.ARRAY_CALL: "{sym}[{c0}]",
    _T.FUNC_CALL: "{sym}({c0})",
    _T.FUNC_ARGS: "{c0} {c1}",
    _T.FUNC_ARGS_EXT: ", {c0}{c1}",
    _T.LEQ: "{c0} <= {c1}",
    _T.GTE: "{c0} >= {c1}",
    _T.EQU: "{c0} == {c1}",
    _T.NEQ: "{c0} != {c1}",
    _T.AND: "{c0} && {c1}",
    _T.OR: "{c0} || {c1}",
    _T.ADD: "{c0} + {c1}",
    _T.SUB: "{c0} - {c1}",
    _T.MUL: "{c0} * {c1}",
    _T.DIV: "{c0} / {c1}",
    _T.LES: "{c0} < {c1}",
    _T.GTR: "{c0} > {c1}",
}


def decompile(node: Node | None) -> str:
    """Return the source text that ``node`` and its descendants stand for.

    An empty slot gives the empty string.  A node whose form needs a symbol
    but has none raises ValueError.
    """
    if node is None:
        return ""
    template = _TEMPLATES.get(node.type)
    if template is None:
        return ""
    if "{sym}" in template:
        if node.symbol is None:
            raise ValueError(f"ASTREE_{node.type.name} node has no symbol")
        sym = node.symbol.text
    else:
        sym = ""
    parts = {f"c{index}": decompile(child) for index, child in enumerate(node.children)}
    return template.format(sym=sym, **parts)