"""Symbol table: a chained hash table of identifiers and literals."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator

HASH_SIZE = 997


class SymbolKind(IntEnum):
    IDENTIFIER = 1
    LIT_INTEGER = 2
    LIT_REAL = 3
    LIT_CHAR = 4
    LIT_STRING = 5


class DataType(IntEnum):
    BYTE = 1
    SHORT = 2
    LONG = 3
    FLOAT = 4
    DOUBLE = 5


class Nature(IntEnum):
    VARIABLE = 1
    ARRAY = 2
    FUNCTION = 3
    BOOLEAN = 4


class ExpressionType(IntEnum):
    INTEGER = 1
    REAL = 2
    CHAR = 3
    STRING = 4
    BOOLEAN = 5


@dataclass(eq=False)
class Symbol:
    """One symbol-table entry; identity matters, so equality is by object."""

    text: str
    kind: int
    data_type: int = 0
    nature: int = 0
    expression_type: int = 0
    parameters_number: int = -1
    declared: int = 0


def hash_address(text: str) -> int:
    """Bucket address of ``text`` in a table of HASH_SIZE buckets."""
    address = 1
    for byte in text.encode("utf-8"):
        address = (address * byte) % HASH_SIZE + 1
    return address - 1


def _auxiliary(text: str) -> Symbol:
    return Symbol(
        text=text,
        kind=SymbolKind.IDENTIFIER,
        data_type=-1,
        nature=-1,
        expression_type=-1,
        parameters_number=-1,
        declared=-1,
    )


def _boolean(text: str) -> Symbol:
    symbol = _auxiliary(text)
    symbol.kind = SymbolKind.LIT_INTEGER
    symbol.nature = Nature.BOOLEAN
    symbol.expression_type = ExpressionType.BOOLEAN
    return symbol


class SymbolTable:
    """Hash table of symbols keyed by text and kind."""

    def __init__(self) -> None:
        self._buckets: list[list[Symbol]] = [[] for _ in range(HASH_SIZE)]
        self._label_count = 0
        self._temporary_count = 0
        self.true_symbol = _boolean("1")
        self.false_symbol = _boolean("0")

    def find(self, text: str, kind: int) -> Symbol | None:
        """Return the symbol with this text and kind, or None."""
        for symbol in self._buckets[hash_address(text)]:
            if symbol.kind == kind and symbol.text == text:
                return symbol
        return None

    def insert(self, text: str, kind: int, data_type: int = 0, nature: int = 0) -> Symbol:
        """Insert a symbol, or return the one already present."""
        existing = self.find(text, kind)
        if existing is not None:
            return existing
        symbol = Symbol(text=text, kind=kind, data_type=data_type, nature=nature)
        self._buckets[hash_address(text)].insert(0, symbol)
        return symbol

    def entries(self) -> Iterator[tuple[int, Symbol]]:
        """Yield (address, symbol) in bucket order, newest first per bucket."""
        for address, bucket in enumerate(self._buckets):
            for symbol in bucket:
                yield address, symbol

    def dump(self) -> str:
        """Render the table, one ``Table[address] = text`` line per entry."""
        return "".join(f"Table[{address}] = {symbol.text}\n" for address, symbol in self.entries())

    def new_label(self) -> Symbol:
        """Make a fresh label symbol, not stored in the table."""
        symbol = _auxiliary(f"__label_{self._label_count}")
        self._label_count += 1
        return symbol

    def new_temporary(self) -> Symbol:
        """Make a fresh temporary symbol, not stored in the table."""
        symbol = _auxiliary(f"__temporary_{self._temporary_count}")
        self._temporary_count += 1
        return symbol