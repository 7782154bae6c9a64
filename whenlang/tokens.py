"""Token codes produced by the scanner.

Single-character tokens are represented by their own character code, so
every named token lies outside the ASCII range.
"""

from __future__ import annotations

from enum import IntEnum


class Token(IntEnum):
    """Named token codes; each value is distinct and above 255."""

    KW_BYTE = 256
    KW_SHORT = 257
    KW_LONG = 258
    KW_FLOAT = 259
    KW_DOUBLE = 260
    KW_WHEN = 261
    KW_THEN = 262
    KW_ELSE = 263
    KW_WHILE = 264
    KW_FOR = 265
    KW_READ = 266
    KW_RETURN = 267
    KW_PRINT = 268

    OPERATOR_LE = 270
    OPERATOR_GE = 271
    OPERATOR_EQ = 272
    OPERATOR_NE = 273
    OPERATOR_AND = 274
    OPERATOR_OR = 275

    TK_IDENTIFIER = 280
    LIT_INTEGER = 281
    LIT_REAL = 282
    LIT_CHAR = 285
    LIT_STRING = 286

    TOKEN_ERROR = 290


def token_name(code: int) -> str:
    """Return a printable name for a token code.

    Named tokens give their enum name; codes in the single-byte range give
    the character they stand for.  Any other code raises ValueError.
    """
    try:
        return Token(code).name
    except ValueError:
        pass
    if 0 < code < 256:
        return chr(code)
    raise ValueError(f"unknown token code: {code}")