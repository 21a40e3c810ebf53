"""Tagged 64-bit value representation compatible with the MRI C API."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

_MASK = (1 << 64) - 1
_SIGN = 1 << 63

QFALSE = 0x00
QTRUE = 0x14
QNIL = 0x08
QUNDEF = 0x34

FIXNUM_FLAG = 0x01
SYMBOL_FLAG = 0x0C
FLONUM_MASK = 0x03
FLONUM_FLAG = 0x02

RSTRING_EMBED_LEN_MAX = 24
RARRAY_EMBED_LEN_MAX = 3


def _word(v: int) -> int:
    return v & _MASK


def fixnum_p(v: int) -> bool:
    """Whether v is a tagged Fixnum."""
    return (v & FIXNUM_FLAG) != 0


def nil_p(v: int) -> bool:
    return v == QNIL


def true_p(v: int) -> bool:
    return v == QTRUE


def false_p(v: int) -> bool:
    return v == QFALSE


def symbol_p(v: int) -> bool:
    """Whether v is a tagged Symbol."""
    return (v & 0xFF) == SYMBOL_FLAG


def flonum_p(v: int) -> bool:
    """Whether v is an inline float."""
    return (v & FLONUM_MASK) == FLONUM_FLAG


def special_const_p(v: int) -> bool:
    """Whether v is an immediate rather than a heap reference."""
    return (
        fixnum_p(v)
        or symbol_p(v)
        or flonum_p(v)
        or v in (QFALSE, QTRUE, QNIL, QUNDEF)
    )


def truthy(v: int) -> bool:
    """Ruby truthiness: everything except false and nil."""
    return v != QFALSE and v != QNIL


def int2fix(i: int) -> int:
    """Encode a 64-bit integer as a tagged Fixnum."""
    return _word((_word(i) << 1) | FIXNUM_FLAG)


def fix2long(v: int) -> int:
    """Decode a tagged Fixnum to a signed integer."""
    v = _word(v)
    if v & _SIGN:
        v -= 1 << 64
    return v >> 1


def id2sym(symbol_id: int) -> int:
    """Encode a symbol id as a tagged Symbol."""
    return _word((symbol_id << 8) | SYMBOL_FLAG)


def sym2id(v: int) -> int:
    """Decode a tagged Symbol to its id."""
    return _word(v) >> 8


class RubyType(IntEnum):
    """Built-in type tags stored in the low bits of object flags."""

    NONE = 0x00
    OBJECT = 0x01
    CLASS = 0x02
    MODULE = 0x03
    FLOAT = 0x04
    STRING = 0x05
    REGEXP = 0x06
    ARRAY = 0x07
    HASH = 0x08
    STRUCT = 0x09
    BIGNUM = 0x0A
    FILE = 0x0B
    DATA = 0x0C
    MATCH = 0x0D
    COMPLEX = 0x0E
    RATIONAL = 0x0F
    NIL = 0x11
    TRUE = 0x12
    FALSE = 0x13
    SYMBOL = 0x14
    FIXNUM = 0x15
    UNDEF = 0x16
    NODE = 0x1B
    ICLASS = 0x1C
    ZOMBIE = 0x1D
    MOVED = 0x1E


@dataclass
class RBasic:
    """Header shared by all heap objects: flags and class reference."""

    flags: int
    klass: int


def builtin_type(flags: int) -> int:
    """Extract the type tag from object flags."""
    return flags & 0x1F