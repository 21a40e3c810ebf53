"""High-level intermediate representation: a simplified Ruby tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from jdruby.source import SourceSpan


def _span():
    return field(default_factory=SourceSpan)


def _list():
    return field(default_factory=list)


class HirNode:
    """Base class of all HIR nodes."""

    __slots__ = ()


class LiteralKind(Enum):
    """Kind of value a literal holds."""

    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    SYMBOL = "symbol"
    BOOL = "bool"
    NIL = "nil"
    ARRAY = "array"
    HASH = "hash"


def _is_pair(item: Any) -> bool:
    return (
        isinstance(item, tuple)
        and len(item) == 2
        and all(isinstance(part, HirNode) for part in item)
    )


_VALIDATORS = {
    LiteralKind.INTEGER: lambda v: isinstance(v, int) and not isinstance(v, bool),
    LiteralKind.FLOAT: lambda v: isinstance(v, float),
    LiteralKind.STRING: lambda v: isinstance(v, str),
    LiteralKind.SYMBOL: lambda v: isinstance(v, str),
    LiteralKind.BOOL: lambda v: isinstance(v, bool),
    LiteralKind.NIL: lambda v: v is None,
    LiteralKind.ARRAY: lambda v: isinstance(v, list)
    and all(isinstance(e, HirNode) for e in v),
    LiteralKind.HASH: lambda v: isinstance(v, list) and all(_is_pair(e) for e in v),
}


@dataclass
class HirLiteral(HirNode):
    """A literal value.

    The value is an int, float, str (string or symbol name), bool or None,
    a list of nodes for an array, or a list of (key, value) node pairs for
    a hash. TypeError is raised when the value does not fit the kind.
    """

    kind: LiteralKind
    value: Any = None
    span: SourceSpan = _span()

    def __post_init__(self) -> None:
        if not isinstance(self.kind, LiteralKind):
            raise TypeError(f"not a literal kind: {self.kind!r}")
        if not _VALIDATORS[self.kind](self.value):
            raise TypeError(f"{self.kind.value} literal cannot hold {self.value!r}")


class VarScope(Enum):
    LOCAL = "local"
    INSTANCE = "instance"
    CLASS = "class"
    GLOBAL = "global"


@dataclass
class HirVarRef(HirNode):
    """A variable reference; also the target of an assignment."""

    name: str
    scope: VarScope = VarScope.LOCAL
    span: SourceSpan = _span()


class HirOp(Enum):
    """Binary operators, valued by their Ruby spelling."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    POW = "**"
    EQ = "=="
    NOT_EQ = "!="
    LT = "<"
    GT = ">"
    LT_EQ = "<="
    GT_EQ = ">="
    CMP = "<=>"
    AND = "&&"
    OR = "||"
    BIT_AND = "&"
    BIT_OR = "|"
    BIT_XOR = "^"
    SHL = "<<"
    SHR = ">>"

    def __str__(self) -> str:
        return self.value


@dataclass
class HirBinOp(HirNode):
    left: HirNode
    op: HirOp
    right: HirNode
    span: SourceSpan = _span()


class HirUnaryOp(Enum):
    NEG = "-"
    NOT = "!"
    BIT_NOT = "~"

    def __str__(self) -> str:
        return self.value


@dataclass
class HirUnOp(HirNode):
    op: HirUnaryOp
    operand: HirNode
    span: SourceSpan = _span()


@dataclass
class HirBlock:
    """A block attached to a call: parameter names and body."""

    params: list[str] = _list()
    body: list[HirNode] = _list()


@dataclass
class HirCall(HirNode):
    """A method call; receiver is None for a call on self."""

    receiver: HirNode | None
    method: str
    args: list[HirNode] = _list()
    block: HirBlock | None = None
    span: SourceSpan = _span()


@dataclass
class HirAssign(HirNode):
    target: HirVarRef
    value: HirNode
    span: SourceSpan = _span()


@dataclass
class HirBranch(HirNode):
    condition: HirNode
    then_body: list[HirNode] = _list()
    else_body: list[HirNode] = _list()
    span: SourceSpan = _span()


@dataclass
class HirLoop(HirNode):
    condition: HirNode
    body: list[HirNode] = _list()
    is_while: bool = True
    span: SourceSpan = _span()


@dataclass
class HirReturn(HirNode):
    value: HirNode | None = None
    span: SourceSpan = _span()


@dataclass
class HirFuncDef(HirNode):
    name: str
    params: list[str] = _list()
    body: list[HirNode] = _list()
    is_class_method: bool = False
    span: SourceSpan = _span()


@dataclass
class HirClassDef(HirNode):
    name: str
    superclass: str | None = None
    body: list[HirNode] = _list()
    span: SourceSpan = _span()


@dataclass
class HirSeq(HirNode):
    """A sequence of nodes evaluated in order."""

    nodes: list[HirNode] = _list()


@dataclass
class HirYield(HirNode):
    args: list[HirNode] = _list()


@dataclass
class HirBreak(HirNode):
    pass


@dataclass
class HirNext(HirNode):
    pass


@dataclass
class HirNop(HirNode):
    pass


@dataclass
class HirModule:
    """A compilation unit."""

    name: str
    nodes: list[HirNode] = _list()