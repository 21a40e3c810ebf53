"""Abstract syntax tree for parsed Ruby programs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from jdruby.source import SourceSpan


def _span():
    return field(default_factory=SourceSpan)


def _list():
    return field(default_factory=list)


class Stmt:
    """Base class of all statement nodes."""

    __slots__ = ()


class Expr:
    """Base class of all expression nodes."""

    __slots__ = ()


class StringPart:
    """Base class of the pieces of an interpolated string."""

    __slots__ = ()


class AssignTarget:
    """Base class of the things an assignment can write to."""

    __slots__ = ()


# ── Enumerations ─────────────────────────────────────────────


class BinOperator(Enum):
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
    SPACESHIP = "<=>"
    CASE_EQ = "==="
    MATCH = "=~"
    NOT_MATCH = "!~"
    AND = "&&"
    OR = "||"
    BIT_AND = "&"
    BIT_OR = "|"
    BIT_XOR = "^"
    SHL = "<<"
    SHR = ">>"
    RANGE = ".."
    RANGE_EXCL = "..."

    def __str__(self) -> str:
        return self.value


class UnOperator(Enum):
    """Unary operators, valued by their Ruby spelling."""

    NEG = "-"
    NOT = "!"
    BIT_NOT = "~"
    POS = "+"

    def __str__(self) -> str:
        return self.value


class ParamKind(Enum):
    """How a parameter receives its argument."""

    REQUIRED = "required"
    OPTIONAL = "optional"
    REST = "rest"
    KEYWORD_REST = "keyword_rest"
    BLOCK = "block"
    KEYWORD = "keyword"


class AttrKind(Enum):
    """Kind of attribute declaration."""

    READER = "attr_reader"
    WRITER = "attr_writer"
    ACCESSOR = "attr_accessor"


class MixinKind(Enum):
    """Kind of module mixin, valued by the method that performs it."""

    INCLUDE = "include"
    EXTEND = "extend"
    PREPEND = "prepend"


# ── Program ──────────────────────────────────────────────────


@dataclass
class Program:
    """The root of a parsed program."""

    body: list[Stmt] = _list()
    span: SourceSpan = _span()


# ── Literals ─────────────────────────────────────────────────


@dataclass
class IntegerLit(Expr):
    value: int
    span: SourceSpan = _span()


@dataclass
class FloatLit(Expr):
    value: float
    span: SourceSpan = _span()


@dataclass
class StringLit(Expr):
    value: str
    span: SourceSpan = _span()


@dataclass
class LiteralPart(StringPart):
    """Literal text inside an interpolated string."""

    text: str


@dataclass
class InterpolationPart(StringPart):
    """An embedded `#{...}` expression."""

    expr: Expr


@dataclass
class InterpolatedString(Expr):
    parts: list[StringPart] = _list()
    span: SourceSpan = _span()


@dataclass
class SymbolLit(Expr):
    name: str
    span: SourceSpan = _span()


@dataclass
class BoolLit(Expr):
    value: bool
    span: SourceSpan = _span()


@dataclass
class NilLit(Expr):
    span: SourceSpan = _span()


@dataclass
class ArrayLit(Expr):
    elements: list[Expr] = _list()
    span: SourceSpan = _span()


@dataclass
class HashLit(Expr):
    entries: list[tuple[Expr, Expr]] = _list()
    span: SourceSpan = _span()


@dataclass
class RangeLit(Expr):
    """A range; exclusive is True for `...` and False for `..`."""

    start: Expr
    end: Expr
    exclusive: bool = False
    span: SourceSpan = _span()


@dataclass
class RegexLit(Expr):
    pattern: str
    flags: str = ""
    span: SourceSpan = _span()


# ── Variables ────────────────────────────────────────────────


@dataclass
class LocalVar(Expr):
    name: str
    span: SourceSpan = _span()


@dataclass
class InstanceVarExpr(Expr):
    name: str
    span: SourceSpan = _span()


@dataclass
class ClassVarExpr(Expr):
    name: str
    span: SourceSpan = _span()


@dataclass
class GlobalVarExpr(Expr):
    name: str
    span: SourceSpan = _span()


@dataclass
class ConstRef(Expr):
    """A constant path such as `Foo::Bar`."""

    path: list[str] = _list()
    span: SourceSpan = _span()


@dataclass
class SelfExpr(Expr):
    span: SourceSpan = _span()


# ── Operations ───────────────────────────────────────────────


@dataclass
class BinaryOp(Expr):
    left: Expr
    op: BinOperator
    right: Expr
    span: SourceSpan = _span()


@dataclass
class UnaryOp(Expr):
    op: UnOperator
    operand: Expr
    span: SourceSpan = _span()


# ── Calls ────────────────────────────────────────────────────


@dataclass
class MethodCall(Expr):
    """A method call; receiver is None for a bare call."""

    receiver: Expr | None
    method: str
    args: list[Expr] = _list()
    kwargs: list[tuple[str, Expr]] = _list()
    block_arg: Expr | None = None
    span: SourceSpan = _span()


@dataclass
class Param:
    """A method, block or lambda parameter."""

    name: str
    default: Expr | None = None
    kind: ParamKind = ParamKind.REQUIRED
    span: SourceSpan = _span()


@dataclass
class BlockCall(Expr):
    """A method call with an attached block."""

    call: MethodCall
    params: list[Param] = _list()
    body: list[Stmt] = _list()
    span: SourceSpan = _span()


@dataclass
class SuperCallExpr(Expr):
    args: list[Expr] = _list()
    span: SourceSpan = _span()


@dataclass
class YieldExprNode(Expr):
    args: list[Expr] = _list()
    span: SourceSpan = _span()


# ── Lambdas, procs and other expressions ─────────────────────


@dataclass
class LambdaExpr(Expr):
    params: list[Param] = _list()
    body: list[Stmt] = _list()
    span: SourceSpan = _span()


@dataclass
class ProcExpr(Expr):
    params: list[Param] = _list()
    body: list[Stmt] = _list()
    span: SourceSpan = _span()


@dataclass
class PatternMatchExpr(Expr):
    subject: Expr
    pattern: Expr
    span: SourceSpan = _span()


@dataclass
class TernaryExpr(Expr):
    condition: Expr
    then_expr: Expr
    else_expr: Expr
    span: SourceSpan = _span()


@dataclass
class DefinedExpr(Expr):
    expr: Expr
    span: SourceSpan = _span()


# ── Statements ───────────────────────────────────────────────


@dataclass
class ExprStmt(Stmt):
    """An expression used as a statement."""

    expr: Expr
    span: SourceSpan = _span()


@dataclass
class MethodDef(Stmt):
    name: str
    params: list[Param] = _list()
    body: list[Stmt] = _list()
    is_class_method: bool = False
    span: SourceSpan = _span()


@dataclass
class ClassDef(Stmt):
    name: str
    superclass: Expr | None = None
    body: list[Stmt] = _list()
    span: SourceSpan = _span()


@dataclass
class ModuleDef(Stmt):
    name: str
    body: list[Stmt] = _list()
    span: SourceSpan = _span()


@dataclass
class ElsifClause:
    condition: Expr
    body: list[Stmt] = _list()
    span: SourceSpan = _span()


@dataclass
class IfStmt(Stmt):
    """An if statement; else_body is None when there is no else."""

    condition: Expr
    then_body: list[Stmt] = _list()
    elsif_clauses: list[ElsifClause] = _list()
    else_body: list[Stmt] | None = None
    span: SourceSpan = _span()


@dataclass
class UnlessStmt(Stmt):
    condition: Expr
    body: list[Stmt] = _list()
    else_body: list[Stmt] | None = None
    span: SourceSpan = _span()


@dataclass
class WhileStmt(Stmt):
    condition: Expr
    body: list[Stmt] = _list()
    span: SourceSpan = _span()


@dataclass
class UntilStmt(Stmt):
    condition: Expr
    body: list[Stmt] = _list()
    span: SourceSpan = _span()


@dataclass
class ForStmt(Stmt):
    var: str
    iterable: Expr
    body: list[Stmt] = _list()
    span: SourceSpan = _span()


@dataclass
class WhenClause:
    patterns: list[Expr]
    body: list[Stmt] = _list()
    span: SourceSpan = _span()


@dataclass
class CaseStmt(Stmt):
    subject: Expr | None = None
    when_clauses: list[WhenClause] = _list()
    else_body: list[Stmt] | None = None
    span: SourceSpan = _span()


@dataclass
class RescueClause:
    """A rescue clause: exception classes, binding variable and body."""

    exceptions: list[Expr] = _list()
    var: str | None = None
    body: list[Stmt] = _list()
    span: SourceSpan = _span()


@dataclass
class BeginRescueStmt(Stmt):
    body: list[Stmt] = _list()
    rescue_clauses: list[RescueClause] = _list()
    else_body: list[Stmt] | None = None
    ensure_body: list[Stmt] | None = None
    span: SourceSpan = _span()


@dataclass
class ReturnStmt(Stmt):
    value: Expr | None = None
    span: SourceSpan = _span()


@dataclass
class YieldStmt(Stmt):
    args: list[Expr] = _list()
    span: SourceSpan = _span()


@dataclass
class BreakStmt(Stmt):
    value: Expr | None = None
    span: SourceSpan = _span()


@dataclass
class NextStmt(Stmt):
    value: Expr | None = None
    span: SourceSpan = _span()


# ── Assignment ───────────────────────────────────────────────


@dataclass
class LocalVarTarget(AssignTarget):
    name: str


@dataclass
class InstanceVarTarget(AssignTarget):
    name: str


@dataclass
class ClassVarTarget(AssignTarget):
    name: str


@dataclass
class GlobalVarTarget(AssignTarget):
    name: str


@dataclass
class ConstantTarget(AssignTarget):
    name: str


@dataclass
class IndexTarget(AssignTarget):
    """`receiver[index] = value`."""

    receiver: Expr
    index: Expr


@dataclass
class AttributeTarget(AssignTarget):
    """`receiver.name = value`."""

    receiver: Expr
    name: str


@dataclass
class AssignmentStmt(Stmt):
    target: AssignTarget
    value: Expr
    span: SourceSpan = _span()


@dataclass
class CompoundAssignmentStmt(Stmt):
    """`target op= value`, such as `x += 1`."""

    target: AssignTarget
    op: BinOperator
    value: Expr
    span: SourceSpan = _span()


# ── Other statements ─────────────────────────────────────────


@dataclass
class AliasStmt(Stmt):
    new_name: str
    old_name: str
    span: SourceSpan = _span()


@dataclass
class RequireStmt(Stmt):
    path: str
    is_relative: bool = False
    span: SourceSpan = _span()


@dataclass
class AttrDeclStmt(Stmt):
    kind: AttrKind
    names: list[str] = _list()
    span: SourceSpan = _span()


@dataclass
class MixinStmt(Stmt):
    kind: MixinKind
    module: Expr
    span: SourceSpan = _span()