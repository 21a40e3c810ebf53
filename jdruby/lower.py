"""Lowering of the abstract syntax tree into HIR."""

from __future__ import annotations

import copy

from jdruby import ast
from jdruby.hir import (
    HirAssign,
    HirBinOp,
    HirBlock,
    HirBranch,
    HirBreak,
    HirCall,
    HirClassDef,
    HirFuncDef,
    HirLiteral,
    HirLoop,
    HirModule,
    HirNext,
    HirNode,
    HirNop,
    HirOp,
    HirReturn,
    HirSeq,
    HirUnaryOp,
    HirUnOp,
    HirVarRef,
    HirYield,
    LiteralKind,
    VarScope,
)
from jdruby.source import SourceSpan

_BINOPS = {
    ast.BinOperator.ADD: HirOp.ADD,
    ast.BinOperator.SUB: HirOp.SUB,
    ast.BinOperator.MUL: HirOp.MUL,
    ast.BinOperator.DIV: HirOp.DIV,
    ast.BinOperator.MOD: HirOp.MOD,
    ast.BinOperator.POW: HirOp.POW,
    ast.BinOperator.EQ: HirOp.EQ,
    ast.BinOperator.CASE_EQ: HirOp.EQ,
    ast.BinOperator.NOT_EQ: HirOp.NOT_EQ,
    ast.BinOperator.LT: HirOp.LT,
    ast.BinOperator.GT: HirOp.GT,
    ast.BinOperator.LT_EQ: HirOp.LT_EQ,
    ast.BinOperator.GT_EQ: HirOp.GT_EQ,
    ast.BinOperator.SPACESHIP: HirOp.CMP,
    ast.BinOperator.MATCH: HirOp.EQ,
    ast.BinOperator.NOT_MATCH: HirOp.EQ,
    ast.BinOperator.AND: HirOp.AND,
    ast.BinOperator.OR: HirOp.OR,
    ast.BinOperator.BIT_AND: HirOp.BIT_AND,
    ast.BinOperator.BIT_OR: HirOp.BIT_OR,
    ast.BinOperator.BIT_XOR: HirOp.BIT_XOR,
    ast.BinOperator.SHL: HirOp.SHL,
    ast.BinOperator.SHR: HirOp.SHR,
    # Ranges are lowered to Range.new calls; this entry is never used for them.
    ast.BinOperator.RANGE: HirOp.ADD,
    ast.BinOperator.RANGE_EXCL: HirOp.ADD,
}

_UNOPS = {
    ast.UnOperator.NEG: HirUnaryOp.NEG,
    ast.UnOperator.POS: HirUnaryOp.NEG,
    ast.UnOperator.NOT: HirUnaryOp.NOT,
    ast.UnOperator.BIT_NOT: HirUnaryOp.BIT_NOT,
}


def lower_program(program: ast.Program) -> HirModule:
    """Lower a whole program into a HIR module named "main"."""
    return HirModule("main", [lower_stmt(stmt) for stmt in program.body])


def _lower_body(stmts: list[ast.Stmt]) -> list[HirNode]:
    return [lower_stmt(stmt) for stmt in stmts]


def _not(operand: HirNode, span: SourceSpan) -> HirNode:
    return HirUnOp(HirUnaryOp.NOT, operand, span)


def lower_stmt(stmt: ast.Stmt) -> HirNode:
    """Lower one statement into a HIR node."""
    match stmt:
        case ast.ExprStmt():
            return lower_expr(stmt.expr)
        case ast.AssignmentStmt():
            target = _lower_target(stmt.target, stmt.span)
            return HirAssign(target, lower_expr(stmt.value), stmt.span)
        case ast.CompoundAssignmentStmt():
            target = _lower_target(stmt.target, stmt.span)
            combined = HirBinOp(
                copy.deepcopy(target),
                _BINOPS[stmt.op],
                lower_expr(stmt.value),
                stmt.span,
            )
            return HirAssign(target, combined, stmt.span)
        case ast.MethodDef():
            return HirFuncDef(
                stmt.name,
                [p.name for p in stmt.params],
                _lower_body(stmt.body),
                stmt.is_class_method,
                stmt.span,
            )
        case ast.ClassDef():
            superclass = (
                "::".join(stmt.superclass.path)
                if isinstance(stmt.superclass, ast.ConstRef)
                else None
            )
            return HirClassDef(stmt.name, superclass, _lower_body(stmt.body), stmt.span)
        case ast.ModuleDef():
            return HirClassDef(stmt.name, None, _lower_body(stmt.body), stmt.span)
        case ast.IfStmt():
            return _lower_if(stmt)
        case ast.UnlessStmt():
            else_body = _lower_body(stmt.else_body) if stmt.else_body is not None else []
            return HirBranch(
                _not(lower_expr(stmt.condition), stmt.span),
                _lower_body(stmt.body),
                else_body,
                stmt.span,
            )
        case ast.WhileStmt():
            return HirLoop(lower_expr(stmt.condition), _lower_body(stmt.body), True, stmt.span)
        case ast.UntilStmt():
            return HirLoop(
                _not(lower_expr(stmt.condition), stmt.span),
                _lower_body(stmt.body),
                True,
                stmt.span,
            )
        case ast.ForStmt():
            return HirCall(
                lower_expr(stmt.iterable),
                "each",
                [],
                HirBlock([stmt.var], _lower_body(stmt.body)),
                stmt.span,
            )
        case ast.ReturnStmt():
            value = lower_expr(stmt.value) if stmt.value is not None else None
            return HirReturn(value, stmt.span)
        case ast.YieldStmt():
            return HirYield([lower_expr(a) for a in stmt.args])
        case ast.BreakStmt():
            return HirBreak()
        case ast.NextStmt():
            return HirNext()
        case ast.CaseStmt():
            return _lower_case(stmt)
        case ast.BeginRescueStmt() | ast.AliasStmt() | ast.RequireStmt() | ast.AttrDeclStmt():
            return HirNop()
        case ast.MixinStmt():
            return HirCall(None, stmt.kind.value, [lower_expr(stmt.module)], None, stmt.span)
    raise TypeError(f"cannot lower statement {stmt!r}")


def _lower_if(stmt: ast.IfStmt) -> HirNode:
    else_body: list[HirNode] = [
        HirBranch(lower_expr(clause.condition), _lower_body(clause.body), [], clause.span)
        for clause in stmt.elsif_clauses
    ]
    if stmt.else_body is not None:
        stmts = _lower_body(stmt.else_body)
        if not else_body:
            else_body = stmts
        elif isinstance(else_body[-1], HirBranch):
            else_body[-1].else_body = stmts
    return HirBranch(lower_expr(stmt.condition), _lower_body(stmt.then_body), else_body, stmt.span)


def _lower_case(stmt: ast.CaseStmt) -> HirNode:
    """Desugar case/when into nested branches."""
    subject = lower_expr(stmt.subject) if stmt.subject is not None else None
    result: HirNode | None = (
        HirSeq(_lower_body(stmt.else_body)) if stmt.else_body is not None else None
    )
    for clause in reversed(stmt.when_clauses):
        if not clause.patterns:
            raise ValueError("when clause has no patterns")
        first, *rest = clause.patterns
        if not rest:
            if subject is not None:
                cond: HirNode = HirBinOp(
                    copy.deepcopy(subject), HirOp.EQ, lower_expr(first), clause.span
                )
            else:
                cond = lower_expr(first)
        else:
            cond = lower_expr(first)
            for pattern in rest:
                cond = HirBinOp(cond, HirOp.OR, lower_expr(pattern), clause.span)
        else_body = [result] if result is not None else []
        result = HirBranch(cond, _lower_body(clause.body), else_body, clause.span)
    return result if result is not None else HirNop()


def _lower_target(target: ast.AssignTarget, span: SourceSpan) -> HirVarRef:
    match target:
        case ast.LocalVarTarget() | ast.ConstantTarget():
            return HirVarRef(target.name, VarScope.LOCAL, span)
        case ast.InstanceVarTarget():
            return HirVarRef(target.name, VarScope.INSTANCE, span)
        case ast.ClassVarTarget():
            return HirVarRef(target.name, VarScope.CLASS, span)
        case ast.GlobalVarTarget():
            return HirVarRef(target.name, VarScope.GLOBAL, span)
        case ast.IndexTarget():
            return HirVarRef("<index>", VarScope.LOCAL, span)
        case ast.AttributeTarget():
            return HirVarRef(target.name, VarScope.INSTANCE, span)
    raise TypeError(f"cannot lower assignment target {target!r}")


def _lower_interpolated(expr: ast.InterpolatedString) -> HirNode:
    parts: list[HirNode] = []
    for part in expr.parts:
        if isinstance(part, ast.LiteralPart):
            parts.append(HirLiteral(LiteralKind.STRING, part.text, expr.span))
        elif isinstance(part, ast.InterpolationPart):
            parts.append(HirCall(lower_expr(part.expr), "to_s", [], None, expr.span))
        else:
            raise TypeError(f"cannot lower string part {part!r}")
    if not parts:
        return HirLiteral(LiteralKind.STRING, "", expr.span)
    result, *rest = parts
    for part in rest:
        result = HirCall(result, "+", [part], None, expr.span)
    return result


def lower_expr(expr: ast.Expr) -> HirNode:
    """Lower one expression into a HIR node."""
    match expr:
        case ast.IntegerLit():
            return HirLiteral(LiteralKind.INTEGER, expr.value, expr.span)
        case ast.FloatLit():
            return HirLiteral(LiteralKind.FLOAT, float(expr.value), expr.span)
        case ast.StringLit():
            return HirLiteral(LiteralKind.STRING, expr.value, expr.span)
        case ast.SymbolLit():
            return HirLiteral(LiteralKind.SYMBOL, expr.name, expr.span)
        case ast.BoolLit():
            return HirLiteral(LiteralKind.BOOL, expr.value, expr.span)
        case ast.NilLit():
            return HirLiteral(LiteralKind.NIL, None, expr.span)
        case ast.ArrayLit():
            return HirLiteral(
                LiteralKind.ARRAY, [lower_expr(e) for e in expr.elements], expr.span
            )
        case ast.HashLit():
            return HirLiteral(
                LiteralKind.HASH,
                [(lower_expr(k), lower_expr(v)) for k, v in expr.entries],
                expr.span,
            )
        case ast.LocalVar():
            return HirVarRef(expr.name, VarScope.LOCAL, expr.span)
        case ast.InstanceVarExpr():
            return HirVarRef(expr.name, VarScope.INSTANCE, expr.span)
        case ast.ClassVarExpr():
            return HirVarRef(expr.name, VarScope.CLASS, expr.span)
        case ast.GlobalVarExpr():
            return HirVarRef(expr.name, VarScope.GLOBAL, expr.span)
        case ast.ConstRef():
            return HirVarRef("::".join(expr.path), VarScope.LOCAL, expr.span)
        case ast.SelfExpr():
            return HirVarRef("self", VarScope.LOCAL, expr.span)
        case ast.BinaryOp():
            if expr.op is ast.BinOperator.SHL:
                # In Ruby `<<` is a method call, not a bit shift.
                return HirCall(
                    lower_expr(expr.left), "<<", [lower_expr(expr.right)], None, expr.span
                )
            return HirBinOp(
                lower_expr(expr.left), _BINOPS[expr.op], lower_expr(expr.right), expr.span
            )
        case ast.UnaryOp():
            return HirUnOp(_UNOPS[expr.op], lower_expr(expr.operand), expr.span)
        case ast.MethodCall():
            receiver = lower_expr(expr.receiver) if expr.receiver is not None else None
            return HirCall(
                receiver, expr.method, [lower_expr(a) for a in expr.args], None, expr.span
            )
        case ast.BlockCall():
            call = expr.call
            receiver = lower_expr(call.receiver) if call.receiver is not None else None
            block = HirBlock([p.name for p in expr.params], _lower_body(expr.body))
            return HirCall(
                receiver, call.method, [lower_expr(a) for a in call.args], block, expr.span
            )
        case ast.SuperCallExpr():
            return HirCall(None, "super", [lower_expr(a) for a in expr.args], None, expr.span)
        case ast.YieldExprNode():
            return HirYield([lower_expr(a) for a in expr.args])
        case ast.LambdaExpr():
            return HirFuncDef(
                "<lambda>", [p.name for p in expr.params], _lower_body(expr.body), False, expr.span
            )
        case ast.ProcExpr():
            return HirFuncDef(
                "<proc>", [p.name for p in expr.params], _lower_body(expr.body), False, expr.span
            )
        case ast.RangeLit():
            return HirCall(
                None,
                "Range.new",
                [
                    lower_expr(expr.start),
                    lower_expr(expr.end),
                    HirLiteral(LiteralKind.BOOL, expr.exclusive, expr.span),
                ],
                None,
                expr.span,
            )
        case ast.TernaryExpr():
            return HirBranch(
                lower_expr(expr.condition),
                [lower_expr(expr.then_expr)],
                [lower_expr(expr.else_expr)],
                expr.span,
            )
        case ast.DefinedExpr():
            return HirCall(None, "defined?", [lower_expr(expr.expr)], None, expr.span)
        case ast.InterpolatedString():
            return _lower_interpolated(expr)
        case ast.RegexLit():
            return HirLiteral(LiteralKind.STRING, expr.pattern, expr.span)
        case ast.PatternMatchExpr():
            return HirCall(
                lower_expr(expr.subject), "===", [lower_expr(expr.pattern)], None, expr.span
            )
    raise TypeError(f"cannot lower expression {expr!r}")