"""HIR-level optimizations: constant folding and dead branch removal."""

from __future__ import annotations

import dataclasses

from jdruby.hir import (
    HirAssign,
    HirBinOp,
    HirBranch,
    HirCall,
    HirClassDef,
    HirFuncDef,
    HirLiteral,
    HirLoop,
    HirModule,
    HirNode,
    HirOp,
    HirSeq,
    HirUnaryOp,
    HirUnOp,
    LiteralKind,
)

_INT_BITS = 64
_INT_MIN = -(1 << (_INT_BITS - 1))
_INT_RANGE = 1 << _INT_BITS

_TRUTHY_KINDS = frozenset(
    {LiteralKind.INTEGER, LiteralKind.STRING, LiteralKind.FLOAT, LiteralKind.SYMBOL}
)


def _wrap(value: int) -> int:
    """Wrap an integer to signed 64-bit range."""
    return (value - _INT_MIN) % _INT_RANGE + _INT_MIN


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return -quotient if (a < 0) != (b < 0) else quotient


def _trunc_mod(a: int, b: int) -> int:
    return a - b * _trunc_div(a, b)


_INT_ARITH = {
    HirOp.ADD: lambda a, b: a + b,
    HirOp.SUB: lambda a, b: a - b,
    HirOp.MUL: lambda a, b: a * b,
    HirOp.DIV: _trunc_div,
    HirOp.MOD: _trunc_mod,
}

_INT_COMPARE = {
    HirOp.EQ: lambda a, b: a == b,
    HirOp.NOT_EQ: lambda a, b: a != b,
    HirOp.LT: lambda a, b: a < b,
    HirOp.GT: lambda a, b: a > b,
}

_FLOAT_ARITH = {
    HirOp.ADD: lambda a, b: a + b,
    HirOp.SUB: lambda a, b: a - b,
    HirOp.MUL: lambda a, b: a * b,
}

_BOOL_LOGIC = {
    HirOp.AND: lambda a, b: a and b,
    HirOp.OR: lambda a, b: a or b,
}


def fold_binary(left: HirLiteral, op: HirOp, right: HirLiteral) -> HirLiteral | None:
    """Evaluate a binary operation on two literals, or None if it cannot be folded.

    The result carries the left operand's span.
    """
    span = left.span
    kinds = (left.kind, right.kind)
    a, b = left.value, right.value

    if kinds == (LiteralKind.INTEGER, LiteralKind.INTEGER):
        if op in _INT_ARITH:
            if op in (HirOp.DIV, HirOp.MOD) and b == 0:
                return None
            return HirLiteral(LiteralKind.INTEGER, _wrap(_INT_ARITH[op](a, b)), span)
        if op in _INT_COMPARE:
            return HirLiteral(LiteralKind.BOOL, _INT_COMPARE[op](a, b), span)
        return None
    if kinds == (LiteralKind.FLOAT, LiteralKind.FLOAT) and op in _FLOAT_ARITH:
        return HirLiteral(LiteralKind.FLOAT, float(_FLOAT_ARITH[op](a, b)), span)
    if kinds == (LiteralKind.STRING, LiteralKind.STRING) and op is HirOp.ADD:
        return HirLiteral(LiteralKind.STRING, a + b, span)
    if kinds == (LiteralKind.BOOL, LiteralKind.BOOL) and op in _BOOL_LOGIC:
        return HirLiteral(LiteralKind.BOOL, bool(_BOOL_LOGIC[op](a, b)), span)
    return None


def _optimize_all(nodes: list[HirNode]) -> None:
    nodes[:] = [optimize_node(n) for n in nodes]


def _optimize_children(node: HirNode) -> None:
    match node:
        case HirBinOp():
            node.left = optimize_node(node.left)
            node.right = optimize_node(node.right)
        case HirUnOp():
            node.operand = optimize_node(node.operand)
        case HirCall():
            if node.receiver is not None:
                node.receiver = optimize_node(node.receiver)
            _optimize_all(node.args)
        case HirAssign():
            node.value = optimize_node(node.value)
        case HirBranch():
            node.condition = optimize_node(node.condition)
            _optimize_all(node.then_body)
            _optimize_all(node.else_body)
        case HirLoop():
            node.condition = optimize_node(node.condition)
            _optimize_all(node.body)
        case HirFuncDef() | HirClassDef():
            _optimize_all(node.body)
        case HirSeq():
            _optimize_all(node.nodes)


def _constant_fold(node: HirNode) -> HirNode:
    if (
        isinstance(node, HirBinOp)
        and isinstance(node.left, HirLiteral)
        and isinstance(node.right, HirLiteral)
    ):
        folded = fold_binary(node.left, node.op, node.right)
        if folded is not None:
            node = dataclasses.replace(folded, span=node.span)
    # !!x -> x, since only truthiness is observed.
    if (
        isinstance(node, HirUnOp)
        and node.op is HirUnaryOp.NOT
        and isinstance(node.operand, HirUnOp)
        and node.operand.op is HirUnaryOp.NOT
    ):
        node = node.operand.operand
    return node


def _eliminate_dead_branch(node: HirNode) -> HirNode:
    if isinstance(node, HirBranch) and isinstance(node.condition, HirLiteral):
        cond = node.condition
        if cond.kind in _TRUTHY_KINDS or (cond.kind is LiteralKind.BOOL and cond.value):
            return HirSeq(list(node.then_body))
        if cond.kind is LiteralKind.NIL or cond.kind is LiteralKind.BOOL:
            return HirSeq(list(node.else_body))
    return node


def optimize_node(node: HirNode) -> HirNode:
    """Optimize a node bottom-up and return the resulting node.

    Child nodes are replaced in place; the returned node may be a new one.
    """
    _optimize_children(node)
    return _eliminate_dead_branch(_constant_fold(node))


def optimize_module(module: HirModule) -> HirModule:
    """Run all HIR optimizations over a module in place and return it."""
    _optimize_all(module.nodes)
    return module