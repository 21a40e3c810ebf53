import pytest

from jdruby.hir import (
    HirAssign,
    HirBinOp,
    HirBranch,
    HirCall,
    HirFuncDef,
    HirLiteral,
    HirModule,
    HirOp,
    HirReturn,
    HirSeq,
    HirUnaryOp,
    HirUnOp,
    HirVarRef,
    LiteralKind,
)
from jdruby.optimize import fold_binary, optimize_module, optimize_node
from jdruby.source import SourceSpan

I64_MAX = (1 << 63) - 1
I64_MIN = -(1 << 63)


def lit_int(v):
    return HirLiteral(LiteralKind.INTEGER, v)


def lit_float(v):
    return HirLiteral(LiteralKind.FLOAT, v)


def lit_str(v):
    return HirLiteral(LiteralKind.STRING, v)


def lit_bool(v):
    return HirLiteral(LiteralKind.BOOL, v)


def test_integer_addition_folds_with_binop_span():
    span = SourceSpan(3, 8)
    result = optimize_node(HirBinOp(lit_int(2), HirOp.ADD, lit_int(3), span))
    assert isinstance(result, HirLiteral)
    assert result.kind is LiteralKind.INTEGER
    assert result.value == 5
    assert result.span == span


def test_add_then_sub_round_trips():
    summed = fold_binary(lit_int(40), HirOp.ADD, lit_int(17))
    back = fold_binary(summed, HirOp.SUB, lit_int(17))
    assert back.value == 40


def test_mul_then_div_round_trips():
    product = fold_binary(lit_int(-12), HirOp.MUL, lit_int(7))
    back = fold_binary(product, HirOp.DIV, lit_int(7))
    assert back.value == -12


def test_division_truncates_toward_zero():
    assert fold_binary(lit_int(7), HirOp.DIV, lit_int(-2)).value == -3


def test_mod_matches_truncating_division():
    a, b = -7, 2
    q = fold_binary(lit_int(a), HirOp.DIV, lit_int(b)).value
    r = fold_binary(lit_int(a), HirOp.MOD, lit_int(b)).value
    assert q * b + r == a
    assert r <= 0


@pytest.mark.parametrize("op", [HirOp.DIV, HirOp.MOD])
def test_division_by_zero_is_not_folded(op):
    assert fold_binary(lit_int(1), op, lit_int(0)) is None
    node = HirBinOp(lit_int(1), op, lit_int(0))
    assert optimize_node(node) is node


def test_integer_overflow_wraps():
    assert fold_binary(lit_int(I64_MAX), HirOp.ADD, lit_int(1)).value == I64_MIN


@pytest.mark.parametrize(
    "op,a,b,expected",
    [
        (HirOp.EQ, 4, 4, True),
        (HirOp.EQ, 4, 5, False),
        (HirOp.NOT_EQ, 4, 5, True),
        (HirOp.LT, 1, 2, True),
        (HirOp.LT, 2, 1, False),
        (HirOp.GT, 2, 1, True),
    ],
)
def test_integer_comparisons(op, a, b, expected):
    result = fold_binary(lit_int(a), op, lit_int(b))
    assert result.kind is LiteralKind.BOOL
    assert result.value is expected


@pytest.mark.parametrize("op", [HirOp.LT_EQ, HirOp.GT_EQ, HirOp.POW, HirOp.CMP, HirOp.BIT_AND])
def test_unsupported_integer_ops_are_not_folded(op):
    assert fold_binary(lit_int(2), op, lit_int(3)) is None


def test_float_add_sub_round_trip():
    summed = fold_binary(lit_float(1.5), HirOp.ADD, lit_float(0.25))
    assert summed.kind is LiteralKind.FLOAT
    assert fold_binary(summed, HirOp.SUB, lit_float(0.25)).value == 1.5


def test_float_division_is_not_folded():
    assert fold_binary(lit_float(1.0), HirOp.DIV, lit_float(2.0)) is None


def test_mixed_int_float_not_folded():
    assert fold_binary(lit_int(1), HirOp.ADD, lit_float(2.0)) is None


def test_string_concatenation():
    result = fold_binary(lit_str("foo"), HirOp.ADD, lit_str("bar"))
    assert result.kind is LiteralKind.STRING
    assert result.value.startswith("foo")
    assert result.value.endswith("bar")
    assert len(result.value) == 6


def test_symbol_concatenation_not_folded():
    sym = HirLiteral(LiteralKind.SYMBOL, "a")
    assert fold_binary(sym, HirOp.ADD, sym) is None


@pytest.mark.parametrize(
    "op,a,b,expected",
    [
        (HirOp.AND, True, False, False),
        (HirOp.AND, True, True, True),
        (HirOp.OR, False, True, True),
        (HirOp.OR, False, False, False),
    ],
)
def test_boolean_logic(op, a, b, expected):
    assert fold_binary(lit_bool(a), op, lit_bool(b)).value is expected


def test_nested_expression_folds_fully():
    inner_left = HirBinOp(lit_int(1), HirOp.ADD, lit_int(2))
    inner_right = HirBinOp(lit_int(3), HirOp.ADD, lit_int(4))
    result = optimize_node(HirBinOp(inner_left, HirOp.MUL, inner_right))
    assert isinstance(result, HirLiteral)
    assert result.kind is LiteralKind.INTEGER


def test_binop_with_variable_left_alone():
    node = HirBinOp(HirVarRef("x"), HirOp.ADD, lit_int(1))
    assert optimize_node(node) is node


def test_double_negation_removed():
    x = HirVarRef("x")
    node = HirUnOp(HirUnaryOp.NOT, HirUnOp(HirUnaryOp.NOT, x))
    assert optimize_node(node) is x


def test_triple_negation_leaves_single_not():
    x = HirVarRef("x")
    node = HirUnOp(
        HirUnaryOp.NOT, HirUnOp(HirUnaryOp.NOT, HirUnOp(HirUnaryOp.NOT, x))
    )
    result = optimize_node(node)
    assert isinstance(result, HirUnOp)
    assert result.op is HirUnaryOp.NOT
    assert result.operand is x


def test_double_neg_not_removed():
    x = HirVarRef("x")
    node = HirUnOp(HirUnaryOp.NEG, HirUnOp(HirUnaryOp.NEG, x))
    result = optimize_node(node)
    assert result.op is HirUnaryOp.NEG
    assert result.operand.op is HirUnaryOp.NEG
    assert result.operand.operand is x


@pytest.mark.parametrize(
    "cond",
    [
        lit_bool(True),
        lit_int(0),
        lit_str(""),
        lit_float(0.0),
        HirLiteral(LiteralKind.SYMBOL, "s"),
    ],
)
def test_truthy_condition_keeps_then_body(cond):
    then_node, else_node = HirVarRef("a"), HirVarRef("b")
    result = optimize_node(HirBranch(cond, [then_node], [else_node]))
    assert result == HirSeq([then_node])


@pytest.mark.parametrize("cond", [lit_bool(False), HirLiteral(LiteralKind.NIL, None)])
def test_falsy_condition_keeps_else_body(cond):
    then_node, else_node = HirVarRef("a"), HirVarRef("b")
    result = optimize_node(HirBranch(cond, [then_node], [else_node]))
    assert result == HirSeq([else_node])


def test_array_condition_is_kept():
    node = HirBranch(HirLiteral(LiteralKind.ARRAY, []), [HirVarRef("a")], [])
    assert optimize_node(node) is node


def test_folded_condition_eliminates_branch():
    cond = HirBinOp(lit_int(1), HirOp.EQ, lit_int(2))
    then_node, else_node = HirVarRef("a"), HirVarRef("b")
    result = optimize_node(HirBranch(cond, [then_node], [else_node]))
    assert result == HirSeq([else_node])


def test_children_of_calls_and_assigns_are_optimized():
    call = HirCall(HirBinOp(lit_int(1), HirOp.ADD, lit_int(1)), "puts",
                   [HirBinOp(lit_str("a"), HirOp.ADD, lit_str("b"))])
    assign = HirAssign(HirVarRef("x"), call)
    optimize_node(assign)
    assert isinstance(call.receiver, HirLiteral)
    assert isinstance(call.args[0], HirLiteral)
    assert call.args[0].kind is LiteralKind.STRING


def test_return_value_is_not_visited():
    inner = HirBinOp(lit_int(1), HirOp.ADD, lit_int(2))
    ret = HirReturn(inner)
    func = HirFuncDef("f", [], [ret])
    optimize_node(func)
    assert func.body[0] is ret
    assert ret.value is inner


def test_optimize_module_replaces_top_level_nodes():
    module = HirModule(
        "main",
        [
            HirBinOp(lit_int(2), HirOp.SUB, lit_int(2)),
            HirBranch(lit_bool(True), [HirVarRef("y")], []),
        ],
    )
    result = optimize_module(module)
    assert result is module
    assert isinstance(module.nodes[0], HirLiteral)
    assert module.nodes[0].value == 0
    assert module.nodes[1] == HirSeq([HirVarRef("y")])