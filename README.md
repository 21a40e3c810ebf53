# jdruby

Building blocks for the front and middle end of a Ruby compiler, in plain
Python with no third-party dependencies.

## Modules

- `jdruby.source`: `SourceSpan`, an immutable byte range (`SourceSpan.at`,
  `merge`, `len()`, `is_empty`, printed as `start..end`; a start past the
  end raises `ValueError`), and `SourceFile`, whose `line_col` maps a byte
  offset to a 1-based `(line, column)` pair and whose `slice` returns the
  text a span covers.
- `jdruby.diagnostic`: immutable `Diagnostic` objects with a
  `DiagnosticSeverity` (error, warning, info, hint). `Diagnostic.error` and
  `Diagnostic.warning` create them; `with_label` and `with_help` return
  copies with a `DiagnosticLabel` or help text added.
- `jdruby.errors`: the `JDRubyError` exception hierarchy: `CompileIOError`,
  `LexerError`, `ParseError`, `SemanticError`, `CodegenError`, `BuildError`,
  `RubyRuntimeError` and `MultipleErrors`.
- `jdruby.value`: the tagged 64-bit value encoding: `int2fix`/`fix2long`
  for fixnums, `id2sym`/`sym2id` for symbols, the `QFALSE`, `QTRUE`,
  `QNIL` and `QUNDEF` constants, the predicates `fixnum_p`, `nil_p`,
  `true_p`, `false_p`, `symbol_p`, `flonum_p`, `special_const_p` and
  `truthy`, plus the `RBasic` header, `RubyType` tags and `builtin_type`.
- `jdruby.method_table`: `MethodTable` interns symbols (a set of common
  method names is interned up front), defines classes with a superclass,
  registers `MethodEntry` records and looks methods up along the
  superclass chain. `default_table`, `intern_symbol` and `symbol_name`
  work on one process-wide table.
- `jdruby.ast`: dataclasses for the Ruby abstract syntax tree.
- `jdruby.hir`: dataclasses for the high-level intermediate representation;
  `HirLiteral` checks that its value fits its `LiteralKind`.
- `jdruby.lower`: `lower_program`, `lower_stmt` and `lower_expr` turn the
  AST into HIR. `for` becomes an `each` call with a block, `case`/`when`
  and `elsif` become nested branches, `unless`/`until` negate their
  condition, interpolated strings become `to_s` and `+` calls, ranges
  become `Range.new` calls and `<<` becomes a method call.
  `begin`/`rescue`, `alias`, `require` and attribute declarations lower to
  `HirNop`.
- `jdruby.optimize`: `optimize_module` and `optimize_node` fold constant
  integer, float, string and boolean operations (`fold_binary`), remove
  double negation and replace branches whose condition is a literal with
  the branch taken.

## Example

```python
from jdruby import ast
from jdruby.source import SourceSpan
from jdruby.lower import lower_program
from jdruby.optimize import optimize_module

span = SourceSpan(0, 5)
program = ast.Program(
    body=[
        ast.ExprStmt(
            expr=ast.BinaryOp(
                left=ast.IntegerLit(value=2, span=span),
                op=ast.BinOperator.ADD,
                right=ast.IntegerLit(value=3, span=span),
                span=span,
            ),
            span=span,
        )
    ],
    span=span,
)

module = lower_program(program)
optimize_module(module)
print(module.nodes[0])  # a HirLiteral of kind INTEGER holding 5
```

Tagged values:

```python
from jdruby.value import int2fix, fix2long, truthy, QNIL

assert fix2long(int2fix(-42)) == -42
assert truthy(int2fix(0))      # zero is truthy in Ruby
assert not truthy(QNIL)
```

## What it does not do

There is no lexer or parser: programs must be built as `jdruby.ast` nodes.
There is no lowering below HIR, no code generation, no interpreter that
runs programs, and no command-line tool.

## Running the tests

```
pip install -e ".[test]"
pytest
```