"""Ruby compiler building blocks: spans, diagnostics, errors, tagged values, AST, HIR lowering and optimization."""

__version__ = "0.1.0"