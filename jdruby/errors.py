"""Exceptions raised by the compiler pipeline."""

from __future__ import annotations


class JDRubyError(Exception):
    """Base class for all compiler errors."""


class CompileIOError(JDRubyError):
    """A file could not be read or written."""

    def __init__(self, cause: OSError | str) -> None:
        self.cause = cause
        super().__init__(f"I/O error: {cause}")


class LexerError(JDRubyError):
    """An error found while tokenizing."""

    def __init__(self, message: str, offset: int) -> None:
        self.message = message
        self.offset = offset
        super().__init__(f"Lexer error at {offset}: {message}")


class ParseError(JDRubyError):
    """An error found while parsing."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Parse error: {message}")


class SemanticError(JDRubyError):
    """An error found during semantic analysis."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Semantic error: {message}")


class CodegenError(JDRubyError):
    """An error found during code generation."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Codegen error: {message}")


class BuildError(JDRubyError):
    """A build or link failure."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Build error: {message}")


class RubyRuntimeError(JDRubyError):
    """An error raised while running a program."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Runtime error: {message}")


class MultipleErrors(JDRubyError):
    """Several errors were collected during compilation."""

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"Compilation failed with {count} error(s)")