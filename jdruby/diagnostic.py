"""Compiler diagnostics: errors, warnings and notes."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum

from jdruby.source import SourceSpan


class DiagnosticSeverity(Enum):
    """Severity level of a diagnostic."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    HINT = "hint"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class DiagnosticLabel:
    """A message pointing at a span, attached to a diagnostic."""

    span: SourceSpan
    message: str


@dataclass(frozen=True)
class Diagnostic:
    """A compiler diagnostic with location, labels and optional help."""

    severity: DiagnosticSeverity
    message: str
    span: SourceSpan
    labels: tuple[DiagnosticLabel, ...] = field(default_factory=tuple)
    help: str | None = None

    @classmethod
    def error(cls, message: str, span: SourceSpan) -> Diagnostic:
        return cls(DiagnosticSeverity.ERROR, str(message), span)

    @classmethod
    def warning(cls, message: str, span: SourceSpan) -> Diagnostic:
        return cls(DiagnosticSeverity.WARNING, str(message), span)

    def with_label(self, span: SourceSpan, message: str) -> Diagnostic:
        """A copy with one more label."""
        label = DiagnosticLabel(span, str(message))
        return dataclasses.replace(self, labels=(*self.labels, label))

    def with_help(self, help: str) -> Diagnostic:
        """A copy with help text set."""
        return dataclasses.replace(self, help=str(help))

    def is_error(self) -> bool:
        return self.severity is DiagnosticSeverity.ERROR

    def is_warning(self) -> bool:
        return self.severity is DiagnosticSeverity.WARNING