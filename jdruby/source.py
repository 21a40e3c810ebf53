"""Source locations and loaded source files."""

from __future__ import annotations

from dataclasses import dataclass

_ENCODING = "utf-8"


@dataclass(frozen=True)
class SourceSpan:
    """A byte-offset range in source text: start inclusive, end exclusive."""

    start: int = 0
    end: int = 0

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"SourceSpan start ({self.start}) > end ({self.end})")

    @classmethod
    def at(cls, pos: int) -> SourceSpan:
        """A zero-width span at a single position."""
        return cls(pos, pos)

    def merge(self, other: SourceSpan) -> SourceSpan:
        """The smallest span covering both spans."""
        return SourceSpan(min(self.start, other.start), max(self.end, other.end))

    def __len__(self) -> int:
        return self.end - self.start

    def is_empty(self) -> bool:
        return self.start == self.end

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"


@dataclass
class SourceFile:
    """A source file loaded into the compiler."""

    name: str
    content: str

    def line_col(self, offset: int) -> tuple[int, int]:
        """The 1-indexed line and column of a byte offset."""
        line, col = 1, 1
        pos = 0
        for ch in self.content:
            if pos >= offset:
                break
            if ch == "\n":
                line += 1
                col = 1
            else:
                col += 1
            pos += len(ch.encode(_ENCODING, "surrogatepass"))
        return line, col

    def slice(self, span: SourceSpan) -> str:
        """The text covered by a span.

        Raises IndexError if the span runs past the end of the content and
        ValueError if it does not fall on character boundaries.
        """
        data = self.content.encode(_ENCODING)
        if span.end > len(data):
            raise IndexError(f"span {span} is out of range for {len(data)} bytes")
        return data[span.start:span.end].decode(_ENCODING)