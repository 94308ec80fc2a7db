"""Token types for the frame layout lexer.

Defines the token kinds and the Token dataclass used by the lexer and parser.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenKind(Enum):
    """All token types recognized by the layout lexer."""

    LPAREN = auto()  # (
    RPAREN = auto()  # )
    WORD = auto()  # any run of non-space, non-bracket characters
    EOF = auto()


BRACKETS: dict[str, TokenKind] = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}


@dataclass(frozen=True)
class Token:
    """A single token and the offset of its first character in the source."""

    kind: TokenKind
    value: str
    offset: int

    @property
    def is_eof(self) -> bool:
        return self.kind == TokenKind.EOF

    def describe(self) -> str:
        """Render the token for error messages."""
        if self.is_eof:
            return "end of input"
        return f'"{self.value}"'

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.value!r}, @{self.offset})"
