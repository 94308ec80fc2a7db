"""Hand-written lexer for frame layout dumps.

Splits a dump into position-tagged tokens. The tokens are chosen so that it
is always allowed to insert whitespace between two of them: in
``(a (b c))`` the two closing brackets are separate tokens because
``(a (b c) )`` means the same, while an argument group such as
``vertical:0`` is a single token because ``vertical: 0`` is not valid.

The lexer never fails; grammar checks belong to the parser.
"""

from __future__ import annotations

from framedump.dsl.tokens import BRACKETS, Token, TokenKind


class Lexer:
    """Tokenize a frame layout dump.

    Usage:
        lexer = Lexer(source_text)
        tokens = lexer.tokenize()
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._tokens: list[Token] = []

    # ------------------------------------------------------------------
    # Public
    # ------------------------------------------------------------------

    def tokenize(self) -> list[Token]:
        """Scan the entire source and return all tokens including EOF."""
        while not self._at_end():
            self._skip_whitespace()
            if self._at_end():
                break
            self._scan_token()

        self._tokens.append(Token(TokenKind.EOF, "", len(self._source)))
        return self._tokens

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def _scan_token(self) -> None:
        ch = self._peek()

        if ch in BRACKETS:
            self._tokens.append(Token(BRACKETS[ch], ch, self._pos))
            self._pos += 1
            return

        self._scan_word()

    def _scan_word(self) -> None:
        """Scan a maximal run of non-whitespace, non-bracket characters."""
        start = self._pos
        while not self._at_end() and not self._is_separator(self._peek()):
            self._pos += 1
        self._tokens.append(Token(TokenKind.WORD, self._source[start : self._pos], start))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _at_end(self) -> bool:
        return self._pos >= len(self._source)

    def _peek(self) -> str:
        return self._source[self._pos]

    @staticmethod
    def _is_separator(ch: str) -> bool:
        return ch.isspace() or ch in BRACKETS

    def _skip_whitespace(self) -> None:
        while not self._at_end() and self._peek().isspace():
            self._pos += 1


def tokenize(source: str) -> list[Token]:
    """Shortcut for ``Lexer(source).tokenize()``."""
    return Lexer(source).tokenize()
