"""Hand-written recursive descent parser for frame layout dumps.

The parser is "pure": it never touches a live frame tree. It validates a
dump and turns it into a raw tree of RawFrameLeaf / RawFrameSplit nodes that
a separate applier can install afterwards. Window ids are checked against an
injected lookup; ids that are no longer known are dropped from their leaf
and reported as stale instead of failing the parse.

Grammar:

    layout     := node EOF
    node       := '(' 'split' SPLIT_ARGS node node ')'
                | '(' 'clients' LEAF_ARGS WINDOW* ')'
    SPLIT_ARGS := align ':' fraction ':' selection
    LEAF_ARGS  := layout ':' selection

This is the literal format the window manager's ``dump`` command writes,
e.g. ``(split horizontal:0.5:1 (clients max:0 0x1400003) (clients vertical:-1))``.
Nodes are always bracketed and tagged ``split`` or ``clients``; a bare
argument token such as ``leaf:-1:0`` is not a node. Window ids are separate
tokens (hex with ``0x`` or decimal) and a leaf selection of ``-1`` means
"no selection".

Usage:
    parser = FrameParser(dump, is_known=known_windows([0x1400003]))
    if parser.error is None:
        apply(parser.root)
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from framedump.core.types import LayoutAlgorithm, SplitAlign, WindowLookup
from framedump.dsl.ast_nodes import RawFrameLeaf, RawFrameNode, RawFrameSplit
from framedump.dsl.lexer import Lexer
from framedump.dsl.tokens import Token, TokenKind

logger = logging.getLogger(__name__)

# Deeper dumps are rejected before they can exhaust the interpreter stack
MAX_DEPTH = 256

_INDEX_RE = re.compile(r"-?[0-9]+")
_FRACTION_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")
_WINDOW_RE = re.compile(r"0[xX][0-9a-fA-F]+|[0-9]+")

_E = TypeVar("_E", bound=Enum)


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ParseError:
    """The first syntax error of a parse: the offending token and what was expected."""

    token: Token
    expected: str

    @property
    def offset(self) -> int:
        return self.token.offset

    @property
    def text(self) -> str:
        return self.token.value

    @property
    def message(self) -> str:
        return f"Expected {self.expected} but got {self.token.describe()}"

    def __str__(self) -> str:
        return f"Parse error at offset {self.offset}: {self.message}"


class FrameParseError(Exception):
    """Raised by FrameParser.raise_for_error() when the dump was rejected."""

    def __init__(self, error: ParseError) -> None:
        self.error = error
        self.token = error.token
        super().__init__(str(error))


@dataclass(frozen=True)
class StaleReference:
    """A syntactically valid window id that the window lookup does not know."""

    token: Token
    window_id: int


# A build step yields either a finished subtree or the error that aborted it
BuildResult = RawFrameNode | ParseError


# ---------------------------------------------------------------------------
# Tree builder
# ---------------------------------------------------------------------------


class _TreeBuilder:
    """Single-use recursive descent over a token list with one token of lookahead."""

    def __init__(self, tokens: list[Token], is_known: WindowLookup) -> None:
        self._tokens = tokens
        self._pos = 0
        self._is_known = is_known
        self.stale_windows: list[StaleReference] = []

    def build(self) -> BuildResult:
        node = self._build_node(depth=1)
        if isinstance(node, ParseError):
            return node
        if not self._current().is_eof:
            return ParseError(self._current(), "end of input")
        return node

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    def _build_node(self, depth: int) -> BuildResult:
        error = self._expect_tokens("(")
        if error is not None:
            return error
        if depth > MAX_DEPTH:
            return ParseError(self._current(), f"at most {MAX_DEPTH} nested frames")
        self._advance()

        error = self._expect_tokens("clients", "split")
        if error is not None:
            return error
        if self._advance().value == "clients":
            return self._build_leaf()
        return self._build_split(depth)

    def _build_leaf(self) -> BuildResult:
        fields = self._expect_args("layout:selection", 2)
        if isinstance(fields, ParseError):
            return fields
        layout_field, selection_field = fields

        layout = _parse_enum(LayoutAlgorithm, layout_field, "a layout algorithm")
        if isinstance(layout, ParseError):
            return layout
        selection = _parse_leaf_selection(selection_field)
        if isinstance(selection, ParseError):
            return selection

        windows: list[int] = []
        while self._check(TokenKind.WORD):
            token = self._advance()
            window_id = _parse_window_id(token)
            if isinstance(window_id, ParseError):
                return window_id
            if self._is_known(window_id):
                windows.append(window_id)
            else:
                logger.debug("Window %#x at offset %d is not known", window_id, token.offset)
                self.stale_windows.append(StaleReference(token=token, window_id=window_id))

        error = self._expect_tokens(")")
        if error is not None:
            return error
        self._advance()

        return RawFrameLeaf(
            layout=layout,
            windows=tuple(windows),
            selection=_normalize_selection(selection, len(windows)),
        )

    def _build_split(self, depth: int) -> BuildResult:
        fields = self._expect_args("align:fraction:selection", 3)
        if isinstance(fields, ParseError):
            return fields
        align_field, fraction_field, selection_field = fields

        align = _parse_enum(SplitAlign, align_field, "a split alignment")
        if isinstance(align, ParseError):
            return align
        fraction = _parse_fraction(fraction_field)
        if isinstance(fraction, ParseError):
            return fraction
        if selection_field.value not in ("0", "1"):
            return ParseError(selection_field, 'one of "0", "1"')

        first = self._build_node(depth + 1)
        if isinstance(first, ParseError):
            return first
        second = self._build_node(depth + 1)
        if isinstance(second, ParseError):
            return second

        error = self._expect_tokens(")")
        if error is not None:
            return error
        self._advance()

        return RawFrameSplit(
            align=align,
            fraction=fraction,
            selection=int(selection_field.value),
            first=first,
            second=second,
        )

    # ------------------------------------------------------------------
    # Expectations
    # ------------------------------------------------------------------

    def _expect_tokens(self, *accepted: str) -> ParseError | None:
        """Check the lookahead against a set of acceptable token texts."""
        token = self._current()
        if not token.is_eof and token.value in accepted:
            return None
        if len(accepted) == 1:
            expected = f'"{accepted[0]}"'
        else:
            expected = "one of " + ", ".join(f'"{text}"' for text in accepted)
        return ParseError(token, expected)

    def _expect_args(self, shape: str, count: int) -> list[Token] | ParseError:
        """Consume an argument token and split it into its ':'-separated fields."""
        token = self._current()
        if not self._check(TokenKind.WORD):
            return ParseError(token, shape)
        fields = split_fields(token)
        if len(fields) != count:
            return ParseError(token, shape)
        self._advance()
        return fields

    # ------------------------------------------------------------------
    # Token stream helpers
    # ------------------------------------------------------------------

    def _current(self) -> Token:
        return self._tokens[self._pos]

    def _check(self, kind: TokenKind) -> bool:
        return self._current().kind == kind

    def _advance(self) -> Token:
        token = self._current()
        if not token.is_eof:
            self._pos += 1
        return token


# ---------------------------------------------------------------------------
# Field parsing
# ---------------------------------------------------------------------------


def split_fields(token: Token) -> list[Token]:
    """Split an argument token on ':' keeping each field's source offset."""
    fields: list[Token] = []
    start = 0
    for part in token.value.split(":"):
        fields.append(Token(TokenKind.WORD, part, token.offset + start))
        start += len(part) + 1
    return fields


def _parse_enum(enum_cls: type[_E], field: Token, what: str) -> _E | ParseError:
    try:
        return enum_cls(field.value)
    except ValueError:
        names = ", ".join(f'"{member.value}"' for member in enum_cls)
        return ParseError(field, f"{what} (one of {names})")


def _parse_leaf_selection(field: Token) -> int | None | ParseError:
    if not _INDEX_RE.fullmatch(field.value):
        return ParseError(field, "a selection index")
    index = int(field.value)
    if index == -1:
        return None
    if index < 0:
        return ParseError(field, 'a selection index or "-1"')
    return index


def _parse_fraction(field: Token) -> float | ParseError:
    if not _FRACTION_RE.fullmatch(field.value):
        return ParseError(field, "a decimal fraction")
    fraction = float(field.value)
    if not 0.0 <= fraction <= 1.0:
        return ParseError(field, "a fraction between 0 and 1")
    return fraction


def _parse_window_id(token: Token) -> int | ParseError:
    if not _WINDOW_RE.fullmatch(token.value):
        return ParseError(token, 'a window id (a number) or ")"')
    if token.value[:2].lower() == "0x":
        return int(token.value, 16)
    return int(token.value)


def _normalize_selection(selection: int | None, count: int) -> int | None:
    """Clamp a leaf selection into the window list that survived filtering."""
    if selection is None or count == 0:
        return None
    return min(selection, count - 1)


# ---------------------------------------------------------------------------
# Facade
# ---------------------------------------------------------------------------


class FrameParser:
    """Parse a layout dump once and hold the outcome.

    Parsing happens in the constructor; afterwards ``root`` is the raw tree
    (``None`` on failure), ``error`` the first syntax error (``None`` on
    success) and ``stale_windows`` the window ids the lookup did not know,
    in the order they appear in the dump.
    """

    def __init__(self, source: str, is_known: WindowLookup) -> None:
        self.source = source
        self.tokens = Lexer(source).tokenize()
        logger.debug("Tokenized %d characters into %d tokens", len(source), len(self.tokens))

        builder = _TreeBuilder(self.tokens, is_known)
        result = builder.build()
        self.stale_windows: list[StaleReference] = builder.stale_windows

        self.root: RawFrameNode | None
        self.error: ParseError | None
        if isinstance(result, ParseError):
            logger.debug("%s", result)
            self.root = None
            self.error = result
        else:
            self.root = result
            self.error = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        """Raise FrameParseError if the dump was rejected."""
        if self.error is not None:
            raise FrameParseError(self.error)


def parse_layout(source: str, is_known: WindowLookup) -> FrameParser:
    """Parse ``source`` and return the finished FrameParser."""
    return FrameParser(source, is_known)
