"""framedump CLI — inspect and validate frame layout dumps.

Usage:
    framedump parse [<dump_file>|-] [--known <id> ...] [--format tree|dump|json]
    framedump tokens [<dump_file>|-]
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import cast

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from framedump import __version__
from framedump.core.config import get_config
from framedump.core.types import WindowLookup, all_windows_known, known_windows
from framedump.dsl.ast_nodes import RawFrameLeaf, RawFrameNode
from framedump.dsl.lexer import tokenize
from framedump.dsl.parser import FrameParser, ParseError
from framedump.dsl.serializer import dump_tree, serialize_to_json

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="framedump",
        description="Parse and validate tiling window manager layout dumps",
    )
    parser.add_argument("--version", action="version", version=f"framedump {__version__}")
    parser.add_argument(
        "--log-level", type=str, default=None, help="Logging level (default from config)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- parse ---
    parse_parser = subparsers.add_parser("parse", help="Parse a layout dump into a frame tree")
    parse_parser.add_argument(
        "dump_file", type=str, nargs="?", default="-", help="Dump file, or - for stdin"
    )
    parse_parser.add_argument(
        "--known",
        type=_window_id,
        nargs="+",
        default=None,
        metavar="ID",
        help="Window ids that currently exist; others are reported as stale",
    )
    parse_parser.add_argument(
        "--format",
        "-f",
        choices=("tree", "dump", "json"),
        default="tree",
        help="Output format",
    )

    # --- tokens ---
    tokens_parser = subparsers.add_parser("tokens", help="Show the tokens of a layout dump")
    tokens_parser.add_argument(
        "dump_file", type=str, nargs="?", default="-", help="Dump file, or - for stdin"
    )

    return parser


def _window_id(text: str) -> int:
    try:
        return int(text, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a window id: {text!r}") from None


def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _line_and_column(source: str, offset: int) -> tuple[int, int]:
    line = source.count("\n", 0, offset) + 1
    column = offset - (source.rfind("\n", 0, offset) + 1) + 1
    return line, column


def print_parse_error(console: Console, source: str, error: ParseError) -> None:
    """Print a syntax error with the offending line and a caret under the token."""
    line, column = _line_and_column(source, error.offset)
    console.print(
        f"[bold red]Syntax error[/] at line {line}, column {column}: {escape(error.message)}",
        soft_wrap=True,
    )
    source_line = source.split("\n")[line - 1]
    console.print(source_line, markup=False, highlight=False, soft_wrap=True)
    console.print(" " * (column - 1) + "^" * max(1, len(error.text)), style="red")


def build_rich_tree(node: RawFrameNode, tree: Tree | None = None) -> Tree:
    """Render a raw frame tree as a rich Tree."""
    if isinstance(node, RawFrameLeaf):
        windows = " ".join(
            f"[bold]{w:#x}[/]" if i == node.selection else f"{w:#x}"
            for i, w in enumerate(node.windows)
        )
        label = f"[green]clients[/] {node.layout.value} {windows or '[dim](empty)[/]'}"
        return tree.add(label) if tree is not None else Tree(label)

    label = (
        f"[cyan]split[/] {node.align.value} fraction={node.fraction:g} "
        f"selected={'first' if node.selection == 0 else 'second'}"
    )
    branch = tree.add(label) if tree is not None else Tree(label)
    build_rich_tree(node.first, branch)
    build_rich_tree(node.second, branch)
    return branch


def cmd_parse(args: argparse.Namespace, console: Console, err_console: Console) -> int:
    """Parse a dump and print the resulting frame tree."""
    source = _read_source(args.dump_file)
    is_known: WindowLookup = (
        known_windows(args.known) if args.known is not None else all_windows_known
    )

    parser = FrameParser(source, is_known=is_known)
    if parser.error is not None:
        print_parse_error(err_console, source, parser.error)
        return 1

    for stale in parser.stale_windows:
        logger.warning(
            "Window %#x at offset %d does not exist and was dropped",
            stale.window_id,
            stale.token.offset,
        )

    root = cast(RawFrameNode, parser.root)
    if args.format == "dump":
        console.print(dump_tree(root), markup=False, highlight=False, soft_wrap=True)
    elif args.format == "json":
        console.print_json(serialize_to_json(root))
    else:
        console.print(build_rich_tree(root))
    return 0


def cmd_tokens(args: argparse.Namespace, console: Console, err_console: Console) -> int:
    """Print the token stream of a dump."""
    source = _read_source(args.dump_file)

    table = Table(title="Tokens")
    table.add_column("Offset", justify="right")
    table.add_column("Kind")
    table.add_column("Text")
    for token in tokenize(source):
        table.add_row(str(token.offset), token.kind.name, escape(token.value))

    console.print(table)
    return 0


def configure_logging(level: str, console: Console) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def main(argv: list[str] | None = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        config = get_config()
    except ValueError as exc:
        Console(stderr=True).print(f"[bold red]Error:[/] {escape(str(exc))}")
        return 1

    console = Console(no_color=not config.color)
    err_console = Console(stderr=True, no_color=not config.color)
    configure_logging(args.log_level or config.log_level, err_console)

    dispatch = {
        "parse": cmd_parse,
        "tokens": cmd_tokens,
    }

    try:
        return dispatch[args.command](args, console, err_console)
    except OSError as exc:
        err_console.print(f"[bold red]Error:[/] {escape(str(exc))}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
