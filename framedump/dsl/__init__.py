"""framedump DSL — tokenizer, parser, serializer, and checker for layout dumps.

Usage:
    from framedump.dsl import FrameParser, dump_tree, known_windows

    parser = FrameParser(source, is_known=known_windows(live_ids))
    if parser.error is None:
        print(dump_tree(parser.root))
"""

from framedump.core.types import all_windows_known, known_windows
from framedump.dsl.ast_nodes import RawFrameLeaf, RawFrameNode, RawFrameSplit, collect_leaves
from framedump.dsl.lexer import Lexer, tokenize
from framedump.dsl.parser import (
    FrameParseError,
    FrameParser,
    ParseError,
    StaleReference,
    parse_layout,
)
from framedump.dsl.serializer import (
    deserialize_from_json,
    dump_tree,
    serialize_to_json,
    tree_from_dict,
    tree_to_dict,
)
from framedump.dsl.tokens import Token, TokenKind
from framedump.dsl.validator import validate_tree

__all__ = [
    "FrameParseError",
    "FrameParser",
    "Lexer",
    "ParseError",
    "RawFrameLeaf",
    "RawFrameNode",
    "RawFrameSplit",
    "StaleReference",
    "Token",
    "TokenKind",
    "all_windows_known",
    "collect_leaves",
    "deserialize_from_json",
    "dump_tree",
    "known_windows",
    "parse_layout",
    "serialize_to_json",
    "tokenize",
    "tree_from_dict",
    "tree_to_dict",
    "validate_tree",
]
