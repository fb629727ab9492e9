from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import tree_sitter_rust
from tree_sitter import Language, Parser

from lintratchet.exceptions import ParseError
from lintratchet.logging_config import get_logger
from lintratchet.parsing.base import Attribute, Declaration

logger = get_logger(__name__)


@dataclass(frozen=True)
class LanguageSpec:
    name: str
    extensions: set[str]
    outer_attribute_types: set[str]
    inner_attribute_types: set[str]
    container_node_types: set[str]
    leaf_node_types: set[str]
    body_node_types: set[str]
    comment_types: set[str]
    skipped_node_types: set[str]
    wrapper_node_types: set[str]


LANGUAGE_SPECS = {
    "rust": LanguageSpec(
        name="rust",
        extensions={".rs"},
        outer_attribute_types={"attribute_item"},
        inner_attribute_types={"inner_attribute_item"},
        container_node_types={
            "mod_item",
            "impl_item",
            "trait_item",
            "foreign_mod_item",
        },
        leaf_node_types={
            "function_item",
            "function_signature_item",
            "struct_item",
            "enum_item",
            "union_item",
            "type_item",
            "associated_type",
            "const_item",
            "static_item",
            "use_declaration",
            "extern_crate_declaration",
            "macro_definition",
            "macro_invocation",
        },
        body_node_types={"declaration_list"},
        comment_types={"line_comment", "block_comment"},
        skipped_node_types={"empty_statement", "shebang"},
        wrapper_node_types={"expression_statement"},
    ),
}

_LANGUAGE_MODULES = {
    "rust": tree_sitter_rust,
}

_PARSERS: dict[str, Parser] = {}


@dataclass(frozen=True)
class ParsedFile:
    path: str
    language: str
    source: bytes
    tree: object
    spec: LanguageSpec

    @property
    def text(self) -> str:
        return self.source.decode("utf-8", errors="replace")

    @property
    def lines(self) -> list[str]:
        return self.text.splitlines()


def language_for_path(path: str, extensions: Optional[Iterable[str]] = None) -> Optional[str]:
    """Return the language of ``path``, or None when it is not scanned.

    ``extensions`` narrows the accepted extensions (for example from the
    configuration); by default every extension of every known language is accepted.
    """
    ext = Path(path).suffix.lower()
    allowed = {e.lower() for e in extensions} if extensions is not None else None
    if allowed is not None and ext not in allowed:
        return None
    for name, spec in LANGUAGE_SPECS.items():
        if ext in spec.extensions:
            return name
    return None


def get_parser(language: str) -> Parser:
    parser = _PARSERS.get(language)
    if parser is None:
        module = _LANGUAGE_MODULES[language]
        parser = Parser(Language(module.language()))
        _PARSERS[language] = parser
    return parser


def parse_file(path: str, language: Optional[str] = None) -> ParsedFile:
    language = language or language_for_path(path)
    if language is None:
        raise ValueError(f"Unsupported language for path: {path}")
    source = Path(path).read_bytes()
    return parse_source(source, path=path, language=language)


def parse_source(source: bytes, path: str = "<string>", language: str = "rust") -> ParsedFile:
    """Parse ``source`` and reject it unless the whole file is well formed."""
    try:
        source.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(path, f"not valid UTF-8 ({exc.reason} at byte {exc.start})") from exc

    tree = get_parser(language).parse(source)
    parsed = ParsedFile(
        path=path,
        language=language,
        source=source,
        tree=tree,
        spec=LANGUAGE_SPECS[language],
    )
    error = first_error_node(tree.root_node)
    if error is not None:
        line = error.start_point[0] + 1
        column = error.start_point[1] + 1
        if error.is_missing:
            reason = f"expected {error.type!r}"
        else:
            snippet = node_text(parsed, error).strip().splitlines()
            reason = f"unexpected {snippet[0][:40]!r}" if snippet else "unexpected end of input"
        raise ParseError(path, reason, line=line, column=column)
    logger.debug("Parsed %s (%d bytes)", path, len(source))
    return parsed


def first_error_node(root) -> Optional[object]:
    """Return the first ERROR or MISSING node in source order, if any."""
    if not root.has_error:
        return None
    stack = [root]
    while stack:
        current = stack.pop()
        if current.is_error or current.is_missing:
            return current
        stack.extend(reversed([c for c in current.children if c.has_error or c.is_missing]))
    return None


def node_text(parsed: ParsedFile, node) -> str:
    return parsed.source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def build_declarations(parsed: ParsedFile) -> Declaration:
    """Build the declaration tree for a parsed file.

    The root's attributes are the file's inner attributes and its children
    are the top-level declarations.
    """
    root = parsed.tree.root_node
    attributes, children = _collect_body(parsed, root.children)
    return Declaration(kind="source_file", attributes=attributes, children=children, line=1)


def _collect_body(parsed: ParsedFile, nodes) -> Tuple[List[Attribute], List[Declaration]]:
    spec = parsed.spec
    inner: List[Attribute] = []
    pending: List[Attribute] = []
    declarations: List[Declaration] = []
    for node in nodes:
        if not node.is_named or node.type in spec.comment_types:
            continue
        if node.type in spec.skipped_node_types:
            continue
        if node.type in spec.inner_attribute_types:
            inner.append(_attribute(parsed, node, inner=True))
            continue
        if node.type in spec.outer_attribute_types:
            pending.append(_attribute(parsed, node))
            continue
        declarations.append(_declaration(parsed, node, pending))
        pending = []
    return inner, declarations


def _declaration(parsed: ParsedFile, node, attributes: List[Attribute]) -> Declaration:
    spec = parsed.spec
    line = node.start_point[0] + 1
    node = _unwrap(parsed, node)

    if node.type in spec.container_node_types:
        body = _body(parsed, node)
        if body is not None:
            inner, children = _collect_body(parsed, body.children)
            return Declaration(
                kind=node.type,
                attributes=attributes + inner,
                children=children,
                line=line,
            )
        # `mod foo;` and `extern "C";` have nothing nested in them.
        return Declaration(kind=node.type, attributes=attributes, line=line)

    if node.type in spec.leaf_node_types:
        return Declaration(kind=node.type, attributes=attributes, line=line)

    logger.debug("%s:%d: ignoring unrecognized declaration %s", parsed.path, line, node.type)
    return Declaration(kind=node.type, line=line, known=False)


def _unwrap(parsed: ParsedFile, node):
    if node.type not in parsed.spec.wrapper_node_types:
        return node
    named = node.named_children
    if len(named) == 1 and named[0].type in parsed.spec.leaf_node_types:
        return named[0]
    return node


def _body(parsed: ParsedFile, node):
    body = node.child_by_field_name("body")
    if body is not None and body.type in parsed.spec.body_node_types:
        return body
    for child in node.children:
        if child.type in parsed.spec.body_node_types:
            return child
    return None


def _attribute(parsed: ParsedFile, node, inner: bool = False) -> Attribute:
    line = node.start_point[0] + 1
    attr = None
    for child in node.named_children:
        if child.type == "attribute":
            attr = child
            break
    if attr is None or not attr.named_children:
        return Attribute(name="", line=line, inner=inner)

    path = attr.named_children[0]
    name = "".join(node_text(parsed, path).split())

    args = attr.child_by_field_name("arguments")
    if args is None:
        for child in attr.named_children:
            if child.type == "token_tree":
                args = child
                break
    lints = _lint_paths(parsed, args) if args is not None else ()
    return Attribute(name=name, lints=lints, line=line, inner=inner)


def _lint_paths(parsed: ParsedFile, token_tree) -> Tuple[str, ...]:
    """Extract the plain paths from an attribute argument list.

    ``(dead_code, clippy::needless_return, reason = "x")`` yields
    ``("dead_code", "clippy::needless_return")``.
    """
    tokens = list(token_tree.children)
    if tokens and not tokens[0].is_named and node_text(parsed, tokens[0]) in "([{":
        tokens = tokens[1:]
    if tokens and not tokens[-1].is_named and node_text(parsed, tokens[-1]) in ")]}":
        tokens = tokens[:-1]

    paths: List[str] = []
    segment: List[str] = []
    valid = True
    for token in tokens:
        if token.type in parsed.spec.comment_types:
            continue
        text = node_text(parsed, token)
        if not token.is_named and text == ",":
            if valid and _is_path(segment):
                paths.append("".join(segment))
            segment = []
            valid = True
            continue
        if token.type == "identifier" or (not token.is_named and text == "::"):
            segment.append(text)
        else:
            valid = False
    if valid and _is_path(segment):
        paths.append("".join(segment))
    return tuple(paths)


def _is_path(segment: List[str]) -> bool:
    if not segment or len(segment) % 2 == 0:
        return False
    for index, part in enumerate(segment):
        if (part == "::") != (index % 2 == 1):
            return False
    return True
