from pathlib import Path
from typing import cast

from tree_sitter import Node
from tree_sitter_language_pack import SupportedLanguage, get_parser

from matchingref.core.languages import normalize_language, resolve_language
from matchingref.models import SyntaxNode


def _convert(node: Node, source_bytes: bytes, field_name: str | None) -> SyntaxNode:
    syntax = SyntaxNode(
        type=node.type,
        text=source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="replace"),
        start_byte=node.start_byte,
        end_byte=node.end_byte,
        field_name=field_name,
    )

    for index, child in enumerate(node.children):
        child_field = node.field_name_for_child(index)
        if child.is_named:
            syntax.append(_convert(child, source_bytes, child_field))
        elif child_field == "operator":
            syntax.operator = child.type

    return syntax


def parse_java_source(source: str | bytes, language: str = "java") -> SyntaxNode:
    """Parse source text into a parent-linked syntax tree of named nodes."""
    source_bytes = source.encode("utf-8") if isinstance(source, str) else source
    parser = get_parser(cast(SupportedLanguage, normalize_language(language)))
    tree = parser.parse(source_bytes)
    return _convert(tree.root_node, source_bytes, None)


def parse_java_file(path: str, language: str | None = None) -> SyntaxNode:
    file_path = Path(path)
    resolved_language = resolve_language(language, file_path)

    try:
        source_bytes = file_path.read_bytes()
    except FileNotFoundError:
        raise FileNotFoundError(f"File not found: {path}") from None

    return parse_java_source(source_bytes, resolved_language)


def resolve_anchor_node(root: SyntaxNode, start: int, end: int) -> SyntaxNode | None:
    """Return the deepest node whose byte span covers ``[start, end)``."""
    if start > end or start < root.start_byte or end > root.end_byte:
        return None

    node = root
    while True:
        covering = next(
            (child for child in node.children if child.start_byte <= start and end <= child.end_byte),
            None,
        )
        if covering is None:
            return node
        node = covering
