"""Tree-sitter based parsing of Go source files."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tree_sitter import Language, Node, Parser, Tree
from tree_sitter_go import language as get_go_language

from mapconst.contract.errors import SourceParseError
from mapconst.contract.models import ConstSpec, DeclarationGroup

if TYPE_CHECKING:
    from pathlib import Path

_PARSER: Parser | None = None

_SNIPPET_LIMIT = 24


def _get_parser() -> Parser:
    """Initialize and return the Tree-sitter parser with the Go language."""
    global _PARSER
    if _PARSER is None:
        lang = Language(get_go_language())
        _PARSER = Parser(lang)

    return _PARSER


def _node_text(node: Node | None) -> str:
    if node is None or not node.text:
        return ""
    return node.text.decode("utf8")


def _first_error(node: Node) -> Node | None:
    """Return the first ERROR or missing node below node, in source order."""
    if node.type == "ERROR" or node.is_missing:
        return node
    if not node.has_error:
        return None
    for child in node.children:
        found = _first_error(child)
        if found is not None:
            return found
    return node


def _describe_error(node: Node) -> str:
    if node.is_missing:
        return f"syntax error: missing {node.type!r}"
    snippet = _node_text(node).strip().splitlines()
    if not snippet:
        return "syntax error: unexpected end of input"
    text = snippet[0]
    if len(text) > _SNIPPET_LIMIT:
        text = text[:_SNIPPET_LIMIT] + "..."
    return f"syntax error: unexpected {text!r}"


def _package_clause(root: Node) -> Node | None:
    for child in root.named_children:
        if child.type == "comment":
            continue
        if child.type == "package_clause":
            return child
        return None
    return None


def parse_go_source(source: bytes, path: str | Path) -> tuple[Tree, str]:
    """Parse Go source and return its syntax tree and package name.

    Raises:
        SourceParseError: If the source has a syntax error or no package
            clause.
    """
    parser = _get_parser()
    tree = parser.parse(source)
    root_node = tree.root_node

    if root_node.has_error:
        error_node = _first_error(root_node) or root_node
        raise SourceParseError(
            path,
            _describe_error(error_node),
            line=error_node.start_point[0] + 1,
            column=error_node.start_point[1] + 1,
        )

    clause = _package_clause(root_node)
    if clause is None:
        raise SourceParseError(path, "expected 'package'", line=1, column=1)

    name = ""
    for child in clause.named_children:
        if child.type in ("package_identifier", "identifier"):
            name = _node_text(child)
            break
    if not name:
        line, column = clause.start_point
        raise SourceParseError(
            path, "expected package name", line=line + 1, column=column + 1
        )

    return tree, name


def _spec_names(node: Node) -> tuple[str, ...]:
    return tuple(
        _node_text(child)
        for child in node.children_by_field_name("name")
        if child.type != ","
    )


def _extract_const_spec(node: Node) -> ConstSpec:
    """Build a ConstSpec from a `const_spec` node."""
    type_node = node.child_by_field_name("type")
    value_node = node.child_by_field_name("value")

    type_expr: str | None = None
    type_name: str | None = None
    if type_node is not None:
        type_expr = _node_text(type_node)
        if type_node.type == "type_identifier":
            type_name = type_expr

    return ConstSpec(
        names=_spec_names(node),
        type_expr=type_expr,
        type_name=type_name,
        has_value=value_node is not None,
        line=node.start_point[0] + 1,
    )


def extract_const_groups(tree: Tree, relative_path: str) -> tuple[DeclarationGroup, ...]:
    """Extract the top-level const declarations of a file, in source order.

    Note: We intentionally do NOT descend into function bodies. A mapping
    can only refer to package-level constants.
    """
    groups: list[DeclarationGroup] = []
    for child in tree.root_node.named_children:
        if child.type != "const_declaration":
            continue
        specs = tuple(
            _extract_const_spec(spec)
            for spec in child.named_children
            if spec.type == "const_spec"
        )
        groups.append(
            DeclarationGroup(
                path=relative_path,
                line=child.start_point[0] + 1,
                specs=specs,
            )
        )
    return tuple(groups)


__all__ = ["extract_const_groups", "parse_go_source"]
