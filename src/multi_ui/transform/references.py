"""Find which imported bindings are still needed once types are erased."""

from __future__ import annotations

from dataclasses import dataclass, field

from tree_sitter import Node

# Subtrees that only exist at type level and vanish from the output.
TYPE_ONLY_NODES = frozenset(
    {
        "type_annotation",
        "opting_type_annotation",
        "type_predicate_annotation",
        "asserts_annotation",
        "type_arguments",
        "type_parameters",
        "implements_clause",
        "interface_declaration",
        "type_alias_declaration",
        "ambient_declaration",
        "function_signature",
        "abstract_method_signature",
        "method_signature",
        "index_signature",
    }
)

JSX_ELEMENTS = frozenset({"jsx_element", "jsx_self_closing_element"})

_VALUE_IDENTIFIERS = frozenset({"identifier", "shorthand_property_identifier"})


@dataclass
class References:
    """Identifiers used at value level and whether the file renders JSX."""

    values: set[str] = field(default_factory=set)
    has_jsx: bool = False

    def uses(self, name: str) -> bool:
        if name == "React" and self.has_jsx:
            return True
        return name in self.values


def is_type_only_export(node: Node) -> bool:
    """True for ``export type { ... }`` re-exports."""
    return any(not child.is_named and child.type == "type" for child in node.children)


def collect_references(root: Node) -> References:
    refs = References()
    stack = [root]
    while stack:
        node = stack.pop()
        kind = node.type
        if kind in TYPE_ONLY_NODES or kind == "import_statement":
            continue
        if kind == "export_statement" and is_type_only_export(node):
            continue
        if kind in ("as_expression", "satisfies_expression"):
            stack.append(node.named_children[0])
            continue
        if kind in JSX_ELEMENTS:
            refs.has_jsx = True
        if kind in _VALUE_IDENTIFIERS:
            refs.values.add(node.text.decode("utf-8"))
        stack.extend(node.children)
    return refs


__all__ = ["JSX_ELEMENTS", "References", "TYPE_ONLY_NODES", "collect_references", "is_type_only_export"]
