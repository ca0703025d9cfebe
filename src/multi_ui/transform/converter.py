"""Convert TypeScript JSX component sources to plain JavaScript JSX output.

The source is parsed with the tree-sitter TSX grammar and re-emitted node by
node. Regions that need no change are copied byte for byte, so formatting,
comments and directives survive. Type-level syntax is dropped and JSX is
lowered to ``React.createElement`` calls.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from multi_ui.transform import jsx
from multi_ui.transform.references import (
    TYPE_ONLY_NODES,
    References,
    collect_references,
    is_type_only_export,
)

logger = logging.getLogger(__name__)

TSX = Language(tree_sitter_typescript.language_tsx())


class TransformError(RuntimeError):
    """Raised when a component source cannot be converted."""


_ERASED_NODES = TYPE_ONLY_NODES | {"accessibility_modifier", "override_modifier"}

# Removed along with any whitespace that follows them.
_ERASED_STATEMENTS = frozenset(
    {
        "interface_declaration",
        "type_alias_declaration",
        "ambient_declaration",
        "function_signature",
        "import_statement",
        "export_statement",
        "public_field_definition",
    }
)

# Removed along with the spaces that follow them on the same line.
_MODIFIERS = frozenset({"accessibility_modifier", "override_modifier", "readonly", "abstract", "declare"})

# Anonymous tokens that only carry type information, by parent node.
_ERASED_TOKENS = {
    "required_parameter": frozenset({"readonly"}),
    "optional_parameter": frozenset({"?", "readonly"}),
    "public_field_definition": frozenset({"?", "!", "readonly"}),
    "method_definition": frozenset({"?"}),
    "variable_declarator": frozenset({"!"}),
    "abstract_class_declaration": frozenset({"abstract"}),
}

_PARAMETERS = frozenset({"required_parameter", "optional_parameter"})
_JSX_TEXT = frozenset({"jsx_text", "html_character_reference", "comment"})
_JSX_TAGS = frozenset({"jsx_opening_element", "jsx_closing_element"})
_CHARACTER_REFERENCE = re.compile(rb"&(?:#[0-9]+|#[xX][0-9a-fA-F]+|[A-Za-z][A-Za-z0-9]*);")


def to_untyped_dialect(source: str, filename: str = "Component.tsx") -> str:
    """Return the JavaScript equivalent of a TSX component source.

    Raises:
        TransformError: If ``source`` does not parse as TSX or uses syntax
            with no JavaScript lowering here (namespaces).
    """
    encoded, root = _parse(source.encode("utf-8"), filename)
    converter = _Converter(encoded, collect_references(root), filename)
    converted = converter.emit(root)
    logger.debug("Converted %s (%d -> %d bytes)", filename, len(encoded), len(converted))
    return (
        encoded[: root.start_byte].decode("utf-8")
        + converted
        + encoded[root.end_byte :].decode("utf-8")
    )


def _parse(encoded: bytes, filename: str) -> tuple[bytes, Node]:
    """Parse ``encoded``, escaping bare ``&`` in JSX text as ``&amp;``.

    The grammar only accepts ``&`` in JSX text as the start of a character
    reference, while JSX itself treats a lone ``&`` as text. Each repair is
    kept only when the reparsed tree reads the escape as JSX text.
    """
    original = encoded
    escaped: list[int] = []
    parser = Parser(TSX)
    root = parser.parse(encoded).root_node
    while root.has_error:
        bad = _first_error(root)
        position = _bare_ampersand(encoded, bad)
        if position is None:
            break
        repaired = encoded[:position] + b"&amp;" + encoded[position + 1 :]
        candidate = parser.parse(repaired).root_node
        if not _is_jsx_text_at(candidate, position):
            break
        logger.debug("Escaped bare '&' in JSX text of %s at byte %d", filename, position)
        escaped.append(position)
        encoded, root = repaired, candidate
    else:
        return encoded, root

    # Error offsets are in the escaped source; each escape added four bytes.
    offset = bad.start_byte - 4 * sum(1 for p in escaped if p < bad.start_byte)
    row = original.count(b"\n", 0, offset)
    column = offset - (original.rfind(b"\n", 0, offset) + 1)
    raise TransformError(
        f"Unable to parse {filename}: syntax error at line {row + 1}, column {column + 1}"
    )


def _bare_ampersand(source: bytes, bad: Node) -> Optional[int]:
    end = max(bad.end_byte, bad.start_byte + 1)
    position = source.find(b"&", bad.start_byte, end)
    while position != -1:
        if not _CHARACTER_REFERENCE.match(source, position):
            return position
        position = source.find(b"&", position + 1, end)
    return None


def _is_jsx_text_at(root: Node, position: int) -> bool:
    node = root.descendant_for_byte_range(position, position + len(b"&amp;"))
    if node is None or node.type not in ("html_character_reference", "jsx_text"):
        return False
    return node.parent is not None and node.parent.type == "jsx_element"


def _first_error(root: Node) -> Node:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        if node.has_error:
            stack.extend(reversed(node.children))
    return root


def _child_of_type(node: Node, kind: str) -> Optional[Node]:
    for child in node.children:
        if child.type == kind:
            return child
    return None


def _has_token(node: Node, *tokens: str) -> bool:
    return any(not child.is_named and child.type in tokens for child in node.children)


def _expressions(node: Node) -> list[Node]:
    return [child for child in node.named_children if child.type != "comment"]


def _is_this_parameter(node: Node) -> bool:
    if node.type not in _PARAMETERS:
        return False
    pattern = node.child_by_field_name("pattern")
    return pattern is not None and pattern.type == "this"


def _is_parameter_property(node: Node) -> bool:
    if node.type not in _PARAMETERS:
        return False
    return (
        _child_of_type(node, "accessibility_modifier") is not None
        or _child_of_type(node, "override_modifier") is not None
        or _has_token(node, "readonly")
    )


def _is_type_only_field(node: Node) -> bool:
    """True for ``x: T;`` fields: annotated, uninitialized, undecorated, not private."""
    name = node.child_by_field_name("name")
    return (
        node.child_by_field_name("value") is None
        and _child_of_type(node, "type_annotation") is not None
        and _child_of_type(node, "decorator") is None
        and (name is None or name.type != "private_property_identifier")
    )


def _is_super_call(statement: Node) -> bool:
    if statement.type != "expression_statement" or not statement.named_children:
        return False
    call = statement.named_children[0]
    if call.type != "call_expression":
        return False
    callee = call.child_by_field_name("function")
    return callee is not None and callee.type == "super"


def _numeric_value(text: str) -> int | float:
    cleaned = text.replace("_", "")
    try:
        return int(cleaned, 0)
    except ValueError:
        return float(cleaned)


def _format_number(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


class _Converter:
    def __init__(self, source: bytes, refs: References, filename: str):
        self.source = source
        self.refs = refs
        self.filename = filename
        # Enum name and earlier member names while an initializer is emitted.
        self._enum_scope: tuple[str, set[str]] | None = None
        self._handlers = {
            "import_statement": self._import_statement,
            "export_statement": self._export_statement,
            "export_clause": self._export_clause,
            "as_expression": self._unwrap,
            "satisfies_expression": self._unwrap,
            "non_null_expression": self._unwrap,
            "enum_declaration": self._enum_declaration,
            "public_field_definition": self._field_definition,
            "method_definition": self._method_definition,
            "formal_parameters": self._formal_parameters,
            "internal_module": self._unsupported,
            "module": self._unsupported,
            "jsx_element": self._jsx_element,
            "jsx_self_closing_element": self._jsx_self_closing_element,
        }

    def text(self, node: Node) -> str:
        return self.slice(node.start_byte, node.end_byte)

    def slice(self, start: int, end: int) -> str:
        return self.source[start:end].decode("utf-8")

    def emit(self, node: Node) -> str:
        if node.type in _ERASED_NODES:
            return ""
        handler = self._handlers.get(node.type)
        if handler is not None:
            return handler(node)
        if not node.children:
            return self._member_reference(node) or self.text(node)
        return self._emit_children(node)

    def _member_reference(self, node: Node) -> str | None:
        if self._enum_scope is None or node.type != "identifier":
            return None
        enum_name, members = self._enum_scope
        name = self.text(node)
        return f"{enum_name}.{name}" if name in members else None

    def _emit_children(self, node: Node, overrides: dict[int, str] | None = None) -> str:
        erased_tokens = _ERASED_TOKENS.get(node.type, frozenset())
        overrides = overrides or {}
        parts = []
        cursor = node.start_byte
        erased_member = False
        for child in node.children:
            if erased_member and child.type == ";" and not child.is_named:
                cursor = self._skip(child.end_byte, node.end_byte, b" \t\r\n")
                erased_member = False
                continue
            erased_member = False
            parts.append(self.slice(cursor, child.start_byte))
            cursor = child.end_byte
            if child.id in overrides:
                emitted = overrides[child.id]
            elif not child.is_named and child.type in erased_tokens:
                emitted = ""
            else:
                emitted = self.emit(child)
            parts.append(emitted)
            if emitted:
                continue
            if child.type in _ERASED_STATEMENTS:
                cursor = self._skip(cursor, node.end_byte, b" \t\r\n")
                erased_member = child.type == "public_field_definition"
            elif child.type in _MODIFIERS:
                cursor = self._skip(cursor, node.end_byte, b" \t")
        parts.append(self.slice(cursor, node.end_byte))
        return "".join(parts)

    def _skip(self, position: int, limit: int, characters: bytes) -> int:
        while position < limit and self.source[position] in characters:
            position += 1
        return position

    def _line_indent(self, node: Node) -> str:
        line_start = self.source.rfind(b"\n", 0, node.start_byte) + 1
        end = self._skip(line_start, node.start_byte, b" \t")
        return self.slice(line_start, end)

    def _unwrap(self, node: Node) -> str:
        return self.emit(node.named_children[0])

    def _unsupported(self, node: Node) -> str:
        row, column = node.start_point
        raise TransformError(
            f"Unable to convert {self.filename}: namespaces are not supported "
            f"(line {row + 1}, column {column + 1})"
        )

    # Modules

    def _import_statement(self, node: Node) -> str:
        if _has_token(node, "type", "typeof"):
            return ""

        require = _child_of_type(node, "import_require_clause")
        if require is not None:
            name = require.named_children[0]
            module = _child_of_type(require, "string")
            return f"const {self.text(name)} = require({self.text(module)});"

        clause = _child_of_type(node, "import_clause")
        if clause is None:
            return self.text(node)

        kept: list[str] = []
        dropped = False
        for part in clause.named_children:
            if part.type == "identifier":
                if self.refs.uses(self.text(part)):
                    kept.append(self.text(part))
                else:
                    dropped = True
            elif part.type == "namespace_import":
                local = _child_of_type(part, "identifier")
                if local is not None and self.refs.uses(self.text(local)):
                    kept.append(self.text(part))
                else:
                    dropped = True
            elif part.type == "named_imports":
                specifiers = []
                for spec in part.named_children:
                    if spec.type != "import_specifier":
                        continue
                    local = spec.child_by_field_name("alias")
                    if local is None:
                        local = spec.child_by_field_name("name")
                    if not _has_token(spec, "type", "typeof") and self.refs.uses(self.text(local)):
                        specifiers.append(self.text(spec))
                    else:
                        dropped = True
                if specifiers:
                    kept.append("{ " + ", ".join(specifiers) + " }")

        if not dropped:
            return self.text(node)
        if not kept:
            logger.debug("Removed type-only import: %s", self.text(node))
            return ""
        source = node.child_by_field_name("source")
        return f"import {', '.join(kept)} from {self.text(source)};"

    def _export_statement(self, node: Node) -> str:
        if is_type_only_export(node):
            return ""
        declaration = node.child_by_field_name("declaration")
        if declaration is not None and declaration.type in TYPE_ONLY_NODES:
            return ""
        return self._emit_children(node)

    def _export_clause(self, node: Node) -> str:
        specifiers = [child for child in node.named_children if child.type == "export_specifier"]
        if not any(_has_token(spec, "type") for spec in specifiers):
            return self._emit_children(node)
        kept = [self.text(spec) for spec in specifiers if not _has_token(spec, "type")]
        return "{ " + ", ".join(kept) + " }" if kept else "{}"

    # Declarations

    def _enum_declaration(self, node: Node) -> str:
        name = self.text(node.child_by_field_name("name"))
        body = node.child_by_field_name("body")
        indent = self._line_indent(node)
        inner = indent + "  "

        lines = [f"var {name};", f"{indent}(function ({name}) {{"]
        next_value: int | float | None = 0
        members: set[str] = set()
        for member in body.named_children:
            if member.type == "comment":
                continue
            if member.type == "enum_assignment":
                key_node = member.child_by_field_name("name")
                value_node = member.child_by_field_name("value")
            else:
                key_node, value_node = member, None

            key = self.text(key_node) if key_node.type == "string" else jsx.string_literal(self.text(key_node))
            reverse = True
            if value_node is None:
                if next_value is None:
                    raise TransformError(
                        f"Unable to convert {self.filename}: enum member {key} of {name} needs an initializer"
                    )
                value = _format_number(next_value)
                next_value += 1
            elif value_node.type == "number":
                value = self.text(value_node)
                next_value = _numeric_value(value) + 1
            elif value_node.type in ("string", "template_string"):
                value = self._emit_initializer(value_node, name, members)
                next_value = None
                reverse = False
            else:
                value = self._emit_initializer(value_node, name, members)
                next_value = None

            if key_node.type == "property_identifier":
                members.add(self.text(key_node))
            if reverse:
                lines.append(f"{inner}{name}[{name}[{key}] = {value}] = {key};")
            else:
                lines.append(f"{inner}{name}[{key}] = {value};")

        lines.append(f"{indent}}})({name} || ({name} = {{}}));")
        return "\n".join(lines)

    def _emit_initializer(self, value: Node, enum_name: str, members: set[str]) -> str:
        self._enum_scope = (enum_name, members)
        try:
            return self.emit(value)
        finally:
            self._enum_scope = None

    def _field_definition(self, node: Node) -> str:
        if _has_token(node, "declare", "abstract"):
            return ""
        if _is_type_only_field(node):
            return ""
        return self._emit_children(node)

    def _formal_parameters(self, node: Node) -> str:
        params = _expressions(node)
        if not any(_is_this_parameter(param) for param in params):
            return self._emit_children(node)
        kept = [self.emit(param) for param in params if not _is_this_parameter(param)]
        return "(" + ", ".join(kept) + ")"

    def _method_definition(self, node: Node) -> str:
        name = node.child_by_field_name("name")
        params = node.child_by_field_name("parameters")
        body = node.child_by_field_name("body")
        if name is None or params is None or body is None or self.text(name) != "constructor":
            return self._emit_children(node)

        properties = [
            self.text(param.child_by_field_name("pattern"))
            for param in params.named_children
            if _is_parameter_property(param)
        ]
        if not properties:
            return self._emit_children(node)
        return self._emit_children(node, {body.id: self._constructor_body(node, body, properties)})

    def _constructor_body(self, method: Node, body: Node, properties: list[str]) -> str:
        statements = _expressions(body)
        indent = self._line_indent(statements[0]) if statements else self._line_indent(method) + "  "
        assignments = "".join(f"\n{indent}this.{prop} = {prop};" for prop in properties)

        anchor = next((stmt for stmt in statements if _is_super_call(stmt)), None)
        if anchor is None:
            anchor = body.children[0]
        if not statements:
            assignments += "\n" + self._line_indent(method)
        return self._emit_children(body, {anchor.id: self.emit(anchor) + assignments})

    # JSX

    def _jsx_element(self, node: Node) -> str:
        opening = _child_of_type(node, "jsx_opening_element")
        closing = _child_of_type(node, "jsx_closing_element")
        content = [child for child in node.children if child.type not in _JSX_TAGS]
        end = closing.start_byte if closing is not None else node.end_byte
        return self._create_element(opening, self._jsx_children(content, opening.end_byte, end))

    def _jsx_self_closing_element(self, node: Node) -> str:
        return self._create_element(node, [])

    def _create_element(self, tag: Node, children: list[str]) -> str:
        props = [
            self._jsx_attribute(attr)
            for attr in tag.named_children
            if attr.type in ("jsx_attribute", "jsx_expression")
        ]
        return jsx.create_element(self._element_type(tag.child_by_field_name("name")), props, children)

    def _element_type(self, name: Optional[Node]) -> str:
        if name is None:
            return jsx.PRAGMA_FRAG
        text = self.text(name)
        if name.type in ("identifier", "jsx_identifier") and jsx.is_intrinsic_tag(text):
            return jsx.string_literal(text)
        if name.type == "jsx_namespace_name":
            return jsx.string_literal("".join(text.split()))
        return text

    def _jsx_attribute(self, attr: Node) -> str:
        if attr.type == "jsx_expression":
            return self._jsx_expression_value(attr)

        parts = _expressions(attr)
        key = jsx.property_key(self.text(parts[0]))
        if len(parts) < 2:
            return f"{key}: true"

        value = parts[1]
        if value.type in ("string", "jsx_string"):
            return f"{key}: {jsx.attribute_string(self.text(value)[1:-1])}"
        if value.type == "jsx_expression":
            return f"{key}: {self._jsx_expression_value(value)}"
        return f"{key}: {self.emit(value)}"

    def _jsx_expression_value(self, node: Node) -> str:
        inner = _expressions(node)
        if not inner:
            return ""
        if inner[0].type == "sequence_expression":
            return f"({self.emit(inner[0])})"
        return self.emit(inner[0])

    def _jsx_children(self, content: list[Node], start: int, end: int) -> list[str]:
        children: list[str] = []
        cursor = start
        for child in content:
            if child.type in _JSX_TEXT:
                continue
            self._append_text(children, cursor, child.start_byte)
            cursor = child.end_byte
            if child.type == "jsx_expression":
                value = self._jsx_expression_value(child)
                if value:
                    children.append(value)
            else:
                children.append(self.emit(child))
        self._append_text(children, cursor, end)
        return children

    def _append_text(self, children: list[str], start: int, end: int) -> None:
        text = jsx.clean_text(self.slice(start, end))
        if text is not None:
            children.append(jsx.string_literal(text))


__all__ = ["TSX", "TransformError", "to_untyped_dialect"]
