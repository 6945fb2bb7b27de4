"""Static scanner for PHP type declarations.

The scanner never executes code. tree-sitter builds the syntax tree of a
file, and the declarations of classes, interfaces and traits are read off
it together with their constants, properties and methods. Enums, functions
and top-level statements are ignored.

Names in ``extends``/``implements`` clauses and in type hints are resolved
against the current namespace and imports following PHP's rules, so the
resulting signatures carry fully qualified names just like reflection does.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

import tree_sitter_php
from tree_sitter import Language, Node, Parser

from docs_generator.signature import (
    PRIVATE,
    PROTECTED,
    PUBLIC,
    ConstantSignature,
    MethodSignature,
    ParameterSignature,
    PropertySignature,
    TypeSignature,
)

logger = logging.getLogger(__name__)

PHP_LANGUAGE = Language(tree_sitter_php.language_php())

TYPE_DECLARATIONS = {
    "class_declaration": "class",
    "interface_declaration": "interface",
    "trait_declaration": "trait",
}
NAME_NODES = {"name", "qualified_name", "relative_name", "namespace_name"}
PARAMETER_NODES = {
    "simple_parameter",
    "variadic_parameter",
    "property_promotion_parameter",
}
USE_CLAUSES = {"namespace_use_clause", "namespace_use_group_clause"}
SPECIAL_CLASS_NAMES = {"self", "static", "parent"}
RESERVED_TYPE_NAMES = {
    "array",
    "bool",
    "callable",
    "false",
    "float",
    "int",
    "iterable",
    "mixed",
    "never",
    "null",
    "object",
    "string",
    "true",
    "void",
}


def scan_php_source(source: str, file: Path | None = None) -> list[TypeSignature]:
    """Return the signatures of all types declared in ``source``."""
    return PhpScanner(source, file).scan()


def scan_php_file(path: Path) -> list[TypeSignature]:
    """Return the signatures of all types declared in the file at ``path``."""
    source = path.read_text(encoding="utf-8", errors="replace")
    return scan_php_source(source, path)


def _text(node: Node | None) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def _visibility(modifiers: list[str]) -> str:
    if PRIVATE in modifiers:
        return PRIVATE
    if PROTECTED in modifiers:
        return PROTECTED
    return PUBLIC


def _modifiers(node: Node) -> list[str]:
    """Lowercased keywords of the modifier nodes directly under ``node``."""
    return [
        _text(child).lower()
        for child in node.children
        if child.type.endswith("_modifier") and child.type != "reference_modifier"
    ]


def _has_keyword(node: Node, *words: str) -> bool:
    return any(child.type in words for child in node.children)


def _doc_comment(node: Node) -> str | None:
    """Return the ``/** ... */`` block attached to a declaration, if any."""
    for child in node.children:
        if child.type == "comment":
            if _text(child).startswith("/**"):
                return _text(child)
        elif child.type != "attribute_list":
            break

    sibling = node.prev_sibling
    while sibling is not None and sibling.type == "comment":
        text = _text(sibling)
        if text.startswith("/**"):
            return text
        sibling = sibling.prev_sibling
    return None


def _initializer(node: Node) -> Node | None:
    """Return the expression after ``=`` in a declaration element."""
    value = node.child_by_field_name("default_value")
    if value is not None:
        return value
    seen_equals = False
    for child in node.children:
        if child.type == "property_initializer":
            return _initializer(child)
        if child.type == "=":
            seen_equals = True
        elif seen_equals and child.is_named and child.type != "comment":
            return child
    return None


def _variable_name(node: Node) -> str:
    for child in node.named_children:
        if child.type == "variable_name":
            return _text(child).lstrip("$")
        if child.type == "by_ref":
            return _variable_name(child)
    return ""


class PhpScanner:
    """Walk over the syntax tree of one PHP file."""

    def __init__(self, source: str, file: Path | None = None) -> None:
        """Keep ``source``; ``file`` is recorded on every signature."""
        self.source = source
        self.file = file
        self.namespace = ""
        self.imports: dict[str, str] = {}  # lowercase alias -> qualified name

    def scan(self) -> list[TypeSignature]:
        """Scan the whole file."""
        tree = Parser(PHP_LANGUAGE).parse(self.source.encode("utf-8"))
        if tree.root_node.has_error:
            logger.debug("Syntax errors in %s", self.file or "<source>")
        types: list[TypeSignature] = []
        self._scan_statements(tree.root_node.children, types)
        return types

    def _scan_statements(
        self, nodes: Iterable[Node], types: list[TypeSignature]
    ) -> None:
        for node in nodes:
            kind = TYPE_DECLARATIONS.get(node.type)
            if kind:
                types.append(self._parse_type(node, kind))
            elif node.type == "namespace_definition":
                self._enter_namespace(node, types)
            elif node.type == "namespace_use_declaration":
                self._parse_imports(node)

    # -----------------------------
    # Names
    # -----------------------------

    def _qualify(self, short_name: str) -> str:
        return f"{self.namespace}\\{short_name}" if self.namespace else short_name

    def _resolve_name(self, name: str) -> str:
        """Resolve a class name as written to its fully qualified form."""
        if name.startswith("\\"):
            return name[1:]
        lower = name.lower()
        if lower in SPECIAL_CLASS_NAMES or lower in RESERVED_TYPE_NAMES:
            return name
        if lower.startswith("namespace\\"):
            return self._qualify(name[len("namespace\\") :])
        first, sep, rest = name.partition("\\")
        imported = self.imports.get(first.lower())
        if imported:
            return imported + sep + rest
        return self._qualify(name)

    def _name_list(self, node: Node) -> list[str]:
        return [
            self._resolve_name(_text(child))
            for child in node.named_children
            if child.type in NAME_NODES
        ]

    def _type_text(self, node: Node | None) -> str | None:
        """Render a type node with class names resolved; spaces are dropped."""
        if node is None:
            return None
        if node.type in NAME_NODES or node.type == "named_type":
            return self._resolve_name(_text(node))
        if node.child_count == 0 or node.type == "primitive_type":
            return _text(node)
        return "".join(
            self._type_text(child) or ""
            for child in node.children
            if child.type != "comment"
        )

    # -----------------------------
    # Namespaces and imports
    # -----------------------------

    def _enter_namespace(self, node: Node, types: list[TypeSignature]) -> None:
        self.namespace = _text(node.child_by_field_name("name")).strip("\\")
        self.imports = {}
        body = node.child_by_field_name("body")
        if body is not None:
            self._scan_statements(body.children, types)
            self.namespace = ""
            self.imports = {}

    def _parse_imports(self, node: Node) -> None:
        """Record class imports from a top-level ``use`` statement."""
        if _has_keyword(node, "function", "const"):
            return
        prefix = ""
        for child in node.named_children:
            if child.type == "namespace_name":
                prefix = _text(child).strip("\\")
            elif child.type in USE_CLAUSES:
                self._add_import("", child)
            elif child.type == "namespace_use_group":
                for clause in child.named_children:
                    if clause.type in USE_CLAUSES and not _has_keyword(
                        clause, "function", "const"
                    ):
                        self._add_import(prefix, clause)

    def _add_import(self, prefix: str, clause: Node) -> None:
        name: str | None = None
        alias: str | None = None
        for child in clause.named_children:
            if child.type == "namespace_aliasing_clause" and child.named_children:
                alias = _text(child.named_children[-1])
            elif child.type in NAME_NODES:
                if name is None:
                    name = _text(child)
                else:
                    alias = _text(child)
        if not name:
            return
        full = f"{prefix}\\{name}" if prefix else name
        full = full.strip("\\")
        self.imports[(alias or full.rpartition("\\")[2]).lower()] = full

    # -----------------------------
    # Type declarations
    # -----------------------------

    def _parse_type(self, node: Node, kind: str) -> TypeSignature:
        modifiers = _modifiers(node)
        parent: str | None = None
        interfaces: list[str] = []
        for child in node.named_children:
            if child.type == "base_clause":
                names = self._name_list(child)
                if kind == "interface":
                    interfaces.extend(names)
                elif names:
                    parent = names[0]
            elif child.type == "class_interface_clause" and kind == "class":
                interfaces.extend(self._name_list(child))

        constants: list[ConstantSignature] = []
        properties: list[PropertySignature] = []
        methods: list[MethodSignature] = []
        traits: list[str] = []
        body = node.child_by_field_name("body")
        for member in body.named_children if body is not None else ():
            if member.type == "const_declaration":
                constants.extend(self._parse_constants(member))
            elif member.type == "property_declaration":
                properties.extend(self._parse_properties(member))
            elif member.type == "method_declaration":
                methods.append(self._parse_method(member, kind))
            elif member.type == "use_declaration":
                traits.extend(self._name_list(member))

        for method in methods:
            if method.name.lower() == "__construct":
                properties.extend(_promoted_properties(method))

        return TypeSignature(
            name=self._qualify(_text(node.child_by_field_name("name"))),
            kind=kind,
            parent=parent,
            interfaces=tuple(interfaces),
            traits=tuple(traits),
            final="final" in modifiers,
            abstract="abstract" in modifiers,
            doc_comment=_doc_comment(node),
            constants=tuple(constants),
            properties=tuple(properties),
            methods=tuple(methods),
            file=self.file,
        )

    def _parse_constants(self, node: Node) -> list[ConstantSignature]:
        modifiers = _modifiers(node)
        doc = _doc_comment(node)
        type_hint = self._type_text(node.child_by_field_name("type"))
        constants: list[ConstantSignature] = []
        for element in node.named_children:
            if element.type != "const_element":
                continue
            name = next((c for c in element.named_children if c.type == "name"), None)
            value = _initializer(element)
            constants.append(
                ConstantSignature(
                    name=_text(name),
                    value=_text(value) or None,
                    type_hint=type_hint,
                    visibility=_visibility(modifiers),
                    doc_comment=doc,
                )
            )
        return constants

    def _parse_properties(self, node: Node) -> list[PropertySignature]:
        modifiers = _modifiers(node)
        doc = _doc_comment(node)
        type_hint = self._type_text(node.child_by_field_name("type"))
        return [
            PropertySignature(
                name=_variable_name(element),
                visibility=_visibility(modifiers),
                static="static" in modifiers,
                readonly="readonly" in modifiers,
                type_hint=type_hint,
                default=_text(_initializer(element)) or None,
                doc_comment=doc,
            )
            for element in node.named_children
            if element.type == "property_element"
        ]

    def _parse_method(self, node: Node, kind: str) -> MethodSignature:
        modifiers = _modifiers(node)
        params = node.child_by_field_name("parameters")
        parameters = tuple(
            self._parse_parameter(child)
            for child in (params.named_children if params is not None else ())
            if child.type in PARAMETER_NODES
        )
        return MethodSignature(
            name=_text(node.child_by_field_name("name")),
            visibility=_visibility(modifiers),
            static="static" in modifiers,
            abstract="abstract" in modifiers or kind == "interface",
            final="final" in modifiers,
            parameters=parameters,
            return_type_hint=self._type_text(node.child_by_field_name("return_type")),
            doc_comment=_doc_comment(node),
        )

    def _parse_parameter(self, node: Node) -> ParameterSignature:
        modifiers = _modifiers(node)
        variadic = node.type == "variadic_parameter"
        default = _text(_initializer(node)) or None
        by_reference = any(
            child.type in ("reference_modifier", "by_ref") for child in node.children
        )
        promoted = None
        if node.type == "property_promotion_parameter":
            promoted = _visibility(modifiers)
        return ParameterSignature(
            name=_variable_name(node),
            type_hint=self._type_text(node.child_by_field_name("type")),
            default=default,
            optional=default is not None or variadic,
            variadic=variadic,
            by_reference=by_reference,
            promoted_visibility=promoted,
            promoted_readonly="readonly" in modifiers,
        )


def _promoted_properties(constructor: MethodSignature) -> list[PropertySignature]:
    return [
        PropertySignature(
            name=p.name,
            visibility=p.promoted_visibility,
            readonly=p.promoted_readonly,
            type_hint=p.type_hint,
            default=p.default,
        )
        for p in constructor.parameters
        if p.promoted_visibility
    ]
