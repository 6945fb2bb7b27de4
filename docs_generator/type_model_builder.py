"""Merging of structural signatures and doc comments into type descriptors.

The builder asks a :class:`TypeIntrospector` for the signature of a type,
parses every doc comment attached to it and folds in the members of used
traits, the parent chain and implemented interfaces. Each descriptor is
built once per run and kept in a :class:`TypeModelCache`.
"""

import logging
import re
from collections.abc import Iterable
from dataclasses import replace

from docs_generator.doc_comment import DocCommentBlock, ParamTag, parse_doc_comment
from docs_generator.models import (
    ConstantDescriptor,
    EventDescriptor,
    ExampleRef,
    Member,
    MethodDescriptor,
    ParameterDescriptor,
    PropertyDescriptor,
    ReturnDescriptor,
    SeeRef,
    TypeDescriptor,
)
from docs_generator.normalize_type import normalize_type
from docs_generator.signature import (
    PRIVATE,
    PUBLIC,
    ConstantSignature,
    MethodSignature,
    PropertySignature,
    TypeIntrospector,
    TypeSignature,
)

logger = logging.getLogger(__name__)

# Methods mandated by a capability interface are not repeated on implementors.
CAPABILITY_METHODS: dict[str, frozenset[str]] = {
    "arrayaccess": frozenset(
        {"offsetGet", "offsetExists", "offsetSet", "offsetUnset"}
    ),
    "iterator": frozenset({"current", "next", "key", "valid", "rewind"}),
}

INT_LITERAL_RE = re.compile(r"^[+-]?(?:0[xX][0-9a-fA-F_]+|0[bB][01_]+|\d[\d_]*)$")
FLOAT_LITERAL_RE = re.compile(
    r"^[+-]?(?:\d[\d_]*\.\d*|\.\d+|\d[\d_]*(?=[eE]))(?:[eE][+-]?\d+)?$"
)


def literal_type(literal: str | None) -> str | None:
    """Infer the type of a default value from its literal text."""
    if literal is None:
        return None
    text = literal.strip()
    lower = text.lower()
    if not text or lower == "null":
        return None
    if text[0] in "'\"" or text.startswith("<<<"):
        return "string"
    if lower in ("true", "false"):
        return "bool"
    if text.startswith("[") or lower.startswith("array("):
        return "array"
    if INT_LITERAL_RE.match(text):
        return "int"
    if FLOAT_LITERAL_RE.match(text):
        return "float"
    return None


def _first_type(*candidates: str | None) -> str | None:
    for candidate in candidates:
        normalized = normalize_type(candidate)
        if normalized:
            return normalized
    return None


class TypeModelCache:
    """Per-run memo of built descriptors, keyed by lowercase type name.

    A ``None`` entry records that the name is unknown.
    """

    def __init__(self) -> None:
        """Initialize an empty cache."""
        self._entries: dict[str, TypeDescriptor | None] = {}

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._entries

    def get(self, name: str) -> TypeDescriptor | None:
        return self._entries.get(name.lower())

    def put(self, name: str, descriptor: TypeDescriptor | None) -> None:
        self._entries[name.lower()] = descriptor


class TypeModelBuilder:
    """Builds and memoizes :class:`TypeDescriptor` records."""

    def __init__(
        self, introspector: TypeIntrospector, cache: TypeModelCache | None = None
    ) -> None:
        """Initialize the builder; a fresh cache is created unless one is given."""
        self.introspector = introspector
        self.cache = cache if cache is not None else TypeModelCache()
        self._in_progress: set[str] = set()

    def build(self, name: str) -> TypeDescriptor | None:
        """Return the descriptor of ``name``, or ``None`` when it is unknown."""
        key = name.lstrip("\\")
        if key in self.cache:
            return self.cache.get(key)

        sig = self.introspector.introspect(key)
        if sig is None:
            logger.debug("Unknown type: %s", key)
            self.cache.put(key, None)
            return None

        self._in_progress.add(key.lower())
        try:
            descriptor = self._assemble(sig)
        finally:
            self._in_progress.discard(key.lower())
        self.cache.put(key, descriptor)
        return descriptor

    def _build_related(
        self, owner: str, name: str, relation: str
    ) -> TypeDescriptor | None:
        """Build a parent, interface or trait of ``owner``, guarding against cycles."""
        if name.lstrip("\\").lower() in self._in_progress:
            logger.warning("Inheritance cycle: %s %s %s", owner, relation, name)
            return None
        related = self.build(name)
        if related is None:
            logger.warning("%s %s unknown type %s", owner, relation, name)
        return related

    # -----------------------------
    # Assembly
    # -----------------------------

    def _assemble(self, sig: TypeSignature) -> TypeDescriptor:
        doc = parse_doc_comment(sig.doc_comment)

        parent = (
            self._build_related(sig.name, sig.parent, "extends") if sig.parent else None
        )
        interfaces = {
            name: self._build_related(sig.name, name, "implements")
            for name in sig.interfaces
        }
        traits = [
            t
            for t in (
                self._build_related(sig.name, name, "uses") for name in sig.traits
            )
            if t is not None
        ]

        all_interfaces = _unique_names(
            _interface_closure(sig.interfaces, interfaces, parent)
        )
        skipped = _skipped_methods(all_interfaces)

        constants = [_constant(sig.name, c) for c in sig.constants]
        constants = _merge_traits(sig.name, constants, (t.constants for t in traits))

        properties = self._own_properties(sig, doc)
        properties = _merge_traits(
            sig.name,
            properties,
            ([p for p in t.properties if not p.virtual] for t in traits),
        )

        methods = [_method(sig.name, m) for m in sig.methods]
        methods = _merge_traits(sig.name, methods, (t.methods for t in traits))

        inherited_from = [parent, *interfaces.values()]
        for related in inherited_from:
            if related is None:
                continue
            constants += _inheritable(related.constants)
            properties += [p for p in _inheritable(related.properties) if not p.virtual]
            methods += _inheritable(related.methods)

        methods = [m for m in methods if m.name not in skipped]

        return TypeDescriptor(
            name=sig.name,
            kind=sig.kind,
            parent=sig.parent,
            interfaces=tuple(all_interfaces),
            final=sig.final,
            abstract=sig.abstract,
            internal=doc.internal,
            description=doc.description,
            constants=_sorted_unique(constants),
            properties=_sorted_unique(properties),
            methods=_sorted_unique(methods),
            events=tuple(
                sorted(
                    (
                        EventDescriptor(
                            name=e.name, type=e.type, description=e.description
                        )
                        for e in doc.events
                        if e.name
                    ),
                    key=lambda e: e.name,
                )
            ),
            examples=_examples(doc),
            see=_see(doc),
            file=sig.file,
            extension=sig.extension,
        )

    def _own_properties(
        self, sig: TypeSignature, doc: DocCommentBlock
    ) -> list[PropertyDescriptor]:
        promoted_tags: dict[str, ParamTag] = {}
        for m in sig.methods:
            if m.name.lower() == "__construct":
                tags = {t.name: t for t in parse_doc_comment(m.doc_comment).params}
                promoted_tags = {
                    p.name: tags[p.name]
                    for p in m.parameters
                    if p.promoted_visibility and p.name in tags
                }

        properties = [
            _property(sig.name, p, promoted_tags.get(p.name)) for p in sig.properties
        ]
        declared = {p.name for p in properties}
        for tag in doc.properties:
            if not tag.name or tag.name in declared:
                continue
            declared.add(tag.name)
            properties.append(
                PropertyDescriptor(
                    name=tag.name,
                    originating_type=sig.name,
                    visibility=PUBLIC,
                    readonly=tag.readonly,
                    virtual=True,
                    type=tag.type,
                    description=tag.description,
                )
            )
        return properties


# -----------------------------
# Members
# -----------------------------


def _constant(owner: str, sig: ConstantSignature) -> ConstantDescriptor:
    doc = parse_doc_comment(sig.doc_comment)
    return ConstantDescriptor(
        name=sig.name,
        originating_type=owner,
        visibility=sig.visibility,
        type=_first_type(doc.var_type, sig.type_hint, literal_type(sig.value)),
        value=sig.value,
        description=doc.description,
        internal=doc.internal,
    )


def _property(
    owner: str, sig: PropertySignature, promoted_tag: ParamTag | None
) -> PropertyDescriptor:
    doc = parse_doc_comment(sig.doc_comment)
    comment_type = doc.var_type
    description = doc.description
    if promoted_tag is not None:
        comment_type = comment_type or promoted_tag.type
        description = description or promoted_tag.description
    return PropertyDescriptor(
        name=sig.name,
        originating_type=owner,
        visibility=sig.visibility,
        static=sig.static,
        readonly=sig.readonly,
        type=_first_type(comment_type, sig.type_hint, literal_type(sig.default)),
        default=sig.default,
        description=description,
        internal=doc.internal,
    )


def _method(owner: str, sig: MethodSignature) -> MethodDescriptor:
    doc = parse_doc_comment(sig.doc_comment)
    tags = {t.name: t for t in doc.params}

    parameters = []
    for p in sig.parameters:
        tag = tags.get(p.name)
        parameters.append(
            ParameterDescriptor(
                name=p.name,
                type=_first_type(
                    tag.type if tag else None, p.type_hint, literal_type(p.default)
                ),
                default=p.default,
                optional=p.optional,
                variadic=p.variadic,
                by_reference=p.by_reference,
                description=tag.description if tag else "",
            )
        )

    return_tag = doc.return_tag
    return MethodDescriptor(
        name=sig.name,
        originating_type=owner,
        visibility=sig.visibility,
        static=sig.static,
        abstract=sig.abstract,
        final=sig.final,
        parameters=tuple(parameters),
        returns=ReturnDescriptor(
            type=_first_type(
                return_tag.type if return_tag else None, sig.return_type_hint
            ),
            description=return_tag.description if return_tag else "",
        ),
        throws=tuple(doc.throws),
        examples=_examples(doc),
        see=_see(doc),
        description=doc.description,
        internal=doc.internal,
    )


def _examples(doc: DocCommentBlock) -> tuple[ExampleRef, ...]:
    return tuple(
        ExampleRef(location=e.location, description=e.description)
        for e in doc.examples
        if e.location
    )


def _see(doc: DocCommentBlock) -> tuple[SeeRef, ...]:
    return tuple(
        SeeRef(location=s.location, description=s.description)
        for s in doc.see
        if s.location
    )


def _merge_traits(
    owner: str, own: list[Member], trait_members: Iterable[Iterable[Member]]
) -> list[Member]:
    """Add trait members as members of ``owner``; own members win on a clash."""
    merged = list(own)
    names = {m.name.lower() for m in merged}
    for members in trait_members:
        for m in members:
            if m.name.lower() in names:
                continue
            names.add(m.name.lower())
            merged.append(replace(m, originating_type=owner))
    return merged


def _inheritable(members: Iterable[Member]) -> list[Member]:
    return [m for m in members if m.visibility != PRIVATE]


def _sorted_unique(members: list[Member]) -> tuple[Member, ...]:
    """Drop repeats of one (originating type, name) pair, then sort by name.

    A member reached through several inheritance paths appears once; the
    sort is stable so the closest declaration stays first among equal names.
    """
    seen: set[tuple[str, str]] = set()
    unique = []
    for m in members:
        key = (m.originating_type.lower(), m.name.lower())
        if key in seen:
            continue
        seen.add(key)
        unique.append(m)
    return tuple(sorted(unique, key=lambda m: m.name))


# -----------------------------
# Interfaces
# -----------------------------


def _interface_closure(
    declared: Iterable[str],
    interfaces: dict[str, TypeDescriptor | None],
    parent: TypeDescriptor | None,
) -> list[str]:
    names: list[str] = []
    for name in declared:
        names.append(name)
        related = interfaces.get(name)
        if related is not None:
            names.extend(related.interfaces)
    if parent is not None:
        names.extend(parent.interfaces)
    return names


def _unique_names(names: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result = []
    for name in names:
        name = name.lstrip("\\")
        if name.lower() in seen:
            continue
        seen.add(name.lower())
        result.append(name)
    return result


def _skipped_methods(interfaces: Iterable[str]) -> frozenset[str]:
    skipped: frozenset[str] = frozenset()
    for name in interfaces:
        skipped |= CAPABILITY_METHODS.get(name.lower(), frozenset())
    return skipped
