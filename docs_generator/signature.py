"""Raw structural signatures of types, as reported by a type introspector.

These records carry what the declaration itself says (names, modifiers,
type hints, default literals, attached doc comment text). Doc comments are
not interpreted here; merging with comment data happens in the model builder.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

PUBLIC = "public"
PROTECTED = "protected"
PRIVATE = "private"


@dataclass(frozen=True)
class ParameterSignature:
    """A declared method parameter."""

    name: str
    type_hint: str | None = None
    default: str | None = None  # raw literal text
    optional: bool = False
    variadic: bool = False
    by_reference: bool = False
    promoted_visibility: str | None = None  # constructor property promotion
    promoted_readonly: bool = False


@dataclass(frozen=True)
class ConstantSignature:
    """A declared class constant."""

    name: str
    value: str | None = None  # raw literal text
    type_hint: str | None = None
    visibility: str = PUBLIC
    doc_comment: str | None = None


@dataclass(frozen=True)
class PropertySignature:
    """A declared property."""

    name: str
    visibility: str = PUBLIC
    static: bool = False
    readonly: bool = False
    type_hint: str | None = None
    default: str | None = None  # raw literal text
    doc_comment: str | None = None


@dataclass(frozen=True)
class MethodSignature:
    """A declared method."""

    name: str
    visibility: str = PUBLIC
    static: bool = False
    abstract: bool = False
    final: bool = False
    parameters: tuple[ParameterSignature, ...] = ()
    return_type_hint: str | None = None
    doc_comment: str | None = None


@dataclass(frozen=True)
class TypeSignature:
    """The structural signature of one class, interface or trait.

    ``parent`` and ``interfaces`` are the direct declarations only; the model
    builder walks them to collect inherited members. ``extension`` names the
    runtime extension that provides the type and is empty for user code.
    """

    name: str
    kind: str = "class"
    parent: str | None = None
    interfaces: tuple[str, ...] = ()
    traits: tuple[str, ...] = ()
    final: bool = False
    abstract: bool = False
    doc_comment: str | None = None
    constants: tuple[ConstantSignature, ...] = ()
    properties: tuple[PropertySignature, ...] = ()
    methods: tuple[MethodSignature, ...] = ()
    file: Path | None = None
    extension: str = ""


class TypeIntrospector(Protocol):
    """Reports the structural signature of a named type."""

    def introspect(self, name: str) -> TypeSignature | None:
        """Return the signature of ``name`` or ``None`` when it is unknown."""
        ...


class ChainIntrospector:
    """Asks each introspector in turn; the first one that knows the name wins."""

    def __init__(self, introspectors: Iterable[TypeIntrospector]) -> None:
        """Initialize the chain with introspectors in priority order."""
        self.introspectors = list(introspectors)

    def introspect(self, name: str) -> TypeSignature | None:
        """Return the first signature found for ``name``."""
        for introspector in self.introspectors:
            sig = introspector.introspect(name)
            if sig is not None:
                return sig
        return None
