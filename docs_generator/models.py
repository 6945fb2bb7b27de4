"""Immutable documentation model of PHP types and their members."""

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar

from docs_generator.signature import PRIVATE, PROTECTED

CONSTRUCTOR_NAME = "__construct"
DESTRUCTOR_NAME = "__destruct"
MAGIC_PREFIX = "__"


@dataclass(frozen=True)
class ParameterDescriptor:
    """A method parameter."""

    name: str
    type: str | None = None
    default: str | None = None  # raw literal text
    optional: bool = False
    variadic: bool = False
    by_reference: bool = False
    description: str = ""


@dataclass(frozen=True)
class ReturnDescriptor:
    """The documented return value of a method."""

    type: str | None = None
    description: str = ""


@dataclass(frozen=True)
class ExampleRef:
    """An ``@example`` reference, resolved against example roots when rendered."""

    location: str
    description: str = ""


@dataclass(frozen=True)
class SeeRef:
    """An ``@see`` reference as written, with an optional description override."""

    location: str
    description: str = ""


@dataclass(frozen=True)
class ConstantDescriptor:
    """A class constant."""

    name: str
    originating_type: str
    visibility: str = "public"
    type: str | None = None
    value: str | None = None
    description: str = ""
    internal: bool = False


@dataclass(frozen=True)
class PropertyDescriptor:
    """A declared or comment-only property."""

    name: str
    originating_type: str
    visibility: str = "public"
    static: bool = False
    readonly: bool = False
    virtual: bool = False
    type: str | None = None
    default: str | None = None
    description: str = ""
    internal: bool = False


@dataclass(frozen=True)
class MethodDescriptor:
    """A method with its parameters and documentation."""

    name: str
    originating_type: str
    visibility: str = "public"
    static: bool = False
    abstract: bool = False
    final: bool = False
    parameters: tuple[ParameterDescriptor, ...] = ()
    returns: ReturnDescriptor = ReturnDescriptor()
    throws: tuple[str, ...] = ()
    examples: tuple[ExampleRef, ...] = ()
    see: tuple[SeeRef, ...] = ()
    description: str = ""
    internal: bool = False

    @property
    def is_constructor(self) -> bool:
        return self.name.lower() == CONSTRUCTOR_NAME

    @property
    def is_destructor(self) -> bool:
        return self.name.lower() == DESTRUCTOR_NAME


@dataclass(frozen=True)
class EventDescriptor:
    """An event announced with an ``@event`` tag."""

    name: str
    type: str | None = None
    description: str = ""


Member = TypeVar("Member", ConstantDescriptor, PropertyDescriptor, MethodDescriptor)


def effective_members(members: Iterable[Member]) -> list[Member]:
    """Keep the first member per (case-insensitive) name.

    Member tuples are ordered closest declaration first, so this is the view
    a caller of the concrete type sees.
    """
    seen: set[str] = set()
    result = []
    for m in members:
        key = m.name.lower()
        if key in seen:
            continue
        seen.add(key)
        result.append(m)
    return result


@dataclass(frozen=True)
class TypeDescriptor:
    """Everything known about one class, interface or trait.

    Member tuples hold own members (including trait and comment-only ones)
    and inherited members, each tagged with its originating type and sorted
    by name. Use the ``effective_*`` helpers to drop overridden members.
    """

    name: str
    kind: str = "class"
    parent: str | None = None
    interfaces: tuple[str, ...] = ()
    final: bool = False
    abstract: bool = False
    internal: bool = False
    description: str = ""
    constants: tuple[ConstantDescriptor, ...] = ()
    properties: tuple[PropertyDescriptor, ...] = ()
    methods: tuple[MethodDescriptor, ...] = ()
    events: tuple[EventDescriptor, ...] = ()
    examples: tuple[ExampleRef, ...] = ()
    see: tuple[SeeRef, ...] = ()
    file: Path | None = None
    extension: str = ""

    def declares(
        self, member: ConstantDescriptor | PropertyDescriptor | MethodDescriptor
    ) -> bool:
        """Return True when ``member`` originates on this type."""
        return member.originating_type.lower() == self.name.lower()

    def effective_constants(self) -> list[ConstantDescriptor]:
        return effective_members(self.constants)

    def effective_properties(self) -> list[PropertyDescriptor]:
        return effective_members(self.properties)

    def effective_methods(self) -> list[MethodDescriptor]:
        return effective_members(self.methods)

    def find_method(self, name: str) -> MethodDescriptor | None:
        """Return the effective method called ``name`` (case-insensitive)."""
        lower = name.lower()
        for m in self.methods:
            if m.name.lower() == lower:
                return m
        return None

    def find_property(self, name: str) -> PropertyDescriptor | None:
        """Return the effective property called ``name`` (case-sensitive)."""
        for p in self.properties:
            if p.name == name:
                return p
        return None


def is_listed_method(method: MethodDescriptor) -> bool:
    """Magic methods other than the constructor are never listed."""
    return not method.name.startswith(MAGIC_PREFIX) or method.is_constructor


def is_visible(visibility: str, *, show_private: bool, show_protected: bool) -> bool:
    """Apply the show-private/show-protected switches to a visibility."""
    if visibility == PRIVATE:
        return show_private
    if visibility == PROTECTED:
        return show_protected
    return True
