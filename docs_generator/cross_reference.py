"""Resolution of referenced type and member names to link targets.

A reference resolves to one of four kinds:

* ``BUILTIN``: a scalar or pseudo type, shown as plain text.
* ``EXTERNAL``: a runtime type provided by a PHP extension, linked to the
  PHP manual through URL templates.
* ``LOCAL``: a type declared under a source root, linked to its page.
* ``UNRESOLVED``: unknown, internal or library types, shown as plain text.

Results are memoized for the lifetime of the resolver, which lives for one
generation run.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from docs_generator.models import SeeRef, TypeDescriptor
from docs_generator.normalize_type import split_array_suffix
from docs_generator.page_names import (
    class_output_filename,
    has_method_page,
    method_output_filename,
)
from docs_generator.type_model_builder import TypeModelBuilder

logger = logging.getLogger(__name__)

BUILTIN_TYPES = frozenset(
    {
        "void",
        "string",
        "int",
        "bool",
        "array",
        "float",
        "mixed",
        "null",
        "callable",
        "iterable",
        "object",
        "false",
        "true",
        "never",
        "resource",
        "self",
        "static",
        "parent",
        "double",
        "scalar",
    }
)

SEE_METHOD_CALL_RE = re.compile(r"^(.*?)::(.*?)\(\)$")
SEE_PROPERTY_RE = re.compile(r"^(.*?)::\$(.*?)$")
SEE_MEMBER_RE = re.compile(r"^(.*?)::(.*?)$")


class ResolutionKind(Enum):
    BUILTIN = "builtin"
    EXTERNAL = "external"
    LOCAL = "local"
    UNRESOLVED = "unresolved"


@dataclass(frozen=True)
class Resolution:
    """The outcome of resolving one reference.

    ``text`` is the display text; ``target`` is a URL or page file name and
    is only set for external and local resolutions.
    """

    kind: ResolutionKind
    text: str
    target: str | None = None
    description: str = ""

    @property
    def linked(self) -> bool:
        return self.target is not None


@dataclass(frozen=True)
class ExternalLinks:
    """URL templates for runtime types; ``{type}`` and ``{member}`` are lowercase."""

    class_url: str = "http://php.net/manual/en/class.{type}.php"
    method_url: str = "http://php.net/manual/en/{type}.{member}.php"
    property_url: str = (
        "http://php.net/manual/en/class.{type}.php#{type}.props.{member}"
    )

    def for_class(self, type_name: str) -> str:
        return self.class_url.format(type=type_name.lower(), member="")

    def for_method(self, type_name: str, method_name: str) -> str:
        return self.method_url.format(
            type=type_name.lower(), member=method_name.lstrip("_").lower()
        )

    def for_property(self, type_name: str, property_name: str) -> str:
        return self.property_url.format(
            type=type_name.lower(), member=property_name.lower()
        )


class CrossReferenceResolver:
    """Maps referenced names to built-in, external, local or unresolved."""

    def __init__(
        self,
        builder: TypeModelBuilder,
        source_roots: list[Path],
        ext: str,
        *,
        external_links: ExternalLinks | None = None,
        show_private: bool = False,
        show_protected: bool = False,
    ) -> None:
        """Initialize the resolver for one run and one output format."""
        self.builder = builder
        self.source_roots = [Path(r).resolve() for r in source_roots]
        self.ext = ext
        self.external_links = external_links or ExternalLinks()
        self.show_private = show_private
        self.show_protected = show_protected
        self._memo: dict[tuple[str, ...], Resolution] = {}

    # -----------------------------
    # Classification
    # -----------------------------

    def is_local(self, descriptor: TypeDescriptor) -> bool:
        """Return True for types declared under one of the source roots."""
        if descriptor.extension or descriptor.file is None:
            return False
        path = descriptor.file.resolve()
        return any(path.is_relative_to(root) for root in self.source_roots)

    def _linkable(self, name: str) -> tuple[TypeDescriptor | None, ResolutionKind]:
        """Look up a type and classify it for linking."""
        descriptor = self.builder.build(name)
        if descriptor is None:
            return None, ResolutionKind.UNRESOLVED
        if descriptor.extension:
            return descriptor, ResolutionKind.EXTERNAL
        if descriptor.internal or not self.is_local(descriptor):
            return descriptor, ResolutionKind.UNRESOLVED
        return descriptor, ResolutionKind.LOCAL

    def _method_has_page(self, descriptor: TypeDescriptor, method_name: str) -> bool:
        method = descriptor.find_method(method_name)
        return method is not None and has_method_page(
            descriptor,
            method,
            show_private=self.show_private,
            show_protected=self.show_protected,
        )

    # -----------------------------
    # Types and members
    # -----------------------------

    def resolve_type(self, name: str) -> Resolution:
        """Resolve one type name as it appears in a type expression."""
        key = ("type", name)
        if key not in self._memo:
            self._memo[key] = self._resolve_type(name)
        return self._memo[key]

    def _resolve_type(self, name: str) -> Resolution:
        base, _ = split_array_suffix(name)
        lookup = base.lstrip("\\")
        if lookup.lower() in BUILTIN_TYPES:
            return Resolution(ResolutionKind.BUILTIN, name)
        if not lookup:
            return Resolution(ResolutionKind.UNRESOLVED, name)

        descriptor, kind = self._linkable(lookup)
        if descriptor is None or kind is ResolutionKind.UNRESOLVED:
            logger.debug("Unresolved type reference: %s", name)
            return Resolution(ResolutionKind.UNRESOLVED, name)
        if kind is ResolutionKind.EXTERNAL:
            url = self.external_links.for_class(descriptor.name)
            return Resolution(kind, name, url)
        return Resolution(kind, name, class_output_filename(descriptor.name, self.ext))

    def resolve_method(self, type_name: str, method_name: str) -> Resolution:
        """Resolve a method of a type, as linked from a method synopsis."""
        key = ("method", type_name, method_name)
        if key not in self._memo:
            self._memo[key] = self._resolve_method(type_name, method_name)
        return self._memo[key]

    def _resolve_method(self, type_name: str, method_name: str) -> Resolution:
        descriptor, kind = self._linkable(type_name)
        if descriptor is None or kind is ResolutionKind.UNRESOLVED:
            logger.debug("Unresolved method reference: %s::%s", type_name, method_name)
            return Resolution(ResolutionKind.UNRESOLVED, method_name)
        if kind is ResolutionKind.EXTERNAL:
            url = self.external_links.for_method(descriptor.name, method_name)
            return Resolution(kind, method_name, url)
        if not self._method_has_page(descriptor, method_name):
            return Resolution(ResolutionKind.UNRESOLVED, method_name)
        target = method_output_filename(descriptor.name, method_name, self.ext)
        return Resolution(kind, method_name, target)

    # -----------------------------
    # @see references
    # -----------------------------

    def resolve_see(self, see: SeeRef) -> Resolution:
        """Resolve an ``@see`` reference.

        The reference is matched as ``Type::method()``, then ``Type::$property``,
        then ``Type::member`` (taken as a method), then a bare type name.
        """
        key = ("see", see.location, see.description)
        if key not in self._memo:
            self._memo[key] = self._resolve_see(see)
        return self._memo[key]

    def _resolve_see(self, see: SeeRef) -> Resolution:
        location = see.location
        method_name: str | None = None
        property_name: str | None = None
        if m := SEE_METHOD_CALL_RE.match(location):
            type_name, method_name = m.group(1), m.group(2)
        elif m := SEE_PROPERTY_RE.match(location):
            type_name, property_name = m.group(1), m.group(2)
        elif m := SEE_MEMBER_RE.match(location):
            type_name, method_name = m.group(1), m.group(2)
        else:
            type_name = location

        unresolved = Resolution(
            ResolutionKind.UNRESOLVED, location, description=see.description
        )
        descriptor, kind = self._linkable(type_name)
        if descriptor is None or kind is ResolutionKind.UNRESOLVED:
            logger.debug("Unresolved @see reference: %s", location)
            return unresolved

        if method_name is not None:
            return self._see_method(descriptor, kind, method_name, see) or unresolved
        if property_name is not None:
            resolved = self._see_property(descriptor, kind, property_name, see)
            return resolved or unresolved

        if kind is ResolutionKind.EXTERNAL:
            target = self.external_links.for_class(descriptor.name)
        else:
            target = class_output_filename(descriptor.name, self.ext)
        return Resolution(
            kind,
            descriptor.name,
            target,
            see.description or descriptor.description,
        )

    def _see_method(
        self,
        descriptor: TypeDescriptor,
        kind: ResolutionKind,
        method_name: str,
        see: SeeRef,
    ) -> Resolution | None:
        method = descriptor.find_method(method_name)
        if method is None or method.internal:
            logger.debug("Unresolved @see method: %s", see.location)
            return None
        if kind is ResolutionKind.EXTERNAL:
            target = self.external_links.for_method(descriptor.name, method.name)
        elif self._method_has_page(descriptor, method.name):
            target = method_output_filename(descriptor.name, method.name, self.ext)
        else:
            target = class_output_filename(descriptor.name, self.ext)
        return Resolution(
            kind,
            f"{descriptor.name}::{method.name}()",
            target,
            see.description or method.description,
        )

    def _see_property(
        self,
        descriptor: TypeDescriptor,
        kind: ResolutionKind,
        property_name: str,
        see: SeeRef,
    ) -> Resolution | None:
        prop = descriptor.find_property(property_name)
        if prop is None or prop.internal:
            logger.debug("Unresolved @see property: %s", see.location)
            return None
        if kind is ResolutionKind.EXTERNAL:
            target = self.external_links.for_property(descriptor.name, prop.name)
        else:
            target = class_output_filename(descriptor.name, self.ext)
        return Resolution(
            kind,
            f"{descriptor.name}::${prop.name}",
            target,
            see.description or prop.description,
        )
