"""Signatures of PHP runtime types, loaded from a bundled YAML catalog."""

from pathlib import Path
from typing import Any

import yaml

from docs_generator.signature import (
    PUBLIC,
    MethodSignature,
    ParameterSignature,
    PropertySignature,
    TypeSignature,
)

CATALOG_PATH = Path(__file__).with_name("builtin_types.yml")


class BuiltinCatalog:
    """Introspects runtime types (SPL interfaces, exceptions, date classes...)."""

    def __init__(self, signatures: dict[str, TypeSignature]) -> None:
        """Initialize the catalog from signatures keyed by type name."""
        self._by_name = {name.lower(): sig for name, sig in signatures.items()}

    @classmethod
    def load(cls, path: Path = CATALOG_PATH) -> "BuiltinCatalog":
        """Load a catalog file."""
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        return cls({name: signature_from_entry(name, e) for name, e in data.items()})

    def introspect(self, name: str) -> TypeSignature | None:
        """Return the signature of a runtime type, if known."""
        return self._by_name.get(name.lstrip("\\").lower())


def signature_from_entry(name: str, entry: dict[str, Any]) -> TypeSignature:
    """Build a signature from one catalog entry."""
    kind = str(entry.get("kind") or "class")
    description = str(entry.get("description") or "")
    return TypeSignature(
        name=name,
        kind=kind,
        parent=entry.get("parent"),
        interfaces=tuple(entry.get("interfaces") or ()),
        final=bool(entry.get("final")),
        abstract=bool(entry.get("abstract")),
        doc_comment=f"/** {description} */" if description else None,
        properties=tuple(
            PropertySignature(
                name=str(p["name"]),
                visibility=str(p.get("visibility") or PUBLIC),
                static=bool(p.get("static")),
                type_hint=p.get("type"),
            )
            for p in entry.get("properties") or ()
        ),
        methods=tuple(
            _method_from_entry(m, kind) for m in entry.get("methods") or ()
        ),
        extension=str(entry.get("extension") or "Core"),
    )


def _method_from_entry(entry: dict[str, Any], kind: str) -> MethodSignature:
    parameters = []
    for p in entry.get("params") or ():
        default = p.get("default")
        parameters.append(
            ParameterSignature(
                name=str(p["name"]),
                type_hint=p.get("type"),
                default=str(default) if default is not None else None,
                optional=default is not None,
            )
        )
    return MethodSignature(
        name=str(entry["name"]),
        visibility=str(entry.get("visibility") or PUBLIC),
        static=bool(entry.get("static")),
        abstract=bool(entry.get("abstract")) or kind == "interface",
        final=bool(entry.get("final")),
        parameters=tuple(parameters),
        return_type_hint=entry.get("return"),
    )
