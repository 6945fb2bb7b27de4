"""Canonicalization of PHP type expressions."""

LEGACY_ALIASES = {
    "integer": "int",
    "boolean": "bool",
}

ARRAY_SUFFIX = "[]"


def normalize_type(expr: str | None) -> str | None:
    """Return the canonical form of a (possibly union) type expression.

    ``?Foo`` becomes ``Foo|null``, leading namespace separators are dropped and
    legacy aliases are mapped. Empty alternatives disappear; when nothing is
    left the result is ``None``.
    """
    if expr is None:
        return None

    alternatives: list[str] = []
    nullable = False
    for part in expr.split("|"):
        part = part.strip()
        if part.startswith("?"):
            part = part[1:].strip()
            nullable = True
        part = part.lstrip("\\")
        part = LEGACY_ALIASES.get(part, part)
        if part:
            alternatives.append(part)

    if nullable:
        alternatives = [a for a in alternatives if a.lower() != "null"]
        alternatives.append("null")

    if not alternatives:
        return None
    return "|".join(alternatives)


def split_array_suffix(name: str) -> tuple[str, str]:
    """Split ``Foo[]`` into ``("Foo", "[]")``; nested suffixes are kept together."""
    base = name
    suffix = ""
    while base.endswith(ARRAY_SUFFIX):
        base = base[: -len(ARRAY_SUFFIX)]
        suffix += ARRAY_SUFFIX
    return base, suffix
