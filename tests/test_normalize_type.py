"""Tests for type normalization."""

from docs_generator.normalize_type import normalize_type, split_array_suffix


def test_nullable_shorthand() -> None:
    """Verify ?T expands to a union with null."""
    assert normalize_type("?int") == "int|null"


def test_nullable_shorthand_equals_explicit_union() -> None:
    """Verify ?T and T|null normalize to the same string."""
    assert normalize_type("?Foo") == normalize_type("Foo|null")
    assert normalize_type("?\\Acme\\Foo") == normalize_type("\\Acme\\Foo|null")


def test_nullable_does_not_duplicate_null() -> None:
    """Verify an explicit null alternative is moved to the end once."""
    assert normalize_type("?null|string") == "string|null"


def test_leading_namespace_separator_dropped() -> None:
    """Verify fully qualified names lose their leading backslash."""
    assert normalize_type("\\Acme\\Widget|\\Countable") == "Acme\\Widget|Countable"


def test_legacy_aliases() -> None:
    """Verify legacy scalar names are mapped."""
    assert normalize_type("integer|boolean") == "int|bool"


def test_empty_alternatives_disappear() -> None:
    """Verify empty parts vanish and nothing left gives None."""
    assert normalize_type("int||string|") == "int|string"
    assert normalize_type("") is None
    assert normalize_type("  ") is None
    assert normalize_type(None) is None


def test_idempotent() -> None:
    """Verify normalizing twice changes nothing."""
    for expr in ("?\\Foo", "integer[]|null", "A&B", "string"):
        once = normalize_type(expr)
        assert normalize_type(once) == once


def test_split_array_suffix() -> None:
    """Verify array suffixes are split off the base name."""
    assert split_array_suffix("Widget[]") == ("Widget", "[]")
    assert split_array_suffix("int[][]") == ("int", "[][]")
    assert split_array_suffix("string") == ("string", "")
