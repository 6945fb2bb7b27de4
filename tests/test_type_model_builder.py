"""Tests for building type descriptors from signatures and doc comments."""

import logging
from unittest.mock import MagicMock

import pytest

from docs_generator.php_scanner import scan_php_source
from docs_generator.signature import TypeSignature
from docs_generator.type_model_builder import (
    TypeModelBuilder,
    TypeModelCache,
    literal_type,
)


def _introspector(source: str) -> MagicMock:
    index = {sig.name.lower(): sig for sig in scan_php_source(source)}
    introspector = MagicMock()
    introspector.introspect.side_effect = lambda name: index.get(name.lower())
    return introspector


def _builder(source: str) -> TypeModelBuilder:
    return TypeModelBuilder(_introspector(source))


HIERARCHY = """<?php
namespace App;

interface Shape
{
    /** Area of the shape. */
    public function area(): float;
}

trait Named
{
    protected $label = 'unnamed';

    /** Returns the label. */
    public function label(): string {}
}

/**
 * Base of all shapes.
 * @property-read int $corners Number of corners
 */
abstract class Base implements Shape
{
    const SIDES = 0;
    private const SECRET = 'x';

    public function describe() {}
    private function hidden() {}
}

/**
 * A square.
 * @event App\\Resized resized Fired after resizing
 * @see Base
 */
final class Square extends Base
{
    use Named;

    /** Edge length. @var float */
    public $edge = 1.0;

    /**
     * Creates a square.
     * @param float $edge The edge length
     */
    public function __construct(private int $id, $edge = 2) {}

    public function area(): float {}
}
"""


def test_literal_type() -> None:
    """Verify type inference from default literals."""
    assert literal_type("'a'") == "string"
    assert literal_type('"b"') == "string"
    assert literal_type("TRUE") == "bool"
    assert literal_type("[1, 2]") == "array"
    assert literal_type("array()") == "array"
    assert literal_type("-42") == "int"
    assert literal_type("0x1F") == "int"
    assert literal_type("1.5") == "float"
    assert literal_type("1e3") == "float"
    assert literal_type("null") is None
    assert literal_type("SOME_CONST") is None
    assert literal_type(None) is None


def test_own_and_inherited_members() -> None:
    """Verify members are merged from parent, interfaces and traits."""
    square = _builder(HIERARCHY).build("App\\Square")
    assert square is not None
    assert square.description == "A square."
    assert square.interfaces == ("App\\Shape",)

    methods = [(m.originating_type, m.name) for m in square.methods]
    assert methods == [
        ("App\\Square", "__construct"),
        ("App\\Square", "area"),
        ("App\\Shape", "area"),
        ("App\\Base", "describe"),
        ("App\\Square", "label"),
    ]
    assert [m.name for m in square.effective_methods()] == [
        "__construct",
        "area",
        "describe",
        "label",
    ]

    constants = [(c.originating_type, c.name) for c in square.constants]
    assert constants == [("App\\Base", "SIDES")]


def test_trait_members_are_reattributed() -> None:
    """Verify trait members become members of the using class."""
    square = _builder(HIERARCHY).build("App\\Square")
    assert square is not None
    label = square.find_method("LABEL")
    assert label is not None
    assert label.originating_type == "App\\Square"
    assert label.description == "Returns the label."
    prop = square.find_property("label")
    assert prop is not None
    assert prop.originating_type == "App\\Square"
    assert prop.type == "string"


def test_virtual_properties_are_not_inherited() -> None:
    """Verify @property tags describe only the declaring type."""
    builder = _builder(HIERARCHY)
    base = builder.build("App\\Base")
    square = builder.build("App\\Square")
    assert base is not None and square is not None
    corners = base.find_property("corners")
    assert corners is not None
    assert corners.virtual and corners.readonly
    assert corners.type == "int"
    assert square.find_property("corners") is None


def test_property_types_and_promotion() -> None:
    """Verify the type priority and promoted constructor parameters."""
    square = _builder(HIERARCHY).build("App\\Square")
    assert square is not None
    edge = square.find_property("edge")
    assert edge is not None
    assert edge.type == "float"
    assert edge.description == "Edge length."
    promoted = square.find_property("id")
    assert promoted is not None
    assert promoted.visibility == "private"
    assert promoted.type == "int"


def test_parameters_match_tags_by_name() -> None:
    """Verify @param tags attach to parameters by name."""
    square = _builder(HIERARCHY).build("App\\Square")
    assert square is not None
    ctor = square.find_method("__construct")
    assert ctor is not None
    id_param, edge_param = ctor.parameters
    assert (id_param.type, id_param.description) == ("int", "")
    assert (edge_param.type, edge_param.description) == ("float", "The edge length")
    assert edge_param.default == "2"
    assert edge_param.optional is True


def test_events_and_see() -> None:
    """Verify type-level tags are collected."""
    square = _builder(HIERARCHY).build("App\\Square")
    assert square is not None
    (event,) = square.events
    assert (event.name, event.type) == ("resized", "App\\Resized")
    assert square.see[0].location == "Base"


def test_capability_methods_are_skipped() -> None:
    """Verify methods mandated by ArrayAccess are not listed on implementors."""
    source = """<?php
    class Bag implements ArrayAccess
    {
        public function offsetGet($o) {}
        public function offsetSet($o, $v) {}
        public function offsetExists($o) {}
        public function offsetUnset($o) {}
        public function size(): int {}
    }
    interface ArrayAccess {}
    """
    bag = _builder(source).build("Bag")
    assert bag is not None
    assert [m.name for m in bag.methods] == ["size"]


def test_build_is_cached() -> None:
    """Verify each type is introspected once, unknown names included."""
    introspector = _introspector(HIERARCHY)
    cache = TypeModelCache()
    builder = TypeModelBuilder(introspector, cache)
    first = builder.build("App\\Square")
    assert builder.build("\\app\\square") is first
    assert builder.build("Missing") is None
    assert builder.build("Missing") is None
    assert "missing" in cache
    names = [c.args[0] for c in introspector.introspect.call_args_list]
    assert names.count("Missing") == 1
    assert names.count("App\\Square") == 1


def test_unknown_parent_and_cycles_degrade(caplog: pytest.LogCaptureFixture) -> None:
    """Verify broken hierarchies log a warning instead of failing."""
    sigs = {
        "a": TypeSignature(name="A", parent="B"),
        "b": TypeSignature(name="B", parent="A"),
        "c": TypeSignature(name="C", parent="Nowhere"),
    }
    introspector = MagicMock()
    introspector.introspect.side_effect = lambda name: sigs.get(name.lower())
    builder = TypeModelBuilder(introspector)

    with caplog.at_level(logging.WARNING):
        a = builder.build("A")
        c = builder.build("C")

    assert a is not None and a.parent == "B"
    assert c is not None and c.parent == "Nowhere"
    assert "Inheritance cycle" in caplog.text
    assert "unknown type Nowhere" in caplog.text
