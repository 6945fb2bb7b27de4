"""Tests for doc comment parsing."""

from docs_generator.doc_comment import (
    EMPTY_BLOCK,
    EventTag,
    ExampleTag,
    ParamTag,
    PropertyTag,
    ReturnTag,
    SeeTag,
    UnknownTag,
    VarTag,
    parse_doc_comment,
    parse_tag_line,
)


def test_parse_description_and_tags() -> None:
    """Verify the description stops at the first tag line."""
    block = parse_doc_comment(
        """/**
         * Returns the sum.
         *
         * Works on integers only.
         * @param int $a First operand
         * @param integer $b
         * @return int The sum
         */"""
    )
    assert block.description == "Returns the sum.\nWorks on integers only."
    assert block.params == [
        ParamTag(type="int", name="a", description="First operand"),
        ParamTag(type="int", name="b", description=""),
    ]
    assert block.return_tag == ReturnTag(type="int", description="The sum")


def test_continuation_lines_extend_previous_tag() -> None:
    """Verify lines without a tag continue the previous tag."""
    block = parse_doc_comment(
        """/**
         * @return string The name
         *   of the thing
         */"""
    )
    assert block.return_tag is not None
    assert block.return_tag.description == "The name\nof the thing"


def test_single_line_comment_with_inline_tags() -> None:
    """Verify a one-line comment is split at known tags."""
    block = parse_doc_comment("/** Greeting text. @var string */")
    assert block.description == "Greeting text."
    assert block.var_type == "string"


def test_param_without_type() -> None:
    """Verify the type may be omitted from a @param tag."""
    tag = parse_tag_line("@param $value The value")
    assert tag == ParamTag(type=None, name="value", description="The value")


def test_param_by_reference_and_variadic_names() -> None:
    """Verify reference and variadic markers are stripped from names."""
    assert parse_tag_line("@param array &$items").name == "items"
    assert parse_tag_line("@param mixed ...$args").name == "args"


def test_nullable_type_in_tag() -> None:
    """Verify tag types are normalized."""
    tag = parse_tag_line(r"@var ?\Acme\Widget")
    assert tag == VarTag(type="Acme\\Widget|null")


def test_property_tags() -> None:
    """Verify the three @property forms."""
    block = parse_doc_comment(
        """/**
         * @property int $count Number of items
         * @property-read string $name
         * @property-write bool $flag
         */"""
    )
    assert block.properties == [
        PropertyTag(type="int", name="count", description="Number of items"),
        PropertyTag(type="string", name="name", description="", readonly=True),
        PropertyTag(type="bool", name="flag", description=""),
    ]


def test_throws_are_unique_in_order() -> None:
    """Verify repeated @throws keep the first occurrence."""
    block = parse_doc_comment(
        """/**
         * @throws RuntimeException when broken
         * @throws LogicException
         * @throws RuntimeException again
         */"""
    )
    assert block.throws == ["RuntimeException", "LogicException"]


def test_example_see_event_internal() -> None:
    """Verify the location-style tags and flags."""
    block = parse_doc_comment(
        """/**
         * @example widget.php Basic use
         * @see Acme\\Widget::render() Rendering
         * @event Acme\\Event changed Fired on change
         * @internal
         */"""
    )
    assert block.examples == [
        ExampleTag(location="widget.php", description="Basic use")
    ]
    assert block.see == [
        SeeTag(location="Acme\\Widget::render()", description="Rendering")
    ]
    assert block.events == [
        EventTag(type="Acme\\Event", name="changed", description="Fired on change")
    ]
    assert block.internal is True


def test_unknown_and_malformed_tags_do_not_raise() -> None:
    """Verify unknown tags are kept and empty tags yield empty fields."""
    block = parse_doc_comment("/**\n * @author Someone\n * @param\n * @see\n */")
    assert block.tags[0] == UnknownTag(keyword="@author", value="Someone")
    assert block.params == [ParamTag(type=None, name="", description="")]
    assert block.see == [SeeTag(location="", description="")]


def test_empty_comment() -> None:
    """Verify missing comments produce the empty block."""
    assert parse_doc_comment(None) is EMPTY_BLOCK
    assert parse_doc_comment("") is EMPTY_BLOCK
    assert parse_doc_comment("/** */").description == ""
