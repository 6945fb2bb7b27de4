"""Tests for synopsis lines and page rendering."""

from pathlib import Path

import pytest

from docs_generator.builtin_catalog import BuiltinCatalog
from docs_generator.cross_reference import CrossReferenceResolver
from docs_generator.example_finder import ExampleFinder
from docs_generator.models import (
    MethodDescriptor,
    ParameterDescriptor,
    ReturnDescriptor,
    TypeDescriptor,
)
from docs_generator.output_format import NBSP_INDENT, HtmlFormat, MarkdownFormat
from docs_generator.page_context import PageContext
from docs_generator.render_index_page import render_index_page
from docs_generator.render_method_page import render_method_page
from docs_generator.render_synopsis import (
    class_synopsis,
    method_synopsis,
    parameter_list,
    type_expression,
)
from docs_generator.render_type_page import render_type_page
from docs_generator.signature import ChainIntrospector
from docs_generator.source_introspector import SourceIntrospector
from docs_generator.type_model_builder import TypeModelBuilder

WIDGET = r"""<?php
namespace Acme;

/**
 * A widget.
 * @example widget.php Basic use
 * @see Acme\Gadget
 * @see Nowhere\Thing Elsewhere
 */
class Widget extends \Exception implements \Countable
{
    const SIZE = 3;

    /** Current size. */
    public $size = 1;

    /**
     * Renders the widget.
     * @param string $mode Output <mode>
     * @param int $times
     * @return string The output
     * @throws RuntimeException when broken
     */
    public function render($mode, $times = 1) {}

    public function count(): int {}

    private function secret() {}
}

/** A gadget. */
class Gadget {}
"""


def _context(tmp_path: Path, fmt=None, **switches: bool) -> PageContext:
    src = tmp_path / "src"
    examples = tmp_path / "examples"
    src.mkdir(exist_ok=True)
    examples.mkdir(exist_ok=True)
    (src / "Widget.php").write_text(WIDGET, encoding="utf-8")
    (examples / "widget.php").write_text("<?php echo 1;\n", encoding="utf-8")

    fmt = fmt or MarkdownFormat()
    introspector = ChainIntrospector([SourceIntrospector([src]), BuiltinCatalog.load()])
    resolver = CrossReferenceResolver(
        TypeModelBuilder(introspector), [src], fmt.ext, **switches
    )
    return PageContext(
        fmt=fmt,
        resolver=resolver,
        examples=ExampleFinder(tmp_path, [examples]),
        project_dir=tmp_path,
        **switches,
    )


def _type(ctx: PageContext, name: str) -> TypeDescriptor:
    descriptor = ctx.resolver.builder.build(name)
    assert descriptor is not None
    return descriptor


@pytest.fixture
def ctx(tmp_path: Path) -> PageContext:
    return _context(tmp_path)


def test_parameter_list_brackets(ctx: PageContext) -> None:
    """Verify optional parameters are nested in brackets."""
    a = ParameterDescriptor("a", "int")
    b = ParameterDescriptor("b", "int", "1", optional=True)
    c = ParameterDescriptor("c", None, "2", optional=True)
    assert parameter_list(ctx, [], rich=False) == "void"
    assert parameter_list(ctx, [a, b], rich=False) == "int $a [, int $b = 1 ]"
    assert parameter_list(ctx, [b, c], rich=False) == "[ int $b = 1 [, $c = 2 ]]"


def test_parameter_markers(ctx: PageContext) -> None:
    """Verify reference and variadic markers precede the name."""
    items = ParameterDescriptor("items", "array", by_reference=True)
    rest = ParameterDescriptor("rest", "mixed", optional=True, variadic=True)
    assert parameter_list(ctx, [items, rest], rich=False) == (
        "array &$items [, mixed ...$rest ]"
    )


def test_method_synopsis_keywords(ctx: PageContext) -> None:
    """Verify keyword order and the constructor without return type."""
    method = MethodDescriptor(
        name="make",
        originating_type="Acme\\Gadget",
        visibility="protected",
        static=True,
        final=True,
        abstract=True,
        returns=ReturnDescriptor("string"),
    )
    assert method_synopsis(ctx, method, rich=False) == (
        "abstract protected static final string make ( void )"
    )

    ctor = MethodDescriptor(
        name="__construct",
        originating_type="Acme\\Gadget",
        returns=ReturnDescriptor("void"),
    )
    assert method_synopsis(ctx, ctor, rich=False) == "public __construct ( void )"


def test_type_expression_links_alternatives(ctx: PageContext) -> None:
    """Verify each alternative of a union is resolved separately."""
    assert type_expression(ctx, "Acme\\Gadget|null") == (
        "[Acme\\Gadget](acme.gadget.class.md)|null"
    )
    assert type_expression(ctx, "Acme\\Gadget|null", rich=False) == (
        "Acme\\Gadget|null"
    )
    assert type_expression(ctx, None) == ""


def test_class_synopsis_lists_own_visible_members(ctx: PageContext) -> None:
    """Verify the synopsis holds own visible members only."""
    widget = _type(ctx, "Acme\\Widget")
    assert class_synopsis(ctx, widget) == (
        "Acme\\Widget extends Exception implements Countable, Throwable, Stringable"
        " {\n\n"
        "\t/* Constants */\n"
        "\tconst int SIZE\n\n"
        "\t/* Properties */\n"
        "\tpublic int $size\n\n"
        "\t/* Methods */\n"
        "\tpublic int count ( void )\n"
        "\tpublic string render ( string $mode [, int $times = 1 ] )\n\n"
        "}"
    )


def test_type_page_markdown(ctx: PageContext) -> None:
    """Verify the sections of a Markdown type page."""
    page = render_type_page(ctx, _type(ctx, "Acme\\Widget"))
    exception_url = "http://php.net/manual/en/class.exception.php"

    assert page.startswith("# Acme\\Widget\n\nA widget.\n\n```php\nAcme\\Widget")
    assert (
        f"## Extends\n\n##### [Exception]({exception_url})\n\n"
        f"{NBSP_INDENT}Exception is the base class for all user exceptions.\n\n"
    ) in page
    assert "## Implements\n\n##### [Countable](" in page
    assert (
        "## Methods\n\n"
        "##### public int [count](acme.widget.count.method.md) ( void )\n\n"
    ) in page
    assert f"### Inherited from [Exception]({exception_url})\n\n" in page
    assert (
        "##### public final string [getMessage]"
        "(http://php.net/manual/en/exception.getmessage.php) ( void )"
    ) in page
    assert "secret" not in page
    assert "[__toString]" not in page

    assert (
        "## Examples\n\n**Example #1 Basic use**\n\n"
        "```php\n<?php echo 1;\n```\n\nLocation: ~/examples/widget.php\n\n"
    ) in page
    assert (
        "## See also\n\n"
        f"##### [Acme\\Gadget](acme.gadget.class.md)\n\n{NBSP_INDENT}A gadget.\n\n"
        f"##### Nowhere\\Thing\n\n{NBSP_INDENT}Elsewhere\n\n"
    ) in page
    assert page.endswith(
        "## Details\n\nLocation: ~/src/Widget.php\n\n"
        "---\n\n[back to index](index.md)\n\n"
    )


def test_type_page_shows_private_when_enabled(tmp_path: Path) -> None:
    """Verify the show-private switch brings private members back."""
    ctx = _context(tmp_path, show_private=True)
    page = render_type_page(ctx, _type(ctx, "Acme\\Widget"))
    assert "private [secret](acme.widget.secret.method.md) ( void )" in page


def test_method_page_markdown(ctx: PageContext) -> None:
    """Verify the complete Markdown method page."""
    widget = _type(ctx, "Acme\\Widget")
    render = widget.find_method("render")
    assert render is not None
    assert render_method_page(ctx, widget, render) == (
        "# Acme\\Widget::render\n\n"
        "Renders the widget.\n\n"
        "```php\npublic string render ( string $mode [, int $times = 1 ] )\n```\n\n"
        "## Parameters\n\n"
        f"##### mode\n\n{NBSP_INDENT}Output <mode>\n\n"
        "##### times\n\n"
        f"## Returns\n\n{NBSP_INDENT}The output\n\n"
        "## Throws\n\n"
        "##### [RuntimeException]"
        "(http://php.net/manual/en/class.runtimeexception.php)\n\n"
        "## Details\n\n"
        "Class: [Acme\\Widget](acme.widget.class.md)\n\n"
        "Location: ~/src/Widget.php\n\n"
        "---\n\n[back to index](index.md)\n\n"
    )


def test_method_page_html_escapes_text(tmp_path: Path) -> None:
    """Verify HTML pages escape raw text and use semantic classes."""
    ctx = _context(tmp_path, fmt=HtmlFormat())
    widget = _type(ctx, "Acme\\Widget")
    render = widget.find_method("render")
    assert render is not None
    page = render_method_page(ctx, widget, render)

    assert page.startswith('<div class="page-method-name">Acme\\Widget::render</div>')
    assert "Output &lt;mode&gt;" in page
    assert "Output <mode>" not in page
    assert '<pre class="page-method-synopsis">public string render' in page
    assert '<a href="acme.widget.class.html">Acme\\Widget</a>' in page
    assert '<a href="index.html">back to index</a>' in page


def test_type_page_html_links(tmp_path: Path) -> None:
    """Verify HTML type pages link methods to .html pages."""
    ctx = _context(tmp_path, fmt=HtmlFormat())
    page = render_type_page(ctx, _type(ctx, "Acme\\Widget"))
    assert '<a href="acme.widget.render.method.html">render</a>' in page
    assert '<div class="page-class-inherited-methods">' in page
    assert "&amp;nbsp;" not in page


def test_index_page(ctx: PageContext) -> None:
    """Verify the index lists types in the given order."""
    widget = _type(ctx, "Acme\\Widget")
    gadget = _type(ctx, "Acme\\Gadget")
    assert render_index_page(MarkdownFormat(), [widget, gadget]) == (
        "## Classes\n\n"
        f"### [Acme\\Widget](acme.widget.class.md)\n\n{NBSP_INDENT}A widget.\n\n"
        f"### [Acme\\Gadget](acme.gadget.class.md)\n\n{NBSP_INDENT}A gadget.\n\n"
    )
