"""Logic for rendering method pages."""

from docs_generator.models import MethodDescriptor, TypeDescriptor
from docs_generator.page_context import PageContext
from docs_generator.page_names import class_output_filename
from docs_generator.render_examples import render_examples
from docs_generator.render_see_also import render_see_also
from docs_generator.render_synopsis import method_synopsis, type_expression


def render_method_page(
    ctx: PageContext, owner: TypeDescriptor, method: MethodDescriptor
) -> str:
    """Render the page of a method declared on ``owner``."""
    fmt = ctx.fmt
    parts = [
        fmt.title(f"{owner.name}::{method.name}", "page-method-name"),
        fmt.paragraph(method.description, "page-method-description"),
        fmt.code(method_synopsis(ctx, method, rich=False), "page-method-synopsis"),
    ]

    parameters = "".join(
        fmt.list_item(fmt.text(p.name), p.description, "page-method-parameter")
        for p in method.parameters
    )
    parts.append(fmt.list_block(parameters, "Parameters", "page-method-parameters"))

    if not method.is_constructor:
        parts.append(
            fmt.text_block("Returns", method.returns.description, "page-method-returns")
        )

    throws = "".join(
        fmt.list_item(type_expression(ctx, name), "", "page-method-throw")
        for name in method.throws
    )
    parts.append(fmt.list_block(throws, "Throws", "page-method-throws"))

    parts.append(
        render_examples(
            ctx, method.examples, "page-method-examples", "page-method-example"
        )
    )
    parts.append(
        render_see_also(ctx, method.see, "page-method-see-also", "page-method-see")
    )

    class_link = fmt.link(
        fmt.text(owner.name), class_output_filename(owner.name, fmt.ext)
    )
    parts.append(
        fmt.details(
            [
                ("class", f"Class: {class_link}"),
                ("location", fmt.text(f"Location: ~{ctx.location(owner.file)}")),
            ],
            "page-method-details",
        )
    )
    return "".join(parts)
