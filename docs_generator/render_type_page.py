"""Logic for rendering type pages."""

from collections.abc import Callable, Sequence

from docs_generator.models import Member, TypeDescriptor
from docs_generator.page_context import PageContext
from docs_generator.render_examples import render_examples
from docs_generator.render_see_also import render_see_also
from docs_generator.render_synopsis import (
    class_synopsis,
    constant_synopsis,
    event_synopsis,
    method_synopsis,
    property_synopsis,
    type_expression,
)


def render_type_page(ctx: PageContext, descriptor: TypeDescriptor) -> str:
    """Render the page of one class, interface or trait."""
    fmt = ctx.fmt
    parts = [
        fmt.title(descriptor.name, "page-class-name"),
        fmt.paragraph(descriptor.description, "page-class-description"),
        fmt.code(class_synopsis(ctx, descriptor), "page-class-synopsis"),
    ]
    parts.append(_render_extends(ctx, descriptor))
    parts.append(_render_implements(ctx, descriptor))
    parts.append(
        _render_members(
            ctx,
            descriptor,
            descriptor.effective_constants(),
            "Constants",
            "page-class-constants",
            "page-class-constant",
            "page-class-inherited-constants",
            lambda c: constant_synopsis(ctx, c),
        )
    )
    parts.append(
        _render_members(
            ctx,
            descriptor,
            descriptor.effective_properties(),
            "Properties",
            "page-class-properties",
            "page-class-property",
            "page-class-inherited-properties",
            lambda p: property_synopsis(ctx, p),
        )
    )
    parts.append(
        _render_members(
            ctx,
            descriptor,
            descriptor.effective_methods(),
            "Methods",
            "page-class-methods",
            "page-class-method",
            "page-class-inherited-methods",
            lambda m: method_synopsis(ctx, m),
        )
    )
    parts.append(_render_events(ctx, descriptor))
    parts.append(
        render_examples(
            ctx, descriptor.examples, "page-class-examples", "page-class-example"
        )
    )
    parts.append(
        render_see_also(ctx, descriptor.see, "page-class-see-also", "page-class-see")
    )
    parts.append(
        fmt.details(
            [("location", fmt.text(f"Location: ~{ctx.location(descriptor.file)}"))],
            "page-class-details",
        )
    )
    return "".join(parts)


def _describe(ctx: PageContext, name: str) -> str:
    related = ctx.resolver.builder.build(name)
    return related.description if related is not None else ""


def _render_extends(ctx: PageContext, descriptor: TypeDescriptor) -> str:
    if not descriptor.parent:
        return ""
    item = ctx.fmt.list_item(
        type_expression(ctx, descriptor.parent),
        _describe(ctx, descriptor.parent),
        "page-class-extends-class",
    )
    return ctx.fmt.list_block(item, "Extends", "page-class-extends")


def _render_implements(ctx: PageContext, descriptor: TypeDescriptor) -> str:
    items = "".join(
        ctx.fmt.list_item(
            type_expression(ctx, name),
            _describe(ctx, name),
            "page-class-implements-interface",
        )
        for name in descriptor.interfaces
    )
    return ctx.fmt.list_block(items, "Implements", "page-class-implements")


def _render_members(
    ctx: PageContext,
    descriptor: TypeDescriptor,
    members: Sequence[Member],
    title: str,
    block_class: str,
    item_class: str,
    inherited_class: str,
    synopsis: Callable[[Member], str],
) -> str:
    """Render own members, then one "Inherited from X" group per origin."""
    own = ""
    inherited: dict[str, str] = {}
    for m in members:
        if not ctx.shows(m):
            continue
        item = ctx.fmt.list_item(synopsis(m), m.description, item_class)
        if descriptor.declares(m):
            own += item
        else:
            origin = m.originating_type
            inherited[origin] = inherited.get(origin, "") + item

    content = own
    for origin in sorted(inherited):
        content += ctx.fmt.list_block(
            inherited[origin],
            "Inherited from " + type_expression(ctx, origin),
            inherited_class,
            level=1,
        )
    return ctx.fmt.list_block(content, title, block_class)


def _render_events(ctx: PageContext, descriptor: TypeDescriptor) -> str:
    items = "".join(
        ctx.fmt.list_item(event_synopsis(ctx, e), e.description, "page-class-event")
        for e in descriptor.events
    )
    return ctx.fmt.list_block(items, "Events", "page-class-events")
