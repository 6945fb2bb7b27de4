"""PHP-like synopsis lines for types and their members.

With ``rich=True`` the result is markup of the page format and type and
method names become links (used in member lists). With ``rich=False`` it is
plain text, escaped later by the code block that holds it.
"""

import re
from collections.abc import Sequence

from docs_generator.models import (
    ConstantDescriptor,
    EventDescriptor,
    Member,
    MethodDescriptor,
    ParameterDescriptor,
    PropertyDescriptor,
    TypeDescriptor,
)
from docs_generator.page_context import PageContext

TYPE_SEPARATOR_RE = re.compile(r"([|&()])")


def _text(ctx: PageContext, text: str, rich: bool) -> str:
    return ctx.fmt.text(text) if rich else text


def _join(*parts: str) -> str:
    return " ".join(p for p in parts if p)


def type_expression(ctx: PageContext, expr: str | None, *, rich: bool = True) -> str:
    """Render a type expression, linking each resolvable alternative."""
    if not expr:
        return ""
    if not rich:
        return expr
    parts = []
    for part in TYPE_SEPARATOR_RE.split(expr):
        if not part or TYPE_SEPARATOR_RE.fullmatch(part):
            parts.append(ctx.fmt.text(part))
            continue
        resolution = ctx.resolver.resolve_type(part)
        text = ctx.fmt.text(resolution.text)
        parts.append(
            ctx.fmt.link(text, resolution.target) if resolution.target else text
        )
    return "".join(parts)


def constant_synopsis(
    ctx: PageContext, constant: ConstantDescriptor, *, rich: bool = True
) -> str:
    return _join(
        "const",
        type_expression(ctx, constant.type, rich=rich),
        _text(ctx, constant.name, rich),
    )


def property_synopsis(
    ctx: PageContext, prop: PropertyDescriptor, *, rich: bool = True
) -> str:
    keywords = [prop.visibility]
    if prop.static:
        keywords.append("static")
    if prop.readonly:
        keywords.append("readonly")
    return _join(
        *keywords,
        type_expression(ctx, prop.type, rich=rich),
        _text(ctx, f"${prop.name}", rich),
    )


def event_synopsis(
    ctx: PageContext, event: EventDescriptor, *, rich: bool = True
) -> str:
    return _join(
        type_expression(ctx, event.type, rich=rich), _text(ctx, event.name, rich)
    )


def _parameter(ctx: PageContext, p: ParameterDescriptor, rich: bool) -> str:
    name = "&" if p.by_reference else ""
    name += "..." if p.variadic else ""
    name += f"${p.name}"
    if p.default is not None:
        name += f" = {p.default}"
    return _join(type_expression(ctx, p.type, rich=rich), _text(ctx, name, rich))


def parameter_list(
    ctx: PageContext, parameters: Sequence[ParameterDescriptor], *, rich: bool = True
) -> str:
    """Render parameters in manual style: ``int $a [, int $b = 1 ]``."""
    if not parameters:
        return "void"
    out = ""
    brackets = 0
    for p in parameters:
        if p.optional:
            out += " [, "
            brackets += 1
        else:
            out += " , "
        out += _parameter(ctx, p, rich)
    if brackets:
        out += " " + "]" * brackets + " "
    out = out.strip(" ,")
    if out.startswith("[,"):
        out = "[" + out[2:]
    return out


def method_synopsis(
    ctx: PageContext, method: MethodDescriptor, *, rich: bool = True
) -> str:
    keywords = []
    if method.abstract:
        keywords.append("abstract")
    keywords.append(method.visibility)
    if method.static:
        keywords.append("static")
    if method.final:
        keywords.append("final")

    return_type = ""
    if not (method.is_constructor or method.is_destructor):
        return_type = type_expression(ctx, method.returns.type, rich=rich)

    name = _text(ctx, method.name, rich)
    if rich:
        resolution = ctx.resolver.resolve_method(method.originating_type, method.name)
        if resolution.target:
            name = ctx.fmt.link(name, resolution.target)

    params = parameter_list(ctx, method.parameters, rich=rich)
    return _join(*keywords, return_type, name) + f" ( {params} )"


def _own(
    ctx: PageContext, descriptor: TypeDescriptor, members: Sequence[Member]
) -> list[Member]:
    return [m for m in members if descriptor.declares(m) and ctx.shows(m)]


def class_synopsis(ctx: PageContext, descriptor: TypeDescriptor) -> str:
    """Render the plain-text synopsis of a type and its own members."""
    result = descriptor.name
    if descriptor.parent:
        result += f" extends {descriptor.parent}"
    if descriptor.interfaces:
        keyword = "extends" if descriptor.kind == "interface" else "implements"
        result += f" {keyword} " + ", ".join(descriptor.interfaces)
    result += " {\n\n"

    constants = _own(ctx, descriptor, descriptor.constants)
    properties = _own(ctx, descriptor, descriptor.properties)
    methods = _own(ctx, descriptor, descriptor.methods)
    sections = [
        ("Constants", [constant_synopsis(ctx, c, rich=False) for c in constants]),
        ("Properties", [property_synopsis(ctx, p, rich=False) for p in properties]),
        ("Methods", [method_synopsis(ctx, m, rich=False) for m in methods]),
    ]
    for title, lines in sections:
        if lines:
            result += f"\t/* {title} */\n"
            result += "".join(f"\t{line}\n" for line in lines)
            result += "\n"
    return result + "}"
