"""Logic for rendering the "See also" block of a page."""

from collections.abc import Sequence

from docs_generator.models import SeeRef
from docs_generator.page_context import PageContext


def render_see_also(
    ctx: PageContext, see: Sequence[SeeRef], block_class: str, item_class: str
) -> str:
    """Render "See also" entries; unresolved references stay plain text."""
    items = ""
    for ref in see:
        resolution = ctx.resolver.resolve_see(ref)
        text = ctx.fmt.text(resolution.text)
        if resolution.target:
            text = ctx.fmt.link(text, resolution.target)
        items += ctx.fmt.list_item(text, resolution.description, item_class)
    return ctx.fmt.list_block(items, "See also", block_class)
