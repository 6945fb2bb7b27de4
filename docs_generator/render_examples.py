"""Logic for rendering the examples block of a page."""

from collections.abc import Sequence

from docs_generator.models import ExampleRef
from docs_generator.page_context import PageContext


def render_examples(
    ctx: PageContext, examples: Sequence[ExampleRef], block_class: str, item_class: str
) -> str:
    """Render resolved examples, numbered from 1."""
    content = "".join(
        ctx.fmt.example(e.title, e.content, e.location, item_class)
        for e in ctx.examples.resolve(examples)
    )
    return ctx.fmt.list_block(content, "Examples", block_class)
