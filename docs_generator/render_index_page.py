"""Logic for rendering the index page."""

from collections.abc import Sequence

from docs_generator.models import TypeDescriptor
from docs_generator.output_format import OutputFormat
from docs_generator.page_names import class_output_filename


def render_index_page(fmt: OutputFormat, descriptors: Sequence[TypeDescriptor]) -> str:
    """Render the index of all documented types, in the given order."""
    entries = [
        (
            d.name,
            class_output_filename(d.name, fmt.ext),
            " ".join(d.description.split("\n")),
        )
        for d in descriptors
    ]
    return fmt.index(entries)
