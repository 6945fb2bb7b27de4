"""Orchestration of one documentation generation run."""

import logging
from pathlib import Path

from docs_generator.builtin_catalog import BuiltinCatalog
from docs_generator.cross_reference import CrossReferenceResolver
from docs_generator.example_finder import ExampleFinder
from docs_generator.generator_config import GeneratorConfig
from docs_generator.models import TypeDescriptor
from docs_generator.output_format import get_output_format
from docs_generator.page_context import PageContext
from docs_generator.page_names import (
    class_output_filename,
    index_output_filename,
    method_output_filename,
)
from docs_generator.render_index_page import render_index_page
from docs_generator.render_method_page import render_method_page
from docs_generator.render_type_page import render_type_page
from docs_generator.signature import ChainIntrospector
from docs_generator.source_introspector import SourceIntrospector
from docs_generator.type_model_builder import TypeModelBuilder

logger = logging.getLogger(__name__)


def run_generation(config: GeneratorConfig) -> int:
    """Execute the full pipeline and return the number of pages written.

    Raises:
        ConfigurationError: before anything is written, when a configured
            directory is missing or the output format is unknown.
    """
    config.validate()
    fmt = get_output_format(config.output_format)

    sources = SourceIntrospector(config.source_dirs)
    introspector = ChainIntrospector(
        [sources, SourceIntrospector(config.library_dirs), BuiltinCatalog.load()]
    )
    builder = TypeModelBuilder(introspector)
    resolver = CrossReferenceResolver(
        builder,
        list(config.source_dirs),
        fmt.ext,
        external_links=config.external_links,
        show_private=config.show_private,
        show_protected=config.show_protected,
    )
    ctx = PageContext(
        fmt=fmt,
        resolver=resolver,
        examples=ExampleFinder(config.project_dir, config.examples_dirs),
        project_dir=config.project_dir,
        show_private=config.show_private,
        show_protected=config.show_protected,
    )

    descriptors = _documented_types(sources, builder, resolver)

    out_root = config.output_dir.resolve()
    out_root.mkdir(parents=True, exist_ok=True)

    written = _write_type_pages(ctx, descriptors, out_root)

    _write_page(
        out_root, index_output_filename(fmt.ext), render_index_page(fmt, descriptors)
    )
    written += 1

    print(f"Generated {written} pages into: {out_root}")
    return written


def _documented_types(
    sources: SourceIntrospector,
    builder: TypeModelBuilder,
    resolver: CrossReferenceResolver,
) -> list[TypeDescriptor]:
    """Build the descriptors of all non-internal types under the source roots."""
    descriptors = []
    for name in sources.type_names():
        descriptor = builder.build(name)
        if descriptor is None:
            continue
        if descriptor.internal:
            logger.debug("Skipping internal type %s", name)
            continue
        if not resolver.is_local(descriptor):
            continue
        descriptors.append(descriptor)
    return descriptors


def _write_type_pages(
    ctx: PageContext, descriptors: list[TypeDescriptor], out_root: Path
) -> int:
    """Write every type page followed by the pages of its methods."""
    written = 0
    total_types = len(descriptors)
    print(f"Writing {total_types} type pages...")
    for i, descriptor in enumerate(descriptors, start=1):
        _write_page(
            out_root,
            class_output_filename(descriptor.name, ctx.fmt.ext),
            render_type_page(ctx, descriptor),
        )
        written += 1

        for method in descriptor.effective_methods():
            if not ctx.has_method_page(descriptor, method):
                continue
            _write_page(
                out_root,
                method_output_filename(descriptor.name, method.name, ctx.fmt.ext),
                render_method_page(ctx, descriptor, method),
            )
            written += 1

        if i % 50 == 0:
            print(f"  ... wrote {i}/{total_types} types")
    return written


def _write_page(out_root: Path, filename: str, content: str) -> None:
    logger.debug("Writing %s", filename)
    (out_root / filename).write_text(content, encoding="utf-8")
