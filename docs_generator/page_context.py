"""Everything a page renderer needs besides the descriptor itself."""

from dataclasses import dataclass
from pathlib import Path

from docs_generator.cross_reference import CrossReferenceResolver
from docs_generator.example_finder import ExampleFinder, project_location
from docs_generator.models import (
    ConstantDescriptor,
    MethodDescriptor,
    PropertyDescriptor,
    TypeDescriptor,
    is_listed_method,
    is_visible,
)
from docs_generator.output_format import OutputFormat
from docs_generator.page_names import has_method_page


@dataclass(frozen=True)
class PageContext:
    """Output format, resolver, example lookup and visibility switches."""

    fmt: OutputFormat
    resolver: CrossReferenceResolver
    examples: ExampleFinder
    project_dir: Path
    show_private: bool = False
    show_protected: bool = False

    def shows(
        self, member: ConstantDescriptor | PropertyDescriptor | MethodDescriptor
    ) -> bool:
        """Return True when ``member`` appears on pages."""
        if member.internal:
            return False
        if isinstance(member, MethodDescriptor) and not is_listed_method(member):
            return False
        return is_visible(
            member.visibility,
            show_private=self.show_private,
            show_protected=self.show_protected,
        )

    def has_method_page(self, owner: TypeDescriptor, method: MethodDescriptor) -> bool:
        return has_method_page(
            owner,
            method,
            show_private=self.show_private,
            show_protected=self.show_protected,
        )

    def location(self, path: Path | None) -> str:
        return project_location(path, self.project_dir) if path is not None else ""
