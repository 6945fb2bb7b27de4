"""File names of generated pages."""

from docs_generator.models import (
    MethodDescriptor,
    TypeDescriptor,
    is_listed_method,
    is_visible,
)

INDEX_BASENAME = "index"


def _dotted(name: str) -> str:
    # Acme\Util\Widget -> acme.util.widget
    return name.lstrip("\\").lower().replace("\\", ".")


def index_output_filename(ext: str) -> str:
    return f"{INDEX_BASENAME}.{ext}"


def class_output_filename(type_name: str, ext: str) -> str:
    """Return ``<lowercased-dotted-typename>.class.<ext>``."""
    return f"{_dotted(type_name)}.class.{ext}"


def method_output_filename(type_name: str, method_name: str, ext: str) -> str:
    """Return ``<lowercased-dotted-typename>.<lowercased-method>.method.<ext>``."""
    return f"{_dotted(type_name)}.{method_name.lower()}.method.{ext}"


def has_method_page(
    owner: TypeDescriptor,
    method: MethodDescriptor,
    *,
    show_private: bool,
    show_protected: bool,
) -> bool:
    """Return True when a page is generated for ``method`` of ``owner``."""
    return (
        owner.declares(method)
        and not method.internal
        and is_listed_method(method)
        and is_visible(
            method.visibility, show_private=show_private, show_protected=show_protected
        )
    )
