"""Validated settings of one generation run."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from docs_generator.cross_reference import ExternalLinks
from docs_generator.errors import ConfigurationError
from docs_generator.output_format import OUTPUT_FORMATS

LINK_KEYS = ("class_url", "method_url", "property_url")


def _resolve_dirs(project_dir: Path, dirs: Iterable[str | Path]) -> tuple[Path, ...]:
    resolved = []
    for d in dirs:
        path = Path(d)
        resolved.append(path if path.is_absolute() else project_dir / path)
    return tuple(resolved)


@dataclass(frozen=True)
class GeneratorConfig:
    """Directories, output format and visibility switches of a run.

    All directories are absolute once built by :meth:`from_dict`.
    """

    project_dir: Path
    output_dir: Path
    output_format: str = "md"
    source_dirs: tuple[Path, ...] = ()
    examples_dirs: tuple[Path, ...] = ()
    library_dirs: tuple[Path, ...] = ()
    show_private: bool = False
    show_protected: bool = False
    external_links: ExternalLinks = field(default_factory=ExternalLinks)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GeneratorConfig":
        """Build from a merged configuration dictionary.

        Relative directories are resolved against ``project_dir``.
        """
        project_dir = Path(str(data.get("project_dir") or ".")).resolve()
        output_dir = Path(str(data.get("output_dir") or "docs"))
        if not output_dir.is_absolute():
            output_dir = project_dir / output_dir
        links = data.get("external_links") or {}
        return cls(
            project_dir=project_dir,
            output_dir=output_dir,
            output_format=str(data.get("output_format") or "md"),
            source_dirs=_resolve_dirs(project_dir, data.get("source_dirs") or ()),
            examples_dirs=_resolve_dirs(project_dir, data.get("examples_dirs") or ()),
            library_dirs=_resolve_dirs(project_dir, data.get("library_dirs") or ()),
            show_private=bool(data.get("show_private")),
            show_protected=bool(data.get("show_protected")),
            external_links=ExternalLinks(
                **{k: str(v) for k, v in links.items() if k in LINK_KEYS}
            ),
        )

    def validate(self) -> None:
        """Raise :class:`ConfigurationError` when the run cannot start."""
        if not self.project_dir.is_dir():
            msg = f"The project dir specified ({self.project_dir}) is not a valid dir"
            raise ConfigurationError(msg)
        if self.output_format not in OUTPUT_FORMATS:
            msg = (
                f"Unknown output format: {self.output_format} "
                f"(expected one of: {', '.join(sorted(OUTPUT_FORMATS))})"
            )
            raise ConfigurationError(msg)
        for kind, dirs in (
            ("source", self.source_dirs),
            ("examples", self.examples_dirs),
            ("library", self.library_dirs),
        ):
            for d in dirs:
                if not d.is_dir():
                    msg = f"The {kind} dir specified ({d}) is not a valid dir"
                    raise ConfigurationError(msg)
