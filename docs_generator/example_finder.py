"""Lookup of ``@example`` files under the configured example roots."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from docs_generator.models import ExampleRef

logger = logging.getLogger(__name__)


def project_location(path: Path, project_dir: Path) -> str:
    """Return ``path`` relative to the project as ``/dir/file``.

    Paths outside the project are returned in full.
    """
    resolved = path.resolve()
    try:
        return "/" + resolved.relative_to(project_dir.resolve()).as_posix()
    except ValueError:
        return resolved.as_posix()


@dataclass(frozen=True)
class ResolvedExample:
    """An example file found for an ``@example`` reference."""

    title: str
    content: str
    location: str


class ExampleFinder:
    """Resolves example locations against roots searched in order."""

    def __init__(self, project_dir: Path, roots: Iterable[Path]) -> None:
        """Initialize with the project directory and the example roots."""
        self.project_dir = Path(project_dir)
        self.roots = [Path(r) for r in roots]

    def find(self, location: str) -> Path | None:
        """Return the first existing file for ``location``."""
        for root in self.roots:
            candidate = root / location.lstrip("/\\")
            if candidate.is_file():
                return candidate
        return None

    def resolve(self, examples: Iterable[ExampleRef]) -> list[ResolvedExample]:
        """Resolve and number examples; missing ones are left out."""
        resolved: list[ResolvedExample] = []
        for example in examples:
            path = self.find(example.location)
            if path is None:
                logger.warning("Example not found: %s", example.location)
                continue
            try:
                content = path.read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                logger.warning("Example not readable: %s (%s)", path, e)
                continue
            title = f"Example #{len(resolved) + 1}"
            if example.description:
                title += f" {example.description}"
            resolved.append(
                ResolvedExample(
                    title=title,
                    content=content,
                    location=project_location(path, self.project_dir),
                )
            )
        return resolved
