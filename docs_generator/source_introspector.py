"""Type introspection over directories of PHP source files."""

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from docs_generator.php_scanner import scan_php_file
from docs_generator.signature import TypeSignature

logger = logging.getLogger(__name__)

SKIPPED_DIR_NAMES = {".git"}


def iter_source_files(root: Path) -> Iterator[Path]:
    """Yield ``*.php`` files under ``root`` in sorted order.

    Entries named ``.git`` or starting with ``_`` are skipped, together with
    everything below them.
    """
    for path in sorted(root.rglob("*.php")):
        rel_parts = path.relative_to(root).parts
        if any(p in SKIPPED_DIR_NAMES or p.startswith("_") for p in rel_parts):
            continue
        if path.is_file():
            yield path


class SourceIntrospector:
    """Looks up type signatures declared under a set of source roots."""

    def __init__(self, roots: Iterable[Path]) -> None:
        """Initialize with the roots to scan; scanning happens on first use."""
        self.roots = [Path(r) for r in roots]
        self._index: dict[str, TypeSignature] | None = None

    def _build_index(self) -> dict[str, TypeSignature]:
        index: dict[str, TypeSignature] = {}
        for root in self.roots:
            for path in iter_source_files(root):
                for sig in scan_php_file(path):
                    key = sig.name.lower()
                    if key in index:
                        logger.warning(
                            "Duplicate declaration of %s in %s (first seen in %s)",
                            sig.name,
                            path,
                            index[key].file,
                        )
                        continue
                    index[key] = sig
        logger.debug("Indexed %d types under %d roots", len(index), len(self.roots))
        return index

    @property
    def index(self) -> dict[str, TypeSignature]:
        if self._index is None:
            self._index = self._build_index()
        return self._index

    def introspect(self, name: str) -> TypeSignature | None:
        """Return the signature of ``name`` (case-insensitive) if declared."""
        return self.index.get(name.lstrip("\\").lower())

    def type_names(self) -> list[str]:
        """Return the names of all declared types, sorted."""
        return sorted(sig.name for sig in self.index.values())
