"""Programmatic entry point: configure directories, then generate."""

from pathlib import Path

from docs_generator.cross_reference import ExternalLinks
from docs_generator.errors import ConfigurationError
from docs_generator.generator_config import GeneratorConfig
from docs_generator.run_generation import run_generation


class DocsGenerator:
    """Generates reference documentation for the PHP code of a project.

    Directories are given relative to the project directory::

        generator = DocsGenerator("/path/to/project")
        generator.add_source_dir("src")
        generator.add_examples_dir("examples")
        generator.generate_markdown("/path/to/output")
    """

    def __init__(self, project_dir: str | Path) -> None:
        """Initialize the generator for ``project_dir``.

        Raises:
            ConfigurationError: if ``project_dir`` is not a directory.
        """
        path = Path(project_dir)
        if not path.is_dir():
            msg = f"The project dir specified ({project_dir}) is not a valid dir"
            raise ConfigurationError(msg)
        self.project_dir = path.resolve()
        self.source_dirs: list[Path] = []
        self.examples_dirs: list[Path] = []
        self.library_dirs: list[Path] = []
        self.external_links = ExternalLinks()

    def _project_subdir(self, kind: str, directory: str | Path) -> Path:
        path = self.project_dir / str(directory).strip("/\\")
        if not path.is_dir():
            msg = f"The {kind} dir specified ({path}) is not a valid dir"
            raise ConfigurationError(msg)
        return path

    def add_source_dir(self, directory: str | Path) -> None:
        """Add a directory whose types are documented and linked."""
        self.source_dirs.append(self._project_subdir("source", directory))

    def add_examples_dir(self, directory: str | Path) -> None:
        """Add a directory searched for ``@example`` files."""
        self.examples_dirs.append(self._project_subdir("examples", directory))

    def add_library_dir(self, directory: str | Path) -> None:
        """Add a directory whose types are known but neither documented nor linked."""
        self.library_dirs.append(self._project_subdir("library", directory))

    def generate_markdown(
        self,
        output_dir: str | Path,
        *,
        show_private: bool = False,
        show_protected: bool = False,
    ) -> int:
        """Write Markdown pages into ``output_dir``; return the page count."""
        return self._generate(output_dir, "md", show_private, show_protected)

    def generate_html(
        self,
        output_dir: str | Path,
        *,
        show_private: bool = False,
        show_protected: bool = False,
    ) -> int:
        """Write HTML fragments into ``output_dir``; return the page count."""
        return self._generate(output_dir, "html", show_private, show_protected)

    def _generate(
        self,
        output_dir: str | Path,
        output_format: str,
        show_private: bool,
        show_protected: bool,
    ) -> int:
        config = GeneratorConfig(
            project_dir=self.project_dir,
            output_dir=Path(output_dir).resolve(),
            output_format=output_format,
            source_dirs=tuple(self.source_dirs),
            examples_dirs=tuple(self.examples_dirs),
            library_dirs=tuple(self.library_dirs),
            show_private=show_private,
            show_protected=show_protected,
            external_links=self.external_links,
        )
        return run_generation(config)
