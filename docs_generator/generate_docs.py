"""Generate Markdown or HTML reference pages for the PHP types of a project.

Usage:
  python -m docs_generator.generate_docs PROJECT_DIR --source src --out docs

Directory options are relative to the project directory. The project and
output directories given on the command line are relative to the current
directory. Command-line values override those of ``--config``.
"""

import argparse
import logging
from pathlib import Path
from typing import Any

from docs_generator.deep_merge import deep_merge
from docs_generator.errors import ConfigurationError
from docs_generator.generator_config import GeneratorConfig
from docs_generator.load_config import load_config
from docs_generator.output_format import OUTPUT_FORMATS
from docs_generator.run_generation import run_generation

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser."""
    ap = argparse.ArgumentParser(
        description="Generate reference documentation for PHP source code.",
    )
    ap.add_argument(
        "project_dir",
        nargs="?",
        type=Path,
        help="Project root directory (default: from --config, else the cwd)",
    )
    ap.add_argument(
        "--source",
        action="append",
        dest="source_dirs",
        metavar="DIR",
        help="Source directory to document, relative to the project (repeatable)",
    )
    ap.add_argument(
        "--examples",
        action="append",
        dest="examples_dirs",
        metavar="DIR",
        help="Directory searched for @example files (repeatable)",
    )
    ap.add_argument(
        "--library",
        action="append",
        dest="library_dirs",
        metavar="DIR",
        help="Third-party code: known to the model, never linked (repeatable)",
    )
    ap.add_argument(
        "--out",
        type=Path,
        dest="output_dir",
        help="Output directory (default: <project>/docs)",
    )
    ap.add_argument(
        "--format",
        choices=sorted(OUTPUT_FORMATS),
        dest="output_format",
        help="Output format (default: md)",
    )
    ap.add_argument(
        "--show-private",
        action="store_true",
        default=None,
        help="Document private members",
    )
    ap.add_argument(
        "--show-protected",
        action="store_true",
        default=None,
        help="Document protected members",
    )
    ap.add_argument(
        "--config",
        help="Path to a YAML configuration file",
    )
    ap.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return ap


def cli_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Collect the options given on the command line as a config mapping."""
    overrides: dict[str, Any] = {
        "source_dirs": args.source_dirs,
        "examples_dirs": args.examples_dirs,
        "library_dirs": args.library_dirs,
        "output_format": args.output_format,
        "show_private": args.show_private,
        "show_protected": args.show_protected,
    }
    if args.project_dir is not None:
        overrides["project_dir"] = str(args.project_dir.resolve())
    if args.output_dir is not None:
        overrides["output_dir"] = str(args.output_dir.resolve())
    return overrides


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, merge configuration and run the generator."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = deep_merge(load_config(args.config), cli_overrides(args))
        config = GeneratorConfig.from_dict(settings)
        logger.debug("Effective configuration: %s", config)
        run_generation(config)
    except ConfigurationError as e:
        raise SystemExit(str(e)) from e
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
