"""Logic for loading and merging configuration files."""

import logging
from pathlib import Path
from typing import Any

import yaml

from docs_generator.cross_reference import ExternalLinks
from docs_generator.deep_merge import deep_merge
from docs_generator.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_LINKS = ExternalLinks()

DEFAULT_CONFIG: dict[str, Any] = {
    "project_dir": ".",
    "output_dir": "docs",
    "output_format": "md",
    "source_dirs": ["src"],
    "examples_dirs": [],
    "library_dirs": [],
    "show_private": False,
    "show_protected": False,
    "external_links": {
        "class_url": DEFAULT_LINKS.class_url,
        "method_url": DEFAULT_LINKS.method_url,
        "property_url": DEFAULT_LINKS.property_url,
    },
}


def load_config(path: str | Path | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults.

    A relative ``project_dir`` in the file is taken relative to the file.
    """
    config = deep_merge(DEFAULT_CONFIG, {})
    if not path:
        return config

    p = Path(path)
    if not p.is_file():
        msg = f"The config file specified ({p}) does not exist"
        raise ConfigurationError(msg)
    try:
        user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        msg = f"Invalid config file {p}: {e}"
        raise ConfigurationError(msg) from e
    if not isinstance(user_config, dict):
        msg = f"Invalid config file {p}: expected a mapping"
        raise ConfigurationError(msg)

    logger.debug("Loaded config file %s", p)
    config = deep_merge(config, user_config)
    if "project_dir" in user_config:
        config["project_dir"] = str(p.parent / str(user_config["project_dir"]))
    return config
