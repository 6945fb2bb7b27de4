"""Exceptions raised by the documentation generator."""


class DocsGeneratorError(Exception):
    """Base class for generator errors."""


class ConfigurationError(DocsGeneratorError):
    """A configured directory or option is unusable; the run cannot start."""
