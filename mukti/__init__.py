"""mukti: release-metadata registry and redirect generator."""

__version__ = "0.1.0"
