"""Report Uniform Type Identifiers for files, extensions and the Launch Services registry."""

__version__ = "1.3.0"
