"""paralevel: read, write and edit nested-block puzzle level files."""

__version__ = "0.1.0"
