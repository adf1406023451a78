"""bluectl - command-line control for BluOS players."""

__version__ = "0.1.0"
