"""gymbook: personal gym equipment catalog and training log."""

__version__ = "0.1.0"
