"""Icon component build pipeline and release workflow."""

__version__ = "0.1.0"
