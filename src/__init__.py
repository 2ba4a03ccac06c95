"""itembatch: batch item processing with per-item failure isolation."""

from itembatch.version import __version__

__all__ = ["__version__"]
