"""Top-level package for the hscan scan-to-document tool."""

__all__ = []

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("hscan")  # read from pyproject.toml
except PackageNotFoundError:
    __version__ = "0.0.0-dev"  # fallback for development
