"""Game Library Unifier - Merge Steam/Xbox/GOG/Epic/Amazon libraries into one de-duplicated list."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("game-library-unifier")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.1.0"
