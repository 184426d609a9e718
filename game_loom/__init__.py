"""GameLoom - Build a personal video game catalog from heterogeneous CSV exports."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("game-loom")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.1.0"
