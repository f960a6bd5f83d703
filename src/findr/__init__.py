"""Package initialization for findr."""

import contextlib
from importlib.metadata import PackageNotFoundError, version

__version__ = "0.1.0"
with contextlib.suppress(PackageNotFoundError):
    if __package__ is not None:
        __version__ = version(__package__)

__all__ = ["__version__"]
