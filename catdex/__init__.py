"""Catdex - a cat listing web application"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("catdex")
except PackageNotFoundError:
    __version__ = "dev"
