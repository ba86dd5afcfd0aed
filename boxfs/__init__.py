"""
Path-addressed filesystem adapter for Box.
"""
from .adapter import BoxAdapter, FilesystemAdapter
from .box_client import BoxClient

__version__ = "0.1.0"

__all__ = ["BoxAdapter", "BoxClient", "FilesystemAdapter"]
