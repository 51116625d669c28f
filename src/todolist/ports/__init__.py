"""Ports - interfaces the core exposes to the presentation layer."""

from .listener import StoreListener

__all__ = [
    "StoreListener",
]
