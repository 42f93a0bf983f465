"""Core module for the jamaah application."""

from .types import Identity, KVRecord

__all__ = ["Identity", "KVRecord"]
