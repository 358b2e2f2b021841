"""Mini README: Persistence collaborators for Angkringan POS."""

from .json_store import JsonFileStorage, Storage

__all__ = ["JsonFileStorage", "Storage"]
