"""Persistence for the tracked city list."""

from tzoverlap.storage.city_store import CityStore, CityStoreError

__all__ = [
    "CityStore",
    "CityStoreError",
]
