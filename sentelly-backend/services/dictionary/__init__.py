"""
Dictionary Services

Word store and the lookup resolver.
"""

from .store import WordStore
from .resolver import LookupResolver

__all__ = ["WordStore", "LookupResolver"]
