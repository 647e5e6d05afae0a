"""Player spawn preferences."""

from .preference_storage import PreferenceStore

__all__ = ['PreferenceStore']
