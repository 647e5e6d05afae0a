"""
Retakes spawn management.

Per-map spawn catalog, round-start spawn allocation and player spawn
preferences for a retake game mode.
"""

__version__ = '1.0.0'
