"""
🌧️ Raindrop Tag Cleanup Tool

A one-shot tag cleaner for Raindrop.io: authorize via OAuth, list every tag,
and delete all of them except the ones you chose to keep.
"""

__version__ = "1.0.0"
__author__ = "Jason Hamilton"
__license__ = "BSD 3-Clause"

from .core.processor import RaindropTagCleaner

__all__ = ["RaindropTagCleaner"]
