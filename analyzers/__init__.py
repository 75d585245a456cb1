"""
Analyzers package for the camera metadata resolution engine.
"""

from .upload_gate import UploadGate, DEFAULT_RELEASE_YEAR_CUTOFF
from .photo_listing import PhotoListing, parse_flag

__all__ = [
    'UploadGate',
    'DEFAULT_RELEASE_YEAR_CUTOFF',
    'PhotoListing',
    'parse_flag',
]
