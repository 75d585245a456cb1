"""
Extractors package for the camera metadata resolution engine.
"""

from .exif_reader import ExifReader

__all__ = ['ExifReader']
