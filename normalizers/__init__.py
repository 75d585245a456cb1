"""
Normalizers package for the camera metadata resolution engine.
"""

from .text import normalize, collapse, tokenize, join_parts

__all__ = ['normalize', 'collapse', 'tokenize', 'join_parts']
