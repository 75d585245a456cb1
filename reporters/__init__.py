"""
Reporters package for the camera metadata resolution engine.
"""

from .text_reporter import TextReporter

__all__ = ['TextReporter']
