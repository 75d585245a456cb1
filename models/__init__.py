"""
Domain models for the camera metadata resolution engine.

This package contains the sensor enumeration, typed catalog entries and the
records exchanged with the upload gate and the photo listing.
"""

from .sensor import SensorType, ensure_sensor_type
from .catalog import PatternRule, ModelEntry, AliasEntry
from .exif import ExifFields
from .photo_record import PhotoRecord
from .upload_verdict import UploadVerdict

__all__ = [
    'SensorType',
    'ensure_sensor_type',
    'PatternRule',
    'ModelEntry',
    'AliasEntry',
    'ExifFields',
    'PhotoRecord',
    'UploadVerdict',
]
