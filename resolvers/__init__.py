"""
Resolvers package for the camera metadata resolution engine.

Each resolver is a stateless reader over an injected CatalogIndex. The
module-level functions bind to the process-wide default index.
"""

from .sensor_classifier import SensorClassifier, classify_sensor, is_ccd
from .release_year import ReleaseYearResolver, get_camera_release_year
from .classic_camera import ClassicCameraDetector, is_classic_camera
from .model_names import (
    ModelNameIndex,
    normalize_model,
    tokenize_model,
    get_canonical_models,
    get_alias_lookup,
)

__all__ = [
    'SensorClassifier',
    'ReleaseYearResolver',
    'ClassicCameraDetector',
    'ModelNameIndex',
    'classify_sensor',
    'is_ccd',
    'get_camera_release_year',
    'is_classic_camera',
    'normalize_model',
    'tokenize_model',
    'get_canonical_models',
    'get_alias_lookup',
]
