"""
Sensor Classifier

Resolves the sensor technology of a camera from free-text EXIF fields.
"""

import logging
from typing import Any, Optional

from catalogs import CatalogIndex, DEFAULT_CONFIG_PATH, get_default_index
from models import ExifFields, SensorType
from normalizers import join_parts, normalize

logger = logging.getLogger(__name__)


class SensorClassifier:
    """
    Classifies a camera's sensor as CCD, CMOS, FOVEON or UNKNOWN.

    Exact model and alias matches always take precedence over pattern rules:
    every exact candidate is tried before the first pattern is evaluated.

    Attributes:
        index: CatalogIndex providing the sensor tables

    Example:
        >>> classifier = SensorClassifier(CatalogIndex.load())
        >>> classifier.classify(make="SIGMA", model="SIGMA DP2 Merrill")
        <SensorType.FOVEON: 'FOVEON'>
    """

    def __init__(self, index: CatalogIndex):
        """
        Initialize sensor classifier.

        Args:
            index: CatalogIndex to read from
        """
        self.index = index

    @classmethod
    def from_config(cls, config_path: str = DEFAULT_CONFIG_PATH) -> 'SensorClassifier':
        """Create SensorClassifier from configuration file."""
        return cls(CatalogIndex.from_config(config_path))

    def classify(self, make: Optional[str] = None, model: Optional[str] = None,
                 lens: Optional[str] = None) -> SensorType:
        """
        Classify the sensor technology for a camera.

        Candidates are tried in order: model, make, then "make model". Each is
        normalized and looked up in the model table, then the alias table. If
        none resolves, "make model lens" is tested against the pattern rules
        in declaration order.

        Args:
            make: EXIF Make
            model: EXIF Model
            lens: EXIF LensModel (only used by pattern rules)

        Returns:
            Resolved SensorType, or SensorType.UNKNOWN when nothing matched
        """
        sensors = self.index.sensor

        for candidate in (model, make, join_parts(make, model)):
            key = normalize(candidate)
            sensor = sensors.lookup(key)
            if sensor is not None:
                logger.debug(f"Sensor {sensor.value} from catalog entry {key!r}")
                return sensor

        haystack = normalize(join_parts(make, model, lens))
        sensor = sensors.match_pattern(haystack)
        if sensor is not None:
            logger.debug(f"Sensor {sensor.value} from pattern match on {haystack!r}")
            return sensor

        logger.debug(f"No sensor match for make={make!r} model={model!r} lens={lens!r}")
        return SensorType.UNKNOWN

    def is_ccd(self, exif: Any) -> bool:
        """
        Check whether a photo's camera has a CCD sensor.

        Args:
            exif: ExifFields, a mapping, or any object with make/model

        Returns:
            True only when the make and model classify as CCD
        """
        fields = ExifFields.coerce(exif)
        return self.classify(make=fields.make, model=fields.model) is SensorType.CCD


def classify_sensor(make: Optional[str] = None, model: Optional[str] = None,
                    lens: Optional[str] = None) -> SensorType:
    """Classify a sensor against the process-wide default index."""
    return SensorClassifier(get_default_index()).classify(make=make, model=model, lens=lens)


def is_ccd(exif: Any) -> bool:
    """Check for a CCD sensor against the process-wide default index."""
    return SensorClassifier(get_default_index()).is_ccd(exif)
