"""
Sensor Model

Represents the image-sensor technology a camera is built around.
"""

from enum import Enum
from typing import Any, Optional


class SensorType(Enum):
    """Enumeration of sensor technologies."""
    CCD = "CCD"
    CMOS = "CMOS"
    FOVEON = "FOVEON"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def coerce(cls, value: Any) -> Optional['SensorType']:
        """
        Parse a sensor name case-insensitively.

        Args:
            value: Candidate sensor name (e.g. "ccd", "FOVEON")

        Returns:
            Matching SensorType, or None if value is not a sensor name

        Example:
            >>> SensorType.coerce("cmos")
            <SensorType.CMOS: 'CMOS'>
            >>> SensorType.coerce("film") is None
            True
        """
        if isinstance(value, SensorType):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None

    @property
    def label(self) -> str:
        """Display label used by reports and the inspector."""
        if self is SensorType.FOVEON:
            return "Foveon X3"
        if self is SensorType.UNKNOWN:
            return "Unknown"
        return self.value


def ensure_sensor_type(value: Any) -> SensorType:
    """Return value as a SensorType, falling back to UNKNOWN."""
    return SensorType.coerce(value) or SensorType.UNKNOWN
