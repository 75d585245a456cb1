"""
Catalog Entry Models

Typed entries parsed out of the raw sensor, release-year and classic-camera
catalogs. Every entry has been validated by the time one of these exists.
"""

from dataclasses import dataclass
from typing import Pattern, Union

from .sensor import SensorType


@dataclass(frozen=True)
class PatternRule:
    """
    A regular-expression rule mapping free text to a sensor type.

    Rules are evaluated in catalog declaration order and the first match wins.

    Attributes:
        source: Regular expression as declared in the catalog
        pattern: Compiled, case-insensitive expression
        sensor: Sensor type returned when the rule matches
    """

    source: str
    pattern: Pattern[str]
    sensor: SensorType

    def matches(self, haystack: str) -> bool:
        """Check whether the rule matches anywhere in haystack."""
        return self.pattern.search(haystack) is not None


@dataclass(frozen=True)
class ModelEntry:
    """
    A primary catalog entry.

    Attributes:
        label: Canonical model label as declared in the catalog
        value: SensorType for the sensor catalog, release year for the
            release catalog, True for the classic catalog
    """

    label: str
    value: Union[SensorType, int, bool]


@dataclass(frozen=True)
class AliasEntry:
    """An alternate spelling pointing at a canonical label."""

    alias: str
    canonical: str
