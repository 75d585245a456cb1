"""
Classic Camera Detector

Decides whether a camera is a "classic", exempt from the release-year cutoff.
"""

from typing import Optional

from catalogs import CatalogIndex, DEFAULT_CONFIG_PATH, get_default_index
from normalizers import join_parts, normalize


class ClassicCameraDetector:
    """
    Checks cameras against the classic-camera catalog.

    Example:
        >>> detector = ClassicCameraDetector(CatalogIndex.load())
        >>> detector.is_classic(make="Leica Camera AG", model="M9 Digital Camera")
        True
    """

    def __init__(self, index: CatalogIndex):
        self.index = index

    @classmethod
    def from_config(cls, config_path: str = DEFAULT_CONFIG_PATH) -> 'ClassicCameraDetector':
        """Create ClassicCameraDetector from configuration file."""
        return cls(CatalogIndex.from_config(config_path))

    def is_classic(self, make: Optional[str] = None, model: Optional[str] = None) -> bool:
        """
        Check whether a camera is a classic.

        Candidates are tried in order: model, "make model", then make. A
        candidate matches when it is a classic model itself or an alias of one.

        Args:
            make: EXIF Make
            model: EXIF Model

        Returns:
            True on the first matching candidate, otherwise False
        """
        classic = self.index.classic
        return any(
            classic.contains(normalize(candidate))
            for candidate in (model, join_parts(make, model), make)
        )


def is_classic_camera(make: Optional[str] = None, model: Optional[str] = None) -> bool:
    """Check for a classic camera against the process-wide default index."""
    return ClassicCameraDetector(get_default_index()).is_classic(make=make, model=model)
