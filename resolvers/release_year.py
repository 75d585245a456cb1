"""
Release Year Resolver

Resolves the year a camera was released from its EXIF make and model.
"""

from typing import Optional

from catalogs import CatalogIndex, DEFAULT_CONFIG_PATH, get_default_index
from normalizers import join_parts, normalize


class ReleaseYearResolver:
    """
    Looks up a camera's release year.

    There is no pattern fallback: a camera is either in the release catalog
    (directly or through an alias) or its year is unknown.

    Example:
        >>> resolver = ReleaseYearResolver(CatalogIndex.load())
        >>> resolver.resolve_release_year(make="Canon", model="PowerShot G7")
        2006
    """

    def __init__(self, index: CatalogIndex):
        self.index = index

    @classmethod
    def from_config(cls, config_path: str = DEFAULT_CONFIG_PATH) -> 'ReleaseYearResolver':
        """Create ReleaseYearResolver from configuration file."""
        return cls(CatalogIndex.from_config(config_path))

    def resolve_release_year(self, make: Optional[str] = None,
                             model: Optional[str] = None) -> Optional[int]:
        """
        Resolve a camera's release year.

        Candidates are tried in order: model, "make model", then make.

        Args:
            make: EXIF Make
            model: EXIF Model

        Returns:
            Release year, or None when the camera is not catalogued
        """
        releases = self.index.releases

        for candidate in (model, join_parts(make, model), make):
            year = releases.lookup(normalize(candidate))
            if year is not None:
                return year

        return None


def get_camera_release_year(make: Optional[str] = None,
                            model: Optional[str] = None) -> Optional[int]:
    """Resolve a release year against the process-wide default index."""
    return ReleaseYearResolver(get_default_index()).resolve_release_year(make=make, model=model)
