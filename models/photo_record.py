"""
Photo Record Model

Represents a photo already stored in the archive, as served by the listing.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

# Keys read into named fields; anything else is carried through unchanged
_FIELD_KEYS = {
    'id', 'src', 'alt', 'width', 'height',
    'make', 'camera', 'model', 'lens', 'iso',
    'f', 'aperture', 's', 'shutter_speed', 'year',
}


@dataclass
class PhotoRecord:
    """
    Represents a single archived photograph and its EXIF summary.

    Attributes:
        id: Unique identifier of the photo
        src: URL or path to the image
        alt: Alternative text
        make: Camera manufacturer
        camera: Camera model (EXIF Model)
        lens: Lens model
        iso: ISO sensitivity value
        aperture: Aperture as displayed (e.g. "f/2.8")
        shutter_speed: Shutter speed as displayed (e.g. "1/125")
        year: Year the photo was taken
        width: Image width in pixels
        height: Image height in pixels
        extra: Other top-level fields of the stored record
        exif_extra: Other EXIF fields of the stored record

    Example:
        >>> photo = PhotoRecord(
        ...     id="g7-001",
        ...     make="Canon",
        ...     camera="Canon PowerShot G7",
        ...     iso=80
        ... )
    """

    id: str
    src: Optional[str] = None
    alt: Optional[str] = None
    make: Optional[str] = None
    camera: Optional[str] = None
    lens: Optional[str] = None
    iso: Optional[int] = None
    aperture: Optional[str] = None
    shutter_speed: Optional[str] = None
    year: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)
    exif_extra: Dict[str, Any] = field(default_factory=dict)

    def exif_dict(self) -> dict:
        """EXIF portion of the record in listing format."""
        return {
            **self.exif_extra,
            'make': self.make,
            'camera': self.camera,
            'lens': self.lens,
            'iso': self.iso,
            'f': self.aperture,
            's': self.shutter_speed,
            'year': self.year,
        }

    def to_dict(self) -> dict:
        """
        Convert photo record to dictionary representation.

        Fields the record does not name are passed through as stored.

        Returns:
            Dictionary with top-level fields and a nested 'exif' block
        """
        return {
            **self.extra,
            'id': self.id,
            'src': self.src,
            'alt': self.alt,
            'width': self.width,
            'height': self.height,
            'exif': self.exif_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'PhotoRecord':
        """
        Create PhotoRecord from dictionary.

        Accepts either the nested listing format (EXIF fields under 'exif',
        aperture as 'f' and shutter speed as 's') or flat field names. An
        'exif' value that is not a mapping is ignored.

        Args:
            data: Dictionary containing photo fields

        Returns:
            PhotoRecord instance
        """
        exif = data.get('exif')
        if not isinstance(exif, dict):
            exif = {}
        merged = {**data, **exif}

        return cls(
            id=str(merged.get('id', '')),
            src=merged.get('src'),
            alt=merged.get('alt'),
            make=merged.get('make'),
            camera=merged.get('camera') or merged.get('model'),
            lens=merged.get('lens'),
            iso=merged.get('iso'),
            aperture=merged.get('f') or merged.get('aperture'),
            shutter_speed=merged.get('s') or merged.get('shutter_speed'),
            year=merged.get('year'),
            width=merged.get('width'),
            height=merged.get('height'),
            extra={key: value for key, value in data.items() if key not in _FIELD_KEYS and key != 'exif'},
            exif_extra={key: value for key, value in exif.items() if key not in _FIELD_KEYS},
        )

    def __repr__(self) -> str:
        """String representation of PhotoRecord."""
        return (
            f"PhotoRecord(id='{self.id}', make='{self.make}', "
            f"camera='{self.camera}', lens='{self.lens}')"
        )
