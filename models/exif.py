"""
EXIF Fields Model

The handful of free-text EXIF fields the resolvers work from.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class ExifFields:
    """
    Camera identification fields read from a photo's EXIF block.

    Attributes:
        make: Camera manufacturer (EXIF Make)
        model: Camera model (EXIF Model)
        lens: Lens model (EXIF LensModel)

    Example:
        >>> exif = ExifFields(make="Canon", model="PowerShot G7")
        >>> exif.camera
        'Canon PowerShot G7'
    """

    make: Optional[str] = None
    model: Optional[str] = None
    lens: Optional[str] = None

    @classmethod
    def coerce(cls, exif: Any) -> 'ExifFields':
        """
        Build ExifFields from a mapping or any object with make/model/lens.

        Missing fields become None; None itself yields empty fields.
        """
        if isinstance(exif, ExifFields):
            return exif
        if exif is None:
            return cls()
        if isinstance(exif, Mapping):
            return cls(
                make=exif.get('make'),
                model=exif.get('model'),
                lens=exif.get('lens'),
            )
        return cls(
            make=getattr(exif, 'make', None),
            model=getattr(exif, 'model', None),
            lens=getattr(exif, 'lens', None),
        )

    @property
    def camera(self) -> str:
        """Make and model joined for display, skipping missing parts."""
        parts = [part for part in (self.make, self.model) if isinstance(part, str) and part]
        return " ".join(parts)

    def to_dict(self) -> dict:
        """Convert EXIF fields to dictionary representation."""
        return {
            'make': self.make,
            'model': self.model,
            'lens': self.lens,
        }
