"""
Upload Verdict Model

Outcome of running a photo's EXIF fields through the upload gate.
"""

from dataclasses import dataclass
from typing import Optional

from .sensor import SensorType


@dataclass(frozen=True)
class UploadVerdict:
    """
    Upload gate decision for a single photo.

    Attributes:
        make: Camera manufacturer as supplied
        model: Camera model as supplied
        lens: Lens model as supplied
        sensor: Classified sensor technology
        release_year: Camera release year, or None when unknown
        is_classic: Whether the camera is exempt from the recency cutoff
        blocked: Whether the upload is refused
        reason: Short human-readable explanation of the decision
    """

    sensor: SensorType
    release_year: Optional[int]
    is_classic: bool
    blocked: bool
    reason: str
    make: Optional[str] = None
    model: Optional[str] = None
    lens: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return not self.blocked

    def to_dict(self) -> dict:
        """Convert verdict to dictionary representation."""
        return {
            'make': self.make,
            'model': self.model,
            'lens': self.lens,
            'sensor': self.sensor.value,
            'release_year': self.release_year,
            'is_classic': self.is_classic,
            'blocked': self.blocked,
            'reason': self.reason,
        }
