"""
Upload Gate

Decides whether a photo may be uploaded to the archive, based on the camera
that took it.
"""

import logging
from typing import Any, Iterable, List, Optional, Tuple

from catalogs import CatalogError, CatalogIndex, DEFAULT_CONFIG_PATH, config_section, load_config
from models import ExifFields, SensorType, UploadVerdict
from resolvers import ClassicCameraDetector, ReleaseYearResolver, SensorClassifier

logger = logging.getLogger(__name__)

DEFAULT_RELEASE_YEAR_CUTOFF = 2014


class UploadGate:
    """
    Accepts or blocks uploads by camera age and sensor.

    Policy, in order:

    1. Classic cameras are always accepted.
    2. Cameras with a known release year are blocked when released after
       the cutoff year.
    3. Cameras with an unknown release year are blocked unless their
       sensor is CCD (an UNKNOWN sensor counts as not CCD).

    Attributes:
        classifier: SensorClassifier instance
        release_resolver: ReleaseYearResolver instance
        classic_detector: ClassicCameraDetector instance
        release_year_cutoff: Last release year accepted for non-classic cameras

    Example:
        >>> gate = UploadGate.for_index(CatalogIndex.load())
        >>> gate.evaluate(make="RICOH IMAGING COMPANY, LTD.", model="RICOH GR III").blocked
        True
    """

    def __init__(self, classifier: SensorClassifier,
                 release_resolver: ReleaseYearResolver,
                 classic_detector: ClassicCameraDetector,
                 release_year_cutoff: int = DEFAULT_RELEASE_YEAR_CUTOFF):
        """
        Initialize upload gate.

        Args:
            classifier: SensorClassifier instance
            release_resolver: ReleaseYearResolver instance
            classic_detector: ClassicCameraDetector instance
            release_year_cutoff: Last accepted release year
        """
        self.classifier = classifier
        self.release_resolver = release_resolver
        self.classic_detector = classic_detector
        self.release_year_cutoff = release_year_cutoff

    @classmethod
    def for_index(cls, index: CatalogIndex,
                  release_year_cutoff: int = DEFAULT_RELEASE_YEAR_CUTOFF) -> 'UploadGate':
        """Create an UploadGate whose resolvers all share one index."""
        return cls(
            classifier=SensorClassifier(index),
            release_resolver=ReleaseYearResolver(index),
            classic_detector=ClassicCameraDetector(index),
            release_year_cutoff=release_year_cutoff,
        )

    @classmethod
    def from_config(cls, config_path: str = DEFAULT_CONFIG_PATH,
                    index: Optional[CatalogIndex] = None) -> 'UploadGate':
        """
        Create UploadGate from configuration file.

        Args:
            config_path: Path to YAML configuration file
            index: Already-built index to reuse (loaded from config otherwise)

        Returns:
            Configured UploadGate instance
        """
        config = load_config(config_path)
        gate_config = config_section(config, 'upload_gate')
        cutoff = gate_config.get('release_year_cutoff', DEFAULT_RELEASE_YEAR_CUTOFF)
        if isinstance(cutoff, bool) or not isinstance(cutoff, int):
            raise CatalogError(f"upload_gate.release_year_cutoff must be an integer, got {cutoff!r}")

        if index is None:
            index = CatalogIndex.from_config(config_path)
        return cls.for_index(index, release_year_cutoff=cutoff)

    def evaluate(self, make: Optional[str] = None, model: Optional[str] = None,
                 lens: Optional[str] = None) -> UploadVerdict:
        """
        Evaluate one photo's camera against the upload policy.

        Args:
            make: EXIF Make
            model: EXIF Model
            lens: EXIF LensModel

        Returns:
            UploadVerdict describing the decision
        """
        sensor = self.classifier.classify(make=make, model=model, lens=lens)
        is_classic = self.classic_detector.is_classic(make=make, model=model)
        release_year = self.release_resolver.resolve_release_year(make=make, model=model)

        if is_classic:
            blocked = False
            reason = "classic camera"
        elif release_year is not None:
            blocked = release_year > self.release_year_cutoff
            relation = "after" if blocked else "on or before"
            reason = f"released {release_year}, {relation} {self.release_year_cutoff}"
        else:
            blocked = sensor is not SensorType.CCD
            reason = f"release year unknown, {sensor.label} sensor"

        verdict = UploadVerdict(
            sensor=sensor,
            release_year=release_year,
            is_classic=is_classic,
            blocked=blocked,
            reason=reason,
            make=make,
            model=model,
            lens=lens,
        )
        if blocked:
            logger.info(f"Blocked upload from {make!r} {model!r}: {reason}")
        return verdict

    def evaluate_exif(self, exif: Any) -> UploadVerdict:
        """Evaluate an ExifFields, mapping, or object with make/model/lens."""
        fields = ExifFields.coerce(exif)
        return self.evaluate(make=fields.make, model=fields.model, lens=fields.lens)

    def partition(self, items: Iterable[Any]) -> Tuple[List[UploadVerdict], List[UploadVerdict]]:
        """
        Evaluate a batch of pending uploads.

        Args:
            items: EXIF fields for each pending upload

        Returns:
            Tuple of (accepted verdicts, blocked verdicts), each in input order
        """
        accepted: List[UploadVerdict] = []
        blocked: List[UploadVerdict] = []
        for item in items:
            verdict = self.evaluate_exif(item)
            (blocked if verdict.blocked else accepted).append(verdict)

        if blocked:
            logger.info(f"{len(blocked)} of {len(accepted) + len(blocked)} uploads blocked")
        return accepted, blocked
