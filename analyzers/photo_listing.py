"""
Photo Listing

Annotates archived photos with their sensor classification and filters the
listing down to CCD photos on request.
"""

import logging
from typing import Any, Iterable, List

from models import PhotoRecord, SensorType
from resolvers import SensorClassifier

logger = logging.getLogger(__name__)

_TRUE_VALUES = {'1', 'true'}


def parse_flag(value: Any) -> bool:
    """
    Interpret a query-string flag.

    Example:
        >>> parse_flag("1"), parse_flag("TRUE"), parse_flag("yes"), parse_flag(None)
        (True, True, False, False)
    """
    if not isinstance(value, str) or not value:
        return False
    return value.lower() in _TRUE_VALUES


class PhotoListing:
    """
    Builds the photo listing served to the archive browser.

    Attributes:
        classifier: SensorClassifier instance

    Example:
        >>> listing = PhotoListing(SensorClassifier(CatalogIndex.load()))
        >>> rows = listing.list_photos(records, ccd_only=True)
    """

    def __init__(self, classifier: SensorClassifier):
        self.classifier = classifier

    def annotate(self, record: PhotoRecord) -> dict:
        """
        Add sensor fields to a photo's listing entry.

        The 'exif' block gains:
            sensor: Sensor type name
            ccd: Whether the sensor is CCD
            ccd_status: "ccd", "non-ccd", or "unknown" when the record has no
                camera model or the sensor could not be classified

        Args:
            record: PhotoRecord to annotate

        Returns:
            Listing entry dictionary
        """
        sensor = self.classifier.classify(make=record.make, model=record.camera, lens=record.lens)
        ccd = sensor is SensorType.CCD

        if not record.camera or sensor is SensorType.UNKNOWN:
            status = 'unknown'
        else:
            status = 'ccd' if ccd else 'non-ccd'

        entry = record.to_dict()
        entry['exif'].update({
            'sensor': sensor.value,
            'ccd': ccd,
            'ccd_status': status,
        })
        return entry

    def list_photos(self, records: Iterable[PhotoRecord], ccd_only: bool = False) -> List[dict]:
        """
        Annotate every record, optionally keeping only CCD photos.

        Args:
            records: Archived photos
            ccd_only: Keep only entries whose sensor is CCD

        Returns:
            List of listing entry dictionaries, in input order
        """
        entries = [self.annotate(record) for record in records]
        if ccd_only:
            entries = [entry for entry in entries if entry['exif']['ccd']]
        logger.debug(f"Listing {len(entries)} photos (ccd_only={ccd_only})")
        return entries
