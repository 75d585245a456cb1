"""
EXIF Reader

Reads the camera identification fields (make, model, lens) from photo files
for the inspector. Only metadata is read; image data is never decoded.
"""

import os
import json
import logging
from typing import Dict, Iterable, List, Optional, Any

try:
    import exiftool  # type: ignore
except ImportError:
    raise ImportError("exiftool is required. Install with: pip install pyexiftool")

from catalogs import DEFAULT_CONFIG_PATH, config_section, load_config
from models import ExifFields

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = [
    '.arw', '.cr2', '.crw', '.dng', '.nef', '.orf', '.pef', '.raf', '.x3f',
    '.jpg', '.jpeg', '.tif', '.tiff', '.heic',
]


class ExifReader:
    """
    Extracts make, model and lens from photos using exiftool.

    Attributes:
        supported_extensions: File extensions considered photos

    Example:
        >>> reader = ExifReader()
        >>> fields = reader.read('/photos/IMG_0001.JPG')
        >>> fields.model
        'Canon PowerShot G7'
    """

    def __init__(self, supported_extensions: Optional[List[str]] = None):
        """
        Initialize EXIF reader.

        Args:
            supported_extensions: List of file extensions to process
        """
        self.supported_extensions = [
            ext.lower() for ext in (supported_extensions or DEFAULT_EXTENSIONS)
        ]

    @classmethod
    def from_config(cls, config_path: str = DEFAULT_CONFIG_PATH) -> 'ExifReader':
        """Create ExifReader from configuration file."""
        config = load_config(config_path)
        extraction_config = config_section(config, 'extraction')
        return cls(supported_extensions=extraction_config.get('supported_extensions'))

    def is_supported(self, file_path: str) -> bool:
        """Check whether a file has a supported photo extension."""
        return os.path.splitext(file_path)[1].lower() in self.supported_extensions

    @staticmethod
    def _text(metadata: Dict[str, Any], key: str) -> Optional[str]:
        value = metadata.get(key)
        if not isinstance(value, str):
            return None
        value = value.strip()
        return value or None

    def _parse(self, output: str, file_path: str) -> Optional[ExifFields]:
        metadata_list = json.loads(output)
        if not metadata_list:
            logger.warning(f"No metadata found for: {file_path}")
            return None

        metadata = metadata_list[0]
        return ExifFields(
            make=self._text(metadata, 'EXIF:Make'),
            model=self._text(metadata, 'EXIF:Model'),
            lens=self._text(metadata, 'EXIF:LensModel'),
        )

    def read(self, file_path: str) -> Optional[ExifFields]:
        """
        Read camera fields from a single photo.

        Args:
            file_path: Path to the photo

        Returns:
            ExifFields (fields missing from the file are None), or None if
            extraction fails
        """
        return self.read_many([file_path]).get(file_path)

    def read_many(self, file_paths: Iterable[str]) -> Dict[str, Optional[ExifFields]]:
        """
        Read camera fields from several photos with one exiftool process.

        Args:
            file_paths: Paths to photos

        Returns:
            Dictionary of path -> ExifFields, or None where extraction failed
        """
        results: Dict[str, Optional[ExifFields]] = {}
        paths = list(file_paths)
        if not paths:
            return results

        try:
            with exiftool.ExifTool() as et:
                for file_path in paths:
                    try:
                        output = et.execute("-j", "-G", file_path)
                        results[file_path] = self._parse(output, file_path)
                    except json.JSONDecodeError as e:
                        logger.error(f"Failed to parse ExifTool output for {file_path}: {e}")
                        results[file_path] = None
                    except Exception as e:
                        logger.error(f"Error extracting metadata from {file_path}: {e}")
                        results[file_path] = None
        except Exception as e:
            logger.error(f"Could not run ExifTool: {e}")

        # Paths never reached keep a None result
        for file_path in paths:
            results.setdefault(file_path, None)

        return results

    def find_photos(self, folder_path: str) -> List[str]:
        """List supported photos under a folder, sorted by path."""
        if not os.path.exists(folder_path):
            logger.warning(f"Path does not exist: {folder_path}")
            return []

        photos = []
        for root, dirs, filenames in os.walk(folder_path):
            for filename in filenames:
                if self.is_supported(filename):
                    photos.append(os.path.join(root, filename))
        return sorted(photos)
