"""
Text Reporter

Generates plain-text summaries of upload verdicts, photo listings and
catalog load reports.
"""

import os
import logging
from collections import Counter
from typing import Iterable, List, Optional

from catalogs import CatalogIndex, DEFAULT_CONFIG_PATH, config_section, load_config
from models import ExifFields, SensorType, UploadVerdict

logger = logging.getLogger(__name__)


class TextReporter:
    """
    Formats engine results as text and optionally saves them.

    Attributes:
        output_directory: Base directory for saved reports

    Example:
        >>> reporter = TextReporter('reports/')
        >>> print(reporter.format_verdict(gate.evaluate(make="Canon", model="PowerShot G7")))
    """

    def __init__(self, output_directory: str = 'reports'):
        """
        Initialize text reporter.

        Args:
            output_directory: Base directory for saving reports
        """
        self.output_directory = output_directory

    @classmethod
    def from_config(cls, config_path: str = DEFAULT_CONFIG_PATH) -> 'TextReporter':
        """Create TextReporter from configuration file."""
        config = load_config(config_path)
        output_dir = config_section(config, 'reporting').get('text_reports_path', 'reports')
        return cls(output_directory=output_dir)

    @staticmethod
    def _value(value, fallback: str = "Unknown") -> str:
        if value is None or value == "":
            return fallback
        return str(value)

    def format_summary(self, fields: ExifFields, sensor: SensorType,
                       release_year: Optional[int] = None,
                       is_classic: Optional[bool] = None) -> List[str]:
        """
        Summary lines for one camera.

        Release year and classic status are only shown when given.
        """
        lines = [
            f"Camera: {self._value(fields.camera)}",
            f"Lens: {self._value(fields.lens)}",
            f"Sensor: {sensor.label}",
        ]
        if release_year is not None or is_classic is not None:
            lines.append(f"Release Year: {self._value(release_year)}")
        if is_classic is not None:
            lines.append(f"Classic: {'Yes' if is_classic else 'No'}")
        return lines

    def format_verdict(self, verdict: UploadVerdict) -> str:
        """
        Format an upload verdict.

        Args:
            verdict: UploadVerdict to report

        Returns:
            Formatted text
        """
        fields = ExifFields(make=verdict.make, model=verdict.model, lens=verdict.lens)
        lines = self.format_summary(fields, verdict.sensor, verdict.release_year, verdict.is_classic)
        status = "BLOCKED" if verdict.blocked else "ACCEPTED"
        lines.append(f"Status: {status} ({verdict.reason})")
        return "\n".join(lines)

    def format_listing(self, entries: Iterable[dict]) -> str:
        """
        Format annotated listing entries with a sensor distribution.

        Args:
            entries: Entries produced by PhotoListing

        Returns:
            Formatted text
        """
        entries = list(entries)
        total = len(entries)
        lines = [f"Photos: {total}", "=" * 80]

        for entry in entries:
            exif = entry.get('exif', {})
            camera = " ".join(part for part in (exif.get('make'), exif.get('camera')) if part)
            lines.append(
                f"  {self._value(entry.get('id'), '-'):16} | {self._value(camera):40} | "
                f"{exif.get('sensor', 'UNKNOWN'):7} | {exif.get('ccd_status', 'unknown')}"
            )

        if total:
            lines.append("\nSensor Distribution:")
            counts = Counter(entry.get('exif', {}).get('sensor', 'UNKNOWN') for entry in entries)
            for sensor, count in counts.most_common():
                lines.append(f"  {sensor}: {count} photos ({count / total * 100:.1f}%)")

        return "\n".join(lines)

    def format_catalog(self, index: CatalogIndex, canonical_models: Optional[List[str]] = None) -> str:
        """
        Format the load reports of a catalog index.

        Args:
            index: CatalogIndex to describe
            canonical_models: Optional collapsed canonical classic models to list

        Returns:
            Formatted text
        """
        lines = ["Catalogs", "=" * 80]
        for report in index.reports:
            lines.append(f"\n{report.catalog}")
            lines.append("-" * 80)
            lines.append(f"  Models: {report.models}")
            lines.append(f"  Aliases: {report.aliases}")
            if report.catalog == 'sensor':
                lines.append(f"  Patterns: {report.patterns}")
            if report.skipped:
                lines.append(f"  Skipped entries: {len(report.skipped)}")
                for description in report.skipped:
                    lines.append(f"    - {description}")
            if report.dropped_aliases:
                lines.append(f"  Dangling aliases dropped: {len(report.dropped_aliases)}")
                for alias in report.dropped_aliases:
                    lines.append(f"    - {alias}")

        if canonical_models is not None:
            lines.append(f"\nCanonical classic models ({len(canonical_models)}):")
            for model in canonical_models:
                lines.append(f"  {model}")

        return "\n".join(lines)

    def save_report(self, report_text: str, filename: str,
                    subdirectory: Optional[str] = None) -> str:
        """
        Write a report to the output directory.

        Args:
            report_text: Report content
            filename: Output filename
            subdirectory: Optional subdirectory within output_directory

        Returns:
            Path to the written report
        """
        if subdirectory:
            output_dir = os.path.join(self.output_directory, subdirectory)
        else:
            output_dir = self.output_directory

        os.makedirs(output_dir, exist_ok=True)
        output_path = os.path.join(output_dir, filename)

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(report_text)
            f.write("\n")

        logger.info(f"Generated text report: {output_path}")
        return output_path
