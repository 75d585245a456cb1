"""
Text reporter tests.
"""

from analyzers import UploadGate
from catalogs import CatalogIndex
from models import ExifFields, SensorType
from reporters import TextReporter

INDEX = CatalogIndex.load()
REPORTER = TextReporter()


def test_format_summary():
    lines = REPORTER.format_summary(ExifFields(make="SIGMA", model="SIGMA DP1"), SensorType.FOVEON)

    assert lines == [
        "Camera: SIGMA SIGMA DP1",
        "Lens: Unknown",
        "Sensor: Foveon X3",
    ]


def test_format_summary_with_release_and_classic():
    lines = REPORTER.format_summary(ExifFields(model="NIKON D200"), SensorType.CCD, 2005, True)

    assert "Release Year: 2005" in lines
    assert "Classic: Yes" in lines


def test_format_verdict():
    gate = UploadGate.for_index(INDEX)

    blocked = REPORTER.format_verdict(gate.evaluate(make="RICOH", model="RICOH GR III"))
    accepted = REPORTER.format_verdict(gate.evaluate(make="Canon", model="Canon PowerShot G7"))

    assert "Status: BLOCKED (released 2019, after 2014)" in blocked
    assert "Status: ACCEPTED (classic camera)" in accepted
    assert "Sensor: CCD" in accepted


def test_format_listing_distribution():
    entries = [
        {'id': '1', 'exif': {'make': "Canon", 'camera': "Canon PowerShot G7", 'sensor': 'CCD', 'ccd_status': 'ccd'}},
        {'id': '2', 'exif': {'make': "NIKON", 'camera': "NIKON D200", 'sensor': 'CCD', 'ccd_status': 'ccd'}},
        {'id': '3', 'exif': {'make': "SIGMA", 'camera': "SIGMA fp", 'sensor': 'CMOS', 'ccd_status': 'non-ccd'}},
        {'id': '4', 'exif': {'make': None, 'camera': None, 'sensor': 'UNKNOWN', 'ccd_status': 'unknown'}},
    ]

    text = REPORTER.format_listing(entries)

    assert text.startswith("Photos: 4")
    assert "Sensor Distribution:" in text
    assert "CCD: 2 photos (50.0%)" in text
    assert "CMOS: 1 photos (25.0%)" in text


def test_format_empty_listing():
    text = REPORTER.format_listing([])

    assert text.startswith("Photos: 0")
    assert "Sensor Distribution:" not in text


def test_format_catalog_lists_skipped_entries():
    index = CatalogIndex.from_documents(
        sensor={'models': {'A': 'CCD', 'B': 'ccd'}, 'aliases': {'A': ['A1'], 'Missing': ['M1']}},
    )

    text = REPORTER.format_catalog(index, canonical_models=['A'])

    assert "Skipped entries: 1" in text
    assert "Dangling aliases dropped: 1" in text
    assert "Canonical classic models (1):" in text


def test_save_report(tmp_path):
    reporter = TextReporter(str(tmp_path))

    path = reporter.save_report("Photos: 0", 'listing.txt', subdirectory='lists')

    assert path == str(tmp_path / 'lists' / 'listing.txt')
    assert (tmp_path / 'lists' / 'listing.txt').read_text(encoding='utf-8') == "Photos: 0\n"


def test_from_config(tmp_path):
    config_path = tmp_path / 'config.yaml'
    config_path.write_text("reporting:\n  text_reports_path: out\n", encoding='utf-8')

    assert TextReporter.from_config(str(config_path)).output_directory == 'out'
