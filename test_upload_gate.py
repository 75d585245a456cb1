"""
Upload gate tests.
"""

import pytest

from analyzers import UploadGate
from catalogs import CatalogError, CatalogIndex
from models import ExifFields, SensorType

INDEX = CatalogIndex.load()
GATE = UploadGate.for_index(INDEX)


def test_classic_camera_is_accepted():
    verdict = GATE.evaluate(make="Canon", model="Canon PowerShot G7")

    assert not verdict.blocked
    assert verdict.is_classic
    assert verdict.sensor is SensorType.CCD
    assert verdict.release_year == 2006
    assert verdict.reason == "classic camera"


def test_recent_camera_is_blocked():
    verdict = GATE.evaluate(make="RICOH IMAGING COMPANY, LTD.", model="RICOH GR III")

    assert verdict.blocked
    assert not verdict.is_classic
    assert verdict.release_year == 2019
    assert verdict.sensor is SensorType.CMOS


def test_old_non_classic_camera_is_accepted():
    verdict = GATE.evaluate(make="Canon", model="Canon EOS 5D")

    assert not verdict.blocked
    assert not verdict.is_classic
    assert verdict.release_year == 2005


def test_cutoff_year_itself_is_accepted():
    assert not GATE.evaluate(make="Canon", model="Canon PowerShot G7 X").blocked

    strict = UploadGate.for_index(INDEX, release_year_cutoff=2013)
    assert strict.evaluate(make="Canon", model="Canon PowerShot G7 X").blocked


def test_unknown_release_year_falls_back_to_sensor():
    index = CatalogIndex.from_documents(sensor={'models': {'Old CCD': 'CCD', 'New CMOS': 'CMOS'}})
    gate = UploadGate.for_index(index)

    assert not gate.evaluate(model="Old CCD").blocked
    assert gate.evaluate(model="New CMOS").blocked

    unknown = gate.evaluate(make="Acme", model="Mystery")
    assert unknown.blocked
    assert unknown.sensor is SensorType.UNKNOWN
    assert "Unknown" in unknown.reason


def test_classic_overrides_recent_release_year():
    index = CatalogIndex.from_documents(
        releases={'models': {'New Classic': 2020}},
        classic={'models': ['New Classic']},
    )
    verdict = UploadGate.for_index(index).evaluate(model="New Classic")

    assert not verdict.blocked
    assert verdict.release_year == 2020


def test_missing_input_is_blocked_without_error():
    verdict = GATE.evaluate()

    assert verdict.blocked
    assert verdict.sensor is SensorType.UNKNOWN
    assert verdict.release_year is None
    assert not verdict.is_classic


def test_evaluate_exif_accepts_mappings_and_fields():
    from_mapping = GATE.evaluate_exif({'make': "Canon", 'model': "PowerShot G7"})
    from_fields = GATE.evaluate_exif(ExifFields(make="Canon", model="PowerShot G7"))

    assert from_mapping == from_fields
    assert not from_mapping.blocked


def test_partition_keeps_input_order():
    accepted, blocked = GATE.partition([
        {'make': "Canon", 'model': "Canon PowerShot G7"},
        {'make': "RICOH", 'model': "RICOH GR III"},
        {'make': "Canon", 'model': "Canon EOS 5D"},
        {'make': "Acme", 'model': "Mystery"},
    ])

    assert [verdict.model for verdict in accepted] == ["Canon PowerShot G7", "Canon EOS 5D"]
    assert [verdict.model for verdict in blocked] == ["RICOH GR III", "Mystery"]


def test_from_config_reads_cutoff(tmp_path):
    config_path = tmp_path / 'config.yaml'
    config_path.write_text("upload_gate:\n  release_year_cutoff: 2020\n", encoding='utf-8')

    gate = UploadGate.from_config(str(config_path), index=INDEX)

    assert gate.release_year_cutoff == 2020
    assert not gate.evaluate(make="RICOH", model="RICOH GR III").blocked


def test_from_config_defaults_without_config_file(tmp_path):
    gate = UploadGate.from_config(str(tmp_path / 'missing.yaml'))
    assert gate.release_year_cutoff == 2014


def test_from_config_rejects_non_integer_cutoff(tmp_path):
    config_path = tmp_path / 'config.yaml'
    config_path.write_text("upload_gate:\n  release_year_cutoff: soon\n", encoding='utf-8')

    with pytest.raises(CatalogError, match="release_year_cutoff"):
        UploadGate.from_config(str(config_path), index=INDEX)


def test_verdict_to_dict():
    data = GATE.evaluate(make="Canon", model="Canon PowerShot G7").to_dict()

    assert data['sensor'] == 'CCD'
    assert data['blocked'] is False
    assert data['release_year'] == 2006
