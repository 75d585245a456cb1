"""
Catalog index tests: loading, per-entry validation, alias rules and the
process-wide default index.
"""

import json
import threading
import time
from dataclasses import FrozenInstanceError

import pytest

import catalogs
from catalogs import CatalogError, CatalogIndex, read_catalog_file
from models import SensorType


def test_bundled_catalogs_load_cleanly():
    """The shipped catalogs have no malformed entries or dangling aliases"""
    index = CatalogIndex.load()

    for report in index.reports:
        assert report.models > 0
        assert report.skipped == ()
        assert report.dropped_aliases == ()
    assert index.report('sensor').patterns > 0


def test_primary_keys_are_loosely_normalized():
    index = CatalogIndex.from_documents(
        sensor={'models': {'  Canon  PowerShot G7 ': 'CCD'}},
        releases={'models': {'canon powershot g7': 2006}},
        classic={'models': ['Canon PowerShot\tG7']},
    )

    assert index.sensor.models['CANON POWERSHOT G7'] is SensorType.CCD
    assert index.releases.models['CANON POWERSHOT G7'] == 2006
    assert 'CANON POWERSHOT G7' in index.classic.models


def test_dangling_aliases_are_dropped():
    """An alias whose canonical label is not in the catalog never resolves"""
    index = CatalogIndex.from_documents(
        sensor={'models': {'Known': 'CCD'}, 'aliases': {'Missing Camera': ['MC1'], 'Known': ['K1']}},
        releases={'models': {'Known': 2001}, 'aliases': {'R1': 'Missing Camera', 'K1': 'Known'}},
        classic={'models': ['Known'], 'aliases': {'C1': 'Missing Camera', 'K1': 'Known'}},
    )

    assert index.sensor.lookup('MC1') is None
    assert index.sensor.lookup('K1') is SensorType.CCD
    assert index.releases.lookup('R1') is None
    assert index.releases.lookup('K1') == 2001
    assert not index.classic.contains('C1')
    assert index.classic.contains('K1')

    assert index.report('sensor').dropped_aliases == ('MC1',)
    assert index.report('releases').dropped_aliases == ('R1',)
    assert index.report('classic').dropped_aliases == ('C1',)


def test_primary_labels_win_over_aliases():
    index = CatalogIndex.from_documents(
        sensor={'models': {'A1': 'CCD', 'B1': 'CMOS'}, 'aliases': {'B1': ['a1', 'b-one']}},
        releases={'models': {'A1': 2001, 'B1': 2002}, 'aliases': {'a1': 'B1'}},
    )

    assert index.sensor.lookup('A1') is SensorType.CCD
    assert 'A1' not in index.sensor.aliases
    assert index.sensor.lookup('B-ONE') is SensorType.CMOS
    assert index.releases.lookup('A1') == 2001


def test_malformed_entries_are_skipped_individually():
    """A bad entry is dropped and the rest of the catalog still loads"""
    index = CatalogIndex.from_documents(
        sensor={
            'patterns': {'(': 'CCD', 'OK': 'MAYBE', 'GOOD': 'FOVEON'},
            'models': {'Good': 'CCD', 'Lowercase': 'ccd', 'Number': 42},
            'aliases': {'Good': 'not a list', 'Other': ['x', 5]},
        },
        releases={'models': {'Text': '2005', 'Year': 2005, 'Flag': True, 'Float': 2005.0}},
        classic={'models': ['Camera', 5, None], 'aliases': {'alias': 7}},
    )

    assert [rule.source for rule in index.sensor.patterns] == ['GOOD']
    assert dict(index.sensor.models) == {'GOOD': SensorType.CCD}
    assert dict(index.releases.models) == {'YEAR': 2005}
    assert index.classic.models == frozenset({'CAMERA'})

    assert len(index.report('sensor').skipped) == 6
    assert len(index.report('releases').skipped) == 3
    assert len(index.report('classic').skipped) == 3


def test_section_of_the_wrong_type_is_skipped():
    index = CatalogIndex.from_documents(
        classic={'models': {'Camera': True}, 'aliases': ['not', 'a', 'mapping']},
    )

    assert index.classic.models == frozenset()
    assert len(index.report('classic').skipped) == 2


def test_missing_sections_are_empty():
    index = CatalogIndex.from_documents()

    assert index.sensor.patterns == ()
    assert len(index.sensor.models) == 0
    assert len(index.releases.models) == 0
    assert index.classic.models == frozenset()


def test_non_mapping_document_is_rejected():
    with pytest.raises(CatalogError):
        CatalogIndex.from_documents(sensor=['not', 'a', 'mapping'])


def test_index_is_immutable():
    index = CatalogIndex.from_documents(sensor={'models': {'Known': 'CCD'}})

    with pytest.raises(TypeError):
        index.sensor.models['OTHER'] = SensorType.CMOS
    with pytest.raises(FrozenInstanceError):
        index.sensor = None


def test_read_catalog_file_accepts_yaml_and_json(tmp_path):
    yaml_path = tmp_path / 'releases.yaml'
    yaml_path.write_text("models:\n  Canon PowerShot G7: 2006\n", encoding='utf-8')
    json_path = tmp_path / 'releases.json'
    json_path.write_text(json.dumps({'models': {'NIKON D200': 2005}}), encoding='utf-8')
    empty_path = tmp_path / 'empty.yaml'
    empty_path.write_text("", encoding='utf-8')

    assert read_catalog_file(str(yaml_path)) == {'models': {'Canon PowerShot G7': 2006}}
    assert read_catalog_file(str(json_path)) == {'models': {'NIKON D200': 2005}}
    assert read_catalog_file(str(empty_path)) == {}


def test_read_catalog_file_errors(tmp_path):
    list_path = tmp_path / 'list.yaml'
    list_path.write_text("- a\n- b\n", encoding='utf-8')

    with pytest.raises(CatalogError):
        read_catalog_file(str(list_path))
    with pytest.raises(FileNotFoundError):
        read_catalog_file(str(tmp_path / 'missing.yaml'))


def test_from_config_resolves_catalog_directory_relative_to_config(tmp_path):
    catalog_dir = tmp_path / 'cats'
    catalog_dir.mkdir()
    (catalog_dir / 'sensors.yaml').write_text("models:\n  Test Cam: FOVEON\n", encoding='utf-8')
    (catalog_dir / 'camera_releases.yaml').write_text("models:\n  Test Cam: 1999\n", encoding='utf-8')
    (catalog_dir / 'classic_cameras.yaml').write_text("models:\n  - Test Cam\n", encoding='utf-8')
    config_path = tmp_path / 'config.yaml'
    config_path.write_text(
        "catalogs:\n  directory: cats\n  sensor: sensors.yaml\n",
        encoding='utf-8',
    )

    index = CatalogIndex.from_config(str(config_path))

    assert index.sensor.lookup('TEST CAM') is SensorType.FOVEON
    assert index.releases.lookup('TEST CAM') == 1999
    assert index.classic.contains('TEST CAM')


def test_from_config_without_config_file_uses_bundled_catalogs(tmp_path):
    index = CatalogIndex.from_config(str(tmp_path / 'missing.yaml'))

    assert index.sensor.lookup('CANON POWERSHOT G7') is SensorType.CCD


def test_default_index_is_built_once_under_concurrent_access(monkeypatch):
    calls = []
    built = CatalogIndex.from_documents(sensor={'models': {'Known': 'CCD'}})

    class SlowIndex:
        @classmethod
        def load(cls):
            calls.append(1)
            time.sleep(0.05)
            return built

    monkeypatch.setattr(catalogs, '_default_index', None)
    monkeypatch.setattr(catalogs, 'CatalogIndex', SlowIndex)

    results = []
    threads = [
        threading.Thread(target=lambda: results.append(catalogs.get_default_index()))
        for _ in range(8)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(calls) == 1
    assert len(results) == 8
    assert all(result is built for result in results)


def test_configure_default_index_keeps_existing_index(monkeypatch, tmp_path):
    existing = CatalogIndex.from_documents()
    monkeypatch.setattr(catalogs, '_default_index', existing)

    assert catalogs.configure_default_index(str(tmp_path / 'missing.yaml')) is existing
    assert catalogs.get_default_index() is existing
