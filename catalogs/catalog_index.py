"""
Catalog Index

Loads the sensor, release-year and classic-camera catalogs into immutable
in-memory lookup tables.

Raw catalog documents are parsed into typed entries first. Entries with the
wrong shape are logged and skipped one at a time, so a single bad line in a
catalog never stops the index from being built. Aliases are only kept when
their canonical label exists in the same catalog, and never shadow a primary
label.
"""

import os
import re
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, FrozenSet, List, Mapping, Optional, Tuple

import yaml

from models import AliasEntry, ModelEntry, PatternRule, SensorType
from normalizers import normalize

from .config import DEFAULT_CONFIG_PATH, config_section, load_config
from .exceptions import CatalogError

logger = logging.getLogger(__name__)

DATA_DIRECTORY = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data')

DEFAULT_CATALOG_FILES = {
    'sensor': 'sensor_catalog.yaml',
    'releases': 'camera_releases.yaml',
    'classic': 'classic_cameras.yaml',
}


@dataclass(frozen=True)
class LoadReport:
    """
    Summary of how one catalog was loaded.

    Attributes:
        catalog: Catalog name ('sensor', 'releases' or 'classic')
        models: Number of primary keys in the index
        aliases: Number of alias keys in the index
        patterns: Number of pattern rules (sensor catalog only)
        skipped: Descriptions of malformed entries that were skipped
        dropped_aliases: Aliases discarded because their canonical label is unknown
    """

    catalog: str
    models: int
    aliases: int
    patterns: int = 0
    skipped: Tuple[str, ...] = ()
    dropped_aliases: Tuple[str, ...] = ()


class _EntryLog:
    """Collects skipped entries and dropped aliases while one catalog is parsed."""

    def __init__(self, catalog: str):
        self.catalog = catalog
        self.skipped: List[str] = []
        self.dropped: List[str] = []

    def skip(self, description: str, reason: str):
        logger.warning(f"Skipping {self.catalog} catalog entry {description}: {reason}")
        self.skipped.append(description)

    def drop_alias(self, entry: AliasEntry):
        logger.debug(
            f"Dropping {self.catalog} alias {entry.alias!r}: "
            f"canonical label {entry.canonical!r} is not in the catalog"
        )
        self.dropped.append(entry.alias)

    def report(self, models: int, aliases: int, patterns: int = 0) -> LoadReport:
        return LoadReport(
            catalog=self.catalog,
            models=models,
            aliases=aliases,
            patterns=patterns,
            skipped=tuple(self.skipped),
            dropped_aliases=tuple(self.dropped),
        )


@dataclass(frozen=True, eq=False)
class SensorIndex:
    """Sensor lookup tables: ordered pattern rules, primary models and aliases."""

    patterns: Tuple[PatternRule, ...]
    models: Mapping[str, SensorType]
    aliases: Mapping[str, SensorType]

    def lookup(self, key: Optional[str]) -> Optional[SensorType]:
        """Look a normalized key up in the primary map, then the alias map."""
        if key is None:
            return None
        sensor = self.models.get(key)
        if sensor is None:
            sensor = self.aliases.get(key)
        return sensor

    def match_pattern(self, haystack: Optional[str]) -> Optional[SensorType]:
        """Return the sensor of the first rule matching haystack, in declaration order."""
        if not haystack:
            return None
        for rule in self.patterns:
            if rule.matches(haystack):
                return rule.sensor
        return None


@dataclass(frozen=True, eq=False)
class ReleaseIndex:
    """Release-year lookup tables."""

    models: Mapping[str, int]
    aliases: Mapping[str, int]

    def lookup(self, key: Optional[str]) -> Optional[int]:
        if key is None:
            return None
        year = self.models.get(key)
        if year is None:
            year = self.aliases.get(key)
        return year


@dataclass(frozen=True, eq=False)
class ClassicIndex:
    """
    Classic-camera lookup tables.

    Besides the normalized set and alias map, the declared labels and alias
    entries are kept verbatim for helpers that apply their own key policy.
    """

    models: FrozenSet[str]
    aliases: Mapping[str, str]
    labels: Tuple[str, ...] = ()
    alias_entries: Tuple[AliasEntry, ...] = ()

    def contains(self, key: Optional[str]) -> bool:
        """Check direct membership, or membership of the alias's canonical label."""
        if key is None:
            return False
        if key in self.models:
            return True
        canonical = self.aliases.get(key)
        return canonical is not None and canonical in self.models


def read_catalog_file(path: str) -> Dict[str, Any]:
    """
    Read one catalog document.

    YAML and JSON files are both accepted (JSON is a subset of YAML).

    Args:
        path: Path to the catalog file

    Returns:
        Catalog document (empty dict for an empty file)

    Raises:
        FileNotFoundError: If the file does not exist
        CatalogError: If the document's top level is not a mapping
    """
    with open(path, 'r', encoding='utf-8') as f:
        document = yaml.safe_load(f)

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise CatalogError(f"Catalog {path} must be a mapping, got {type(document).__name__}")
    return document


def _section(document: Dict[str, Any], name: str, expected: type, log: _EntryLog):
    value = document.get(name)
    if value is None:
        return expected()
    if not isinstance(value, expected):
        log.skip(f"section '{name}'", f"expected {expected.__name__}, got {type(value).__name__}")
        return expected()
    return value


def _sensor_value(value: Any) -> Optional[SensorType]:
    # Catalog values must be spelled exactly as the enum members
    if isinstance(value, str) and value in SensorType.__members__:
        return SensorType[value]
    return None


def _year_value(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _parse_patterns(section: Dict[Any, Any], log: _EntryLog) -> List[PatternRule]:
    rules = []
    for source, sensor in section.items():
        if not isinstance(source, str) or not source:
            log.skip(f"pattern {source!r}", "pattern must be a non-empty string")
            continue
        sensor_type = _sensor_value(sensor)
        if sensor_type is None:
            log.skip(f"pattern {source!r}", f"unknown sensor type {sensor!r}")
            continue
        try:
            compiled = re.compile(source, re.IGNORECASE)
        except re.error as e:
            log.skip(f"pattern {source!r}", f"invalid regular expression ({e})")
            continue
        rules.append(PatternRule(source=source, pattern=compiled, sensor=sensor_type))
    return rules


def _parse_models(section: Dict[Any, Any], parse_value: Callable[[Any], Any],
                  log: _EntryLog) -> List[ModelEntry]:
    entries = []
    for label, value in section.items():
        if not isinstance(label, str):
            log.skip(f"model {label!r}", "label must be a string")
            continue
        parsed = parse_value(value)
        if parsed is None:
            log.skip(f"model {label!r}", f"invalid value {value!r}")
            continue
        entries.append(ModelEntry(label=label, value=parsed))
    return entries


def _parse_model_list(section: List[Any], log: _EntryLog) -> List[ModelEntry]:
    entries = []
    for label in section:
        if not isinstance(label, str):
            log.skip(f"model {label!r}", "label must be a string")
            continue
        entries.append(ModelEntry(label=label, value=True))
    return entries


def _parse_alias_lists(section: Dict[Any, Any], log: _EntryLog) -> List[AliasEntry]:
    """Parse aliases declared as canonical label -> list of alternate spellings."""
    entries = []
    for canonical, aliases in section.items():
        if not isinstance(canonical, str):
            log.skip(f"aliases for {canonical!r}", "canonical label must be a string")
            continue
        if not isinstance(aliases, list):
            log.skip(f"aliases for {canonical!r}", "aliases must be a list")
            continue
        for alias in aliases:
            if not isinstance(alias, str):
                log.skip(f"alias {alias!r} of {canonical!r}", "alias must be a string")
                continue
            entries.append(AliasEntry(alias=alias, canonical=canonical))
    return entries


def _parse_alias_map(section: Dict[Any, Any], log: _EntryLog) -> List[AliasEntry]:
    """Parse aliases declared as alias -> canonical label."""
    entries = []
    for alias, canonical in section.items():
        if not isinstance(alias, str) or not isinstance(canonical, str):
            log.skip(f"alias {alias!r}", "alias and canonical label must be strings")
            continue
        entries.append(AliasEntry(alias=alias, canonical=canonical))
    return entries


def _index_models(entries: List[ModelEntry], log: _EntryLog) -> Dict[str, Any]:
    primary: Dict[str, Any] = {}
    for entry in entries:
        key = normalize(entry.label)
        if key is None:
            log.skip(f"model {entry.label!r}", "label is empty")
            continue
        primary[key] = entry.value
    return primary


def _index_aliases(entries: List[AliasEntry], primary: Dict[str, Any],
                   log: _EntryLog) -> Dict[str, str]:
    """Map normalized alias keys to normalized canonical keys."""
    aliases: Dict[str, str] = {}
    for entry in entries:
        alias_key = normalize(entry.alias)
        canonical_key = normalize(entry.canonical)
        if alias_key is None or canonical_key is None:
            log.skip(f"alias {entry.alias!r}", "alias or canonical label is empty")
            continue
        if canonical_key not in primary:
            log.drop_alias(entry)
            continue
        if alias_key in primary:
            # Primary labels always win over aliases
            continue
        aliases[alias_key] = canonical_key
    return aliases


def build_sensor_index(document: Dict[str, Any]) -> Tuple[SensorIndex, LoadReport]:
    """Build the sensor index from a raw sensor catalog document."""
    log = _EntryLog('sensor')
    patterns = _parse_patterns(_section(document, 'patterns', dict, log), log)
    models = _index_models(_parse_models(_section(document, 'models', dict, log), _sensor_value, log), log)
    alias_keys = _index_aliases(_parse_alias_lists(_section(document, 'aliases', dict, log), log), models, log)
    aliases = {alias: models[canonical] for alias, canonical in alias_keys.items()}

    index = SensorIndex(
        patterns=tuple(patterns),
        models=MappingProxyType(models),
        aliases=MappingProxyType(aliases),
    )
    return index, log.report(len(models), len(aliases), len(patterns))


def build_release_index(document: Dict[str, Any]) -> Tuple[ReleaseIndex, LoadReport]:
    """Build the release-year index from a raw release catalog document."""
    log = _EntryLog('releases')
    models = _index_models(_parse_models(_section(document, 'models', dict, log), _year_value, log), log)
    alias_keys = _index_aliases(_parse_alias_map(_section(document, 'aliases', dict, log), log), models, log)
    aliases = {alias: models[canonical] for alias, canonical in alias_keys.items()}

    index = ReleaseIndex(models=MappingProxyType(models), aliases=MappingProxyType(aliases))
    return index, log.report(len(models), len(aliases))


def build_classic_index(document: Dict[str, Any]) -> Tuple[ClassicIndex, LoadReport]:
    """Build the classic-camera index from a raw classic catalog document."""
    log = _EntryLog('classic')
    model_entries = _parse_model_list(_section(document, 'models', list, log), log)
    alias_entries = _parse_alias_map(_section(document, 'aliases', dict, log), log)
    models = _index_models(model_entries, log)
    aliases = _index_aliases(alias_entries, models, log)

    index = ClassicIndex(
        models=frozenset(models),
        aliases=MappingProxyType(aliases),
        labels=tuple(entry.label for entry in model_entries),
        alias_entries=tuple(alias_entries),
    )
    return index, log.report(len(models), len(aliases))


def _document(value: Optional[Dict[str, Any]], name: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise CatalogError(f"{name} catalog must be a mapping, got {type(value).__name__}")
    return value


@dataclass(frozen=True, eq=False)
class CatalogIndex:
    """
    Immutable, process-wide lookup tables for all three catalogs.

    Built once, synchronously, before any resolver runs; resolvers receive
    it through their constructor and only ever read from it.

    Attributes:
        sensor: Sensor pattern rules, models and aliases
        releases: Release years by model and alias
        classic: Classic-camera model set and aliases
        reports: One LoadReport per catalog

    Example:
        >>> index = CatalogIndex.load()
        >>> classifier = SensorClassifier(index)
        >>> classifier.classify(make="Canon", model="Canon PowerShot G7")
        <SensorType.CCD: 'CCD'>
    """

    sensor: SensorIndex
    releases: ReleaseIndex
    classic: ClassicIndex
    reports: Tuple[LoadReport, ...] = ()

    @classmethod
    def from_documents(cls, sensor: Optional[Dict[str, Any]] = None,
                       releases: Optional[Dict[str, Any]] = None,
                       classic: Optional[Dict[str, Any]] = None) -> 'CatalogIndex':
        """
        Build an index from already-parsed catalog documents.

        Args:
            sensor: Sensor catalog document (patterns, models, aliases)
            releases: Release catalog document (models, aliases)
            classic: Classic catalog document (models, aliases)

        Returns:
            CatalogIndex instance

        Raises:
            CatalogError: If a document is not a mapping
        """
        sensor_index, sensor_report = build_sensor_index(_document(sensor, 'sensor'))
        release_index, release_report = build_release_index(_document(releases, 'releases'))
        classic_index, classic_report = build_classic_index(_document(classic, 'classic'))

        return cls(
            sensor=sensor_index,
            releases=release_index,
            classic=classic_index,
            reports=(sensor_report, release_report, classic_report),
        )

    @classmethod
    def load(cls, directory: Optional[str] = None,
             sensor: str = DEFAULT_CATALOG_FILES['sensor'],
             releases: str = DEFAULT_CATALOG_FILES['releases'],
             classic: str = DEFAULT_CATALOG_FILES['classic']) -> 'CatalogIndex':
        """
        Load catalog files from a directory.

        Args:
            directory: Directory holding the catalogs (defaults to bundled data)
            sensor: Sensor catalog filename
            releases: Release catalog filename
            classic: Classic catalog filename

        Returns:
            CatalogIndex instance
        """
        directory = directory or DATA_DIRECTORY
        index = cls.from_documents(
            sensor=read_catalog_file(os.path.join(directory, sensor)),
            releases=read_catalog_file(os.path.join(directory, releases)),
            classic=read_catalog_file(os.path.join(directory, classic)),
        )

        for report in index.reports:
            logger.info(
                f"Loaded {report.catalog} catalog: {report.models} models, "
                f"{report.aliases} aliases, {report.patterns} patterns "
                f"({len(report.skipped)} skipped, {len(report.dropped_aliases)} dangling aliases dropped)"
            )
        return index

    @classmethod
    def from_config(cls, config_path: Optional[str] = DEFAULT_CONFIG_PATH) -> 'CatalogIndex':
        """
        Create CatalogIndex from configuration file.

        Reads the optional 'catalogs' section. A relative catalog directory is
        resolved against the configuration file's own directory.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            Configured CatalogIndex instance
        """
        config = load_config(config_path)
        catalogs = config_section(config, 'catalogs')

        directory = catalogs.get('directory')
        if directory and not os.path.isabs(directory):
            base = os.path.dirname(os.path.abspath(config_path))
            directory = os.path.join(base, directory)

        files = {
            name: catalogs.get(name) or default
            for name, default in DEFAULT_CATALOG_FILES.items()
        }
        return cls.load(directory, **files)

    def report(self, catalog: str) -> Optional[LoadReport]:
        """Return the load report for a catalog by name."""
        for report in self.reports:
            if report.catalog == catalog:
                return report
        return None
