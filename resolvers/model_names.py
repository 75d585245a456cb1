"""
Canonical Model Names

Maps classic-camera model spellings onto one separator-free canonical key,
e.g. "GR DIGITAL II" and "GR-Digital 2" both become "GRDIGITAL2".

Keys here use the strict ``collapse`` policy, unlike every other lookup in
the engine, which uses the space-preserving ``normalize``. The two kinds of
key are not interchangeable.
"""

import weakref
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from catalogs import CatalogIndex, ClassicIndex, get_default_index
from normalizers import collapse, tokenize


class ModelNameIndex:
    """
    Collapsed canonical names for the models of the classic catalog.

    Aliases are kept only when their collapsed canonical label is itself a
    collapsed catalog model, and never replace a model's own key.

    Example:
        >>> names = ModelNameIndex(CatalogIndex.load().classic)
        >>> names.normalize_model("GR Digital II")
        'GRDIGITAL2'
    """

    def __init__(self, classic: ClassicIndex):
        self.labels = classic.labels

        primary: Dict[str, str] = {}
        for label in classic.labels:
            key = collapse(label)
            if key:
                primary[key] = key

        lookup = dict(primary)
        for entry in classic.alias_entries:
            alias_key = collapse(entry.alias)
            canonical_key = collapse(entry.canonical)
            if not alias_key or not canonical_key:
                continue
            if canonical_key not in primary or alias_key in primary:
                continue
            lookup[alias_key] = canonical_key

        self._lookup = MappingProxyType(lookup)

    def normalize_model(self, value: Any) -> Optional[str]:
        """
        Collapse a model name and resolve it to its canonical key.

        Unknown names are returned collapsed but otherwise unchanged.

        Returns:
            Canonical key, or None when nothing alphanumeric is left
        """
        key = collapse(value)
        if not key:
            return None
        return self._lookup.get(key, key)

    def canonical_models(self) -> List[str]:
        """Canonical keys of all catalog models, in declaration order, without repeats."""
        models: List[str] = []
        for label in self.labels:
            key = self.normalize_model(label)
            if key and key not in models:
                models.append(key)
        return models

    @property
    def alias_lookup(self) -> Mapping[str, str]:
        """Read-only map of collapsed spelling -> canonical key."""
        return self._lookup


_names_by_index = weakref.WeakKeyDictionary()


def _names_for(index: CatalogIndex) -> ModelNameIndex:
    # Entries go away with their index
    names = _names_by_index.get(index)
    if names is None:
        names = ModelNameIndex(index.classic)
        _names_by_index[index] = names
    return names


def normalize_model(value: Any, index: Optional[CatalogIndex] = None) -> Optional[str]:
    """Resolve a model name to its collapsed canonical key."""
    return _names_for(index or get_default_index()).normalize_model(value)


def tokenize_model(value: Any) -> List[str]:
    """Split a model name into alphabetic and numeric tokens."""
    return tokenize(value)


def get_canonical_models(index: Optional[CatalogIndex] = None) -> List[str]:
    """List the collapsed canonical keys of the classic catalog."""
    return _names_for(index or get_default_index()).canonical_models()


def get_alias_lookup(index: Optional[CatalogIndex] = None) -> Mapping[str, str]:
    """Return the read-only collapsed alias lookup of the classic catalog."""
    return _names_for(index or get_default_index()).alias_lookup
