#!/usr/bin/env python3
"""
Phoneme Table Loader
====================
Loads the IAST and Devanagari phoneme inventories, the gradation maps
and the substitution tables from YAML files in this directory.

Tables are loaded once and exposed as frozen dataclasses over read-only
mappings. Every engine operation accepts an explicit `registry=` so tests
and callers can inject their own tables.

Usage:
    from sutrakit.phonemes import load_registry

    registry = load_registry()
    registry.lookup('ṛ').gradation       # 'ik'
    registry.gradation.guna_map(Script.IAST)['ṛ']   # 'ar'
"""

import yaml
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Any, Optional, Tuple, FrozenSet
from dataclasses import dataclass
from functools import lru_cache

from sutrakit.script import Script, detect_script, normalize_word, parse_script


# =============================================================================
# Configuration Path
# =============================================================================

PHONEMES_DIR = Path(__file__).parent

VOWEL = 'vowel'
CONSONANT = 'consonant'
MODIFIER = 'modifier'

# Attributes that must agree between a phoneme and its counterpart
CLASSIFICATION_FIELDS = (
    'category', 'grade', 'gradation', 'place', 'manner',
    'voiced', 'aspirated', 'name',
)


# =============================================================================
# Data Classes for Typed Access
# =============================================================================

@dataclass(frozen=True)
class Phoneme:
    """One sound of one script, with its classification."""
    grapheme: str
    script: Script
    category: str
    counterpart: str
    sign: Optional[str] = None
    grade: Optional[str] = None
    gradation: Optional[str] = None
    place: Optional[str] = None
    manner: Optional[str] = None
    voiced: Optional[bool] = None
    aspirated: Optional[bool] = None
    name: Optional[str] = None

    @property
    def is_vowel(self) -> bool:
        return self.category == VOWEL

    @property
    def is_consonant(self) -> bool:
        return self.category == CONSONANT

    @property
    def is_modifier(self) -> bool:
        return self.category == MODIFIER

    @property
    def is_ik(self) -> bool:
        return self.gradation == 'ik'

    @property
    def iast(self) -> str:
        """The IAST spelling of this phoneme, whatever its script."""
        return self.grapheme if self.script is Script.IAST else self.counterpart

    def classification(self) -> Tuple:
        return tuple(getattr(self, f) for f in CLASSIFICATION_FIELDS)


@dataclass(frozen=True)
class ScriptTable:
    """Phoneme inventory of a single script."""
    script: Script
    phonemes: Mapping[str, Phoneme]
    signs: Mapping[str, Phoneme]
    virama: Optional[str]
    nukta: Optional[str]
    max_grapheme_length: int

    def lookup(self, grapheme: str) -> Optional[Phoneme]:
        """Phoneme for an independent grapheme or a vowel sign."""
        phoneme = self.phonemes.get(grapheme)
        if phoneme is None and grapheme:
            phoneme = self.signs.get(grapheme)
        return phoneme

    @property
    def inherent_vowel(self) -> Optional[Phoneme]:
        """The vowel written with an empty sign (Devanagari short a)."""
        return self.signs.get('')

    def by_category(self, category: str) -> List[Phoneme]:
        return [p for p in self.phonemes.values() if p.category == category]

    def by_gradation(self, gradation: str) -> List[Phoneme]:
        return [p for p in self.phonemes.values() if p.gradation == gradation]


@dataclass(frozen=True)
class GradationTables:
    """Per-script vowel maps: guna, vriddhi, long->short, ec->ik, rapara."""
    guna: Mapping[Script, Mapping[str, str]]
    vriddhi: Mapping[Script, Mapping[str, str]]
    long_to_short: Mapping[Script, Mapping[str, str]]
    ec_to_ik: Mapping[Script, Mapping[str, str]]
    rapara_substitutes: Mapping[Script, FrozenSet[str]]
    rapara_originals: Mapping[Script, FrozenSet[str]]
    rapara_augment: Mapping[Script, str]

    def guna_map(self, script: Script) -> Mapping[str, str]:
        return self.guna[script]

    def vriddhi_map(self, script: Script) -> Mapping[str, str]:
        return self.vriddhi[script]


@dataclass(frozen=True)
class SubstitutionTables:
    """Substitution-type patterns and per-process suggestion tables (IAST)."""
    patterns: Mapping[str, str]
    default_type: str
    declension: Mapping[str, Tuple[str, ...]]
    conjugation: Mapping[str, Tuple[str, ...]]
    conjugation_default: Tuple[str, ...]
    derivation: Tuple[str, ...]
    sandhi: Mapping[str, Tuple[str, ...]]
    general: Tuple[str, ...]

    def substitution_type(self, replacement: str) -> str:
        return self.patterns.get(replacement, self.default_type)


@dataclass(frozen=True)
class PhonemeRegistry:
    """Everything the engine reads: both scripts plus rule tables."""
    iast: ScriptTable
    devanagari: ScriptTable
    gradation: GradationTables
    substitutions: SubstitutionTables

    def table(self, script: Script) -> ScriptTable:
        if script is Script.IAST:
            return self.iast
        if script is Script.DEVANAGARI:
            return self.devanagari
        raise ValueError(f"No phoneme table for script {script!r}")

    def lookup(self, grapheme: str, script: Optional[Script] = None) -> Optional[Phoneme]:
        """Phoneme for a grapheme or vowel sign; script detected if omitted."""
        if not isinstance(grapheme, str) or not grapheme:
            return None
        if script is None:
            script = detect_script(grapheme)
        if script not in (Script.IAST, Script.DEVANAGARI):
            return None
        return self.table(script).lookup(normalize_word(grapheme, script))

    def counterpart_of(self, phoneme: Phoneme) -> Optional[Phoneme]:
        other = Script.DEVANAGARI if phoneme.script is Script.IAST else Script.IAST
        return self.table(other).phonemes.get(phoneme.counterpart)


# =============================================================================
# Loader Functions
# =============================================================================

def _load_yaml(filename: str) -> Dict[str, Any]:
    """Load a YAML file from the phonemes directory."""
    filepath = PHONEMES_DIR / filename
    if not filepath.exists():
        raise FileNotFoundError(f"Phoneme config not found: {filepath}")

    with open(filepath, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def _require(raw: Dict[str, Any], key: str, filename: str) -> Any:
    if key not in raw or raw[key] is None:
        raise ValueError(f"{key} must be set in {filename}")
    return raw[key]


def _build_table(filename: str) -> ScriptTable:
    raw = _load_yaml(filename)
    script = parse_script(_require(raw, 'script', filename))

    phonemes: Dict[str, Phoneme] = {}
    signs: Dict[str, Phoneme] = {}
    for section, category in (('vowels', VOWEL), ('consonants', CONSONANT),
                              ('modifiers', MODIFIER)):
        for grapheme, attrs in _require(raw, section, filename).items():
            attrs = dict(attrs or {})
            if 'counterpart' not in attrs:
                raise ValueError(f"{section}.{grapheme}.counterpart must be set in {filename}")
            phoneme = Phoneme(grapheme=str(grapheme), script=script, category=category, **attrs)
            phonemes[phoneme.grapheme] = phoneme
            if phoneme.sign is not None:
                signs[phoneme.sign] = phoneme

    return ScriptTable(
        script=script,
        phonemes=MappingProxyType(phonemes),
        signs=MappingProxyType(signs),
        virama=raw.get('virama'),
        nukta=raw.get('nukta'),
        max_grapheme_length=max(len(g) for g in phonemes),
    )


def _per_script(section: Dict[str, Any], convert=None) -> Mapping[Script, Any]:
    convert = convert or (lambda v: MappingProxyType(dict(v)))
    return MappingProxyType({
        parse_script(key): convert(value) for key, value in section.items()
    })


@lru_cache(maxsize=1)
def load_iast() -> ScriptTable:
    """Load the IAST phoneme inventory."""
    return _build_table('iast.yaml')


@lru_cache(maxsize=1)
def load_devanagari() -> ScriptTable:
    """Load the Devanagari phoneme inventory."""
    return _build_table('devanagari.yaml')


@lru_cache(maxsize=1)
def load_gradation() -> GradationTables:
    """Load guna/vriddhi, shortening and rapara maps."""
    filename = 'gradation.yaml'
    raw = _load_yaml(filename)
    rapara = _require(raw, 'rapara', filename)

    return GradationTables(
        guna=_per_script(_require(raw, 'guna', filename)),
        vriddhi=_per_script(_require(raw, 'vriddhi', filename)),
        long_to_short=_per_script(_require(raw, 'long_to_short', filename)),
        ec_to_ik=_per_script(_require(raw, 'ec_to_ik', filename)),
        rapara_substitutes=_per_script(rapara['substitutes'], frozenset),
        rapara_originals=_per_script(rapara['originals'], frozenset),
        rapara_augment=_per_script(rapara['augment'], str),
    )


@lru_cache(maxsize=1)
def load_substitutions() -> SubstitutionTables:
    """Load substitution-type patterns and suggestion tables."""
    filename = 'substitutions.yaml'
    raw = _load_yaml(filename)

    def rows(key):
        return MappingProxyType({
            final: tuple(values) for final, values in _require(raw, key, filename).items()
        })

    return SubstitutionTables(
        patterns=MappingProxyType(dict(_require(raw, 'patterns', filename))),
        default_type=raw.get('default_type', 'general_substitution'),
        declension=rows('declension'),
        conjugation=rows('conjugation'),
        conjugation_default=tuple(_require(raw, 'conjugation_default', filename)),
        derivation=tuple(_require(raw, 'derivation', filename)),
        sandhi=rows('sandhi'),
        general=tuple(_require(raw, 'general', filename)),
    )


@lru_cache(maxsize=1)
def load_registry() -> PhonemeRegistry:
    """Load every table into a single registry."""
    return PhonemeRegistry(
        iast=load_iast(),
        devanagari=load_devanagari(),
        gradation=load_gradation(),
        substitutions=load_substitutions(),
    )


def reload_tables():
    """Clear all cached tables (for tests or after editing the YAML files)."""
    load_iast.cache_clear()
    load_devanagari.cache_clear()
    load_gradation.cache_clear()
    load_substitutions.cache_clear()
    load_registry.cache_clear()


def validate_correspondence(registry: Optional[PhonemeRegistry] = None) -> List[str]:
    """Check the IAST and Devanagari tables correspond one to one.

    Returns a list of problems; an empty list means the tables agree.
    """
    registry = registry or load_registry()
    problems = []

    for table in (registry.iast, registry.devanagari):
        for grapheme, phoneme in table.phonemes.items():
            other = registry.counterpart_of(phoneme)
            if other is None:
                problems.append(
                    f"{table.script.value} {grapheme!r}: counterpart "
                    f"{phoneme.counterpart!r} missing"
                )
                continue
            if other.counterpart != grapheme:
                problems.append(
                    f"{table.script.value} {grapheme!r}: counterpart "
                    f"{other.grapheme!r} points back to {other.counterpart!r}"
                )
            if other.classification() != phoneme.classification():
                problems.append(
                    f"{table.script.value} {grapheme!r}: classification differs "
                    f"from {other.grapheme!r}"
                )

    if len(registry.iast.phonemes) != len(registry.devanagari.phonemes):
        problems.append(
            f"table sizes differ: {len(registry.iast.phonemes)} IAST vs "
            f"{len(registry.devanagari.phonemes)} Devanagari"
        )
    return problems


__all__ = [
    # Loaders
    'load_iast',
    'load_devanagari',
    'load_gradation',
    'load_substitutions',
    'load_registry',
    'reload_tables',
    'validate_correspondence',
    # Data classes
    'Phoneme',
    'ScriptTable',
    'GradationTables',
    'SubstitutionTables',
    'PhonemeRegistry',
    # Categories
    'VOWEL',
    'CONSONANT',
    'MODIFIER',
    'PHONEMES_DIR',
]
