#!/usr/bin/env python3
"""
Operation Contexts
==================
Typed, validated contexts for substitution, shortening and upadha
analysis.

Contexts are frozen. Enumerated values are checked when the context is
built, so an unknown gender or elision type fails loudly instead of
silently disabling a rule. Plain dicts are accepted wherever a context is
expected; both snake_case and camelCase keys are understood.

Usage:
    ctx = ShorteningContext(gender='neuter', is_pratipadika=True)
    ctx = coerce_context(ShorteningContext, {'taddhitaElisionType': 'LUK'})
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from sutrakit.script import Script, parse_script


class Gender(Enum):
    NEUTER = "neuter"
    MASCULINE = "masculine"
    FEMININE = "feminine"


class ElisionType(Enum):
    """Taddhita affix elision."""
    LUK = "luk"
    LUP = "lup"


class MorphProcess(Enum):
    """Morphological process a substitution serves."""
    DECLENSION = "declension"
    CONJUGATION = "conjugation"
    DERIVATION = "derivation"
    SANDHI = "sandhi"
    GENERAL = "general"


class GrammarContext(Enum):
    GENERAL = "general"
    CLASSICAL = "classical"
    VEDIC = "vedic"


def _coerce_enum(enum_cls, value, field_name: str):
    if value is None or isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            pass
    allowed = ', '.join(member.value for member in enum_cls)
    raise ValueError(f"Unknown {field_name}: {value!r}. Expected one of: {allowed}")


def _coerce_script(value) -> Optional[Script]:
    if value is None:
        return None
    return parse_script(value)


def _coerce_flag(value, field_name: str) -> Optional[bool]:
    if value is None or isinstance(value, bool):
        return value
    raise ValueError(f"{field_name} must be a boolean, got {value!r}")


def _from_mapping(cls, data: Mapping[str, Any], aliases: Dict[str, str]):
    known = {f.name for f in fields(cls)}
    kwargs = {}
    for key, value in data.items():
        name = aliases.get(key, key)
        if name not in known:
            raise ValueError(f"Unknown {cls.__name__} field: {key!r}")
        kwargs[name] = value
    return cls(**kwargs)


@dataclass(frozen=True)
class SubstitutionContext:
    script: Optional[Script] = None
    process: MorphProcess = MorphProcess.GENERAL
    grammar_context: GrammarContext = GrammarContext.GENERAL

    ALIASES = {
        'morphological_process': 'process',
        'morphologicalProcess': 'process',
        'category': 'process',
        'grammarContext': 'grammar_context',
        'context': 'grammar_context',
    }

    def __post_init__(self):
        object.__setattr__(self, 'script', _coerce_script(self.script))
        object.__setattr__(self, 'process',
                           _coerce_enum(MorphProcess, self.process, 'morphological process')
                           or MorphProcess.GENERAL)
        object.__setattr__(self, 'grammar_context',
                           _coerce_enum(GrammarContext, self.grammar_context, 'grammar context')
                           or GrammarContext.GENERAL)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'SubstitutionContext':
        return _from_mapping(cls, data, cls.ALIASES)


@dataclass(frozen=True)
class ShorteningContext:
    script: Optional[Script] = None
    gender: Optional[Gender] = None
    is_upasarjana: bool = False
    is_feminine: bool = False
    taddhita_elision: Optional[ElisionType] = None
    is_pratipadika: Optional[bool] = None

    ALIASES = {
        'isUpasarjana': 'is_upasarjana',
        'isFeminine': 'is_feminine',
        'taddhitaElisionType': 'taddhita_elision',
        'taddhita_elision_type': 'taddhita_elision',
        'isPratipadika': 'is_pratipadika',
    }

    def __post_init__(self):
        object.__setattr__(self, 'script', _coerce_script(self.script))
        object.__setattr__(self, 'gender', _coerce_enum(Gender, self.gender, 'gender'))
        object.__setattr__(self, 'taddhita_elision',
                           _coerce_enum(ElisionType, self.taddhita_elision, 'elision type'))
        object.__setattr__(self, 'is_upasarjana',
                           bool(_coerce_flag(self.is_upasarjana, 'is_upasarjana')))
        object.__setattr__(self, 'is_feminine',
                           bool(_coerce_flag(self.is_feminine, 'is_feminine')))
        _coerce_flag(self.is_pratipadika, 'is_pratipadika')

        if self.is_feminine and self.gender not in (None, Gender.FEMININE):
            raise ValueError(
                f"is_feminine contradicts gender {self.gender.value!r}"
            )

    @property
    def feminine(self) -> bool:
        return self.is_feminine or self.gender is Gender.FEMININE

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'ShorteningContext':
        return _from_mapping(cls, data, cls.ALIASES)


@dataclass(frozen=True)
class UpadhaContext:
    """is_dhatu: True asserts the word is a verbal root, False denies it,
    None leaves it to the length heuristic."""
    script: Optional[Script] = None
    is_dhatu: Optional[bool] = None

    ALIASES = {
        'isDhatu': 'is_dhatu',
        'is_root': 'is_dhatu',
    }

    def __post_init__(self):
        object.__setattr__(self, 'script', _coerce_script(self.script))
        _coerce_flag(self.is_dhatu, 'is_dhatu')

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'UpadhaContext':
        return _from_mapping(cls, data, cls.ALIASES)


def coerce_context(cls, value):
    """Accept a context instance, a mapping, or None."""
    if value is None:
        return cls()
    if isinstance(value, cls):
        return value
    if isinstance(value, Mapping):
        return cls.from_mapping(value)
    raise ValueError(f"Expected {cls.__name__} or a mapping, got {type(value).__name__}")


__all__ = [
    'Gender',
    'ElisionType',
    'MorphProcess',
    'GrammarContext',
    'SubstitutionContext',
    'ShorteningContext',
    'UpadhaContext',
    'coerce_context',
]
