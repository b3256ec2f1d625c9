#!/usr/bin/env python3
"""
SutraKit - Sanskrit Phonological Operations
===========================================

A rule-based engine for the sound-level operations of Pāṇinian grammar:
classifying sounds, locating a word's final and penultimate (upadha)
sounds, guna/vriddhi gradation, substitutions on the final sound, and
conditioned final-vowel shortening. Works on IAST and Devanagari.

Quick Start
-----------
    from sutrakit import guna, analyze_upadha, shorten, replace_final

    guna('ṛ')                                   # 'ar'
    analyze_upadha('kṛ').vriddhi_form           # 'ār'
    replace_final('kṛ', 'a').transformed        # 'kar'
    shorten('देवी', {'taddhita_elision': 'luk'}).transformed   # 'देवि'

Modules
-------
    sutrakit.phonemes        - Phoneme tables (YAML) and registry
    sutrakit.script          - Script detection
    sutrakit.segmentation    - Segmentation and positions
    sutrakit.gradation       - Guna, vriddhi, upadha analysis
    sutrakit.substitution    - Substitution, rapara, suggestions
    sutrakit.shortening      - Conditioned final-vowel shortening
    sutrakit.transliteration - IAST <-> Devanagari

CLI Usage
---------
    python -m sutrakit guna ṛ
    python -m sutrakit upadha bhid --dhatu
    python -m sutrakit shorten देवी --elision luk
"""

__version__ = "0.1.0"
__author__ = "SutraKit"

import sys
from pathlib import Path

# Ensure parent directory is in path for the top-level settings module
_parent = Path(__file__).parent.parent
if str(_parent) not in sys.path:
    sys.path.insert(0, str(_parent))

from .script import Script, detect_script, resolve_script, normalize_word
from .phonemes import Phoneme, PhonemeRegistry, load_registry, reload_tables, validate_correspondence
from .results import TransformationResult, UpadhaAnalysis, ShorteningResult
from .context import (
    Gender,
    ElisionType,
    MorphProcess,
    GrammarContext,
    SubstitutionContext,
    ShorteningContext,
    UpadhaContext,
)
from .segmentation import (
    Segment,
    Word,
    segment,
    initial,
    final,
    upadha,
    get_first_vowel,
    get_all_vowels,
)
from .gradation import is_ik, guna, vriddhi, ec_to_ik, analyze_upadha, gradation_scope
from .substitution import (
    substitute,
    apply_rapara,
    replace_final,
    suggest_substitutes,
    validate_substitution,
    select_closest_substitute,
)
from .shortening import (
    shorten,
    shorten_final_vowel,
    shorten_neuter_stem,
    shorten_upasarjana,
    shorten_after_taddhita_elision,
)
from .transliteration import to_iast, to_devanagari, equivalent_across_scripts

__all__ = [
    '__version__',
    # Scripts
    'Script',
    'detect_script',
    'resolve_script',
    'normalize_word',
    # Tables
    'Phoneme',
    'PhonemeRegistry',
    'load_registry',
    'reload_tables',
    'validate_correspondence',
    # Results and contexts
    'TransformationResult',
    'UpadhaAnalysis',
    'ShorteningResult',
    'Gender',
    'ElisionType',
    'MorphProcess',
    'GrammarContext',
    'SubstitutionContext',
    'ShorteningContext',
    'UpadhaContext',
    # Positions
    'Segment',
    'Word',
    'segment',
    'initial',
    'final',
    'upadha',
    'get_first_vowel',
    'get_all_vowels',
    # Gradation
    'is_ik',
    'guna',
    'vriddhi',
    'ec_to_ik',
    'analyze_upadha',
    'gradation_scope',
    # Substitution
    'substitute',
    'apply_rapara',
    'replace_final',
    'suggest_substitutes',
    'validate_substitution',
    'select_closest_substitute',
    # Shortening
    'shorten',
    'shorten_final_vowel',
    'shorten_neuter_stem',
    'shorten_upasarjana',
    'shorten_after_taddhita_elision',
    # Transliteration
    'to_iast',
    'to_devanagari',
    'equivalent_across_scripts',
]
