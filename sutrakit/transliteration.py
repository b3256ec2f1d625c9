#!/usr/bin/env python3
"""
Transliteration
===============
IAST <-> Devanagari conversion through the phoneme tables' counterpart
links.

    to_devanagari('kṛṣṇa')   # 'कृष्ण'
    to_iast('देवी')          # 'devī'
"""

import logging
from typing import Optional

from sutrakit.phonemes import PhonemeRegistry, load_registry
from sutrakit.script import Script, detect_script, normalize_word
from sutrakit.segmentation import segment

logger = logging.getLogger(__name__)


def to_iast(text, *, registry: Optional[PhonemeRegistry] = None) -> str:
    """Devanagari to IAST. IAST input comes back normalized."""
    registry = registry or load_registry()
    if not isinstance(text, str):
        raise ValueError(f"text must be a string, got {type(text).__name__}")
    script = detect_script(text)
    if script is Script.MIXED:
        raise ValueError(f"Cannot transliterate mixed-script text {text!r}")
    if script is not Script.DEVANAGARI:
        return normalize_word(text, Script.IAST)

    word = segment(text, Script.DEVANAGARI, registry)
    return ''.join(s.phoneme.iast if s.phoneme else s.surface for s in word.segments)


def to_devanagari(text, *, registry: Optional[PhonemeRegistry] = None) -> str:
    """IAST to Devanagari. Devanagari input comes back normalized.

    A vowel after a consonant is written as its sign; a consonant followed
    by another consonant (or by nothing) takes a virama.
    """
    registry = registry or load_registry()
    if not isinstance(text, str):
        raise ValueError(f"text must be a string, got {type(text).__name__}")
    script = detect_script(text)
    if script is Script.MIXED:
        raise ValueError(f"Cannot transliterate mixed-script text {text!r}")
    if script is not Script.IAST:
        return normalize_word(text, Script.DEVANAGARI)

    devanagari = registry.devanagari
    virama = devanagari.virama
    out = []
    after_consonant = False

    for seg in segment(text, Script.IAST, registry).segments:
        if seg.phoneme is None:
            if after_consonant:
                out.append(virama)
            out.append(seg.surface)
            after_consonant = False
            continue

        target = devanagari.phonemes[seg.phoneme.counterpart]
        if target.is_vowel:
            out.append(target.sign if after_consonant else target.grapheme)
            after_consonant = False
        elif target.is_consonant:
            if after_consonant:
                out.append(virama)
            out.append(target.grapheme)
            after_consonant = True
        else:
            if after_consonant:
                out.append(virama)
            out.append(target.grapheme)
            after_consonant = False

    if after_consonant:
        out.append(virama)
    return ''.join(out)


def equivalent_across_scripts(a, b, *, registry: Optional[PhonemeRegistry] = None) -> bool:
    """True when two words spell the same sounds, in either script."""
    try:
        return to_iast(a, registry=registry) == to_iast(b, registry=registry)
    except ValueError:
        logger.debug("Cannot compare %r and %r across scripts", a, b)
        return False


__all__ = [
    'to_iast',
    'to_devanagari',
    'equivalent_across_scripts',
]
