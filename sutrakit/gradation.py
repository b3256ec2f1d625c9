#!/usr/bin/env python3
"""
Gradation Resolver
==================
Guna and vriddhi of the ik vowels, and analysis of a word's penultimate
(upadha) sound.

    ik     guna   vriddhi
    i ī    e      ai
    u ū    o      au
    ṛ ṝ    ar     ār
    ḷ ḹ    al     āl

Devanagari vowels and vowel signs map to independent forms (ऋ -> अर्).
Anything that is not an ik vowel is returned unchanged.
"""

import logging
from typing import Optional

from sutrakit.context import UpadhaContext, coerce_context
from sutrakit.phonemes import Phoneme, PhonemeRegistry, load_registry
from sutrakit.results import TransformationResult, UpadhaAnalysis
from sutrakit.segmentation import prepare_word
from sutrakit.settings import require_setting

logger = logging.getLogger(__name__)


def _root_candidate_max() -> int:
    return int(require_setting('upadha.root_candidate_max_phonemes'))


def _lookup(vowel, registry: Optional[PhonemeRegistry]) -> Optional[Phoneme]:
    registry = registry or load_registry()
    if not isinstance(vowel, str):
        return None
    return registry.lookup(vowel.strip())


def is_ik(vowel, registry: Optional[PhonemeRegistry] = None) -> bool:
    """True for i ī u ū ṛ ṝ ḷ ḹ (and their Devanagari forms and signs)."""
    phoneme = _lookup(vowel, registry)
    return phoneme is not None and phoneme.is_ik


def _grade(vowel, table_name: str, registry: Optional[PhonemeRegistry]):
    registry = registry or load_registry()
    phoneme = _lookup(vowel, registry)
    if phoneme is None or not phoneme.is_ik:
        return vowel
    mapping = getattr(registry.gradation, table_name)[phoneme.script]
    key = vowel.strip() if vowel.strip() in mapping else phoneme.grapheme
    return mapping.get(key, vowel)


def guna(vowel, registry: Optional[PhonemeRegistry] = None):
    """Guna grade of an ik vowel; other input is returned unchanged."""
    return _grade(vowel, 'guna', registry)


def vriddhi(vowel, registry: Optional[PhonemeRegistry] = None):
    """Vriddhi grade of an ik vowel; other input is returned unchanged."""
    return _grade(vowel, 'vriddhi', registry)


def ec_to_ik(vowel, registry: Optional[PhonemeRegistry] = None):
    """e o ai au -> i u i u, as used when such a vowel must be shortened."""
    registry = registry or load_registry()
    phoneme = _lookup(vowel, registry)
    if phoneme is None:
        return vowel
    return registry.gradation.ec_to_ik[phoneme.script].get(phoneme.grapheme, vowel)


def _short_form(phoneme: Phoneme, registry: PhonemeRegistry) -> str:
    return registry.gradation.long_to_short[phoneme.script].get(phoneme.grapheme, phoneme.grapheme)


def analyze_upadha(word, context=None, *, registry: Optional[PhonemeRegistry] = None) -> UpadhaAnalysis:
    """Find the upadha of a (candidate) verbal root and its gradation forms.

    Root candidacy comes from `context.is_dhatu` when given; otherwise
    short words are assumed to be roots and the result is marked
    'heuristic'.
    """
    registry = registry or load_registry()
    ctx = coerce_context(UpadhaContext, context)
    parsed, reason = prepare_word(word, ctx.script, registry)
    if parsed is None:
        return UpadhaAnalysis.invalid(reason)

    if ctx.is_dhatu is True:
        candidate, candidacy = True, 'asserted'
    elif ctx.is_dhatu is False:
        candidate, candidacy = False, 'rejected'
    else:
        limit = _root_candidate_max()
        candidate, candidacy = len(parsed) <= limit, 'heuristic'
        logger.debug("Root candidacy of %r by length: %d phonemes, limit %d -> %s",
                     parsed.surface, len(parsed), limit, candidate)

    base = dict(is_root_candidate=candidate, root_candidacy=candidacy)

    if not candidate:
        return UpadhaAnalysis(
            applies=False,
            explanation=f"'{parsed.surface}' is not treated as a verbal root ({candidacy})",
            **base,
        )

    seg = parsed.upadha(verbal_root=True)
    if seg is None:
        return UpadhaAnalysis(
            applies=False,
            explanation=f"'{parsed.surface}' has fewer than two sounds; no upadha",
            **base,
        )

    if not seg.is_ik:
        return UpadhaAnalysis(
            applies=False,
            upadha=seg.grapheme,
            explanation=f"upadha '{seg.grapheme}' of '{parsed.surface}' is not an ik vowel",
            **base,
        )

    phoneme = seg.phoneme
    guna_form = guna(phoneme.grapheme, registry)
    vriddhi_form = vriddhi(phoneme.grapheme, registry)
    logger.debug("Upadha of %r is ik vowel %r", parsed.surface, phoneme.grapheme)
    return UpadhaAnalysis(
        applies=True,
        upadha=phoneme.grapheme,
        has_ik_upadha=True,
        ik_class=_short_form(phoneme, registry),
        guna_form=guna_form,
        vriddhi_form=vriddhi_form,
        explanation=(
            f"upadha of '{parsed.surface}' is the ik vowel '{phoneme.grapheme}': "
            f"guna '{guna_form}', vriddhi '{vriddhi_form}'"
        ),
        details={'position': parsed.segments.index(seg)},
        **base,
    )


def gradation_scope(word, script=None, *, registry: Optional[PhonemeRegistry] = None) -> TransformationResult:
    """List every vowel of a word with its guna and vriddhi forms."""
    registry = registry or load_registry()
    parsed, reason = prepare_word(word, script, registry)
    if parsed is None:
        return TransformationResult.invalid(reason)

    vowels = []
    for index, seg in enumerate(parsed.segments):
        if not seg.is_vowel:
            continue
        grapheme = seg.grapheme
        vowels.append({
            'position': index,
            'vowel': grapheme,
            'is_ik': seg.is_ik,
            'guna': guna(grapheme, registry),
            'vriddhi': vriddhi(grapheme, registry),
        })

    transformable = [v for v in vowels if v['is_ik']]
    return TransformationResult(
        applies=bool(transformable),
        explanation=(
            f"'{parsed.surface}' has {len(vowels)} vowel(s), "
            f"{len(transformable)} subject to gradation"
        ),
        details={
            'vowels': vowels,
            'total_vowels': len(vowels),
            'transformable_count': len(transformable),
        },
    )


__all__ = [
    'is_ik',
    'guna',
    'vriddhi',
    'ec_to_ik',
    'analyze_upadha',
    'gradation_scope',
]
