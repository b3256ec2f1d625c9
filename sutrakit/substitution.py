#!/usr/bin/env python3
"""
Substitution Engine
===================
Substitutions on a word's final sound.

Two placements are supported:

- `substitute`: a replacement marked to follow the final sound is placed
  after it, so the result is word + replacement.
- `replace_final`: the replacement takes the final sound's place. When an
  a, i or u stands in for ṛ/ṝ it is followed by r (`apply_rapara`):
  kṛ + a -> kar.

Also here: substitution suggestions per morphological process, a
plausibility check for a proposed replacement, and selection of the
candidate closest in articulation to the sound it replaces.
"""

import logging
from typing import Dict, Iterable, List, Optional

from sutrakit.context import GrammarContext, MorphProcess, SubstitutionContext, coerce_context
from sutrakit.phonemes import Phoneme, PhonemeRegistry, load_registry
from sutrakit.results import TransformationResult
from sutrakit.script import Script, detect_script, normalize_word, parse_script
from sutrakit.segmentation import Segment, Word, prepare_word, segment
from sutrakit.settings import get_setting, require_setting
from sutrakit.transliteration import to_devanagari

logger = logging.getLogger(__name__)


# =============================================================================
# Configuration
# =============================================================================

def _max_replacement(process: MorphProcess) -> Optional[int]:
    limits = require_setting('substitution.max_replacement_phonemes')
    value = limits.get(process.value)
    return int(value) if value is not None else None


def _closeness_weights() -> Dict[str, float]:
    weights = require_setting('substitution.closeness_weights')
    return {key: float(value) for key, value in weights.items()}


# =============================================================================
# Helpers
# =============================================================================

def _prepare_replacement(replacement, parsed: Word):
    """Normalized replacement text, or (None, reason) when unusable."""
    if not isinstance(replacement, str) or not replacement.strip():
        return None, "replacement must be a non-empty string"
    rep_script = detect_script(replacement)
    if rep_script is None:
        return None, f"no recognizable script in replacement {replacement!r}"
    if rep_script is not parsed.script:
        return None, (
            f"replacement script {rep_script.value} does not match "
            f"word script {parsed.script.value}"
        )
    return normalize_word(replacement, parsed.script), None


def _as_iast(text: str, script: Script, registry: PhonemeRegistry) -> str:
    if script is Script.IAST:
        return text
    word = segment(text, script, registry)
    return ''.join(s.phoneme.iast if s.phoneme else s.surface for s in word.segments)


def substitution_type(replacement: str, script=None,
                      registry: Optional[PhonemeRegistry] = None) -> str:
    """Classify a replacement (e.g. 'ar' -> vriddhi_substitution)."""
    registry = registry or load_registry()
    resolved = parse_script(script) if script is not None else detect_script(replacement)
    if resolved in (Script.IAST, Script.DEVANAGARI):
        replacement = _as_iast(normalize_word(replacement, resolved), resolved, registry)
    return registry.substitutions.substitution_type(replacement)


# =============================================================================
# Substitution
# =============================================================================

def substitute(word, replacement, context=None, *, transform: bool = True,
               registry: Optional[PhonemeRegistry] = None) -> TransformationResult:
    """Place `replacement` after the final sound of `word`."""
    registry = registry or load_registry()
    ctx = coerce_context(SubstitutionContext, context)
    parsed, reason = prepare_word(word, ctx.script, registry)
    if parsed is None:
        return TransformationResult.invalid(reason)

    rep, problem = _prepare_replacement(replacement, parsed)
    if rep is None:
        logger.debug("substitute(%r, %r) skipped: %s", word, replacement, problem)
        return TransformationResult(applies=False, explanation=problem)

    final = parsed.final
    sub_type = substitution_type(rep, parsed.script, registry)
    result = parsed.surface + rep
    logger.debug("substitute: %r + %r -> %r (%s)", parsed.surface, rep, result, sub_type)

    return TransformationResult(
        applies=True,
        changed=transform,
        transformed=result if transform else None,
        explanation=f"'{rep}' is placed after the final sound '{final.grapheme}' of '{parsed.surface}'",
        details={
            'original_final': final.grapheme,
            'substitute': rep,
            'substitution_type': sub_type,
            'position': 'after_final',
            'process': ctx.process.value,
        },
    )


def apply_rapara(substitute_vowel, original, script,
                 registry: Optional[PhonemeRegistry] = None) -> str:
    """Add r after an a/i/u that replaces ṛ or ṝ.

    Returns the normalized substitute when the rule does not apply. Raises
    ValueError for a missing or empty argument or an unknown script.
    """
    for name, value in (('substitute', substitute_vowel), ('original', original)):
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"apply_rapara: {name} must be a non-empty string, got {value!r}")
    if script is None:
        raise ValueError("apply_rapara: script is required")

    resolved = parse_script(script)
    if resolved is Script.MIXED:
        raise ValueError("apply_rapara: script must be IAST or Devanagari")

    registry = registry or load_registry()
    tables = registry.gradation
    sub = normalize_word(substitute_vowel, resolved)
    orig = normalize_word(original, resolved)

    if orig in tables.rapara_originals[resolved] and sub in tables.rapara_substitutes[resolved]:
        augmented = sub + tables.rapara_augment[resolved]
        logger.debug("rapara: %r replacing %r -> %r", sub, orig, augmented)
        return augmented
    return sub


def _render_in_slot(final: Segment, rep: str, script: Script, registry: PhonemeRegistry) -> str:
    """Text for `rep` written where the final segment stood."""
    if not (final.sign or final.inherent):
        return rep
    # After a consonant a leading vowel is written as its sign; anything
    # else takes a virama so the consonant loses its inherent a
    head = segment(rep, script, registry).segments[0]
    if head.is_vowel:
        return final.render(head.phoneme) + rep[head.end:]
    return (registry.table(script).virama or '') + rep


def replace_final(word, replacement, context=None, *, transform: bool = True,
                  registry: Optional[PhonemeRegistry] = None) -> TransformationResult:
    """Put `replacement` in place of the final sound, with rapara."""
    registry = registry or load_registry()
    ctx = coerce_context(SubstitutionContext, context)
    parsed, reason = prepare_word(word, ctx.script, registry)
    if parsed is None:
        return TransformationResult.invalid(reason)

    rep, problem = _prepare_replacement(replacement, parsed)
    if rep is None:
        return TransformationResult(applies=False, explanation=problem)

    index = len(parsed) - 1
    final = parsed.final
    augmented = rep
    if final.is_vowel:
        augmented = apply_rapara(rep, final.grapheme, parsed.script, registry)
    rendered = _render_in_slot(final, rep, parsed.script, registry) + augmented[len(rep):]

    result = parsed.splice(index, rendered)
    rapara = augmented != rep
    return TransformationResult(
        applies=True,
        changed=transform and result != parsed.surface,
        transformed=result if transform else None,
        explanation=(
            f"'{augmented}' replaces the final sound '{final.grapheme}' of '{parsed.surface}'"
            + (" (r added after the substitute of an r-vowel)" if rapara else "")
        ),
        details={
            'original_final': final.grapheme,
            'substitute': rep,
            'rapara_applied': rapara,
            'position': 'final',
        },
    )


# =============================================================================
# Suggestions
# =============================================================================

def _declension(tables, final):
    return tables.declension.get(final, ())


def _conjugation(tables, final):
    return tables.conjugation.get(final, tables.conjugation_default)


def _derivation(tables, final):
    return tables.derivation


def _sandhi(tables, final):
    return tables.sandhi.get(final, ())


def _general(tables, final):
    return tables.general


SUGGESTION_TABLES = {
    MorphProcess.DECLENSION: _declension,
    MorphProcess.CONJUGATION: _conjugation,
    MorphProcess.DERIVATION: _derivation,
    MorphProcess.SANDHI: _sandhi,
    MorphProcess.GENERAL: _general,
}


def suggest_substitutes(word, process='general', *, script=None,
                        registry: Optional[PhonemeRegistry] = None) -> TransformationResult:
    """Suggest replacements for a word's final sound for a given process."""
    registry = registry or load_registry()
    ctx = SubstitutionContext(script=script, process=process)
    parsed, reason = prepare_word(word, ctx.script, registry)
    if parsed is None:
        return TransformationResult.invalid(reason)

    final = parsed.final
    final_iast = final.phoneme.iast if final.phoneme else final.surface
    suggestions = list(SUGGESTION_TABLES[ctx.process](registry.substitutions, final_iast))

    if parsed.script is Script.DEVANAGARI:
        suggestions = [to_devanagari(s, registry=registry) for s in suggestions]
    placed = [substitute(parsed.surface, s, ctx, registry=registry).transformed for s in suggestions]

    return TransformationResult(
        applies=bool(suggestions),
        explanation=(
            f"{len(suggestions)} {ctx.process.value} suggestion(s) for final "
            f"'{final.grapheme}' of '{parsed.surface}'"
        ),
        details={
            'final_sound': final.grapheme,
            'process': ctx.process.value,
            'suggestions': suggestions,
            'mid_applications': placed,
        },
    )


# =============================================================================
# Validation
# =============================================================================

def validate_substitution(word, replacement, context=None, *,
                          registry: Optional[PhonemeRegistry] = None) -> TransformationResult:
    """Check whether a proposed replacement is plausible for the process."""
    registry = registry or load_registry()
    ctx = coerce_context(SubstitutionContext, context)
    preview = substitute(word, replacement, ctx, transform=False, registry=registry)
    if not preview.applies:
        return preview

    rep = preview.details['substitute']
    parsed, _ = prepare_word(word, ctx.script, registry)
    rep_length = len(segment(rep, parsed.script, registry))

    checks = {
        'phonetic_compatibility': {
            'passed': True,
            'note': 'no phonetic restriction is encoded for this pair',
        },
    }

    limit = _max_replacement(ctx.process)
    checks['length'] = {
        'passed': limit is None or rep_length <= limit,
        'length': rep_length,
        'limit': limit,
    }

    has_l_vowel = any(
        s.phoneme is not None and s.phoneme.iast in ('ḷ', 'ḹ')
        for s in segment(rep, parsed.script, registry).segments
    )
    checks['grammar_context'] = {
        'passed': not (ctx.grammar_context is GrammarContext.CLASSICAL and has_l_vowel),
        'context': ctx.grammar_context.value,
    }

    failed = [name for name, check in checks.items() if not check['passed']]
    is_valid = not failed
    confidence = get_setting(
        'substitution.confidence.valid' if is_valid else 'substitution.confidence.invalid',
        0.9 if is_valid else 0.3,
    )
    if failed:
        logger.debug("validate_substitution(%r, %r): failed %s", word, rep, failed)

    return TransformationResult(
        applies=is_valid,
        explanation=(
            f"'{rep}' is a plausible {ctx.process.value} replacement"
            if is_valid else
            f"'{rep}' fails: {', '.join(failed)}"
        ),
        details={
            'checks': checks,
            'confidence': float(confidence),
            'substitution_type': preview.details['substitution_type'],
        },
    )


# =============================================================================
# Closest substitute
# =============================================================================

def _savarna(a: Phoneme, b: Phoneme, registry: PhonemeRegistry) -> bool:
    if a.is_vowel and b.is_vowel:
        short = registry.gradation.long_to_short[a.script]
        return short.get(a.grapheme, a.grapheme) == short.get(b.grapheme, b.grapheme)
    if a.is_consonant and b.is_consonant:
        return a.place == b.place and a.manner == b.manner
    return False


def closeness(original: Phoneme, candidate: Phoneme,
              registry: Optional[PhonemeRegistry] = None) -> float:
    """Weighted articulatory similarity in [0, 1]."""
    registry = registry or load_registry()
    weights = _closeness_weights()
    grade_or_manner = 'grade' if original.is_vowel else 'manner'
    matches = {
        'category': original.category == candidate.category,
        'place': original.place == candidate.place,
        'grade_or_manner': getattr(original, grade_or_manner) == getattr(candidate, grade_or_manner),
        'voiced': original.voiced == candidate.voiced,
        'aspirated': original.aspirated == candidate.aspirated,
        'savarna': _savarna(original, candidate, registry),
    }
    return round(sum(weights.get(k, 0.0) for k, hit in matches.items() if hit), 4)


def select_closest_substitute(original, candidates: Iterable[str], script=None, *,
                              registry: Optional[PhonemeRegistry] = None) -> TransformationResult:
    """Choose the candidate most like `original` in articulation.

    Ties go to the earlier candidate.
    """
    registry = registry or load_registry()
    if not isinstance(original, str) or not original.strip():
        return TransformationResult.invalid("original must be a non-empty string")
    resolved = parse_script(script) if script is not None else detect_script(original)
    if resolved not in (Script.IAST, Script.DEVANAGARI):
        return TransformationResult.invalid(f"no recognizable script in {original!r}")

    source = registry.lookup(original, resolved)
    if source is None:
        return TransformationResult.invalid(f"{original!r} is not a single known sound")

    candidates = list(candidates or [])
    scored: List[dict] = []
    for candidate in candidates:
        phoneme = registry.lookup(candidate, resolved) if isinstance(candidate, str) else None
        if phoneme is None:
            logger.debug("Ignoring unknown candidate %r", candidate)
            continue
        scored.append({'candidate': phoneme.grapheme, 'score': closeness(source, phoneme, registry)})

    if not scored:
        return TransformationResult(
            applies=False,
            explanation=f"no known candidate sounds to substitute for '{source.grapheme}'",
        )

    best = max(scored, key=lambda s: s['score'])
    ranking = sorted(scored, key=lambda s: -s['score'])
    return TransformationResult(
        applies=True,
        changed=best['candidate'] != source.grapheme,
        transformed=best['candidate'],
        explanation=f"'{best['candidate']}' is closest to '{source.grapheme}' (score {best['score']})",
        details={'original': source.grapheme, 'ranking': ranking},
    )


__all__ = [
    'substitute',
    'substitution_type',
    'apply_rapara',
    'replace_final',
    'suggest_substitutes',
    'SUGGESTION_TABLES',
    'validate_substitution',
    'closeness',
    'select_closest_substitute',
]
