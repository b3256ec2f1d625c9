#!/usr/bin/env python3
"""
Conditioned Shortening
======================
Shortens a word's final vowel when one of three grammatical conditions
holds. Rules are tried in priority order and the first that applies
wins:

    neuter_stem        neuter prātipadika            (vāri, madhu)
    upasarjana         subordinate compound member
                       ending in go, or feminine     (citragu)
    taddhita_elision   taddhita affix elided by
                       luk/lup, final long ī

The shortening itself is shared: a long vowel becomes its short
counterpart (ā -> a, ī -> i ...) and a diphthong its ik vowel
(e o ai au -> i u i u), written in place of the final sound.

Whether a word is a prātipadika (nominal stem) is not decided here. The
caller supplies it, either as `context.is_pratipadika` or as a
`pratipadika(word, context)` predicate.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from sutrakit.context import ElisionType, Gender, ShorteningContext, coerce_context
from sutrakit.phonemes import Phoneme, PhonemeRegistry, load_registry
from sutrakit.results import ShorteningResult
from sutrakit.segmentation import Word, prepare_word

logger = logging.getLogger(__name__)

PratipadikaPredicate = Callable[[str, ShorteningContext], bool]


def default_pratipadika(word: str, context: ShorteningContext) -> bool:
    """Trust the caller's flag; unknown counts as not a prātipadika."""
    return bool(context.is_pratipadika)


# =============================================================================
# Shared primitive
# =============================================================================

def _short_counterpart(phoneme: Phoneme, registry: PhonemeRegistry) -> Optional[Phoneme]:
    tables = registry.gradation
    script = phoneme.script
    short = (tables.long_to_short[script].get(phoneme.grapheme)
             or tables.ec_to_ik[script].get(phoneme.grapheme))
    if short is None:
        return None
    return registry.table(script).phonemes.get(short)


def _shorten_word(parsed: Word, transform: bool, registry: PhonemeRegistry) -> ShorteningResult:
    final = parsed.final
    if not final.is_vowel:
        return ShorteningResult(
            applies=False,
            explanation=f"'{parsed.surface}' does not end in a vowel",
        )

    short = _short_counterpart(final.phoneme, registry)
    if short is None:
        return ShorteningResult(
            applies=False,
            final_vowel_original=final.grapheme,
            explanation=f"final vowel '{final.grapheme}' of '{parsed.surface}' is already short",
        )

    result = parsed.splice(len(parsed) - 1, final.render(short))
    return ShorteningResult(
        applies=True,
        changed=transform,
        transformed=result if transform else None,
        final_vowel_original=final.grapheme,
        final_vowel_shortened=short.grapheme,
        explanation=f"final '{final.grapheme}' of '{parsed.surface}' is shortened to '{short.grapheme}'",
        details={'position': len(parsed) - 1},
    )


def shorten_final_vowel(word, context=None, *, transform: bool = True,
                        registry: Optional[PhonemeRegistry] = None) -> ShorteningResult:
    """Shorten the final vowel unconditionally. Only `context.script` is read."""
    registry = registry or load_registry()
    ctx = coerce_context(ShorteningContext, context)
    parsed, reason = prepare_word(word, ctx.script, registry)
    if parsed is None:
        return ShorteningResult.invalid(reason)
    return _shorten_word(parsed, transform, registry)


# =============================================================================
# Rule gates
# =============================================================================

def _neuter_gate(parsed: Word, ctx: ShorteningContext, pratipadika) -> Tuple[bool, str]:
    if ctx.gender is not Gender.NEUTER:
        return False, "gender is not neuter"
    if not pratipadika(parsed.surface, ctx):
        return False, "word is not a prātipadika"
    return True, "neuter prātipadika"


def _ends_in_go(parsed: Word) -> bool:
    tail = [s.phoneme.iast for s in parsed.segments[-2:] if s.phoneme is not None]
    return tail == ['g', 'o']


def _upasarjana_gate(parsed: Word, ctx: ShorteningContext, pratipadika) -> Tuple[bool, str]:
    if not ctx.is_upasarjana:
        return False, "word is not an upasarjana"
    if not (_ends_in_go(parsed) or ctx.feminine):
        return False, "upasarjana neither ends in 'go' nor is feminine"
    if not pratipadika(parsed.surface, ctx):
        return False, "word is not a prātipadika"
    return True, "upasarjana ending in 'go' or feminine"


def _taddhita_gate(parsed: Word, ctx: ShorteningContext, pratipadika) -> Tuple[bool, str]:
    if ctx.taddhita_elision not in (ElisionType.LUK, ElisionType.LUP):
        return False, "no taddhita elision (luk/lup)"
    final = parsed.final
    if final.phoneme is None or final.phoneme.iast != 'ī':
        return False, "final vowel is not long ī"
    return True, f"taddhita affix elided by {ctx.taddhita_elision.value}"


@dataclass(frozen=True)
class ShorteningRule:
    name: str
    gate: Callable[[Word, ShorteningContext, PratipadikaPredicate], Tuple[bool, str]]


# Priority order
SHORTENING_RULES: Tuple[ShorteningRule, ...] = (
    ShorteningRule('neuter_stem', _neuter_gate),
    ShorteningRule('upasarjana', _upasarjana_gate),
    ShorteningRule('taddhita_elision', _taddhita_gate),
)

_RULES_BY_NAME = {rule.name: rule for rule in SHORTENING_RULES}


def _apply_rule(rule: ShorteningRule, parsed: Word, ctx: ShorteningContext,
                transform: bool, pratipadika, registry: PhonemeRegistry) -> ShorteningResult:
    opened, why = rule.gate(parsed, ctx, pratipadika)
    if not opened:
        logger.debug("%s skipped for %r: %s", rule.name, parsed.surface, why)
        return ShorteningResult(applies=False, rule=rule.name, explanation=f"{rule.name}: {why}")

    result = _shorten_word(parsed, transform, registry)
    result.rule = rule.name
    result.explanation = f"{rule.name} ({why}): {result.explanation}"
    if result.applies:
        logger.debug("%s applies to %r", rule.name, parsed.surface)
    return result


def _run(rule_name: str, word, context, transform, pratipadika, registry) -> ShorteningResult:
    registry = registry or load_registry()
    ctx = coerce_context(ShorteningContext, context)
    parsed, reason = prepare_word(word, ctx.script, registry)
    if parsed is None:
        return ShorteningResult.invalid(reason, rule=rule_name)
    return _apply_rule(_RULES_BY_NAME[rule_name], parsed, ctx, transform,
                       pratipadika or default_pratipadika, registry)


def shorten_neuter_stem(word, context=None, *, transform: bool = True,
                        pratipadika: Optional[PratipadikaPredicate] = None,
                        registry: Optional[PhonemeRegistry] = None) -> ShorteningResult:
    return _run('neuter_stem', word, context, transform, pratipadika, registry)


def shorten_upasarjana(word, context=None, *, transform: bool = True,
                       pratipadika: Optional[PratipadikaPredicate] = None,
                       registry: Optional[PhonemeRegistry] = None) -> ShorteningResult:
    return _run('upasarjana', word, context, transform, pratipadika, registry)


def shorten_after_taddhita_elision(word, context=None, *, transform: bool = True,
                                   pratipadika: Optional[PratipadikaPredicate] = None,
                                   registry: Optional[PhonemeRegistry] = None) -> ShorteningResult:
    return _run('taddhita_elision', word, context, transform, pratipadika, registry)


def shorten(word, context=None, *, transform: bool = True,
            pratipadika: Optional[PratipadikaPredicate] = None,
            registry: Optional[PhonemeRegistry] = None) -> ShorteningResult:
    """Apply the first shortening rule whose conditions hold.

    With transform=False the result says whether a rule applies but the
    word is left alone (changed=False, transformed=None).
    """
    registry = registry or load_registry()
    ctx = coerce_context(ShorteningContext, context)
    parsed, reason = prepare_word(word, ctx.script, registry)
    if parsed is None:
        return ShorteningResult.invalid(reason)

    pratipadika = pratipadika or default_pratipadika
    attempts = []
    for rule in SHORTENING_RULES:
        result = _apply_rule(rule, parsed, ctx, transform, pratipadika, registry)
        if result.applies:
            return result
        attempts.append(result.explanation)

    return ShorteningResult(
        applies=False,
        explanation="no shortening rule applies: " + "; ".join(attempts),
        details={'rules_tried': [rule.name for rule in SHORTENING_RULES]},
    )


__all__ = [
    'SHORTENING_RULES',
    'ShorteningRule',
    'default_pratipadika',
    'shorten',
    'shorten_final_vowel',
    'shorten_neuter_stem',
    'shorten_upasarjana',
    'shorten_after_taddhita_elision',
]
