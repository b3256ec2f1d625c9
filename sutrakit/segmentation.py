#!/usr/bin/env python3
"""
Position Analyzer
=================
Splits a word into phoneme segments and locates its initial, final and
penultimate (upadha) sounds.

IAST is segmented by greedy longest match over the table graphemes, so
'kh' and 'ai' are single phonemes. Devanagari is segmented by its
written structure: a consonant takes a following vowel sign, absorbs a
following virama, or otherwise carries an inherent 'a' that becomes a
segment with empty surface text.

Usage:
    from sutrakit.segmentation import segment, upadha

    word = segment('bhid')
    [s.grapheme for s in word.segments]   # ['bh', 'i', 'd']
    upadha('kṛ', verbal_root=True)       # 'ṛ'
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from sutrakit.phonemes import Phoneme, PhonemeRegistry, ScriptTable, load_registry
from sutrakit.script import Script, normalize_word, resolve_script

logger = logging.getLogger(__name__)


# =============================================================================
# Data Classes
# =============================================================================

@dataclass(frozen=True)
class Segment:
    """One phoneme occurrence. `phoneme` is None for unknown code points."""
    phoneme: Optional[Phoneme]
    surface: str
    start: int
    end: int
    sign: bool = False       # written as a dependent vowel sign
    inherent: bool = False   # Devanagari inherent 'a', no surface text

    @property
    def grapheme(self) -> str:
        """Canonical (independent) form, or the raw text if unknown."""
        return self.phoneme.grapheme if self.phoneme else self.surface

    @property
    def is_vowel(self) -> bool:
        return self.phoneme is not None and self.phoneme.is_vowel

    @property
    def is_ik(self) -> bool:
        return self.phoneme is not None and self.phoneme.is_ik

    def render(self, replacement: Phoneme) -> str:
        """Surface text for `replacement` written in this segment's slot."""
        if (self.sign or self.inherent) and replacement.sign is not None:
            return replacement.sign
        return replacement.grapheme


@dataclass(frozen=True)
class Word:
    """A script-homogeneous sequence of segments."""
    surface: str
    script: Optional[Script]
    segments: Tuple[Segment, ...]

    def __len__(self) -> int:
        return len(self.segments)

    @property
    def graphemes(self) -> List[str]:
        return [s.grapheme for s in self.segments]

    @property
    def initial(self) -> Optional[Segment]:
        return self.segments[0] if self.segments else None

    @property
    def final(self) -> Optional[Segment]:
        return self.segments[-1] if self.segments else None

    def upadha(self, verbal_root: bool = False) -> Optional[Segment]:
        """Penultimate segment.

        For a verbal root ending in an ik vowel the final vowel itself is
        returned (kṛ -> ṛ), since that is the vowel gradation acts on.
        """
        if len(self.segments) < 2:
            return None
        last = self.segments[-1]
        if verbal_root and last.is_ik:
            return last
        return self.segments[-2]

    def splice(self, index: int, text: str) -> str:
        """Surface with segment `index` replaced by `text`."""
        seg = self.segments[index]
        return self.surface[:seg.start] + text + self.surface[seg.end:]


@dataclass(frozen=True)
class VowelPosition:
    index: int
    vowel: str
    inherent: bool = False


# =============================================================================
# Segmenters
# =============================================================================

def _segment_iast(text: str, table: ScriptTable) -> List[Segment]:
    segments = []
    pos = 0
    while pos < len(text):
        for size in range(min(table.max_grapheme_length, len(text) - pos), 0, -1):
            chunk = text[pos:pos + size]
            phoneme = table.phonemes.get(chunk)
            if phoneme is not None:
                segments.append(Segment(phoneme, chunk, pos, pos + size))
                pos += size
                break
        else:
            segments.append(Segment(None, text[pos], pos, pos + 1))
            pos += 1
    return segments


def _segment_devanagari(text: str, table: ScriptTable) -> List[Segment]:
    inherent_a = table.inherent_vowel
    segments = []
    pos = 0
    n = len(text)
    while pos < n:
        char = text[pos]
        phoneme = table.phonemes.get(char)

        if phoneme is not None and phoneme.is_consonant:
            end = pos + 1
            if end < n and text[end] == table.nukta:
                end += 1
            following = text[end] if end < n else ''

            if following and following == table.virama:
                segments.append(Segment(phoneme, text[pos:end + 1], pos, end + 1))
                pos = end + 1
                continue

            segments.append(Segment(phoneme, text[pos:end], pos, end))
            vowel = table.signs.get(following) if following else None
            if vowel is not None:
                segments.append(Segment(vowel, following, end, end + 1, sign=True))
                pos = end + 1
            else:
                segments.append(Segment(inherent_a, '', end, end, inherent=True))
                pos = end
            continue

        if phoneme is not None:
            segments.append(Segment(phoneme, char, pos, pos + 1))
        else:
            # A stray sign with no consonant before it
            vowel = table.signs.get(char)
            segments.append(Segment(vowel, char, pos, pos + 1, sign=vowel is not None))
        pos += 1
    return segments


def segment(word: str, script=None, registry: Optional[PhonemeRegistry] = None) -> Word:
    """Segment a word into phonemes.

    `script` bypasses detection. A word with no recognizable script yields
    an empty Word; mixed-script input raises ValueError.
    """
    registry = registry or load_registry()
    if not isinstance(word, str):
        return Word(surface='', script=None, segments=())

    resolved = resolve_script(word, script)
    if resolved is Script.MIXED:
        raise ValueError(f"Cannot segment mixed-script word {word!r}")
    text = normalize_word(word, resolved)
    if resolved is None or not text:
        return Word(surface=text, script=resolved, segments=())

    table = registry.table(resolved)
    if resolved is Script.IAST:
        segments = _segment_iast(text, table)
    else:
        segments = _segment_devanagari(text, table)

    unknown = [s.surface for s in segments if s.phoneme is None]
    if unknown:
        logger.debug("Unclassified characters in %r: %s", text, unknown)
    return Word(surface=text, script=resolved, segments=tuple(segments))


def prepare_word(word, script=None,
                 registry: Optional[PhonemeRegistry] = None) -> Tuple[Optional[Word], Optional[str]]:
    """Validate and segment the input of a public operation.

    Returns (word, None) on success or (None, reason) for invalid input.
    """
    if not isinstance(word, str):
        return None, f"word must be a string, got {type(word).__name__}"
    if not word.strip():
        return None, "word is empty"

    resolved = resolve_script(word, script)
    if resolved is None:
        return None, f"no recognizable script in {word!r}"
    if resolved is Script.MIXED:
        return None, f"mixed-script word {word!r}"

    return segment(word, resolved, registry), None


# =============================================================================
# Positional Accessors
# =============================================================================

def _grapheme(seg: Optional[Segment]) -> Optional[str]:
    return seg.grapheme if seg is not None else None


def initial(word: str, script=None, registry=None) -> Optional[str]:
    """First phoneme of the word, or None."""
    parsed, _ = prepare_word(word, script, registry)
    return _grapheme(parsed.initial) if parsed else None


def final(word: str, script=None, registry=None) -> Optional[str]:
    """Last phoneme of the word, or None."""
    parsed, _ = prepare_word(word, script, registry)
    return _grapheme(parsed.final) if parsed else None


def upadha(word: str, script=None, verbal_root: bool = False, registry=None) -> Optional[str]:
    """Penultimate phoneme, or None for words of fewer than two phonemes."""
    parsed, _ = prepare_word(word, script, registry)
    return _grapheme(parsed.upadha(verbal_root)) if parsed else None


def get_all_vowels(word: str, script=None, registry=None) -> List[VowelPosition]:
    """Every vowel of the word with its segment index."""
    parsed, _ = prepare_word(word, script, registry)
    if parsed is None:
        return []
    return [
        VowelPosition(index=i, vowel=seg.grapheme, inherent=seg.inherent)
        for i, seg in enumerate(parsed.segments)
        if seg.is_vowel
    ]


def get_first_vowel(word: str, script=None, registry=None) -> Optional[VowelPosition]:
    vowels = get_all_vowels(word, script, registry)
    return vowels[0] if vowels else None


__all__ = [
    'Segment',
    'Word',
    'VowelPosition',
    'segment',
    'prepare_word',
    'initial',
    'final',
    'upadha',
    'get_all_vowels',
    'get_first_vowel',
]
