#!/usr/bin/env python3
"""
Script Detection
================
Decides whether a word is written in IAST or Devanagari.

Mixed input is reported as such and never guessed. An explicit script
hint always wins over detection.

Usage:
    from sutrakit.script import Script, detect_script, resolve_script

    detect_script('देव')            # Script.DEVANAGARI
    resolve_script('deva', 'iast')  # Script.IAST
"""

import logging
import re
import unicodedata
from enum import Enum
from typing import Optional, Union

logger = logging.getLogger(__name__)


class Script(Enum):
    """Writing systems the engine understands."""
    IAST = "IAST"
    DEVANAGARI = "Devanagari"
    MIXED = "Mixed"

    @property
    def key(self) -> str:
        """Lowercase key used in the YAML tables."""
        return self.value.lower()


_DEVANAGARI_RE = re.compile(r'[\u0900-\u097F]')

# ASCII letters plus the precomposed IAST letters. Decomposed input is
# NFC-normalized before matching, so combining marks need no entry here.
_IAST_RE = re.compile(
    r'[A-Za-z'
    r'āīūṛṝḷḹṅñṭḍṇśṣḥṃ'
    r'ĀĪŪṚṜḶḸṄÑṬḌṆŚṢḤṂ]'
)

_SCRIPT_ALIASES = {
    'iast': Script.IAST,
    'roman': Script.IAST,
    'devanagari': Script.DEVANAGARI,
    'deva': Script.DEVANAGARI,
}


def detect_script(text) -> Optional[Script]:
    """Detect the script of a word.

    Returns None for non-strings, empty or whitespace-only text, and
    text with no letters of either script.
    """
    if not isinstance(text, str) or not text.strip():
        return None

    text = unicodedata.normalize('NFC', text)
    has_devanagari = bool(_DEVANAGARI_RE.search(text))
    has_iast = bool(_IAST_RE.search(text))

    if has_devanagari and has_iast:
        logger.warning("Mixed-script input %r; refusing to guess a script", text)
        return Script.MIXED
    if has_devanagari:
        return Script.DEVANAGARI
    if has_iast:
        return Script.IAST
    return None


def parse_script(value: Union[Script, str]) -> Script:
    """Turn a script hint into a Script. Unknown hints raise ValueError."""
    if isinstance(value, Script):
        return value
    if isinstance(value, str):
        script = _SCRIPT_ALIASES.get(value.strip().lower())
        if script is not None:
            return script
    raise ValueError(
        f"Unknown script: {value!r}. Expected one of: IAST, Devanagari"
    )


def resolve_script(text, hint: Union[Script, str, None] = None) -> Optional[Script]:
    """Script of `text`, with an explicit hint taking precedence."""
    if hint is not None:
        return parse_script(hint)
    return detect_script(text)


def normalize_word(text: str, script: Optional[Script]) -> str:
    """NFC-normalize and strip; IAST is also lowercased."""
    text = unicodedata.normalize('NFC', text).strip()
    if script is Script.IAST:
        text = text.lower()
    return text


__all__ = [
    'Script',
    'detect_script',
    'parse_script',
    'resolve_script',
    'normalize_word',
]
