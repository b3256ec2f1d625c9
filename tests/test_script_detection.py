"""
Tests for Script Detection
==========================
Tests for detect_script, resolve_script and normalize_word in
sutrakit/script.py.
"""

import pytest
import sys
import unicodedata
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sutrakit.script import Script, detect_script, parse_script, resolve_script, normalize_word


class TestDetectScript:
    """Tests for detect_script."""

    @pytest.mark.parametrize('text', ['deva', 'kṛṣṇa', 'ṛ', 'Agni', 'saṃskṛtam'])
    def test_iast(self, text):
        assert detect_script(text) is Script.IAST

    @pytest.mark.parametrize('text', ['देव', 'कृष्ण', 'ि', 'अ'])
    def test_devanagari(self, text):
        assert detect_script(text) is Script.DEVANAGARI

    def test_mixed(self):
        """Test mixed input is flagged rather than guessed."""
        assert detect_script('devaदेव') is Script.MIXED

    @pytest.mark.parametrize('text', ['', '   ', '123', '!?', None, 42])
    def test_unrecognized(self, text):
        assert detect_script(text) is None

    def test_decomposed_iast(self):
        assert detect_script(unicodedata.normalize('NFD', 'kṛ')) is Script.IAST


class TestResolveScript:
    """Tests for explicit script hints."""

    def test_hint_wins(self):
        assert resolve_script('देव', 'IAST') is Script.IAST

    @pytest.mark.parametrize('hint', ['iast', 'IAST', 'Devanagari', 'devanagari', ' DEVANAGARI '])
    def test_hint_case_insensitive(self, hint):
        assert parse_script(hint) in (Script.IAST, Script.DEVANAGARI)

    def test_enum_hint(self):
        assert resolve_script('deva', Script.DEVANAGARI) is Script.DEVANAGARI

    def test_unknown_hint(self):
        with pytest.raises(ValueError, match="Unknown script"):
            resolve_script('deva', 'Latin')

    def test_no_hint_detects(self):
        assert resolve_script('deva') is Script.IAST


class TestNormalizeWord:
    """Tests for normalize_word."""

    def test_iast_lowercased_and_stripped(self):
        assert normalize_word('  Deva ', Script.IAST) == 'deva'

    def test_nfc(self):
        assert normalize_word(unicodedata.normalize('NFD', 'kṛṣṇa'), Script.IAST) == 'kṛṣṇa'

    def test_devanagari_untouched(self):
        assert normalize_word(' देव ', Script.DEVANAGARI) == 'देव'
