"""
Tests for Transliteration
=========================
Tests for IAST <-> Devanagari conversion in sutrakit/transliteration.py.
"""

import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sutrakit.phonemes import load_iast, load_gradation
from sutrakit.script import Script
from sutrakit.transliteration import to_iast, to_devanagari, equivalent_across_scripts

WORDS = [
    ('kṛṣṇa', 'कृष्ण'),
    ('devī', 'देवी'),
    ('rāma', 'राम'),
    ('bhid', 'भिद्'),
    ('saṃskṛtam', 'संस्कृतम्'),
    ('agni', 'अग्नि'),
    ('aiśvarya', 'ऐश्वर्य'),
]

IAST = load_iast()


class TestWords:
    """Tests for whole words in both directions."""

    @pytest.mark.parametrize('iast,devanagari', WORDS)
    def test_to_devanagari(self, iast, devanagari):
        assert to_devanagari(iast) == devanagari

    @pytest.mark.parametrize('iast,devanagari', WORDS)
    def test_to_iast(self, iast, devanagari):
        assert to_iast(devanagari) == iast

    def test_same_script_passthrough(self):
        assert to_iast('Deva') == 'deva'
        assert to_devanagari('देव') == 'देव'

    def test_mixed_raises(self):
        with pytest.raises(ValueError):
            to_iast('devaदेव')

    def test_equivalence(self):
        assert equivalent_across_scripts('deva', 'देव')
        assert not equivalent_across_scripts('deva', 'देवी')
        assert not equivalent_across_scripts('deva', 'devaदेव')


class TestTableEntries:
    """Every table entry lands on its counterpart."""

    @pytest.mark.parametrize('grapheme', sorted(g for g, p in IAST.phonemes.items() if not p.is_consonant))
    def test_vowels_and_modifiers(self, grapheme):
        counterpart = IAST.phonemes[grapheme].counterpart
        assert to_devanagari(grapheme) == counterpart
        assert to_iast(counterpart) == grapheme

    @pytest.mark.parametrize('grapheme', sorted(g for g, p in IAST.phonemes.items() if p.is_consonant))
    def test_consonants_take_virama(self, grapheme):
        counterpart = IAST.phonemes[grapheme].counterpart
        assert to_devanagari(grapheme) == counterpart + '्'
        assert to_iast(counterpart + '्') == grapheme
        assert to_iast(counterpart) == grapheme + 'a'

    @pytest.mark.parametrize('table', ['guna', 'vriddhi'])
    def test_gradation_maps_agree(self, table):
        """Test the Devanagari gradation map is the transliterated IAST map."""
        maps = getattr(load_gradation(), table)
        for vowel, image in maps[Script.IAST].items():
            counterpart = IAST.phonemes[vowel].counterpart
            assert maps[Script.DEVANAGARI][counterpart] == to_devanagari(image)
