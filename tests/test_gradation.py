"""
Tests for Gradation
===================
Tests for guna, vriddhi, ec_to_ik, upadha analysis and gradation scope
in sutrakit/gradation.py.
"""

import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sutrakit.gradation import (
    guna,
    vriddhi,
    is_ik,
    ec_to_ik,
    analyze_upadha,
    gradation_scope,
)
from sutrakit.context import UpadhaContext


GUNA = [
    ('i', 'e'), ('ī', 'e'), ('u', 'o'), ('ū', 'o'),
    ('ṛ', 'ar'), ('ṝ', 'ar'), ('ḷ', 'al'), ('ḹ', 'al'),
    ('इ', 'ए'), ('ई', 'ए'), ('उ', 'ओ'), ('ऊ', 'ओ'),
    ('ऋ', 'अर्'), ('ॠ', 'अर्'), ('ऌ', 'अल्'), ('ॡ', 'अल्'),
    ('ि', 'ए'), ('ृ', 'अर्'),
]

VRIDDHI = [
    ('i', 'ai'), ('ī', 'ai'), ('u', 'au'), ('ū', 'au'),
    ('ṛ', 'ār'), ('ṝ', 'ār'), ('ḷ', 'āl'), ('ḹ', 'āl'),
    ('इ', 'ऐ'), ('ई', 'ऐ'), ('उ', 'औ'), ('ऊ', 'औ'),
    ('ऋ', 'आर्'), ('ॠ', 'आर्'), ('ऌ', 'आल्'), ('ॡ', 'आल्'),
    ('ु', 'औ'), ('ॄ', 'आर्'),
]


class TestGunaVriddhi:
    """Tests for the gradation maps."""

    @pytest.mark.parametrize('vowel,expected', GUNA)
    def test_guna(self, vowel, expected):
        assert guna(vowel) == expected

    @pytest.mark.parametrize('vowel,expected', VRIDDHI)
    def test_vriddhi(self, vowel, expected):
        assert vriddhi(vowel) == expected

    @pytest.mark.parametrize('value', ['a', 'ā', 'e', 'au', 'k', 'ा', 'x', '', None])
    def test_identity_outside_ik(self, value):
        assert guna(value) == value
        assert vriddhi(value) == value

    def test_is_ik(self):
        assert is_ik('ṛ')
        assert is_ik('ी')
        assert not is_ik('a')
        assert not is_ik('k')
        assert not is_ik(None)


class TestEcToIk:
    """Tests for diphthong -> ik substitution."""

    @pytest.mark.parametrize('vowel,expected', [
        ('e', 'i'), ('o', 'u'), ('ai', 'i'), ('au', 'u'),
        ('ए', 'इ'), ('औ', 'उ'),
    ])
    def test_ec_to_ik(self, vowel, expected):
        assert ec_to_ik(vowel) == expected

    def test_identity(self):
        assert ec_to_ik('a') == 'a'
        assert ec_to_ik('i') == 'i'


class TestAnalyzeUpadha:
    """Tests for analyze_upadha."""

    def test_kr(self):
        """Test kṛ: final ik vowel of a root is its upadha."""
        result = analyze_upadha('kṛ')
        assert result.applies
        assert result.upadha == 'ṛ'
        assert result.has_ik_upadha
        assert result.guna_form == 'ar'
        assert result.vriddhi_form == 'ār'
        assert result.root_candidacy == 'heuristic'
        assert result.changed is False
        assert result.transformed is None

    def test_bhid_asserted(self):
        result = analyze_upadha('bhid', {'is_dhatu': True})
        assert result.applies
        assert result.upadha == 'i'
        assert result.ik_class == 'i'
        assert result.guna_form == 'e'
        assert result.root_candidacy == 'asserted'

    def test_long_ik_class(self):
        result = analyze_upadha('mūṣ', UpadhaContext(is_dhatu=True))
        assert result.upadha == 'ū'
        assert result.ik_class == 'u'

    def test_devanagari(self):
        result = analyze_upadha('भिद्')
        assert result.upadha == 'इ'
        assert result.guna_form == 'ए'
        assert analyze_upadha('कृ').vriddhi_form == 'आर्'

    def test_non_ik_upadha(self):
        result = analyze_upadha('pat')
        assert not result.applies
        assert result.upadha == 'a'
        assert not result.has_ik_upadha
        assert result.reason is None

    def test_rejected_candidacy(self):
        result = analyze_upadha('bhid', {'is_dhatu': False})
        assert not result.applies
        assert result.root_candidacy == 'rejected'
        assert not result.is_root_candidate

    def test_long_word_not_heuristic_root(self):
        result = analyze_upadha('devadatta')
        assert not result.is_root_candidate
        assert result.root_candidacy == 'heuristic'

    def test_asserted_overrides_length(self):
        result = analyze_upadha('devadatti', {'is_dhatu': True})
        assert result.applies
        assert result.upadha == 'i'

    def test_single_sound(self):
        result = analyze_upadha('i')
        assert not result.applies
        assert result.upadha is None

    @pytest.mark.parametrize('word', ['', '  ', None, 'devaदेव'])
    def test_invalid(self, word):
        result = analyze_upadha(word)
        assert not result.applies
        assert result.reason

    def test_unknown_context_key(self):
        with pytest.raises(ValueError):
            analyze_upadha('bhid', {'is_verb': True})


class TestGradationScope:
    """Tests for gradation_scope."""

    def test_scope(self):
        result = gradation_scope('kṛṣṇa')
        assert result.applies
        assert result.details['total_vowels'] == 2
        assert result.details['transformable_count'] == 1
        first = result.details['vowels'][0]
        assert (first['vowel'], first['guna'], first['vriddhi']) == ('ṛ', 'ar', 'ār')

    def test_no_ik(self):
        result = gradation_scope('rāma')
        assert not result.applies
        assert result.details['transformable_count'] == 0
