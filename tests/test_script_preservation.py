"""
Tests for Script Preservation
=============================
Every transforming operation answers in the script of its input, and the
IAST and Devanagari renditions of one operation spell the same sounds.
"""

import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sutrakit.script import Script, detect_script
from sutrakit.shortening import shorten
from sutrakit.substitution import replace_final, substitute
from sutrakit.transliteration import to_iast, to_devanagari

NEUTER = {'gender': 'neuter', 'is_pratipadika': True}
LUK = {'taddhita_elision': 'luk'}

# (operation, IAST word, IAST argument, Devanagari word, Devanagari argument)
CASES = [
    (replace_final, 'kṛ', 'a', 'कृ', 'अ'),
    (replace_final, 'kṛ', 'ar', 'कृ', 'अर्'),
    (replace_final, 'ki', 'e', 'कि', 'ए'),
    (replace_final, 'deva', 's', 'देव', 'स्'),
    (replace_final, 'deva', 'sa', 'देव', 'स'),
    (replace_final, 'devā', 's', 'देवा', 'स्'),
    (replace_final, 'deva', 'ā', 'देव', 'आ'),
    (replace_final, 'bhid', 't', 'भिद्', 'त्'),
    (substitute, 'deva', 'as', 'देव', 'अस्'),
    (substitute, 'kṛ', 'ti', 'कृ', 'ति'),
    (shorten, 'vārī', NEUTER, 'वारी', NEUTER),
    (shorten, 'devī', LUK, 'देवी', LUK),
]

IDS = [f"{op.__name__}-{word}" for op, word, _, _, _ in CASES]


class TestScriptPreservation:
    """Tests that outputs stay in the input's script."""

    @pytest.mark.parametrize('op,iast_word,iast_arg,dev_word,dev_arg', CASES, ids=IDS)
    def test_iast_stays_iast(self, op, iast_word, iast_arg, dev_word, dev_arg):
        result = op(iast_word, iast_arg)
        assert result.applies
        assert detect_script(result.transformed) is Script.IAST

    @pytest.mark.parametrize('op,iast_word,iast_arg,dev_word,dev_arg', CASES, ids=IDS)
    def test_devanagari_stays_devanagari(self, op, iast_word, iast_arg, dev_word, dev_arg):
        result = op(dev_word, dev_arg)
        assert result.applies
        assert detect_script(result.transformed) is Script.DEVANAGARI

    @pytest.mark.parametrize('op,iast_word,iast_arg,dev_word,dev_arg', CASES, ids=IDS)
    def test_scripts_agree(self, op, iast_word, iast_arg, dev_word, dev_arg):
        iast_out = op(iast_word, iast_arg).transformed
        dev_out = op(dev_word, dev_arg).transformed
        assert to_iast(dev_out) == iast_out
        assert to_devanagari(iast_out) == dev_out
