"""
Tests for CLI Commands
======================
Tests for the sutrakit CLI interface in sutrakit/cli.py.
"""

import json
import pytest
import sys
import subprocess
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sutrakit import __version__
from sutrakit.cli import main, build_parser


def run_cli(*args):
    return subprocess.run(
        [sys.executable, "-m", "sutrakit", *args],
        capture_output=True,
        text=True,
        encoding="utf-8",
        cwd=str(ROOT),
    )


class TestCLIBasic:
    """Basic CLI tests."""

    def test_version_flag(self):
        """Test --version flag."""
        result = run_cli("--version")
        assert result.returncode == 0
        assert __version__ in result.stdout

    def test_help_flag(self):
        """Test --help flag."""
        result = run_cli("--help")
        assert result.returncode == 0
        assert "upadha" in result.stdout
        assert "shorten" in result.stdout

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()

    def test_subprocess_guna(self):
        result = run_cli("guna", "ṛ")
        assert result.returncode == 0
        assert result.stdout.strip() == "ar"

    def test_parser_aliases(self):
        args = build_parser().parse_args(["seg", "bhid"])
        assert args.command == "seg"


class TestCommands:
    """Tests for individual commands through main(argv)."""

    def test_script(self, capsys):
        assert main(["script", "देव"]) == 0
        assert "Devanagari" in capsys.readouterr().out

    def test_script_unrecognized(self, capsys):
        assert main(["script", "123"]) == 1

    def test_segment(self, capsys):
        assert main(["segment", "bhid"]) == 0
        out = capsys.readouterr().out
        assert "bh" in out
        assert "consonant" in out

    def test_segment_json(self, capsys):
        assert main(["--json", "segment", "देव"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert [s["phoneme"] for s in data["segments"]] == ["द", "ए", "व", "अ"]

    def test_vriddhi(self, capsys):
        assert main(["vriddhi", "ऋ"]) == 0
        assert capsys.readouterr().out.strip() == "आर्"

    def test_upadha(self, capsys):
        assert main(["upadha", "kṛ"]) == 0
        out = capsys.readouterr().out
        assert "ār" in out
        assert "heuristic" in out

    def test_upadha_json(self, capsys):
        assert main(["--json", "upadha", "bhid", "--dhatu"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["upadha"] == "i"
        assert data["root_candidacy"] == "asserted"

    def test_upadha_invalid(self, capsys):
        assert main(["upadha", " "]) == 1
        assert "Error" in capsys.readouterr().err

    def test_scope(self, capsys):
        assert main(["scope", "kṛṣṇa"]) == 0
        assert "ār" in capsys.readouterr().out

    def test_substitute_replace(self, capsys):
        assert main(["--json", "substitute", "kṛ", "a", "--replace"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["transformed"] == "kar"

    def test_substitute_after_final(self, capsys):
        assert main(["substitute", "deva", "s"]) == 0
        assert "Result: devas" in capsys.readouterr().out

    def test_substitute_validate(self, capsys):
        assert main(["--json", "substitute", "deva", "abhyāsa", "--validate",
                     "--process", "sandhi"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["applies"] is False

    def test_suggest(self, capsys):
        assert main(["suggest", "deva", "--process", "declension"]) == 0
        assert "āni" in capsys.readouterr().out

    def test_rapara(self, capsys):
        assert main(["rapara", "u", "ṝ"]) == 0
        assert capsys.readouterr().out.strip() == "ur"

    def test_rapara_error(self, capsys):
        assert main(["rapara", "a", "ṛ", "--script", "Latin"]) == 1
        assert "Unknown script" in capsys.readouterr().err

    def test_shorten_preview(self, capsys):
        assert main(["shorten", "देवी", "--elision", "LUK", "--preview"]) == 0
        out = capsys.readouterr().out
        assert "Applies: yes" in out
        assert "Result:" not in out

    def test_shorten_neuter(self, capsys):
        assert main(["shorten", "vārī", "--gender", "neuter", "--pratipadika"]) == 0
        assert "Result: vāri" in capsys.readouterr().out

    def test_shorten_force(self, capsys):
        assert main(["shorten", "देवा", "--force"]) == 0
        assert "Result: देव" in capsys.readouterr().out

    def test_closest(self, capsys):
        assert main(["closest", "k", "g", "t", "kh"]) == 0
        assert "Closest: kh" in capsys.readouterr().out

    def test_translit(self, capsys):
        assert main(["translit", "kṛṣṇa"]) == 0
        assert capsys.readouterr().out.strip() == "कृष्ण"

    def test_translit_to_iast(self, capsys):
        assert main(["tr", "देवी", "--to", "iast"]) == 0
        assert capsys.readouterr().out.strip() == "devī"

    def test_quiet(self, capsys):
        assert main(["--quiet", "guna", "i"]) == 0
        assert capsys.readouterr().out == ""
