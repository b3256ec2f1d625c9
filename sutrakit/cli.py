#!/usr/bin/env python3
"""
SutraKit CLI
============
Command-line interface to the phonological engine.

Usage:
    sutrakit segment कृष्ण
    sutrakit guna ṛ
    sutrakit upadha bhid --dhatu
    sutrakit substitute kṛ a --replace
    sutrakit shorten देवी --elision luk --preview
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich import box

# Add parent to path
_parent = Path(__file__).parent.parent
if str(_parent) not in sys.path:
    sys.path.insert(0, str(_parent))

from sutrakit import __version__
from sutrakit.settings import get_setting

# =============================================================================
# Constants
# =============================================================================

PROCESSES = ['declension', 'conjugation', 'derivation', 'sandhi', 'general']
GENDERS = ['neuter', 'masculine', 'feminine']
ELISIONS = ['luk', 'lup']
GRAMMAR_CONTEXTS = ['general', 'classical', 'vedic']

# =============================================================================
# Utilities
# =============================================================================

class Output:
    """Handles CLI output with quiet and JSON modes."""

    def __init__(self, quiet: bool = False, as_json: bool = False):
        self.quiet = quiet
        self.as_json = as_json
        self.console = Console(highlight=False)

    def print(self, *args, **kwargs):
        if not self.quiet:
            kwargs.setdefault('markup', False)
            kwargs.setdefault('soft_wrap', True)
            self.console.print(*args, **kwargs)

    def error(self, msg: str):
        print(f"Error: {msg}", file=sys.stderr)

    def json(self, data):
        indent = get_setting('cli.json_indent', 2)
        print(json.dumps(data, ensure_ascii=False, indent=indent, default=str))

    def table(self, headers: list, rows: list, title: str = None):
        """Print a table with rich."""
        if self.quiet:
            return
        table = Table(title=title, box=box.SIMPLE_HEAD)
        for header in headers:
            table.add_column(str(header))
        for row in rows:
            table.add_row(*('' if c is None else str(c) for c in row))
        self.console.print(table)

    def result(self, result, value_label: str = 'Result'):
        """Print a TransformationResult; returns the exit code."""
        if self.as_json:
            self.json(result.to_dict())
        else:
            if result.transformed is not None:
                self.print(f"{value_label}: {result.transformed}")
            self.print(f"Applies: {'yes' if result.applies else 'no'}")
            if result.explanation:
                self.print(result.explanation)
        return 1 if result.reason else 0


def configure_logging(verbose: bool = False):
    level_name = 'DEBUG' if verbose else str(get_setting('logging.level', 'WARNING')).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format=get_setting('logging.format', '%(levelname)s %(name)s: %(message)s'),
    )


# =============================================================================
# Commands
# =============================================================================

def cmd_script(args, out: Output):
    from sutrakit.script import detect_script

    script = detect_script(args.text)
    name = script.value if script else None
    if out.as_json:
        out.json({'text': args.text, 'script': name})
    else:
        out.print(name or 'unrecognized')
    return 0 if script else 1


def cmd_segment(args, out: Output):
    from sutrakit.segmentation import prepare_word

    word, reason = prepare_word(args.word, args.script)
    if word is None:
        out.error(reason)
        return 1

    rows = []
    for i, seg in enumerate(word.segments):
        p = seg.phoneme
        rows.append([
            i,
            seg.surface or '(inherent)',
            seg.grapheme,
            p.category if p else 'unknown',
            (p.grade or p.manner or p.name) if p else '',
            (p.place or '') if p else '',
            (p.gradation or '') if p else '',
        ])

    if out.as_json:
        out.json({
            'word': word.surface,
            'script': word.script.value,
            'segments': [
                {'index': r[0], 'surface': s.surface, 'phoneme': r[2], 'category': r[3]}
                for r, s in zip(rows, word.segments)
            ],
        })
        return 0

    out.table(['#', 'Surface', 'Phoneme', 'Category', 'Grade/Manner', 'Place', 'Gradation'],
              rows, title=f"{word.surface} ({word.script.value})")
    return 0


def _cmd_grade(args, out: Output, func, label):
    value = func(args.vowel)
    if out.as_json:
        out.json({'vowel': args.vowel, label: value, 'changed': value != args.vowel})
    else:
        out.print(value)
    return 0


def cmd_guna(args, out: Output):
    from sutrakit.gradation import guna
    return _cmd_grade(args, out, guna, 'guna')


def cmd_vriddhi(args, out: Output):
    from sutrakit.gradation import vriddhi
    return _cmd_grade(args, out, vriddhi, 'vriddhi')


def cmd_upadha(args, out: Output):
    from sutrakit.gradation import analyze_upadha

    result = analyze_upadha(args.word, {'script': args.script, 'is_dhatu': args.dhatu})
    if out.as_json:
        out.json(result.to_dict())
        return 1 if result.reason else 0
    if result.reason:
        out.error(result.reason)
        return 1

    out.table(['Field', 'Value'], [
        ['upadha', result.upadha],
        ['ik', 'yes' if result.has_ik_upadha else 'no'],
        ['ik class', result.ik_class],
        ['guna', result.guna_form],
        ['vriddhi', result.vriddhi_form],
        ['root candidacy', result.root_candidacy],
    ], title=args.word)
    out.print(result.explanation)
    return 0


def cmd_scope(args, out: Output):
    from sutrakit.gradation import gradation_scope

    result = gradation_scope(args.word, args.script)
    if out.as_json or result.reason:
        return out.result(result)

    rows = [[v['position'], v['vowel'], 'yes' if v['is_ik'] else 'no', v['guna'], v['vriddhi']]
            for v in result.details['vowels']]
    out.table(['#', 'Vowel', 'ik', 'Guna', 'Vriddhi'], rows, title=args.word)
    out.print(result.explanation)
    return 0


def cmd_substitute(args, out: Output):
    from sutrakit.substitution import replace_final, substitute, validate_substitution

    context = {'script': args.script, 'process': args.process,
               'grammar_context': args.grammar_context}
    if args.validate:
        return out.result(validate_substitution(args.word, args.replacement, context))
    func = replace_final if args.replace else substitute
    return out.result(func(args.word, args.replacement, context, transform=not args.preview))


def cmd_suggest(args, out: Output):
    from sutrakit.substitution import suggest_substitutes

    result = suggest_substitutes(args.word, args.process, script=args.script)
    if out.as_json or result.reason:
        return out.result(result)
    out.print(result.explanation)
    for suggestion in result.details['suggestions']:
        out.print(f"  {suggestion}")
    return 0


def cmd_rapara(args, out: Output):
    from sutrakit.substitution import apply_rapara

    value = apply_rapara(args.substitute, args.original, args.script)
    if out.as_json:
        out.json({'substitute': args.substitute, 'original': args.original, 'result': value})
    else:
        out.print(value)
    return 0


def cmd_shorten(args, out: Output):
    from sutrakit.shortening import shorten, shorten_final_vowel

    context = {
        'script': args.script,
        'gender': args.gender,
        'is_upasarjana': args.upasarjana,
        'is_feminine': args.feminine,
        'taddhita_elision': args.elision,
        'is_pratipadika': args.pratipadika,
    }
    if args.force:
        result = shorten_final_vowel(args.word, context, transform=not args.preview)
    else:
        result = shorten(args.word, context, transform=not args.preview)
    return out.result(result)


def cmd_closest(args, out: Output):
    from sutrakit.substitution import select_closest_substitute

    result = select_closest_substitute(args.original, args.candidates, args.script)
    if out.as_json or not result.applies:
        return out.result(result, 'Closest')
    rows = [[r['candidate'], f"{r['score']:.2f}"] for r in result.details['ranking']]
    out.table(['Candidate', 'Score'], rows, title=f"closest to {args.original}")
    out.print(f"Closest: {result.transformed}")
    return 0


def cmd_translit(args, out: Output):
    from sutrakit.transliteration import to_devanagari, to_iast

    func = to_iast if args.to == 'iast' else to_devanagari
    value = func(args.text)
    if out.as_json:
        out.json({'text': args.text, 'to': args.to, 'result': value})
    else:
        out.print(value)
    return 0


# =============================================================================
# Main
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='sutrakit',
        description='SutraKit - Sanskrit phonological operations',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s segment कृष्ण
  %(prog)s guna ṛ
  %(prog)s upadha bhid --dhatu
  %(prog)s substitute kṛ a --replace
  %(prog)s rapara a ṛ
  %(prog)s shorten vārī --gender neuter --pratipadika
  %(prog)s closest k g t kh
  %(prog)s translit devī --to devanagari
"""
    )

    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-essential output')
    parser.add_argument('--json', '-j', action='store_true', help='Output as JSON')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    def with_script(p):
        p.add_argument('--script', '-s', help='IAST or Devanagari (default: detect)')
        return p

    # --- script ---
    p = subparsers.add_parser('script', help='Detect the script of a word')
    p.add_argument('text', help='Word to inspect')

    # --- segment ---
    p = with_script(subparsers.add_parser('segment', aliases=['seg'], help='Split a word into phonemes'))
    p.add_argument('word', help='Word to segment')

    # --- guna / vriddhi ---
    p = subparsers.add_parser('guna', help='Guna grade of an ik vowel')
    p.add_argument('vowel', help='Vowel (IAST or Devanagari)')
    p = subparsers.add_parser('vriddhi', help='Vriddhi grade of an ik vowel')
    p.add_argument('vowel', help='Vowel (IAST or Devanagari)')

    # --- upadha ---
    p = with_script(subparsers.add_parser('upadha', help='Analyze the penultimate sound'))
    p.add_argument('word', help='Word (verbal root)')
    group = p.add_mutually_exclusive_group()
    group.add_argument('--dhatu', dest='dhatu', action='store_true', default=None,
                       help='The word is a verbal root')
    group.add_argument('--not-dhatu', dest='dhatu', action='store_false',
                       help='The word is not a verbal root')

    # --- scope ---
    p = with_script(subparsers.add_parser('scope', help='Gradation forms of every vowel'))
    p.add_argument('word', help='Word to inspect')

    # --- substitute ---
    p = with_script(subparsers.add_parser('substitute', aliases=['sub'],
                                          help='Substitute on the final sound'))
    p.add_argument('word', help='Word')
    p.add_argument('replacement', help='Replacement sound(s)')
    p.add_argument('--replace', '-r', action='store_true',
                   help='Replace the final sound instead of following it')
    p.add_argument('--process', '-p', choices=PROCESSES, default='general')
    p.add_argument('--grammar-context', choices=GRAMMAR_CONTEXTS, default='general')
    p.add_argument('--validate', action='store_true', help='Check plausibility only')
    p.add_argument('--preview', action='store_true', help='Do not transform')

    # --- suggest ---
    p = with_script(subparsers.add_parser('suggest', help='Suggest substitutes for the final sound'))
    p.add_argument('word', help='Word')
    p.add_argument('--process', '-p', choices=PROCESSES, default='general')

    # --- rapara ---
    p = subparsers.add_parser('rapara', help='r after a/i/u replacing ṛ/ṝ')
    p.add_argument('substitute', help='Substitute vowel')
    p.add_argument('original', help='Original vowel')
    p.add_argument('--script', '-s', default='IAST', help='IAST or Devanagari (default: IAST)')

    # --- shorten ---
    p = with_script(subparsers.add_parser('shorten', help='Conditioned final-vowel shortening'))
    p.add_argument('word', help='Word')
    p.add_argument('--gender', '-g', choices=GENDERS)
    p.add_argument('--upasarjana', action='store_true', help='Subordinate compound member')
    p.add_argument('--feminine', action='store_true', help='Feminine')
    p.add_argument('--elision', '-e', choices=ELISIONS, type=str.lower,
                   help='Taddhita elision type')
    p.add_argument('--pratipadika', action='store_true', default=None,
                   help='The word is a nominal stem')
    p.add_argument('--force', action='store_true', help='Shorten without checking conditions')
    p.add_argument('--preview', action='store_true', help='Do not transform')

    # --- closest ---
    p = with_script(subparsers.add_parser('closest', help='Closest substitute for a sound'))
    p.add_argument('original', help='Sound being replaced')
    p.add_argument('candidates', nargs='+', help='Candidate sounds')

    # --- translit ---
    p = subparsers.add_parser('translit', aliases=['tr'], help='Transliterate a word')
    p.add_argument('text', help='Text to transliterate')
    p.add_argument('--to', choices=['iast', 'devanagari'], default='devanagari')

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    configure_logging(args.verbose)

    # Handle aliases
    cmd_map = {
        'seg': 'segment',
        'sub': 'substitute',
        'tr': 'translit',
    }
    command = cmd_map.get(args.command, args.command)

    out = Output(quiet=args.quiet, as_json=args.json)

    commands = {
        'script': cmd_script,
        'segment': cmd_segment,
        'guna': cmd_guna,
        'vriddhi': cmd_vriddhi,
        'upadha': cmd_upadha,
        'scope': cmd_scope,
        'substitute': cmd_substitute,
        'suggest': cmd_suggest,
        'rapara': cmd_rapara,
        'shorten': cmd_shorten,
        'closest': cmd_closest,
        'translit': cmd_translit,
    }

    handler = commands.get(command)
    if handler:
        try:
            return handler(args, out)
        except KeyboardInterrupt:
            out.print("\nCancelled.")
            return 130
        except Exception as e:
            out.error(str(e))
            if args.verbose:
                import traceback
                traceback.print_exc()
            return 1

    parser.print_help()
    return 0


if __name__ == '__main__':
    sys.exit(main())
