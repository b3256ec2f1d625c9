#!/usr/bin/env python3
"""
Result Types
============
Structured results returned by every engine operation.

A result says whether a rule applies, whether the word was changed, the
transformed form (None in preview mode), and a human-readable
explanation. Invalid input is reported through `reason` rather than an
exception.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Optional


@dataclass
class TransformationResult:
    """Outcome of a phonological operation."""
    applies: bool
    changed: bool = False
    transformed: Optional[str] = None
    explanation: str = ""
    reason: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def invalid(cls, reason: str, **kwargs):
        """Result for input the operation cannot work on."""
        return cls(applies=False, explanation=reason, reason=reason, **kwargs)

    @property
    def is_invalid(self) -> bool:
        return self.reason is not None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class UpadhaAnalysis(TransformationResult):
    """Penultimate-sound analysis of a word."""
    upadha: Optional[str] = None
    has_ik_upadha: bool = False
    ik_class: Optional[str] = None
    guna_form: Optional[str] = None
    vriddhi_form: Optional[str] = None
    is_root_candidate: bool = False
    root_candidacy: Optional[str] = None  # asserted | heuristic | rejected


@dataclass
class ShorteningResult(TransformationResult):
    """Final-vowel shortening outcome, with the rule that decided it."""
    rule: Optional[str] = None
    final_vowel_original: Optional[str] = None
    final_vowel_shortened: Optional[str] = None


__all__ = [
    'TransformationResult',
    'UpadhaAnalysis',
    'ShorteningResult',
]
