"""
Anchor Rules
============

How an anchor relates to a word, and whether a proposed challenge is legal.

A challenge is an anchor plus 4-6 words. Each word must start or end with
the anchor, be strictly longer than it, and leave a remainder that is
itself a real word. The remainders are the clues players see.

Checks run in a fixed order and stop at the first failure:
  a. anchor non-empty and alphabetic
  b. 4-6 words
  c. anchor is a real word
  d. every word is alphabetic and real
  e. every word starts or ends with the anchor
  f. every remainder is a real word
  g. no duplicate words
"""

import re
from dataclasses import dataclass
from typing import List, Optional

import anchor_constants as C
from anchor_errors import ChallengeValidationError
from word_oracle import get_oracle

PREFIX = "prefix"
SUFFIX = "suffix"

_ALPHA_RE = re.compile(r'^[a-z]+$')


@dataclass(frozen=True)
class AnchorMatch:
    position: str
    remainder: str


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    kind: Optional[str] = None
    message: Optional[str] = None

    def raise_for_invalid(self):
        if not self.valid:
            raise ChallengeValidationError(self.message, error_kind=self.kind)


VALID = ValidationResult(valid=True)


def _invalid(kind, message):
    return ValidationResult(valid=False, kind=kind, message=message)


def normalize_word(s):
    return str(s).strip().lower() if s is not None else ''


def normalize_words(words):
    """Normalize a submitted word list, dropping blank slots."""
    return [w for w in (normalize_word(x) for x in words or []) if w]


def is_alpha(s):
    return bool(_ALPHA_RE.match(s or ''))


def classify_anchor(anchor, word) -> Optional[AnchorMatch]:
    """
    Decide whether `word` starts or ends with `anchor`.

    Returns None when neither end matches or the word is no longer than the
    anchor. A word matching at both ends is classified as a prefix.
    """
    if not anchor or len(word) <= len(anchor):
        return None
    if word.startswith(anchor):
        return AnchorMatch(PREFIX, word[len(anchor):])
    if word.endswith(anchor):
        return AnchorMatch(SUFFIX, word[:-len(anchor)])
    return None


def validate_challenge(anchor, words, oracle=None) -> ValidationResult:
    """Run the creation checks in order. Inputs are expected pre-normalized."""
    if oracle is None:
        oracle = get_oracle()

    if not anchor:
        return _invalid(C.EMPTY_ANCHOR, "Enter the shared anchor substring.")
    if not is_alpha(anchor):
        return _invalid(C.EMPTY_ANCHOR, f"Anchor must contain letters only: {anchor}")

    if not C.MIN_WORDS <= len(words) <= C.MAX_WORDS:
        return _invalid(
            C.WORD_COUNT_OUT_OF_RANGE,
            f"Provide {C.MIN_WORDS}-{C.MAX_WORDS} words (got {len(words)})",
        )

    if not oracle.is_word(anchor):
        return _invalid(C.ANCHOR_NOT_A_WORD, f"Anchor must be a real word: {anchor}")

    for w in words:
        if not is_alpha(w) or not oracle.is_word(w):
            return _invalid(C.WORD_NOT_A_WORD, f"Invalid word: {w}. All words must be real.")

    matches = []
    for w in words:
        match = classify_anchor(anchor, w)
        if match is None:
            return _invalid(
                C.NO_ANCHOR_RELATIONSHIP,
                f"Each word must start or end with the anchor and be longer than it: {w}",
            )
        matches.append((w, match))

    for w, match in matches:
        if not oracle.is_word(match.remainder):
            return _invalid(
                C.REMAINDER_NOT_A_WORD,
                f"Each remainder must be a valid word too: {w} -> {match.remainder}",
            )

    seen = set()
    for w in words:
        key = w.lower()
        if key in seen:
            return _invalid(C.DUPLICATE_WORD, f"Duplicate word: {w}")
        seen.add(key)

    return VALID


def derive_clues(anchor, words) -> List[str]:
    """Remainders in word order. Words that don't classify are dropped."""
    a = normalize_word(anchor)
    clues = []
    for w in words:
        match = classify_anchor(a, normalize_word(w))
        if match is not None:
            clues.append(match.remainder)
    return clues
