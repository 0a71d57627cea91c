"""
Anchor Word Constants: Shared Definitions
=========================================

Single source of truth for game rules used across anchor_rules.py,
guess_handler.py, discovery.py and the tests.
"""

import re

MIN_WORDS = 4
MAX_WORDS = 6

# Points by attempt number. Anything past the last tier earns FALLBACK_AWARD.
AWARD_SCHEDULE = {1: 20, 2: 15, 3: 10}
FALLBACK_AWARD = 5

LEADERBOARD_SIZE = 10

CHALLENGE_TITLE = "Anchor Word Challenge #{number}"
CHALLENGE_TITLE_PATTERN = re.compile(r'^Anchor Word Challenge #\d+')
CHALLENGE_POST_TEXT = "Anchor Word challenge - guess the shared anchor substring!"

# Validation failure kinds, in the order the checks run
EMPTY_ANCHOR = "EmptyAnchor"
WORD_COUNT_OUT_OF_RANGE = "WordCountOutOfRange"
ANCHOR_NOT_A_WORD = "AnchorNotAWord"
WORD_NOT_A_WORD = "WordNotAWord"
NO_ANCHOR_RELATIONSHIP = "NoAnchorRelationship"
REMAINDER_NOT_A_WORD = "RemainderNotAWord"
DUPLICATE_WORD = "DuplicateWord"

VALIDATION_KINDS = (
    EMPTY_ANCHOR,
    WORD_COUNT_OUT_OF_RANGE,
    ANCHOR_NOT_A_WORD,
    WORD_NOT_A_WORD,
    NO_ANCHOR_RELATIONSHIP,
    REMAINDER_NOT_A_WORD,
    DUPLICATE_WORD,
)


def award_for_attempt(attempt):
    """Points for a correct guess on the given 1-based attempt number."""
    if attempt < 1:
        raise ValueError(f"Attempt numbers start at 1, got {attempt}")
    return AWARD_SCHEDULE.get(attempt, FALLBACK_AWARD)
