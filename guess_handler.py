"""
Guess Handler - Per-Player Challenge State Machine
==================================================

Each (post, player) pair moves Unattempted -> InProgress -> Solved.
Solved is terminal: further guesses replay the recorded outcome without
touching attempts, the answer log or the leaderboard.

Also builds the init view a player sees when opening a challenge, and runs
the creation flow (validate -> post -> save -> index).
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional, Union

import anchor_constants as C
from anchor_errors import EmptyGuess, Forbidden, NotFound
from anchor_rules import derive_clues, normalize_word, normalize_words, validate_challenge
from challenge_store import ChallengeDefinition, ChallengeIndexEntry


# --- Response variants ---

@dataclass(frozen=True)
class GuessCorrect:
    post_id: str
    attempts: int
    score: Optional[int]
    anchor: str
    words: List[str]

    def to_dict(self):
        return {
            "type": "anchor_guess",
            "postId": self.post_id,
            "result": "correct",
            "attempts": self.attempts,
            "hasSolved": True,
            "score": self.score,
            "anchor": self.anchor,
            "words": list(self.words),
        }


@dataclass(frozen=True)
class GuessIncorrect:
    post_id: str
    attempts: int

    def to_dict(self):
        return {
            "type": "anchor_guess",
            "postId": self.post_id,
            "result": "incorrect",
            "attempts": self.attempts,
        }


GuessOutcome = Union[GuessCorrect, GuessIncorrect]


@dataclass(frozen=True)
class UnsolvedView:
    post_id: str
    has_challenge: bool
    clues: List[str]
    attempts: int
    is_creator: bool
    total_score: int

    def to_dict(self):
        return {
            "type": "anchor_init",
            "postId": self.post_id,
            "hasChallenge": self.has_challenge,
            "clues": list(self.clues),
            "attempts": self.attempts,
            "hasSolved": False,
            "isCreator": self.is_creator,
            "totalScore": self.total_score,
        }


@dataclass(frozen=True)
class SolvedView:
    post_id: str
    clues: List[str]
    attempts: int
    total_score: int
    anchor: str
    words: List[str]
    score: Optional[int]

    def to_dict(self):
        return {
            "type": "anchor_init",
            "postId": self.post_id,
            "hasChallenge": True,
            "clues": list(self.clues),
            "attempts": self.attempts,
            "hasSolved": True,
            "isCreator": False,
            "totalScore": self.total_score,
            "anchor": self.anchor,
            "words": list(self.words),
            "score": self.score,
        }


InitView = Union[SolvedView, UnsolvedView]


# --- Operations ---

def get_init(store, post_id, username) -> InitView:
    """What a player sees on opening a post. A missing challenge is an empty view, not an error."""
    challenge = store.load_challenge(post_id)
    total_score = store.user_score(username) or 0
    if challenge is None:
        return UnsolvedView(post_id, False, [], 0, False, total_score)

    clues = derive_clues(challenge.anchor, challenge.words)
    state = store.load_user_state(post_id, username)
    if state.solved:
        return SolvedView(
            post_id=post_id,
            clues=clues,
            attempts=state.attempts,
            total_score=total_score,
            anchor=challenge.anchor,
            words=challenge.words,
            score=state.last_award,
        )
    return UnsolvedView(
        post_id=post_id,
        has_challenge=True,
        clues=clues,
        attempts=state.attempts,
        is_creator=challenge.creator == username,
        total_score=total_score,
    )


def submit_guess(store, post_id, username, raw_guess) -> GuessOutcome:
    """Evaluate one guess and apply its side effects."""
    guess = normalize_word(raw_guess)
    if not guess:
        raise EmptyGuess("guess is required")

    challenge = store.load_challenge(post_id)
    if challenge is None:
        raise NotFound("No challenge found for this post")

    state = store.load_user_state(post_id, username)
    if state.solved:
        return GuessCorrect(post_id, state.attempts, state.last_award, challenge.anchor, challenge.words)

    if challenge.creator == username:
        raise Forbidden("You created this challenge - check the results instead.",
                        error_kind="CreatorCannotGuess")

    attempts = store.increment_attempts(post_id, username)
    seq = store.increment_total_attempts(post_id)
    store.append_answer_log(post_id, username, attempts, guess, seq)

    if guess != challenge.anchor:
        return GuessIncorrect(post_id, attempts)

    award = C.award_for_attempt(attempts)
    store.mark_solved(post_id, username, award)
    print(f"[Guess] {username} solved {post_id} on attempt {attempts} (+{award})")
    return GuessCorrect(post_id, attempts, award, challenge.anchor, challenge.words)


def create_challenge(store, posts, anchor, words, username, subreddit, oracle=None):
    """
    Validate a proposed challenge, post it and index it.

    Returns {'postId', 'navigateTo', 'title'}. Raises ChallengeValidationError
    with the failing rule's kind when the challenge is not legal.
    """
    anchor = normalize_word(anchor)
    words = normalize_words(words)
    validate_challenge(anchor, words, oracle=oracle).raise_for_invalid()

    number = store.next_challenge_number(subreddit)
    title = C.CHALLENGE_TITLE.format(number=number)
    post = posts.create_post(subreddit, title, username, text=C.CHALLENGE_POST_TEXT)
    post_id = post['id']

    store.save_challenge(post_id, ChallengeDefinition(anchor=anchor, words=words, creator=username))
    store.index_challenge(post_id, ChallengeIndexEntry(
        post_id=post_id,
        title=title,
        created=datetime.now(timezone.utc).isoformat(),
        anchor=anchor,
        words=words,
        creator=username,
    ))
    print(f"[Create] {username} created {title} ({post_id}) in r/{subreddit}")

    return {
        'postId': post_id,
        'title': title,
        'navigateTo': posts.post_url(subreddit, post_id),
    }
