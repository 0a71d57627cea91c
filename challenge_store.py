"""
Challenge Store
===============

Typed accessors for everything Anchor Word keeps in the key-value store.
No game rules live here; anchor_rules.py and guess_handler.py decide what
is allowed, this module only reads and writes.

Key layout (all under 'anchor:'):
    challenge:{post}                 string  JSON {anchor, words, creator}
    user:attempts:{post}:{user}      string  counter
    user:solved:{post}:{user}        string  '1' once solved
    user:award:{post}:{user}         string  points granted at solve time
    answers:{post}                   hash    '{user}:{attempt}' -> JSON entry
    total_attempts:{post}            string  counter
    solvers:{post}                   hash    user -> '1'
    scores                           hash    user -> cumulative score
    index:all                        hash    post -> JSON metadata
    index:user:{user}                hash    post -> JSON metadata
    known_posts                      hash    post -> '1'
    challengeCount:{subreddit}       string  counter
"""

import json
from dataclasses import dataclass, field
from typing import Dict, List, Optional

PREFIX = 'anchor'


@dataclass(frozen=True)
class ChallengeDefinition:
    anchor: str
    words: List[str]
    creator: str

    def to_dict(self):
        return {'anchor': self.anchor, 'words': list(self.words), 'creator': self.creator}


@dataclass
class UserChallengeState:
    attempts: int = 0
    solved: bool = False
    last_award: Optional[int] = None


@dataclass(frozen=True)
class AnswerLogEntry:
    username: str
    attempt: int
    text: str
    seq: int


@dataclass
class ChallengeIndexEntry:
    post_id: str
    title: str
    created: str
    anchor: str
    words: List[str] = field(default_factory=list)
    creator: str = ''

    def to_dict(self):
        return {
            'title': self.title,
            'created': self.created,
            'anchor': self.anchor,
            'words': list(self.words),
            'creator': self.creator,
        }

    @classmethod
    def from_json(cls, post_id, raw):
        data = json.loads(raw)
        return cls(
            post_id=post_id,
            title=data.get('title', ''),
            created=data.get('created', ''),
            anchor=data.get('anchor', ''),
            words=data.get('words', []),
            creator=data.get('creator', ''),
        )


def _key(*parts):
    return ':'.join((PREFIX,) + tuple(str(p) for p in parts))


class ChallengeStore:
    def __init__(self, kv):
        self.kv = kv

    # Challenge definitions

    def load_challenge(self, post_id) -> Optional[ChallengeDefinition]:
        raw = self.kv.get(_key('challenge', post_id))
        if raw is None:
            return None
        data = json.loads(raw)
        return ChallengeDefinition(
            anchor=data['anchor'],
            words=list(data['words']),
            creator=data.get('creator', ''),
        )

    def save_challenge(self, post_id, definition: ChallengeDefinition):
        """Write-once. Raises ValueError if the post already has a challenge."""
        key = _key('challenge', post_id)
        if self.kv.get(key) is not None:
            raise ValueError(f"Challenge already saved for post {post_id}")
        self.kv.set(key, json.dumps(definition.to_dict()))

    # Per-user state

    def load_user_state(self, post_id, username) -> UserChallengeState:
        attempts = self.kv.get(_key('user', 'attempts', post_id, username))
        solved = self.kv.get(_key('user', 'solved', post_id, username))
        award = self.kv.get(_key('user', 'award', post_id, username))
        return UserChallengeState(
            attempts=int(attempts) if attempts else 0,
            solved=solved == '1',
            last_award=int(award) if award else None,
        )

    def increment_attempts(self, post_id, username) -> int:
        return self.kv.incr_by(_key('user', 'attempts', post_id, username), 1)

    def mark_solved(self, post_id, username, award):
        """Credit the award and join the solver set, then set the solved flag.

        The flag is written last so a failed write leaves the user unsolved.
        """
        self.kv.hincr_by(_key('scores'), username, award)
        self.kv.hset(_key('solvers', post_id), username, '1')
        self.kv.set(_key('user', 'award', post_id, username), award)
        self.kv.set(_key('user', 'solved', post_id, username), '1')

    def has_solved(self, post_id, username) -> bool:
        return self.kv.get(_key('user', 'solved', post_id, username)) == '1'

    def solver_count(self, post_id) -> int:
        return self.kv.hlen(_key('solvers', post_id))

    # Answer log

    def increment_total_attempts(self, post_id) -> int:
        return self.kv.incr_by(_key('total_attempts', post_id), 1)

    def total_attempts(self, post_id) -> int:
        raw = self.kv.get(_key('total_attempts', post_id))
        return int(raw) if raw else 0

    def append_answer_log(self, post_id, username, attempt, text, seq):
        """Same (user, attempt) overwrites the earlier entry instead of duplicating it."""
        entry = {'username': username, 'attempt': attempt, 'text': text, 'seq': seq}
        self.kv.hset(_key('answers', post_id), f"{username}:{attempt}", json.dumps(entry))

    def load_answer_log(self, post_id) -> List[AnswerLogEntry]:
        """All entries for a post, oldest first."""
        raw = self.kv.hgetall(_key('answers', post_id))
        entries = []
        for value in raw.values():
            data = json.loads(value)
            entries.append(AnswerLogEntry(
                username=data['username'],
                attempt=int(data['attempt']),
                text=data['text'],
                seq=int(data.get('seq', 0)),
            ))
        # stable: legacy rows without seq keep their stored order
        entries.sort(key=lambda e: e.seq)
        return entries

    # Leaderboard

    def user_score(self, username) -> Optional[int]:
        raw = self.kv.hget(_key('scores'), username)
        return int(raw) if raw is not None else None

    def all_scores(self) -> Dict[str, int]:
        return {user: int(score) for user, score in self.kv.hgetall(_key('scores')).items()}

    # Discovery indices

    def index_challenge(self, post_id, entry: ChallengeIndexEntry):
        payload = json.dumps(entry.to_dict())
        self.kv.hset(_key('index', 'all'), post_id, payload)
        self.kv.hset(_key('index', 'user', entry.creator), post_id, payload)
        self.kv.hset(_key('known_posts'), post_id, '1')

    def list_challenge_index(self) -> List[ChallengeIndexEntry]:
        """Global index in insertion order (oldest first)."""
        raw = self.kv.hgetall(_key('index', 'all'))
        return [ChallengeIndexEntry.from_json(post_id, value) for post_id, value in raw.items()]

    def list_creator_challenges(self, username) -> List[str]:
        return list(self.kv.hgetall(_key('index', 'user', username)).keys())

    def list_known_posts(self) -> List[str]:
        return list(self.kv.hgetall(_key('known_posts')).keys())

    def next_challenge_number(self, subreddit) -> int:
        return self.kv.incr_by(_key('challengeCount', subreddit), 1)
