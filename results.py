"""
Results & Leaderboard
=====================

Reduces a post's answer log into per-answer statistics for the results
screen, and ranks players by cumulative score.
"""

import math

import anchor_constants as C
from anchor_errors import Forbidden, NotFound


def _percentage(count, total):
    """Percent of total, rounded half-up to a whole number."""
    if total <= 0:
        return 0
    return int(math.floor(count * 100 / total + 0.5))


def summarize_answers(entries, anchor):
    """
    Group log entries by answer text.

    Sorted by count (descending); ties keep first-appearance order because
    the sort is stable over the log's natural order.
    """
    counts = {}
    for entry in entries:
        counts[entry.text] = counts.get(entry.text, 0) + 1

    total = len(entries)
    answers = [
        {
            'text': text,
            'count': count,
            'isCorrect': text == anchor,
            'percentage': _percentage(count, total),
        }
        for text, count in counts.items()
    ]
    answers.sort(key=lambda a: -a['count'])
    return answers


def aggregate_results(store, post_id, username):
    """
    Results for a post. Only players who solved it (and its creator) may see them.
    """
    challenge = store.load_challenge(post_id)
    if challenge is None:
        raise NotFound("No challenge found for this post")

    if challenge.creator != username and not store.has_solved(post_id, username):
        raise Forbidden("Solve the challenge to see everyone's answers.", error_kind="NotYetSolved")

    entries = store.load_answer_log(post_id)
    return {
        'type': 'anchor_results',
        'postId': post_id,
        'totalAttempts': store.total_attempts(post_id),
        'totalSolvers': store.solver_count(post_id),
        'answers': summarize_answers(entries, challenge.anchor),
        'anchor': challenge.anchor,
    }


def rank_scores(scores):
    """
    [(username, score, rank)] by score descending, ties broken by username.

    Ranks are ordinal: tied players get adjacent ranks, never a shared one.
    """
    ordered = sorted(scores.items(), key=lambda item: (-item[1], item[0]))
    return [(user, score, i + 1) for i, (user, score) in enumerate(ordered)]


def build_leaderboard(scores, username, limit=C.LEADERBOARD_SIZE):
    limit = max(1, limit)
    ranked = rank_scores(scores)
    top = [{'username': u, 'score': s, 'rank': r} for u, s, r in ranked[:limit]]

    me = {'username': username, 'score': 0, 'rank': -1}
    for u, s, r in ranked:
        if u == username:
            me = {'username': u, 'score': s, 'rank': r}
            break

    return {'type': 'anchor_leaderboard', 'top': top, 'me': me}
