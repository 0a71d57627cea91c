import pytest

import guess_handler
from anchor_errors import Forbidden, NotFound
from challenge_store import AnswerLogEntry
from results import aggregate_results, build_leaderboard, rank_scores, summarize_answers

BED_WORDS = ["bedroom", "seabed", "bedrock", "bedsheet"]


@pytest.fixture
def post_id(store, posts, oracle):
    return guess_handler.create_challenge(
        store, posts, "bed", BED_WORDS, "creator", "anchorword", oracle=oracle)["postId"]


def _entries(*texts):
    return [AnswerLogEntry("u", i + 1, t, i + 1) for i, t in enumerate(texts)]


def test_summarize_groups_counts_and_percentages():
    answers = summarize_answers(_entries("sea", "bed", "bed", "rock", "bed", "sea", "room", "bed"), "bed")
    assert answers[0] == {"text": "bed", "count": 4, "isCorrect": True, "percentage": 50}
    assert answers[1] == {"text": "sea", "count": 2, "isCorrect": False, "percentage": 25}
    # tied singles keep first-appearance order
    assert [a["text"] for a in answers[2:]] == ["rock", "room"]
    assert sum(a["count"] for a in answers) == 8


def test_summarize_rounds_half_up():
    answers = summarize_answers(_entries("a", "b", "b", "c", "c", "c", "d", "d"), "c")
    by_text = {a["text"]: a["percentage"] for a in answers}
    assert by_text == {"c": 38, "b": 25, "d": 25, "a": 13}


def test_summarize_empty_log():
    assert summarize_answers([], "bed") == []


def test_results_require_a_solve(store, post_id):
    guess_handler.submit_guess(store, post_id, "bob", "sea")
    with pytest.raises(Forbidden) as exc:
        aggregate_results(store, post_id, "bob")
    assert exc.value.error_kind == "NotYetSolved"
    assert exc.value.status_code == 403


def test_results_for_missing_challenge(store):
    with pytest.raises(NotFound):
        aggregate_results(store, "t3_missing", "bob")


def test_results_after_several_players(store, post_id):
    guess_handler.submit_guess(store, post_id, "bob", "sea")
    guess_handler.submit_guess(store, post_id, "bob", "bed")
    guess_handler.submit_guess(store, post_id, "carol", "rock")
    guess_handler.submit_guess(store, post_id, "dave", "sea")
    guess_handler.submit_guess(store, post_id, "carol", "bed")
    guess_handler.submit_guess(store, post_id, "bob", "bed")  # replay, not counted

    summary = aggregate_results(store, post_id, "bob")
    assert summary["totalAttempts"] == 5
    assert summary["totalSolvers"] == 2
    assert summary["anchor"] == "bed"
    assert [(a["text"], a["count"], a["isCorrect"]) for a in summary["answers"]] == [
        ("sea", 2, False),
        ("bed", 2, True),
        ("rock", 1, False),
    ]
    assert [a["percentage"] for a in summary["answers"]] == [40, 40, 20]


def test_creator_may_view_results(store, post_id):
    summary = aggregate_results(store, post_id, "creator")
    assert summary["totalAttempts"] == 0
    assert summary["answers"] == []


def test_leaderboard_ties_get_adjacent_ranks():
    ranked = rank_scores({"zed": 30, "amy": 30, "kim": 10})
    assert ranked == [("amy", 30, 1), ("zed", 30, 2), ("kim", 10, 3)]


def test_leaderboard_top_and_me():
    board = build_leaderboard({"a": 5, "b": 40, "c": 20}, "c", limit=2)
    assert board["top"] == [
        {"username": "b", "score": 40, "rank": 1},
        {"username": "c", "score": 20, "rank": 2},
    ]
    assert board["me"] == {"username": "c", "score": 20, "rank": 2}

    outside = build_leaderboard({"a": 5, "b": 40, "c": 20}, "a", limit=2)
    assert outside["me"]["rank"] == 3


def test_leaderboard_me_without_score():
    board = build_leaderboard({"a": 5}, "nobody")
    assert board["me"] == {"username": "nobody", "score": 0, "rank": -1}


@pytest.mark.parametrize("limit", [0, -1, -5])
def test_leaderboard_limit_is_at_least_one(limit):
    board = build_leaderboard({"a": 5, "b": 4, "c": 3}, "a", limit=limit)
    assert board["top"] == [{"username": "a", "score": 5, "rank": 1}]
