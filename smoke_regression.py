#!/usr/bin/env python3
"""
Anchor Word Smoke Regression
============================

Plays a full game against a running server: create a challenge, guess
wrong then right, check the replay is idempotent, read results and the
leaderboard, and ask for another challenge.

Usage:
    python3 smoke_regression.py
    python3 smoke_regression.py --server http://127.0.0.1:8080

Requires: a running anchor_server.py instance sharing ANCHOR_JWT_SECRET,
with 'bed', 'bedroom', 'seabed', 'bedrock', 'bedsheet' and their
remainders in its word list.
"""

import argparse
import secrets
import sys

import config
from anchor_client import AnchorClient, ApiError, DEFAULT_SERVER
from auth import issue_token

BED_WORDS = ["bedroom", "seabed", "bedrock", "bedsheet"]


def check(label, condition, detail=""):
    status = "PASS" if condition else "FAIL"
    print(f"  [{status}] {label}{' - ' + str(detail) if detail and not condition else ''}")
    return condition


def run(server):
    if not config.JWT_SECRET:
        print("ERROR: ANCHOR_JWT_SECRET must be set to mint test tokens")
        return False

    suffix = secrets.token_hex(3)
    creator = AnchorClient(server, token=issue_token(f"smoke_creator_{suffix}"))
    player = AnchorClient(server, token=issue_token(f"smoke_player_{suffix}"))
    results = []

    print("\n1. Create challenge")
    created = creator.create("bed", BED_WORDS)
    post_id = created["postId"]
    results.append(check("post created", post_id.startswith("t3_"), created))

    print("\n2. Init shows clues, no reveal")
    init = player.init(post_id)
    results.append(check("clues", init["clues"] == ["room", "sea", "rock", "sheet"], init))
    results.append(check("no reveal", "anchor" not in init, init))

    print("\n3. Creator cannot guess")
    try:
        creator.guess(post_id, "bed")
        results.append(check("creator rejected", False, "guess accepted"))
    except ApiError as e:
        results.append(check("creator rejected", e.status == 403, e.body))

    print("\n4. Results hidden before solving")
    try:
        player.results(post_id)
        results.append(check("results hidden", False, "results returned"))
    except ApiError as e:
        results.append(check("results hidden", e.body.get("errorKind") == "NotYetSolved", e.body))

    print("\n5. Wrong then right")
    wrong = player.guess(post_id, "xyz")
    results.append(check("incorrect on attempt 1", (wrong["result"], wrong["attempts"]) == ("incorrect", 1), wrong))
    right = player.guess(post_id, "bed")
    results.append(check("correct on attempt 2 for 15",
                         (right["result"], right["attempts"], right.get("score")) == ("correct", 2, 15), right))

    print("\n6. Replay is idempotent")
    replay = player.guess(post_id, "bed")
    results.append(check("same outcome", (replay["attempts"], replay.get("score")) == (2, 15), replay))

    print("\n7. Results")
    summary = player.results(post_id)
    results.append(check("two attempts logged", summary["totalAttempts"] == 2, summary))

    print("\n8. Leaderboard")
    board = player.leaderboard()
    results.append(check("player ranked", board["me"]["rank"] >= 1, board["me"]))

    print("\n9. Find another")
    nxt = player.find_another(post_id)
    results.append(check("navigateTo present", "navigateTo" in nxt, nxt))

    passed = sum(results)
    print(f"\n{passed}/{len(results)} checks passed")
    return passed == len(results)


def main():
    parser = argparse.ArgumentParser(description="Anchor Word smoke regression")
    parser.add_argument("--server", default=DEFAULT_SERVER)
    args = parser.parse_args()

    try:
        ok = run(args.server)
    except ApiError as e:
        print(f"\nERROR: request failed ({e.status}): {e.body}")
        ok = False
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
