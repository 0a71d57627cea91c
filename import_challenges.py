#!/usr/bin/env python3
"""
Import Challenges from YAML
===========================

Creates Anchor Word challenges in bulk. Every entry goes through the same
validation as the /create route; invalid entries are reported and skipped.

File format:
    - anchor: bed
      words: [bedroom, seabed, bedrock, bedsheet]
      creator: alice          # optional, defaults to --creator

Usage:
    python3 import_challenges.py challenges.yaml --creator mod_team
    python3 import_challenges.py challenges.yaml --dry-run      # Validate only
    python3 import_challenges.py challenges.yaml --subreddit anchorword
"""

import argparse
import sys
import os

import yaml

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import config  # noqa: E402
import guess_handler  # noqa: E402
from anchor_errors import ChallengeValidationError  # noqa: E402
from anchor_rules import normalize_word, normalize_words, validate_challenge  # noqa: E402
from challenge_store import ChallengeStore  # noqa: E402
from kv_store import get_kv_store  # noqa: E402
from platform_posts import PostDirectory  # noqa: E402


def load_challenges_file(filepath):
    """
    Load challenges from a YAML file.

    Accepts a list (or a mapping with a 'challenges' list) where each entry has:
      - anchor: the shared substring
      - words: list of 4-6 words
      - creator: optional username

    Returns a list of {anchor, words, creator} dicts. Game rules are not
    checked here; creation validates each entry.
    """
    filename = os.path.basename(filepath).lower()

    if not filename.endswith(('.yaml', '.yml')):
        raise ValueError(f"Unsupported challenges file format: {filename}. Expected .yaml or .yml")

    with open(filepath, 'r') as f:
        data = yaml.safe_load(f)  # raises YAMLError with details

    if isinstance(data, dict) and 'challenges' in data:
        data = data['challenges']

    if not isinstance(data, list):
        raise ValueError("Unexpected YAML structure: expected a list of challenges")

    challenges = []
    for i, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise ValueError(f"Entry {i} is not a mapping: {entry!r}")
        if 'anchor' not in entry:
            raise ValueError(f"Entry {i} is missing 'anchor'")
        words = entry.get('words')
        if not isinstance(words, list):
            raise ValueError(f"Entry {i} ('{entry['anchor']}'): 'words' must be a list")
        challenges.append({
            'anchor': str(entry['anchor']),
            'words': [str(w) for w in words],
            'creator': entry.get('creator'),
        })

    return challenges


def import_challenges(challenges, store, posts, default_creator, subreddit, dry_run=False, oracle=None):
    """
    Create each challenge. Returns (created, failed) where failed is a
    list of (index, anchor, message).
    """
    created = []
    failed = []
    for i, entry in enumerate(challenges):
        creator = entry.get('creator') or default_creator
        if dry_run:
            result = validate_challenge(normalize_word(entry['anchor']), normalize_words(entry['words']), oracle=oracle)
            if result.valid:
                created.append({'anchor': entry['anchor'], 'creator': creator})
            else:
                failed.append((i, entry['anchor'], f"{result.kind}: {result.message}"))
            continue
        try:
            info = guess_handler.create_challenge(
                store, posts, entry['anchor'], entry['words'], creator, subreddit, oracle=oracle)
        except ChallengeValidationError as e:
            failed.append((i, entry['anchor'], f"{e.error_kind}: {e.message}"))
            continue
        created.append(info)
    return created, failed


def main(argv=None):
    parser = argparse.ArgumentParser(description="Import Anchor Word challenges from YAML")
    parser.add_argument('file', help="YAML file with a list of challenges")
    parser.add_argument('--creator', default='anchorword_bot', help="creator for entries without one")
    parser.add_argument('--subreddit', default=config.DEFAULT_SUBREDDIT)
    parser.add_argument('--dry-run', action='store_true', help="validate without writing")
    args = parser.parse_args(argv)

    try:
        challenges = load_challenges_file(args.file)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"ERROR: {e}")
        return 1

    kv = get_kv_store()
    store = ChallengeStore(kv)
    posts = PostDirectory(kv)

    created, failed = import_challenges(
        challenges, store, posts, args.creator, args.subreddit, dry_run=args.dry_run)

    verb = "Valid" if args.dry_run else "Created"
    for info in created:
        label = info.get('title') or info.get('anchor')
        print(f"  {verb}: {label} {info.get('navigateTo', '')}".rstrip())
    for i, anchor, message in failed:
        print(f"  FAILED entry {i} ('{anchor}'): {message}")

    print(f"\n{verb} {len(created)} challenge(s), {len(failed)} failed")
    return 1 if failed else 0


if __name__ == '__main__':
    sys.exit(main())
