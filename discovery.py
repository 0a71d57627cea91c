"""
Challenge Discovery
===================

Picks a challenge the player hasn't solved and didn't write, for the
"next" and "find another" buttons.

Strategies run in order until one finds a post:
  1. global challenge index, newest first
  2. flat set of known post ids (covers rows indexed before metadata existed)
  3. the community's recent posts, matched by title
Finding nothing is a normal outcome, not an error.
"""

from dataclasses import dataclass

import anchor_constants as C
import config


@dataclass
class DiscoveryContext:
    store: object
    posts: object
    username: str
    exclude_post_id: str
    subreddit: str


def _playable(ctx, post_id, creator=None):
    if not post_id or post_id == ctx.exclude_post_id:
        return False
    if creator is not None and creator == ctx.username:
        return False
    return not ctx.store.has_solved(post_id, ctx.username)


def from_challenge_index(ctx):
    for entry in reversed(ctx.store.list_challenge_index()):
        if _playable(ctx, entry.post_id, entry.creator):
            return entry.post_id
    return None


def from_known_posts(ctx):
    mine = set(ctx.store.list_creator_challenges(ctx.username))
    for post_id in reversed(ctx.store.list_known_posts()):
        if post_id in mine:
            continue
        if _playable(ctx, post_id):
            return post_id
    return None


def from_recent_posts(ctx):
    mine = set(ctx.store.list_creator_challenges(ctx.username))
    for post in ctx.posts.recent_posts(ctx.subreddit):
        post_id = post.get('id')
        if post_id in mine or not C.CHALLENGE_TITLE_PATTERN.match(post.get('title', '')):
            continue
        if not _playable(ctx, post_id, post.get('author')):
            continue
        if ctx.store.load_challenge(post_id) is None:
            continue
        return post_id
    return None


STRATEGIES = (from_challenge_index, from_known_posts, from_recent_posts)


def find_next(store, posts, username, exclude_post_id, subreddit=None, strategies=STRATEGIES):
    """First post id any strategy returns, or None."""
    ctx = DiscoveryContext(store, posts, username, exclude_post_id, subreddit or config.DEFAULT_SUBREDDIT)
    for strategy in strategies:
        post_id = strategy(ctx)
        if post_id:
            print(f"[Discovery] {strategy.__name__} -> {post_id} for {username}")
            return post_id
    print(f"[Discovery] No unsolved challenge left for {username}")
    return None


def find_another(store, posts, username, exclude_post_id, subreddit=None):
    """Like find_next, but returns the post URL to navigate to."""
    subreddit = subreddit or config.DEFAULT_SUBREDDIT
    post_id = find_next(store, posts, username, exclude_post_id, subreddit)
    if post_id is None:
        return None
    return posts.post_url(subreddit, post_id)
