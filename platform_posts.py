"""
Platform Post Directory
=======================

The hosting community's posts: create one per challenge, list the most
recent ones, build links. Kept in the same key-value store as the game
data under 'platform:posts:{subreddit}'.
"""

import json
import secrets
from datetime import datetime, timezone

import config


def _posts_key(subreddit):
    return f"platform:posts:{subreddit}"


class PostDirectory:
    def __init__(self, kv, base_url=None):
        self.kv = kv
        self.base_url = (base_url or config.POST_BASE_URL).rstrip('/')

    def create_post(self, subreddit, title, author, text=''):
        """Submit a post as `author`. Returns the stored post record."""
        post_id = f"t3_{secrets.token_hex(4)}"
        record = {
            'id': post_id,
            'title': title,
            'author': author,
            'text': text,
            'subreddit': subreddit,
            'created': datetime.now(timezone.utc).isoformat(),
        }
        self.kv.hset(_posts_key(subreddit), post_id, json.dumps(record))
        return record

    def recent_posts(self, subreddit, limit=100):
        """Newest first."""
        raw = self.kv.hgetall(_posts_key(subreddit))
        posts = [json.loads(v) for v in raw.values()]
        posts.reverse()
        return posts[:limit]

    def post_url(self, subreddit, post_id):
        return f"{self.base_url}/r/{subreddit}/comments/{post_id}"
