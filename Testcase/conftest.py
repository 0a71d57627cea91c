import os
import sys

# Add parent directory to path so we can import the server modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# config reads the environment at import time
os.environ["ANCHOR_STORE"] = "memory"
os.environ["ANCHOR_JWT_SECRET"] = "test-secret"
os.environ["ANCHOR_SUBREDDIT"] = "anchorword"

import pytest  # noqa: E402

from anchor_server import create_app  # noqa: E402
from auth import issue_token  # noqa: E402
from challenge_store import ChallengeStore  # noqa: E402
from kv_store import KVStore  # noqa: E402
from platform_posts import PostDirectory  # noqa: E402
from word_oracle import WordList  # noqa: E402

TEST_WORDS = [
    "bed", "bedroom", "seabed", "bedrock", "bedsheet", "bedtime", "bedside",
    "room", "sea", "rock", "sheet", "time", "side",
    "sun", "sunrise", "sunset", "sunflower", "sunlight", "sunbeam",
    "rise", "set", "flower", "light", "beam",
    "fire", "fireman", "firefly", "fireplace", "firework", "campfire",
    "man", "fly", "place", "work", "camp",
    "cat", "tac",
]


@pytest.fixture
def oracle():
    return WordList(TEST_WORDS)


@pytest.fixture
def kv():
    return KVStore()


@pytest.fixture
def store(kv):
    return ChallengeStore(kv)


@pytest.fixture
def posts(kv):
    return PostDirectory(kv, base_url="https://reddit.com")


@pytest.fixture
def app(kv, oracle):
    app = create_app(kv=kv, oracle=oracle)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def auth_headers(username):
    return {"Authorization": f"Bearer {issue_token(username, secret='test-secret')}"}
