"""
Anchor Word Configuration
=========================

Loads environment variables from a .env file (if one exists) and exposes
the settings the server, stores and CLI tools read.

Variables:
    ANCHOR_STORE          - 'file' (default), 'memory' or 'supabase'
    ANCHOR_DATA_PATH      - JSON file used by the file store
    ANCHOR_WORDLIST_PATH  - word list file (one word per line), overrides wordfreq
    ANCHOR_WORDFREQ_SIZE  - how many wordfreq English words to load (default 200000)
    ANCHOR_JWT_SECRET     - HS256 secret for bearer tokens
    ANCHOR_SUBREDDIT      - community new challenges are posted to
    ANCHOR_POST_BASE_URL  - base URL for post links
    SUPABASE_URL, SUPABASE_ANON_KEY - Supabase backend credentials
"""

import os
import subprocess

from dotenv import load_dotenv

_script_dir = os.path.dirname(os.path.abspath(__file__))


def _find_dotenv():
    """Find .env file: local dir, then main git repo root."""
    local_env = os.path.join(_script_dir, '.env')
    if os.path.isfile(local_env):
        return local_env
    # Git worktree: worktrees don't share the main repo's .env
    try:
        main_tree = subprocess.check_output(
            ['git', 'worktree', 'list', '--porcelain'],
            cwd=_script_dir, stderr=subprocess.DEVNULL
        ).decode()
        for line in main_tree.splitlines():
            if line.startswith('worktree '):
                candidate = os.path.join(line.split(' ', 1)[1], '.env')
                if os.path.isfile(candidate):
                    return candidate
    except (OSError, subprocess.CalledProcessError):
        pass
    return None


_env_path = _find_dotenv()
if _env_path:
    load_dotenv(_env_path)
    print(f"Loaded .env from {_env_path}")


STORE_BACKEND = os.environ.get('ANCHOR_STORE', 'file').lower()
DATA_PATH = os.environ.get('ANCHOR_DATA_PATH', os.path.join(_script_dir, 'anchor_data.json'))
WORDLIST_PATH = os.environ.get('ANCHOR_WORDLIST_PATH') or None
WORDFREQ_SIZE = int(os.environ.get('ANCHOR_WORDFREQ_SIZE', 200000))
JWT_SECRET = os.environ.get('ANCHOR_JWT_SECRET', '')
DEFAULT_SUBREDDIT = os.environ.get('ANCHOR_SUBREDDIT', 'anchorword')
POST_BASE_URL = os.environ.get('ANCHOR_POST_BASE_URL', 'https://reddit.com').rstrip('/')
PORT = int(os.environ.get('PORT', 8080))
