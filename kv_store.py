#!/usr/bin/env python3
"""
Key-Value Store - File Backend
==============================

Durable key-value store with string and hash values, kept in a single JSON
file (or purely in memory when no path is given). Same API as the Supabase
backend in kv_store_supabase.py.

Storage structure:
    anchor_data.json
    {
      "strings": {"anchor:user:attempts:t3_ab12:alice": "2", ...},
      "hashes":  {"anchor:scores": {"alice": "35", ...}, ...}
    }

Counters go through incr_by / hincr_by, which hold a process lock for the
read-modify-write so concurrent requests can't lose increments.
"""

import json
import os
import threading
from pathlib import Path

import config


class KVStore:
    def __init__(self, path=None):
        self.path = Path(path) if path else None
        self._lock = threading.RLock()
        self._strings = {}
        self._hashes = {}
        if self.path and self.path.exists():
            with open(self.path, 'r') as f:
                data = json.load(f)
            self._strings = data.get('strings', {})
            self._hashes = data.get('hashes', {})

    def _flush(self):
        """Write everything to disk. No-op for in-memory stores."""
        if not self.path:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + '.tmp')
        with open(tmp_path, 'w') as f:
            json.dump({'strings': self._strings, 'hashes': self._hashes}, f, indent=2)
        os.replace(tmp_path, self.path)

    # Strings

    def get(self, key):
        with self._lock:
            return self._strings.get(key)

    def set(self, key, value):
        with self._lock:
            self._strings[key] = str(value)
            self._flush()

    def incr_by(self, key, amount=1):
        """Atomically add `amount` to an integer string value. Returns the new value."""
        with self._lock:
            value = int(self._strings.get(key, 0)) + amount
            self._strings[key] = str(value)
            self._flush()
            return value

    # Hashes

    def hget(self, key, field):
        with self._lock:
            return self._hashes.get(key, {}).get(field)

    def hset(self, key, field, value):
        with self._lock:
            self._hashes.setdefault(key, {})[field] = str(value)
            self._flush()

    def hgetall(self, key):
        """All fields of a hash, in insertion order."""
        with self._lock:
            return dict(self._hashes.get(key, {}))

    def hincr_by(self, key, field, amount=1):
        with self._lock:
            h = self._hashes.setdefault(key, {})
            value = int(h.get(field, 0)) + amount
            h[field] = str(value)
            self._flush()
            return value

    def hlen(self, key):
        with self._lock:
            return len(self._hashes.get(key, {}))


def get_kv_store(backend=None):
    """
    Build the store named by ANCHOR_STORE.

    'supabase' requires SUPABASE_URL/SUPABASE_ANON_KEY; 'memory' keeps
    nothing between restarts; 'file' (default) persists to ANCHOR_DATA_PATH.
    """
    backend = (backend or config.STORE_BACKEND).lower()
    if backend == 'supabase':
        from kv_store_supabase import KVStoreSupabase
        return KVStoreSupabase()
    if backend == 'memory':
        return KVStore()
    if backend == 'file':
        return KVStore(config.DATA_PATH)
    raise ValueError(f"Unknown ANCHOR_STORE backend: {backend!r}. Expected file, memory or supabase")
