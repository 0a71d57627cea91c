#!/usr/bin/env python3
"""
Key-Value Store - Supabase Backend
==================================

Stores strings and hashes in Supabase PostgreSQL.
Maintains same API as file-based KVStore for compatibility.

Tables (see supabase_schema.sql):
    kv_strings - key -> value
    kv_hashes  - (key, field) -> value, with a serial id for insertion order

Functions:
    kv_incr_by(p_key, p_amount)           - atomic string counter
    kv_hincr_by(p_key, p_field, p_amount) - atomic hash-field counter
"""

import os
from typing import Dict, Optional

import config  # noqa: F401  (loads .env)
from anchor_errors import UpstreamFailure

try:
    from supabase import create_client, Client
    SUPABASE_AVAILABLE = True
except ImportError:
    SUPABASE_AVAILABLE = False
    print("Warning: supabase package not installed. Run: pip install supabase")


class KVStoreSupabase:
    """Supabase-backed key-value store with same API as file-based KVStore."""

    def __init__(self, client=None):
        if client is not None:
            self.client = client
            return

        if not SUPABASE_AVAILABLE:
            raise ImportError("supabase package required. Run: pip install supabase")

        url = os.environ.get("SUPABASE_URL")
        key = os.environ.get("SUPABASE_ANON_KEY")

        if not url or not key:
            raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY must be set in environment")

        self.client: Client = create_client(url, key)

    def _execute(self, query, action):
        """Run a query, turning any client/network error into UpstreamFailure."""
        try:
            return query.execute()
        except Exception as e:
            print(f"[Store] Supabase {action} failed: {e}")
            raise UpstreamFailure(f"Storage unavailable ({action}). Please retry.") from e

    # Strings

    def get(self, key: str) -> Optional[str]:
        result = self._execute(
            self.client.table('kv_strings').select('value').eq('key', key),
            'get')
        return result.data[0]['value'] if result.data else None

    def set(self, key: str, value) -> None:
        self._execute(
            self.client.table('kv_strings').upsert(
                {'key': key, 'value': str(value)},
                on_conflict='key'),
            'set')

    def incr_by(self, key: str, amount: int = 1) -> int:
        result = self._execute(
            self.client.rpc('kv_incr_by', {'p_key': key, 'p_amount': amount}),
            'incr_by')
        return int(result.data)

    # Hashes

    def hget(self, key: str, field: str) -> Optional[str]:
        result = self._execute(
            self.client.table('kv_hashes').select('value').eq('key', key).eq('field', field),
            'hget')
        return result.data[0]['value'] if result.data else None

    def hset(self, key: str, field: str, value) -> None:
        self._execute(
            self.client.table('kv_hashes').upsert(
                {'key': key, 'field': field, 'value': str(value)},
                on_conflict='key,field'),
            'hset')

    def hgetall(self, key: str) -> Dict[str, str]:
        result = self._execute(
            self.client.table('kv_hashes').select('field, value').eq('key', key).order('id'),
            'hgetall')
        return {row['field']: row['value'] for row in result.data or []}

    def hincr_by(self, key: str, field: str, amount: int = 1) -> int:
        result = self._execute(
            self.client.rpc('kv_hincr_by', {'p_key': key, 'p_field': field, 'p_amount': amount}),
            'hincr_by')
        return int(result.data)

    def hlen(self, key: str) -> int:
        result = self._execute(
            self.client.table('kv_hashes').select('field', count='exact').eq('key', key),
            'hlen')
        return result.count or 0
