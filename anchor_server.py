#!/usr/bin/env python3
"""
Anchor Word Server
==================

HTTP backend for the Anchor Word mini-game: players see clue words and
guess the anchor shared by all of them as a prefix or suffix.

Usage:
    python anchor_server.py

Then the API is served at http://localhost:8080/api/anchor/...
"""

from flask import Flask, jsonify

import config
from anchor_routes import anchor_bp
from challenge_store import ChallengeStore
from kv_store import get_kv_store
from platform_posts import PostDirectory
from word_oracle import get_oracle


def create_app(kv=None, oracle=None):
    """
    Build the Flask app around a key-value store.

    kv defaults to the backend named by ANCHOR_STORE; oracle defaults to the
    process-wide word list (loaded on first use).
    """
    if kv is None:
        kv = get_kv_store()
    print(f"Using key-value store: {type(kv).__name__}")

    app = Flask(__name__)
    app.config['CHALLENGE_STORE'] = ChallengeStore(kv)
    app.config['POST_DIRECTORY'] = PostDirectory(kv)
    app.config['WORD_ORACLE'] = oracle

    # All /api/anchor/* routes
    app.register_blueprint(anchor_bp, url_prefix='/api/anchor')

    @app.route('/status')
    def status():
        """Return server status including store backend type."""
        store_type = type(kv).__name__
        word_oracle = app.config['WORD_ORACLE'] or get_oracle()
        return jsonify({
            'storage_backend': 'supabase' if store_type == 'KVStoreSupabase' else 'local',
            'store_type': store_type,
            'word_count': len(word_oracle),
            'connected': True,
        })

    return app


app = create_app()


if __name__ == '__main__':
    print("Starting Anchor Word Server...")
    print(f"API at http://localhost:{config.PORT}/api/anchor/")
    app.run(debug=True, port=config.PORT, host='0.0.0.0')
