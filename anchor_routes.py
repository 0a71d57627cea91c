"""
Anchor Word Routes - Flask Blueprint
====================================

Routes:
    /api/anchor/init          - Clues and the player's state for a post
    /api/anchor/create        - Create a challenge (validates, posts, indexes)
    /api/anchor/guess         - Submit a guess
    /api/anchor/results       - Answer statistics (solvers and creator only)
    /api/anchor/leaderboard   - Top players and the caller's rank
    /api/anchor/find-another  - URL of an unsolved challenge
    /api/anchor/next          - Post id of an unsolved challenge

The post is identified by a 'postId' query parameter or JSON field.
"""

import traceback

from flask import Blueprint, current_app, request, jsonify
from werkzeug.exceptions import HTTPException

import anchor_constants as C
import config
import discovery
import guess_handler
import results
from anchor_errors import AnchorError
from auth import get_current_username, require_user

anchor_bp = Blueprint('anchor', __name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _store():
    return current_app.config['CHALLENGE_STORE']


def _posts():
    return current_app.config['POST_DIRECTORY']


def _body():
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def _post_id():
    return request.args.get('postId') or _body().get('postId')


def _missing_post_id():
    return jsonify({'status': 'error', 'message': 'postId is required'}), 400


def _subreddit():
    return request.args.get('subreddit') or _body().get('subreddit') or config.DEFAULT_SUBREDDIT


@anchor_bp.errorhandler(AnchorError)
def handle_anchor_error(e):
    return jsonify(e.to_dict()), e.status_code


@anchor_bp.errorhandler(Exception)
def handle_unexpected_error(e):
    if isinstance(e, HTTPException):
        return e
    traceback.print_exc()
    return jsonify({
        'status': 'error',
        'errorKind': 'InternalError',
        'message': 'Something went wrong. Please try again.',
    }), 500


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@anchor_bp.route('/init', methods=['GET'])
def anchor_init():
    """Clues, attempts and (once solved) the reveal for the current post."""
    post_id = _post_id()
    if not post_id:
        return _missing_post_id()

    view = guess_handler.get_init(_store(), post_id, get_current_username())
    return jsonify(view.to_dict())


@anchor_bp.route('/create', methods=['POST'])
@require_user
def anchor_create():
    """Create a challenge post from {anchor, words}."""
    data = _body()
    words = data.get('words')
    if not isinstance(words, list):
        words = []

    created = guess_handler.create_challenge(
        _store(),
        _posts(),
        data.get('anchor', ''),
        words,
        get_current_username(),
        _subreddit(),
        oracle=current_app.config.get('WORD_ORACLE'),
    )
    return jsonify({'type': 'anchor_create', **created})


@anchor_bp.route('/guess', methods=['POST'])
@require_user
def anchor_guess():
    """Submit {guess} for the current post."""
    post_id = _post_id()
    if not post_id:
        return _missing_post_id()

    outcome = guess_handler.submit_guess(
        _store(), post_id, get_current_username(), _body().get('guess', ''))
    return jsonify(outcome.to_dict())


@anchor_bp.route('/results', methods=['GET'])
def anchor_results():
    post_id = _post_id()
    if not post_id:
        return _missing_post_id()

    summary = results.aggregate_results(_store(), post_id, get_current_username())
    return jsonify(summary)


@anchor_bp.route('/leaderboard', methods=['GET'])
def anchor_leaderboard():
    limit = request.args.get('limit', type=int) or C.LEADERBOARD_SIZE
    board = results.build_leaderboard(_store().all_scores(), get_current_username(), limit=limit)
    return jsonify(board)


@anchor_bp.route('/find-another', methods=['POST'])
def anchor_find_another():
    """Where to go after finishing (or skipping) this post. null when nothing is left."""
    url = discovery.find_another(
        _store(), _posts(), get_current_username(), _post_id(), _subreddit())
    return jsonify({'navigateTo': url})


@anchor_bp.route('/next', methods=['GET'])
def anchor_next():
    post_id = discovery.find_next(
        _store(), _posts(), get_current_username(), _post_id(), _subreddit())
    return jsonify({'postId': post_id})
