"""
Anchor Word Errors
==================

Every failure a request can hit maps to one of these. Routes turn them into
{'status': 'error', 'errorKind': ..., 'message': ...} with the matching
HTTP status.
"""


class AnchorError(Exception):
    """Base class. Subclasses set status_code and a default error_kind."""

    status_code = 400
    error_kind = 'Error'

    def __init__(self, message, error_kind=None):
        super().__init__(message)
        self.message = message
        if error_kind:
            self.error_kind = error_kind

    def to_dict(self):
        return {'status': 'error', 'errorKind': self.error_kind, 'message': self.message}


class ChallengeValidationError(AnchorError):
    """A proposed (anchor, words) pair broke one of the creation rules."""

    status_code = 400
    error_kind = 'ValidationError'


class EmptyGuess(AnchorError):
    status_code = 400
    error_kind = 'EmptyGuess'


class NotFound(AnchorError):
    status_code = 404
    error_kind = 'NoChallenge'


class Forbidden(AnchorError):
    status_code = 403
    error_kind = 'Forbidden'


class UpstreamFailure(AnchorError):
    """The key-value store or platform call failed. Safe to retry."""

    status_code = 503
    error_kind = 'UpstreamFailure'
