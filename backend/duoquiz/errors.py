"""Domain errors and their translation to HTTP responses."""

from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException


class QuizError(Exception):
    code = 'INTERNAL'
    status_code = 500
    default_message = 'Internal server error'

    def __init__(self, message=None):
        super(QuizError, self).__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_dict(self):
        return {'error': self.message, 'code': self.code}


class ValidationError(QuizError):
    code = 'INVALID_PAYLOAD'
    status_code = 400
    default_message = 'Invalid payload'


class NotFoundError(QuizError):
    code = 'NOT_FOUND'
    status_code = 404
    default_message = 'Quiz not found'


class AlreadyCompletedError(QuizError):
    code = 'ALREADY_COMPLETED'
    status_code = 400
    default_message = 'Quiz already completed'


class ExpiredError(QuizError):
    code = 'EXPIRED'
    status_code = 410
    default_message = 'Quiz expired'


class DuplicateAnswerError(QuizError):
    code = 'DUPLICATE_ANSWER'
    status_code = 400
    default_message = 'Player has already answered this question'


class InternalError(QuizError):
    pass


def _internal_response(exc):
    from duoquiz import db
    db.session.rollback()
    current_app.logger.exception(f"[error] unhandled {type(exc).__name__}: {exc}")
    message = 'Internal server error'
    if current_app.config.get('APP_ENV') == 'development':
        message = str(exc) or message
    return jsonify({'error': message, 'code': InternalError.code}), 500


def register_error_handlers(flask_app):
    @flask_app.errorhandler(QuizError)
    def handle_quiz_error(exc):
        if isinstance(exc, InternalError):
            return _internal_response(exc)
        current_app.logger.info(f"[rejected] code={exc.code} status={exc.status_code} message={exc.message}")
        return jsonify(exc.to_dict()), exc.status_code

    @flask_app.errorhandler(HTTPException)
    def handle_http_error(exc):
        if exc.code == 404:
            return jsonify({'error': 'Not found', 'code': NotFoundError.code}), 404
        return jsonify({'error': exc.description, 'code': exc.name.upper().replace(' ', '_')}), exc.code

    @flask_app.errorhandler(Exception)
    def handle_unexpected(exc):
        return _internal_response(exc)
