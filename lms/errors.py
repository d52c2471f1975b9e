"""API errors and JSON error handlers"""
from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException

from lms.extensions import db


class APIError(Exception):
    """Error rendered as ``{"msg": message}`` with ``status_code``"""
    status_code = 400

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class BadRequest(APIError):
    status_code = 400


class Unauthorized(APIError):
    status_code = 401


class Forbidden(APIError):
    status_code = 403


class NotFound(APIError):
    status_code = 404


def get_or_404(model, object_id, message=None):
    """Fetch a record by primary key or raise NotFound"""
    obj = db.session.get(model, object_id)
    if obj is None:
        raise NotFound(message or f'{model.__name__} not found')
    return obj


def register_error_handlers(app):
    """Render every error as JSON"""

    @app.errorhandler(APIError)
    def handle_api_error(error):
        return jsonify({'msg': error.message}), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return jsonify({'msg': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        current_app.logger.exception(f'Unhandled error: {error}')
        db.session.rollback()
        return jsonify({'msg': 'Internal server error'}), 500
