"""Application factory"""
import logging
import os

from flask import Flask, request

from config import config
from lms.extensions import login_manager, init_extensions
from lms.errors import register_error_handlers


def create_app(config_name='default'):
    """Create the Flask application"""
    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config[config_name]())

    configure_logging(app)

    # Make sure the SQLite storage directory exists
    if app.config['SQLALCHEMY_DATABASE_URI'].startswith('sqlite:///'):
        os.makedirs(os.path.join(app.config['STORAGE_DIR'], 'data'), exist_ok=True)

    init_extensions(app)

    # Bearer token authentication
    from lms.services.auth_service import load_user_from_request
    login_manager.request_loader(load_user_from_request)

    register_error_handlers(app)
    register_cors(app)
    register_blueprints(app)

    init_scheduler(app)

    return app


def configure_logging(app):
    """Root logging from LOG_LEVEL / LOG_FORMAT"""
    level = getattr(logging, str(app.config['LOG_LEVEL']).upper(), logging.INFO)
    logging.basicConfig(level=level, format=app.config['LOG_FORMAT'])
    logging.getLogger('lms').setLevel(level)
    app.logger.setLevel(level)


def register_cors(app):
    """Allow the dashboard origins to call the API"""
    allowed_origins = {o.strip() for o in app.config['CORS_ORIGINS'].split(',') if o.strip()}

    @app.after_request
    def add_cors_headers(response):
        origin = request.headers.get('Origin')
        if origin and ('*' in allowed_origins or origin in allowed_origins):
            response.headers['Access-Control-Allow-Origin'] = origin
            response.headers['Access-Control-Allow-Headers'] = 'Authorization, Content-Type'
            response.headers['Access-Control-Allow-Methods'] = 'GET, POST, PUT, PATCH, DELETE, OPTIONS'
            response.headers['Vary'] = 'Origin'
        return response


def register_blueprints(app):
    """Register all blueprints"""
    # Imported late to avoid circular imports
    from lms.routes import (main, auth, admin, course, assignment,
                            submission, notification, logs)

    app.register_blueprint(main.bp)
    app.register_blueprint(auth.bp)
    app.register_blueprint(admin.bp)
    app.register_blueprint(course.bp)
    app.register_blueprint(assignment.bp)
    app.register_blueprint(submission.bp)
    app.register_blueprint(notification.bp)
    app.register_blueprint(logs.bp)


def init_scheduler(app):
    """Start the deadline reminder scheduler"""
    from lms.services.scheduler_service import init_scheduler as _init_scheduler
    _init_scheduler(app)
