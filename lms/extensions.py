"""Flask extensions"""
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_mail import Mail

# Unbound extension instances
db = SQLAlchemy()
login_manager = LoginManager()
mail = Mail()


def init_extensions(app):
    """Bind all extensions to the app"""
    db.init_app(app)
    login_manager.init_app(app)
    mail.init_app(app)

    # Remove the session at the end of each request
    @app.teardown_appcontext
    def shutdown_session(exception=None):
        db.session.remove()
