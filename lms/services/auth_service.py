"""Bearer token authentication"""
from flask import current_app
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired

from lms.extensions import db
from lms.models import User

TOKEN_SALT = 'lms-api-token'


class AuthService:
    """Issue and verify signed API tokens"""

    @staticmethod
    def _serializer():
        return URLSafeTimedSerializer(current_app.config['SECRET_KEY'], salt=TOKEN_SALT)

    @staticmethod
    def generate_token(user):
        return AuthService._serializer().dumps({'uid': user.id})

    @staticmethod
    def verify_token(token):
        """Return the active user a token belongs to, or None"""
        if not token:
            return None
        try:
            data = AuthService._serializer().loads(
                token, max_age=current_app.config['API_TOKEN_MAX_AGE']
            )
        except SignatureExpired:
            current_app.logger.info('Rejected expired API token')
            return None
        except BadSignature:
            return None

        user = db.session.get(User, data.get('uid'))
        if user is None or not user.is_active:
            return None
        return user

    @staticmethod
    def authenticate(email, password):
        """Return the user matching the credentials, or None"""
        if not isinstance(email, str) or not isinstance(password, str):
            return None
        if not email or not password:
            return None
        user = User.query.filter_by(email=email.strip().lower()).first()
        if user and user.is_active and user.check_password(password):
            return user
        return None


def load_user_from_request(request):
    """Resolve ``Authorization: Bearer <token>`` to a user"""
    header = request.headers.get('Authorization', '')
    scheme, _, token = header.partition(' ')
    if scheme.lower() != 'bearer':
        return None
    return AuthService.verify_token(token.strip())
