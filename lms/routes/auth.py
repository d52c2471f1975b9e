"""Authentication routes"""
from flask import Blueprint, jsonify
from flask_login import current_user

from lms.errors import BadRequest, Unauthorized
from lms.extensions import db
from lms.models import User, UserRole
from lms.services import AuthService, LogService
from lms.utils import get_json_body, require_fields
from lms.utils.decorators import require_login

bp = Blueprint('auth', __name__, url_prefix='/api/auth')

MIN_PASSWORD_LENGTH = 6


def validate_new_user(name, email, password):
    """Shared validation for self-registration and admin-created users"""
    if not name:
        raise BadRequest('Name is required')
    if len(password) < MIN_PASSWORD_LENGTH:
        raise BadRequest(f'Password must be at least {MIN_PASSWORD_LENGTH} characters')
    if '@' not in email or any(c.isspace() for c in email):
        raise BadRequest('Invalid email address')
    if User.query.filter_by(email=email).first():
        raise BadRequest('User already exists')


def build_user(data, role=UserRole.STUDENT):
    require_fields(data, 'name', 'email', 'password')
    name = str(data['name']).strip()
    email = str(data['email']).strip().lower()
    password = str(data['password'])
    validate_new_user(name, email, password)

    user = User(name=name, email=email, role=role)
    user.set_password(password)
    return user


@bp.route('/register', methods=['POST'])
def register():
    """Student self-registration"""
    user = build_user(get_json_body())
    db.session.add(user)
    db.session.commit()

    LogService.log_operation('create', f'Registered {user.email}', user=user)
    return jsonify({'token': AuthService.generate_token(user), 'user': user.to_dict()}), 201


@bp.route('/login', methods=['POST'])
def login():
    """Exchange credentials for a bearer token"""
    data = get_json_body()
    user = AuthService.authenticate(data.get('email'), data.get('password'))
    if user is None:
        LogService.log_operation('login', f"Login {data.get('email')}", result='failed',
                                 error_msg='Invalid credentials')
        raise Unauthorized('Invalid email or password, or the account is disabled')

    LogService.log_operation('login', f'Login {user.email}', user=user)
    return jsonify({'token': AuthService.generate_token(user), 'user': user.to_dict()})


@bp.route('/me')
@require_login
def me():
    return jsonify(current_user.to_dict())
