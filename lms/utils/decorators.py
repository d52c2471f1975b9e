"""Permission decorators"""
from functools import wraps
from flask_login import current_user
from lms.errors import Unauthorized, Forbidden
from lms.extensions import db
from lms.models import UserRole


def require_login(f):
    """Require a valid bearer token"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            raise Unauthorized('Authentication required')
        return f(*args, **kwargs)
    return decorated_function


def require_role(*roles):
    """Require one of the given roles; admins pass every check"""
    def decorator(f):
        @wraps(f)
        @require_login
        def decorated_function(*args, **kwargs):
            if current_user.role not in roles and current_user.role != UserRole.ADMIN:
                raise Forbidden('You do not have permission to perform this action')
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def require_teacher_or_admin(f):
    """Require a teacher or admin"""
    return require_role(UserRole.TEACHER)(f)


def log_operation(operation_type, operation_desc=None):
    """
    Record an operation log row around the wrapped view

    Args:
        operation_type: login, create, update, delete, submit, grade...
        operation_desc: description; defaults to the function name
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            from lms.services.log_service import LogService

            desc = operation_desc if operation_desc else f.__name__
            try:
                result = f(*args, **kwargs)
            except Exception as e:
                # Drop the failed request's pending changes before writing the log row
                db.session.rollback()
                LogService.log_operation(operation_type, desc, result='failed', error_msg=str(e))
                raise
            LogService.log_operation(operation_type, desc, result='success')
            return result

        return decorated_function
    return decorator
