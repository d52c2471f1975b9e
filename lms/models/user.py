"""User models"""
from werkzeug.security import generate_password_hash, check_password_hash
from flask_login import UserMixin
from lms.extensions import db
from lms.utils.helpers import utcnow, isoformat


class UserRole:
    """User roles"""
    ADMIN = 'admin'
    TEACHER = 'teacher'
    STUDENT = 'student'

    ALL = (STUDENT, TEACHER, ADMIN)


class User(UserMixin, db.Model):
    """User account"""
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), nullable=False, default=UserRole.STUDENT)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    @property
    def is_admin(self):
        return self.role == UserRole.ADMIN

    @property
    def is_teacher(self):
        return self.role == UserRole.TEACHER

    @property
    def is_student(self):
        return self.role == UserRole.STUDENT

    def can_manage_courses(self):
        return self.role in (UserRole.ADMIN, UserRole.TEACHER)

    def to_dict(self):
        return {
            '_id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role,
            'is_active': self.is_active,
            'created_at': isoformat(self.created_at),
        }

    def __repr__(self):
        return f'<User {self.email}>'
