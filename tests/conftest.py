"""Shared fixtures: an in-memory app, seeded users and bearer headers."""
from datetime import timedelta

import pytest

from lms import create_app
from lms.extensions import db
from lms.models import User, UserRole, Course, Assignment, Submission
from lms.services import AuthService
from lms.utils import utcnow


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    """Create a user and return its id"""
    counter = {'n': 0}

    def _make_user(role=UserRole.STUDENT, name=None, email=None, password='secret123', is_active=True):
        counter['n'] += 1
        with app.app_context():
            user = User(
                name=name or f'{role.title()} {counter["n"]}',
                email=email or f'{role}{counter["n"]}@example.com',
                role=role,
                is_active=is_active,
            )
            user.set_password(password)
            db.session.add(user)
            db.session.commit()
            return user.id

    return _make_user


@pytest.fixture
def auth_headers(app):
    def _auth_headers(user_id):
        with app.app_context():
            token = AuthService.generate_token(db.session.get(User, user_id))
        return {'Authorization': f'Bearer {token}'}

    return _auth_headers


@pytest.fixture
def admin_id(make_user):
    return make_user(UserRole.ADMIN, name='Admin', email='admin@example.com')


@pytest.fixture
def teacher_id(make_user):
    return make_user(UserRole.TEACHER, name='Teacher', email='teacher@example.com')


@pytest.fixture
def student_id(make_user):
    return make_user(UserRole.STUDENT, name='Student', email='student@example.com')


@pytest.fixture
def make_course(app):
    def _make_course(teacher_id, student_ids=(), title='Algorithms'):
        with app.app_context():
            course = Course(title=title, description='', teacher_id=teacher_id)
            course.students = [db.session.get(User, sid) for sid in student_ids]
            db.session.add(course)
            db.session.commit()
            return course.id

    return _make_course


@pytest.fixture
def make_assignment(app):
    def _make_assignment(course_id, due_in=timedelta(minutes=30), title='Homework 1', deadline=None):
        with app.app_context():
            assignment = Assignment(
                title=title,
                description='',
                deadline=deadline or utcnow() + due_in,
                course_id=course_id,
            )
            db.session.add(assignment)
            db.session.commit()
            return assignment.id

    return _make_assignment


@pytest.fixture
def make_submission(app):
    def _make_submission(assignment_id, student_id, content='done', grade=None):
        with app.app_context():
            submission = Submission(
                assignment_id=assignment_id,
                student_id=student_id,
                content=content,
                grade=grade,
            )
            db.session.add(submission)
            db.session.commit()
            return submission.id

    return _make_submission
