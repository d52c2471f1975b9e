"""Course management routes"""
from flask import Blueprint, jsonify
from flask_login import current_user

from lms.errors import BadRequest, Forbidden, NotFound, get_or_404
from lms.extensions import db
from lms.models import Course, User, UserRole
from lms.utils import get_json_body, require_fields
from lms.utils.decorators import require_login, require_teacher_or_admin, require_role, log_operation

bp = Blueprint('course', __name__, url_prefix='/api/courses')


def get_course(course_id):
    course = get_or_404(Course, course_id, 'Course not found')
    if not course.is_active and not current_user.is_admin:
        raise NotFound('Course not found')
    return course


def get_managed_course(course_id):
    """Course the current user may modify"""
    course = get_course(course_id)
    if not course.is_managed_by(current_user):
        raise Forbidden('You do not have permission to manage this course')
    return course


def resolve_teacher(teacher_id):
    teacher = db.session.get(User, teacher_id)
    if teacher is None:
        raise NotFound('Teacher not found')
    if not teacher.can_manage_courses():
        raise BadRequest('Course teacher must have the teacher or admin role')
    return teacher


@bp.route('')
@require_login
def list_courses():
    """Courses visible to the current user"""
    query = Course.query
    if not current_user.is_admin:
        query = query.filter_by(is_active=True)
    courses = query.order_by(Course.created_at.desc(), Course.id.desc()).all()
    return jsonify([c.to_dict() for c in courses])


@bp.route('', methods=['POST'])
@require_teacher_or_admin
@log_operation('create', 'Create course')
def create_course():
    data = get_json_body()
    require_fields(data, 'title')

    course = Course(
        title=str(data['title']).strip(),
        description=data.get('description', '')
    )
    if current_user.is_admin and data.get('teacher_id'):
        course.teacher = resolve_teacher(data['teacher_id'])
    else:
        course.teacher = current_user._get_current_object()

    db.session.add(course)
    db.session.commit()
    return jsonify(course.to_dict()), 201


@bp.route('/<int:course_id>')
@require_login
def get_course_detail(course_id):
    course = get_course(course_id)
    include_students = course.is_managed_by(current_user)
    return jsonify(course.to_dict(include_students=include_students))


@bp.route('/<int:course_id>', methods=['PUT'])
@require_teacher_or_admin
@log_operation('update', 'Update course')
def update_course(course_id):
    course = get_managed_course(course_id)
    data = get_json_body()

    if 'title' in data:
        title = str(data['title'] or '').strip()
        if not title:
            raise BadRequest('Title cannot be empty')
        course.title = title
    if 'description' in data:
        course.description = data['description']
    if 'is_active' in data:
        course.is_active = bool(data['is_active'])
    if 'teacher_id' in data:
        if not current_user.is_admin:
            raise Forbidden('Only admins can reassign a course')
        course.teacher = resolve_teacher(data['teacher_id'])

    db.session.commit()
    return jsonify(course.to_dict())


@bp.route('/<int:course_id>', methods=['DELETE'])
@require_teacher_or_admin
@log_operation('delete', 'Delete course')
def delete_course(course_id):
    course = get_managed_course(course_id)
    db.session.delete(course)
    db.session.commit()
    return jsonify({'msg': 'Course deleted'})


@bp.route('/<int:course_id>/students')
@require_teacher_or_admin
def list_students(course_id):
    course = get_managed_course(course_id)
    return jsonify([s.to_dict() for s in course.students])


@bp.route('/<int:course_id>/students', methods=['POST'])
@require_teacher_or_admin
@log_operation('update', 'Enroll students')
def enroll_students(course_id):
    """Enroll students by id"""
    course = get_managed_course(course_id)
    data = get_json_body()
    student_ids = data.get('student_ids')
    if not isinstance(student_ids, list) or not student_ids:
        raise BadRequest('student_ids must be a non-empty list')

    students = []
    for student_id in student_ids:
        student = db.session.get(User, student_id)
        if student is None:
            raise NotFound(f'User {student_id} not found')
        if not student.is_student:
            raise BadRequest(f'User {student_id} is not a student')
        students.append(student)

    added = 0
    for student in students:
        if not course.has_student(student):
            course.students.append(student)
            added += 1
    db.session.commit()
    return jsonify({'added': added, 'course': course.to_dict(include_students=True)})


@bp.route('/<int:course_id>/students/<int:student_id>', methods=['DELETE'])
@require_teacher_or_admin
@log_operation('update', 'Unenroll student')
def unenroll_student(course_id, student_id):
    course = get_managed_course(course_id)
    student = get_or_404(User, student_id, 'User not found')
    if not course.has_student(student):
        raise NotFound('Student is not enrolled in this course')
    course.students.remove(student)
    db.session.commit()
    return jsonify(course.to_dict(include_students=True))


@bp.route('/<int:course_id>/enroll', methods=['POST'])
@require_role(UserRole.STUDENT)
@log_operation('update', 'Self enroll')
def self_enroll(course_id):
    """Students join a course themselves"""
    course = get_course(course_id)
    if not current_user.is_student:
        raise BadRequest('Only students can enroll in a course')
    if course.has_student(current_user):
        raise BadRequest('Already enrolled')
    course.students.append(current_user._get_current_object())
    db.session.commit()
    return jsonify(course.to_dict())
