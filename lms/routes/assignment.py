"""Assignment management routes"""
from flask import Blueprint, jsonify
from flask_login import current_user

from lms.errors import Forbidden, NotFound, get_or_404
from lms.extensions import db
from lms.models import Assignment, NotificationType, UserRole
from lms.routes.course import get_course, get_managed_course
from lms.services import NotificationService
from lms.services.email_service import format_deadline
from lms.utils import get_json_body, require_fields, single_line, parse_datetime, utcnow
from lms.utils.decorators import require_login, require_teacher_or_admin, require_role, log_operation

bp = Blueprint('assignment', __name__, url_prefix='/api')


def can_view_course(user, course):
    return course.is_managed_by(user) or course.has_student(user)


def get_assignment(assignment_id, manage=False):
    """Assignment visible to (or, with ``manage``, editable by) the current user"""
    assignment = get_or_404(Assignment, assignment_id, 'Assignment not found')
    course = assignment.course
    if manage:
        if not course.is_managed_by(current_user):
            raise Forbidden('You do not have permission to manage this assignment')
    elif not can_view_course(current_user, course):
        raise Forbidden('You are not enrolled in this course')
    if not assignment.is_active and not course.is_managed_by(current_user):
        raise NotFound('Assignment not found')
    return assignment


@bp.route('/courses/<int:course_id>/assignments')
@require_login
def list_course_assignments(course_id):
    course = get_course(course_id)
    if not can_view_course(current_user, course):
        raise Forbidden('You are not enrolled in this course')

    query = Assignment.query.filter_by(course_id=course.id)
    if not course.is_managed_by(current_user):
        query = query.filter_by(is_active=True)
    assignments = query.order_by(Assignment.deadline.asc()).all()
    return jsonify([a.to_dict() for a in assignments])


@bp.route('/courses/<int:course_id>/assignments', methods=['POST'])
@require_teacher_or_admin
@log_operation('create', 'Create assignment')
def create_assignment(course_id):
    course = get_managed_course(course_id)
    data = get_json_body()
    require_fields(data, 'title', 'deadline')

    assignment = Assignment(
        title=single_line(data['title']),
        description=data.get('description', ''),
        deadline=parse_datetime(data['deadline']),
        course_id=course.id,
        created_by=current_user.id
    )
    db.session.add(assignment)
    db.session.commit()

    # Tell enrolled students about the new assignment
    if course.students:
        NotificationService.notify_many(
            course.students,
            title=f'New assignment: {assignment.title}',
            content=f'{course.title}: "{assignment.title}" is due at {format_deadline(assignment.deadline)}.',
            notification_type=NotificationType.ASSIGNMENT,
            sender_id=current_user.id,
            related_assignment_id=assignment.id
        )
    return jsonify(assignment.to_dict()), 201


@bp.route('/assignments/upcoming')
@require_role(UserRole.STUDENT)
def upcoming_assignments():
    """The current student's open assignments, soonest deadline first"""
    course_ids = [c.id for c in current_user.courses if c.is_active]
    if not course_ids:
        return jsonify([])

    assignments = Assignment.query.filter(
        Assignment.course_id.in_(course_ids),
        Assignment.is_active.is_(True),
        Assignment.deadline >= utcnow()
    ).order_by(Assignment.deadline.asc()).all()

    result = []
    for assignment in assignments:
        data = assignment.to_dict()
        data['submitted'] = assignment.has_submitted(current_user.id)
        result.append(data)
    return jsonify(result)


@bp.route('/assignments/<int:assignment_id>')
@require_login
def get_assignment_detail(assignment_id):
    assignment = get_assignment(assignment_id)
    data = assignment.to_dict()
    if current_user.is_student:
        data['submitted'] = assignment.has_submitted(current_user.id)
    return jsonify(data)


@bp.route('/assignments/<int:assignment_id>', methods=['PUT'])
@require_teacher_or_admin
@log_operation('update', 'Update assignment')
def update_assignment(assignment_id):
    assignment = get_assignment(assignment_id, manage=True)
    data = get_json_body()

    if 'title' in data:
        assignment.title = single_line(data['title'])
    if 'description' in data:
        assignment.description = data['description']
    if 'deadline' in data:
        new_deadline = parse_datetime(data['deadline'])
        if new_deadline != assignment.deadline:
            # A moved deadline earns a fresh reminder
            for reminder in list(assignment.reminders):
                db.session.delete(reminder)
        assignment.deadline = new_deadline
    if 'is_active' in data:
        assignment.is_active = bool(data['is_active'])

    db.session.commit()
    return jsonify(assignment.to_dict())


@bp.route('/assignments/<int:assignment_id>', methods=['DELETE'])
@require_teacher_or_admin
@log_operation('delete', 'Delete assignment')
def delete_assignment(assignment_id):
    assignment = get_assignment(assignment_id, manage=True)
    db.session.delete(assignment)
    db.session.commit()
    return jsonify({'msg': 'Assignment deleted'})
