"""Admin routes: user management, analytics, reminders"""
from flask import Blueprint, Response, jsonify, request
from flask_login import current_user
from sqlalchemy import or_

from lms.errors import BadRequest, get_or_404
from lms.extensions import db
from lms.models import User, UserRole, Course, Assignment, Submission, Notification, OperationLog
from lms.routes.auth import build_user
from lms.services import AnalyticsService, ReminderService
from lms.utils import get_json_body, paginate
from lms.utils.decorators import require_role, log_operation

bp = Blueprint('admin', __name__, url_prefix='/api/admin')


def parse_role(value):
    if value not in UserRole.ALL:
        raise BadRequest(f'Invalid role, expected one of: {", ".join(UserRole.ALL)}')
    return value


@bp.route('/users')
@require_role(UserRole.ADMIN)
def list_users():
    """Paginated user listing"""
    query = User.query

    role_filter = request.args.get('role', '').strip()
    if role_filter:
        query = query.filter_by(role=parse_role(role_filter))

    # Substring search on name and email
    search_query = request.args.get('search', '').strip()
    if search_query:
        query = query.filter(
            or_(
                User.name.ilike(f'%{search_query}%'),
                User.email.ilike(f'%{search_query}%')
            )
        )

    return jsonify(paginate(query.order_by(User.created_at.asc(), User.id.asc()), 'users'))


@bp.route('/users', methods=['POST'])
@require_role(UserRole.ADMIN)
@log_operation('create', 'Create user')
def create_user():
    data = get_json_body()
    role = parse_role(data.get('role') or UserRole.STUDENT)
    user = build_user(data, role=role)
    db.session.add(user)
    db.session.commit()
    return jsonify(user.to_dict()), 201


@bp.route('/users/<int:user_id>', methods=['PATCH'])
@require_role(UserRole.ADMIN)
@log_operation('update', 'Update user')
def update_user(user_id):
    """Change a user's role and/or active flag"""
    user = get_or_404(User, user_id, 'User not found')
    data = get_json_body()
    if 'role' not in data and 'is_active' not in data:
        raise BadRequest('Nothing to update, expected role or is_active')

    if 'role' in data:
        role = parse_role(data['role'])
        if user.id == current_user.id and role != UserRole.ADMIN:
            raise BadRequest('You cannot change your own role')
        user.role = role

    if 'is_active' in data:
        if not isinstance(data['is_active'], bool):
            raise BadRequest('is_active must be a boolean')
        if user.id == current_user.id and not data['is_active']:
            raise BadRequest('You cannot deactivate your own account')
        user.is_active = data['is_active']

    db.session.commit()
    return jsonify(user.to_dict())


@bp.route('/users/<int:user_id>', methods=['DELETE'])
@require_role(UserRole.ADMIN)
@log_operation('delete', 'Delete user')
def delete_user(user_id):
    user = get_or_404(User, user_id, 'User not found')
    if user.id == current_user.id:
        raise BadRequest('You cannot delete your own account')

    for course in list(user.teaching_courses):
        course.teacher_id = None
    user.courses = []
    # keep authored work and history, detached from the account
    Assignment.query.filter_by(created_by=user.id).update({'created_by': None})
    Submission.query.filter_by(graded_by=user.id).update({'graded_by': None})
    Notification.query.filter_by(sender_id=user.id).update({'sender_id': None})
    OperationLog.query.filter_by(user_id=user.id).update({'user_id': None})
    db.session.delete(user)
    db.session.commit()
    return jsonify({'msg': 'User deleted'})


@bp.route('/analytics')
@require_role(UserRole.ADMIN)
def analytics():
    return jsonify(AnalyticsService.get_overview())


@bp.route('/courses/<int:course_id>/heatmap')
@require_role(UserRole.ADMIN)
def course_heatmap(course_id):
    """Download a course's submission heatmap as CSV"""
    course = get_or_404(Course, course_id, 'Course not found')
    csv_data = AnalyticsService.submission_heatmap_csv(course)
    return Response(
        csv_data,
        mimetype='text/csv',
        headers={'Content-Disposition': f'attachment; filename=heatmap_course_{course.id}.csv'}
    )


@bp.route('/reminders/run', methods=['POST'])
@require_role(UserRole.ADMIN)
@log_operation('update', 'Run deadline reminders')
def run_reminders():
    """Run a reminder sweep now"""
    return jsonify(ReminderService.send_deadline_reminders())
