"""Submission and grading routes"""
from flask import Blueprint, jsonify
from flask_login import current_user

from lms.errors import BadRequest, Forbidden, get_or_404
from lms.extensions import db
from lms.models import Submission, NotificationType, UserRole
from lms.routes.assignment import get_assignment
from lms.services import NotificationService
from lms.utils import get_json_body, utcnow
from lms.utils.decorators import require_login, require_teacher_or_admin, require_role, log_operation

bp = Blueprint('submission', __name__, url_prefix='/api')


@bp.route('/assignments/<int:assignment_id>/submissions', methods=['POST'])
@require_role(UserRole.STUDENT)
@log_operation('submit', 'Submit assignment')
def submit_assignment(assignment_id):
    """Submit, or resubmit before the deadline"""
    if not current_user.is_student:
        raise Forbidden('Only students can submit assignments')
    assignment = get_assignment(assignment_id)
    if not assignment.course.has_student(current_user):
        raise Forbidden('You are not enrolled in this course')
    if assignment.is_overdue():
        raise BadRequest('The deadline for this assignment has passed')

    data = get_json_body()
    content = (data.get('content') or '').strip()
    link = (data.get('link') or '').strip() or None
    if not content and not link:
        raise BadRequest('Submission needs content or a link')

    submission = assignment.submission_for(current_user.id)
    created = submission is None
    if created:
        submission = Submission(assignment_id=assignment.id, student_id=current_user.id)
        db.session.add(submission)
    else:
        # Resubmission replaces the previous work and any grade on it
        submission.grade = None
        submission.feedback = None
        submission.graded_at = None
        submission.graded_by = None

    submission.content = content
    submission.link = link
    submission.submitted_at = utcnow()
    db.session.commit()
    return jsonify(submission.to_dict()), 201 if created else 200


@bp.route('/assignments/<int:assignment_id>/submissions')
@require_teacher_or_admin
def list_submissions(assignment_id):
    assignment = get_assignment(assignment_id, manage=True)
    submissions = Submission.query.filter_by(assignment_id=assignment.id).order_by(
        Submission.submitted_at.asc()
    ).all()
    return jsonify([s.to_dict() for s in submissions])


@bp.route('/submissions/mine')
@require_login
def my_submissions():
    submissions = Submission.query.filter_by(student_id=current_user.id).order_by(
        Submission.submitted_at.desc()
    ).all()
    return jsonify([s.to_dict() for s in submissions])


@bp.route('/submissions/<int:submission_id>/grade', methods=['PATCH'])
@require_teacher_or_admin
@log_operation('grade', 'Grade submission')
def grade_submission(submission_id):
    submission = get_or_404(Submission, submission_id, 'Submission not found')
    if not submission.assignment.course.is_managed_by(current_user):
        raise Forbidden('You do not have permission to grade this submission')

    data = get_json_body()
    if 'grade' not in data:
        raise BadRequest('grade is required')
    grade = data['grade']
    if isinstance(grade, bool) or not isinstance(grade, (int, float)):
        raise BadRequest('grade must be a number')
    if not 0 <= grade <= 100:
        raise BadRequest('grade must be between 0 and 100')

    submission.grade = float(grade)
    submission.feedback = data.get('feedback')
    submission.graded_at = utcnow()
    submission.graded_by = current_user.id
    db.session.commit()

    NotificationService.create_notification(
        receiver_id=submission.student_id,
        title=f'Graded: {submission.assignment.title}',
        content=f'Your submission for "{submission.assignment.title}" received {submission.grade:g}/100.',
        notification_type=NotificationType.GRADE,
        sender_id=current_user.id,
        related_assignment_id=submission.assignment_id
    )
    return jsonify(submission.to_dict())
