"""Assignment deadline reminders"""
import logging
from datetime import timedelta

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from lms.extensions import db
from lms.models import Assignment, ReminderLog, NotificationType
from lms.services.email_service import send_deadline_reminder, format_deadline, EmailDeliveryError
from lms.services.notification_service import NotificationService
from lms.utils.helpers import utcnow

logger = logging.getLogger(__name__)


class ReminderService:
    """Periodic sweep emailing students whose assignments are due soon"""

    @staticmethod
    def find_due_assignments(now, window):
        """Active assignments with ``now <= deadline <= now + window``"""
        return Assignment.query.filter(
            Assignment.is_active.is_(True),
            Assignment.deadline >= now,
            Assignment.deadline <= now + window
        ).order_by(Assignment.deadline.asc()).all()

    @staticmethod
    def pending_students(assignment):
        """Enrolled active students who have neither submitted nor been reminded

        Enrolled users whose role has since changed away from student are skipped.
        """
        submitted = {s.student_id for s in assignment.submissions}
        reminded = {r.student_id for r in assignment.reminders}
        return [
            student for student in assignment.course.students
            if student.is_active
            and student.is_student
            and student.id not in submitted
            and student.id not in reminded
        ]

    @staticmethod
    def remind_student(assignment, student):
        """Email one student and record the reminder"""
        send_deadline_reminder(student, assignment)
        db.session.add(ReminderLog(assignment_id=assignment.id, student_id=student.id))
        NotificationService.create_notification(
            receiver_id=student.id,
            title=f'Reminder: {assignment.title} is due soon',
            content=f'"{assignment.title}" is due at {format_deadline(assignment.deadline)}.',
            notification_type=NotificationType.REMINDER,
            related_assignment_id=assignment.id,
            commit=False
        )
        db.session.commit()
        logger.info(f'Reminder sent to {student.email}')

    @staticmethod
    def send_deadline_reminders(now=None):
        """
        Run one sweep

        Returns a summary dict: assignments examined, reminders sent,
        students skipped (already submitted or reminded) and failed sends.
        """
        now = now or utcnow()
        window = timedelta(minutes=current_app.config['REMINDER_WINDOW_MINUTES'])
        summary = {'assignments': 0, 'sent': 0, 'skipped': 0, 'failed': 0}

        logger.info('Checking for upcoming assignment deadlines...')
        try:
            assignments = ReminderService.find_due_assignments(now, window)
            summary['assignments'] = len(assignments)

            for assignment in assignments:
                students = ReminderService.pending_students(assignment)
                summary['skipped'] += len(assignment.course.students) - len(students)

                for student in students:
                    try:
                        ReminderService.remind_student(assignment, student)
                        summary['sent'] += 1
                    except EmailDeliveryError as e:
                        db.session.rollback()
                        summary['failed'] += 1
                        logger.error(f'Reminder to {student.email} failed: {e}')
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception('Error in assignment reminder scheduler')

        logger.info(
            f"Reminder sweep finished: {summary['assignments']} assignments, "
            f"{summary['sent']} sent, {summary['skipped']} skipped, {summary['failed']} failed"
        )
        return summary
