"""Outgoing email"""
import logging

from flask_mail import Message

from lms.extensions import mail

logger = logging.getLogger(__name__)

REMINDER_SUBJECT = '⏰ Reminder: Assignment "{title}" is due soon'
REMINDER_BODY = (
    'Hi {name},\n\n'
    'Just a reminder that your assignment "{title}" is due at {deadline}.\n\n'
    'Please submit it before the deadline.\n\n'
    'LMS Team'
)


class EmailDeliveryError(RuntimeError):
    """Raised when a message cannot be handed to the mail server"""


def format_deadline(deadline):
    """Human readable UTC deadline"""
    return deadline.strftime('%Y-%m-%d %H:%M UTC')


def send_email(to, subject, text):
    """Send a plain-text email through Flask-Mail"""
    if not to:
        raise EmailDeliveryError('recipient_required')
    message = Message(subject=subject, recipients=[to], body=text)
    try:
        mail.send(message)
    except Exception as e:
        raise EmailDeliveryError(f'Failed to send email to {to}: {e}') from e
    logger.debug(f'Email sent to {to}: {subject}')
    return message


def send_deadline_reminder(student, assignment):
    """Email a student that an assignment is due soon"""
    subject = REMINDER_SUBJECT.format(title=assignment.title)
    text = REMINDER_BODY.format(
        name=student.name,
        title=assignment.title,
        deadline=format_deadline(assignment.deadline),
    )
    return send_email(student.email, subject, text)
