"""Deadline reminder bookkeeping"""
from lms.extensions import db
from lms.utils.helpers import utcnow


class ReminderLog(db.Model):
    """One row per reminder email actually sent"""
    __tablename__ = 'reminder_log'

    id = db.Column(db.Integer, primary_key=True)
    assignment_id = db.Column(db.Integer, db.ForeignKey('assignment.id'), nullable=False)
    student_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    sent_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    assignment = db.relationship('Assignment', backref=db.backref('reminders', cascade='all, delete-orphan'))
    student = db.relationship('User', backref=db.backref('reminders_received', cascade='all, delete-orphan'))

    __table_args__ = (
        db.UniqueConstraint('assignment_id', 'student_id', name='unique_assignment_student_reminder'),
    )

    def __repr__(self):
        return f'<ReminderLog assignment={self.assignment_id} student={self.student_id}>'
