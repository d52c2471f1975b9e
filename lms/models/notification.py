"""Notification models"""
from lms.extensions import db
from lms.utils.helpers import utcnow, isoformat


class NotificationType:
    SYSTEM = 'system'
    ASSIGNMENT = 'assignment'
    GRADE = 'grade'
    REMINDER = 'reminder'


class Notification(db.Model):
    """In-app notification"""
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    content = db.Column(db.Text, nullable=False)
    notification_type = db.Column(db.String(50), nullable=False, default=NotificationType.SYSTEM)
    sender_id = db.Column(db.Integer, db.ForeignKey('user.id', ondelete='SET NULL'), nullable=True)  # system notifications have no sender
    receiver_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    is_read = db.Column(db.Boolean, default=False)
    created_at = db.Column(db.DateTime, default=utcnow)
    related_assignment_id = db.Column(db.Integer, db.ForeignKey('assignment.id', ondelete='SET NULL'))

    # Relationships
    sender = db.relationship('User', foreign_keys=[sender_id])
    receiver = db.relationship('User', foreign_keys=[receiver_id],
                               backref=db.backref('received_notifications', cascade='all, delete-orphan'))
    related_assignment = db.relationship('Assignment', foreign_keys=[related_assignment_id])

    def to_dict(self):
        return {
            '_id': self.id,
            'title': self.title,
            'content': self.content,
            'type': self.notification_type,
            'sender': self.sender_id,
            'is_read': self.is_read,
            'related_assignment': self.related_assignment_id,
            'created_at': isoformat(self.created_at),
        }

    def __repr__(self):
        return f'<Notification {self.title}>'
