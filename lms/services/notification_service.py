"""Notification service"""
from lms.extensions import db
from lms.models import Notification, NotificationType


class NotificationService:
    """In-app notifications"""

    @staticmethod
    def create_notification(receiver_id, title, content,
                            notification_type=NotificationType.SYSTEM,
                            sender_id=None,
                            related_assignment_id=None,
                            commit=True):
        """Create a notification"""
        notification = Notification(
            title=title,
            content=content,
            notification_type=notification_type,
            sender_id=sender_id,
            receiver_id=receiver_id,
            related_assignment_id=related_assignment_id
        )
        db.session.add(notification)
        if commit:
            db.session.commit()
        return notification

    @staticmethod
    def notify_many(receivers, title, content, **kwargs):
        """Create one notification per receiver in a single commit"""
        notifications = [
            NotificationService.create_notification(
                receiver.id, title, content, commit=False, **kwargs
            )
            for receiver in receivers
        ]
        db.session.commit()
        return notifications

    @staticmethod
    def get_unread_count(user_id):
        return Notification.query.filter_by(
            receiver_id=user_id,
            is_read=False
        ).count()

    @staticmethod
    def mark_as_read(notification):
        notification.is_read = True
        db.session.commit()

    @staticmethod
    def mark_all_as_read(user_id):
        """Mark all of a user's notifications read; returns how many changed"""
        updated = Notification.query.filter_by(
            receiver_id=user_id,
            is_read=False
        ).update({'is_read': True})
        db.session.commit()
        return updated
