"""Data models"""
from lms.models.user import User, UserRole
from lms.models.course import Course, course_student
from lms.models.assignment import Assignment
from lms.models.submission import Submission
from lms.models.reminder_log import ReminderLog
from lms.models.notification import Notification, NotificationType
from lms.models.operation_log import OperationLog

__all__ = [
    'User', 'UserRole',
    'Course', 'course_student',
    'Assignment',
    'Submission',
    'ReminderLog',
    'Notification', 'NotificationType',
    'OperationLog',
]
