"""Service layer"""
from lms.services.auth_service import AuthService
from lms.services.notification_service import NotificationService
from lms.services.log_service import LogService
from lms.services.reminder_service import ReminderService
from lms.services.analytics_service import AnalyticsService

__all__ = ['AuthService', 'NotificationService', 'LogService', 'ReminderService', 'AnalyticsService']
