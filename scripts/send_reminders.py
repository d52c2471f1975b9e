"""One-off deadline reminder sweep, for running from cron instead of the in-process scheduler"""
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from lms import create_app
from lms.services.reminder_service import ReminderService


def run_reminders():
    app = create_app(os.getenv('FLASK_ENV', 'production'))

    with app.app_context():
        summary = ReminderService.send_deadline_reminders()
        print(f"Reminders: {summary['sent']} sent, {summary['failed']} failed "
              f"across {summary['assignments']} assignments")
        return 1 if summary['failed'] else 0


if __name__ == '__main__':
    sys.exit(run_reminders())
