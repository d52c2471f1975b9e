"""Scheduled jobs - deadline reminder sweep"""
import logging
import os
import sys
import time

from flask_apscheduler import APScheduler

from lms.services.reminder_service import ReminderService

logger = logging.getLogger(__name__)

scheduler = APScheduler()

REMINDER_JOB_ID = 'assignment_deadline_reminder'
LOCK_MAX_AGE_SECONDS = 30
MAINTENANCE_SCRIPTS = ('init_db.py', 'send_reminders.py')


def acquire_scheduler_lock(lock_file):
    """
    Claim the scheduler for this worker

    Gunicorn forks several workers that each build the app; a lock file
    younger than LOCK_MAX_AGE_SECONDS means another worker of the same
    batch already started the scheduler.
    """
    current_pid = os.getpid()
    try:
        if os.path.exists(lock_file):
            lock_age = time.time() - os.path.getmtime(lock_file)
            if lock_age < LOCK_MAX_AGE_SECONDS:
                with open(lock_file, 'r') as f:
                    lock_pid = f.read().strip()
                logger.info(f'Worker {current_pid}: scheduler already running in worker {lock_pid}, skipping')
                return False
            # Stale lock left by a previous run
            os.remove(lock_file)

        with open(lock_file, 'w') as f:
            f.write(str(current_pid))
    except OSError as e:
        logger.error(f'Failed to create scheduler lock file {lock_file}: {e}')
        return False
    return True


def run_reminder_job(app):
    """Scheduler entry point; never lets an error escape into the scheduler thread"""
    with app.app_context():
        try:
            return ReminderService.send_deadline_reminders()
        except Exception:
            logger.exception('Error in assignment reminder scheduler')
            return None


def init_scheduler(app):
    """Start the reminder scheduler unless disabled for this process"""
    if not app.config.get('SCHEDULER_ENABLED', True):
        return False

    script_name = os.path.basename(sys.argv[0] if sys.argv else '')
    if script_name in MAINTENANCE_SCRIPTS:
        return False

    if not acquire_scheduler_lock(app.config['SCHEDULER_LOCK_FILE']):
        return False

    scheduler.init_app(app)
    scheduler.add_job(
        id=REMINDER_JOB_ID,
        func=run_reminder_job,
        args=[app],
        trigger='interval',
        minutes=app.config['REMINDER_INTERVAL_MINUTES'],
        misfire_grace_time=300,
        coalesce=True,
        max_instances=1,
        replace_existing=True,
    )
    scheduler.start()
    logger.info(
        f"Worker {os.getpid()}: reminder scheduler started, "
        f"every {app.config['REMINDER_INTERVAL_MINUTES']} minutes"
    )
    return True
