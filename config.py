"""Application configuration"""
import os


def _env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Base configuration"""
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-secret-key-change-in-production')

    # Database
    BASE_DIR = os.path.dirname(os.path.abspath(__file__))
    STORAGE_DIR = os.environ.get('STORAGE_DIR', os.path.join(BASE_DIR, 'storage'))

    SQLALCHEMY_DATABASE_URI = os.environ.get(
        'DATABASE_URL',
        f'sqlite:///{os.path.join(STORAGE_DIR, "data", "lms.db")}'
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'pool_recycle': 3600,
    }

    # Bearer tokens
    API_TOKEN_MAX_AGE = int(os.environ.get('API_TOKEN_MAX_AGE', 7 * 24 * 3600))

    # Pagination
    DEFAULT_PER_PAGE = int(os.environ.get('DEFAULT_PER_PAGE', 10))
    MAX_PER_PAGE = int(os.environ.get('MAX_PER_PAGE', 100))

    # Mail (Flask-Mail)
    MAIL_SERVER = os.environ.get('MAIL_SERVER', 'localhost')
    MAIL_PORT = int(os.environ.get('MAIL_PORT', 25))
    MAIL_USE_TLS = _env_bool('MAIL_USE_TLS')
    MAIL_USE_SSL = _env_bool('MAIL_USE_SSL')
    MAIL_USERNAME = os.environ.get('MAIL_USERNAME')
    MAIL_PASSWORD = os.environ.get('MAIL_PASSWORD')
    MAIL_DEFAULT_SENDER = os.environ.get('MAIL_DEFAULT_SENDER', 'LMS Team <no-reply@lms.local>')

    # Deadline reminders
    SCHEDULER_ENABLED = _env_bool('SCHEDULER_ENABLED', True)
    SCHEDULER_API_ENABLED = False
    SCHEDULER_LOCK_FILE = os.environ.get('SCHEDULER_LOCK_FILE', '/tmp/lms_scheduler.lock')
    REMINDER_INTERVAL_MINUTES = int(os.environ.get('REMINDER_INTERVAL_MINUTES', 10))
    REMINDER_WINDOW_MINUTES = int(os.environ.get('REMINDER_WINDOW_MINUTES', 60))

    # Dashboard origins allowed to call the API, comma separated
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', 'http://localhost:5173')

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_FORMAT = '[%(asctime)s] %(levelname)s %(name)s: %(message)s'


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False

    def __init__(self):
        # SECRET_KEY must be set in production
        if Config.SECRET_KEY == 'dev-secret-key-change-in-production':
            import warnings
            warnings.warn(
                'Using the default SECRET_KEY in production is insecure! '
                'Set a strong key through the SECRET_KEY environment variable.',
                UserWarning
            )


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    SECRET_KEY = 'testing-secret-key'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    SCHEDULER_ENABLED = False
    MAIL_SUPPRESS_SEND = True
    MAIL_DEFAULT_SENDER = 'LMS Team <no-reply@lms.test>'
    DEFAULT_PER_PAGE = 5


# Config lookup
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
