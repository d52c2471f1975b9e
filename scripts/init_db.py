#!/usr/bin/env python3
"""
Database initialization
Creates the tables and the default admin account
"""

import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from lms import create_app
from lms.extensions import db
from lms.models import User, UserRole


def init_database():
    """Create tables and the default admin"""
    app = create_app(os.getenv('FLASK_ENV', 'production'))
    with app.app_context():
        db.create_all()
        print("Database tables created")

        admin_email = os.environ.get('ADMIN_EMAIL', 'admin@lms.local').strip().lower()
        admin_password = os.environ.get('ADMIN_PASSWORD', 'admin123')
        admin_name = os.environ.get('ADMIN_NAME', 'Administrator')

        existing_admin = User.query.filter_by(email=admin_email).first()
        if not existing_admin:
            admin = User(name=admin_name, email=admin_email, role=UserRole.ADMIN)
            admin.set_password(admin_password)
            db.session.add(admin)
            db.session.commit()
            print(f"Created default admin: {admin_email}")
        else:
            print(f"Admin {admin_email} already exists")


if __name__ == '__main__':
    init_database()
