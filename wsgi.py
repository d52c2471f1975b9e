"""WSGI entry point - for Gunicorn and similar servers

Run directly for local development: python wsgi.py
Gunicorn: gunicorn wsgi:app
"""
import os
import sys

# Make sure the project root is importable
sys.path.insert(0, os.path.dirname(__file__))

from lms import create_app

config_name = os.getenv('FLASK_ENV', 'production')
app = create_app(config_name)

if __name__ == '__main__':
    app.run(host='0.0.0.0', port=int(os.getenv('PORT', 8001)), debug=config_name == 'development')
