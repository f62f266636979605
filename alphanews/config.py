"""
Configuration settings for the Alpha News website
"""
import os


class Config:
    """Flask application configuration"""

    # Flask secret key for signing flashes and cookies
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production-12345'

    # Database configuration
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'alphanews.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Website settings
    SITE_NAME = os.environ.get('SITE_NAME') or 'Alpha News'
    SITE_URL = os.environ.get('SITE_URL') or 'http://localhost:5000'
    ADMIN_EMAIL = os.environ.get('ADMIN_EMAIL') or 'info@example.com'

    # Upload settings
    UPLOAD_DIR = os.environ.get('UPLOAD_DIR') or os.path.join(basedir, 'uploads')
    MAX_FILE_SIZE = int(os.environ.get('MAX_FILE_SIZE', 5000000))  # 5MB
    ALLOWED_EXTENSIONS = ('jpg', 'jpeg', 'png', 'gif', 'pdf')

    # Pagination
    ITEMS_PER_PAGE = 10

    # Inactivity limit in seconds for the admin area
    SESSION_LIFETIME = int(os.environ.get('SESSION_LIFETIME', 3600))
    # Stored session rows outlive the inactivity limit so the idle logout can run
    SESSION_STORE_LIFETIME = int(os.environ.get('SESSION_STORE_LIFETIME', 86400))
    SESSION_COOKIE_NAME = 'alphanews_session'
    SESSION_COOKIE_HTTPONLY = True

    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
