"""
Flask Extensions

Authentication state lives in the server-side session; Flask-Login only
exposes the user behind that session as ``current_user``.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

# Database instance
db = SQLAlchemy()

# Resolves current_user from session['user_id'] (see create_app)
login_manager = LoginManager()
