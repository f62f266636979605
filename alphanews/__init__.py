"""
Alpha News - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance.
"""

import logging
import os
from datetime import timedelta

from flask import Flask
from alphanews.extensions import db, login_manager
from alphanews.config import Config
from alphanews.sessions import DatabaseSessionInterface

logger = logging.getLogger(__name__)


def create_app(config_class=Config):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Server-side sessions; rows are kept past the idle limit, which enforce_session applies
    app.permanent_session_lifetime = timedelta(
        seconds=max(app.config['SESSION_STORE_LIFETIME'], app.config['SESSION_LIFETIME']))
    app.session_interface = DatabaseSessionInterface()

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    login_manager.session_protection = None

    # Register blueprints
    from alphanews.site import site_bp
    from alphanews.admin import admin_bp

    app.register_blueprint(site_bp)
    app.register_blueprint(admin_bp, url_prefix='/admin')

    # current_user is whoever session['user_id'] names
    @login_manager.request_loader
    def load_user_from_session(request):
        from flask import session
        from alphanews.auth import get_current_user
        return get_current_user(db.session, session)

    # Permission helper for templates
    @app.context_processor
    def inject_permission_check():
        from flask import session
        from alphanews.auth import has_permission

        def can(name):
            return has_permission(db.session, session, name)
        return dict(can=can)

    from alphanews.services.text import get_excerpt, time_ago, format_date, article_image, author_image
    app.add_template_filter(get_excerpt, 'excerpt')
    app.add_template_filter(time_ago, 'time_ago')
    app.add_template_filter(format_date, 'format_date')
    app.add_template_filter(article_image, 'article_image')
    app.add_template_filter(author_image, 'author_image')

    # Create database tables
    with app.app_context():
        os.makedirs(app.instance_path, exist_ok=True)
        db.create_all()
        _ensure_default_data()

    return app


def _ensure_default_data():
    """Ensure default permissions, roles and settings exist."""
    from sqlalchemy.exc import SQLAlchemyError
    from alphanews.auth.permissions import DEFAULT_PERMISSIONS, DEFAULT_ROLES
    from alphanews.models import Permission, Role, Setting
    from alphanews.services.settings import SITE_DEFAULTS

    try:
        permissions = {p.name: p for p in Permission.query.all()}
        for name, description in DEFAULT_PERMISSIONS.items():
            if name not in permissions:
                permissions[name] = Permission(name=name, description=description)
                db.session.add(permissions[name])

        for name, (description, granted) in DEFAULT_ROLES.items():
            if Role.query.filter_by(name=name).first():
                continue
            role = Role(name=name, description=description)
            role.permissions = [permissions[p] for p in granted]
            db.session.add(role)
            logger.info("Created default role %s", name)

        existing = {s.setting_key for s in Setting.query.all()}
        for key in ('site_name', 'site_tagline', 'theme'):
            if key not in existing:
                db.session.add(Setting(setting_key=key, setting_value=SITE_DEFAULTS[key]))

        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error("Could not create default data: %s", e)
