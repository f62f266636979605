"""
Site Settings Services
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from alphanews.config import Config
from alphanews.models import Setting, utc_now

logger = logging.getLogger(__name__)

SITE_DEFAULTS = {
    'site_name': Config.SITE_NAME,
    'site_tagline': 'Latest News and Updates',
    'site_logo': 'images/logo.png',
    'admin_email': Config.ADMIN_EMAIL,
    'theme': 'default',
    'facebook_url': '#',
    'twitter_url': '#',
    'instagram_url': '#',
    'youtube_url': '#',
    'linkedin_url': '#',
}


def get_site_settings(conn):
    """All settings as a dict; empty on a data-access error."""
    try:
        rows = conn.query(Setting.setting_key, Setting.setting_value).all()
    except SQLAlchemyError as e:
        conn.rollback()
        logger.error("Error loading settings: %s", e)
        return {}
    return {key: value for key, value in rows}


def site_context(settings, now=None):
    """Settings with defaults applied for absent (or empty) keys."""
    context = dict(SITE_DEFAULTS)
    context.update({key: value for key, value in settings.items() if value})
    if not context.get('footer_text'):
        year = (now or utc_now()).year
        context['footer_text'] = f"Copyright © {year} {context['site_name']}. All rights reserved."
    return context
