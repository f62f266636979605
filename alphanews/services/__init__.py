"""
Services Package

Exports all services for easy importing.
"""

from alphanews.services.activity import ClientInfo, client_info, log_activity, recent_logs
from alphanews.services.content import (
    get_featured_articles, get_breaking_news, get_articles_by_category,
    get_trending_articles, get_top_level_categories, get_category_by_slug,
    get_published_article, record_article_view,
)
from alphanews.services.settings import get_site_settings, site_context
from alphanews.services.text import get_excerpt, time_ago, format_date, generate_slug, unique_slug
from alphanews.services.uploads import UploadError, handle_file_upload

__all__ = [
    'ClientInfo',
    'client_info',
    'log_activity',
    'recent_logs',
    'get_featured_articles',
    'get_breaking_news',
    'get_articles_by_category',
    'get_trending_articles',
    'get_top_level_categories',
    'get_category_by_slug',
    'get_published_article',
    'record_article_view',
    'get_site_settings',
    'site_context',
    'get_excerpt',
    'time_ago',
    'format_date',
    'generate_slug',
    'unique_slug',
    'UploadError',
    'handle_file_upload',
]
