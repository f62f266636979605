"""
Models Package

Exports all models for easy importing.
"""

from alphanews.models.user import User, Role, Permission, role_permissions, utc_now
from alphanews.models.article import (
    Article, Category, Tag, Comment, article_categories, article_tags,
)
from alphanews.models.activity import ActivityLog
from alphanews.models.setting import Setting, SessionRecord

__all__ = [
    'User', 'Role', 'Permission', 'role_permissions', 'utc_now',
    'Article', 'Category', 'Tag', 'Comment', 'article_categories', 'article_tags',
    'ActivityLog', 'Setting', 'SessionRecord',
]
