"""
Site Services

View-model assembly for the public pages.
"""

from alphanews.services.content import (
    get_featured_articles, get_breaking_news, get_articles_by_category,
    get_trending_articles, get_top_level_categories,
)
from alphanews.services.settings import get_site_settings, site_context

FEATURED_LIMIT = 5
BREAKING_LIMIT = 3
CATEGORY_SECTION_LIMIT = 4
TRENDING_LIMIT = 6


def get_home_page_data(conn):
    """Everything the home page renders. Sections degrade independently."""
    categories = get_top_level_categories(conn)
    category_sections = []
    for category in categories:
        articles = get_articles_by_category(conn, category['id'], CATEGORY_SECTION_LIMIT)
        if articles:
            category_sections.append({'category': category, 'articles': articles})

    return {
        'site': site_context(get_site_settings(conn)),
        'featured_articles': get_featured_articles(conn, FEATURED_LIMIT),
        'breaking_news': get_breaking_news(conn, BREAKING_LIMIT),
        'categories': categories,
        'category_sections': category_sections,
        'trending_articles': get_trending_articles(conn, TRENDING_LIMIT),
    }
