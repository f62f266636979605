"""
Content Query Services

Read-only queries that assemble denormalized article rows for the public
pages. Every query fails soft: a data-access error is logged and answered
with an empty result so one broken section does not take down the page.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from alphanews.models import Article, Category, Tag, User, article_categories, article_tags
from alphanews.models.article import ARTICLE_STATUS_PUBLISHED

logger = logging.getLogger(__name__)


def _published(conn):
    return (conn.query(Article, User.username, User.profile_picture)
            .outerjoin(User, Article.author_id == User.id)
            .filter(Article.status == ARTICLE_STATUS_PUBLISHED))


def _names_by_article(conn, link_table, link_column, model, article_ids):
    names = {}
    rows = (conn.query(link_table.c.article_id, model.name)
            .join(model, link_column == model.id)
            .filter(link_table.c.article_id.in_(article_ids))
            .order_by(link_table.c.article_id, link_column)
            .all())
    for article_id, name in rows:
        names.setdefault(article_id, []).append(name)
    return {article_id: ', '.join(values) for article_id, values in names.items()}


def _article_rows(conn, results):
    """Flatten (Article, author_name, author_image) results into dicts
    with comma-joined category and tag names."""
    if not results:
        return []

    article_ids = [article.id for article, _, _ in results]
    categories = _names_by_article(conn, article_categories, article_categories.c.category_id,
                                   Category, article_ids)
    tags = _names_by_article(conn, article_tags, article_tags.c.tag_id, Tag, article_ids)

    rows = []
    for article, author_name, author_image in results:
        row = article.to_dict()
        row['author_name'] = author_name
        row['author_image'] = author_image
        row['categories'] = categories.get(article.id)
        row['tags'] = tags.get(article.id)
        rows.append(row)
    return rows


def get_featured_articles(conn, limit=5):
    try:
        results = (_published(conn)
                   .filter(Article.featured.is_(True))
                   .order_by(Article.published_at.desc(), Article.id.desc())
                   .limit(max(int(limit), 0))
                   .all())
        return _article_rows(conn, results)
    except SQLAlchemyError as e:
        conn.rollback()
        logger.error("Error fetching featured articles: %s", e)
        return []


def get_breaking_news(conn, limit=3):
    try:
        results = (_published(conn)
                   .filter(Article.breaking_news.is_(True))
                   .order_by(Article.published_at.desc(), Article.id.desc())
                   .limit(max(int(limit), 0))
                   .all())
        return _article_rows(conn, results)
    except SQLAlchemyError as e:
        conn.rollback()
        logger.error("Error fetching breaking news: %s", e)
        return []


def get_articles_by_category(conn, category_id, limit=4):
    try:
        results = (_published(conn)
                   .join(article_categories, article_categories.c.article_id == Article.id)
                   .filter(article_categories.c.category_id == category_id)
                   .order_by(Article.published_at.desc(), Article.id.desc())
                   .limit(max(int(limit), 0))
                   .all())
        return _article_rows(conn, results)
    except SQLAlchemyError as e:
        conn.rollback()
        logger.error("Error fetching articles for category %s: %s", category_id, e)
        return []


def get_trending_articles(conn, limit=6):
    """Most viewed first, ties broken by recency."""
    try:
        results = (_published(conn)
                   .order_by(Article.views.desc(), Article.published_at.desc(), Article.id.desc())
                   .limit(max(int(limit), 0))
                   .all())
        return _article_rows(conn, results)
    except SQLAlchemyError as e:
        conn.rollback()
        logger.error("Error fetching trending articles: %s", e)
        return []


def get_top_level_categories(conn, limit=None):
    """Categories without a parent, oldest first."""
    try:
        query = (conn.query(Category)
                 .filter(Category.parent_id.is_(None))
                 .order_by(Category.created_at.asc(), Category.id.asc()))
        if limit is not None:
            query = query.limit(max(int(limit), 0))
        return [category.to_dict() for category in query.all()]
    except SQLAlchemyError as e:
        conn.rollback()
        logger.error("Error fetching categories: %s", e)
        return []


def get_category_by_slug(conn, slug):
    try:
        category = conn.query(Category).filter_by(slug=slug).first()
    except SQLAlchemyError as e:
        conn.rollback()
        logger.error("Error fetching category %r: %s", slug, e)
        return None
    return category.to_dict() if category else None


def get_published_article(conn, slug):
    """A single published article row, or None."""
    try:
        results = _published(conn).filter(Article.slug == slug).limit(1).all()
        rows = _article_rows(conn, results)
    except SQLAlchemyError as e:
        conn.rollback()
        logger.error("Error fetching article %r: %s", slug, e)
        return None
    return rows[0] if rows else None


def record_article_view(conn, article_id):
    try:
        (conn.query(Article)
         .filter(Article.id == article_id)
         .update({Article.views: Article.views + 1}, synchronize_session=False))
        conn.commit()
    except SQLAlchemyError as e:
        conn.rollback()
        logger.error("Error recording view for article %s: %s", article_id, e)
