"""
Dashboard Statistics

Counts and recent-item lists for the admin dashboard. These propagate
data-access errors; the dashboard view handles them in one place.
"""

from alphanews.models import Article, Category, Comment, Role, Tag, User


def count_articles(conn):
    return conn.query(Article).count()


def count_articles_by_status(conn, status):
    return conn.query(Article).filter_by(status=status).count()


def count_users(conn):
    return conn.query(User).count()


def count_comments(conn):
    return conn.query(Comment).count()


def count_comments_by_status(conn, status):
    return conn.query(Comment).filter_by(status=status).count()


def get_recent_articles(conn, limit=5):
    rows = (conn.query(Article.id, Article.title, Article.slug, Article.status,
                       Article.created_at, User.username.label('author_name'))
            .outerjoin(User, Article.author_id == User.id)
            .order_by(Article.created_at.desc(), Article.id.desc())
            .limit(max(int(limit), 0))
            .all())
    return [row._asdict() for row in rows]


def get_recent_users(conn, limit=5):
    rows = (conn.query(User.id, User.username, User.email, User.status,
                       User.registration_date, Role.name.label('role_name'))
            .outerjoin(Role, User.role_id == Role.id)
            .order_by(User.registration_date.desc(), User.id.desc())
            .limit(max(int(limit), 0))
            .all())
    return [row._asdict() for row in rows]


def get_recent_comments(conn, limit=5):
    rows = (conn.query(Comment.id, Comment.content, Comment.status, Comment.created_at,
                       Comment.author_name, User.username, Article.title.label('article_title'))
            .outerjoin(User, Comment.user_id == User.id)
            .outerjoin(Article, Comment.article_id == Article.id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
            .limit(max(int(limit), 0))
            .all())
    return [row._asdict() for row in rows]


def get_categories(conn):
    return conn.query(Category).order_by(Category.name).all()


def get_tags(conn):
    return conn.query(Tag).order_by(Tag.name).all()
