from datetime import timedelta

import pytest
from sqlalchemy.exc import OperationalError

from alphanews import create_app
from alphanews.config import TestConfig
from alphanews.extensions import db
from alphanews.models import Article, Category, Role, Tag, User, utc_now


class BrokenSession:
    """Stands in for db.session when the database is unreachable."""

    def __init__(self):
        self.rolled_back = False

    def _fail(self, *args, **kwargs):
        raise OperationalError('SELECT 1', {}, Exception('database is unavailable'))

    query = get = add = commit = execute = _fail

    def rollback(self):
        self.rolled_back = True


@pytest.fixture()
def app(tmp_path):
    class Config(TestConfig):
        UPLOAD_DIR = str(tmp_path / 'uploads')

    app = create_app(Config)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def conn(app):
    return db.session


@pytest.fixture()
def broken_conn():
    return BrokenSession()


@pytest.fixture()
def make_user(conn):
    def make(username='alice', password='correct', status='active', role='Administrator', email=None):
        role_obj = Role.query.filter_by(name=role).first()
        if role_obj is None:
            role_obj = Role(name=role)
            conn.add(role_obj)
        user = User(username=username, email=email or f'{username}@example.com',
                    status=status, role=role_obj)
        user.set_password(password)
        conn.add(user)
        conn.commit()
        return user
    return make


@pytest.fixture()
def make_category(conn):
    def make(name, parent=None, age_days=0):
        category = Category(name=name, slug=name.lower().replace(' ', '-'), parent=parent,
                            created_at=utc_now() - timedelta(days=age_days))
        conn.add(category)
        conn.commit()
        return category
    return make


@pytest.fixture()
def make_article(conn):
    counter = {'n': 0}

    def make(title, status='published', featured=False, breaking_news=False, views=0,
             age_hours=0, author=None, categories=(), tags=()):
        counter['n'] += 1
        article = Article(
            title=title,
            slug=f"{title.lower().replace(' ', '-')}-{counter['n']}",
            content=f'<p>{title} body</p>',
            status=status,
            featured=featured,
            breaking_news=breaking_news,
            views=views,
            author=author,
            published_at=utc_now() - timedelta(hours=age_hours),
        )
        article.categories = list(categories)
        article.tags = [Tag(name=name, slug=f"{name.lower()}-{counter['n']}") for name in tags]
        conn.add(article)
        conn.commit()
        return article
    return make


@pytest.fixture()
def login_client(client, make_user):
    def do_login(username='alice', password='correct', **kwargs):
        make_user(username=username, password=password, **kwargs)
        return client.post('/admin/login', data={'username': username, 'password': password})
    return do_login
