"""
Article, Category, Tag and Comment Models
"""

from alphanews.extensions import db
from alphanews.models.user import utc_now

ARTICLE_STATUS_DRAFT = 'draft'
ARTICLE_STATUS_PENDING = 'pending'
ARTICLE_STATUS_PUBLISHED = 'published'
ARTICLE_STATUS_ARCHIVED = 'archived'

COMMENT_STATUS_PENDING = 'pending'
COMMENT_STATUS_APPROVED = 'approved'
COMMENT_STATUS_SPAM = 'spam'

article_categories = db.Table(
    'article_categories',
    db.Column('article_id', db.Integer, db.ForeignKey('articles.id'), primary_key=True),
    db.Column('category_id', db.Integer, db.ForeignKey('categories.id'), primary_key=True),
)

article_tags = db.Table(
    'article_tags',
    db.Column('article_id', db.Integer, db.ForeignKey('articles.id'), primary_key=True),
    db.Column('tag_id', db.Integer, db.ForeignKey('tags.id'), primary_key=True),
)


class Category(db.Model):
    __tablename__ = 'categories'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    slug = db.Column(db.String(255), unique=True, nullable=False)
    description = db.Column(db.Text)
    parent_id = db.Column(db.Integer, db.ForeignKey('categories.id'))
    created_at = db.Column(db.DateTime, default=utc_now)

    children = db.relationship('Category', backref=db.backref('parent', remote_side=[id]), lazy=True)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'slug': self.slug,
            'description': self.description,
            'parent_id': self.parent_id,
            'created_at': self.created_at,
        }

    def __repr__(self):
        return f'<Category {self.name}>'


class Tag(db.Model):
    __tablename__ = 'tags'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    slug = db.Column(db.String(255), unique=True, nullable=False)

    def __repr__(self):
        return f'<Tag {self.name}>'


class Article(db.Model):
    """News article; only published articles reach the public site"""
    __tablename__ = 'articles'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), unique=True, nullable=False, index=True)
    content = db.Column(db.Text, nullable=False, default='')
    author_id = db.Column(db.Integer, db.ForeignKey('users.id'))
    status = db.Column(db.String(20), nullable=False, default=ARTICLE_STATUS_DRAFT, index=True)
    featured = db.Column(db.Boolean, nullable=False, default=False)
    breaking_news = db.Column(db.Boolean, nullable=False, default=False)
    views = db.Column(db.Integer, nullable=False, default=0)
    featured_image = db.Column(db.String(255))
    published_at = db.Column(db.DateTime)
    created_at = db.Column(db.DateTime, default=utc_now)
    updated_at = db.Column(db.DateTime, default=utc_now, onupdate=utc_now)

    author = db.relationship('User', backref=db.backref('articles', lazy=True))
    categories = db.relationship('Category', secondary=article_categories, lazy=True,
                                 backref=db.backref('articles', lazy=True))
    tags = db.relationship('Tag', secondary=article_tags, lazy=True,
                           backref=db.backref('articles', lazy=True))

    def to_dict(self):
        """Plain column values, the base of every denormalized article row."""
        return {
            'id': self.id,
            'title': self.title,
            'slug': self.slug,
            'content': self.content,
            'author_id': self.author_id,
            'status': self.status,
            'featured': self.featured,
            'breaking_news': self.breaking_news,
            'views': self.views,
            'featured_image': self.featured_image,
            'published_at': self.published_at,
            'created_at': self.created_at,
        }

    def __repr__(self):
        return f'<Article {self.slug}>'


class Comment(db.Model):
    __tablename__ = 'comments'

    id = db.Column(db.Integer, primary_key=True)
    article_id = db.Column(db.Integer, db.ForeignKey('articles.id'), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'))
    author_name = db.Column(db.String(100))
    author_email = db.Column(db.String(120))
    content = db.Column(db.Text, nullable=False)
    status = db.Column(db.String(20), nullable=False, default=COMMENT_STATUS_PENDING)
    created_at = db.Column(db.DateTime, default=utc_now)

    article = db.relationship('Article', backref=db.backref('comments', lazy=True))

    def __repr__(self):
        return f'<Comment {self.id} on {self.article_id}>'
