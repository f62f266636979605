"""
Site Routes

Public front end: home, category and article pages.
"""

from flask import render_template, abort, current_app
from alphanews.site import site_bp
from alphanews.site.services import get_home_page_data
from alphanews.extensions import db
from alphanews.services import (
    get_articles_by_category, get_category_by_slug, get_published_article,
    record_article_view, get_site_settings, site_context, get_top_level_categories,
)


@site_bp.route('/')
def index():
    """Front page with featured, breaking, per-category and trending news"""
    data = get_home_page_data(db.session)
    return render_template('site/index.html', **data)


@site_bp.route('/category/<slug>')
def category(slug):
    """Latest published articles in one category"""
    category = get_category_by_slug(db.session, slug)
    if category is None:
        abort(404)

    articles = get_articles_by_category(db.session, category['id'],
                                        current_app.config['ITEMS_PER_PAGE'])
    return render_template('site/category.html',
                           site=site_context(get_site_settings(db.session)),
                           categories=get_top_level_categories(db.session),
                           category=category,
                           articles=articles)


@site_bp.route('/article/<slug>')
def article(slug):
    """Single published article; each visit counts as a view"""
    article = get_published_article(db.session, slug)
    if article is None:
        abort(404)

    record_article_view(db.session, article['id'])
    return render_template('site/article.html',
                           site=site_context(get_site_settings(db.session)),
                           categories=get_top_level_categories(db.session),
                           article=article)
