"""
Admin Routes

Back office. Every admin request passes through the session gate first:
an idle session past SESSION_LIFETIME is logged out and sent back to the
login page, an active one has its last-activity stamp refreshed.
"""

import logging

from flask import render_template, request, redirect, url_for, flash, session, current_app
from flask_login import current_user
from sqlalchemy.exc import SQLAlchemyError

from alphanews.admin import admin_bp
from alphanews.admin.decorators import permission_required
from alphanews.auth import login, logout, is_logged_in, enforce_session, get_user_role
from alphanews.extensions import db
from alphanews.models.article import ARTICLE_STATUS_PENDING, ARTICLE_STATUS_PUBLISHED, COMMENT_STATUS_PENDING
from alphanews.services import client_info, log_activity, recent_logs, handle_file_upload, UploadError
from alphanews.services import stats

logger = logging.getLogger(__name__)

RECENT_ITEMS = 5


@admin_bp.before_request
def check_session_expiry():
    lifetime = current_app.config['SESSION_LIFETIME']
    if enforce_session(db.session, session, lifetime, client=client_info(request)):
        return redirect(url_for('admin.login', expired=1))


@admin_bp.route('/login', methods=['GET', 'POST'], endpoint='login')
def login_view():
    """Back-office login by username or email."""
    if is_logged_in(session):
        return redirect(url_for('admin.dashboard'))

    error = None
    notice = None
    if request.args.get('expired') == '1':
        error = 'Your session has expired. Please log in again.'
    elif request.args.get('logout') == 'success':
        notice = 'You have been logged out successfully.'

    username = ''
    if request.method == 'POST':
        username = request.form.get('username', '').strip()
        password = request.form.get('password', '')

        if not username or not password:
            error = 'Username and password are required.'
        else:
            result = login(db.session, session, username, password, client=client_info(request))
            if result['success']:
                session.permanent = True
                return redirect(url_for('admin.dashboard'))
            error = result['message']

    return render_template('admin/login.html', error=error, notice=notice, username=username)


@admin_bp.route('/logout', endpoint='logout')
def logout_view():
    """Logout always succeeds and leaves no session behind."""
    logout(db.session, session, client=client_info(request))
    return redirect(url_for('admin.login', logout='success'))


@admin_bp.route('/')
@permission_required('access_dashboard')
def dashboard():
    """Dashboard with content counts and recent activity."""
    user = current_user
    role = get_user_role(db.session, user.role_id)

    try:
        counts = {
            'total_articles': stats.count_articles(db.session),
            'pending_articles': stats.count_articles_by_status(db.session, ARTICLE_STATUS_PENDING),
            'published_articles': stats.count_articles_by_status(db.session, ARTICLE_STATUS_PUBLISHED),
            'total_users': stats.count_users(db.session),
            'total_comments': stats.count_comments(db.session),
            'pending_comments': stats.count_comments_by_status(db.session, COMMENT_STATUS_PENDING),
        }
        recent_articles = stats.get_recent_articles(db.session, RECENT_ITEMS)
        recent_users = stats.get_recent_users(db.session, RECENT_ITEMS)
        recent_comments = stats.get_recent_comments(db.session, RECENT_ITEMS)
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error("Error fetching dashboard data: %s", e)
        counts = dict.fromkeys(('total_articles', 'pending_articles', 'published_articles',
                                'total_users', 'total_comments', 'pending_comments'), 0)
        recent_articles = recent_users = recent_comments = []

    return render_template('admin/dashboard.html',
                           user=user,
                           role=role,
                           counts=counts,
                           recent_articles=recent_articles,
                           recent_users=recent_users,
                           recent_comments=recent_comments,
                           recent_activities=recent_logs(db.session, RECENT_ITEMS))


@admin_bp.route('/media', methods=['GET', 'POST'])
@permission_required('manage_media')
def media():
    """Upload images and documents into the upload directory."""
    if request.method == 'POST':
        try:
            path = handle_file_upload(request.files.get('file'),
                                      current_app.config['UPLOAD_DIR'],
                                      current_app.config['ALLOWED_EXTENSIONS'],
                                      current_app.config['MAX_FILE_SIZE'])
        except UploadError as e:
            flash(str(e), 'danger')
        else:
            log_activity(db.session, session['user_id'], 'upload', 'media', None,
                         f'Uploaded {path}', client=client_info(request))
            flash(f'File uploaded to {path}.', 'success')
        return redirect(url_for('admin.media'))

    return render_template('admin/media.html')
