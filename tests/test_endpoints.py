import io
from datetime import timedelta

from alphanews.extensions import db
from alphanews.models import ActivityLog, Article, SessionRecord, utc_now


def test_unauthenticated_admin_redirects(client):
    r = client.get('/admin/')
    assert r.status_code in (301, 302)
    assert '/admin/login' in r.headers['Location']

    r = client.get('/admin/media')
    assert r.status_code in (301, 302)


def test_login_and_dashboard(client, login_client):
    r = login_client()
    assert r.status_code == 302
    assert r.headers['Location'].endswith('/admin/')

    r = client.get('/admin/')
    assert r.status_code == 200
    body = r.get_data(as_text=True)
    assert 'Dashboard' in body
    assert 'recent-activity' in body
    assert 'alice' in body


def test_session_cookie_is_an_opaque_server_side_token(client, login_client):
    login_client()
    cookie = client.get_cookie('alphanews_session')
    assert cookie is not None

    record = db.session.get(SessionRecord, cookie.value)
    assert record is not None
    assert 'user_id' not in cookie.value
    assert 'alice' in record.data


def test_login_failures_show_messages(client, make_user):
    make_user()
    make_user(username='bob', status='pending')

    r = client.post('/admin/login', data={'username': 'alice', 'password': 'nope'})
    assert r.status_code == 200
    assert 'Invalid password' in r.get_data(as_text=True)

    r = client.post('/admin/login', data={'username': 'carol', 'password': 'x'})
    assert 'User not found' in r.get_data(as_text=True)

    r = client.post('/admin/login', data={'username': 'bob', 'password': 'correct'})
    assert 'Your account is not active' in r.get_data(as_text=True)

    r = client.post('/admin/login', data={'username': '', 'password': ''})
    assert 'Username and password are required.' in r.get_data(as_text=True)


def test_logged_in_user_skips_login_page(client, login_client):
    login_client()
    r = client.get('/admin/login')
    assert r.status_code == 302
    assert r.headers['Location'].endswith('/admin/')


def test_dashboard_requires_permission(client, login_client):
    login_client(role='Guest')
    r = client.get('/admin/')
    assert r.status_code == 403


def test_expired_session_is_logged_out(client, login_client):
    login_client()
    with client.session_transaction() as sess:
        sess['last_activity'] -= 4000

    r = client.get('/admin/')
    assert r.status_code == 302
    assert 'expired=1' in r.headers['Location']

    r = client.get(r.headers['Location'])
    assert 'Your session has expired' in r.get_data(as_text=True)

    r = client.get('/admin/')
    assert r.status_code == 302
    assert 'expired' not in r.headers['Location']
    assert ActivityLog.query.filter_by(action='logout').count() == 1


def test_activity_refreshes_last_activity(client, login_client):
    login_client()
    with client.session_transaction() as sess:
        sess['last_activity'] -= 600
        stale = sess['last_activity']

    assert client.get('/admin/').status_code == 200
    with client.session_transaction() as sess:
        assert sess['last_activity'] > stale


def test_logout_destroys_session(client, login_client):
    login_client()
    assert SessionRecord.query.count() == 1

    r = client.get('/admin/logout')
    assert r.status_code == 302
    assert 'logout=success' in r.headers['Location']
    assert SessionRecord.query.count() == 0

    r = client.get('/admin/')
    assert r.status_code in (301, 302)

    actions = [e.action for e in ActivityLog.query.order_by(ActivityLog.id)]
    assert actions == ['login', 'logout']


def test_logout_without_session(client):
    r = client.get('/admin/logout')
    assert r.status_code == 302
    assert ActivityLog.query.count() == 0


def test_home_page(client, make_article, make_category):
    sports = make_category('Sports')
    make_article('Cup Final Tonight', featured=True, categories=[sports])
    make_article('Storm Warning', breaking_news=True)
    make_article('Secret Draft', featured=True, status='draft')

    r = client.get('/')
    assert r.status_code == 200
    body = r.get_data(as_text=True)
    assert 'Alpha News' in body
    assert 'Cup Final Tonight' in body
    assert 'Storm Warning' in body
    assert 'Sports' in body
    assert 'Secret Draft' not in body


def test_category_page(client, make_article, make_category):
    sports = make_category('Sports')
    make_article('Cup Final Tonight', categories=[sports])

    r = client.get('/category/sports')
    assert r.status_code == 200
    assert 'Cup Final Tonight' in r.get_data(as_text=True)

    assert client.get('/category/nothing-here').status_code == 404


def test_article_page_counts_views(client, make_article):
    article = make_article('Long Read', views=1)
    draft = make_article('Unfinished', status='draft')

    r = client.get(f'/article/{article.slug}')
    assert r.status_code == 200
    assert 'Long Read body' in r.get_data(as_text=True)

    db.session.expire_all()
    assert db.session.get(Article, article.id).views == 2

    assert client.get(f'/article/{draft.slug}').status_code == 404


def test_media_upload(client, login_client, app, tmp_path):
    login_client()

    r = client.post('/admin/media',
                    data={'file': (io.BytesIO(b'GIF89a'), 'banner.gif')},
                    content_type='multipart/form-data')
    assert r.status_code == 302
    assert len(list((tmp_path / 'uploads').iterdir())) == 1
    assert ActivityLog.query.filter_by(action='upload').count() == 1

    r = client.post('/admin/media',
                    data={'file': (io.BytesIO(b'<?php'), 'shell.php')},
                    content_type='multipart/form-data',
                    follow_redirects=True)
    assert 'Invalid file type' in r.get_data(as_text=True)
    assert ActivityLog.query.filter_by(action='upload').count() == 1


def test_media_requires_permission(client, login_client):
    login_client(role='Guest')
    assert client.get('/admin/media').status_code == 403


def test_nav_shows_signed_in_user(client, login_client):
    login_client()
    body = client.get('/admin/').get_data(as_text=True)
    assert 'navbar-text">alice</span>' in body
    assert 'Welcome, alice (Administrator)' in body


def test_stored_session_outlives_inactivity_limit(client, login_client, app):
    login_client()
    record = db.session.get(SessionRecord, client.get_cookie('alphanews_session').value)
    assert record.expiry - utc_now() > timedelta(seconds=app.config['SESSION_LIFETIME'])


def test_idle_session_is_logged_out_after_real_wait(client, login_client):
    login_client()
    with client.session_transaction() as sess:
        sess['last_activity'] -= 4000
    sid = client.get_cookie('alphanews_session').value
    record = db.session.get(SessionRecord, sid)
    record.expiry -= timedelta(seconds=4000)
    db.session.commit()

    r = client.get('/admin/')
    assert r.status_code == 302
    assert 'expired=1' in r.headers['Location']
    assert ActivityLog.query.filter_by(action='logout').count() == 1
    assert SessionRecord.query.filter_by(sid=sid).count() == 0


def test_session_past_storage_lifetime_is_discarded(client, login_client):
    login_client()
    sid = client.get_cookie('alphanews_session').value
    db.session.get(SessionRecord, sid).expiry = utc_now() - timedelta(seconds=1)
    db.session.commit()

    r = client.get('/admin/')
    assert r.status_code == 302
    assert 'expired' not in r.headers['Location']
    assert SessionRecord.query.filter_by(sid=sid).count() == 0
