from alphanews.auth import has_permission, login
from alphanews.auth.permissions import DEFAULT_PERMISSIONS
from alphanews.models import Permission, Role


def test_anonymous_has_no_permissions(conn):
    for name in DEFAULT_PERMISSIONS:
        assert has_permission(conn, {}, name) is False


def test_administrator_has_every_default_permission(conn, make_user):
    make_user(role='Administrator')
    state = {}
    login(conn, state, 'alice', 'correct')
    for name in DEFAULT_PERMISSIONS:
        assert has_permission(conn, state, name)


def test_missing_permission_is_denied(conn, make_user):
    make_user(role='Author')
    state = {}
    login(conn, state, 'alice', 'correct')
    assert has_permission(conn, state, 'edit_articles') is False
    assert has_permission(conn, state, 'manage_users') is False
    assert has_permission(conn, state, 'create_article') is True


def test_permission_follows_role_permissions_rows(conn, make_user):
    make_user(role='Reporter')
    state = {}
    login(conn, state, 'alice', 'correct')
    assert has_permission(conn, state, 'edit_articles') is False

    role = Role.query.filter_by(name='Reporter').one()
    permission = Permission(name='edit_articles')
    role.permissions.append(permission)
    conn.commit()
    assert has_permission(conn, state, 'edit_articles') is True

    role.permissions.remove(permission)
    conn.commit()
    assert has_permission(conn, state, 'edit_articles') is False


def test_permission_check_denies_on_database_error(broken_conn):
    assert has_permission(broken_conn, {'user_id': 1}, 'access_dashboard') is False
    assert broken_conn.rolled_back
