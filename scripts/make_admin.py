"""Create an Administrator account, or promote an existing one.

Usage: python scripts/make_admin.py <username> <email> <password>
"""
import sys
import os

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from alphanews import create_app
from alphanews.extensions import db
from alphanews.models import User, Role
from alphanews.models.user import USER_STATUS_ACTIVE

if len(sys.argv) != 4:
    sys.exit(__doc__)

username, email, password = sys.argv[1:]

app = create_app()

with app.app_context():
    role = Role.query.filter_by(name='Administrator').first()
    user = User.query.filter_by(username=username).first()

    if not user:
        user = User(username=username, email=email, role=role, status=USER_STATUS_ACTIVE)
        user.set_password(password)
        db.session.add(user)
        print("New administrator created")
    else:
        user.role = role
        user.status = USER_STATUS_ACTIVE
        print("Existing user promoted to administrator")

    db.session.commit()
