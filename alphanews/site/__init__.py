"""
Site Blueprint

Public, anonymous pages of the news website.
"""

from flask import Blueprint

site_bp = Blueprint('site', __name__)

from alphanews.site import routes  # noqa: E402, F401
