"""
Text Helpers

Excerpts, relative dates and slugs used by the templates and the back office.
"""

import calendar
import logging
import re
import secrets
import string
import unicodedata
import uuid
from datetime import datetime

from markupsafe import Markup

from alphanews.models import utc_now

logger = logging.getLogger(__name__)

DEFAULT_ARTICLE_IMAGE = 'images/default-article.jpg'
DEFAULT_AVATAR = 'images/default-avatar.jpg'
SLUG_MAX_LENGTH = 250

_TIME_UNITS = (
    ('years', 'year'),
    ('months', 'month'),
    ('weeks', 'week'),
    ('days', 'day'),
    ('hours', 'hour'),
    ('minutes', 'minute'),
    ('seconds', 'second'),
)


def get_excerpt(content, length=150):
    """Plain-text excerpt, truncated to ``length`` characters with '...'"""
    excerpt = Markup(content or '').striptags()
    if len(excerpt) > length:
        excerpt = excerpt[:length] + '...'
    return excerpt


def _add_months(value, months):
    year, month = divmod(value.month - 1 + months, 12)
    year += value.year
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def _calendar_diff(earlier, later):
    months = (later.year - earlier.year) * 12 + later.month - earlier.month
    if months and _add_months(earlier, months) > later:
        months -= 1
    remainder = later - _add_months(earlier, months)

    years, months = divmod(months, 12)
    weeks, days = divmod(remainder.days, 7)
    hours, seconds = divmod(remainder.seconds, 3600)
    minutes, seconds = divmod(seconds, 60)
    return {
        'years': years, 'months': months, 'weeks': weeks, 'days': days,
        'hours': hours, 'minutes': minutes, 'seconds': seconds,
    }


def time_ago(value, now=None, full=False):
    """Relative time such as '3 hours ago'.

    Only the largest non-zero unit is shown unless ``full`` is set, in which
    case every non-zero unit is listed ('1 week, 2 days ago').
    """
    try:
        if isinstance(value, str):
            value = datetime.fromisoformat(value)
        if not isinstance(value, datetime):
            raise TypeError(f"unsupported date value {value!r}")
        now = now or utc_now()
        earlier, later = sorted((value, now))
        diff = _calendar_diff(earlier, later)
    except (TypeError, ValueError) as e:
        logger.error("Error in time_ago: %s", e)
        return 'invalid date'

    parts = []
    for key, label in _TIME_UNITS:
        amount = diff[key]
        if amount:
            parts.append(f"{amount} {label}{'s' if amount > 1 else ''}")

    if not parts:
        return 'just now'
    if not full:
        parts = parts[:1]
    return ', '.join(parts) + ' ago'


def format_date(value):
    """'April 5, 2025' style date."""
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    return f"{value:%B} {value.day}, {value.year}"


def is_ascii(text):
    return text.isascii()


def generate_random_slug(length=10):
    alphabet = string.digits + string.ascii_lowercase
    return 'article-' + ''.join(secrets.choice(alphabet) for _ in range(length))


def generate_ascii_slug(text, divider='-'):
    """Lowercase slug of letters and digits joined by ``divider``."""
    d = re.escape(divider)
    text = re.sub(rf'[^\w\s{d}]+', '', text)
    text = text.replace('_', ' ')
    text = re.sub(rf'[\s{d}]+', divider, text)
    text = text.strip(divider).lower()

    if not text:
        return 'n-a-' + uuid.uuid4().hex[:13]
    return text


def transliterate(text):
    """Strip accents and drop characters with no ASCII equivalent."""
    normalized = unicodedata.normalize('NFKD', text)
    return normalized.encode('ascii', 'ignore').decode('ascii')


def generate_slug(title):
    """Slug for an article title.

    ASCII titles are slugified directly, other titles are transliterated
    first; titles that leave nothing after transliteration get a random slug.
    """
    title = (title or '').strip()
    if not title:
        raise ValueError('A title is required to generate a slug.')

    if is_ascii(title):
        return generate_ascii_slug(title)

    ascii_title = transliterate(title)
    if not re.search(r'[A-Za-z0-9]', ascii_title):
        return generate_random_slug()
    return generate_ascii_slug(ascii_title)


def unique_slug(conn, model, slug, max_attempts=100):
    """Append -2, -3, ... until ``slug`` is unused in ``model.slug``."""
    candidate = slug[:SLUG_MAX_LENGTH]
    for counter in range(2, max_attempts + 2):
        if not conn.query(model).filter(model.slug == candidate).count():
            return candidate
        suffix = f'-{counter}'
        candidate = slug[:SLUG_MAX_LENGTH - len(suffix)] + suffix
    raise ValueError('Could not generate a unique slug. Please provide one manually.')


def article_image(article):
    """Featured image path of an article row, or the default artwork."""
    return article.get('featured_image') or DEFAULT_ARTICLE_IMAGE


def author_image(article):
    return article.get('author_image') or DEFAULT_AVATAR
