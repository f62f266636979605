"""
Upload Services

Validates an uploaded file against size and extension limits and stores it
under a collision-resistant name.
"""

import logging
import os
import uuid

from werkzeug.utils import secure_filename

logger = logging.getLogger(__name__)


class UploadError(Exception):
    """The upload was rejected or could not be stored."""


def _file_size(file):
    stream = file.stream
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


def handle_file_upload(file, upload_dir, allowed_extensions=(), max_file_size=2097152, filename_prefix=''):
    """Store a Werkzeug ``FileStorage`` in ``upload_dir``.

    Returns the stored path relative to ``upload_dir``'s parent, e.g.
    ``uploads/photo_1a2b3c4d5e6f7.jpg``. Raises UploadError when no file was
    sent, it is too large, its extension is not allowed, or it cannot be
    written.
    """
    if file is None or not file.filename:
        raise UploadError('No file was uploaded.')

    size = _file_size(file)
    if size > max_file_size:
        raise UploadError(f'File size exceeds the limit of {max_file_size / 1024 / 1024:g} MB.')

    stem, ext = os.path.splitext(file.filename)
    extension = ext.lstrip('.').lower()
    allowed = [e.lower() for e in allowed_extensions]
    if not extension or (allowed and extension not in allowed):
        raise UploadError('Invalid file type. Allowed types: ' + ', '.join(allowed))

    safe_stem = secure_filename(stem) or 'file'
    unique_name = f'{filename_prefix}{safe_stem}_{uuid.uuid4().hex[:13]}.{extension}'

    try:
        os.makedirs(upload_dir, exist_ok=True)
        file.save(os.path.join(upload_dir, unique_name))
    except OSError as e:
        logger.error("Failed to store upload %s in %s: %s", unique_name, upload_dir, e)
        raise UploadError('Failed to store the uploaded file. Check directory permissions.') from e

    return f'{os.path.basename(os.path.normpath(upload_dir))}/{unique_name}'
