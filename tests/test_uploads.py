import io
import os
import re

import pytest
from werkzeug.datastructures import FileStorage

from alphanews.services import UploadError, handle_file_upload

ALLOWED = ('jpg', 'jpeg', 'png', 'gif', 'pdf')


def upload(name, data=b'fake image bytes'):
    return FileStorage(stream=io.BytesIO(data), filename=name)


def test_upload_stores_file_under_unique_name(tmp_path):
    upload_dir = tmp_path / 'uploads'

    path = handle_file_upload(upload('My Photo.JPG'), str(upload_dir), ALLOWED, 5000000)

    assert re.fullmatch(r'uploads/My_Photo_[0-9a-f]{13}\.jpg', path)
    stored = tmp_path / path
    assert stored.read_bytes() == b'fake image bytes'


def test_upload_prefix_and_no_collisions(tmp_path):
    upload_dir = str(tmp_path / 'uploads')
    first = handle_file_upload(upload('cover.png'), upload_dir, ALLOWED, 5000000, filename_prefix='article_')
    second = handle_file_upload(upload('cover.png'), upload_dir, ALLOWED, 5000000, filename_prefix='article_')

    assert os.path.basename(first).startswith('article_cover_')
    assert first != second
    assert len(os.listdir(upload_dir)) == 2


def test_upload_rejects_disallowed_extension(tmp_path):
    with pytest.raises(UploadError, match='Invalid file type'):
        handle_file_upload(upload('script.php'), str(tmp_path), ALLOWED, 5000000)


def test_upload_rejects_missing_extension(tmp_path):
    with pytest.raises(UploadError):
        handle_file_upload(upload('README'), str(tmp_path), ALLOWED, 5000000)


def test_upload_rejects_oversized_file(tmp_path):
    with pytest.raises(UploadError, match='exceeds the limit'):
        handle_file_upload(upload('big.jpg', b'x' * 2048), str(tmp_path), ALLOWED, 1024)
    assert os.listdir(tmp_path) == []


def test_upload_requires_a_file(tmp_path):
    with pytest.raises(UploadError, match='No file'):
        handle_file_upload(None, str(tmp_path), ALLOWED, 5000000)
    with pytest.raises(UploadError, match='No file'):
        handle_file_upload(upload(''), str(tmp_path), ALLOWED, 5000000)


def test_upload_reports_filesystem_failure(tmp_path):
    blocker = tmp_path / 'uploads'
    blocker.write_text('not a directory')
    with pytest.raises(UploadError, match='Failed to store'):
        handle_file_upload(upload('photo.gif'), str(blocker), ALLOWED, 5000000)
