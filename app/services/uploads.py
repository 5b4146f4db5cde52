"""
Upload Services

Stores images and learning materials in the backend's object storage and
returns their public URLs.
"""

import logging
import os
import random
import string
import time

from app.backend import get_backend

logger = logging.getLogger(__name__)

GALLERY_BUCKET = 'gallery-images'
MATERIALS_BUCKET = 'learning-materials'

IMAGE_TYPES = ('image/jpeg', 'image/png', 'image/webp', 'image/gif')
MATERIAL_TYPES = (
    'application/pdf',
    'application/msword',
    'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
    'application/vnd.ms-powerpoint',
    'application/vnd.openxmlformats-officedocument.presentationml.presentation',
    'application/vnd.ms-excel',
    'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
    'application/zip',
    'text/plain',
)

FILE_TYPES = {
    'pdf': 'PDF',
    'doc': 'DOC', 'docx': 'DOC',
    'ppt': 'PPT', 'pptx': 'PPT',
    'xls': 'XLS', 'xlsx': 'XLS',
    'zip': 'ZIP',
    'txt': 'TXT',
    'jpg': 'JPEG', 'jpeg': 'JPEG',
    'png': 'PNG',
    'gif': 'GIF',
    'webp': 'WEBP',
}

_ALPHABET = string.digits + string.ascii_lowercase


def _extension(filename):
    return filename.rsplit('.', 1)[-1].lower() if '.' in filename else ''


def unique_name(filename):
    """``<epoch ms>_<random>.<ext>``, keeping the original extension."""
    token = ''.join(random.choice(_ALPHABET) for _ in range(11))
    return f'{int(time.time() * 1000)}_{token}.{_extension(filename)}'


def get_file_type(filename):
    return FILE_TYPES.get(_extension(filename or ''), 'Other')


def validate_file_size(size_bytes, max_size_mb):
    return size_bytes / 1024 / 1024 <= max_size_mb


def validate_image_type(mimetype):
    return mimetype in IMAGE_TYPES


def validate_material_type(mimetype):
    return mimetype in MATERIAL_TYPES


def format_size(size_bytes):
    return f'{size_bytes / 1024 / 1024:.2f} MB'


def _read(file):
    data = file.read()
    return data, len(data)


def upload_gallery_image(file):
    """Upload an image and return its public URL."""
    data, _ = _read(file)
    path = f'gallery/{unique_name(file.filename)}'
    bucket = get_backend().storage.from_(GALLERY_BUCKET)
    bucket.upload(path, data, content_type=file.mimetype, cache_control='3600', upsert=False)
    logger.info('Uploaded gallery image %s (%d bytes)', path, len(data))
    return bucket.get_public_url(path)


def upload_learning_material(file):
    """Upload a material; returns ``(public URL, human-readable size)``."""
    data, size = _read(file)
    path = f'materials/{unique_name(file.filename)}'
    bucket = get_backend().storage.from_(MATERIALS_BUCKET)
    bucket.upload(path, data, content_type=file.mimetype, cache_control='3600', upsert=False)
    logger.info('Uploaded learning material %s (%d bytes)', path, size)
    return bucket.get_public_url(path), format_size(size)


def delete_file(bucket_name, file_path):
    get_backend().storage.from_(bucket_name).remove([file_path])
    return True


def storage_path_from_url(url, bucket_name):
    """Recover the object path from a public URL in ``bucket_name``."""
    marker = f'/{bucket_name}/'
    if not url or marker not in url:
        return None
    return url.split(marker, 1)[1].split('?', 1)[0]


def file_size(file):
    """Size of an uploaded werkzeug FileStorage without consuming it."""
    stream = file.stream
    pos = stream.tell()
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(pos)
    return size
