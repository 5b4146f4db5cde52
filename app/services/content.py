"""
Content Services

Typed reads and writes for every content table, plus the fetch-with-fallback
loader the public pages use.

Public pages call load_content(), which never raises: a failed read and an
empty read both fall back to the default payload. Admin editors call the
CRUD helpers, which raise BackendError so the raw backend message can be
shown to the editor.
"""

import logging
from collections import namedtuple
from datetime import datetime, timezone

from flask import g

from app.backend import get_backend
from app.errors import BackendError
from app.services.fallbacks import get_fallback

logger = logging.getLogger(__name__)

SINGLETON_ID = 'main'

ContentKind = namedtuple('ContentKind', 'table single orders active_only')

CONTENT_KINDS = {
    'hero': ContentKind('hero_section', True, (), False),
    'about': ContentKind('about_section', True, (), False),
    'vision': ContentKind('vision_section', True, (), False),
    'announcements': ContentKind('announcements', False, (('created_at', True, None),), False),
    'gallery': ContentKind('school_life_gallery', False, (('created_at', True, None),), False),
    'materials': ContentKind('learning_materials', False, (('created_at', True, None),), False),
    'leadership': ContentKind('leadership_team', False, (('display_order', False, False),), False),
    'facilities': ContentKind('school_facilities', False, (('display_order', False, None),), True),
    'footer': ContentKind('footer_sections', False, (('display_order', False, None),), True),
}

HERO_FIELDS = ('description', 'image_url', 'image_description', 'primary_button_text',
               'primary_button_link', 'secondary_button_text', 'secondary_button_link')
ABOUT_FIELDS = ('subtitle', 'main_content', 'principal_message', 'principal_name', 'principal_title',
                'principal_image_url', 'school_founded_year', 'school_description', 'features')
VISION_FIELDS = ('subtitle', 'main_content', 'principal_message', 'principal_name',
                 'principal_title', 'features')


def _now():
    return datetime.now(timezone.utc).isoformat()


def _read(backend, kind):
    query = backend.table(kind.table).select('*')
    if kind.active_only:
        query = query.eq('is_active', True)
    for column, desc, nulls_first in kind.orders:
        query = query.order(column, desc=desc, nulls_first=nulls_first)
    if kind.single:
        rows = query.limit(1).execute().data or []
        return rows[0] if rows else None
    return query.execute().data or []


# -----------------------------------------------------------------------------
# Public pages: fetch with fallback
# -----------------------------------------------------------------------------

def load_content(kind):
    """Live content for ``kind``, or its fallback payload.

    One read per kind per request; the result is kept on ``g`` so a page
    that shows the same section twice does not read twice. Nothing is
    kept between requests.
    """
    cache = g.setdefault('_content', {})
    if kind in cache:
        return cache[kind]

    data = None
    try:
        data = _read(get_backend(), CONTENT_KINDS[kind])
    except BackendError as e:
        logger.warning('Could not load %s content: %s', kind, e)
    except Exception:
        logger.exception('Unexpected error loading %s content', kind)

    if not data:
        logger.debug('Using fallback %s content', kind)
        data = get_fallback(kind)

    cache[kind] = data
    return data


# -----------------------------------------------------------------------------
# Generic table helpers
# -----------------------------------------------------------------------------

def _list(table, *orders, active_only=False):
    query = get_backend().table(table).select('*')
    if active_only:
        query = query.eq('is_active', True)
    for column, desc, nulls_first in orders:
        query = query.order(column, desc=desc, nulls_first=nulls_first)
    return query.execute().data or []


def _get(table, row_id):
    try:
        return get_backend().table(table).select('*').eq('id', row_id).single().execute().data
    except BackendError as e:
        if e.code == 'PGRST116':
            return None
        raise


def _create(table, row):
    data = get_backend().table(table).insert(row).execute().data
    return data[0] if data else None


def _update(table, row_id, values):
    data = get_backend().table(table).update(values).eq('id', row_id).execute().data
    return data[0] if data else None


def _delete(table, row_id):
    get_backend().table(table).delete().eq('id', row_id).execute()
    return True


def _get_singleton(table):
    rows = get_backend().table(table).select('*').limit(1).execute().data or []
    return rows[0] if rows else None


def _upsert_singleton(table, values, fields, **required):
    now = _now()
    row = {'id': SINGLETON_ID}
    row.update(required)
    for field in fields:
        value = values.get(field)
        row[field] = value if value not in ('', None) else None
    # Left out unless given, so the merge keeps the stored creation time
    if values.get('created_at'):
        row['created_at'] = values['created_at']
    row['updated_at'] = now
    get_backend().table(table).upsert(row).execute()
    return row


# -----------------------------------------------------------------------------
# Hero / About / Vision
# -----------------------------------------------------------------------------

def get_hero_section():
    return _get_singleton('hero_section')


def update_hero_section(values):
    return _upsert_singleton(
        'hero_section', values, HERO_FIELDS,
        title=values.get('title') or 'Welcome to St. G. D. Convent School',
        subtitle=values.get('subtitle') or 'Empowering students through innovative education',
    )


def get_about_section():
    return _get_singleton('about_section')


def update_about_section(values):
    return _upsert_singleton('about_section', values, ABOUT_FIELDS,
                             title=values.get('title') or 'About Our School')


def get_vision_section():
    return _get_singleton('vision_section')


def update_vision_section(values):
    return _upsert_singleton('vision_section', values, VISION_FIELDS,
                             title=values.get('title') or 'Our Vision & Mission')


# -----------------------------------------------------------------------------
# Announcements
# -----------------------------------------------------------------------------

def list_announcements():
    return _list('announcements', ('created_at', True, None))


def create_announcement(values):
    now = _now()
    return _create('announcements', dict(values, created_at=now, updated_at=now))


def update_announcement(row_id, values):
    return _update('announcements', row_id, dict(values, updated_at=_now()))


def delete_announcement(row_id):
    return _delete('announcements', row_id)


# -----------------------------------------------------------------------------
# Gallery
# -----------------------------------------------------------------------------

def list_gallery_items():
    return _list('school_life_gallery', ('created_at', True, None))


def create_gallery_item(values):
    return _create('school_life_gallery', dict(values, created_at=_now()))


def update_gallery_item(row_id, values):
    return _update('school_life_gallery', row_id, values)


def delete_gallery_item(row_id):
    return _delete('school_life_gallery', row_id)


# -----------------------------------------------------------------------------
# Learning materials
# -----------------------------------------------------------------------------

def list_learning_materials():
    return _list('learning_materials', ('created_at', True, None))


def create_learning_material(values):
    return _create('learning_materials', dict(values, downloads=0, created_at=_now()))


def update_learning_material(row_id, values):
    return _update('learning_materials', row_id, values)


def delete_learning_material(row_id):
    return _delete('learning_materials', row_id)


# -----------------------------------------------------------------------------
# Leadership team
# -----------------------------------------------------------------------------

def list_leadership_team():
    return _list('leadership_team', ('display_order', False, False))


def create_leadership_member(values):
    return _create('leadership_team', dict(values, created_at=_now()))


def update_leadership_member(row_id, values):
    return _update('leadership_team', row_id, values)


def delete_leadership_member(row_id):
    return _delete('leadership_team', row_id)


# -----------------------------------------------------------------------------
# Facilities
# -----------------------------------------------------------------------------

def list_facilities(active_only=False):
    return _list('school_facilities', ('display_order', False, None), active_only=active_only)


def create_facility(values, display_order):
    now = _now()
    return _create('school_facilities', dict(values, display_order=display_order, is_active=True,
                                             created_at=now, updated_at=now))


def update_facility(row_id, values):
    return _update('school_facilities', row_id, dict(values, updated_at=_now()))


def delete_facility(row_id):
    return _delete('school_facilities', row_id)


def toggle_facility(row_id):
    current = _get('school_facilities', row_id)
    if current is None:
        return None
    return update_facility(row_id, {'is_active': not current.get('is_active')})


# -----------------------------------------------------------------------------
# Footer sections
# -----------------------------------------------------------------------------

FOOTER_SECTION_TYPES = ('links', 'contact', 'social', 'custom')


def list_footer_sections(active_only=False):
    return _list('footer_sections', ('display_order', False, None), active_only=active_only)


def get_footer_section(row_id):
    return _get('footer_sections', row_id)


def create_footer_section(values):
    now = _now()
    return _create('footer_sections', dict(values, created_at=now, updated_at=now))


def update_footer_section(row_id, values):
    return _update('footer_sections', row_id, dict(values, updated_at=_now()))


def delete_footer_section(row_id):
    return _delete('footer_sections', row_id)


def toggle_footer_section(row_id):
    current = get_footer_section(row_id)
    if current is None:
        return None
    return update_footer_section(row_id, {'is_active': not current.get('is_active')})


def reorder_footer_sections(section_ids):
    """Give each section its position (1-based) in ``section_ids``."""
    for index, section_id in enumerate(section_ids):
        update_footer_section(section_id, {'display_order': index + 1})
    return True


# -----------------------------------------------------------------------------
# Dashboard statistics
# -----------------------------------------------------------------------------

def _count(table):
    return get_backend().table(table).select('id', count='exact', head=True).execute().count or 0


def get_dashboard_statistics():
    try:
        return {
            'total_users': 1,
            'total_announcements': _count('announcements'),
            'total_gallery_items': _count('school_life_gallery'),
            'total_learning_materials': _count('learning_materials'),
            'total_footer_sections': _count('footer_sections'),
        }
    except BackendError as e:
        logger.warning('Could not load dashboard statistics: %s', e)
        return {
            'total_users': 0,
            'total_announcements': 0,
            'total_gallery_items': 0,
            'total_learning_materials': 0,
            'total_footer_sections': 0,
        }
