import io
import os

from app.errors import BackendError
from app.models import Announcement, FooterSection, GalleryItem, LearningMaterial, LeadershipMember
from app.services import content


def test_admin_index_redirects(client, admin_client):
    assert client.get('/admin/').headers['Location'].endswith('/admin/dashboard')


def test_dashboard_shows_statistics(admin_client):
    admin_client.post('/admin/announcements', data={'title': 'Exams', 'content': 'Soon'})
    page = admin_client.get('/admin/dashboard').get_data(as_text=True)
    assert 'id="total_announcements">1<' in page
    assert 'id="total_users">1<' in page
    assert 'admin role not recorded' not in page


def test_editor_pages_render(admin_client):
    for path in ('/admin/hero', '/admin/about', '/admin/vision', '/admin/announcements',
                 '/admin/gallery', '/admin/materials', '/admin/leadership',
                 '/admin/facilities', '/admin/footer', '/admin/settings'):
        assert admin_client.get(path).status_code == 200, path


def test_editors_require_verification(signed_in_client):
    r = signed_in_client.get('/admin/hero')
    assert r.status_code == 302
    assert r.headers['Location'].endswith('/admin/login')


def test_hero_update_reaches_homepage(admin_client):
    r = admin_client.post('/admin/hero', data={'title': 'Welcome Back', 'subtitle': 'New term'},
                          follow_redirects=True)
    assert 'Hero section updated.' in r.get_data(as_text=True)
    assert 'Welcome Back' in admin_client.get('/').get_data(as_text=True)


def test_about_rejects_invalid_json(admin_client):
    r = admin_client.post('/admin/about', data={'title': 'About', 'features': '[{broken'})
    page = r.get_data(as_text=True)
    assert 'Could not save about section: Features must be valid JSON.' in page
    assert '[{broken' in page


def test_about_saves_json_fields(app, admin_client):
    admin_client.post('/admin/about', data={
        'title': 'About Us',
        'main_content': '["First paragraph", "Second paragraph"]',
        'features': '[{"title": "Sports", "description": "Lots"}]',
        'school_founded_year': '1990',
    })
    page = admin_client.get('/about').get_data(as_text=True)
    assert 'Second paragraph' in page
    assert 'Sports' in page


def test_create_announcement(app, admin_client):
    r = admin_client.post('/admin/announcements', data={
        'title': 'Sports Day', 'content': 'On Friday', 'category': 'event',
    }, follow_redirects=True)
    assert 'Announcement created.' in r.get_data(as_text=True)
    with app.app_context():
        assert Announcement.query.one().category == 'event'
    assert 'Sports Day' in admin_client.get('/').get_data(as_text=True)


def test_failed_announcement_keeps_typed_values(app, admin_client):
    r = admin_client.post('/admin/announcements', data={'title': 'Sports Day', 'content': ''})
    page = r.get_data(as_text=True)
    assert r.status_code == 200
    assert 'Please fill in: content.' in page
    assert 'value="Sports Day"' in page
    with app.app_context():
        assert Announcement.query.count() == 0


def test_backend_message_is_shown_verbatim(admin_client, monkeypatch):
    def denied(values):
        raise BackendError('new row violates row-level security policy for table "announcements"')

    monkeypatch.setattr(content, 'create_announcement', denied)
    r = admin_client.post('/admin/announcements', data={'title': 'A', 'content': 'B'})
    assert 'new row violates row-level security policy' in r.get_data(as_text=True)


def test_update_and_delete_announcement(app, admin_client):
    admin_client.post('/admin/announcements', data={'title': 'Old', 'content': 'x'})
    with app.app_context():
        row_id = Announcement.query.one().id

    admin_client.post(f'/admin/announcements/{row_id}/update', data={'title': 'New', 'content': 'y'})
    with app.app_context():
        assert Announcement.query.one().title == 'New'

    admin_client.post(f'/admin/announcements/{row_id}/delete')
    with app.app_context():
        assert Announcement.query.count() == 0


def test_gallery_upload_and_delete(app, admin_client):
    r = admin_client.post('/admin/gallery', data={
        'title': 'Science Fair',
        'category': 'Academic',
        'image': (io.BytesIO(b'fake-png-bytes'), 'fair.png', 'image/png'),
    }, content_type='multipart/form-data', follow_redirects=True)
    assert 'Gallery item added.' in r.get_data(as_text=True)

    with app.app_context():
        item = GalleryItem.query.one()
        row_id, image_url = item.id, item.image_url
    assert image_url.startswith('/storage/gallery-images/gallery/')
    assert image_url.endswith('.png')

    stored = os.path.join(app.config['LOCAL_STORAGE_DIR'], 'gallery-images',
                          image_url.split('/gallery-images/', 1)[1])
    assert os.path.exists(stored)
    assert admin_client.get(image_url).data == b'fake-png-bytes'

    admin_client.post(f'/admin/gallery/{row_id}/delete', data={'image_url': image_url})
    assert not os.path.exists(stored)
    with app.app_context():
        assert GalleryItem.query.count() == 0


def test_gallery_rejects_non_image(app, admin_client):
    r = admin_client.post('/admin/gallery', data={
        'title': 'Notes',
        'image': (io.BytesIO(b'text'), 'notes.txt', 'text/plain'),
    }, content_type='multipart/form-data')
    assert 'Unsupported image type: text/plain.' in r.get_data(as_text=True)
    with app.app_context():
        assert GalleryItem.query.count() == 0


def test_gallery_rejects_oversized_image(app, admin_client):
    app.config['MAX_IMAGE_SIZE_MB'] = 0
    r = admin_client.post('/admin/gallery', data={
        'title': 'Huge',
        'image': (io.BytesIO(b'x' * 100), 'huge.jpg', 'image/jpeg'),
    }, content_type='multipart/form-data')
    assert 'Image must be smaller than 0MB.' in r.get_data(as_text=True)


def test_gallery_accepts_image_url(app, admin_client):
    admin_client.post('/admin/gallery', data={'title': 'Linked', 'image_url': 'https://example.com/a.jpg'})
    with app.app_context():
        assert GalleryItem.query.one().image_url == 'https://example.com/a.jpg'


def test_material_upload(app, admin_client):
    r = admin_client.post('/admin/materials', data={
        'title': 'Algebra Notes',
        'subject': 'Mathematics',
        'class_level': '9',
        'file': (io.BytesIO(b'%PDF-1.4 notes'), 'algebra.pdf', 'application/pdf'),
    }, content_type='multipart/form-data', follow_redirects=True)
    assert 'Learning material added.' in r.get_data(as_text=True)

    with app.app_context():
        material = LearningMaterial.query.one()
        assert material.file_type == 'PDF'
        assert material.file_size == '0.00 MB'
        assert material.downloads == 0
        assert material.file_url.startswith('/storage/learning-materials/materials/')
    assert 'Algebra Notes' in admin_client.get('/materials').get_data(as_text=True)


def test_material_requires_file(app, admin_client):
    r = admin_client.post('/admin/materials', data={
        'title': 'Algebra Notes', 'subject': 'Mathematics', 'class_level': '9',
    })
    assert 'Please fill in: file url.' in r.get_data(as_text=True)


def test_leadership_order_must_be_number(app, admin_client):
    r = admin_client.post('/admin/leadership', data={
        'name': 'Dr. Rao', 'position': 'Principal', 'display_order': 'first',
    })
    assert 'Display order must be a whole number.' in r.get_data(as_text=True)

    admin_client.post('/admin/leadership', data={
        'name': 'Dr. Rao', 'position': 'Principal', 'display_order': '1',
    })
    with app.app_context():
        assert LeadershipMember.query.one().display_order == 1


def test_facilities_append_and_toggle(admin_client):
    admin_client.post('/admin/facilities', data={'title': 'Library'})
    admin_client.post('/admin/facilities', data={'title': 'Pool'})
    page = admin_client.get('/').get_data(as_text=True)
    assert 'Library' in page and 'Pool' in page


def test_footer_section_lifecycle(app, admin_client):
    r = admin_client.post('/admin/footer', data={
        'title': 'Reach Us', 'section_type': 'contact',
        'content': '{"address": "Main Road", "phone": "123", "email": "office@school.test"}',
        'display_order': '1', 'is_active': 'on',
    }, follow_redirects=True)
    assert 'Footer section created.' in r.get_data(as_text=True)
    assert 'Main Road' in admin_client.get('/').get_data(as_text=True)

    with app.app_context():
        row_id = FooterSection.query.one().id
    admin_client.post(f'/admin/footer/{row_id}/toggle')
    with app.app_context():
        assert FooterSection.query.one().is_active is False
    # No active rows left, so the default footer is back
    assert 'Quick Links' in admin_client.get('/').get_data(as_text=True)


def test_footer_rejects_bad_input(admin_client):
    r = admin_client.post('/admin/footer', data={'title': 'Links', 'section_type': 'links', 'content': '{bad'})
    assert 'Content must be valid JSON.' in r.get_data(as_text=True)

    r = admin_client.post('/admin/footer', data={'title': 'Links', 'section_type': 'banner'})
    assert 'Unknown section type' in r.get_data(as_text=True)


def test_footer_rejects_non_object_content(app, admin_client):
    r = admin_client.post('/admin/footer', data={
        'title': 'Links', 'section_type': 'links', 'content': '["Home", "About"]',
    })
    assert 'Content must be a JSON object.' in r.get_data(as_text=True)
    with app.app_context():
        assert FooterSection.query.count() == 0


def test_settings_toggle_and_reset(admin_client):
    r = admin_client.post('/admin/settings', data={'action': 'toggle_signup'}, follow_redirects=True)
    page = r.get_data(as_text=True)
    assert 'Signup disabled.' in page
    assert 'Signup is currently <strong>disabled</strong>' in page

    r = admin_client.post('/admin/settings', data={'action': 'reset'}, follow_redirects=True)
    assert 'Signup is currently <strong>enabled</strong>' in r.get_data(as_text=True)
