"""
Admin Routes

One editor per content table. Each editor loads the current rows, and
each submit makes a single backend call. Failures are flashed with the
backend's message and the form is shown again with what was typed.
"""

import logging

from flask import render_template, request, redirect, url_for, flash, current_app
from flask_login import current_user
from app.admin import admin_bp
from app.admin.decorators import admin_required
from app.admin.forms import FormError, int_field, json_field, required, text_fields
from app.auth.gate import ensure_admin_user, is_admin
from app.auth.session import AuthState, current_state
from app.backend import get_backend
from app.errors import BackendError
from app.services import content, settings, uploads

logger = logging.getLogger(__name__)


def _load(loader, *args):
    """Rows for an editor page; a failed load shows an empty editor."""
    try:
        return loader(*args)
    except BackendError as e:
        flash(f'Could not load content: {e}', 'danger')
        return []


def _check_upload(file, allowed, max_mb, kind):
    if not allowed(file.mimetype):
        raise FormError(f'Unsupported {kind} type: {file.mimetype or "unknown"}.')
    if not uploads.validate_file_size(uploads.file_size(file), max_mb):
        raise FormError(f'{kind.capitalize()} must be smaller than {max_mb}MB.')


def _uploaded(name):
    file = request.files.get(name)
    if file is None or not file.filename:
        return None
    return file


@admin_bp.route('/')
def index():
    """Admin entry point."""
    if current_state() is AuthState.SIGNED_IN_VERIFIED:
        return redirect(url_for('admin.dashboard'))
    return redirect(url_for('auth.login'))


@admin_bp.route('/dashboard')
@admin_required
def dashboard():
    """Admin dashboard with content overview."""
    backend = get_backend()
    ensure_admin_user(backend, current_user.id)
    return render_template('admin/dashboard.html',
                           stats=content.get_dashboard_statistics(),
                           has_admin_role=is_admin(backend, current_user.id),
                           admin_email=current_user.email)


# -----------------------------------------------------------------------------
# Hero / About / Vision
# -----------------------------------------------------------------------------

@admin_bp.route('/hero', methods=['GET', 'POST'])
@admin_required
def hero():
    """Edit the homepage hero section."""
    if request.method == 'POST':
        values = text_fields('title', 'subtitle', *content.HERO_FIELDS)
        try:
            image = _uploaded('image')
            if image:
                _check_upload(image, uploads.validate_image_type,
                              current_app.config['MAX_IMAGE_SIZE_MB'], 'image')
                values['image_url'] = uploads.upload_gallery_image(image)
            content.update_hero_section(values)
        except (BackendError, FormError) as e:
            flash(f'Could not save hero section: {e}', 'danger')
            return render_template('admin/hero.html', hero=values)
        flash('Hero section updated. Changes will be reflected on the homepage.', 'success')
        return redirect(url_for('admin.hero'))

    try:
        hero_row = content.get_hero_section()
    except BackendError as e:
        flash(f'Could not load content: {e}', 'danger')
        hero_row = None
    return render_template('admin/hero.html', hero=hero_row or {})


@admin_bp.route('/about', methods=['GET', 'POST'])
@admin_required
def about():
    """Edit the about section."""
    if request.method == 'POST':
        values = text_fields('title', 'subtitle', 'principal_message', 'principal_name',
                             'principal_title', 'principal_image_url', 'school_description')
        try:
            values['main_content'] = json_field('main_content', 'Main content')
            values['features'] = json_field('features', 'Features')
            values['school_founded_year'] = int_field('school_founded_year', 'Founded year')
            image = _uploaded('principal_image')
            if image:
                _check_upload(image, uploads.validate_image_type,
                              current_app.config['MAX_IMAGE_SIZE_MB'], 'image')
                values['principal_image_url'] = uploads.upload_gallery_image(image)
            content.update_about_section(values)
        except (BackendError, FormError) as e:
            flash(f'Could not save about section: {e}', 'danger')
            return render_template('admin/about.html', about=request.form.to_dict())
        flash('About section updated.', 'success')
        return redirect(url_for('admin.about'))

    try:
        about_row = content.get_about_section()
    except BackendError as e:
        flash(f'Could not load content: {e}', 'danger')
        about_row = None
    return render_template('admin/about.html', about=about_row or {})


@admin_bp.route('/vision', methods=['GET', 'POST'])
@admin_required
def vision():
    """Edit the vision & mission section."""
    if request.method == 'POST':
        values = text_fields('title', 'subtitle', 'main_content', 'principal_message',
                             'principal_name', 'principal_title')
        try:
            values['features'] = json_field('features', 'Features')
            content.update_vision_section(values)
        except (BackendError, FormError) as e:
            flash(f'Could not save vision section: {e}', 'danger')
            return render_template('admin/vision.html', vision=request.form.to_dict())
        flash('Vision section updated.', 'success')
        return redirect(url_for('admin.vision'))

    try:
        vision_row = content.get_vision_section()
    except BackendError as e:
        flash(f'Could not load content: {e}', 'danger')
        vision_row = None
    return render_template('admin/vision.html', vision=vision_row or {})


# -----------------------------------------------------------------------------
# Announcements
# -----------------------------------------------------------------------------

ANNOUNCEMENT_CATEGORIES = ('general', 'academic', 'event', 'urgent')


def _announcement_values():
    values = text_fields('title', 'content', 'category', 'type')
    required(values, 'title', 'content')
    return values


def _render_announcements(**context):
    return render_template('admin/announcements.html',
                           announcements=_load(content.list_announcements),
                           categories=ANNOUNCEMENT_CATEGORIES,
                           **context)


@admin_bp.route('/announcements', methods=['GET', 'POST'])
@admin_required
def announcements():
    """List announcements and create new ones."""
    if request.method == 'POST':
        try:
            content.create_announcement(_announcement_values())
        except (BackendError, FormError) as e:
            flash(f'Could not create announcement: {e}', 'danger')
            return _render_announcements(form=request.form)
        flash('Announcement created.', 'success')
        return redirect(url_for('admin.announcements'))
    return _render_announcements(form={})


@admin_bp.route('/announcements/<row_id>/update', methods=['POST'])
@admin_required
def update_announcement(row_id):
    try:
        content.update_announcement(row_id, _announcement_values())
    except (BackendError, FormError) as e:
        flash(f'Could not update announcement: {e}', 'danger')
        return _render_announcements(form={}, editing=row_id, edit_form=request.form)
    flash('Announcement updated.', 'success')
    return redirect(url_for('admin.announcements'))


@admin_bp.route('/announcements/<row_id>/delete', methods=['POST'])
@admin_required
def delete_announcement(row_id):
    try:
        content.delete_announcement(row_id)
        flash('Announcement deleted.', 'success')
    except BackendError as e:
        flash(f'Could not delete announcement: {e}', 'danger')
    return redirect(url_for('admin.announcements'))


# -----------------------------------------------------------------------------
# Gallery
# -----------------------------------------------------------------------------

def _gallery_values():
    values = text_fields('title', 'description', 'image_url', 'category', 'date_taken')
    image = _uploaded('image')
    if image:
        _check_upload(image, uploads.validate_image_type,
                      current_app.config['MAX_IMAGE_SIZE_MB'], 'image')
        values['image_url'] = uploads.upload_gallery_image(image)
    return values


def _render_gallery(**context):
    return render_template('admin/gallery.html', items=_load(content.list_gallery_items), **context)


@admin_bp.route('/gallery', methods=['GET', 'POST'])
@admin_required
def gallery():
    """List gallery photos and add new ones."""
    if request.method == 'POST':
        try:
            values = _gallery_values()
            required(values, 'title', 'image_url')
            content.create_gallery_item(values)
        except (BackendError, FormError) as e:
            flash(f'Could not add gallery item: {e}', 'danger')
            return _render_gallery(form=request.form)
        flash('Gallery item added.', 'success')
        return redirect(url_for('admin.gallery'))
    return _render_gallery(form={})


@admin_bp.route('/gallery/<row_id>/update', methods=['POST'])
@admin_required
def update_gallery_item(row_id):
    try:
        values = _gallery_values()
        required(values, 'title', 'image_url')
        content.update_gallery_item(row_id, values)
    except (BackendError, FormError) as e:
        flash(f'Could not update gallery item: {e}', 'danger')
        return _render_gallery(form={}, editing=row_id, edit_form=request.form)
    flash('Gallery item updated.', 'success')
    return redirect(url_for('admin.gallery'))


@admin_bp.route('/gallery/<row_id>/delete', methods=['POST'])
@admin_required
def delete_gallery_item(row_id):
    try:
        content.delete_gallery_item(row_id)
        flash('Gallery item deleted.', 'success')
    except BackendError as e:
        flash(f'Could not delete gallery item: {e}', 'danger')
        return redirect(url_for('admin.gallery'))

    path = uploads.storage_path_from_url(request.form.get('image_url'), uploads.GALLERY_BUCKET)
    if path:
        try:
            uploads.delete_file(uploads.GALLERY_BUCKET, path)
        except BackendError as e:
            logger.warning('Could not delete gallery image %s: %s', path, e)
    return redirect(url_for('admin.gallery'))


# -----------------------------------------------------------------------------
# Learning materials
# -----------------------------------------------------------------------------

def _material_values():
    values = text_fields('title', 'description', 'subject', 'class_level', 'file_type', 'file_url')
    file = _uploaded('file')
    if file:
        _check_upload(file, uploads.validate_material_type,
                      current_app.config['MAX_MATERIAL_SIZE_MB'], 'file')
        values['file_url'], values['file_size'] = uploads.upload_learning_material(file)
        values['file_type'] = uploads.get_file_type(file.filename)
    return values


def _render_materials(**context):
    return render_template('admin/materials.html',
                           materials=_load(content.list_learning_materials), **context)


@admin_bp.route('/materials', methods=['GET', 'POST'])
@admin_required
def materials():
    """List learning materials and upload new ones."""
    if request.method == 'POST':
        try:
            values = _material_values()
            if not values.get('file_type') and values.get('file_url'):
                values['file_type'] = uploads.get_file_type(values['file_url'])
            required(values, 'title', 'subject', 'class_level', 'file_url')
            content.create_learning_material(values)
        except (BackendError, FormError) as e:
            flash(f'Could not add learning material: {e}', 'danger')
            return _render_materials(form=request.form)
        flash('Learning material added.', 'success')
        return redirect(url_for('admin.materials'))
    return _render_materials(form={})


@admin_bp.route('/materials/<row_id>/update', methods=['POST'])
@admin_required
def update_material(row_id):
    try:
        values = {k: v for k, v in _material_values().items() if v is not None}
        required(values, 'title', 'subject', 'class_level')
        content.update_learning_material(row_id, values)
    except (BackendError, FormError) as e:
        flash(f'Could not update learning material: {e}', 'danger')
        return _render_materials(form={}, editing=row_id, edit_form=request.form)
    flash('Learning material updated.', 'success')
    return redirect(url_for('admin.materials'))


@admin_bp.route('/materials/<row_id>/delete', methods=['POST'])
@admin_required
def delete_material(row_id):
    try:
        content.delete_learning_material(row_id)
        flash('Learning material deleted.', 'success')
    except BackendError as e:
        flash(f'Could not delete learning material: {e}', 'danger')
        return redirect(url_for('admin.materials'))

    path = uploads.storage_path_from_url(request.form.get('file_url'), uploads.MATERIALS_BUCKET)
    if path:
        try:
            uploads.delete_file(uploads.MATERIALS_BUCKET, path)
        except BackendError as e:
            logger.warning('Could not delete material file %s: %s', path, e)
    return redirect(url_for('admin.materials'))


# -----------------------------------------------------------------------------
# Leadership team
# -----------------------------------------------------------------------------

def _leader_values():
    values = text_fields('name', 'position', 'bio', 'qualifications', 'email', 'phone', 'image_url')
    values['display_order'] = int_field('display_order', 'Display order')
    image = _uploaded('image')
    if image:
        _check_upload(image, uploads.validate_image_type,
                      current_app.config['MAX_IMAGE_SIZE_MB'], 'image')
        values['image_url'] = uploads.upload_gallery_image(image)
    required(values, 'name', 'position')
    return values


def _render_leadership(**context):
    return render_template('admin/leadership.html',
                           members=_load(content.list_leadership_team), **context)


@admin_bp.route('/leadership', methods=['GET', 'POST'])
@admin_required
def leadership():
    """List the leadership team and add members."""
    if request.method == 'POST':
        try:
            content.create_leadership_member(_leader_values())
        except (BackendError, FormError) as e:
            flash(f'Could not add team member: {e}', 'danger')
            return _render_leadership(form=request.form)
        flash('Team member added.', 'success')
        return redirect(url_for('admin.leadership'))
    return _render_leadership(form={})


@admin_bp.route('/leadership/<row_id>/update', methods=['POST'])
@admin_required
def update_leader(row_id):
    try:
        content.update_leadership_member(row_id, _leader_values())
    except (BackendError, FormError) as e:
        flash(f'Could not update team member: {e}', 'danger')
        return _render_leadership(form={}, editing=row_id, edit_form=request.form)
    flash('Team member updated.', 'success')
    return redirect(url_for('admin.leadership'))


@admin_bp.route('/leadership/<row_id>/delete', methods=['POST'])
@admin_required
def delete_leader(row_id):
    try:
        content.delete_leadership_member(row_id)
        flash('Team member deleted.', 'success')
    except BackendError as e:
        flash(f'Could not delete team member: {e}', 'danger')
    return redirect(url_for('admin.leadership'))


# -----------------------------------------------------------------------------
# Facilities
# -----------------------------------------------------------------------------

def _facility_values():
    values = text_fields('title', 'description', 'image_url')
    image = _uploaded('image')
    if image:
        _check_upload(image, uploads.validate_image_type,
                      current_app.config['MAX_IMAGE_SIZE_MB'], 'image')
        values['image_url'] = uploads.upload_gallery_image(image)
    required(values, 'title')
    return values


def _render_facilities(**context):
    return render_template('admin/facilities.html',
                           facilities=_load(content.list_facilities), **context)


@admin_bp.route('/facilities', methods=['GET', 'POST'])
@admin_required
def facilities():
    """List facilities and add new ones at the end."""
    if request.method == 'POST':
        try:
            values = _facility_values()
            content.create_facility(values, display_order=len(content.list_facilities()) + 1)
        except (BackendError, FormError) as e:
            flash(f'Failed to save facility: {e}', 'danger')
            return _render_facilities(form=request.form)
        flash('Facility added.', 'success')
        return redirect(url_for('admin.facilities'))
    return _render_facilities(form={})


@admin_bp.route('/facilities/<row_id>/update', methods=['POST'])
@admin_required
def update_facility(row_id):
    try:
        content.update_facility(row_id, _facility_values())
    except (BackendError, FormError) as e:
        flash(f'Failed to save facility: {e}', 'danger')
        return _render_facilities(form={}, editing=row_id, edit_form=request.form)
    flash('Facility updated.', 'success')
    return redirect(url_for('admin.facilities'))


@admin_bp.route('/facilities/<row_id>/toggle', methods=['POST'])
@admin_required
def toggle_facility(row_id):
    try:
        if content.toggle_facility(row_id) is None:
            flash('Facility not found.', 'danger')
    except BackendError as e:
        flash(f'Could not change facility: {e}', 'danger')
    return redirect(url_for('admin.facilities'))


@admin_bp.route('/facilities/<row_id>/delete', methods=['POST'])
@admin_required
def delete_facility(row_id):
    try:
        content.delete_facility(row_id)
        flash('Facility deleted.', 'success')
    except BackendError as e:
        flash(f'Failed to delete facility: {e}', 'danger')
    return redirect(url_for('admin.facilities'))


# -----------------------------------------------------------------------------
# Footer sections
# -----------------------------------------------------------------------------

def _footer_values():
    values = text_fields('title', 'section_type')
    required(values, 'title', 'section_type')
    if values['section_type'] not in content.FOOTER_SECTION_TYPES:
        raise FormError(f'Unknown section type {values["section_type"]!r}.')
    values['content'] = json_field('content', 'Content') or {}
    if not isinstance(values['content'], dict):
        raise FormError('Content must be a JSON object.')
    values['display_order'] = int_field('display_order', 'Display order') or 0
    values['is_active'] = request.form.get('is_active') == 'on'
    return values


def _render_footer(**context):
    return render_template('admin/footer.html',
                           sections=_load(content.list_footer_sections),
                           section_types=content.FOOTER_SECTION_TYPES,
                           **context)


@admin_bp.route('/footer', methods=['GET', 'POST'])
@admin_required
def footer():
    """List footer sections and add new ones."""
    if request.method == 'POST':
        try:
            content.create_footer_section(_footer_values())
        except (BackendError, FormError) as e:
            flash(f'Could not create footer section: {e}', 'danger')
            return _render_footer(form=request.form)
        flash('Footer section created.', 'success')
        return redirect(url_for('admin.footer'))
    return _render_footer(form={})


@admin_bp.route('/footer/<row_id>/update', methods=['POST'])
@admin_required
def update_footer_section(row_id):
    try:
        content.update_footer_section(row_id, _footer_values())
    except (BackendError, FormError) as e:
        flash(f'Could not update footer section: {e}', 'danger')
        return _render_footer(form={}, editing=row_id, edit_form=request.form)
    flash('Footer section updated.', 'success')
    return redirect(url_for('admin.footer'))


@admin_bp.route('/footer/<row_id>/toggle', methods=['POST'])
@admin_required
def toggle_footer_section(row_id):
    try:
        if content.toggle_footer_section(row_id) is None:
            flash('Footer section not found.', 'danger')
    except BackendError as e:
        flash(f'Could not change footer section: {e}', 'danger')
    return redirect(url_for('admin.footer'))


@admin_bp.route('/footer/reorder', methods=['POST'])
@admin_required
def reorder_footer_sections():
    section_ids = [s for s in request.form.getlist('section_ids') if s]
    try:
        content.reorder_footer_sections(section_ids)
        flash('Footer sections reordered.', 'success')
    except BackendError as e:
        flash(f'Could not reorder footer sections: {e}', 'danger')
    return redirect(url_for('admin.footer'))


@admin_bp.route('/footer/<row_id>/delete', methods=['POST'])
@admin_required
def delete_footer_section(row_id):
    try:
        content.delete_footer_section(row_id)
        flash('Footer section deleted.', 'success')
    except BackendError as e:
        flash(f'Could not delete footer section: {e}', 'danger')
    return redirect(url_for('admin.footer'))


# -----------------------------------------------------------------------------
# System settings
# -----------------------------------------------------------------------------

@admin_bp.route('/settings', methods=['GET', 'POST'])
@admin_required
def admin_settings():
    """Site switches (signup on/off)."""
    if request.method == 'POST':
        action = request.form.get('action')
        if action == 'toggle_signup':
            current = settings.toggle_signup_disabled()
            flash('Signup disabled.' if current['signupDisabled'] else 'Signup enabled.', 'success')
        elif action == 'reset':
            settings.reset_to_defaults()
            flash('Settings reset to defaults.', 'info')
        else:
            flash('Unknown settings action.', 'danger')
        return redirect(url_for('admin.admin_settings'))

    return render_template('admin/settings.html', settings=settings.get_settings())
