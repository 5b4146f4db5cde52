"""
Public Routes

Every public page reads its sections through load_content(), so a page
always renders: live rows when the backend has them, defaults otherwise.
"""

import os

from flask import render_template, current_app, send_from_directory, abort
from app.public import public_bp
from app.services import load_content


@public_bp.app_context_processor
def inject_footer():
    """Footer sections for every page."""
    return dict(footer_sections=load_content('footer'))


@public_bp.route('/')
def index():
    """Homepage: hero, announcements, vision and facilities."""
    return render_template('public/index.html',
                           hero=load_content('hero'),
                           announcements=load_content('announcements'),
                           vision=load_content('vision'),
                           facilities=load_content('facilities'))


@public_bp.route('/about')
def about():
    return render_template('public/about.html',
                           about=load_content('about'),
                           vision=load_content('vision'),
                           leadership=load_content('leadership'),
                           facilities=load_content('facilities'))


@public_bp.route('/gallery')
def gallery():
    items = load_content('gallery')
    categories = sorted({item.get('category') for item in items if item.get('category')})
    return render_template('public/gallery.html', items=items, categories=categories)


@public_bp.route('/materials')
def materials():
    items = load_content('materials')
    subjects = sorted({item.get('subject') for item in items if item.get('subject')})
    return render_template('public/materials.html', materials=items, subjects=subjects)


@public_bp.route('/storage/<bucket>/<path:path>')
def stored_file(bucket, path):
    """Serve files uploaded to the local backend's storage."""
    if current_app.config.get('BACKEND_MODE') != 'local':
        abort(404)
    return send_from_directory(os.path.join(current_app.config['LOCAL_STORAGE_DIR'], bucket), path)
