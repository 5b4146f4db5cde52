"""
System Settings

Site-wide switches kept as a JSON blob in the browser's persistent
session, under a fixed key. Unreadable blobs read as the defaults.
"""

import json
import logging

from flask import session

logger = logging.getLogger(__name__)

SETTINGS_KEY = 'school_verse_system_settings'

DEFAULT_SETTINGS = {
    'signupDisabled': False,
}


def get_settings():
    stored = session.get(SETTINGS_KEY)
    if not stored:
        return dict(DEFAULT_SETTINGS)
    try:
        parsed = json.loads(stored)
    except (TypeError, ValueError) as e:
        logger.error('Error reading system settings: %s', e)
        return dict(DEFAULT_SETTINGS)
    if not isinstance(parsed, dict):
        return dict(DEFAULT_SETTINGS)
    return {**DEFAULT_SETTINGS, **parsed}


def save_settings(**changes):
    settings = {**get_settings(), **changes}
    session.permanent = True
    session[SETTINGS_KEY] = json.dumps(settings)
    logger.info('System settings changed: %s', settings)
    return settings


def is_signup_disabled():
    return bool(get_settings()['signupDisabled'])


def toggle_signup_disabled():
    return save_settings(signupDisabled=not is_signup_disabled())


def reset_to_defaults():
    session.pop(SETTINGS_KEY, None)
    return dict(DEFAULT_SETTINGS)
