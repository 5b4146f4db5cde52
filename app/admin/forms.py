"""
Form Helpers

Turn editor form posts into row dicts.
"""

import json

from flask import request


class FormError(ValueError):
    """A submitted field could not be parsed."""


def text_fields(*names):
    """Stripped values for ``names``; blank fields become None."""
    values = {}
    for name in names:
        value = request.form.get(name, '').strip()
        values[name] = value or None
    return values


def int_field(name, label=None):
    value = request.form.get(name, '').strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        raise FormError(f'{label or name} must be a whole number.')


def json_field(name, label=None):
    value = request.form.get(name, '').strip()
    if not value:
        return None
    try:
        return json.loads(value)
    except ValueError:
        raise FormError(f'{label or name} must be valid JSON.')


def required(values, *names):
    missing = [name for name in names if not values.get(name)]
    if missing:
        raise FormError('Please fill in: ' + ', '.join(n.replace('_', ' ') for n in missing) + '.')
