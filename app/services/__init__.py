"""
Services Package

Exports the content loader used by the public pages.
"""

from app.services.content import load_content, get_dashboard_statistics
from app.services.fallbacks import FALLBACK_CONTENT, get_fallback

__all__ = [
    'load_content',
    'get_dashboard_statistics',
    'FALLBACK_CONTENT',
    'get_fallback',
]
