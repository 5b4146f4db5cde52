"""
Models Package

Tables of the local backend, keyed by the names the REST API uses.
"""

from app.models.auth import AuthUser, AuthSession, AdminUser
from app.models.content import (
    HeroSection, AboutSection, VisionSection, Announcement, GalleryItem,
    LearningMaterial, LeadershipMember, Facility, FooterSection,
)

# Tables reachable through the table API (auth tables are not)
TABLES = {model.__tablename__: model for model in (
    AdminUser, HeroSection, AboutSection, VisionSection, Announcement,
    GalleryItem, LearningMaterial, LeadershipMember, Facility, FooterSection,
)}

__all__ = [
    'AuthUser', 'AuthSession', 'AdminUser',
    'HeroSection', 'AboutSection', 'VisionSection', 'Announcement',
    'GalleryItem', 'LearningMaterial', 'LeadershipMember', 'Facility',
    'FooterSection', 'TABLES',
]
