"""
Content Models

One table per editable section of the public site.
"""

from app.extensions import db
from app.models.base import RowMixin, created_column, id_column, utcnow


class HeroSection(RowMixin, db.Model):
    __tablename__ = 'hero_section'
    
    id = id_column()
    title = db.Column(db.String(255), nullable=False)
    subtitle = db.Column(db.Text, nullable=False)
    description = db.Column(db.Text)
    image_url = db.Column(db.String(1024))
    image_description = db.Column(db.Text)
    primary_button_text = db.Column(db.String(100))
    primary_button_link = db.Column(db.String(255))
    secondary_button_text = db.Column(db.String(100))
    secondary_button_link = db.Column(db.String(255))
    created_at = created_column()
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)


class AboutSection(RowMixin, db.Model):
    __tablename__ = 'about_section'
    
    id = id_column()
    title = db.Column(db.String(255), nullable=False)
    subtitle = db.Column(db.Text)
    main_content = db.Column(db.JSON)
    principal_message = db.Column(db.Text)
    principal_name = db.Column(db.String(255))
    principal_title = db.Column(db.String(255))
    principal_image_url = db.Column(db.String(1024))
    school_founded_year = db.Column(db.Integer)
    school_description = db.Column(db.Text)
    features = db.Column(db.JSON)
    created_at = created_column()
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)


class VisionSection(RowMixin, db.Model):
    __tablename__ = 'vision_section'
    
    id = id_column()
    title = db.Column(db.String(255), nullable=False)
    subtitle = db.Column(db.Text)
    main_content = db.Column(db.Text)
    principal_message = db.Column(db.Text)
    principal_name = db.Column(db.String(255))
    principal_title = db.Column(db.String(255))
    features = db.Column(db.JSON)
    created_at = created_column()
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)


class Announcement(RowMixin, db.Model):
    __tablename__ = 'announcements'
    
    id = id_column()
    title = db.Column(db.String(255), nullable=False)
    content = db.Column(db.Text, nullable=False)
    category = db.Column(db.String(50))
    type = db.Column(db.String(50))
    created_at = created_column()
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)
    
    def __repr__(self):
        return f'<Announcement {self.title}>'


class GalleryItem(RowMixin, db.Model):
    __tablename__ = 'school_life_gallery'
    
    id = id_column()
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    image_url = db.Column(db.String(1024), nullable=False)
    category = db.Column(db.String(50))
    date_taken = db.Column(db.String(32))
    created_at = created_column()


class LearningMaterial(RowMixin, db.Model):
    __tablename__ = 'learning_materials'
    
    id = id_column()
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    subject = db.Column(db.String(100), nullable=False)
    class_level = db.Column(db.String(50), nullable=False)
    file_type = db.Column(db.String(20), nullable=False)
    file_url = db.Column(db.String(1024), nullable=False)
    file_size = db.Column(db.String(32))
    downloads = db.Column(db.Integer, default=0)
    created_at = created_column()


class LeadershipMember(RowMixin, db.Model):
    __tablename__ = 'leadership_team'
    
    id = id_column()
    name = db.Column(db.String(255), nullable=False)
    position = db.Column(db.String(255), nullable=False)
    bio = db.Column(db.Text)
    qualifications = db.Column(db.Text)
    email = db.Column(db.String(255))
    phone = db.Column(db.String(50))
    image_url = db.Column(db.String(1024))
    display_order = db.Column(db.Integer)
    created_at = created_column()


class Facility(RowMixin, db.Model):
    __tablename__ = 'school_facilities'
    
    id = id_column()
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    image_url = db.Column(db.String(1024))
    display_order = db.Column(db.Integer, default=0)
    is_active = db.Column(db.Boolean, default=True)
    created_at = created_column()
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)


class FooterSection(RowMixin, db.Model):
    __tablename__ = 'footer_sections'
    
    id = id_column()
    title = db.Column(db.String(255), nullable=False)
    section_type = db.Column(db.String(20), nullable=False)
    content = db.Column(db.JSON, default=dict)
    display_order = db.Column(db.Integer, default=0)
    is_active = db.Column(db.Boolean, default=True)
    created_at = created_column()
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)
