"""
Fallback Content

Default payloads shown when a live content read fails or comes back
empty. One table for the whole site, keyed by content type.
"""

import copy

HERO_IMAGE = ('https://images.unsplash.com/photo-1523050854058-8df90110c9f1'
              '?auto=format&fit=crop&w=1740&q=80')
ABOUT_IMAGE = ('https://images.unsplash.com/photo-1519452635265-7b1fbfd1e4e0'
               '?auto=format&fit=crop&w=1740&q=80')

FALLBACK_CONTENT = {
    'hero': {
        'id': 'main',
        'title': 'Welcome to St. G. D. Convent School',
        'subtitle': ('Empowering students through innovative education and comprehensive learning '
                     'experiences. Discover a vibrant community dedicated to academic excellence.'),
        'description': "Inspiring Tomorrow's Leaders",
        'image_url': HERO_IMAGE,
        'image_description': 'Building character, creativity, and excellence',
        'primary_button_text': 'Learn More',
        'primary_button_link': '/about',
        'secondary_button_text': 'Explore Gallery',
        'secondary_button_link': '/gallery',
    },
    'about': {
        'id': 'main',
        'title': 'About Our School',
        'subtitle': 'Excellence in education through innovative teaching and comprehensive curriculum',
        'main_content': [
            'St. G. D. Convent School is a leading educational institution committed to providing a '
            'balanced and stimulating learning environment where students can achieve academic '
            'excellence and personal growth.',
            'Our comprehensive curriculum is designed to develop critical thinking, creativity, '
            'and problem-solving skills, preparing students for success in higher education and beyond.',
        ],
        'principal_message': None,
        'principal_name': None,
        'principal_title': None,
        'principal_image_url': ABOUT_IMAGE,
        'school_founded_year': 1985,
        'school_description': None,
        'features': [
            {'title': 'Founded in 1985',
             'description': 'With decades of educational excellence and a strong foundation in values-based learning'},
            {'title': 'Diverse Community',
             'description': 'Creating an inclusive environment where every student feels valued and empowered'},
            {'title': 'Comprehensive Curriculum',
             'description': 'Balancing academic rigor with holistic development for well-rounded education'},
            {'title': 'Academic Excellence',
             'description': 'Consistent record of outstanding achievements in academics and extracurriculars'},
        ],
    },
    'vision': {
        'id': 'main',
        'title': 'Our Vision & Mission',
        'subtitle': 'Fostering a learning environment that nurtures excellence, character, and lifelong learning',
        'main_content': ('We believe in providing an education that goes beyond textbooks. Our vision is '
                         'to create a nurturing environment where students can discover their potential, '
                         'develop critical skills, and become responsible global citizens prepared for '
                         'the challenges of tomorrow.'),
        'principal_message': ('Education is not just about academic achievement, but about nurturing '
                              'curious minds, compassionate hearts, and resilient spirits.'),
        'principal_name': 'Dr. Ashirwad Goel',
        'principal_title': 'Principal, St.G.D.Convent School',
        'features': [
            {'title': 'Academic Excellence',
             'description': 'We maintain high academic standards through innovative teaching methods and comprehensive curriculum.'},
            {'title': 'Inclusive Community',
             'description': 'Our diverse and supportive environment ensures every student feels valued and empowered to succeed.'},
            {'title': 'Holistic Development',
             'description': 'We focus on developing well-rounded individuals through academic, social, and extracurricular activities.'},
            {'title': 'Future-Ready Skills',
             'description': 'Our programs equip students with critical thinking, creativity, and technological skills for future success.'},
        ],
    },
    'announcements': [
        {'id': 'fallback-1', 'title': 'Annual Sports Day', 'category': 'event', 'type': None,
         'created_at': '2025-05-12',
         'content': ('The annual sports day will be held in May, 2025. All students are requested '
                     'to register for their events by April 30.')},
        {'id': 'fallback-2', 'title': 'Exam Schedule Released', 'category': 'academic', 'type': None,
         'created_at': '2025-04-15',
         'content': ('The final examination schedule for all grades has been released. Please check '
                     'the academic calendar for details.')},
        {'id': 'fallback-3', 'title': 'Parent-Teacher Meeting', 'category': 'meeting', 'type': None,
         'created_at': '2025-04-20',
         'content': ('Parent-teacher meetings will be conducted on April 20-21. Online booking for '
                     'appointment slots is now open.')},
    ],
    'gallery': [
        {'id': 'fallback-1', 'title': 'Science Exhibition', 'category': 'Academic', 'description': None,
         'date_taken': None,
         'image_url': 'https://images.unsplash.com/photo-1581812873626-cdc86de0d916?auto=format&fit=crop&w=774&q=80'},
        {'id': 'fallback-2', 'title': 'Annual Sports Day', 'category': 'Sports', 'description': None,
         'date_taken': None,
         'image_url': 'https://images.unsplash.com/photo-1517649763962-0c623066013b?auto=format&fit=crop&w=1740&q=80'},
        {'id': 'fallback-3', 'title': 'Cultural Festival', 'category': 'Cultural', 'description': None,
         'date_taken': None,
         'image_url': 'https://images.unsplash.com/photo-1511424400163-1c66a2d5b3ff?auto=format&fit=crop&w=870&q=80'},
        {'id': 'fallback-4', 'title': 'Graduation Ceremony', 'category': 'Event', 'description': None,
         'date_taken': None,
         'image_url': 'https://images.unsplash.com/photo-1627556704302-624286467c65?auto=format&fit=crop&w=774&q=80'},
    ],
    'materials': [
        {'id': 'fallback-1', 'title': 'Mathematics Fundamentals', 'subject': 'Mathematics',
         'class_level': '1-5', 'file_type': 'PDF', 'file_size': '1.8 MB', 'file_url': '#', 'downloads': 0,
         'description': 'Basic arithmetic, fractions, and geometry concepts for primary school students.'},
        {'id': 'fallback-2', 'title': 'Science Experiments Guide', 'subject': 'Science',
         'class_level': '6-8', 'file_type': 'PDF', 'file_size': '3.2 MB', 'file_url': '#', 'downloads': 0,
         'description': 'Simple science experiments and activities for middle school science classes.'},
        {'id': 'fallback-3', 'title': 'Advanced Physics Notes', 'subject': 'Physics',
         'class_level': '11-12', 'file_type': 'PDF', 'file_size': '4.5 MB', 'file_url': '#', 'downloads': 0,
         'description': 'Comprehensive physics notes covering mechanics, thermodynamics, and electromagnetism.'},
    ],
    'leadership': [
        {'id': 'fallback-1', 'name': 'Dr. Jane Smith', 'position': 'Principal', 'display_order': 1,
         'bio': ('Dr. Smith has over 20 years of experience in education leadership and holds a '
                 'Ph.D. in Educational Administration.'),
         'qualifications': None, 'email': None, 'phone': None,
         'image_url': 'https://randomuser.me/api/portraits/women/45.jpg'},
        {'id': 'fallback-2', 'name': 'Prof. Robert Johnson', 'position': 'Vice Principal', 'display_order': 2,
         'bio': ('Prof. Johnson oversees academic affairs and curriculum development with his '
                 'extensive background in educational psychology.'),
         'qualifications': None, 'email': None, 'phone': None,
         'image_url': 'https://randomuser.me/api/portraits/men/32.jpg'},
        {'id': 'fallback-3', 'name': 'Ms. Emily Chen', 'position': 'Head of Sciences', 'display_order': 3,
         'bio': ('Ms. Chen leads our science department with innovative teaching methods and a '
                 'passion for STEM education.'),
         'qualifications': None, 'email': None, 'phone': None,
         'image_url': 'https://randomuser.me/api/portraits/women/33.jpg'},
        {'id': 'fallback-4', 'name': 'Mr. David Wilson', 'position': 'Head of Arts', 'display_order': 4,
         'bio': ('Mr. Wilson brings creativity and artistic excellence to our curriculum with his '
                 'background in fine arts and education.'),
         'qualifications': None, 'email': None, 'phone': None,
         'image_url': 'https://randomuser.me/api/portraits/men/52.jpg'},
    ],
    'facilities': [
        {'id': 'fallback-1', 'title': 'Modern Library', 'display_order': 1, 'is_active': True,
         'description': ('Our extensive library houses over 20,000 books, digital resources, and quiet '
                         'study spaces for students of all levels.'),
         'image_url': 'https://images.unsplash.com/photo-1517031350709-19e7df358b75?auto=format&fit=crop&w=1740&q=80'},
        {'id': 'fallback-2', 'title': 'Science Laboratories', 'display_order': 2, 'is_active': True,
         'description': ('Fully equipped labs for physics, chemistry, and biology with modern '
                         'experimental apparatus and safety equipment.'),
         'image_url': 'https://images.unsplash.com/photo-1564069114553-7215e1ff1890?auto=format&fit=crop&w=1332&q=80'},
        {'id': 'fallback-3', 'title': 'Sports Complex', 'display_order': 3, 'is_active': True,
         'description': ('Indoor and outdoor sports facilities including a gymnasium, swimming pool, '
                         'basketball court, and athletic fields.'),
         'image_url': 'https://images.unsplash.com/photo-1534452203293-494d7ddbf7e0?auto=format&fit=crop&w=1772&q=80'},
    ],
    'footer': [
        {'id': 'fallback-1', 'title': 'About St.G.D Convent School', 'section_type': 'custom',
         'display_order': 1, 'is_active': True,
         'content': {'text': ('Empowering students through innovative education and comprehensive '
                              'learning experiences since 2015.')}},
        {'id': 'fallback-2', 'title': 'Quick Links', 'section_type': 'links',
         'display_order': 2, 'is_active': True,
         'content': {'items': [
             {'label': 'Home', 'url': '/'},
             {'label': 'About Us', 'url': '/about'},
             {'label': 'Gallery', 'url': '/gallery'},
             {'label': 'Learning Materials', 'url': '/materials'},
             {'label': 'Admin Portal', 'url': '/admin'},
         ]}},
        {'id': 'fallback-3', 'title': 'Contact Us', 'section_type': 'contact',
         'display_order': 3, 'is_active': True,
         'content': {'address': 'Siroli, Road Dhanouli, Agra, Uttar Pradesh',
                     'phone': '8077422014, 9084792142',
                     'email': 'st.g.dconventschool1@gmail.com'}},
        {'id': 'fallback-4', 'title': 'Follow Us', 'section_type': 'social',
         'display_order': 4, 'is_active': True,
         'content': {'platforms': [
             {'name': 'Facebook', 'url': 'https://facebook.com/stgdconventschool', 'icon': 'facebook'},
             {'name': 'Instagram', 'url': 'https://instagram.com/stgdconventschool', 'icon': 'instagram'},
             {'name': 'YouTube', 'url': 'https://youtube.com/stgdconventschool', 'icon': 'youtube'},
         ]}},
    ],
}


def get_fallback(kind):
    """A private copy of the default payload for ``kind``."""
    return copy.deepcopy(FALLBACK_CONTENT[kind])
