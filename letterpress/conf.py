"""
Configuration settings for django-letterpress.

Override these in your Django settings.py:

    LETTERPRESS = {
        'DEFAULT_ROLE': 'SUBSCRIBER',
        'RELATED_POSTS_LIMIT': 5,
        ...
    }

Permission bits and the role permission table are fixed in
letterpress.permissions and cannot be overridden here.
"""
from django.conf import settings

DEFAULTS = {
    # Roles
    "DEFAULT_ROLE": "SUBSCRIBER",
    "SUPERUSER_ROLE": "ADMIN",
    "AUTO_CREATE_USER_ROLES": True,

    # Related posts
    "RELATED_POSTS_LIMIT": 5,
    "RELATED_POSTS_OVERFETCH": 3,  # candidate pool = limit * overfetch
    "MAX_RELATED_LIMIT": 20,
    "CATEGORY_WEIGHT": 2,
    "TAG_WEIGHT": 1,

    # SEO
    "SLUG_MAX_LENGTH": 100,
}


class LetterpressSettings:
    """
    Lazy settings object that reads from Django settings.

    Access via: from letterpress.conf import letterpress_settings
    """

    def __getattr__(self, name):
        if name not in DEFAULTS:
            raise AttributeError(f"Invalid letterpress setting: {name}")

        user_settings = getattr(settings, "LETTERPRESS", {})
        return user_settings.get(name, DEFAULTS[name])


letterpress_settings = LetterpressSettings()
