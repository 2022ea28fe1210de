"""
Models for django-letterpress.

All models are importable from letterpress.models:

    from letterpress.models import Post, Category, Tag, UserRole
"""
from .posts import Category, Tag, Post
from .roles import UserRole

__all__ = [
    # Posts
    "Category",
    "Tag",
    "Post",
    # Roles
    "UserRole",
]
