"""Shared fixtures for django-letterpress tests."""
from datetime import datetime, timezone

import pytest
from django.contrib.auth import get_user_model

from letterpress.models import Post, UserRole

User = get_user_model()


@pytest.fixture
def make_user(db):
    """Create a user holding the given role."""

    def _make_user(username, role="SUBSCRIBER"):
        user = User.objects.create_user(username=username, password="testpass123")
        UserRole.objects.update_or_create(user=user, defaults={"role": role})
        return User.objects.get(pk=user.pk)

    return _make_user


@pytest.fixture
def author(make_user):
    return make_user("author", "AUTHOR")


@pytest.fixture
def make_post(db, author):
    """Create a published post with the given taxonomy and publish date."""

    def _make_post(title, published=None, categories=(), tags=(), **kwargs):
        if published is not None and not isinstance(published, datetime):
            published = datetime(*published, tzinfo=timezone.utc)
        post = Post.objects.create(
            title=title,
            body=f"{title} body",
            author=author,
            published_at=published,
            **kwargs,
        )
        post.categories.set(categories)
        post.tags.set(tags)
        return post

    return _make_post
