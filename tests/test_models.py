"""
Tests for django-letterpress models.
"""
import pytest
from django.contrib.auth import get_user_model

from letterpress.models import Category, Post, Tag, UserRole
from letterpress.permissions import Permission, Role, user_has_permission, user_role

User = get_user_model()


@pytest.fixture
def user(db):
    """Create a test user."""
    return User.objects.create_user(
        username="testuser",
        email="test@example.com",
        password="testpass123",
    )


@pytest.fixture
def category(db):
    """Create a test category."""
    return Category.objects.create(
        name="Test Category",
        slug="test-category",
    )


@pytest.fixture
def tag(db):
    """Create a test tag."""
    return Tag.objects.create(
        name="test-tag",
        slug="test-tag",
    )


@pytest.fixture
def post(db, user, category):
    """Create a test post."""
    post = Post.objects.create(
        title="Test Post",
        body="This is a test post body.",
        author=user,
    )
    post.categories.add(category)
    return post


class TestCategory:
    """Tests for Category model."""

    def test_create_category(self, db):
        """Test creating a category."""
        cat = Category.objects.create(name="My Category")
        assert cat.name == "My Category"
        assert cat.slug == "my-category"

    def test_category_hierarchy(self, db, category):
        """Test nested categories."""
        child = Category.objects.create(
            name="Child Category",
            parent=category,
        )
        assert child.parent == category
        assert str(child) == "Test Category > Child Category"

    def test_post_count_ignores_drafts(self, db, category, post, user):
        """Test category post count only counts published posts."""
        draft = Post.objects.create(title="Draft", body="...", author=user, is_draft=True)
        draft.categories.add(category)
        assert category.post_count == 1


class TestTag:
    """Tests for Tag model."""

    def test_create_tag(self, db):
        """Test creating a tag."""
        tag = Tag.objects.create(name="Django")
        assert tag.name == "Django"
        assert tag.slug == "django"

    def test_tag_post_count(self, db, tag, post):
        """Test tag post count property."""
        post.tags.add(tag)
        assert tag.post_count == 1


class TestPost:
    """Tests for Post model."""

    def test_create_post(self, db, user):
        """Test creating a post."""
        post = Post.objects.create(
            title="Hello World",
            body="My first post!",
            author=user,
        )
        assert post.slug == "hello-world"
        assert post.published_at is not None
        assert Post.objects.published().filter(pk=post.pk).exists()

    def test_slug_is_unique(self, db, user):
        first = Post.objects.create(title="Same", body="a", author=user)
        second = Post.objects.create(title="Same", body="b", author=user)
        assert first.slug == "same"
        assert second.slug == "same-1"

    def test_many_categories(self, db, post):
        """Test a post can belong to several categories."""
        other = Category.objects.create(name="Other")
        post.categories.add(other)
        assert post.categories.count() == 2

    def test_publish_post(self, db, user):
        """Test publishing a draft post."""
        post = Post.objects.create(
            title="Draft",
            body="Content",
            author=user,
            is_draft=True,
        )
        assert post.published_at is None
        assert not Post.objects.published().filter(pk=post.pk).exists()

        post.publish()
        post.refresh_from_db()

        assert Post.objects.published().filter(pk=post.pk).exists()

    def test_soft_delete(self, db, post):
        post.soft_delete()
        post.refresh_from_db()
        assert post.is_deleted
        assert post.deleted_at is not None
        assert not Post.objects.published().filter(pk=post.pk).exists()


class TestUserRole:
    """Tests for UserRole model and the user_role bridge."""

    def test_new_user_gets_default_role(self, user):
        assert user.letterpress_role.role == Role.SUBSCRIBER
        assert user_role(user) == Role.SUBSCRIBER

    def test_new_superuser_gets_admin(self, db):
        admin = User.objects.create_superuser(username="root", password="pass")
        assert user_role(admin) == Role.ADMIN
        assert user_has_permission(admin, Permission.MANAGE_ROLES)

    def test_assigned_role_is_visible_on_user(self, make_user):
        """Test a user created with a role reports that role, not the default."""
        writer = make_user("writer", "AUTHOR")
        assert writer.letterpress_role.role == Role.AUTHOR
        assert user_role(writer) == Role.AUTHOR
        assert user_has_permission(writer, Permission.PUBLISH_POSTS)

    def test_permissions_follow_role(self, user):
        assignment = user.letterpress_role
        assignment.role = Role.AUTHOR
        assignment.save()
        assert Permission.PUBLISH_POSTS in assignment.permissions
        assert assignment.permission_set & Permission.PUBLISH_POSTS

    def test_user_without_role_fails_closed(self, user):
        UserRole.objects.filter(user=user).delete()
        user = User.objects.get(pk=user.pk)
        assert user_role(user) is None
        assert not user_has_permission(user, Permission.READ_POSTS)

    def test_anonymous_user_fails_closed(self):
        from django.contrib.auth.models import AnonymousUser

        assert user_role(AnonymousUser()) is None
        assert not user_has_permission(AnonymousUser(), Permission.READ_POSTS)
        assert not user_has_permission(None, Permission.READ_POSTS)

    def test_str(self, user):
        assert str(user.letterpress_role) == "testuser (Subscriber)"
