"""
Post, Category, and Tag models for django-letterpress.
"""
from django.conf import settings
from django.db import models
from django.urls import reverse
from django.utils import timezone
from django.utils.text import slugify

from ..conf import letterpress_settings


class Category(models.Model):
    """
    Hierarchical category for organizing posts.

    Categories support nesting via parent field for tree structures.
    """

    name = models.CharField(max_length=100)
    slug = models.SlugField(max_length=100, unique=True)
    description = models.TextField(blank=True)
    parent = models.ForeignKey(
        "self",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="children",
    )
    order = models.IntegerField(default=0, help_text="Display order within parent")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["order", "name"]
        verbose_name_plural = "Categories"

    def __str__(self):
        if self.parent:
            return f"{self.parent} > {self.name}"
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.name)[:letterpress_settings.SLUG_MAX_LENGTH]
        super().save(*args, **kwargs)

    @property
    def post_count(self):
        """Return count of published posts in this category."""
        return self.posts.published().count()


class Tag(models.Model):
    """
    Flat tag for posts.

    Tags are non-hierarchical and can be applied to multiple posts.
    """

    name = models.CharField(max_length=100, unique=True)
    slug = models.SlugField(max_length=100, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.name)[:letterpress_settings.SLUG_MAX_LENGTH]
        super().save(*args, **kwargs)

    @property
    def post_count(self):
        """Return count of published posts with this tag."""
        return self.posts.published().count()


class PostQuerySet(models.QuerySet):
    def published(self):
        return self.filter(
            is_draft=False,
            is_deleted=False,
            published_at__isnull=False,
        )


class Post(models.Model):
    """
    Blog post / article.

    Belongs to any number of categories and tags; those memberships are
    what related posts are scored on.
    """

    title = models.CharField(max_length=255, blank=True)
    slug = models.SlugField(max_length=255, blank=True, db_index=True)
    body = models.TextField()
    excerpt = models.TextField(blank=True)

    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="letterpress_posts",
    )

    # Status
    is_draft = models.BooleanField(default=False)
    is_deleted = models.BooleanField(default=False)
    deleted_at = models.DateTimeField(null=True, blank=True)
    published_at = models.DateTimeField(
        null=True,
        blank=True,
        db_index=True,
        help_text="When post was actually published",
    )

    # Taxonomy
    categories = models.ManyToManyField(Category, related_name="posts", blank=True)
    tags = models.ManyToManyField(Tag, related_name="posts", blank=True)

    created_at = models.DateTimeField(db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = PostQuerySet.as_manager()

    class Meta:
        ordering = ["-published_at", "-id"]
        indexes = [
            models.Index(fields=["is_draft", "is_deleted", "-published_at"]),
        ]

    def __str__(self):
        if self.title:
            return self.title
        return f"{self.body[:50]}..." if len(self.body) > 50 else self.body

    def save(self, *args, **kwargs):
        # Auto-generate slug from title
        if not self.slug and self.title:
            base_slug = slugify(self.title)[:letterpress_settings.SLUG_MAX_LENGTH]
            slug = base_slug
            counter = 1
            while Post.objects.filter(slug=slug).exclude(pk=self.pk).exists():
                slug = f"{base_slug}-{counter}"
                counter += 1
            self.slug = slug

        if not self.created_at:
            self.created_at = timezone.now()

        # Set published_at when transitioning from draft
        if not self.is_draft and not self.published_at:
            self.published_at = timezone.now()

        super().save(*args, **kwargs)

    def get_related_api_url(self):
        return reverse("letterpress:related_posts", kwargs={"pk": self.pk})

    def publish(self):
        """Publish the post immediately."""
        self.is_draft = False
        self.published_at = timezone.now()
        self.save(update_fields=["is_draft", "published_at", "updated_at"])

    def soft_delete(self):
        """Soft delete the post."""
        self.is_deleted = True
        self.deleted_at = timezone.now()
        self.save(update_fields=["is_deleted", "deleted_at", "updated_at"])
