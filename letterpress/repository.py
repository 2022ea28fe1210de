"""
Django ORM content repository for the related posts scorer.
"""
from django.db.models import Q

from .models import Post
from .related import Candidate, Taxonomy


def _to_candidate(post):
    # Relies on categories and tags being prefetched.
    return Candidate(
        id=post.pk,
        category_ids=frozenset(category.pk for category in post.categories.all()),
        tag_ids=frozenset(tag.pk for tag in post.tags.all()),
        published_at=post.published_at,
    )


class PostRepository:
    """
    Read-only access to posts for RelatednessScorer.

    Candidates are always published posts, newest first, with ties on
    publish time broken by descending id.
    """

    ordering = ("-published_at", "-id")

    def __init__(self, queryset=None):
        self.queryset = queryset if queryset is not None else Post.objects.all()

    def _published(self, exclude_id):
        return (
            self.queryset.published()
            .exclude(pk=exclude_id)
            .order_by(*self.ordering)
        )

    def get_content_taxonomy(self, item_id):
        """Return the post's Taxonomy, or None if it does not exist."""
        if not self.queryset.filter(pk=item_id, is_deleted=False).exists():
            return None

        category_ids = Post.categories.through.objects.filter(
            post_id=item_id,
        ).values_list("category_id", flat=True)
        tag_ids = Post.tags.through.objects.filter(
            post_id=item_id,
        ).values_list("tag_id", flat=True)
        return Taxonomy(category_ids=category_ids, tag_ids=tag_ids)

    def find_candidates(self, exclude_id, category_ids, tag_ids, limit):
        """Return published posts sharing at least one category or tag."""
        conditions = Q()
        if category_ids:
            conditions |= Q(categories__in=list(category_ids))
        if tag_ids:
            conditions |= Q(tags__in=list(tag_ids))
        if not conditions or limit < 1:
            return []

        posts = (
            self._published(exclude_id)
            .filter(conditions)
            .distinct()
            .prefetch_related("categories", "tags")[:limit]
        )
        return [_to_candidate(post) for post in posts]

    def find_recent_published(self, exclude_id, limit):
        """Return the most recently published posts."""
        if limit < 1:
            return []
        posts = self._published(exclude_id).prefetch_related("categories", "tags")[:limit]
        return [_to_candidate(post) for post in posts]
