"""
Related content scoring for django-letterpress.

Posts are ranked against a source post by shared taxonomy: every shared
category is worth CATEGORY_WEIGHT, every shared tag TAG_WEIGHT. A post with
no categories and no tags falls back to the most recently published posts.

    from letterpress.related import RelatednessScorer
    from letterpress.repository import PostRepository

    scorer = RelatednessScorer(PostRepository())
    scorer.related(post.pk, limit=5)
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional, Protocol

from .conf import letterpress_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Taxonomy:
    """Category and tag membership of a content item."""

    category_ids: frozenset = field(default_factory=frozenset)
    tag_ids: frozenset = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "category_ids", frozenset(self.category_ids))
        object.__setattr__(self, "tag_ids", frozenset(self.tag_ids))

    @property
    def is_empty(self):
        return not self.category_ids and not self.tag_ids


@dataclass(frozen=True)
class Candidate:
    """A published content item considered for ranking."""

    id: int
    category_ids: frozenset = field(default_factory=frozenset)
    tag_ids: frozenset = field(default_factory=frozenset)
    published_at: Optional[datetime] = None

    def __post_init__(self):
        object.__setattr__(self, "category_ids", frozenset(self.category_ids))
        object.__setattr__(self, "tag_ids", frozenset(self.tag_ids))


@dataclass(frozen=True)
class RelatednessScore:
    """A candidate and its score for one query. Never persisted."""

    item: Candidate
    score: int


class ContentRepository(Protocol):
    """Read access to published content, as needed by the scorer."""

    def get_content_taxonomy(self, item_id: int) -> Optional[Taxonomy]:
        """Return the item's taxonomy, or None if the item does not exist."""
        ...

    def find_candidates(
        self,
        exclude_id: int,
        category_ids: Iterable[int],
        tag_ids: Iterable[int],
        limit: int,
    ) -> List[Candidate]:
        """
        Return published items sharing a category or tag.

        Ordered by publish time descending, excluding exclude_id.
        """
        ...

    def find_recent_published(self, exclude_id: int, limit: int) -> List[Candidate]:
        """Return the most recently published items, excluding exclude_id."""
        ...


def score_candidate(candidate, taxonomy, category_weight=2, tag_weight=1):
    """Return the raw weighted count of taxonomy shared with a candidate."""
    shared_categories = len(candidate.category_ids & taxonomy.category_ids)
    shared_tags = len(candidate.tag_ids & taxonomy.tag_ids)
    return shared_categories * category_weight + shared_tags * tag_weight


def rank_candidates(candidates, taxonomy, limit, category_weight=2, tag_weight=1):
    """
    Score candidates and return the top ``limit`` as RelatednessScore.

    Equal scores keep the order the candidates were given in.
    """
    scored = [
        (position, RelatednessScore(
            candidate,
            score_candidate(candidate, taxonomy, category_weight, tag_weight),
        ))
        for position, candidate in enumerate(candidates)
    ]
    scored.sort(key=lambda pair: (-pair[1].score, pair[0]))
    return [result for _, result in scored[:limit]]


class RelatednessScorer:
    """
    Ranks published posts by shared categories and tags.

    Holds no state between calls; all reads go through the repository, and
    repository errors propagate to the caller.
    """

    def __init__(self, repository, limit=None, overfetch=None,
                 category_weight=None, tag_weight=None):
        self.repository = repository
        self.limit = limit if limit is not None else letterpress_settings.RELATED_POSTS_LIMIT
        self.overfetch = (
            overfetch if overfetch is not None
            else letterpress_settings.RELATED_POSTS_OVERFETCH
        )
        self.category_weight = (
            category_weight if category_weight is not None
            else letterpress_settings.CATEGORY_WEIGHT
        )
        self.tag_weight = (
            tag_weight if tag_weight is not None
            else letterpress_settings.TAG_WEIGHT
        )

    def scored(self, item_id, limit=None):
        """Return up to ``limit`` RelatednessScore results for an item."""
        if limit is None:
            limit = self.limit
        if limit < 1:
            return []

        taxonomy = self.repository.get_content_taxonomy(item_id)
        if taxonomy is None:
            return []

        if taxonomy.is_empty:
            logger.debug("Item %s has no taxonomy, using recent posts", item_id)
            recent = self.repository.find_recent_published(item_id, limit)
            return [
                RelatednessScore(candidate, 0)
                for candidate in recent
                if candidate.id != item_id
            ][:limit]

        candidates = self.repository.find_candidates(
            item_id,
            taxonomy.category_ids,
            taxonomy.tag_ids,
            limit * self.overfetch,
        )
        candidates = [c for c in candidates if c.id != item_id]
        return rank_candidates(
            candidates,
            taxonomy,
            limit,
            category_weight=self.category_weight,
            tag_weight=self.tag_weight,
        )

    def related(self, item_id, limit=None):
        """Return up to ``limit`` related candidates, best first."""
        return [result.item for result in self.scored(item_id, limit)]
