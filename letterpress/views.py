"""
Views for django-letterpress.

JSON endpoints only; page rendering is left to the host project.
"""
import json
import logging

from django.contrib.auth import get_user_model
from django.contrib.auth.mixins import LoginRequiredMixin
from django.db import DatabaseError
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views import View

from .conf import letterpress_settings
from .models import Post, UserRole
from .permissions import (
    AuthorizationError,
    Permission,
    coerce_role,
    get_role_permissions,
    require_permission,
    user_role,
)
from .policies import assignable_roles, can_change_role
from .related import RelatednessScorer
from .repository import PostRepository

logger = logging.getLogger(__name__)


class RolePermissionRequiredMixin:
    """
    Deny access unless the user's role holds ``required_permission``.

    Works like Django's PermissionRequiredMixin but checks the letterpress
    role table. The checked role is available as ``self.role``.
    """

    required_permission = None

    def check_role_permission(self, request):
        guard = require_permission(self.required_permission)
        return guard(user_role(request.user))

    def handle_role_denied(self, exc):
        raise exc

    def dispatch(self, request, *args, **kwargs):
        try:
            self.role = self.check_role_permission(request)
        except AuthorizationError as exc:
            return self.handle_role_denied(exc)
        return super().dispatch(request, *args, **kwargs)


class RelatedPostsView(View):
    """Return posts related to a post by shared categories and tags."""

    scorer_class = RelatednessScorer
    repository_class = PostRepository

    def get_scorer(self):
        return self.scorer_class(self.repository_class())

    def get(self, request, pk):
        limit = request.GET.get("limit")
        if limit is None:
            limit = letterpress_settings.RELATED_POSTS_LIMIT
        else:
            try:
                limit = int(limit)
            except ValueError:
                return JsonResponse({"error": "limit must be an integer"}, status=400)
        limit = max(1, min(limit, letterpress_settings.MAX_RELATED_LIMIT))

        try:
            results = self.get_scorer().scored(pk, limit)
            posts = Post.objects.in_bulk([result.item.id for result in results])
        except DatabaseError:
            # Degrade to no related posts.
            logger.exception("Related posts lookup failed for post %s", pk)
            results, posts = [], {}

        related = []
        for result in results:
            post = posts.get(result.item.id)
            if post is None:
                continue
            related.append({
                "id": post.pk,
                "title": post.title,
                "slug": post.slug,
                "excerpt": post.excerpt,
                "published_at": post.published_at.isoformat() if post.published_at else None,
                "score": result.score,
            })

        return JsonResponse({"post": pk, "related": related})


class UserRoleUpdateView(LoginRequiredMixin, RolePermissionRequiredMixin, View):
    """Change another user's role."""

    required_permission = Permission.MANAGE_ROLES

    def handle_role_denied(self, exc):
        return JsonResponse({"error": "Forbidden"}, status=403)

    def _requested_role(self, request):
        if request.content_type == "application/json":
            try:
                data = json.loads(request.body or b"{}")
            except ValueError:
                return None
            if not isinstance(data, dict):
                return None
            return data.get("role")
        return request.POST.get("role")

    def post(self, request, pk):
        new_role = coerce_role(self._requested_role(request))
        if new_role is None:
            return JsonResponse({"error": "Invalid role"}, status=400)

        target = get_object_or_404(get_user_model(), pk=pk)
        assignment, _ = UserRole.objects.get_or_create(
            user=target,
            defaults={"role": letterpress_settings.DEFAULT_ROLE},
        )

        if not can_change_role(self.role, assignment.role, new_role):
            return JsonResponse({"error": "Forbidden"}, status=403)

        previous = assignment.role
        assignment.role = new_role
        assignment.assigned_by = request.user
        assignment.save(update_fields=["role", "assigned_by", "updated_at"])
        logger.info(
            "User %s changed role of user %s from %s to %s",
            request.user.pk, target.pk, previous, new_role,
        )

        return JsonResponse({
            "id": target.pk,
            "username": target.get_username(),
            "role": assignment.role,
        })


class MyPermissionsView(LoginRequiredMixin, View):
    """Describe the current user's role and what it allows."""

    def get(self, request):
        role = user_role(request.user)
        return JsonResponse({
            "role": role,
            "permissions": [permission.name for permission in get_role_permissions(role)],
            "assignable_roles": list(assignable_roles(role)),
        })
