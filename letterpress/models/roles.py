"""
User role assignment for django-letterpress.
"""
from django.conf import settings
from django.db import models

from ..conf import letterpress_settings
from ..permissions import Role, get_permission_set, get_role_permissions


def default_role():
    return letterpress_settings.DEFAULT_ROLE


class UserRole(models.Model):
    """
    The letterpress role held by a user.

    Permissions are never stored here; they are derived from the role
    through the fixed role table.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="letterpress_role",
    )
    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=default_role,
        db_index=True,
    )
    assigned_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="+",
    )
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "User role"

    def __str__(self):
        return f"{self.user} ({self.get_role_display()})"

    @property
    def permission_set(self):
        return get_permission_set(self.role)

    @property
    def permissions(self):
        return get_role_permissions(self.role)
