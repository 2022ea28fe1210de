"""
Signal handlers for django-letterpress.
"""
import logging

from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver

from .conf import letterpress_settings
from .models import UserRole

logger = logging.getLogger(__name__)


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def create_user_role(sender, instance, created, **kwargs):
    """Give every new user a role: superusers get SUPERUSER_ROLE."""
    if not created or kwargs.get("raw") or not letterpress_settings.AUTO_CREATE_USER_ROLES:
        return

    if instance.is_superuser:
        role = letterpress_settings.SUPERUSER_ROLE
    else:
        role = letterpress_settings.DEFAULT_ROLE

    UserRole.objects.get_or_create(user=instance, defaults={"role": role})
    logger.debug("Assigned role %s to new user %s", role, instance.pk)
