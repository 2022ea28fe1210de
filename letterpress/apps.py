"""Django app configuration for letterpress."""
import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class LetterpressConfig(AppConfig):
    """Configuration for the letterpress app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "letterpress"
    verbose_name = "Letterpress"

    def ready(self):
        """Connect signals and sanity-check the role table."""
        from . import signals  # noqa: F401
        from .permissions import role_table_is_monotonic

        if not role_table_is_monotonic():
            logger.warning(
                "Role permission table is not monotonic: a higher role is "
                "missing permissions granted to a lower one"
            )
