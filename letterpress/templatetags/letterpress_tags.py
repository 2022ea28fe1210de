"""
Template filters for permission checks.

    {% load letterpress_tags %}
    {% if request.user|has_permission:"PUBLISH_POSTS" %}...{% endif %}
    {% if request.user|has_any_permission:"EDIT_POSTS,EDIT_PAGES" %}...{% endif %}
"""
from django import template

from .. import permissions

register = template.Library()


def _lookup(name):
    try:
        return permissions.Permission[name.strip().upper()]
    except (KeyError, AttributeError):
        return None


@register.filter
def has_permission(user, name):
    """Single permission name; unknown names never match."""
    permission = _lookup(name)
    if permission is None:
        return False
    return permissions.user_has_permission(user, permission)


@register.filter
def has_any_permission(user, names):
    """Comma-separated permission names; unknown names never match."""
    role = permissions.user_role(user)
    wanted = [_lookup(name) for name in str(names).split(",")]
    return permissions.has_any_permission(role, [p for p in wanted if p is not None])
