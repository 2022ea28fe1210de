"""
Role-assignment policy for django-letterpress.

Who may hand out which role is decided here, on top of the permission
checks, and consumed by the admin and the role update view:

- Only a role holding MANAGE_ROLES may assign roles at all.
- ADMIN may assign any role.
- Any other role may only assign roles strictly below its own.
"""
from .permissions import (
    ROLE_ORDER,
    Permission,
    Role,
    coerce_role,
    has_permission,
    role_rank,
)


def assignable_roles(actor_role):
    """Return the roles an actor may assign, from lowest to highest."""
    if not has_permission(actor_role, Permission.MANAGE_ROLES):
        return []
    actor_role = coerce_role(actor_role)
    if actor_role == Role.ADMIN:
        return list(ROLE_ORDER)
    rank = role_rank(actor_role)
    return [role for role in ROLE_ORDER if role_rank(role) < rank]


def can_assign_role(actor_role, target_role):
    """Check if an actor may assign target_role to someone."""
    target_role = coerce_role(target_role)
    if target_role is None:
        return False
    return target_role in assignable_roles(actor_role)


def can_change_role(actor_role, current_role, new_role):
    """
    Check if an actor may move a user from current_role to new_role.

    Besides being allowed to assign new_role, the actor must outrank the
    user's current role, so nobody below ADMIN can demote an admin.
    """
    if coerce_role(actor_role) == Role.ADMIN:
        return can_assign_role(actor_role, new_role)
    current_role = coerce_role(current_role)
    if current_role is not None and not can_assign_role(actor_role, current_role):
        return False
    return can_assign_role(actor_role, new_role)
