"""
Role-based permissions for django-letterpress.

Permissions are bit flags combined into a per-role permission set. The role
table is fixed at import time and never mutated:

    from letterpress.permissions import Permission, Role, has_permission

    has_permission(Role.EDITOR, Permission.PUBLISH_POSTS)  # True
    has_permission(Role.EDITOR, Permission.MANAGE_ROLES)   # False

Checks fail closed: an unknown role is denied everything.
"""
import enum
import logging
from types import MappingProxyType

from django.core.exceptions import ObjectDoesNotExist, PermissionDenied
from django.db import models

logger = logging.getLogger(__name__)


class Role(models.TextChoices):
    """User roles, declared from least to most privileged."""

    SUBSCRIBER = "SUBSCRIBER", "Subscriber"
    CONTRIBUTOR = "CONTRIBUTOR", "Contributor"
    AUTHOR = "AUTHOR", "Author"
    EDITOR = "EDITOR", "Editor"
    ADMIN = "ADMIN", "Admin"


ROLE_ORDER = tuple(Role)


class Permission(enum.IntFlag):
    """
    Single capabilities, one bit each.

    Bit values are stored and cached elsewhere; never renumber a member.
    """

    # Content
    READ_POSTS = 1 << 0
    WRITE_POSTS = 1 << 1
    EDIT_POSTS = 1 << 2
    DELETE_POSTS = 1 << 3
    PUBLISH_POSTS = 1 << 4

    READ_PAGES = 1 << 5
    WRITE_PAGES = 1 << 6
    EDIT_PAGES = 1 << 7
    DELETE_PAGES = 1 << 8
    PUBLISH_PAGES = 1 << 9

    # Media
    UPLOAD_MEDIA = 1 << 10
    DELETE_MEDIA = 1 << 11
    MANAGE_MEDIA = 1 << 12

    # Comments
    READ_COMMENTS = 1 << 13
    MODERATE_COMMENTS = 1 << 14
    DELETE_COMMENTS = 1 << 15

    # Users
    READ_USERS = 1 << 16
    CREATE_USERS = 1 << 17
    EDIT_USERS = 1 << 18
    DELETE_USERS = 1 << 19
    MANAGE_ROLES = 1 << 20

    # System
    MANAGE_SETTINGS = 1 << 21
    MANAGE_PLUGINS = 1 << 22
    MANAGE_THEMES = 1 << 23
    VIEW_ANALYTICS = 1 << 24
    MANAGE_CUSTOM_FIELDS = 1 << 25

    # Admin
    ADMIN_ACCESS = 1 << 26
    SUPER_ADMIN = 1 << 27


P = Permission

ROLE_PERMISSIONS = MappingProxyType({
    Role.SUBSCRIBER: (
        P.READ_POSTS
        | P.READ_PAGES
    ),
    Role.CONTRIBUTOR: (
        P.READ_POSTS
        | P.READ_PAGES
        | P.WRITE_POSTS
        | P.UPLOAD_MEDIA
    ),
    Role.AUTHOR: (
        P.READ_POSTS
        | P.READ_PAGES
        | P.WRITE_POSTS
        | P.EDIT_POSTS
        | P.PUBLISH_POSTS
        | P.UPLOAD_MEDIA
        | P.DELETE_MEDIA
    ),
    Role.EDITOR: (
        P.READ_POSTS
        | P.READ_PAGES
        | P.WRITE_POSTS
        | P.EDIT_POSTS
        | P.DELETE_POSTS
        | P.PUBLISH_POSTS
        | P.WRITE_PAGES
        | P.EDIT_PAGES
        | P.DELETE_PAGES
        | P.PUBLISH_PAGES
        | P.UPLOAD_MEDIA
        | P.DELETE_MEDIA
        | P.MANAGE_MEDIA
        | P.READ_COMMENTS
        | P.MODERATE_COMMENTS
        | P.DELETE_COMMENTS
        | P.ADMIN_ACCESS
    ),
    Role.ADMIN: (
        P.READ_POSTS
        | P.READ_PAGES
        | P.WRITE_POSTS
        | P.EDIT_POSTS
        | P.DELETE_POSTS
        | P.PUBLISH_POSTS
        | P.WRITE_PAGES
        | P.EDIT_PAGES
        | P.DELETE_PAGES
        | P.PUBLISH_PAGES
        | P.UPLOAD_MEDIA
        | P.DELETE_MEDIA
        | P.MANAGE_MEDIA
        | P.READ_COMMENTS
        | P.MODERATE_COMMENTS
        | P.DELETE_COMMENTS
        | P.READ_USERS
        | P.CREATE_USERS
        | P.EDIT_USERS
        | P.DELETE_USERS
        | P.MANAGE_ROLES
        | P.MANAGE_SETTINGS
        | P.MANAGE_PLUGINS
        | P.MANAGE_THEMES
        | P.VIEW_ANALYTICS
        | P.MANAGE_CUSTOM_FIELDS
        | P.ADMIN_ACCESS
        | P.SUPER_ADMIN
    ),
})

del P


class AuthorizationError(PermissionDenied):
    """
    Raised by permission guards when a role lacks a required permission.

    Subclasses Django's PermissionDenied so an unhandled guard failure
    becomes a 403 response.
    """

    def __init__(self, permission, role=None):
        self.permission = permission
        self.role = role
        super().__init__("Access denied: missing required permission")


def coerce_role(role):
    """Return the Role for a role or role value, or None if unrecognized."""
    try:
        return Role(role)
    except (ValueError, TypeError):
        return None


def role_rank(role):
    """Return the role's position in the privilege order, or None."""
    role = coerce_role(role)
    if role is None:
        return None
    return ROLE_ORDER.index(role)


def get_permission_set(role):
    """Return the permission bit-field for a role (empty if unrecognized)."""
    role = coerce_role(role)
    if role is None:
        return Permission(0)
    return ROLE_PERMISSIONS.get(role, Permission(0))


def has_permission(role, permission):
    """Check if a role holds a permission (every bit of it, if compound)."""
    if coerce_role(role) is None:
        return False
    if isinstance(permission, bool) or not isinstance(permission, int):
        return False
    return (get_permission_set(role) & permission) == permission


def has_any_permission(role, permissions):
    """Check if a role holds at least one of the permissions."""
    return any(has_permission(role, permission) for permission in permissions)


def has_all_permissions(role, permissions):
    """
    Check if a role holds every one of the permissions.

    An empty list is vacuously satisfied, unlike has_any_permission.
    """
    return all(has_permission(role, permission) for permission in permissions)


def get_role_permissions(role):
    """Return the permissions granted to a role, in declaration order."""
    granted = get_permission_set(role)
    return [
        permission
        for permission in Permission.__members__.values()
        if (granted & permission) == permission
    ]


def require_permission(permission):
    """
    Build a guard for a permission.

    The guard takes a role and returns it unchanged when permitted,
    otherwise raises AuthorizationError:

        guard = require_permission(Permission.MANAGE_ROLES)
        guard(request_role)
    """

    def guard(role):
        if not has_permission(role, permission):
            logger.debug("Denied %r to role %r", permission, role)
            raise AuthorizationError(permission, role)
        return role

    guard.permission = permission
    return guard


def user_role(user):
    """Return the Role assigned to a user, or None for anonymous users."""
    if user is None or not user.is_authenticated:
        return None
    try:
        return coerce_role(user.letterpress_role.role)
    except ObjectDoesNotExist:
        return None


def user_has_permission(user, permission):
    """Check if a user's role holds a permission."""
    return has_permission(user_role(user), permission)


def role_table_is_monotonic(table=ROLE_PERMISSIONS):
    """Check that every role's permissions include those of all lower roles."""
    for lower, higher in zip(ROLE_ORDER, ROLE_ORDER[1:]):
        if lower not in table or higher not in table:
            return False
        if int(table[lower]) & ~int(table[higher]):
            return False
    return True


PERMISSION_DESCRIPTIONS = MappingProxyType({
    Permission.READ_POSTS: "View posts",
    Permission.WRITE_POSTS: "Create new posts",
    Permission.EDIT_POSTS: "Edit existing posts",
    Permission.DELETE_POSTS: "Delete posts",
    Permission.PUBLISH_POSTS: "Publish posts",
    Permission.READ_PAGES: "View pages",
    Permission.WRITE_PAGES: "Create new pages",
    Permission.EDIT_PAGES: "Edit existing pages",
    Permission.DELETE_PAGES: "Delete pages",
    Permission.PUBLISH_PAGES: "Publish pages",
    Permission.UPLOAD_MEDIA: "Upload media files",
    Permission.DELETE_MEDIA: "Delete media files",
    Permission.MANAGE_MEDIA: "Manage media library",
    Permission.READ_COMMENTS: "View comments",
    Permission.MODERATE_COMMENTS: "Moderate comments",
    Permission.DELETE_COMMENTS: "Delete comments",
    Permission.READ_USERS: "View users",
    Permission.CREATE_USERS: "Create new users",
    Permission.EDIT_USERS: "Edit user profiles",
    Permission.DELETE_USERS: "Delete users",
    Permission.MANAGE_ROLES: "Manage user roles",
    Permission.MANAGE_SETTINGS: "Manage system settings",
    Permission.MANAGE_PLUGINS: "Manage plugins",
    Permission.MANAGE_THEMES: "Manage themes",
    Permission.VIEW_ANALYTICS: "View analytics",
    Permission.MANAGE_CUSTOM_FIELDS: "Manage custom fields",
    Permission.ADMIN_ACCESS: "Access admin dashboard",
    Permission.SUPER_ADMIN: "Super administrator access",
})

ROLE_DESCRIPTIONS = MappingProxyType({
    Role.SUBSCRIBER: "Can view published content",
    Role.CONTRIBUTOR: "Can write posts but cannot publish them",
    Role.AUTHOR: "Can write and publish their own posts",
    Role.EDITOR: "Can manage all posts, pages, and moderate content",
    Role.ADMIN: "Full access to all system features",
})


def get_permission_groups():
    """Return permissions grouped by area, for display."""
    return {
        "Content Management": [
            Permission.READ_POSTS,
            Permission.WRITE_POSTS,
            Permission.EDIT_POSTS,
            Permission.DELETE_POSTS,
            Permission.PUBLISH_POSTS,
            Permission.READ_PAGES,
            Permission.WRITE_PAGES,
            Permission.EDIT_PAGES,
            Permission.DELETE_PAGES,
            Permission.PUBLISH_PAGES,
        ],
        "Media Management": [
            Permission.UPLOAD_MEDIA,
            Permission.DELETE_MEDIA,
            Permission.MANAGE_MEDIA,
        ],
        "Comment Management": [
            Permission.READ_COMMENTS,
            Permission.MODERATE_COMMENTS,
            Permission.DELETE_COMMENTS,
        ],
        "User Management": [
            Permission.READ_USERS,
            Permission.CREATE_USERS,
            Permission.EDIT_USERS,
            Permission.DELETE_USERS,
            Permission.MANAGE_ROLES,
        ],
        "System Management": [
            Permission.MANAGE_SETTINGS,
            Permission.MANAGE_PLUGINS,
            Permission.MANAGE_THEMES,
            Permission.VIEW_ANALYTICS,
            Permission.MANAGE_CUSTOM_FIELDS,
            Permission.ADMIN_ACCESS,
            Permission.SUPER_ADMIN,
        ],
    }
