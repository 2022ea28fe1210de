"""
django-letterpress - role permissions and related content for a Django CMS.

Features:
- Bit-flag permissions with a fixed role table
- Ordered roles (subscriber up to admin) with a role-assignment ceiling
- Permission guards that raise a 403-mapped PermissionDenied
- Related posts ranked by shared categories and tags
- Published-post repository over the Django ORM
"""

__version__ = "0.1.0"
__author__ = "Nestor Wheelock"
