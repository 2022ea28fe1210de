"""
Django admin configuration for letterpress.
"""
from django.contrib import admin

from .models import Category, Tag, Post, UserRole
from .permissions import (
    AuthorizationError,
    Permission,
    ROLE_DESCRIPTIONS,
    user_has_permission,
    user_role,
)
from .policies import assignable_roles, can_change_role


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ["name", "parent", "slug", "post_count", "order"]
    list_filter = ["parent"]
    search_fields = ["name", "slug", "description"]
    prepopulated_fields = {"slug": ("name",)}
    list_editable = ["order"]
    ordering = ["parent__name", "order", "name"]


@admin.register(Tag)
class TagAdmin(admin.ModelAdmin):
    list_display = ["name", "slug", "post_count", "created_at"]
    search_fields = ["name", "slug"]
    prepopulated_fields = {"slug": ("name",)}
    readonly_fields = ["created_at"]


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    list_display = ["title", "author", "is_draft", "is_deleted", "published_at"]
    list_filter = ["is_draft", "is_deleted", "categories", "published_at"]
    search_fields = ["title", "body", "author__username"]
    raw_id_fields = ["author"]
    filter_horizontal = ["categories", "tags"]
    date_hierarchy = "published_at"
    readonly_fields = ["created_at", "updated_at", "published_at"]
    prepopulated_fields = {"slug": ("title",)}

    actions = ["publish_posts"]

    @admin.action(description="Publish selected posts")
    def publish_posts(self, request, queryset):
        if not user_has_permission(request.user, Permission.PUBLISH_POSTS):
            self.message_user(request, "You may not publish posts.", level="error")
            return
        for post in queryset:
            post.publish()
        self.message_user(request, f"{queryset.count()} posts published.")


@admin.register(UserRole)
class UserRoleAdmin(admin.ModelAdmin):
    """
    Role assignments, limited by the role-assignment policy.

    The role dropdown only offers roles the current user may assign, and
    users whose current role outranks them cannot be edited.
    """

    list_display = ["user", "role", "role_description", "assigned_by", "updated_at"]
    list_filter = ["role"]
    search_fields = ["user__username", "user__email"]
    raw_id_fields = ["user"]
    readonly_fields = ["assigned_by", "updated_at"]

    def role_description(self, obj):
        return ROLE_DESCRIPTIONS.get(obj.role, "")

    role_description.short_description = "Description"

    def has_change_permission(self, request, obj=None):
        if not user_has_permission(request.user, Permission.MANAGE_ROLES):
            return False
        if obj is not None and not can_change_role(
            user_role(request.user), obj.role, obj.role
        ):
            return False
        return super().has_change_permission(request, obj)

    def has_add_permission(self, request):
        if not user_has_permission(request.user, Permission.MANAGE_ROLES):
            return False
        return super().has_add_permission(request)

    def formfield_for_choice_field(self, db_field, request, **kwargs):
        if db_field.name == "role":
            allowed = assignable_roles(user_role(request.user))
            kwargs["choices"] = [(role.value, role.label) for role in allowed]
        return super().formfield_for_choice_field(db_field, request, **kwargs)

    def save_model(self, request, obj, form, change):
        previous = form.initial.get("role") if change else None
        if not can_change_role(user_role(request.user), previous, obj.role):
            raise AuthorizationError(Permission.MANAGE_ROLES, user_role(request.user))
        obj.assigned_by = request.user
        super().save_model(request, obj, form, change)
