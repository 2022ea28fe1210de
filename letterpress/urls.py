"""
URL configuration for django-letterpress.

Include in your project urls.py:

    path('cms/', include('letterpress.urls')),
"""
from django.urls import path

from . import views

app_name = "letterpress"

urlpatterns = [
    path("post/<int:pk>/related/", views.RelatedPostsView.as_view(), name="related_posts"),
    path("users/<int:pk>/role/", views.UserRoleUpdateView.as_view(), name="user_role_update"),
    path("me/permissions/", views.MyPermissionsView.as_view(), name="my_permissions"),
]
