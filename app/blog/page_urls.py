"""
HTML page URL configuration for the blog (mounted at the site root).
"""

from django.urls import path

from blog import pages

app_name = "blog"

urlpatterns = [
    path("", pages.post_list, name="post_list"),
    path("posts/new/", pages.post_create, name="post_create"),
    path("posts/<slug:slug>/", pages.post_detail, name="post_detail"),
    path("posts/<slug:slug>/edit/", pages.post_edit, name="post_edit"),
]
