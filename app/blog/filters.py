"""
django-filter FilterSets for blog lists.

Query parameters (GET /api/v1/blog/posts/):
    status, author (user id), category (slug), tag (slug), language,
    published_after, published_before (ISO 8601)
"""

import django_filters as filters
from django.conf import settings

from blog.models import Post


class PostFilter(filters.FilterSet):
    status = filters.ChoiceFilter(choices=Post.Status.choices)
    author = filters.NumberFilter(field_name="author_id")
    category = filters.CharFilter(field_name="category__slug")
    tag = filters.CharFilter(field_name="tags__slug", distinct=True)
    language = filters.ChoiceFilter(choices=settings.LANGUAGES)
    published_after = filters.IsoDateTimeFilter(
        field_name="published_at", lookup_expr="gte"
    )
    published_before = filters.IsoDateTimeFilter(
        field_name="published_at", lookup_expr="lte"
    )

    class Meta:
        model = Post
        fields = [
            "status",
            "author",
            "category",
            "tag",
            "language",
            "published_after",
            "published_before",
        ]
