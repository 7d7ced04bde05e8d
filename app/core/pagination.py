"""
Pagination classes for the REST API.

- StandardResultsSetPagination: Page-number pagination used by every list

Response shape:
    {"count": 42, "next": "...?page=3", "previous": "...?page=1", "results": [...]}

Query parameters:
    page: 1-based page number
    page_size: Items per page (optional override, capped at 100)
"""

from rest_framework.pagination import PageNumberPagination


class StandardResultsSetPagination(PageNumberPagination):
    """
    Page-number pagination for posts, comments and taxonomy lists.

    Default: 20 items per page
    Maximum: 100 items per page
    """

    page_size = 20
    max_page_size = 100
    page_size_query_param = "page_size"
