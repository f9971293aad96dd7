from __future__ import annotations

from rest_framework.pagination import PageNumberPagination


class DefaultPagination(PageNumberPagination):
    """Page-number pagination for the subject and student listings.

    Clients may ask for `?page_size=N`; requests above `max_page_size`
    are capped. Quiz and submission lists are not paginated.
    """

    page_size = 20
    page_size_query_param = "page_size"
    max_page_size = 100
