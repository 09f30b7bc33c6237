from rest_framework.pagination import PageNumberPagination


class StandardPagination(PageNumberPagination):
    """`?page=2&limit=10` style paging used by the admin listings."""
    page_size = 10
    page_size_query_param = 'limit'
    max_page_size = 100
