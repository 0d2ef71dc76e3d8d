from rest_framework.pagination import PageNumberPagination


class DefaultPagination(PageNumberPagination):
    page_size = 20                      # default
    page_size_query_param = "page_size" # ?page_size=50
    max_page_size = 100                 # upper bound
