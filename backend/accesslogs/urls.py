from django.urls import path

from accesslogs.views import index_view, query_view, search_view

urlpatterns = [
    path("", index_view, name="grafana-index"),
    path("search", search_view, name="grafana-search"),
    path("query", query_view, name="grafana-query"),
]
