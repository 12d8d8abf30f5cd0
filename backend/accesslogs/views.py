import logging

from django.conf import settings
from django.http import HttpResponse
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from accesslogs.errors import DbQuery, QueryError
from accesslogs.grafana import TARGETS, run_query
from accesslogs.serializers import QuerySerializer, SearchSerializer

logger = logging.getLogger(__name__)


def index_view(request):
    return HttpResponse("Hello, world!", content_type="text/plain")


@api_view(["POST"])
def search_view(request):
    serializer = SearchSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    logger.debug("grafana_search", extra={"target": serializer.validated_data["target"]})
    return Response(TARGETS)


@api_view(["POST"])
def query_view(request):
    serializer = QuerySerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    local_ip = (getattr(settings, "ACCESSLOG", {}) or {}).get("local_ip") or ""
    try:
        result = run_query(
            rng=data["range"],
            targets=data["targets"],
            interval_ms=data["intervalMs"],
            ip=local_ip,
        )
    except DbQuery as exc:
        logger.exception("grafana_query_failed", extra={"error": str(exc)})
        return Response({"detail": str(exc)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    except QueryError as exc:
        return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(result)
