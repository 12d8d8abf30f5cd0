import logging
from collections import defaultdict

from django.db import DatabaseError

from accesslogs import queries
from accesslogs.datapoints import fill_datapoints
from accesslogs.errors import DbQuery, OneTarget, UnrecognizedTarget
from accesslogs.queries import Range, validate_range

logger = logging.getLogger(__name__)

BLOG_HITS = "blog_hits"
SITES = "sites"
OUTBOUND_DATA = "outbound_data"

TARGETS = [BLOG_HITS, SITES, OUTBOUND_DATA]


def interval_seconds(interval_ms: int) -> int:
    return max(1, interval_ms // 1000)


def blog_table(rows: list[queries.BlogPost]) -> dict:
    return {
        "type": "table",
        "columns": [
            {"text": "article", "type": "string"},
            {"text": "count", "type": "number"},
        ],
        "rows": [[row.referer, row.views] for row in rows],
    }


def sites_series(rows: list[queries.Sites], rng: Range, interval: int) -> list[dict]:
    by_host: dict[str, list[tuple[int, int]]] = defaultdict(list)
    for row in rows:
        by_host[row.host].append((row.ep, row.views))
    return [
        {"target": host, "datapoints": fill_datapoints(points, rng, interval)}
        for host, points in sorted(by_host.items())
    ]


def outbound_series(rows: list[queries.OutboundData], rng: Range, interval: int) -> list[dict]:
    points = [(row.ep, row.bytes) for row in rows]
    return [{"target": OUTBOUND_DATA, "datapoints": fill_datapoints(points, rng, interval)}]


def run_query(rng: Range, targets: list[dict], interval_ms: int, ip: str) -> list[dict]:
    """Answer a datasource ``/query`` request for exactly one target."""
    if len(targets) != 1:
        raise OneTarget(len(targets))
    validate_range(rng)

    target = targets[0]["target"]
    interval = interval_seconds(interval_ms)
    logger.debug("grafana_query", extra={"target": target, "interval": interval})

    try:
        if target == BLOG_HITS:
            return [blog_table(queries.blog_posts(rng, ip))]
        if target == SITES:
            return sites_series(queries.sites(rng, interval), rng, interval)
        if target == OUTBOUND_DATA:
            return outbound_series(queries.outbound_data(rng, ip, interval), rng, interval)
    except DatabaseError as exc:
        raise DbQuery(target, exc) from exc
    raise UnrecognizedTarget(target)
