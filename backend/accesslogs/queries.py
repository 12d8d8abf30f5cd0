"""
Aggregate queries behind the Grafana datasource. All of them are
read-only and bounded by a half-open ``[from_, to)`` epoch range.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List

from django.conf import settings
from django.db.models import Count, F, Sum

from accesslogs.errors import DatesSwapped
from accesslogs.models import AccessLog


@dataclass(frozen=True)
class Range:
    from_: datetime
    to: datetime

    @property
    def start_epoch(self) -> int:
        return int(self.from_.timestamp())

    @property
    def end_epoch(self) -> int:
        return int(self.to.timestamp())


@dataclass(frozen=True)
class BlogPost:
    referer: str
    views: int


@dataclass(frozen=True)
class Sites:
    ep: int
    host: str
    views: int


@dataclass(frozen=True)
class OutboundData:
    ep: int
    views: int
    bytes: int


def validate_range(rng: Range) -> Range:
    if rng.from_ > rng.to:
        raise DatesSwapped(rng.from_, rng.to)
    return rng


def _setting(key: str) -> str:
    return (getattr(settings, "ACCESSLOG", {}) or {}).get(key) or ""


def _in_range(rng: Range, using: str):
    return AccessLog.objects.using(using).filter(
        epoch__gte=rng.start_epoch,
        epoch__lt=rng.end_epoch,
    )


def _bucketed(qs, interval: int):
    if interval < 1:
        raise ValueError(f"interval must be at least one second, got {interval}")
    return qs.annotate(bucket=F("epoch") / interval)


def blog_posts(rng: Range, ip: str, using: str = "default") -> List[BlogPost]:
    """Views per referring article of the comments widget."""
    qs = (
        _in_range(rng, using)
        .filter(host=_setting("blog_host"), method="GET")
        .exclude(path=_setting("embed_path"))
        .exclude(referer="-")
        .exclude(referer__isnull=True)
        .exclude(remote_addr=ip)
        .values("referer")
        .annotate(views=Count("id"))
        .order_by("-views", "referer")
    )
    return [BlogPost(referer=row["referer"], views=row["views"]) for row in qs]


def sites(rng: Range, interval: int, using: str = "default") -> List[Sites]:
    """Views per host, bucketed by ``interval`` seconds."""
    qs = (
        _bucketed(_in_range(rng, using).filter(host__endswith=_setting("site_suffix")), interval)
        .values("bucket", "host")
        .annotate(views=Count("id"))
        .order_by("bucket", "host")
    )
    return [
        Sites(ep=row["bucket"] * interval * 1000, host=row["host"], views=row["views"])
        for row in qs
    ]


def outbound_data(rng: Range, ip: str, interval: int, using: str = "default") -> List[OutboundData]:
    """Requests and bytes sent, bucketed by ``interval`` seconds."""
    qs = (
        _bucketed(_in_range(rng, using).exclude(remote_addr=ip), interval)
        .values("bucket")
        .annotate(views=Count("id"), data=Sum("body_bytes_sent"))
        .order_by("bucket")
    )
    return [
        OutboundData(ep=row["bucket"] * interval * 1000, views=row["views"], bytes=row["data"] or 0)
        for row in qs
    ]
