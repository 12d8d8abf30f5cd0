from __future__ import annotations

import re
from typing import Optional

from ..errors import InvalidDate, NoMatch, ParseError
from ..records import LogRecord
from .dates import parse_date

# nginx log_format with the virtual host appended:
# $remote_addr - $remote_user [$time_local] "$request" $status $body_bytes_sent
# "$http_referer" "$http_user_agent" "$host"
LOG_PATTERN = re.compile(
    r'(?P<remote_addr>\S+)\s-\s(?P<remote_user>\S*)\s\['
    r'(?P<time_local>[^\]]+)\]\s"'
    r'(?P<method>\S+)\s(?P<path>\S*)\sHTTP/(?P<version>\S+)"\s'
    r'(?P<status>\S+)\s(?P<body_bytes_sent>\S+)\s'
    r'"(?P<referer>[^"]*)"\s"(?P<user_agent>[^"]*)"\s"(?P<host>[^"]+)"'
)

INT_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)

# Bounds of the 32-bit integer columns
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1


def _optional_int(text: str) -> Optional[int]:
    if not INT_PATTERN.fullmatch(text):
        return None
    value = int(text)
    if value < INT_MIN or value > INT_MAX:
        return None
    return value


def parse_line(line: str) -> LogRecord | ParseError:
    """Parse a single nginx access-log line into a record or a parse error."""
    raw_line = line.strip()
    match = LOG_PATTERN.search(raw_line)
    if not match:
        return NoMatch(raw_line)

    epoch = parse_date(match.group("time_local"))
    if isinstance(epoch, InvalidDate):
        return epoch

    return LogRecord(
        epoch=epoch,
        remote_addr=match.group("remote_addr"),
        remote_user=match.group("remote_user") or None,
        status=_optional_int(match.group("status")),
        method=match.group("method"),
        path=match.group("path") or None,
        version=match.group("version"),
        body_bytes_sent=_optional_int(match.group("body_bytes_sent")),
        referer=match.group("referer") or None,
        user_agent=match.group("user_agent") or None,
        host=match.group("host"),
    )
