from __future__ import annotations

import re
from datetime import datetime

from ..errors import InvalidDate

# 04/Nov/2017:13:05:35 -0500
TIME_LOCAL_FORMAT = "%d/%b/%Y:%H:%M:%S %z"

# strptime alone also takes "Z", "-05:00" and unpadded days
TIME_LOCAL_PATTERN = re.compile(
    r"\d{2}/[A-Za-z]{3}/\d{4}:\d{2}:\d{2}:\d{2} [+-]\d{4}", re.ASCII
)


def parse_date(text: str) -> int | InvalidDate:
    """Convert an nginx ``$time_local`` value to UTC epoch seconds."""
    if not TIME_LOCAL_PATTERN.fullmatch(text):
        return InvalidDate(text)
    try:
        dt = datetime.strptime(text, TIME_LOCAL_FORMAT)
    except ValueError:
        return InvalidDate(text)
    return int(dt.timestamp())
