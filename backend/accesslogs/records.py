from dataclasses import asdict, dataclass
from typing import Optional

# Stable column order, shared by dry-run output and inserts
RECORD_FIELDS = [
    "epoch",
    "remote_addr",
    "remote_user",
    "status",
    "method",
    "path",
    "version",
    "body_bytes_sent",
    "referer",
    "user_agent",
    "host",
]


@dataclass(frozen=True)
class LogRecord:
    epoch: int
    host: str
    remote_addr: Optional[str] = None
    remote_user: Optional[str] = None
    status: Optional[int] = None
    method: Optional[str] = None
    path: Optional[str] = None
    version: Optional[str] = None
    body_bytes_sent: Optional[int] = None
    referer: Optional[str] = None
    user_agent: Optional[str] = None

    def as_row(self) -> dict:
        row = asdict(self)
        return {field: row[field] for field in RECORD_FIELDS}

    def __str__(self) -> str:
        return " ".join(f"{field}={value!r}" for field, value in self.as_row().items())
