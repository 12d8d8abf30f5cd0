import logging
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Iterable, List, Optional, Sequence

from django.db import DatabaseError, transaction

from accesslogs.errors import InsertionFailed, is_parse_error
from accesslogs.models import AccessLog
from accesslogs.parsers.nginx import parse_line
from accesslogs.records import LogRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PersistReport:
    attempted: int
    succeeded: int
    duration: timedelta
    error: Optional[InsertionFailed] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Persister:
    """
    Parses a batch of raw lines and writes the survivors in one
    transaction. Nothing raised while parsing or inserting escapes
    ``persist``: bad lines and failed batches are logged and dropped.
    """

    def __init__(self, ip_filter: Iterable[str] = (), using: str = "default") -> None:
        self.ip_filter = frozenset(ip_filter)
        self.using = using

    def parse_batch(self, batch: Sequence[str]) -> List[LogRecord]:
        records: List[LogRecord] = []
        for line in batch:
            result = parse_line(line)
            if is_parse_error(result):
                logger.error("Parsing error: %s", result, extra={"parse_error": type(result).__name__})
                continue
            if result.remote_addr is not None and result.remote_addr in self.ip_filter:
                continue
            records.append(result)
        return records

    def persist(self, batch: Sequence[str]) -> PersistReport:
        start = time.perf_counter()
        attempted = len(batch)
        records = self.parse_batch(batch)

        # Skip locking the database when there is nothing to write
        if records:
            try:
                with transaction.atomic(using=self.using):
                    AccessLog.objects.using(self.using).bulk_create(
                        [AccessLog(**record.as_row()) for record in records]
                    )
            except DatabaseError as exc:
                failure = InsertionFailed(str(exc))
                logger.error("%s", failure, extra={"attempted": attempted, "parsed": len(records)})
                return PersistReport(
                    attempted=attempted,
                    succeeded=0,
                    duration=timedelta(seconds=time.perf_counter() - start),
                    error=failure,
                )

        duration = timedelta(seconds=time.perf_counter() - start)
        logger.info(
            "Parsing and inserting %d out of %d records took %dus",
            len(records),
            attempted,
            duration // timedelta(microseconds=1),
            extra={"attempted": attempted, "succeeded": len(records)},
        )
        return PersistReport(attempted=attempted, succeeded=len(records), duration=duration)
